import configparser
import dataclasses
import functools
import os
import pathlib
from typing import Self

from yarl import URL

from .exceptions import ConfigurationError

AWS_AUTH_ALG = "AWS4-HMAC-SHA256"
AWS_HOST = "s3.amazonaws.com"
AWS_REQUEST = "aws4_request"
AWS_SERVICE = "s3"
POLICY_EXPIRATION = 900  # 15 minutes

DEFAULT_PROTOCOL = "https://"
DEFAULT_REGION = "us-east-1"

_PROTOCOLS = ("http://", "https://")


@dataclasses.dataclass(frozen=True)
class SigningIdentity:
    """Credentials and bucket every signature is computed for.

    Raises ConfigurationError when a required field is missing, so a half
    configured identity never exists.
    """

    access_key: str = dataclasses.field(repr=False)
    access_key_id: str
    bucket: str
    region: str = DEFAULT_REGION
    protocol: str = DEFAULT_PROTOCOL

    def __post_init__(self):
        for field in ("access_key", "access_key_id", "bucket"):
            if not getattr(self, field):
                raise ConfigurationError(field)

        # Optional fields fall back to their defaults when left empty
        if not self.region:
            object.__setattr__(self, "region", DEFAULT_REGION)
        if not self.protocol:
            object.__setattr__(self, "protocol", DEFAULT_PROTOCOL)

        if self.protocol not in _PROTOCOLS:
            raise ConfigurationError(
                "protocol",
                f"Invalid protocol '{self.protocol}'. Must be one of {_PROTOCOLS}.",
            )

    @functools.cached_property
    def bucket_path(self) -> str:
        return f"{self.bucket}.{AWS_HOST}"

    @functools.cached_property
    def bucket_url(self) -> URL:
        scheme = self.protocol.removesuffix("://")
        return URL.build(scheme=scheme, host=self.bucket_path, encoded=True)

    def object_url(self, key: str) -> str:
        # The key goes in verbatim so the URL path matches the signed path
        return str(self.bucket_url.with_path(f"/{key}", encoded=True))

    @classmethod
    def from_aws_config(
        cls,
        bucket: str,
        profile_name: str = "default",
        config_path: str | pathlib.Path | None = None,
        credentials_path: str | pathlib.Path | None = None,
        protocol: str | None = None,
    ) -> Self:
        if config_path is None:
            config_path = pathlib.Path.home() / ".aws" / "config"
        else:
            config_path = pathlib.Path(config_path)

        if credentials_path is None:
            credentials_path = pathlib.Path.home() / ".aws" / "credentials"
        else:
            credentials_path = pathlib.Path(credentials_path)

        config = configparser.ConfigParser()
        credentials = configparser.ConfigParser()

        config_data = {}
        if config_path.exists():
            config.read(config_path)
            # AWS config uses "profile <name>" sections except for default
            config_section = (
                profile_name if profile_name == "default" else f"profile {profile_name}"
            )
            if config_section in config:
                config_data = dict(config[config_section])

        credentials_data = {}
        if credentials_path.exists():
            credentials.read(credentials_path)
            if profile_name in credentials:
                credentials_data = dict(credentials[profile_name])

        # credentials file takes precedence over config
        access_key_id = credentials_data.get("aws_access_key_id") or config_data.get(
            "aws_access_key_id"
        )
        access_key = credentials_data.get("aws_secret_access_key") or config_data.get(
            "aws_secret_access_key"
        )

        if not access_key_id:
            raise ConfigurationError(
                "access_key_id",
                f"aws_access_key_id not found for profile '{profile_name}' "
                f"in config or credentials files",
            )
        if not access_key:
            raise ConfigurationError(
                "access_key",
                f"aws_secret_access_key not found for profile '{profile_name}' "
                f"in config or credentials files",
            )

        region = (
            credentials_data.get("region")
            or config_data.get("region")
            or os.environ.get("AWS_DEFAULT_REGION")
            or DEFAULT_REGION
        )

        return cls(
            access_key=access_key,
            access_key_id=access_key_id,
            bucket=bucket,
            region=region,
            protocol=protocol or DEFAULT_PROTOCOL,
        )
