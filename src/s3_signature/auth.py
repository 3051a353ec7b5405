"""AWS Signature Version 4 for S3 requests and browser form uploads."""

import base64
import dataclasses
import datetime as dt
import enum
import hashlib
import hmac
import json
import logging
from collections.abc import Mapping

from yarl import URL

from .canonical import (
    CONTENT_SHA256_HEADER,
    canonical_request,
    normalize_headers,
    signed_headers,
)
from .config import (
    AWS_AUTH_ALG,
    AWS_REQUEST,
    AWS_SERVICE,
    POLICY_EXPIRATION,
    SigningIdentity,
)
from .dates import SigningTime
from .exceptions import EncodingError
from .upload import Upload

logger = logging.getLogger(__name__)

UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"


class Method(enum.StrEnum):
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"


@dataclasses.dataclass(frozen=True)
class SignedRequest:
    url: str
    headers: dict[str, str]


@dataclasses.dataclass(frozen=True)
class BrowserPolicy:
    fields: dict[str, str]
    policy: str
    signature: str


def _sha256_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _hmac_sha256(key: bytes, data: str) -> bytes:
    return hmac.new(key, data.encode("utf-8"), hashlib.sha256).digest()


class S3Signature:
    def __init__(self, identity: SigningIdentity):
        self.identity = identity

    @property
    def bucket_url(self) -> URL:
        return self.identity.bucket_url

    def credential_scope(self, time: SigningTime) -> str:
        return (
            f"{time.to_compact_date()}/{self.identity.region}/"
            f"{AWS_SERVICE}/{AWS_REQUEST}"
        )

    def credential(self, time: SigningTime) -> str:
        return f"{self.identity.access_key_id}/{self.credential_scope(time)}"

    def string_to_sign(self, canonical_request: str, time: SigningTime) -> str:
        return "\n".join(
            [
                AWS_AUTH_ALG,
                time.to_http_date(),
                self.credential_scope(time),
                _sha256_hash(canonical_request.encode("utf-8")),
            ]
        )

    def signing_key(self, time: SigningTime) -> bytes:
        k_date = _hmac_sha256(
            f"AWS4{self.identity.access_key}".encode(), time.to_compact_date()
        )
        k_region = _hmac_sha256(k_date, self.identity.region)
        k_service = _hmac_sha256(k_region, AWS_SERVICE)
        k_signing = _hmac_sha256(k_service, AWS_REQUEST)
        return k_signing

    @staticmethod
    def sign(string_to_sign: str, key: bytes) -> str:
        return hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

    def authorization(
        self,
        method: str,
        object_key: str,
        headers: Mapping[str, str],
        time: SigningTime,
    ) -> str:
        headers = normalize_headers(headers)
        request = canonical_request(method, object_key, headers)
        logger.debug("Canonical request:\n%s", request)

        logger.debug("Credential scope: %s", self.credential_scope(time))
        string_to_sign = self.string_to_sign(request, time)
        logger.debug("String to sign:\n%s", string_to_sign)

        signature = self.sign(string_to_sign, self.signing_key(time))
        return (
            f"{AWS_AUTH_ALG} "
            f"Credential={self.credential(time)},"
            f"SignedHeaders={signed_headers(headers)},"
            f"Signature={signature}"
        )

    def sign_request(
        self,
        method: Method | str,
        object_key: str,
        headers: Mapping[str, object] | None = None,
        *,
        now: SigningTime | dt.datetime | None = None,
    ) -> SignedRequest:
        """Compute the URL and headers for a request on ``object_key``.

        Nothing is sent; the caller attaches the returned headers, including
        ``authorization``, to its own HTTP request.
        """
        method = Method(method.upper())
        time = SigningTime.coerce(now)

        headers = normalize_headers(headers or {})
        headers.pop("authorization", None)
        headers["date"] = time.to_http_date()
        headers["host"] = self.identity.bucket_path
        if CONTENT_SHA256_HEADER not in headers:
            headers[CONTENT_SHA256_HEADER] = _sha256_hash(UNSIGNED_PAYLOAD.encode())

        headers["authorization"] = self.authorization(
            method, object_key, headers, time
        )
        logger.debug("Signed %s request for key %r", method, object_key)

        return SignedRequest(url=self.identity.object_url(object_key), headers=headers)

    def sign_upload(
        self,
        object_key: str,
        upload: Upload,
        *,
        now: SigningTime | dt.datetime | None = None,
    ) -> SignedRequest:
        headers = {
            "content-length": str(upload.size()),
            "content-type": upload.content_type(),
            CONTENT_SHA256_HEADER: _sha256_hash(upload.read_all_bytes()),
        }
        return self.sign_request(Method.PUT, object_key, headers, now=now)

    def sign_copy(
        self,
        source_key: str,
        dest_key: str,
        *,
        now: SigningTime | dt.datetime | None = None,
    ) -> SignedRequest:
        headers = {"x-amz-copy-source": f"{self.identity.bucket}/{source_key}"}
        return self.sign_request(Method.PUT, dest_key, headers, now=now)

    def browser_policy(
        self,
        filename: str,
        filetype: str,
        max_filesize: int,
        *,
        now: SigningTime | dt.datetime | None = None,
    ) -> BrowserPolicy:
        """Build a signed policy for a direct browser-to-S3 form POST.

        ``fields`` holds every form field the browser has to submit along
        with the file, including ``policy`` and ``x-amz-signature``.
        """
        time = SigningTime.coerce(now)
        credential = self.credential(time)
        amz_date = time.to_compact_datetime()

        document = {
            "expiration": time.after(POLICY_EXPIRATION).to_iso8601(),
            "conditions": [
                {"bucket": self.identity.bucket},
                {"x-amz-algorithm": AWS_AUTH_ALG},
                {"x-amz-credential": credential},
                {"x-amz-date": amz_date},
                {"acl": "public-read"},
                {"key": filename},
                {"content-type": filetype},
                ["content-length-range", 0, max_filesize],
                {"success_action_status": "200"},
            ],
        }

        try:
            policy_json = json.dumps(
                document,
                separators=(",", ":"),
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            )
            policy = base64.b64encode(policy_json.encode("utf-8")).decode("ascii")
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Cannot encode browser upload policy: {e}") from e

        signature = self.sign(policy, self.signing_key(time))
        logger.debug("Signed browser upload policy for key %r", filename)

        fields = {
            "x-amz-algorithm": AWS_AUTH_ALG,
            "x-amz-credential": credential,
            "x-amz-date": amz_date,
            "acl": "public-read",
            "key": filename,
            "content-type": filetype,
            "success_action_status": "200",
            "policy": policy,
            "x-amz-signature": signature,
        }
        return BrowserPolicy(fields=fields, policy=policy, signature=signature)
