import datetime as dt
import hashlib
import hmac

import pytest

from s3_signature.auth import S3Signature
from s3_signature.config import SigningIdentity
from s3_signature.dates import SigningTime


@pytest.fixture
def reference_signature():
    """Signature computed straight from the published SigV4 derivation."""

    def _sign(
        string_to_sign: str, secret: str, date_stamp: str, region: str = "us-east-1"
    ) -> str:
        key = f"AWS4{secret}".encode()
        for part in (date_stamp, region, "s3", "aws4_request"):
            key = hmac.new(key, part.encode(), hashlib.sha256).digest()
        return hmac.new(key, string_to_sign.encode(), hashlib.sha256).hexdigest()

    return _sign


@pytest.fixture
def identity():
    return SigningIdentity(
        access_key="secret",
        access_key_id="AKID",
        bucket="mybucket",
        region="us-east-1",
    )


@pytest.fixture
def signer(identity):
    return S3Signature(identity)


@pytest.fixture
def fixed_time():
    return SigningTime(dt.datetime(2024, 1, 15, 12, 0, 0, tzinfo=dt.UTC))


@pytest.fixture
def frozen_now(monkeypatch, fixed_time):
    """Make every wall-clock read return ``fixed_time``."""
    monkeypatch.setattr(SigningTime, "now", classmethod(lambda cls: fixed_time))
    return fixed_time
