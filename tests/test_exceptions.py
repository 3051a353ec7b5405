import pytest

from s3_signature.exceptions import (
    ConfigurationError,
    EncodingError,
    MissingHeaderError,
    S3SignatureError,
)


def test_s3_signature_error_base():
    error = S3SignatureError("Test error")
    assert str(error) == "Test error"
    assert error.message == "Test error"


def test_configuration_error_default_message():
    error = ConfigurationError("bucket")
    assert error.field == "bucket"
    assert str(error) == 'Parameter "bucket" is mandatory in the constructor.'


def test_configuration_error_custom_message():
    error = ConfigurationError("protocol", "bad protocol")
    assert error.field == "protocol"
    assert error.message == "bad protocol"


def test_missing_header_error():
    error = MissingHeaderError()
    assert error.header == "x-amz-content-sha256"
    assert "x-amz-content-sha256" in str(error)


def test_exception_inheritance():
    assert issubclass(ConfigurationError, S3SignatureError)
    assert issubclass(MissingHeaderError, S3SignatureError)
    assert issubclass(EncodingError, S3SignatureError)


def test_exception_can_be_raised():
    with pytest.raises(S3SignatureError):
        raise EncodingError("Test")

    with pytest.raises(MissingHeaderError):
        raise MissingHeaderError("content-length")
