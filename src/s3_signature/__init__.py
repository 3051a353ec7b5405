"""AWS Signature Version 4 signing for S3 requests and browser uploads."""

__version__ = "0.1.0"

from .auth import BrowserPolicy, Method, S3Signature, SignedRequest
from .canonical import canonical_request, normalize_headers
from .config import SigningIdentity
from .dates import SigningTime
from .exceptions import (
    ConfigurationError,
    EncodingError,
    MissingHeaderError,
    S3SignatureError,
)
from .upload import BytesUpload, FileUpload, Upload

__all__ = [
    "S3Signature",
    "SigningIdentity",
    "SigningTime",
    "Method",
    "SignedRequest",
    "BrowserPolicy",
    "Upload",
    "BytesUpload",
    "FileUpload",
    "canonical_request",
    "normalize_headers",
    "S3SignatureError",
    "ConfigurationError",
    "MissingHeaderError",
    "EncodingError",
]
