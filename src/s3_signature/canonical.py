"""Header normalization and canonical request assembly.

This is the simplified canonical form the signer has always produced: the
path is the object key as given, there is no canonical query string, and
header values are used without whitespace trimming.
"""

import re
import unicodedata
from collections.abc import Mapping

from .exceptions import MissingHeaderError

CONTENT_SHA256_HEADER = "x-amz-content-sha256"

_NON_WORD_RE = re.compile(r"[^\w\s-]")
_SEPARATOR_RE = re.compile(r"[-\s_]+")


def slugify(name: str) -> str:
    """Lower-case a header name and collapse separators into single hyphens.

    >>> slugify("X-Amz-Content-SHA256")
    'x-amz-content-sha256'
    >>> slugify("Content_Type")
    'content-type'
    """
    value = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode()
    value = _NON_WORD_RE.sub("", value).strip().lower()
    return _SEPARATOR_RE.sub("-", value)


def normalize_headers(raw: Mapping[str, object]) -> dict[str, str]:
    """Slugify every header name and stringify every value.

    When two names normalize to the same key, the one iterated last wins.
    A None value becomes an empty string. Raises ValueError for a name with
    nothing left after slugifying.
    """
    headers = {}
    for name, value in raw.items():
        key = slugify(name)
        if not key:
            raise ValueError(f"Invalid header name '{name}'")
        headers[key] = "" if value is None else str(value)
    return headers


def signed_headers(headers: Mapping[str, str]) -> str:
    return ";".join(sorted(headers))


def canonical_request(method: str, object_key: str, headers: Mapping[str, str]) -> str:
    headers = normalize_headers(headers)
    if CONTENT_SHA256_HEADER not in headers:
        raise MissingHeaderError(CONTENT_SHA256_HEADER)

    canonical_headers = "".join(
        f"{name}:{headers[name]}\n" for name in sorted(headers)
    )

    return "\n".join(
        [
            method,
            f"/{object_key}",
            "",
            canonical_headers,
            signed_headers(headers),
            headers[CONTENT_SHA256_HEADER],
        ]
    )
