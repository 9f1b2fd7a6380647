"""Cryptographic utilities for Huobi API authentication.

Huobi signature version 2: the request parameters (including the auth
parameters) are sorted by key, percent-encoded and joined into a canonical
query. The HMAC-SHA256 of ``METHOD\\nHOST\\nPATH\\nQUERY`` is base64-encoded
and appended to the URL as ``Signature``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import quote

SIGNATURE_METHOD = "HmacSHA256"
SIGNATURE_VERSION = "2"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Sub-delimiters left alone by the userinfo encode set. '+' and ',' must
# always be encoded or the server rejects the signature.
_SAFE_CHARS = "!$'()*"


def percent_encode(value: Any) -> str:
    """Percent-encode a single value (upper-case hex, UTF-8)."""
    return quote(str(value), safe=_SAFE_CHARS, encoding="utf-8")


def canonicalize(params: Mapping[str, Any]) -> str:
    """Build the canonical query string: keys sorted, values encoded.

    Keys are expected to be plain ASCII identifiers and are not encoded.
    An empty mapping yields an empty string.
    """
    return "&".join(f"{k}={percent_encode(params[k])}" for k in sorted(params))


def build_presign(method: str, host: str, path: str, query: str) -> str:
    """Pre-sign message: METHOD, HOST, PATH and QUERY joined by newlines."""
    return "\n".join([method.upper(), host, path, query])


def sign(secret: str, message: str) -> str:
    """Return standard base64 of HMAC-SHA256(secret, message)."""
    digest = hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as second-precision UTC without zone suffix.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(TIMESTAMP_FORMAT)


def get_timestamp() -> str:
    return format_timestamp(datetime.now(timezone.utc))
