"""URL-safe base64 without padding.

Tokens use the standard base64 alphabet with ``+`` -> ``-`` and ``/`` -> ``_``
and carry no ``=`` padding, so they can sit in a URL fragment untouched.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

_TOKEN_RE = re.compile(r"[A-Za-z0-9_\-]*")


class Base64UrlDecodeError(ValueError):
    """Raised when a token is not valid unpadded URL-safe base64."""


def from_base64(b64: str) -> str:
    return b64.rstrip("=").replace("+", "-").replace("/", "_")


def to_base64(token: str) -> str:
    b64 = str(token).replace("-", "+").replace("_", "/")
    pad = len(b64) % 4
    if pad:
        b64 += "=" * (4 - pad)
    return b64


def encode(data: Union[str, BytesLike], encoding: str = "utf-8") -> str:
    if isinstance(data, str):
        raw = data.encode(encoding)
    else:
        raw = bytes(data)
    return from_base64(base64.b64encode(raw).decode("ascii"))


def to_bytes(token: str) -> bytes:
    if not isinstance(token, str) or not _TOKEN_RE.fullmatch(token):
        raise Base64UrlDecodeError("token contains characters outside the base64url alphabet")
    if len(token) % 4 == 1:
        raise Base64UrlDecodeError(f"impossible token length {len(token)}")
    b64 = to_base64(token)
    try:
        raw = base64.b64decode(b64, validate=True)
    except binascii.Error as exc:
        raise Base64UrlDecodeError(str(exc)) from exc
    # Reject tokens whose unused trailing bits are set; they would not round-trip.
    if from_base64(base64.b64encode(raw).decode("ascii")) != token:
        raise Base64UrlDecodeError("non-canonical token encoding")
    return raw


def decode(token: str, encoding: str = "utf-8") -> str:
    raw = to_bytes(token)
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise Base64UrlDecodeError(f"token is not valid {encoding} text") from exc
