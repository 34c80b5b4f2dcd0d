"""
keyshare_core.utils
-------------------
Raw URL-safe base64 helpers.
Binary form fields travel as URL-safe base64 with the '=' padding stripped.
"""

from __future__ import annotations
import base64, binascii, re

_B64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


def b64url_encode(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")


def b64url_decode(s: str) -> bytes:
    # Strict: no padding, no standard-alphabet characters, no whitespace
    if not _B64URL_RE.match(s):
        raise ValueError("invalid raw url-safe base64")
    try:
        return base64.b64decode(s + "=" * (-len(s) % 4), altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid raw url-safe base64: {e}") from e
