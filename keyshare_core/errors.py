# keyshare_core/errors.py
from __future__ import annotations
from typing import Optional


class KeyShareError(Exception):
    """Base error. ``status`` is the HTTP status the handler answers with."""
    status: int = 500


class MissingParameter(KeyShareError):
    status = 400


class NotFound(KeyShareError):
    status = 404


class UnsupportedContentType(KeyShareError):
    status = 400


class MalformedField(KeyShareError):
    status = 400


class UnsupportedMethod(KeyShareError):
    status = 405


class ClientError(KeyShareError):
    """Unexpected response seen by KeyShareClient."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        if status is not None:
            self.status = status
