"""
keyshare_core.handler
---------------------
Framework-neutral request handler for the ``/keys`` resource.

    GET  /keys?name=<name>   -> 200 protobuf KeyShare | 400 | 404
    POST /keys (form body)   -> 200 | 400

Error responses always carry an empty body; the reason is logged only.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import parse_qs
import math
from .codec import CONTENT_TYPE, FORM_CONTENT_TYPE, encode_key_share, decode_form
from .errors import (
    KeyShareError, MissingParameter, NotFound, UnsupportedContentType,
    MalformedField, UnsupportedMethod,
)
from .expiry import ExpiryScheduler
from .logger import get_logger
from .storage.provider import KeyShareStore

log = get_logger("keyshare.handler")


@dataclass
class KeyShareRequest:
    method: str
    params: Mapping[str, str] = field(default_factory=dict)
    content_type: Optional[str] = None
    body: bytes = b""


@dataclass
class KeyShareResponse:
    status: int
    body: bytes = b""
    content_type: Optional[str] = None


def is_form_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == FORM_CONTENT_TYPE


def parse_form(body: bytes) -> dict:
    """Decode a URL-encoded body; the first value of a repeated key wins."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedField(f"form body is not utf-8: {e}") from e
    try:
        pairs = parse_qs(text, keep_blank_values=True, strict_parsing=False, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedField(f"form body has bad percent-encoding: {e}") from e
    return {k: v[0] for k, v in pairs.items()}


class KeyShareHandler:
    def __init__(self, store: KeyShareStore, ttl: float = 0, scheduler: Optional[ExpiryScheduler] = None):
        if not math.isfinite(ttl) or ttl < 0:
            raise ValueError(f"ttl must be finite and non-negative, got {ttl}")
        self.store = store
        self.ttl = ttl
        self.scheduler = scheduler or ExpiryScheduler(store)

    def handle(self, request: KeyShareRequest) -> KeyShareResponse:
        method = request.method.upper()
        try:
            if method == "GET":
                return self.get(request)
            if method == "POST":
                return self.post(request)
            raise UnsupportedMethod(method)
        except KeyShareError as e:
            log.warning({
                "event": "keyshare_rejected",
                "method": method,
                "error": type(e).__name__,
                "status": e.status,
                "detail": str(e),
            })
            return KeyShareResponse(status=e.status)

    def get(self, request: KeyShareRequest) -> KeyShareResponse:
        name = request.params.get("name")
        if not name:
            raise MissingParameter("name")
        share = self.store.get(name)
        if share is None:
            raise NotFound(name)
        log.info({"event": "keyshare_get", "name": name})
        return KeyShareResponse(status=200, body=encode_key_share(share), content_type=CONTENT_TYPE)

    def post(self, request: KeyShareRequest) -> KeyShareResponse:
        if not is_form_content_type(request.content_type):
            raise UnsupportedContentType(request.content_type or "<missing>")
        share = decode_form(parse_form(request.body))
        self.store.put(share.name, share)
        log.info({"event": "keyshare_put", "name": share.name, "ttl": self.ttl})
        if self.ttl > 0:
            self.scheduler.schedule(share.name, self.ttl)
        return KeyShareResponse(status=200)
