# keyshare_core/server.py
from __future__ import annotations
from typing import Optional
from fastapi import FastAPI, Request, Response
from . import __version__
from .config import Settings, load_settings
from .handler import KeyShareHandler, KeyShareRequest
from .logger import ROOT, get_logger
from .storage import KeyShareStore, load_store


def first_values(items) -> dict:
    """Collapse (key, value) pairs; the first value of a repeated key wins."""
    params = {}
    for k, v in items:
        params.setdefault(k, v)
    return params


def create_app(
    store: Optional[KeyShareStore] = None,
    ttl: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the key-share HTTP app.

    Each app owns its own store unless one is injected; there is no
    module-level store.
    """
    settings = settings or load_settings()
    # component loggers propagate to the package logger
    get_logger(ROOT, settings.log_level, settings.log_file)
    log = get_logger("keyshare.server")

    store = store if store is not None else load_store({"provider": settings.store_provider})
    handler = KeyShareHandler(store, settings.ttl if ttl is None else ttl)

    app = FastAPI(title="KeyShare", description="Ephemeral key-share service", version=__version__)
    app.state.store = store
    app.state.handler = handler

    # Other methods are routed too so the handler answers 405 with an empty body
    @app.api_route("/keys", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"])
    async def keys(request: Request) -> Response:
        result = handler.handle(KeyShareRequest(
            method=request.method,
            params=first_values(request.query_params.multi_items()),
            content_type=request.headers.get("content-type"),
            body=await request.body(),
        ))
        return Response(content=result.body, status_code=result.status, media_type=result.content_type)

    log.info({"event": "keyshare_app_created", "ttl": handler.ttl, "store": type(store).__name__})
    return app
