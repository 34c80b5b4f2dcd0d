# keyshare_core/storage/__init__.py

from .models import KeyShare, PublicKeyFormat, PrivateKeyFormat
from .provider import KeyShareStore
from .providers.memory_provider import InMemoryKeyShareStore
import os


def load_store(config: dict | None = None) -> KeyShareStore:
    """
    Factory resolver for selecting the key-share store backend.

    For now:
        - memory (default)
    """
    config = config or {}
    provider = (config.get("provider") or os.getenv("KEYSHARE_STORE_PROVIDER", "memory")).lower()

    if provider == "memory":
        return InMemoryKeyShareStore()

    raise ValueError(f"Unknown key-share store provider: {provider}")


__all__ = [
    "KeyShare",
    "PublicKeyFormat",
    "PrivateKeyFormat",
    "KeyShareStore",
    "InMemoryKeyShareStore",
    "load_store",
]
