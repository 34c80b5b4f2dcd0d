"""
keyshare_core.config
--------------------
Environment-driven settings for the key-share service and client.

    KEYSHARE_TTL              seconds before a share is removed (0 = never), default 120
    KEYSHARE_STORE_PROVIDER   store backend, default "memory"
    KEYSHARE_URL              base URL used by KeyShareClient
    KEYSHARE_LOG_LEVEL        default "INFO"
    KEYSHARE_LOG_FILE         optional log file path
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import math, os

DEFAULT_TTL = 120.0
DEFAULT_URL = "http://localhost:8080"


@dataclass(frozen=True)
class Settings:
    ttl: float = DEFAULT_TTL
    store_provider: str = "memory"
    base_url: str = DEFAULT_URL
    log_level: str = "INFO"
    log_file: Optional[str] = None


def parse_ttl(raw: str) -> float:
    try:
        ttl = float(raw)
    except ValueError:
        raise ValueError(f"KEYSHARE_TTL must be a number of seconds, got {raw!r}")
    if not math.isfinite(ttl) or ttl < 0:
        raise ValueError(f"KEYSHARE_TTL must be a finite, non-negative number of seconds, got {raw!r}")
    return ttl


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    return Settings(
        ttl=parse_ttl(env.get("KEYSHARE_TTL", str(DEFAULT_TTL))),
        store_provider=env.get("KEYSHARE_STORE_PROVIDER", "memory").lower(),
        base_url=env.get("KEYSHARE_URL", DEFAULT_URL).rstrip("/"),
        log_level=env.get("KEYSHARE_LOG_LEVEL", "INFO").upper(),
        log_file=env.get("KEYSHARE_LOG_FILE") or None,
    )
