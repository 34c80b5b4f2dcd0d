"""
keyshare_core.expiry
--------------------
TTL eviction for key shares.

Every TTL-bearing write starts one daemon timer holding only the store and the
name. When it fires it applies ``expire``. Timers are never cancelled: a later
write under the same name does not reset the earlier timer, so the earlier
timer removes the newer record too. Changing that behaviour (for example,
deleting only if the stored record is still the one that was written) belongs
in the policy function alone.
"""

from __future__ import annotations
from typing import Callable
import threading
from .logger import get_logger
from .storage.provider import KeyShareStore

log = get_logger("keyshare.expiry")

ExpiryPolicy = Callable[[KeyShareStore, str], None]


def expire(store: KeyShareStore, name: str) -> None:
    """Unconditional delete by name; absent names are a no-op."""
    store.delete(name)


class ExpiryScheduler:
    def __init__(self, store: KeyShareStore, policy: ExpiryPolicy = expire):
        self.store = store
        self.policy = policy

    def schedule(self, name: str, ttl: float) -> threading.Timer:
        """Apply the policy to ``name`` once ``ttl`` seconds have elapsed."""
        t = threading.Timer(ttl, self._fire, args=(name,))
        t.daemon = True
        t.name = f"keyshare-expiry:{name}"
        t.start()
        log.debug({"event": "keyshare_expiry_scheduled", "name": name, "ttl": ttl})
        return t

    def _fire(self, name: str) -> None:
        self.policy(self.store, name)
        log.info({"event": "keyshare_expired", "name": name})
