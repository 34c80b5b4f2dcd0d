from typing import Optional, Dict, List
import threading
from keyshare_core.storage.models import KeyShare
from keyshare_core.storage.provider import KeyShareStore


class InMemoryKeyShareStore(KeyShareStore):
    """
    Process-lifetime name -> KeyShare mapping.

    A single lock serialises put/get/delete; critical sections are plain dict
    operations and never block on I/O.
    """

    def __init__(self):
        self._shares: Dict[str, KeyShare] = {}
        self._lock = threading.Lock()

    def put(self, name: str, share: KeyShare) -> None:
        with self._lock:
            self._shares[name] = share

    def get(self, name: str) -> Optional[KeyShare]:
        with self._lock:
            return self._shares.get(name)

    def delete(self, name: str) -> None:
        with self._lock:
            self._shares.pop(name, None)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._shares)

    def __len__(self) -> int:
        with self._lock:
            return len(self._shares)

    def __contains__(self, name) -> bool:
        with self._lock:
            return name in self._shares
