# keyshare_core/storage/provider.py
from __future__ import annotations
from typing import Optional, List
from keyshare_core.storage.models import KeyShare


class KeyShareStore:
    # Interface
    def put(self, name: str, share: KeyShare) -> None: ...
    def get(self, name: str) -> Optional[KeyShare]: ...
    def delete(self, name: str) -> None: ...
    def names(self) -> List[str]: ...
