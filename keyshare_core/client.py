# keyshare_core/client.py
import requests
from typing import Optional
from .codec import encode_form, decode_key_share
from .config import load_settings
from .errors import ClientError
from .logger import get_logger
from .storage.models import KeyShare

log = get_logger("keyshare.client")


class KeyShareClient:
    """
    HTTP client for a key-share service.

    ``session`` may be any object with requests-style ``get``/``post``
    methods; it defaults to a fresh ``requests.Session``.
    """
    def __init__(self, base_url: Optional[str] = None, timeout: float = 5.0, session=None):
        self.base_url = (base_url or load_settings().base_url).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/keys"

    def publish(self, share: KeyShare) -> None:
        """POST a share; the service stores it under ``share.name``."""
        log.debug(f"[KEYSHARE PUB] → {self.url} | name={share.name}")
        res = self.session.post(self.url, data=encode_form(share), timeout=self.timeout)
        if res.status_code != 200:
            log.error(f"[KEYSHARE PUB] {res.status_code} name={share.name}")
            raise ClientError(f"publish {share.name!r} failed", status=res.status_code)
        log.info(f"[KEYSHARE PUB] {res.status_code} name={share.name}")

    def fetch(self, name: str) -> Optional[KeyShare]:
        """GET a share by name; None if the service does not have it."""
        log.debug(f"[KEYSHARE GET] → {self.url} | name={name}")
        res = self.session.get(self.url, params={"name": name}, timeout=self.timeout)
        if res.status_code == 404:
            log.info(f"[KEYSHARE GET] 404 name={name}")
            return None
        if res.status_code != 200:
            log.error(f"[KEYSHARE GET] {res.status_code} name={name}")
            raise ClientError(f"fetch {name!r} failed", status=res.status_code)
        return decode_key_share(res.content)
