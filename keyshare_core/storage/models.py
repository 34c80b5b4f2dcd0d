# keyshare_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum


class _KeyFormat(IntEnum):
    """
    Closed set of key encoding tags. Member 0 is always the unknown tag:
    wire numbers this build does not recognise decode to it, and it is never
    accepted by name from a client.
    """

    @classmethod
    def _missing_(cls, value):
        return cls(0)

    @classmethod
    def parse(cls, text: str) -> "_KeyFormat":
        member = cls.__members__.get(text)
        if member is None or member == 0:
            raise ValueError(f"unknown {cls.__name__}: {text!r}")
        return member


class PublicKeyFormat(_KeyFormat):
    UNKNOWN_PUBLIC_KEY_FORMAT = 0
    PKIX = 1
    PKCS1_PUBLIC = 2


class PrivateKeyFormat(_KeyFormat):
    UNKNOWN_PRIVATE_KEY_FORMAT = 0
    PKCS1_PRIVATE = 1
    PKCS8 = 2


@dataclass(frozen=True)
class KeyShare:
    """
    A named bundle of key material held until it is read or expires.

    The byte fields are opaque to the service; format tags describe how a
    client should interpret them. Records are immutable, so an update is a
    whole-record replacement under the same name.
    """
    name: str
    public_key: bytes = b""
    public_format: PublicKeyFormat = PublicKeyFormat.UNKNOWN_PUBLIC_KEY_FORMAT
    private_key: bytes = b""
    private_format: PrivateKeyFormat = PrivateKeyFormat.UNKNOWN_PRIVATE_KEY_FORMAT
    password: bytes = b""

    def __repr__(self) -> str:
        # key material stays out of logs and tracebacks
        return (
            f"KeyShare(name={self.name!r}, public_format={self.public_format.name}, "
            f"private_format={self.private_format.name}, public_key=<{len(self.public_key)} bytes>, "
            f"private_key=<{len(self.private_key)} bytes>, password=<{len(self.password)} bytes>)"
        )
