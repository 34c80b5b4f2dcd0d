"""
keyshare_core.crypto
--------------------
Key export/import over a key-share service.

export_keys publishes:
- public key as PKIX (SubjectPublicKeyInfo) DER
- private key as PKCS8 DER, encrypted under the owner's password
- the password itself, AES-GCM encrypted under a fresh random access code

The access code never reaches the service; it is handed to the importing
device out of band.
"""

from __future__ import annotations
from typing import Tuple
import os
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from .client import KeyShareClient
from .errors import MalformedField, NotFound
from .storage.models import KeyShare, PublicKeyFormat, PrivateKeyFormat
from .utils import b64url_encode, b64url_decode

ACCESS_CODE_SIZE = 32
NONCE_SIZE = 12


# --------- Key encodings ----------
def public_key_to_pkix(public_key) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def private_key_to_pkcs8(private_key, password: bytes = b"") -> bytes:
    if password:
        encryption = serialization.BestAvailableEncryption(password)
    else:
        encryption = serialization.NoEncryption()
    return private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=encryption,
    )


# --------- Access code (AES-GCM) ----------
def generate_access_code() -> bytes:
    return os.urandom(ACCESS_CODE_SIZE)


def encrypt_with_access_code(access_code: bytes, plaintext: bytes) -> bytes:
    nonce = os.urandom(NONCE_SIZE)
    return nonce + AESGCM(access_code).encrypt(nonce, plaintext, None)


def decrypt_with_access_code(access_code: bytes, data: bytes) -> bytes:
    return AESGCM(access_code).decrypt(data[:NONCE_SIZE], data[NONCE_SIZE:], None)


# --------- Export / import ----------
def export_keys(client: KeyShareClient, alias: str, private_key, password: bytes = b"") -> str:
    """Publish ``private_key`` under ``alias``; returns the access code (raw URL-safe base64)."""
    access_code = generate_access_code()
    share = KeyShare(
        name=alias,
        public_key=public_key_to_pkix(private_key.public_key()),
        public_format=PublicKeyFormat.PKIX,
        private_key=private_key_to_pkcs8(private_key, password),
        private_format=PrivateKeyFormat.PKCS8,
        password=encrypt_with_access_code(access_code, password) if password else b"",
    )
    client.publish(share)
    return b64url_encode(access_code)


def import_keys(client: KeyShareClient, alias: str, access_code: str) -> Tuple[object, bytes]:
    """
    Fetch the share published under ``alias`` and recover the private key.

    Returns ``(private_key, password)``. A wrong access code surfaces as
    cryptography.exceptions.InvalidTag.
    """
    share = client.fetch(alias)
    if share is None:
        raise NotFound(alias)
    if share.public_format != PublicKeyFormat.PKIX or share.private_format != PrivateKeyFormat.PKCS8:
        raise MalformedField(
            f"unsupported formats {share.public_format.name}/{share.private_format.name}"
        )

    try:
        code = b64url_decode(access_code)
    except ValueError as e:
        raise MalformedField(f"access code: {e}") from e

    password = decrypt_with_access_code(code, share.password) if share.password else b""
    private_key = serialization.load_der_private_key(share.private_key, password=password or None)
    return private_key, password
