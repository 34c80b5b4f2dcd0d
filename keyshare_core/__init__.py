"""
KeyShare Core Package
=====================
Ephemeral, in-memory key sharing for device pairing and out-of-band key exchange.

Provides:
- KeyShare record and thread-safe in-memory store
- TTL expiry scheduling
- /keys request handler, FastAPI app factory, and HTTP client
- PKIX/PKCS8 key export/import protected by an access code
"""

__version__ = "0.1.0"
