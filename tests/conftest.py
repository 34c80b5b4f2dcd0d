import pytest
from keyshare_core.storage import InMemoryKeyShareStore, KeyShare, PublicKeyFormat, PrivateKeyFormat
from keyshare_core.utils import b64url_encode


@pytest.fixture
def store():
    return InMemoryKeyShareStore()


@pytest.fixture
def alice():
    return KeyShare(
        name="Alice",
        public_key=b"Foo",
        public_format=PublicKeyFormat.PKIX,
        private_key=b"Bar",
        private_format=PrivateKeyFormat.PKCS8,
        password=b"FooBar",
    )


@pytest.fixture
def alice_form():
    return {
        "name": "Alice",
        "publicKey": b64url_encode(b"Foo"),
        "publicKeyFormat": "PKIX",
        "privateKey": b64url_encode(b"Bar"),
        "privateKeyFormat": "PKCS8",
        "password": b64url_encode(b"FooBar"),
    }
