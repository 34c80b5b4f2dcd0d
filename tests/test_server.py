import logging
import time
import pytest
from fastapi.testclient import TestClient
from keyshare_core.codec import CONTENT_TYPE, decode_key_share
from keyshare_core.config import Settings
from keyshare_core.server import create_app
from keyshare_core.storage import InMemoryKeyShareStore


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store, ttl=0, settings=Settings()))


def test_get_missing_returns_404(client):
    r = client.get("/keys", params={"name": "Alice"})
    assert r.status_code == 404
    assert r.content == b""


def test_get_without_name_returns_400(client):
    r = client.get("/keys")
    assert r.status_code == 400
    assert r.content == b""


def test_post_then_get(client, store, alice_form, alice):
    r = client.post("/keys", data=alice_form)
    assert r.status_code == 200
    assert r.content == b""
    assert store.get("Alice") == alice

    r = client.get("/keys", params={"name": "Alice"})
    assert r.status_code == 200
    assert r.headers["content-type"] == CONTENT_TYPE
    assert decode_key_share(r.content) == alice


def test_post_json_rejected(client, store, alice_form):
    r = client.post("/keys", json=alice_form)
    assert r.status_code == 400
    assert r.content == b""
    assert len(store) == 0


def test_post_malformed_rejected(client, alice_form):
    r = client.post("/keys", data=dict(alice_form, privateKeyFormat="PKIX"))
    assert r.status_code == 400
    assert r.content == b""


def test_other_methods_405(client):
    r = client.delete("/keys", params={"name": "Alice"})
    assert r.status_code == 405
    assert r.content == b""


def test_apps_do_not_share_state(alice_form):
    a = TestClient(create_app(ttl=0, settings=Settings()))
    b = TestClient(create_app(ttl=0, settings=Settings()))
    assert a.post("/keys", data=alice_form).status_code == 200
    assert b.get("/keys", params={"name": "Alice"}).status_code == 404


def test_app_state_and_ttl_from_settings(store):
    app = create_app(store=store, settings=Settings(ttl=7))
    assert app.state.store is store
    assert app.state.handler.ttl == 7


def test_expiry_over_http(store, alice_form):
    client = TestClient(create_app(store=store, ttl=1, settings=Settings()))
    assert client.post("/keys", data=alice_form).status_code == 200
    assert client.get("/keys", params={"name": "Alice"}).status_code == 200
    time.sleep(3)
    assert client.get("/keys", params={"name": "Alice"}).status_code == 404


@pytest.fixture
def package_logger():
    pkg = logging.getLogger("keyshare")
    yield pkg
    for h in [h for h in pkg.handlers if isinstance(h, logging.FileHandler)]:
        pkg.removeHandler(h)
        h.close()
    pkg.setLevel(logging.INFO)


def test_log_settings_reach_handler_events(tmp_path, store, package_logger):
    path = tmp_path / "logs" / "ks.log"
    settings = Settings(log_level="WARNING", log_file=str(path))
    client = TestClient(create_app(store=store, ttl=0, settings=settings))

    assert client.get("/keys").status_code == 400
    for h in package_logger.handlers:
        h.flush()

    text = path.read_text()
    assert "keyshare_rejected" in text
    assert "keyshare.handler" in text
    # INFO events are below the configured level
    assert "keyshare_app_created" not in text


def test_repeated_name_first_value_wins(client, store, alice):
    store.put("Alice", alice)
    r = client.get("/keys?name=Alice&name=Bob")
    assert r.status_code == 200
    assert decode_key_share(r.content) == alice

    r = client.get("/keys?name=Bob&name=Alice")
    assert r.status_code == 404


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS"])
def test_head_and_options_405_empty(client, method):
    r = client.request(method, "/keys", params={"name": "Alice"})
    assert r.status_code == 405
    assert r.content == b""
