"""
Pytest config.

Local imports like `import presale` rely on the repo root being on sys.path. When a global
`pytest` entrypoint is used that doesn't always happen during collection, so pin it here.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

TEST_JWT_SECRET = "test-secret-key-for-testing-purposes-only"
TEST_ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """
    Every test starts from a known environment and fresh cached config.

    Config loaders are lru_cached, so env changes only take effect after cache_clear().
    """
    from presale.api.config import load_server_config
    from presale.auth.config import load_auth_config
    from presale.storage.config import load_store_config
    from presale.storage.factory import reset_store

    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)
    for name in ("DATABASE_URL", "PRESALE_IN_MEMORY_STORE", "APP_ENV", "PORT", "PRESALE_TIME_URL"):
        monkeypatch.delenv(name, raising=False)

    for loader in (load_auth_config, load_store_config, load_server_config):
        loader.cache_clear()
    reset_store()
    yield
    for loader in (load_auth_config, load_store_config, load_server_config):
        loader.cache_clear()
    reset_store()


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch):
    """In-memory store wired into the API in place of Postgres."""
    from presale.storage.memory import InMemoryStore

    mem = InMemoryStore()
    monkeypatch.setattr("presale.api.server.get_store", lambda: mem)
    return mem


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    import presale.api.server as server

    return TestClient(server.app)


@pytest.fixture
def auth_headers(client):
    """Bearer header for a freshly initialized admin."""
    assert client.get("/api/init-admin").status_code == 200
    r = client.post("/api/authenticate", json={"password": TEST_ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}
