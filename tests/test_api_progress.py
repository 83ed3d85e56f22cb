from __future__ import annotations

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

import presale.api.server as ws


def test_get_progress_defaults_to_zero(client) -> None:
    r = client.get("/api/getProgress")
    assert r.status_code == 200
    assert r.json() == {"value": 0}


def test_increment_then_decrement(client, auth_headers) -> None:
    r = client.post("/api/incrementProgress", json={"number": 5}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Incremented successfully", "value": 5}
    assert client.get("/api/getProgress").json() == {"value": 5}

    r = client.post("/api/decrementProgress", json={"number": 3}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Decremented successfully", "value": 2}
    assert client.get("/api/getProgress").json() == {"value": 2}


def test_decrement_first_creates_negative_value(client, store, auth_headers) -> None:
    r = client.post("/api/decrementProgress", json={"number": 4}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["value"] == -4
    assert store.progress == -4


def test_counter_has_no_floor(client, auth_headers) -> None:
    client.post("/api/incrementProgress", json={"number": 1}, headers=auth_headers)
    r = client.post("/api/decrementProgress", json={"number": 10}, headers=auth_headers)
    assert r.json()["value"] == -9

    # Negative numbers are accepted and simply flip the direction.
    r = client.post("/api/incrementProgress", json={"number": -1}, headers=auth_headers)
    assert r.json()["value"] == -10


def test_progress_changes_require_token(client, store, auth_headers) -> None:
    client.post("/api/incrementProgress", json={"number": 7}, headers=auth_headers)

    r = client.post("/api/incrementProgress", json={"number": 5})
    assert r.status_code == 401
    r = client.post("/api/decrementProgress", json={"number": 5})
    assert r.status_code == 401

    bad = {"Authorization": "Bearer forged.token.value"}
    r = client.post("/api/incrementProgress", json={"number": 5}, headers=bad)
    assert r.status_code == 403
    r = client.post("/api/decrementProgress", json={"number": 5}, headers=bad)
    assert r.status_code == 403

    assert store.progress == 7
    assert client.get("/api/getProgress").json() == {"value": 7}


def test_progress_rejects_non_integer_number(client, store, auth_headers) -> None:
    for body in ({}, {"number": "5"}, {"number": 1.5}, {"number": True}, {"number": None}):
        r = client.post("/api/incrementProgress", json=body, headers=auth_headers)
        assert r.status_code == 400, body
        assert r.json() == {"message": "Invalid request body"}
    assert store.progress is None


def test_progress_store_failures(monkeypatch, auth_headers) -> None:
    broken = MagicMock()
    broken.add_progress.side_effect = RuntimeError("numeric value out of range")
    broken.get_progress.side_effect = RuntimeError("connection refused")
    monkeypatch.setattr("presale.api.server.get_store", lambda: broken)

    c = TestClient(ws.app)
    r = c.post("/api/incrementProgress", json={"number": 1}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"message": "Increment failed"}

    r = c.post("/api/decrementProgress", json={"number": 1}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"message": "Decrement failed"}

    r = c.get("/api/getProgress")
    assert r.status_code == 500
    assert r.json() == {"message": "Failed to fetch value"}


def test_cors_allows_any_origin_by_default(client) -> None:
    r = client.get("/api/getProgress", headers={"Origin": "https://presale.example"})
    assert r.status_code == 200
    assert r.headers.get("access-control-allow-origin") == "*"
