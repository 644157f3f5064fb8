# tests/api/test_api_auth.py
from __future__ import annotations

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

BASE = "/api/v1/auth"


def _register(client, **overrides):
    payload = {"name": "Ann", "email": "ann@example.com", "password": "abc12345"}
    payload.update(overrides)
    return client.post(f"{BASE}/register", json=payload)


def test_register_returns_user_and_tokens(client):
    resp = _register(client)

    assert resp.status_code == 201
    body = resp.get_json()["data"]
    assert body["user"]["email"] == "ann@example.com"
    assert body["user"]["name"] == "Ann"
    assert "password" not in body["user"]
    assert "passwordHash" not in body["user"]
    assert "password_hash" not in body["user"]
    assert body["tokens"]["access"]["token"]
    assert body["tokens"]["refresh"]["expires"]


def test_register_duplicate_email_conflicts(client):
    assert _register(client).status_code == 201

    resp = _register(client, email="ANN@example.com")

    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


def test_register_validation_errors(client):
    resp = _register(client, password="short")

    assert resp.status_code == 422
    problem = resp.get_json()
    assert resp.mimetype == "application/problem+json"
    assert "password" in problem["details"]["errors"]


def test_login_success(client, session):
    user = UserFactory(email="bob@example.com")
    session.commit()

    resp = client.post(f"{BASE}/login", json={"email": "bob@example.com", "password": DEFAULT_PASSWORD})

    assert resp.status_code == 200
    body = resp.get_json()["data"]
    assert body["user"]["id"] == user.id
    assert set(body["tokens"]) == {"access", "refresh"}


def test_login_failure_is_uniform(client, session):
    UserFactory(email="bob@example.com")
    session.commit()

    wrong = client.post(f"{BASE}/login", json={"email": "bob@example.com", "password": "nope1234"})
    unknown = client.post(f"{BASE}/login", json={"email": "x@example.com", "password": "nope1234"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json()["detail"] == unknown.get_json()["detail"] == "Incorrect email or password"


def test_refresh_rotates_and_rejects_reuse(client):
    tokens = _register(client).get_json()["data"]["tokens"]
    old_refresh = tokens["refresh"]["token"]

    first = client.post(f"{BASE}/refresh-tokens", json={"refreshToken": old_refresh})
    assert first.status_code == 200
    new_pair = first.get_json()["data"]
    assert new_pair["refresh"]["token"] != old_refresh

    reuse = client.post(f"{BASE}/refresh-tokens", json={"refreshToken": old_refresh})
    assert reuse.status_code == 401
    assert reuse.get_json()["detail"] == "Please authenticate"

    again = client.post(
        f"{BASE}/refresh-tokens", json={"refreshToken": new_pair["refresh"]["token"]}
    )
    assert again.status_code == 200


def test_refresh_with_access_token_is_rejected(client):
    tokens = _register(client).get_json()["data"]["tokens"]

    resp = client.post(f"{BASE}/refresh-tokens", json={"refreshToken": tokens["access"]["token"]})

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Please authenticate"


def test_refresh_requires_token_field(client):
    resp = client.post(f"{BASE}/refresh-tokens", json={})

    assert resp.status_code == 422
