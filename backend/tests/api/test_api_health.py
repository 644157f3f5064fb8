# tests/api/test_api_health.py
from __future__ import annotations


def test_health(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.get_json()["data"]
    assert body["status"] == "ok"
    assert body["db"] == "ok"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"
