"""Integration tests for the health endpoint."""

from __future__ import annotations

from sessionauth.api.deps import get_auth_facade


def test_health_reports_dependencies(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "db": "ok", "ledger": "ok", "version": "dev"}


def test_health_degrades_when_ledger_is_unreachable(client, app, monkeypatch):
    ledger = get_auth_facade().ledger
    monkeypatch.setattr(type(ledger), "ping", lambda self: False)

    resp = client.get("/api/v1/health")

    assert resp.status_code == 503
    assert resp.get_json()["ledger"] == "fail"
    assert resp.get_json()["status"] == "degraded"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
