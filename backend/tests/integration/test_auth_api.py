"""Integration tests for the token lifecycle endpoints."""

from __future__ import annotations

import pytest

from sessionauth.services._shared.errors import REAUTHENTICATE_MESSAGE
from tests.factories.user import UserFactory

LOGIN_URL = "/api/v1/auth/login"
REFRESH_URL = "/api/v1/auth/refresh"
LOGOUT_URL = "/api/v1/auth/logout"

CREDENTIALS = {"email": "harper@example.com", "password": "s3cret-pass"}


@pytest.fixture()
def user(session):
    """Persist a user that survives the per-request session teardown."""
    user = UserFactory(**CREDENTIALS)
    session.commit()
    return user


@pytest.fixture()
def tokens(client, user):
    resp = client.post(LOGIN_URL, json=CREDENTIALS)
    assert resp.status_code == 200
    return resp.get_json()["data"]


def _refresh(client, token):
    return client.post(REFRESH_URL, json={"refresh_token": token})


# -------------------------------- Login ----------------------------------- #
def test_login_returns_token_pair(client, user, redis_client):
    resp = client.post(LOGIN_URL, json=CREDENTIALS)

    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"
    data = resp.get_json()["data"]
    assert set(data) == {"access_token", "refresh_token", "token_type"}
    assert data["token_type"] == "bearer"
    assert len(redis_client.keys("refresh:*")) == 1


def test_login_wrong_password_is_unauthorized(client, user):
    resp = client.post(LOGIN_URL, json={**CREDENTIALS, "password": "nope"})

    assert resp.status_code == 401
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["code"] == "unauthorized"
    assert body["detail"] == "Invalid credentials"


def test_login_payload_is_validated(client):
    resp = client.post(LOGIN_URL, json={"email": "not-an-email"})

    assert resp.status_code == 422
    assert resp.get_json()["code"] == "validation_error"


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_rotates_pair(client, tokens):
    resp = _refresh(client, tokens["refresh_token"])

    assert resp.status_code == 200
    rotated = resp.get_json()["data"]
    assert rotated["refresh_token"] != tokens["refresh_token"]
    assert rotated["access_token"] != tokens["access_token"]
    assert _refresh(client, rotated["refresh_token"]).status_code == 200


def test_refresh_replay_is_unauthorized(client, tokens):
    assert _refresh(client, tokens["refresh_token"]).status_code == 200

    resp = _refresh(client, tokens["refresh_token"])

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == REAUTHENTICATE_MESSAGE


def test_refresh_failures_are_indistinguishable(client, tokens):
    _refresh(client, tokens["refresh_token"])

    bodies = [
        _refresh(client, token).get_json()
        for token in ("garbage", tokens["access_token"], tokens["refresh_token"])
    ]

    assert {(b["status"], b["code"], b["detail"]) for b in bodies} == {
        (401, "unauthorized", REAUTHENTICATE_MESSAGE)
    }


def test_refresh_requires_token(client):
    assert client.post(REFRESH_URL, json={}).status_code == 422


# -------------------------------- Logout ---------------------------------- #
def test_logout_invalidates_refresh_token(client, tokens, redis_client):
    resp = client.post(LOGOUT_URL, json={"refresh_token": tokens["refresh_token"]})

    assert resp.status_code == 200
    assert resp.get_json() == {"data": {"status": "ok"}}
    assert redis_client.keys("refresh:*") == []
    assert _refresh(client, tokens["refresh_token"]).status_code == 401


@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
def test_logout_always_acknowledges(client, token):
    resp = client.post(LOGOUT_URL, json={"refresh_token": token})
    assert resp.status_code == 200


def test_logout_twice_is_acknowledged(client, tokens):
    payload = {"refresh_token": tokens["refresh_token"]}
    assert client.post(LOGOUT_URL, json=payload).status_code == 200
    assert client.post(LOGOUT_URL, json=payload).status_code == 200
