"""Token lifecycle endpoints (login / refresh / logout)."""

from __future__ import annotations

from flask import Blueprint, request

from sessionauth.api.deps import get_auth_facade, json_response, timing, translated_errors
from sessionauth.schemas import LoginSchema, RefreshTokenSchema, TokenPairSchema
from sessionauth.services.auth import LoginIn, LogoutIn, RefreshIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_token_schema = RefreshTokenSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/login")
@timing
def login():
    """Exchange credentials for an access/refresh pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    with translated_errors():
        pair = get_auth_facade().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/refresh")
@timing
def refresh():
    """Redeem a refresh token (once) for a rotated pair."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    with translated_errors():
        pair = get_auth_facade().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/logout")
@timing
def logout():
    """Invalidate a refresh token; always acknowledged."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    get_auth_facade().logout(LogoutIn(refresh_token=data["refresh_token"]))
    return json_response({"data": {"status": "ok"}})
