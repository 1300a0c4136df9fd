"""Shared API helpers: service wiring, error translation and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask import Flask, Response, current_app, jsonify, request

from sessionauth.core.extensions import REDIS_EXTENSION_KEY, get_redis
from sessionauth.infra.jwt.jwt_token_codec import JWTTokenCodec, SigningConfig
from sessionauth.infra.redis.redis_single_use_ledger import RedisSingleUseLedger
from sessionauth.infra.sql.sqlalchemy_credential_verifier import SQLAlchemyCredentialVerifier
from sessionauth.services import AuthFacade, BaseService, TokenIssuer, TokenTTLConfig
from sessionauth.services._shared.errors import ServiceError
from sessionauth.services._shared.ports.single_use_ledger import LedgerError

F = TypeVar("F", bound=Callable[..., Any])

AUTH_FACADE_KEY = "auth_facade"


def build_auth_facade(app: Flask) -> AuthFacade:
    """Compose the token components from the application config.

    Signing material and lifetimes are read here once; the resulting objects
    are immutable for the life of the process.
    """
    cfg = app.config
    codec = JWTTokenCodec(signing=SigningConfig.from_mapping(cfg))
    ledger = RedisSingleUseLedger(
        r=app.extensions[REDIS_EXTENSION_KEY],
        prefix=str(cfg.get("LEDGER_KEY_PREFIX") or ""),
    )
    ttl = TokenTTLConfig(
        access_ttl=timedelta(seconds=int(cfg["ACCESS_TOKEN_TTL_SECONDS"])),
        refresh_ttl=timedelta(seconds=int(cfg["REFRESH_TOKEN_TTL_SECONDS"])),
    )
    issuer = TokenIssuer(codec=codec, ledger=ledger, ttl=ttl)
    return AuthFacade(
        credentials=SQLAlchemyCredentialVerifier(),
        codec=codec,
        ledger=ledger,
        issuer=issuer,
    )


def get_auth_facade() -> AuthFacade:
    """Return the facade bound to the current app, building it on first use."""
    app = cast(Flask, current_app._get_current_object())  # type: ignore[attr-defined]
    facade = app.extensions.get(AUTH_FACADE_KEY)
    if facade is None:
        get_redis()  # fail fast with a clear message when no client is configured
        facade = build_auth_facade(app)
        app.extensions[AUTH_FACADE_KEY] = facade
    return cast(AuthFacade, facade)


@contextmanager
def translated_errors() -> Iterator[None]:
    """Re-raise service/ledger errors as their API counterparts."""
    try:
        yield
    except (ServiceError, LedgerError) as exc:
        raise BaseService.translate_exceptions(exc) from exc


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    response.headers["Cache-Control"] = "no-store"
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
