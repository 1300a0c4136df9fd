"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

REDIS_EXTENSION_KEY = "redis_client"

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy and the shared Redis client.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`sessionauth.models` package so the credential table metadata is
        registered.

    Notes
    -----
    When ``REDIS_URL`` is empty no client is created; callers (typically
    tests) are expected to place one under
    ``app.extensions["redis_client"]`` before the ledger is first used.
    """
    db.init_app(app)

    # Ensure models are imported so metadata is complete
    from sessionauth import models as _models  # noqa: F401

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        return

    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions[REDIS_EXTENSION_KEY] = client


def get_redis() -> redis.Redis:
    """Return the Redis client bound to the current application."""
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return client
