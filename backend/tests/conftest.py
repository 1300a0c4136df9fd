"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. The single-use
ledger is backed by a ``fakeredis`` client flushed before every test.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from sessionauth.core.config import TestingConfig
from sessionauth.core.extensions import REDIS_EXTENSION_KEY
from sessionauth.core.extensions import db as _db  # Flask-SQLAlchemy instance
from sessionauth.factory import create_app  # application factory under test
from sessionauth.infra.jwt.jwt_token_codec import JWTTokenCodec, SigningConfig
from sessionauth.services import AuthFacade, TokenIssuer, TokenTTLConfig
from sessionauth.services._shared.ports import (
    InMemoryCredentialVerifier,
    InMemorySingleUseLedger,
)

SIGNING_KEY = "unit-test-signing-key-0123456789abcdef"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and a
        ``fakeredis`` client installed as the ledger backend.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.extensions[REDIS_EXTENSION_KEY] = fakeredis.FakeRedis()
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def redis_client(app):
    """Return the app's FakeRedis client, emptied for the current test."""
    client = app.extensions[REDIS_EXTENSION_KEY]
    client.flushall()
    return client


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    with app.app_context():
        conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection, app_context):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    Begins a top-level transaction, starts a SAVEPOINT per test, and
    reinstalls the SAVEPOINT whenever SQLAlchemy ends one. ``db.session`` is
    swapped for the scoped session so the read-only unit of work sees the
    rows created by factories.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(bind=connection, future=True)
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(autouse=True)
def app_context(app):
    """Push a fresh application context for each test.

    Requests issued by the test client reuse it, so nothing stored on ``g``
    survives into the next test.
    """
    with app.app_context() as ctx:
        yield ctx


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Token components wired to in-memory doubles --------------------------------
@pytest.fixture()
def signing() -> SigningConfig:
    return SigningConfig(secret_key=SIGNING_KEY)


@pytest.fixture()
def codec(signing) -> JWTTokenCodec:
    return JWTTokenCodec(signing=signing)


@pytest.fixture()
def ledger() -> InMemorySingleUseLedger:
    return InMemorySingleUseLedger()


@pytest.fixture()
def issuer(codec, ledger) -> TokenIssuer:
    return TokenIssuer(codec=codec, ledger=ledger, ttl=TokenTTLConfig())


@pytest.fixture()
def credentials() -> InMemoryCredentialVerifier:
    verifier = InMemoryCredentialVerifier()
    verifier.add("alice@example.com", "correct horse", "42")
    return verifier


@pytest.fixture()
def facade(credentials, codec, ledger, issuer) -> AuthFacade:
    """AuthFacade built entirely from process-local collaborators."""
    return AuthFacade(credentials=credentials, codec=codec, ledger=ledger, issuer=issuer)


# -- HTTP ------------------------------------------------------------------------
@pytest.fixture()
def client(app, redis_client):
    """Return a Flask test client backed by an empty ledger."""
    return app.test_client()
