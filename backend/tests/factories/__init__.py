"""Factory Boy helpers wired to the transactional test session.

The service never writes credential rows itself; factories seed them
through the session installed by the ``session`` fixture.
"""

from __future__ import annotations

import factory.alchemy


class SQLAlchemySession:
    """Hold the session registered by the pytest fixture layer."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered SQLAlchemy session.

        Raises
        ------
        RuntimeError
            If factories are used without the ``session`` fixture wiring.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Base class persisting objects with ``flush`` (never ``commit``)."""

    class Meta:
        abstract = True
        # callable so each test resolves its own scoped session
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
