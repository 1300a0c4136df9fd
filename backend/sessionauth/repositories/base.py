"""Generic read-only repository base for SQLAlchemy 2.x.

Repositories here are persistence-only and never open, commit or roll back
transactions; the credential store is read-only for this service, so no
write helpers are offered at all.
"""

from __future__ import annotations

from typing import Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from sessionauth.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Read-only repository for a single aggregate.

    Subclasses MUST define ``model``, the SQLAlchemy mapped class.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared across the Unit of Work scope. Falls
            back to the Flask-scoped session when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _select(self) -> Select[tuple[E]]:
        return select(self.model)
