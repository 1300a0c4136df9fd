"""
Read-only SQLAlchemy Unit of Work for credential lookups.
"""

from __future__ import annotations

from contextlib import suppress

from flask import current_app
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from sessionauth.core.extensions import db
from sessionauth.repositories import UserRepository
from sessionauth.uow.base import UnitOfWork

# Dialects that understand SET TRANSACTION directives
_SET_TRANSACTION_DIALECTS = ("postgresql", "mysql", "mariadb")


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Sets the transaction isolation level and ``READ ONLY`` on dialects that
      support ``SET TRANSACTION``.
    - Installs portable write-guards and always rolls back on exit.
    - Disallows ``commit()``.

    Parameters
    ----------
    isolation_level:
        Optional transaction isolation level hint, e.g. ``"READ COMMITTED"``.
        If ``None``, the connection's default is used.
    enforce_db_readonly:
        If ``True`` (default), applies ``SET TRANSACTION READ ONLY`` when supported.

    Notes
    -----
    When a transaction is already open on the session (test fixtures, outer
    scopes) the UoW attaches to it: the guards still apply but no
    ``SET TRANSACTION`` directive is emitted and no rollback is issued.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
        "grant",
        "revoke",
    )

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly

        self._conn: Connection | None = None
        self._txn_ctx: SessionTransaction | None = None
        self._listeners_installed = False

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn_ctx = None
        self._conn = None

        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            # Transaction already begun on this Session; attach to it.
            pass

        self._conn = self.session.connection()
        self._install_listeners()

        if self._txn_ctx is not None and self._conn.dialect.name in _SET_TRANSACTION_DIALECTS:
            try:
                if self.isolation_level:
                    iso = self.isolation_level.upper().strip()
                    self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {iso}"))
                if self.enforce_db_readonly:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                current_app.logger.warning(
                    "SET TRANSACTION directives failed (%s). Falling back to guards-only.", exc
                )

        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn_ctx is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                try:
                    self._txn_ctx.__exit__(exc_type, exc, tb)
                finally:
                    self._txn_ctx = None
        finally:
            self._remove_listeners()
            self._conn = None

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards & Listeners --------------------------

    def _install_listeners(self) -> None:
        """Install ORM/db-level listeners to prevent any write attempt."""
        if self._listeners_installed:
            return

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        event.listen(self.session, "before_flush", _before_flush)

        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        target = self._conn if self._conn is not None else self.session.get_bind()
        event.listen(target, "before_cursor_execute", _before_cursor_execute)

        self._ro__before_flush = _before_flush
        self._ro__before_cursor_execute = _before_cursor_execute
        self._listeners_installed = True

    def _remove_listeners(self) -> None:
        """Detach previously installed listeners."""
        if not self._listeners_installed:
            return

        with suppress(InvalidRequestError):
            event.remove(self.session, "before_flush", self._ro__before_flush)

        with suppress(InvalidRequestError):
            target = self._conn if self._conn is not None else self.session.get_bind()
            event.remove(target, "before_cursor_execute", self._ro__before_cursor_execute)

        self._listeners_installed = False
