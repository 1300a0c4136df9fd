# sessionauth/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sessionauth.core import errors as api_errors
from sessionauth.services._shared.errors import (
    AuthenticationError,
    IssuanceConflictError,
)
from sessionauth.services._shared.ports.single_use_ledger import LedgerUnavailableError
from sessionauth.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current instant, timezone-aware UTC, truncated to whole seconds.

    JWT ``iat``/``exp`` are integer seconds; truncating here keeps the
    claims a service builds equal to the claims it later decodes.
    """
    return datetime.now(UTC).replace(microsecond=0)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide a read-only unit of work for credential lookups.
    * Own the injectable clock used to stamp ``iat`` / ``exp``.
    * Centralize error translation to API errors.

    Notes
    -----
    - Services never touch the global session; always use a Unit of Work.
    - Services never retry: every failure is either a definitive security
      rejection or needs caller-driven re-authentication.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, clock: Clock | None = None) -> None:
        """
        :param clock: Returns the current UTC instant; defaults to :func:`utc_now`.
        :type clock: Callable[[], datetime] | None
        """
        self._clock = clock or utc_now

    def now_utc(self) -> datetime:
        return self._clock()

    # -------------------------- UoW helpers ---------------------------------

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, AuthenticationError):
            # → 401, message already uniform per rejection family
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, LedgerUnavailableError):
            # → 503
            return api_errors.ServiceUnavailable()

        if isinstance(exc, IssuanceConflictError):
            # → 500, never leak that a collision happened
            return api_errors.InternalError()

        return exc
