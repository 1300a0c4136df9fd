from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Protocol

REFRESH_KEY_NAMESPACE = "refresh"


def ledger_key(jti: str, prefix: str = "") -> str:
    """Return the shared-store key for a refresh JTI (``{prefix}refresh:{jti}``)."""
    return f"{prefix}{REFRESH_KEY_NAMESPACE}:{jti}"


class LedgerError(Exception):
    """Base class for ledger failures."""


class LedgerConflictError(LedgerError):
    """``reserve`` found an existing entry under the key."""


class LedgerUnavailableError(LedgerError):
    """The backing store could not be reached; outcome of the call is unknown."""


class SingleUseLedger(Protocol):
    """
    Single-use enforcement ledger for refresh JTIs.

    Both mutating primitives MUST be one indivisible operation against the
    shared store. A read-then-write implementation reintroduces the double
    redemption race.
    """

    def reserve(self, jti: str, ttl: timedelta, marker: str) -> None:
        """
        Create the entry only if absent, expiring after ``ttl``.

        :param marker: Opaque audit value stored with the entry (subject id).
        :raises LedgerConflictError: The key already exists.
        :raises LedgerUnavailableError: Store unreachable.
        """
        ...

    def claim(self, jti: str) -> bool:
        """
        Delete the entry if present.

        :returns: ``True`` for exactly one caller per reserved JTI; ``False``
            when the key never existed, expired, or was already claimed.
        :raises LedgerUnavailableError: Store unreachable.
        """
        ...

    def exists(self, jti: str) -> bool:
        """Inspection helper; never used on the redemption path."""
        ...


class InMemorySingleUseLedger(SingleUseLedger):
    """
    Process-local ledger with the same atomicity contract.

    .. note::
       Uses a threading lock to emulate single-command atomicity in unit
       tests. It is not shared across processes.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _live(self, key: str) -> bool:
        # caller holds the lock
        entry = self._entries.get(key)
        if entry is None:
            return False
        if entry[1] <= self._clock():
            del self._entries[key]
            return False
        return True

    def reserve(self, jti: str, ttl: timedelta, marker: str) -> None:
        key = ledger_key(jti)
        with self._lock:
            if self._live(key):
                raise LedgerConflictError(key)
            self._entries[key] = (marker, self._clock() + max(1.0, ttl.total_seconds()))

    def claim(self, jti: str) -> bool:
        key = ledger_key(jti)
        with self._lock:
            if not self._live(key):
                return False
            del self._entries[key]
            return True

    def exists(self, jti: str) -> bool:
        with self._lock:
            return self._live(ledger_key(jti))

    def marker(self, jti: str) -> str | None:
        """Return the audit marker stored for ``jti`` (tests only)."""
        with self._lock:
            if not self._live(ledger_key(jti)):
                return None
            return self._entries[ledger_key(jti)][0]
