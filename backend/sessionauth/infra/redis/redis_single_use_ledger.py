from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from sessionauth.services._shared.ports.single_use_ledger import (
    LedgerConflictError,
    LedgerUnavailableError,
    SingleUseLedger,
    ledger_key,
)


@dataclass(slots=True)
class RedisSingleUseLedger(SingleUseLedger):
    """
    Redis-backed single-use ledger.

    Each primitive is one Redis command, so atomicity comes from the server
    and holds across every process sharing the instance:

    - ``reserve`` → ``SET key marker NX EX ttl``
    - ``claim``   → ``DEL key`` (``1`` for the single winner, ``0`` otherwise)

    :param r: A Redis client (already connected).
    :param prefix: Namespace prepended to every key.
    """

    r: redis.Redis
    prefix: str = ""

    def _k(self, jti: str) -> str:
        return ledger_key(jti, self.prefix)

    @staticmethod
    def _ttl_seconds(ttl: timedelta) -> int:
        # EX takes whole seconds > 0; round up so the entry lives at least as long as the token
        return max(1, math.ceil(ttl.total_seconds()))

    def reserve(self, jti: str, ttl: timedelta, marker: str) -> None:
        key = self._k(jti)
        try:
            created = self.r.set(key, marker, nx=True, ex=self._ttl_seconds(ttl))
        except RedisError as exc:
            raise LedgerUnavailableError(f"reserve failed for {key!r}") from exc
        if not created:
            raise LedgerConflictError(key)

    def claim(self, jti: str) -> bool:
        key = self._k(jti)
        try:
            deleted = cast(int, self.r.delete(key))
        except RedisError as exc:
            raise LedgerUnavailableError(f"claim failed for {key!r}") from exc
        return deleted == 1

    def exists(self, jti: str) -> bool:
        try:
            return cast(int, self.r.exists(self._k(jti))) == 1
        except RedisError as exc:
            raise LedgerUnavailableError("exists failed") from exc

    def ping(self) -> bool:
        """Health probe; ``False`` when the store is unreachable."""
        try:
            return bool(self.r.ping())
        except RedisError:
            return False
