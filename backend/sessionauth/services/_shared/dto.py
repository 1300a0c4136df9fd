# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class TokenKind(str, Enum):
    """Discriminates the two token flavours (``type`` claim)."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Claims carried inside a signed token.

    :param subject_id: Principal identifier (``sub``).
    :type subject_id: str
    :param jti: Unique token identifier; the ledger key for refresh tokens.
    :type jti: str
    :param kind: Access or refresh.
    :type kind: TokenKind
    :param issued_at: Issuance instant (UTC, second precision).
    :type issued_at: datetime
    :param expires_at: Expiry instant (UTC, second precision).
    :type expires_at: datetime
    """

    subject_id: str
    jti: str
    kind: TokenKind
    issued_at: datetime
    expires_at: datetime

    @property
    def lifetime(self) -> timedelta:
        """Total validity window of the token."""
        return self.expires_at - self.issued_at


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access/refresh pair handed to the caller.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenTTLConfig:
    """
    Token emission configuration.

    :param access_ttl: Access token lifetime.
    :type access_ttl: timedelta
    :param refresh_ttl: Refresh token lifetime (also the ledger entry TTL).
    :type refresh_ttl: timedelta
    """

    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)

    def __post_init__(self) -> None:
        if self.access_ttl <= timedelta(0) or self.refresh_ttl <= timedelta(0):
            raise ValueError("Token lifetimes must be positive.")
