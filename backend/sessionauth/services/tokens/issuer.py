# sessionauth/services/tokens/issuer.py
from __future__ import annotations

import logging
import secrets

from sessionauth.core.logger import short_id
from sessionauth.services._shared.base import BaseService, Clock
from sessionauth.services._shared.dto import TokenClaims, TokenKind, TokenPair, TokenTTLConfig
from sessionauth.services._shared.errors import IssuanceConflictError
from sessionauth.services._shared.ports.single_use_ledger import (
    LedgerConflictError,
    SingleUseLedger,
)
from sessionauth.services._shared.ports.token_codec import TokenCodec

log = logging.getLogger(__name__)

JTI_BYTES = 16  # 128-bit identifiers


def new_jti() -> str:
    """Generate a fresh, globally unique token identifier."""
    return secrets.token_hex(JTI_BYTES)


class TokenIssuer(BaseService):
    """
    Mint an access/refresh pair for a subject.

    The refresh JTI is reserved in the single-use ledger **before** either
    token is signed, so no refresh token ever leaves this class without a
    ledger entry backing it.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        ledger: SingleUseLedger,
        ttl: TokenTTLConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        :param codec: Signs the claims.
        :param ledger: Receives one ``reserve`` per issuance.
        :param ttl: Access/refresh lifetimes.
        :param clock: UTC clock; lifetimes are always counted from its value
            at issuance time.
        """
        super().__init__(clock=clock)
        self.codec = codec
        self.ledger = ledger
        self.ttl = ttl or TokenTTLConfig()

    def issue(self, subject_id: str) -> TokenPair:
        """
        Issue a new token pair for ``subject_id``.

        :raises IssuanceConflictError: The refresh JTI already had a ledger
            entry (ID-generation defect; not retried).
        :raises LedgerUnavailableError: The ledger could not be written.
        """
        now = self.now_utc()
        access = TokenClaims(
            subject_id=subject_id,
            jti=new_jti(),
            kind=TokenKind.ACCESS,
            issued_at=now,
            expires_at=now + self.ttl.access_ttl,
        )
        refresh = TokenClaims(
            subject_id=subject_id,
            jti=new_jti(),
            kind=TokenKind.REFRESH,
            issued_at=now,
            expires_at=now + self.ttl.refresh_ttl,
        )

        # --- Ledger FIRST, then sign ---
        try:
            self.ledger.reserve(refresh.jti, refresh.lifetime, subject_id)
        except LedgerConflictError as exc:
            log.error(
                "token.issue.jti_collision",
                extra={"subject_id": subject_id, "jti": short_id(refresh.jti)},
            )
            raise IssuanceConflictError(short_id(refresh.jti)) from exc

        pair = TokenPair(
            access_token=self.codec.sign(access),
            refresh_token=self.codec.sign(refresh),
        )
        log.debug(
            "token.issued",
            extra={"subject_id": subject_id, "jti": short_id(refresh.jti)},
        )
        return pair
