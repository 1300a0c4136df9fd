# sessionauth/services/tokens/rotation.py
from __future__ import annotations

import logging

from sessionauth.core.logger import short_id
from sessionauth.services._shared.dto import TokenClaims, TokenKind, TokenPair
from sessionauth.services._shared.errors import (
    RedemptionState,
    RejectedExpiredError,
    RejectedInvalidError,
    RejectedReplayedError,
    TokenRejectedError,
)
from sessionauth.services._shared.ports.single_use_ledger import (
    LedgerUnavailableError,
    SingleUseLedger,
)
from sessionauth.services._shared.ports.token_codec import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenCodec,
    TokenExpiredError,
)
from sessionauth.services.tokens.issuer import TokenIssuer

log = logging.getLogger(__name__)


class RotationService:
    """
    Redeem a refresh token for a brand-new pair, at most once per token.

    Each attempt walks ``RECEIVED → VERIFIED → CLAIMED → REISSUED``:

    1. **verify** – signature, structure and the embedded ``exp`` (checked
       here, independently of the ledger TTL).
    2. **claim** – the token must be a refresh token; its JTI is then removed
       from the ledger with a single atomic delete. Concurrent requests
       carrying the same token all pass step 1, but only one wins step 2.
    3. **reissue** – a new pair whose lifetimes start now.

    Fail-closed: once step 2 succeeds the old token is gone. If step 3 fails
    or the request is cancelled afterwards, the subject has to log in again.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        ledger: SingleUseLedger,
        issuer: TokenIssuer,
    ) -> None:
        self.codec = codec
        self.ledger = ledger
        self.issuer = issuer

    def rotate(self, refresh_token: str) -> TokenPair:
        """
        Exchange ``refresh_token`` for a new pair.

        :raises RejectedInvalidError: Bad signature, malformed, or not a refresh token.
        :raises RejectedExpiredError: Embedded expiry has passed.
        :raises RejectedReplayedError: Ledger claim lost (already used / revoked / unknown).
        :raises TokenRejectedError: Ledger unreachable (never treated as a win).
        """
        try:
            claims = self._verify(refresh_token)
            self._claim(claims)
        except TokenRejectedError as exc:
            log.info(
                "token.refresh.rejected",
                extra={"state": exc.state.value, "reason": exc.reason},
            )
            raise

        # CLAIMED -> REISSUED; any failure from here leaves the old token burned.
        try:
            pair = self.issuer.issue(claims.subject_id)
        except Exception:
            log.error(
                "token.refresh.reissue_failed",
                extra={
                    "state": RedemptionState.CLAIMED.value,
                    "subject_id": claims.subject_id,
                    "jti": short_id(claims.jti),
                },
                exc_info=True,
            )
            raise

        log.debug(
            "token.refresh.reissued",
            extra={
                "state": RedemptionState.REISSUED.value,
                "subject_id": claims.subject_id,
                "jti": short_id(claims.jti),
            },
        )
        return pair

    # ------------------------------------------------------------------ #
    # Steps
    # ------------------------------------------------------------------ #

    def _verify(self, token: str) -> TokenClaims:
        """RECEIVED -> VERIFIED."""
        try:
            return self.codec.verify(token)
        except TokenExpiredError as exc:
            raise RejectedExpiredError("embedded expiry passed") from exc
        except InvalidSignatureError as exc:
            raise RejectedInvalidError("bad signature") from exc
        except MalformedTokenError as exc:
            raise RejectedInvalidError(f"malformed: {exc}") from exc

    def _claim(self, claims: TokenClaims) -> None:
        """VERIFIED -> CLAIMED."""
        if claims.kind is not TokenKind.REFRESH:
            raise RejectedInvalidError(f"wrong token kind: {claims.kind.value}")

        try:
            won = self.ledger.claim(claims.jti)
        except LedgerUnavailableError as exc:
            log.error(
                "token.refresh.ledger_unavailable",
                extra={"subject_id": claims.subject_id, "jti": short_id(claims.jti)},
                exc_info=True,
            )
            raise TokenRejectedError("ledger unavailable") from exc

        if not won:
            raise RejectedReplayedError(f"claim lost for jti {short_id(claims.jti)}")
