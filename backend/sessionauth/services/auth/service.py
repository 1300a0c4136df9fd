# sessionauth/services/auth/service.py
from __future__ import annotations

import logging

from sessionauth.core.logger import short_id
from sessionauth.services._shared.base import BaseService
from sessionauth.services._shared.dto import TokenKind, TokenPair
from sessionauth.services._shared.errors import InvalidCredentialError
from sessionauth.services._shared.ports.credential_verifier import CredentialVerifier
from sessionauth.services._shared.ports.single_use_ledger import (
    LedgerUnavailableError,
    SingleUseLedger,
)
from sessionauth.services._shared.ports.token_codec import TokenCodec, TokenError
from sessionauth.services.auth.dto import LoginIn, LogoutIn, RefreshIn
from sessionauth.services.tokens.issuer import TokenIssuer
from sessionauth.services.tokens.rotation import RotationService

log = logging.getLogger(__name__)


class AuthFacade(BaseService):
    """
    Authentication lifecycle boundary (login / refresh / logout).

    The only entry point surrounding code calls. Credentials are checked by
    an external :class:`CredentialVerifier`; tokens are minted by
    :class:`TokenIssuer` and rotated by :class:`RotationService`, both sharing
    the same codec and single-use ledger.
    """

    def __init__(
        self,
        *,
        credentials: CredentialVerifier,
        codec: TokenCodec,
        ledger: SingleUseLedger,
        issuer: TokenIssuer,
        rotation: RotationService | None = None,
    ) -> None:
        """
        :param credentials: External credential check used by ``login``.
        :param codec: Decodes tokens presented to ``logout``.
        :param ledger: Single-use ledger, claimed by ``logout``.
        :param issuer: Mints pairs after a successful login.
        :param rotation: Redeems refresh tokens; built from the other
            collaborators when omitted.
        """
        super().__init__()
        self.credentials = credentials
        self.codec = codec
        self.ledger = ledger
        self.issuer = issuer
        self.rotation = rotation or RotationService(codec=codec, ledger=ledger, issuer=issuer)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPair:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Access/refresh token pair; the refresh JTI is already ledgered.
        :raises InvalidCredentialError: If the verifier rejects the credential.
        """
        subject_id = self.credentials.verify(dto.email, dto.password)
        if subject_id is None:
            log.info("auth.login.rejected")
            raise InvalidCredentialError()
        return self.issuer.issue(subject_id)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPair:
        """
        Rotate a refresh token and emit a new token pair.

        :raises TokenRejectedError: For invalid, expired, replayed tokens
            (all share the same client-facing message).
        """
        return self.rotation.rotate(dto.refresh_token)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Best-effort invalidation of the presented refresh token.

        Never raises for token or ledger problems: an unknown, expired,
        already-used or undecodable token, or an unreachable ledger, all
        yield the same acknowledgement.
        """
        try:
            claims = self.codec.verify(dto.refresh_token)
        except TokenError as exc:
            log.info("auth.logout.ignored", extra={"reason": type(exc).__name__})
            return

        if claims.kind is not TokenKind.REFRESH:
            log.info("auth.logout.ignored", extra={"reason": "access token presented"})
            return

        try:
            claimed = self.ledger.claim(claims.jti)
        except LedgerUnavailableError:
            log.warning(
                "auth.logout.ledger_unavailable",
                extra={"subject_id": claims.subject_id, "jti": short_id(claims.jti)},
                exc_info=True,
            )
            return

        log.info(
            "auth.logout",
            extra={
                "subject_id": claims.subject_id,
                "jti": short_id(claims.jti),
                "reason": "revoked" if claimed else "already gone",
            },
        )
