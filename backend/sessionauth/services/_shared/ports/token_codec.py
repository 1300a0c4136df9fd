from __future__ import annotations

from typing import Protocol

from sessionauth.services._shared.dto import TokenClaims


class TokenError(Exception):
    """Base class for token decoding failures."""


class InvalidSignatureError(TokenError):
    """Signature does not match the process signing key."""


class TokenExpiredError(TokenError):
    """The ``exp`` claim lies in the past."""


class MalformedTokenError(TokenError):
    """Not a token, or claims are missing / of the wrong shape."""


class TokenCodec(Protocol):
    """
    Port for signing and verifying token payloads.

    Implementations are pure: the output depends only on the input and an
    immutable signing configuration fixed at construction.
    """

    def sign(self, claims: TokenClaims) -> str:
        """Encode and sign ``claims``."""
        ...

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature, expiry and claim structure.

        :raises InvalidSignatureError: Signature mismatch.
        :raises TokenExpiredError: ``exp`` has passed.
        :raises MalformedTokenError: Undecodable token or bad claims.
        """
        ...
