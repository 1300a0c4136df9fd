"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask, HTTP or
SQLAlchemy. They are the stable contract between the token components and
the boundary; translation to HTTP responses (RFC 7807) happens in
``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from enum import Enum

# Single client-facing message shared by every refresh rejection so callers
# cannot tell invalid, expired and replayed tokens apart.
REAUTHENTICATE_MESSAGE = "Session is no longer valid. Please sign in again."


class RedemptionState(str, Enum):
    """States a single refresh-token redemption attempt moves through."""

    RECEIVED = "received"
    VERIFIED = "verified"
    CLAIMED = "claimed"
    REISSUED = "reissued"
    REJECTED_INVALID = "rejected_invalid"
    REJECTED_EXPIRED = "rejected_expired"
    REJECTED_REPLAYED = "rejected_replayed"
    REJECTED_UNAVAILABLE = "rejected_unavailable"


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The boundary translates them to ``APIError`` subclasses.
    """


class AuthenticationError(ServiceError):
    """Any failure that must surface to the caller as *unauthenticated*."""


# --------------------------------------------------------------------------- #
# Login
# --------------------------------------------------------------------------- #


class InvalidCredentialError(AuthenticationError):
    """Raised by ``login`` when the credential verifier rejects the exchange."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Refresh rejections
# --------------------------------------------------------------------------- #


class TokenRejectedError(AuthenticationError):
    """
    A refresh token was not redeemed.

    :ivar state: Terminal :class:`RedemptionState` of the attempt.
    :ivar reason: Internal reason for logs; never sent to the client.
    """

    state: RedemptionState = RedemptionState.REJECTED_UNAVAILABLE

    def __init__(self, reason: str = "") -> None:
        super().__init__(REAUTHENTICATE_MESSAGE)
        self.reason = reason


class RejectedInvalidError(TokenRejectedError):
    """Bad signature, malformed payload, or an access token presented to refresh."""

    state = RedemptionState.REJECTED_INVALID


class RejectedExpiredError(TokenRejectedError):
    """The embedded ``exp`` claim has passed."""

    state = RedemptionState.REJECTED_EXPIRED


class RejectedReplayedError(TokenRejectedError):
    """The ledger claim failed: already redeemed, logged out, or never ledgered."""

    state = RedemptionState.REJECTED_REPLAYED


# --------------------------------------------------------------------------- #
# Issuance
# --------------------------------------------------------------------------- #


class IssuanceConflictError(ServiceError):
    """
    A freshly generated refresh JTI already had a ledger entry.

    Indicates an entropy / ID-generation defect; fatal and never retried.
    """

    def __init__(self, jti_prefix: str | None = None) -> None:
        super().__init__("Refresh token identifier collision")
        self.jti_prefix = jti_prefix
