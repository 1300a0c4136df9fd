# sessionauth/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email (normalized by the verifier).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Encoded refresh JWT to invalidate.
    :type refresh_token: str
    """

    refresh_token: str
