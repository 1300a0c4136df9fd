"""Service layer public API.

Re-exports
----------
- Base primitives (from ``sessionauth.services._shared.base``)
    * :class:`BaseService`
- Token types (from ``sessionauth.services._shared.dto``)
    * :class:`TokenClaims`, :class:`TokenKind`, :class:`TokenPair`,
      :class:`TokenTTLConfig`
- Token lifecycle (from ``sessionauth.services.tokens``)
    * :class:`TokenIssuer`, :class:`RotationService`
- Boundary (from ``sessionauth.services.auth``)
    * :class:`AuthFacade` and its DTOs
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.dto import TokenClaims, TokenKind, TokenPair, TokenTTLConfig
from .auth import AuthFacade, LoginIn, LogoutIn, RefreshIn
from .tokens import RotationService, TokenIssuer

__all__ = [
    "BaseService",
    "TokenClaims",
    "TokenKind",
    "TokenPair",
    "TokenTTLConfig",
    "TokenIssuer",
    "RotationService",
    "AuthFacade",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
]
