"""
sessionauth.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) for the token lifecycle.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec` and its decoding errors.

- :mod:`single_use_ledger`:
    Defines :class:`~.SingleUseLedger` (atomic reserve / claim of refresh
    JTIs) and :class:`~.InMemorySingleUseLedger`.

- :mod:`credential_verifier`:
    Defines :class:`~.CredentialVerifier`, the external login check, and
    :class:`~.InMemoryCredentialVerifier`.

Design Notes
------------
Concrete adapters (PyJWT, Redis, SQLAlchemy) live under
``sessionauth.infra``.
"""

from __future__ import annotations

from .credential_verifier import CredentialVerifier, InMemoryCredentialVerifier
from .single_use_ledger import (
    InMemorySingleUseLedger,
    LedgerConflictError,
    LedgerError,
    LedgerUnavailableError,
    SingleUseLedger,
    ledger_key,
)
from .token_codec import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenCodec,
    TokenError,
    TokenExpiredError,
)

__all__ = [
    "CredentialVerifier",
    "InMemoryCredentialVerifier",
    "SingleUseLedger",
    "InMemorySingleUseLedger",
    "LedgerError",
    "LedgerConflictError",
    "LedgerUnavailableError",
    "ledger_key",
    "TokenCodec",
    "TokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "MalformedTokenError",
]
