"""Token issuance and single-use rotation."""

from __future__ import annotations

from .issuer import TokenIssuer, new_jti
from .rotation import RotationService

__all__ = ["TokenIssuer", "RotationService", "new_jti"]
