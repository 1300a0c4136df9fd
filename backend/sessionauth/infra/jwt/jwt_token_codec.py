# sessionauth/infra/jwt/jwt_token_codec.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import jwt

from sessionauth.services._shared.dto import TokenClaims, TokenKind
from sessionauth.services._shared.ports.token_codec import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenCodec,
    TokenExpiredError,
)

SUPPORTED_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
REQUIRED_CLAIMS = ("sub", "jti", "type", "iat", "exp")


@dataclass(frozen=True, slots=True)
class SigningConfig:
    """
    Process-wide signing material, loaded once at startup.

    :param secret_key: HMAC key shared by signer and verifier.
    :param algorithm: One of ``HS256``/``HS384``/``HS512``.
    :param leeway_seconds: Clock-skew tolerance applied to ``exp``.
    :param issuer: Optional ``iss`` claim stamped and enforced.
    """

    secret_key: str = field(repr=False)
    algorithm: str = "HS256"
    leeway_seconds: int = 0
    issuer: str | None = None

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("JWT secret key must not be empty.")
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported JWT algorithm: {self.algorithm!r}")
        if self.leeway_seconds < 0:
            raise ValueError("JWT leeway must be >= 0.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> SigningConfig:
        """Build from a Flask-style config mapping (``JWT_*`` keys)."""
        return cls(
            secret_key=str(config.get("JWT_SECRET_KEY") or ""),
            algorithm=str(config.get("JWT_ALGORITHM") or "HS256"),
            leeway_seconds=int(config.get("JWT_LEEWAY_SECONDS") or 0),
            issuer=config.get("JWT_ISSUER") or None,
        )


@dataclass(frozen=True, slots=True)
class JWTTokenCodec(TokenCodec):
    """
    PyJWT-backed codec.

    Stateless apart from the immutable :class:`SigningConfig`; safe to share
    between threads.
    """

    signing: SigningConfig

    def sign(self, claims: TokenClaims) -> str:
        payload: dict[str, Any] = {
            "sub": claims.subject_id,
            "jti": claims.jti,
            "type": claims.kind.value,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        if self.signing.issuer:
            payload["iss"] = self.signing.issuer
        return jwt.encode(payload, self.signing.secret_key, algorithm=self.signing.algorithm)

    def verify(self, token: str) -> TokenClaims:
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Empty token.")

        required = [*REQUIRED_CLAIMS, "iss"] if self.signing.issuer else list(REQUIRED_CLAIMS)
        try:
            payload = jwt.decode(
                token,
                self.signing.secret_key,
                algorithms=[self.signing.algorithm],
                leeway=self.signing.leeway_seconds,
                issuer=self.signing.issuer,
                options={"require": required},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError(str(exc)) from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            # DecodeError, missing claims, bad iss/iat, wrong algorithm...
            raise MalformedTokenError(str(exc)) from exc

        return self._to_claims(payload)

    @staticmethod
    def _to_claims(payload: Mapping[str, Any]) -> TokenClaims:
        sub, jti = payload.get("sub"), payload.get("jti")
        if not isinstance(sub, str) or not sub:
            raise MalformedTokenError("Claim 'sub' must be a non-empty string.")
        if not isinstance(jti, str) or not jti:
            raise MalformedTokenError("Claim 'jti' must be a non-empty string.")
        try:
            kind = TokenKind(payload.get("type"))
        except ValueError as exc:
            raise MalformedTokenError("Claim 'type' is not a known token kind.") from exc

        iat, exp = payload.get("iat"), payload.get("exp")
        # bool is an int subclass; reject it explicitly
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (iat, exp)):
            raise MalformedTokenError("Claims 'iat'/'exp' must be integers.")
        if exp <= iat:
            raise MalformedTokenError("Claim 'exp' must be after 'iat'.")

        return TokenClaims(
            subject_id=sub,
            jti=jti,
            kind=kind,
            issued_at=datetime.fromtimestamp(iat, tz=UTC),
            expires_at=datetime.fromtimestamp(exp, tz=UTC),
        )
