"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

PLACEHOLDER_JWT_SECRET: Final[str] = "CHANGE_ME_JWT"

# Load .env in development (no-op when the file does not exist)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: int
        Value returned when the variable is unset or blank.

    Returns
    -------
    int
        Parsed integer value.

    Raises
    ------
    ValueError
        If the variable is set but is not a valid integer.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Process-wide key used to sign and verify access/refresh tokens. Read
        once at startup into an immutable ``SigningConfig``.
    JWT_ALGORITHM: str
        JWS algorithm for token signatures (``HS256`` by default).
    JWT_LEEWAY_SECONDS: int
        Clock-skew tolerance applied when checking ``exp``.
    JWT_ISSUER: str | None
        Optional ``iss`` claim stamped on and required from every token.
    ACCESS_TOKEN_TTL_SECONDS: int
        Access-token lifetime (15 minutes by default).
    REFRESH_TOKEN_TTL_SECONDS: int
        Refresh-token lifetime (7 days by default). Also the TTL of the
        matching single-use ledger entry.
    REDIS_URL: str | None
        Connection URL of the shared key-value store backing the ledger.
    LEDGER_KEY_PREFIX: str
        Namespace prepended to every ledger key.
    SQLALCHEMY_DATABASE_URI: str
        Credential store connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", PLACEHOLDER_JWT_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_LEEWAY_SECONDS = env_int("JWT_LEEWAY_SECONDS", 0)
    JWT_ISSUER = os.getenv("JWT_ISSUER") or None

    # Token lifetimes
    ACCESS_TOKEN_TTL_SECONDS = env_int("ACCESS_TOKEN_TTL_SECONDS", 15 * 60)
    REFRESH_TOKEN_TTL_SECONDS = env_int("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 60 * 60)

    # Single-use ledger
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    LEDGER_KEY_PREFIX = os.getenv("LEDGER_KEY_PREFIX", "")

    # DB (credential records, read-only for this service)
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    PROXY_HOPS = env_int("PROXY_HOPS", 1)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves ``REDIS_URL`` unset; tests inject a ``fakeredis`` client.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "testing-signing-key-with-enough-bytes-for-hs256"
    REDIS_URL = None
    PROPAGATE_EXCEPTIONS = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled. The application factory refuses to
    start with the placeholder ``JWT_SECRET_KEY``.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
