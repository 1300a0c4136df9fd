"""Configuration selection and the application factory guards."""

from __future__ import annotations

import pytest

from sessionauth.core.config import (
    PLACEHOLDER_JWT_SECRET,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)
from sessionauth.factory import create_app


@pytest.mark.parametrize(
    "value,expected",
    [("production", ProductionConfig), ("testing", TestingConfig), ("unknown", DevelopmentConfig)],
)
def test_get_config_follows_app_env(monkeypatch, value, expected):
    monkeypatch.setenv("APP_ENV", value)
    assert get_config() is expected


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("SOME_FLAG", "Yes")
    monkeypatch.setenv("SOME_INT", " 42 ")
    assert env_bool("SOME_FLAG") is True
    assert env_bool("MISSING_FLAG", default=True) is True
    assert env_int("SOME_INT", 0) == 42
    assert env_int("MISSING_INT", 7) == 7


def test_default_lifetimes():
    assert TestingConfig.ACCESS_TOKEN_TTL_SECONDS == 15 * 60
    assert TestingConfig.REFRESH_TOKEN_TTL_SECONDS == 7 * 24 * 60 * 60


def test_production_refuses_placeholder_signing_key():
    class PlaceholderProduction(ProductionConfig):
        JWT_SECRET_KEY = PLACEHOLDER_JWT_SECRET
        REDIS_URL = None

    with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
        create_app(PlaceholderProduction)
