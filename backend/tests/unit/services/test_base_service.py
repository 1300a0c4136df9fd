"""Unit tests for service-to-API error translation."""

from __future__ import annotations

import pytest

from sessionauth.core import errors as api_errors
from sessionauth.services import BaseService
from sessionauth.services._shared.errors import (
    REAUTHENTICATE_MESSAGE,
    InvalidCredentialError,
    IssuanceConflictError,
    RejectedExpiredError,
    RejectedInvalidError,
    RejectedReplayedError,
    TokenRejectedError,
)
from sessionauth.services._shared.ports import LedgerUnavailableError


@pytest.mark.parametrize(
    "exc",
    [
        RejectedInvalidError("bad signature"),
        RejectedExpiredError("expired"),
        RejectedReplayedError("claim lost"),
        TokenRejectedError("ledger unavailable"),
    ],
)
def test_refresh_rejections_become_uniform_401(exc):
    translated = BaseService.translate_exceptions(exc)

    assert isinstance(translated, api_errors.Unauthorized)
    assert translated.status_code == 401
    assert translated.message == REAUTHENTICATE_MESSAGE


def test_invalid_credentials_become_401():
    translated = BaseService.translate_exceptions(InvalidCredentialError())

    assert isinstance(translated, api_errors.Unauthorized)
    assert translated.message == "Invalid credentials"


def test_ledger_outage_becomes_503():
    translated = BaseService.translate_exceptions(LedgerUnavailableError("down"))
    assert isinstance(translated, api_errors.ServiceUnavailable)
    assert translated.status_code == 503


def test_issuance_conflict_becomes_opaque_500():
    translated = BaseService.translate_exceptions(IssuanceConflictError("deadbeef"))

    assert isinstance(translated, api_errors.InternalError)
    assert "deadbeef" not in translated.message


def test_unrelated_exceptions_pass_through():
    exc = ValueError("boom")
    assert BaseService.translate_exceptions(exc) is exc
