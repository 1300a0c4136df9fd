"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from sessionauth.core.logger import JSONFormatter, configure_logging, short_id


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("INFO")


def test_json_formatter_copies_token_extras() -> None:
    record = logging.LogRecord("sessionauth", logging.INFO, __file__, 1, "token.issued", None, None)
    record.subject_id = "42"
    record.jti = "0123abcd"
    record.request_id = None

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "token.issued"
    assert payload["subject_id"] == "42"
    assert payload["jti"] == "0123abcd"
    assert "state" not in payload


def test_short_id_truncates() -> None:
    assert short_id("0123456789abcdef") == "01234567"
    assert short_id(None) is None


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


def test_request_id_is_scoped_to_each_request(client) -> None:
    first = client.get("/api/v1/health", headers={"X-Request-ID": "first"})
    second = client.get("/api/v1/health", headers={"X-Request-ID": "second"})

    assert (first.headers["X-Request-ID"], second.headers["X-Request-ID"]) == ("first", "second")


def test_generated_request_ids_differ_between_requests(client) -> None:
    first = client.get("/api/v1/health")
    second = client.get("/api/v1/health")

    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


def test_problem_body_carries_the_request_id(client) -> None:
    resp = client.get("/api/v1/nope", headers={"X-Correlation-ID": "corr-9"})

    assert resp.get_json()["request_id"] == "corr-9"
    assert resp.headers["X-Request-ID"] == "corr-9"
