"""
Tests for the logging module.

Tests verify:
- derive decorators emit structured events
- DEBUG events are suppressed at INFO level
- bound context reaches every event
"""

from __future__ import annotations

import json
from dataclasses import dataclass

import pytest

from dbent import DeriveError, Key, Label, keyed, labeled
from dbent.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    unbind_context,
)
from dbent.settings import DbentSettings


def _events(capsys) -> list[dict]:
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.strip()]


def _by_name(events: list[dict], name: str) -> list[dict]:
    return [event for event in events if event["event"] == name]


class TestDeriveEvents:
    """Test the events the derive decorators log."""

    def test_keyed_and_tagged_events(self, capsys):
        configure_logging(level="DEBUG", json_format=True)

        @labeled
        @keyed
        @dataclass
        class Account:
            id: Key[int]
            name: Label[str]

        events = _events(capsys)
        (keyed_event,) = _by_name(events, "keyed_derived")
        assert keyed_event["field"] == "id"
        assert keyed_event["kind"] == "dataclass"
        assert keyed_event["level"] == "debug"
        assert keyed_event["service.name"] == "dbent"
        assert keyed_event["record"].endswith("Account")

        (labeled_event,) = _by_name(events, "labeled_derived")
        assert labeled_event["field"] == "name"
        assert len(_by_name(events, "tagged_derived")) == 1

    def test_rejection_logged_as_warning(self, capsys):
        configure_logging(level="DEBUG", json_format=True)

        with pytest.raises(DeriveError):
            @keyed
            @dataclass
            class Broken:
                name: str

        (event,) = _by_name(_events(capsys), "derive_rejected")
        assert event["level"] == "warning"
        assert event["decorator"] == "keyed"
        assert event["error_type"] == "DeriveError"
        assert event["category"] == "DERIVE"
        assert event["context"]["field"] == "name"

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", json_format=True)

        @keyed
        @dataclass
        class Quiet:
            id: Key[int]

        assert _by_name(_events(capsys), "keyed_derived") == []


class TestConfiguration:
    """Test configure_logging variants."""

    def test_from_settings(self, capsys, clean_env):
        settings = DbentSettings(
            _env_file=None, log_level="WARNING", log_json=True, service_name="orders"
        )
        configure_logging_from_settings(settings)

        get_logger(__name__).info("hidden")
        get_logger(__name__).warning("shown")

        events = _events(capsys)
        assert [event["event"] for event in events] == ["shown"]
        assert events[0]["service.name"] == "orders"
        assert events[0]["logger_name"] == __name__

    def test_timestamp_optional(self, capsys):
        configure_logging(json_format=True, add_timestamp=False)
        get_logger().info("plain")
        (event,) = _events(capsys)
        assert "timestamp" not in event

    def test_timestamp_default(self, capsys):
        configure_logging(json_format=True)
        get_logger().info("stamped")
        (event,) = _events(capsys)
        assert "timestamp" in event


class TestContext:
    """Test contextvars binding."""

    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_bind_and_unbind(self, capsys):
        configure_logging(json_format=True)
        logger = get_logger(__name__)

        bind_context(request_id="r-1")
        logger.info("first")
        unbind_context("request_id")
        logger.info("second")

        first, second = _events(capsys)
        assert first["request_id"] == "r-1"
        assert "request_id" not in second

    def test_log_context_scoped(self, capsys):
        configure_logging(level="DEBUG", json_format=True)

        with LogContext(import_batch="models"):
            @keyed
            @dataclass
            class Scoped:
                id: Key[int]

        get_logger().info("after")

        events = _events(capsys)
        assert _by_name(events, "keyed_derived")[0]["import_batch"] == "models"
        assert "import_batch" not in _by_name(events, "after")[0]
