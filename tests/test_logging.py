"""Tests for structured logging configuration."""

import json
import logging
from unittest.mock import patch

import pytest

from governance.app.core.logging import (
    JSONFormatter,
    ContextFilter,
    get_logger,
    get_logging_config,
    get_log_context,
    setup_logging,
)


def make_record(msg="Test message", level=logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """dictConfig rewires the governance logger; put it back afterwards."""
    governance_logger = logging.getLogger("governance")
    root = logging.getLogger()
    saved = (
        governance_logger.handlers[:],
        governance_logger.level,
        governance_logger.propagate,
        root.handlers[:],
        root.level,
    )
    yield
    governance_logger.handlers[:] = saved[0]
    governance_logger.setLevel(saved[1])
    governance_logger.propagate = saved[2]
    root.handlers[:] = saved[3]
    root.setLevel(saved[4])


class TestJSONFormatter:
    """Test JSON formatter for structured logging."""

    def test_basic_json_format(self):
        """Test basic JSON formatting."""
        formatter = JSONFormatter()

        data = json.loads(formatter.format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert data["source"]["file"] == "test.py"
        assert data["source"]["line"] == 1

    def test_json_format_with_context(self):
        """Test JSON formatting with governance context fields."""
        formatter = JSONFormatter()
        record = make_record("Rate limit denied")
        record.operation = "auth:signIn"
        record.config_name = "auth:signIn"
        record.retry_after_ms = 800

        data = json.loads(formatter.format(record))

        assert data["operation"] == "auth:signIn"
        assert data["config_name"] == "auth:signIn"
        assert data["retry_after_ms"] == 800
        assert "extra" not in data

    def test_unset_context_fields_omitted(self):
        """Fields defaulted by ContextFilter do not show up as null."""
        formatter = JSONFormatter()
        record = make_record()
        ContextFilter().filter(record)

        data = json.loads(formatter.format(record))

        assert "config_name" not in data
        assert "extra" not in data

    def test_json_format_with_extra_fields(self):
        """Test JSON formatting with extra custom fields."""
        formatter = JSONFormatter()
        record = make_record("Custom event")
        record.custom_field = "custom_value"
        record.another_field = 42

        data = json.loads(formatter.format(record))

        assert data["extra"]["custom_field"] == "custom_value"
        assert data["extra"]["another_field"] == 42

    def test_json_format_with_exception(self):
        """Test JSON formatting with exception info."""
        import sys
        formatter = JSONFormatter()

        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", logging.ERROR, sys.exc_info())

        data = json.loads(formatter.format(record))

        exception_text = "".join(data["exception"])
        assert "ValueError" in exception_text
        assert "Test error" in exception_text


class TestContextFilter:
    """Test context filter for adding default fields."""

    def test_adds_default_fields(self):
        """Test that context filter adds default fields."""
        record = make_record()

        assert ContextFilter().filter(record) is True
        for field in ("operation", "config_name", "rate_limit_key", "retry_after_ms", "field"):
            assert hasattr(record, field)

    def test_preserves_existing_values(self):
        """Test that context filter preserves existing values."""
        record = make_record()
        record.config_name = "data:create"

        ContextFilter().filter(record)

        assert record.config_name == "data:create"


class TestGetLoggingConfig:
    """Test logging configuration generation."""

    def test_default_text_format(self):
        """Test default text format configuration."""
        with patch("governance.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "text"
            mock_settings.log_level = "INFO"

            config = get_logging_config()

        assert "standard" in config["formatters"]
        assert "structured" in config["formatters"]
        assert "json" not in config["formatters"]
        assert config["handlers"]["console"]["formatter"] == "standard"

    def test_structured_format(self):
        """Test structured format configuration."""
        with patch("governance.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "structured"
            mock_settings.log_level = "DEBUG"

            config = get_logging_config()

        assert config["handlers"]["console"]["formatter"] == "structured"
        assert config["handlers"]["console"]["level"] == "DEBUG"

    def test_json_format(self):
        """Test JSON format configuration."""
        with patch("governance.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "json"
            mock_settings.log_level = "WARNING"

            config = get_logging_config()

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["handlers"]["console"]["level"] == "WARNING"

    def test_governance_logger_configured(self):
        config = get_logging_config()

        assert "governance" in config["loggers"]
        assert "context" in config["filters"]
        assert "context" in config["handlers"]["console"]["filters"]


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_default_name(self):
        assert get_logger().name == "governance"

    def test_get_logger_custom_name(self):
        assert get_logger("governance.app.rate_limit").name == "governance.app.rate_limit"


class TestGetLogContext:
    """Test get_log_context helper function."""

    def test_basic_context(self):
        context = get_log_context(operation="auth:signIn", config_name="auth:signIn")

        assert context == {"operation": "auth:signIn", "config_name": "auth:signIn"}

    def test_context_filters_none(self):
        """Test that None values are filtered out."""
        context = get_log_context(config_name="default", retry_after_ms=None)

        assert "retry_after_ms" not in context
        assert "rate_limit_key" not in context

    def test_context_with_extra(self):
        context = get_log_context(operation="data:create", field="name", attempt=2)

        assert context["field"] == "name"
        assert context["attempt"] == 2


class TestIntegration:
    """Integration tests for logging system."""

    def test_json_logging_output(self, capsys):
        """A denial logged by the governor comes out as one JSON line."""
        from governance.app.rate_limit import RateGovernor, RateLimitConfig

        with patch("governance.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "json"
            mock_settings.log_level = "INFO"

            setup_logging()

        governor = RateGovernor(
            configs={"tiny": RateLimitConfig(max_requests=1, window_ms=60_000)},
            clock=lambda: 1_000_000,
        )
        governor.check("k", "tiny")
        governor.check("k", "tiny")

        output = capsys.readouterr().out
        data = json.loads(output.strip().splitlines()[-1])

        assert data["level"] == "INFO"
        assert data["logger"] == "governance.app.rate_limit.governor"
        assert data["message"] == "Rate limit denied"
        assert data["config_name"] == "tiny"
        assert data["retry_after_ms"] == 60_000
