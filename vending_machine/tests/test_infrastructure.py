"""
Tests for settings, logging and formatting helpers.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from vending_machine.core.value_objects import TillReport
from vending_machine.formatting import (
    format_amount,
    format_breakdown,
    format_denomination,
    format_till_report,
)
from vending_machine.infrastructure.settings import (
    MachineSettings,
    Settings,
    get_settings,
    reset_settings,
)
from vending_machine.loggers import LokiHandler, get_logger, send_to_loki


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_defaults(self):
        """Test default settings values."""
        settings = Settings.from_env({})
        assert settings.machine.denominations[0] == 500000
        assert settings.machine.denominations[-1] == 100
        assert settings.machine.currency == "RUB"
        assert settings.machine.admin_password == "admin123"
        assert settings.logging.level == logging.INFO
        assert settings.logging.log_file is None
        assert settings.logging.loki_url is None

    def test_settings_from_env(self):
        """Test environment overrides."""
        settings = Settings.from_env(
            {
                "VENDING_DENOMINATIONS": "100, 25, 10,5",
                "VENDING_CURRENCY": "USD",
                "VENDING_ADMIN_PASSWORD": "s3cret",
                "VENDING_LOG_LEVEL": "debug",
                "VENDING_LOG_FILE": "/tmp/vending.log",
                "VENDING_LOKI_URL": "http://loki:3100/loki/api/v1/push",
            }
        )
        assert settings.machine.denominations == (100, 25, 10, 5)
        assert settings.machine.currency == "USD"
        assert settings.machine.admin_password == "s3cret"
        assert settings.logging.level == logging.DEBUG
        assert settings.logging.log_file == "/tmp/vending.log"
        assert settings.logging.loki_url == "http://loki:3100/loki/api/v1/push"

    def test_blank_values_ignored(self):
        """Test blank variables fall back to defaults."""
        settings = Settings.from_env({"VENDING_CURRENCY": "  "})
        assert settings.machine.currency == "RUB"

    def test_bad_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValueError):
            Settings.from_env({"VENDING_LOG_LEVEL": "chatty"})

    def test_singleton(self):
        """Test get_settings caches until reset."""
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first


# =============================================================================
# Formatting Tests
# =============================================================================


class TestFormatting:
    """Tests for display helpers."""

    settings = MachineSettings()

    @pytest.mark.parametrize(
        "units,expected",
        [(4500, "45.00 RUB"), (0, "0.00 RUB"), (5, "0.05 RUB"), (123456, "1234.56 RUB")],
    )
    def test_format_amount(self, units, expected):
        """Test amounts are formatted with integer arithmetic."""
        assert format_amount(units, self.settings) == expected

    @pytest.mark.parametrize(
        "units,expected",
        [(500000, "5000 RUB"), (100, "1 RUB"), (50, "50 kop."), (150, "1.50 RUB")],
    )
    def test_format_denomination(self, units, expected):
        """Test denominations."""
        assert format_denomination(units, self.settings) == expected

    def test_format_breakdown(self):
        """Test breakdown lines are ordered largest first."""
        lines = format_breakdown({100: 2, 5000: 1}, self.settings)
        assert lines == ["50 RUB x 1", "1 RUB x 2"]

    def test_format_till_report(self):
        """Test the admin till view."""
        text = format_till_report(TillReport(counts=((1000, 2), (100, 0)), collected=4500), self.settings)
        assert "Collected funds: 45.00 RUB" in text
        assert "Cash in till: 20.00 RUB" in text
        assert "  1 RUB x 0" in text


# =============================================================================
# Logging Tests
# =============================================================================


class TestLogging:
    """Tests for the logger factory and Loki handler."""

    def test_console_only_by_default(self):
        """Test no file or Loki handler without configuration."""
        log = get_logger("test_console_only", level=logging.DEBUG)
        assert len(log.handlers) == 1
        assert log.level == logging.DEBUG

    def test_handlers_added_once(self):
        """Test repeated calls do not duplicate handlers."""
        first = get_logger("test_handlers_once")
        second = get_logger("test_handlers_once")
        assert first is second
        assert len(second.handlers) == 1

    def test_file_and_loki_handlers(self, tmp_path):
        """Test optional handlers are attached when configured."""
        log_file = tmp_path / "logs" / "vending.log"
        log = get_logger(
            "test_all_handlers",
            log_file=str(log_file),
            loki_url="http://loki.invalid/push",
        )
        kinds = {type(handler).__name__ for handler in log.handlers}
        assert kinds == {"StreamHandler", "RotatingFileHandler", "LokiHandler"}
        assert log_file.parent.exists()
        for handler in log.handlers:
            handler.close()

    def test_send_to_loki_payload(self):
        """Test the Loki push payload."""
        client = MagicMock()
        with patch("vending_machine.loggers.httpx.Client") as client_cls:
            client_cls.return_value.__enter__.return_value = client
            send_to_loki("http://loki/push", "INFO", "hello", "vending_machine")

        url = client.post.call_args.args[0]
        payload = client.post.call_args.kwargs["json"]
        assert url == "http://loki/push"
        stream = payload["streams"][0]
        assert stream["stream"] == {"level": "INFO", "app": "vending_machine"}
        assert stream["values"][0][1] == "hello"

    def test_loki_handler_errors_are_handled(self):
        """Test delivery failures go through handleError instead of raising."""
        handler = LokiHandler("http://loki/push", "vending_machine")
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        with patch("vending_machine.loggers.send_to_loki", side_effect=RuntimeError("down")), \
                patch.object(handler, "handleError") as handle_error:
            handler.emit(record)
        handle_error.assert_called_once_with(record)
