"""Unit tests for logging and observability setup."""

import logging
from unittest.mock import patch

from urlsum.config import ObservabilitySettings, Settings
from urlsum.util.logging import get_logger, setup_logging
from urlsum.util.observability import configure_logfire


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_debug_sets_debug_level(self):
        """Should log everything from urlsum in debug mode."""
        setup_logging(Settings(debug=True))

        assert logging.getLogger("urlsum").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_development_defaults_to_info(self):
        setup_logging(Settings(environment="development", debug=False))

        assert logging.getLogger("urlsum").level == logging.INFO

    def test_get_logger_returns_named_logger(self):
        assert get_logger("urlsum.adapter").name == "urlsum.adapter"


class TestConfigureLogfire:
    """Tests for configure_logfire."""

    def test_console_only_without_token(self):
        """Should not send telemetry when no token is configured."""
        with patch("urlsum.util.observability.logfire.configure") as configure:
            configure_logfire(Settings())

        kwargs = configure.call_args.kwargs
        assert kwargs["send_to_logfire"] is False
        assert kwargs["service_name"] == "urlsum"
        assert "token" not in kwargs

    def test_token_enables_sending(self):
        """Should send telemetry when a token is present."""
        settings = Settings(observability=ObservabilitySettings(logfire_token="tok"))

        with patch("urlsum.util.observability.logfire.configure") as configure:
            configure_logfire(settings)

        kwargs = configure.call_args.kwargs
        assert kwargs["send_to_logfire"] is True
        assert kwargs["token"] == "tok"

    def test_explicit_flag_wins_over_token(self):
        settings = Settings(
            observability=ObservabilitySettings(logfire_token="tok", send_to_logfire=False)
        )

        with patch("urlsum.util.observability.logfire.configure") as configure:
            configure_logfire(settings)

        assert configure.call_args.kwargs["send_to_logfire"] is False
