"""Tests for logging configuration."""

import io
import logging

from buildstamp.logging import LOGGER_NAME, LogLevel, configure_logging, resolve_level


class TestResolveLevel:
    """Tests for mapping CLI flags to log levels."""

    def test_default_is_info(self) -> None:
        assert resolve_level() == logging.INFO

    def test_verbose_is_debug(self) -> None:
        assert resolve_level(verbosity=1) == LogLevel.VERBOSE
        assert resolve_level(debug=True) == logging.DEBUG

    def test_quiet_wins(self) -> None:
        assert resolve_level(verbosity=2, quiet=True) == logging.WARNING


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_logs_to_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(no_color=True, stream=stream)
        logging.getLogger(f"{LOGGER_NAME}.core.stamp").info("Version 1.0.7")
        assert "Version 1.0.7" in stream.getvalue()

    def test_quiet_hides_info(self) -> None:
        stream = io.StringIO()
        configure_logging(quiet=True, no_color=True, stream=stream)
        logger = logging.getLogger(f"{LOGGER_NAME}.core.stamp")
        logger.info("hidden")
        logger.warning("shown")
        output = stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(stream=io.StringIO())
        configure_logging(stream=io.StringIO())
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 1
        assert logger.propagate is False
