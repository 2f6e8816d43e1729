"""
Unit Tests for Centralized Logging.

Tests the logging configuration, handler selection, and source handling.
"""

import json
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import MagicMock, patch

import pytest


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        from npmctl.core.logging import VALID_SOURCES

        assert VALID_SOURCES == frozenset({"cli"})


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_defaults_install_no_output_handlers(self):
        """Console and file are both off in logging.yaml."""
        from npmctl.core.logging import setup_logging

        setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert [type(h) for h in root_logger.handlers] == [logging.NullHandler]

    def test_console_handler_writes_to_stderr(self):
        from npmctl.core.logging import setup_logging

        setup_logging(level="DEBUG", enable_console=True)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        (handler,) = root_logger.handlers
        assert type(handler) is logging.StreamHandler
        assert handler.stream is not None

    def test_log_file_adds_rotating_handler(self, tmp_path):
        from npmctl.core.logging import setup_logging

        log_file = tmp_path / "logs" / "npmctl.jsonl"
        setup_logging(level="INFO", log_file=log_file)

        handler_types = [type(h) for h in logging.getLogger().handlers]
        assert RotatingFileHandler in handler_types
        assert log_file.parent.is_dir()

    def test_file_records_are_json_with_source(self, tmp_path):
        from npmctl.core.logging import get_logger, log_with_source, setup_logging

        log_file = tmp_path / "npmctl.jsonl"
        setup_logging(level="INFO", log_file=log_file)

        log_with_source(get_logger("npmctl.test"), "cli", "info", "Proxy host created", host_id=7)

        (record,) = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert record["event"] == "Proxy host created"
        assert record["source"] == "cli"
        assert record["host_id"] == 7
        assert record["level"] == "info"
        assert record["logger"] == "npmctl.test"

    def test_override_takes_precedence(self):
        from npmctl.core.logging import setup_logging

        setup_logging(level="ERROR")

        assert logging.getLogger().level == logging.ERROR

    def test_http_library_loggers_are_quieted(self):
        from npmctl.core.logging import setup_logging

        setup_logging(level="DEBUG", enable_console=True)

        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_structlog_logger(self):
        from npmctl.core.logging import get_logger

        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_log_with_source_adds_source_field(self):
        from npmctl.core.logging import get_logger, log_with_source

        logger = get_logger("test")
        mock_info = MagicMock()

        with patch.object(logger, "info", mock_info):
            log_with_source(logger, "cli", "info", "Test message", extra_field="value")

            mock_info.assert_called_once_with(
                "Test message",
                source="cli",
                extra_field="value",
            )

    def test_log_with_source_raises_on_invalid_level(self):
        from npmctl.core.logging import get_logger, log_with_source

        logger = get_logger("test")

        with pytest.raises(AttributeError):
            log_with_source(logger, "cli", "nonexistent_level", "Test")

    def test_log_with_source_rejects_unknown_source(self):
        from npmctl.core.logging import get_logger, log_with_source

        logger = get_logger("test")
        mock_info = MagicMock()

        with patch.object(logger, "info", mock_info):
            with pytest.raises(ValueError, match="internal"):
                log_with_source(logger, "internal", "info", "Test")

        mock_info.assert_not_called()
