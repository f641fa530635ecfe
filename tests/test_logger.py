"""Tests for opencode_dotenv.logger module."""

import json
import logging
import os
from pathlib import Path
from unittest import mock

import pytest

from opencode_dotenv.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)
from opencode_dotenv.logger import _get_env_prefix


class TestLoggerInterface:
    """Tests for the Logger abstract interface."""

    def test_logger_is_abstract(self):
        """Test that Logger cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Logger()  # type: ignore

    def test_logger_has_required_methods(self):
        """Test that Logger defines all required methods."""
        for method in ("debug", "info", "warning", "error", "critical", "get_session_id", "close"):
            assert hasattr(Logger, method)


class TestStructuredLogger:
    """Tests for the StructuredLogger implementation."""

    def test_creates_session_id(self):
        """Test that StructuredLogger creates a short session ID."""
        logger = StructuredLogger(name="test-structured")
        assert len(logger.get_session_id()) == 8

    def test_silent_by_default(self, capsys):
        """Test that nothing is written without console or file."""
        logger = StructuredLogger(name="test-silent")
        logger.warning("Nobody hears this")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_console_text_format(self, capsys):
        """Test text output on stderr."""
        logger = StructuredLogger(name="test-text", console=True)
        logger.info("Test message", key="value")

        captured = capsys.readouterr()
        assert "[INFO]" in captured.err
        assert "Test message" in captured.err
        assert "key=value" in captured.err
        assert f"session:{logger.get_session_id()}" in captured.err

    def test_console_json_format(self, capsys):
        """Test JSON output with extras."""
        logger = StructuredLogger(name="test-json", json_format=True, console=True)
        logger.info("Test message", path="/home/me/.env", count=3)

        log_entry = json.loads(capsys.readouterr().err.strip())
        assert log_entry["level"] == "INFO"
        assert log_entry["message"] == "Test message"
        assert log_entry["logger"] == "test-json"
        assert log_entry["session_id"] == logger.get_session_id()
        assert log_entry["path"] == "/home/me/.env"
        assert log_entry["count"] == 3

    def test_reserved_kwargs_prefixed(self, capsys):
        """Test that reserved kwargs are prefixed to avoid conflicts."""
        logger = StructuredLogger(name="test-reserved", json_format=True, console=True)
        logger.info("Test", name="should be prefixed")

        log_entry = json.loads(capsys.readouterr().err.strip())
        assert log_entry["_name"] == "should be prefixed"

    def test_level_filtering(self, capsys):
        """Test that records below the level are dropped."""
        logger = StructuredLogger(name="test-level", level=logging.WARNING, console=True)
        logger.info("Should not appear")
        logger.error("Should appear")

        err = capsys.readouterr().err
        assert "Should not appear" not in err
        assert "Should appear" in err

    def test_all_levels(self, capsys):
        """Test that all log levels work."""
        logger = StructuredLogger(name="test-levels", level=logging.DEBUG, console=True)
        logger.debug("d")
        logger.info("i")
        logger.warning("w")
        logger.error("e")
        logger.critical("c")

        err = capsys.readouterr().err
        for level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            assert level in err

    def test_file_output_after_close(self, tmp_path: Path):
        """Test queued records reach the file once the logger is closed."""
        log_file = tmp_path / "nested" / "dir" / "dotenv.log"
        logger = StructuredLogger(name="test-file", log_file=str(log_file))
        logger.info("File test message", count=2)
        logger.close()

        content = log_file.read_text()
        assert "File test message" in content
        assert "count=2" in content

    def test_file_output_json(self, tmp_path: Path):
        """Test JSON lines in the log file."""
        log_file = tmp_path / "dotenv.log"
        logger = StructuredLogger(name="test-file-json", log_file=str(log_file), json_format=True)
        logger.info("one")
        logger.info("two")
        logger.close()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert [entry["message"] for entry in lines] == ["one", "two"]

    def test_unwritable_log_file_does_not_raise(self, tmp_path: Path, capsys):
        """Test a broken log path falls back to silence."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        logger = StructuredLogger(name="test-broken", log_file=str(blocker / "dotenv.log"))
        logger.info("still fine")
        logger.close()

        assert "Failed to setup log file" in capsys.readouterr().err

    def test_close_detaches_handlers(self, tmp_path: Path):
        """Test close() leaves the underlying logger without handlers."""
        logger = StructuredLogger(name="test-close", log_file=str(tmp_path / "x.log"), console=True)
        logger.close()
        assert logging.getLogger("test-close").handlers == []

    def test_reinit_does_not_duplicate_handlers(self, capsys):
        """Test re-creating a logger with the same name replaces handlers."""
        StructuredLogger(name="test-dup", console=True)
        logger = StructuredLogger(name="test-dup", console=True)
        logger.info("once")
        assert capsys.readouterr().err.count("once") == 1


class TestLoggerFactoryFunctions:
    """Tests for create_logger and get_logger factory functions."""

    def test_create_logger_returns_logger(self):
        """Test that create_logger returns a Logger instance."""
        assert isinstance(create_logger(name="test-factory"), Logger)

    def test_create_logger_reads_env_file(self, tmp_path: Path):
        """Test {PREFIX}_LOG_FILE is used when log_file is not given."""
        log_file = tmp_path / "env.log"
        with mock.patch.dict(os.environ, {"TEST_ENV_FILE_LOG_FILE": str(log_file)}):
            logger = create_logger(name="test-env-file")
        logger.info("from env")
        logger.close()
        assert "from env" in log_file.read_text()

    def test_empty_log_file_disables_env_fallback(self, tmp_path: Path):
        """Test an explicit empty log_file means no file output."""
        log_file = tmp_path / "env.log"
        with mock.patch.dict(os.environ, {"TEST_NO_FILE_LOG_FILE": str(log_file)}):
            logger = create_logger(name="test-no-file", log_file="")
        logger.info("nowhere")
        logger.close()
        assert not log_file.exists()

    def test_get_logger_reads_env_level_and_json(self, capsys):
        """Test that get_logger reads level and format from environment."""
        with mock.patch.dict(os.environ, {
            "TEST_ENV_LOGGER_LOG_LEVEL": "ERROR",
            "TEST_ENV_LOGGER_LOG_JSON": "true",
        }):
            logger = create_logger(name="test-env-logger", console=True)
        logger.warning("hidden")
        logger.error("shown")

        err = capsys.readouterr().err.strip()
        assert "hidden" not in err
        assert json.loads(err)["message"] == "shown"

    def test_get_logger_default_name(self):
        """Test get_logger with defaults."""
        assert isinstance(get_logger(), StructuredLogger)

    def test_env_prefix_conversion(self):
        """Test logger name to env prefix conversion."""
        assert _get_env_prefix("opencode-dotenv") == "OPENCODE_DOTENV"
        assert _get_env_prefix("my-app-x") == "MY_APP_X"
