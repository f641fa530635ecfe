"""
Structured logger with JSON output and queued file support.

File output goes through a QueueHandler/QueueListener pair: the caller only
enqueues records, and a background thread owned by the listener performs the
writes. A slow or broken log file can therefore never delay environment
loading.
"""

import json
import logging
import queue
import sys
import uuid
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Any, Optional

from .interface import Logger

# LogRecord attributes that are never treated as structured extras
_RESERVED_KEYS = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for logging records.

    One JSON object per line, with structured extras as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        session_id = getattr(record, "session_id", None)
        if session_id:
            log_data["session_id"] = str(session_id)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_KEYS and key != "session_id":
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Text formatter that appends extra kwargs to the message."""

    def format(self, record: logging.LogRecord) -> str:
        s = super().format(record)

        extra_args = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS and key != "session_id"
        }

        if extra_args:
            s += " " + " ".join(f"{k}={v}" for k, v in extra_args.items())

        return s


class StructuredLogger(Logger):
    """Logger implementation with structured output and non-blocking file writes.

    Supports:
    - JSON formatting for log aggregation systems
    - Human-readable text formatting
    - Optional console output (stderr)
    - File output via a background queue listener
    - Session tracking across all log entries

    With neither console nor file configured the logger is silent.

    Example:
        logger = StructuredLogger(
            name="opencode-dotenv",
            log_file="~/.local/share/opencode/dotenv.log",
        )
        logger.info("Loaded file", path="/home/me/.env", count=3)
        logger.close()
    """

    def __init__(
        self,
        name: str = "opencode-dotenv",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        json_format: bool = False,
        console: bool = False,
    ):
        """Initialize the structured logger.

        Args:
            name: Logger name
            level: Logging level (logging.DEBUG, logging.INFO, etc.)
            log_file: Optional file path for log output
            json_format: If True, output logs as JSON; otherwise use text format
            console: If True, also write to stderr
        """
        self._name = name
        self._session_id = str(uuid.uuid4())[:8]
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._listener: Optional[QueueListener] = None

        # Clear existing handlers to avoid duplication if re-initialized
        if self._logger.hasHandlers():
            self._logger.handlers.clear()

        self._logger.propagate = False

        if json_format:
            formatter: logging.Formatter = JsonFormatter()
        else:
            formatter = TextFormatter(
                "[%(asctime)s] [%(levelname)s] [session:%(session_id)s] %(message)s"
            )

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        if log_file:
            try:
                path = Path(log_file).expanduser()
                path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(path, encoding="utf-8")
                file_handler.setFormatter(formatter)
            except OSError as e:
                print(f"Failed to setup log file {log_file}: {e}", file=sys.stderr)
            else:
                records: "queue.SimpleQueue[logging.LogRecord]" = queue.SimpleQueue()
                self._logger.addHandler(QueueHandler(records))
                self._listener = QueueListener(records, file_handler)
                self._listener.start()

        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

    @property
    def name(self) -> str:
        return self._name

    def get_session_id(self) -> str:
        """Get the current session ID."""
        return self._session_id

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        """Internal logging method with extra kwargs handling."""
        extra = {"session_id": self._session_id}

        for k, v in kwargs.items():
            if k not in _RESERVED_KEYS:
                extra[k] = v
            else:
                # Prefix reserved keys to preserve them but avoid collision
                extra[f"_{k}"] = v

        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        self._log(logging.CRITICAL, message, **kwargs)

    def close(self) -> None:
        """Drain queued records, close the file and detach all handlers."""
        if self._listener is not None:
            self._listener.stop()
            for handler in self._listener.handlers:
                handler.close()
            self._listener = None

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
