"""
Logger interface for opencode-dotenv.

The plugin entry point publishes its load diagnostics (config source,
per-file outcomes, sandbox rejections, summary) through this contract.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Sink for load diagnostics. Keyword arguments become structured fields."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log a progress message (config source, files loaded, summary)."""
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a skipped config candidate, failed file or rejected path."""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        pass

    @abstractmethod
    def get_session_id(self) -> str:
        """Identifier shared by every line of one plugin run."""
        pass

    def close(self) -> None:
        """Flush pending output and release handlers. No-op by default."""
        pass
