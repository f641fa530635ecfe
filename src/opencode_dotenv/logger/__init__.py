"""
opencode-dotenv Logger Module

Provides the logging interface used to publish load diagnostics, with
session tracking, optional JSON formatting and non-blocking file output.

Usage:
    from opencode_dotenv.logger import get_logger, create_logger

    logger = create_logger(
        name="opencode-dotenv",
        log_file="~/.local/share/opencode/dotenv.log",
    )
    logger.info("Plugin started")
    logger.close()

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name (e.g., OPENCODE_DOTENV
    for "opencode-dotenv")
"""

import logging
import os
from typing import Optional

from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def _get_env_prefix(name: str) -> str:
    """Convert logger name to environment variable prefix.

    Examples:
        "opencode-dotenv" -> "OPENCODE_DOTENV"
    """
    return name.upper().replace("-", "_")


def create_logger(
    name: str = "opencode-dotenv",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
    console: bool = False,
) -> Logger:
    """Create a new logger instance with the specified configuration.

    Parameters that are not provided are read from {PREFIX}_LOG_LEVEL,
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_JSON, where PREFIX is derived from
    the name.

    Args:
        name: Logger name
        level: Logging level (defaults to INFO or env var)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON
        console: If True, also write to stderr

    Returns:
        A configured Logger instance
    """
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    return StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
        console=console,
    )


def get_logger(name: str = "opencode-dotenv") -> Logger:
    """Get a logger configured from environment variables."""
    return create_logger(name=name)


__all__ = [
    # Interface
    "Logger",
    # Implementations
    "StructuredLogger",
    # Formatters (for custom use)
    "JsonFormatter",
    "TextFormatter",
    # Factory functions
    "create_logger",
    "get_logger",
]
