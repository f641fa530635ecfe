"""Exceptions for opencode-dotenv.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging

Usage:
    from opencode_dotenv.exceptions import (
        DotenvError,
        PathRejectedError,
        EnvFileNotFoundError,
    )
"""

from opencode_dotenv.exceptions.base import (
    ConfigurationError,
    DotenvError,
    EnvFileNotFoundError,
    EnvFileUnreadableError,
    PathRejectedError,
    ResourceNotFoundError,
    SecurityError,
)

__all__ = [
    # Base exceptions
    "DotenvError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "SecurityError",
    # Loader failures
    "PathRejectedError",
    "EnvFileNotFoundError",
    "EnvFileUnreadableError",
]
