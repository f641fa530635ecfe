"""Base exception classes for opencode-dotenv.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for logging

None of these escape the loader: they are raised while a file is being
attempted and converted into a failed FileLoadOutcome whose reason is the
exception code.
"""

from typing import Any, Dict, Optional


class DotenvError(Exception):
    """Base exception for all opencode-dotenv errors.

    Attributes:
        code: Machine-readable error code (e.g., "PATH_REJECTED")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code (e.g., "FILE_NOT_FOUND")
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(DotenvError):
    """Base for configuration document errors.

    Used when a configuration document cannot be read or has the wrong shape.
    """

    pass


class ResourceNotFoundError(DotenvError):
    """Base for missing file errors."""

    pass


class SecurityError(DotenvError):
    """Base for sandbox violations.

    Used when a configured path resolves outside the allowed roots.
    """

    pass


class PathRejectedError(SecurityError):
    """Raised when PathGuard refuses a configured path."""

    def __init__(self, raw_path: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code="PATH_REJECTED",
            message=f"Rejected path outside allowed directories: {raw_path}",
            details=details,
        )


class EnvFileNotFoundError(ResourceNotFoundError):
    """Raised when an environment file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            code="FILE_NOT_FOUND",
            message=f"File not found: {path}",
            details={"path": path},
        )


class EnvFileUnreadableError(DotenvError):
    """Raised when an environment file exists but its text cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            code="FILE_UNREADABLE",
            message=f"Failed to load {path}: {reason}",
            details={"path": path},
        )
