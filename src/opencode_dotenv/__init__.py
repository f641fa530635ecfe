"""opencode-dotenv - Sandboxed dotenv loading for OpenCode processes.

This package loads .env files listed in a dotenv.jsonc configuration into
the process environment:
- decoder: dotenv grammar (comments, quotes, escapes, export, continuation)
- path_guard: keeps configured paths inside the home directory or cwd
- config: configuration document discovery, validation and loader settings
- loader: ordered, last-wins merging of environment files
- plugin: once-per-process entry point that applies the result
- logger: structured, non-blocking diagnostics
- exceptions: structured error classes
"""

__version__ = "1.0.0"

from opencode_dotenv.config import (
    ConfigResolution,
    ConfigResolver,
    ConfigurationRecord,
    Settings,
    get_settings,
    reset_settings,
)

from opencode_dotenv.decoder import (
    DotenvDecoder,
    decode,
    decode_value,
    is_valid_key,
)

from opencode_dotenv.exceptions import (
    DotenvError,
    EnvFileNotFoundError,
    EnvFileUnreadableError,
    PathRejectedError,
)

from opencode_dotenv.loader import (
    EnvironmentLoader,
    FileLoadOutcome,
    LoadResult,
)

from opencode_dotenv.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)

from opencode_dotenv.path_guard import PathGuard, ResolvedPath

from opencode_dotenv.plugin import (
    DotenvPlugin,
    apply_environment,
    load_dotenv_files,
    reset_plugin,
)

__all__ = [
    "__version__",
    # Decoder
    "DotenvDecoder",
    "decode",
    "decode_value",
    "is_valid_key",
    # Path sandbox
    "PathGuard",
    "ResolvedPath",
    # Config
    "ConfigResolution",
    "ConfigResolver",
    "ConfigurationRecord",
    "Settings",
    "get_settings",
    "reset_settings",
    # Loader
    "EnvironmentLoader",
    "FileLoadOutcome",
    "LoadResult",
    # Plugin
    "DotenvPlugin",
    "apply_environment",
    "load_dotenv_files",
    "reset_plugin",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "DotenvError",
    "PathRejectedError",
    "EnvFileNotFoundError",
    "EnvFileUnreadableError",
]
