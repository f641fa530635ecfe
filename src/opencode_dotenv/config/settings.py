"""Dataclass-based Settings for the loader itself

These settings control where configuration documents are looked up and
where diagnostics are written. They are read from the process environment
with a parameterized prefix, independently of the dotenv files being loaded.

Design principles:
- Environment variable overrides with sensible defaults
- Type-safe settings
- Local project configuration is looked up before the global one
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_PREFIX = "OPENCODE_DOTENV"
DEFAULT_CONFIG_NAME = "dotenv.jsonc"


def get_home_dir() -> str:
    """Home directory from $HOME, falling back to the password database."""
    return os.environ.get("HOME") or str(Path.home())


def _env_flag(name: str, default: bool) -> bool:
    return os.environ.get(name, "true" if default else "false").lower() == "true"


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (console or json)
        file: Log file path
        console: Whether to also log to stderr
    """

    level: str = "INFO"
    format: str = "console"
    file: Optional[Path] = None
    console: bool = False

    def __post_init__(self):
        if isinstance(self.file, str):
            self.file = Path(self.file)
        self.level = self.level.upper()
        self.format = self.format.lower()

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_PREFIX, home_dir: Optional[str] = None) -> "LogSettings":
        """Load logging settings from environment variables

        Environment variables:
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_FORMAT: Log format
            {prefix}_LOG_FILE: Log file (default ~/.local/share/opencode/dotenv.log)
            {prefix}_LOG_CONSOLE: "true" to mirror logs on stderr
        """
        home = home_dir or get_home_dir()
        log_file = os.environ.get(f"{prefix}_LOG_FILE")
        return cls(
            level=os.environ.get(f"{prefix}_LOG_LEVEL", "INFO"),
            format=os.environ.get(f"{prefix}_LOG_FORMAT", "console"),
            file=Path(log_file) if log_file else Path(home) / ".local" / "share" / "opencode" / "dotenv.log",
            console=_env_flag(f"{prefix}_LOG_CONSOLE", False),
        )

    @property
    def json_format(self) -> bool:
        return self.format == "json"


@dataclass
class Settings:
    """Complete loader settings

    Attributes:
        config_name: File name of the configuration document
        global_config_dir: Directory holding the user-wide configuration
        log: Logging settings
        prefix: Environment variable prefix used
    """

    config_name: str = DEFAULT_CONFIG_NAME
    global_config_dir: Optional[Path] = None
    log: LogSettings = field(default_factory=LogSettings)
    prefix: str = DEFAULT_PREFIX

    def __post_init__(self):
        if isinstance(self.global_config_dir, str):
            self.global_config_dir = Path(self.global_config_dir)

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_PREFIX, home_dir: Optional[str] = None) -> "Settings":
        """
        Load complete settings from environment variables

        Environment variables:
            {prefix}_CONFIG_NAME: Configuration file name (default: dotenv.jsonc)
            {prefix}_CONFIG_DIR: Global config directory (default: ~/.config/opencode)
            {prefix}_LOG_*: See LogSettings.from_env
        """
        home = home_dir or get_home_dir()
        config_dir = os.environ.get(f"{prefix}_CONFIG_DIR")
        return cls(
            config_name=os.environ.get(f"{prefix}_CONFIG_NAME", DEFAULT_CONFIG_NAME),
            global_config_dir=Path(config_dir) if config_dir else Path(home) / ".config" / "opencode",
            log=LogSettings.from_env(prefix, home_dir=home),
            prefix=prefix,
        )

    def candidate_paths(self, cwd: str, home_dir: str) -> List[str]:
        """Configuration documents to try, in order: project first, then global."""
        global_dir = self.global_config_dir or Path(home_dir) / ".config" / "opencode"
        return [
            str(Path(cwd) / self.config_name),
            str(global_dir / self.config_name),
        ]


# Global settings storage per prefix
_global_settings: dict[str, Settings] = {}


def get_settings(prefix: str = DEFAULT_PREFIX, reload: bool = False) -> Settings:
    """
    Get or create settings instance for a given prefix

    Args:
        prefix: Environment variable prefix
        reload: If True, reload settings from environment

    Returns:
        Settings instance for the given prefix
    """
    global _global_settings

    if prefix not in _global_settings or reload:
        _global_settings[prefix] = Settings.from_env(prefix=prefix)

    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Reset settings (primarily for testing)

    Args:
        prefix: Specific prefix to reset, or None to reset all
    """
    global _global_settings
    if prefix:
        _global_settings.pop(prefix, None)
    else:
        _global_settings.clear()
