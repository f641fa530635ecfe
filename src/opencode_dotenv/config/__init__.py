"""Configuration Module for opencode-dotenv

Two kinds of configuration live here:
- the configuration document (dotenv.jsonc) naming the files to load,
  discovered by ConfigResolver and validated into a ConfigurationRecord
- the loader's own Settings (where to look, where to log), read from
  OPENCODE_DOTENV_* environment variables

Example:
    from opencode_dotenv.config import ConfigResolver, get_settings

    settings = get_settings()
    resolution = ConfigResolver().resolve(settings.candidate_paths(cwd, home))
"""

from opencode_dotenv.config.document import (
    ConfigDocument,
    ConfigurationRecord,
    DocumentValidation,
    LoggingSection,
    validate_document,
)
from opencode_dotenv.config.resolver import (
    ConfigResolution,
    ConfigResolver,
    resolve_config,
)
from opencode_dotenv.config.settings import (
    DEFAULT_CONFIG_NAME,
    DEFAULT_PREFIX,
    LogSettings,
    Settings,
    get_home_dir,
    get_settings,
    reset_settings,
)

__all__ = [
    # Document schema
    "ConfigDocument",
    "LoggingSection",
    "ConfigurationRecord",
    "DocumentValidation",
    "validate_document",
    # Resolution
    "ConfigResolution",
    "ConfigResolver",
    "resolve_config",
    # Loader settings
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_PREFIX",
    "LogSettings",
    "Settings",
    "get_home_dir",
    "get_settings",
    "reset_settings",
]
