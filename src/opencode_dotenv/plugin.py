"""Process-startup entry point.

DotenvPlugin ties the pieces together for a host process: it discovers the
configuration document, loads the listed environment files, writes the
merged result into the process environment and publishes diagnostics to
the log. A plugin instance runs at most once until reset().

Usage:
    from opencode_dotenv import load_dotenv_files

    result = load_dotenv_files()
    if result is not None:
        print(result.files_loaded, result.variables_loaded)
"""

import logging
import os
from typing import List, MutableMapping, Optional, Tuple

from opencode_dotenv.config import (
    ConfigResolver,
    Settings,
    get_home_dir,
    get_settings,
    reset_settings,
)
from opencode_dotenv.decoder import EnvironmentMap
from opencode_dotenv.loader import EnvironmentLoader, LoadResult
from opencode_dotenv.logger import Logger, create_logger


def apply_environment(
    merged: EnvironmentMap,
    environ: MutableMapping[str, str],
    prefix: Optional[str] = None,
) -> Tuple[int, List[str]]:
    """Write merged values into environ, overwriting existing keys.

    Entries the environment refuses (os.environ rejects embedded NUL bytes)
    are skipped so that the remaining keys are still applied.

    Returns:
        Number of keys written and the names of the keys refused
    """
    written = 0
    refused: List[str] = []
    for key, value in merged.items():
        name = f"{prefix}{key}" if prefix else key
        try:
            environ[name] = value
        except ValueError:
            refused.append(name)
            continue
        written += 1
    return written, refused


class DotenvPlugin:
    """Loads dotenv files into the environment once per process.

    Args:
        settings: Loader settings (default: get_settings())
        logger: Logger to publish diagnostics to. When omitted, a file
            logger is created per run if the configuration enables logging.
    """

    def __init__(self, settings: Optional[Settings] = None, logger: Optional[Logger] = None):
        self._settings = settings
        self._logger = logger
        self._loaded = False
        self.resolver = ConfigResolver()
        self.loader = EnvironmentLoader()

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def reset(self) -> None:
        """Clear the load guard (primarily for testing)"""
        self._loaded = False

    def _make_logger(self, logging_enabled: bool) -> Logger:
        if self._logger is not None:
            return self._logger
        log = self.settings.log
        # An empty log_file keeps create_logger from falling back to the environment
        return create_logger(
            name="opencode-dotenv",
            level=getattr(logging, log.level, logging.INFO),
            log_file=str(log.file) if logging_enabled and log.file else "",
            json_format=log.json_format,
            console=log.console,
        )

    def run(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        cwd: Optional[str] = None,
        home_dir: Optional[str] = None,
    ) -> Optional[LoadResult]:
        """Load configured files into environ.

        Args:
            environ: Mapping to write into (default: os.environ)
            cwd: Working directory (default: os.getcwd())
            home_dir: Home directory (default: $HOME)

        Returns:
            The load result, or None if this plugin already ran
        """
        if self._loaded:
            return None
        self._loaded = True

        environ = os.environ if environ is None else environ
        cwd = cwd or os.getcwd()
        home_dir = home_dir or get_home_dir()

        resolution = self.resolver.resolve(self.settings.candidate_paths(cwd, home_dir))
        config = resolution.config

        logger = self._make_logger(config.logging_enabled)
        try:
            logger.info("Plugin started")
            for path, reason in resolution.skipped:
                logger.warning(reason, config_path=path)
            logger.info(
                f"Config loaded from {resolution.source_path or 'default'}",
                files=len(config.files),
                load_cwd_env=config.load_cwd_env,
                logging=config.logging_enabled,
            )

            result = self.loader.load(config, home_dir, cwd)
            _, refused = apply_environment(result.merged, environ, config.prefix)
            for name in refused:
                logger.warning(f"Environment refused value for {name}", reason="VALUE_REFUSED")

            for outcome in result.outcomes:
                if outcome.succeeded:
                    logger.info(f"Loaded {outcome.variable_count} vars from {outcome.path}")
                elif outcome.reason == "PATH_REJECTED":
                    logger.warning(f"SECURITY: {outcome.message}", reason=outcome.reason)
                else:
                    logger.warning(outcome.message or "Load failed", reason=outcome.reason)

            logger.info(
                f"Plugin finished: {result.files_loaded} files, {result.variables_loaded} vars"
            )
        finally:
            if logger is not self._logger:
                logger.close()

        return result


_default_plugin = DotenvPlugin()


def load_dotenv_files(
    environ: Optional[MutableMapping[str, str]] = None,
    cwd: Optional[str] = None,
    home_dir: Optional[str] = None,
) -> Optional[LoadResult]:
    """Run the process-wide plugin instance. Returns None on repeat calls."""
    return _default_plugin.run(environ=environ, cwd=cwd, home_dir=home_dir)


def reset_plugin() -> None:
    """Reset the process-wide load guard and cached settings (for testing)"""
    _default_plugin.reset()
    reset_settings()
