"""Environment file loading with deterministic precedence.

Files are loaded strictly one at a time, in order:
1) each entry of the configuration's "files" array
2) <cwd>/.env, unless load_cwd_env is false

Later files override earlier ones. A file that is rejected by the path
sandbox, missing or unreadable is recorded as a failed outcome and the run
continues; nothing raised while attempting a file escapes load().
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional

from opencode_dotenv.config.document import ConfigurationRecord
from opencode_dotenv.decoder import DotenvDecoder, EnvironmentMap
from opencode_dotenv.exceptions import (
    DotenvError,
    EnvFileNotFoundError,
    EnvFileUnreadableError,
    PathRejectedError,
)
from opencode_dotenv.path_guard import PathGuard, ResolvedPath


@dataclass(frozen=True)
class FileLoadOutcome:
    """Diagnostic record for one attempted file.

    Attributes:
        source: The entry as listed (raw, unexpanded)
        path: Sandbox-approved absolute path, None when rejected
        variable_count: Number of keys the file contributed
        succeeded: Whether the file was read and decoded
        reason: Error code when the attempt failed
        message: Human-readable failure description
    """

    source: Any
    path: Optional[ResolvedPath]
    variable_count: int = 0
    succeeded: bool = False
    reason: Optional[str] = None
    message: Optional[str] = None


@dataclass
class LoadResult:
    """Merged mapping plus one outcome per attempted file."""

    merged: EnvironmentMap = field(default_factory=dict)
    outcomes: List[FileLoadOutcome] = field(default_factory=list)

    @property
    def files_loaded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def variables_loaded(self) -> int:
        return sum(outcome.variable_count for outcome in self.outcomes if outcome.succeeded)


def build_file_list(config: ConfigurationRecord, cwd: str) -> List[Any]:
    """Ordered list of entries to attempt for a configuration."""
    files = list(config.files)
    if config.load_cwd_env is not False:
        files.append(f"{cwd}/.env")
    return files


def read_env_file(path: str) -> str:
    """Read the full text of an environment file.

    Raises:
        EnvFileNotFoundError: path does not exist
        EnvFileUnreadableError: path exists but cannot be read as text
    """
    if not os.path.exists(path):
        raise EnvFileNotFoundError(path)
    try:
        # newline="" keeps bare \r and \r\n intact for the decoder
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileUnreadableError(path, str(e)) from e


class EnvironmentLoader:
    """Composes PathGuard and DotenvDecoder into one load run."""

    def __init__(self, decoder: Optional[DotenvDecoder] = None) -> None:
        self.decoder = decoder or DotenvDecoder()

    def _load_one(self, guard: PathGuard, source: Any) -> tuple[ResolvedPath, EnvironmentMap]:
        path = guard.resolve(source)
        if path is None:
            raise PathRejectedError(source, details={"home": guard.home_dir, "cwd": guard.cwd})
        return path, self.decoder.decode(read_env_file(path))

    def load(self, config: ConfigurationRecord, home_dir: str, cwd: str) -> LoadResult:
        """Load every configured file and merge the results left to right."""
        guard = PathGuard(home_dir, cwd)
        result = LoadResult()

        for source in build_file_list(config, cwd):
            try:
                path, values = self._load_one(guard, source)
            except DotenvError as e:
                result.outcomes.append(
                    FileLoadOutcome(
                        source=source,
                        path=guard.resolve(source),
                        reason=e.code,
                        message=e.message,
                    )
                )
                continue

            result.merged.update(values)
            result.outcomes.append(
                FileLoadOutcome(
                    source=source,
                    path=path,
                    variable_count=len(values),
                    succeeded=True,
                )
            )

        return result


def load_environment(config: ConfigurationRecord, home_dir: str, cwd: str) -> LoadResult:
    """Module-level shortcut for EnvironmentLoader().load()."""
    return EnvironmentLoader().load(config, home_dir, cwd)


__all__ = [
    "EnvironmentLoader",
    "FileLoadOutcome",
    "LoadResult",
    "build_file_list",
    "load_environment",
    "read_env_file",
]
