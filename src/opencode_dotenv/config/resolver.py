"""Configuration document discovery.

Candidates are tried in order and the first structurally valid document
wins. There is no merging across candidates. Documents are JSON with
comments and trailing commas, parsed with json5.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import json5

from opencode_dotenv.config.document import ConfigurationRecord, validate_document
from opencode_dotenv.exceptions import ConfigurationError, ResourceNotFoundError


@dataclass(frozen=True)
class ConfigResolution:
    """Outcome of a resolution run.

    Attributes:
        config: The record to load with (defaults when nothing matched)
        source_path: Path of the document used, or None for defaults
        skipped: (path, reason) for every existing candidate that was refused
    """

    config: ConfigurationRecord = field(default_factory=ConfigurationRecord)
    source_path: Optional[str] = None
    skipped: Tuple[Tuple[str, str], ...] = ()


def _read_document(path: str) -> Any:
    """Read and parse one candidate.

    Raises:
        ResourceNotFoundError: the file does not exist
        ConfigurationError: the file cannot be read or parsed
    """
    candidate = Path(path)
    if not candidate.is_file():
        raise ResourceNotFoundError("CONFIG_NOT_FOUND", f"No config at {path}")

    try:
        content = candidate.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError("CONFIG_UNREADABLE", f"Failed to read {path}: {e}") from e

    try:
        return json5.loads(content)
    except ValueError as e:
        raise ConfigurationError("CONFIG_PARSE_ERROR", f"Failed to parse {path}: {e}") from e


class ConfigResolver:
    """Finds the first usable configuration document.

    Example:
        resolution = ConfigResolver().resolve([
            "/work/project/dotenv.jsonc",
            "/home/me/.config/opencode/dotenv.jsonc",
        ])
        resolution.config.files
    """

    def resolve(self, candidate_paths: Iterable[str]) -> ConfigResolution:
        skipped = []

        for path in candidate_paths:
            try:
                data = _read_document(path)
            except ResourceNotFoundError:
                continue
            except ConfigurationError as e:
                skipped.append((path, e.message))
                continue

            validation = validate_document(data)
            if validation.record is None:
                skipped.append((path, f"Invalid config format: {validation.reason}"))
                continue

            return ConfigResolution(
                config=validation.record,
                source_path=path,
                skipped=tuple(skipped),
            )

        return ConfigResolution(skipped=tuple(skipped))


def resolve_config(candidate_paths: Iterable[str]) -> ConfigResolution:
    """Module-level shortcut for ConfigResolver().resolve()."""
    return ConfigResolver().resolve(candidate_paths)
