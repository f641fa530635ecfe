"""Configuration document schema

The configuration document (dotenv.jsonc) is untyped external input. It is
checked here with a pydantic model and turned into an immutable
ConfigurationRecord, or rejected with a human-readable reason.

Document shape:
    {
        // required, loaded in order
        "files": ["~/.config/opencode/.env", ".env.local"],
        // optional, default true
        "load_cwd_env": true,
        // optional, default false
        "logging": {"enabled": false},
        // optional, prepended to every loaded key
        "prefix": "APP_",
    }
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class LoggingSection(BaseModel):
    """The optional "logging" object of the document."""

    model_config = ConfigDict(extra="ignore")

    enabled: bool = Field(
        default=False,
        description="Write diagnostics to the log file (only a literal true enables it)",
    )

    @field_validator("enabled", mode="before")
    @classmethod
    def validate_enabled(cls, v: Any) -> bool:
        return v is True


class ConfigDocument(BaseModel):
    """Validated view of a configuration document."""

    model_config = ConfigDict(extra="ignore")

    files: List[Any] = Field(
        description="Environment files to load, in order; entries are kept raw"
    )
    load_cwd_env: bool = Field(
        default=True,
        description="Also load <cwd>/.env after the listed files (disabled only by a literal false)",
    )
    logging: LoggingSection = Field(default_factory=LoggingSection)
    prefix: Optional[str] = Field(
        default=None,
        description="Prefix prepended to every key when applied to the environment",
    )

    @field_validator("files", mode="before")
    @classmethod
    def validate_files(cls, v: Any) -> List[Any]:
        """Require a JSON array"""
        if not isinstance(v, list):
            raise ValueError("files must be an array")
        return v

    @field_validator("load_cwd_env", mode="before")
    @classmethod
    def validate_load_cwd_env(cls, v: Any) -> bool:
        return v is not False

    @field_validator("logging", mode="before")
    @classmethod
    def validate_logging(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    @field_validator("prefix", mode="before")
    @classmethod
    def validate_prefix(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) and v else None


@dataclass(frozen=True)
class ConfigurationRecord:
    """Immutable result of decoding one configuration document.

    Attributes:
        files: Raw, unexpanded entries in document order
        load_cwd_env: Whether <cwd>/.env is appended to the file list
        logging_enabled: Whether diagnostics go to the log file
        prefix: Optional key prefix applied by the plugin
    """

    files: Tuple[Any, ...] = ()
    load_cwd_env: bool = True
    logging_enabled: bool = False
    prefix: Optional[str] = None

    @classmethod
    def from_document(cls, document: ConfigDocument) -> "ConfigurationRecord":
        return cls(
            files=tuple(document.files),
            load_cwd_env=document.load_cwd_env,
            logging_enabled=document.logging.enabled,
            prefix=document.prefix,
        )


@dataclass(frozen=True)
class DocumentValidation:
    """Tagged result of validate_document: either a record or a reason."""

    record: Optional[ConfigurationRecord] = None
    reason: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.record is not None

    @classmethod
    def ok(cls, record: ConfigurationRecord) -> "DocumentValidation":
        return cls(record=record)

    @classmethod
    def invalid(cls, reason: str) -> "DocumentValidation":
        return cls(reason=reason)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "document"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def validate_document(data: Any) -> DocumentValidation:
    """Check a parsed document and build a ConfigurationRecord from it."""
    if not isinstance(data, dict):
        return DocumentValidation.invalid(
            f"expected an object, got {type(data).__name__}"
        )
    try:
        document = ConfigDocument.model_validate(data)
    except ValidationError as exc:
        return DocumentValidation.invalid(_describe(exc))
    return DocumentValidation.ok(ConfigurationRecord.from_document(document))
