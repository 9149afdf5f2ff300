from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError


class QuoteStyle(str, Enum):
    PRESERVE = "preserve"
    DOUBLE = "double"
    SINGLE = "single"


class BracketSpacing(str, Enum):
    SPACED = "spaced"
    COMPACT = "compact"


class TrailingComma(str, Enum):
    ALWAYS = "always"
    NEVER = "never"


INDENT_WIDTH_RANGE = (1, 16)
MAX_WIDTH_RANGE = (20, 500)

_CONSTRAINTS = {
    "indent_width": "must be between {} and {}".format(*INDENT_WIDTH_RANGE),
    "max_width": "must be between {} and {}".format(*MAX_WIDTH_RANGE),
    "quote_style": "must be one of: " + ", ".join(style.value for style in QuoteStyle),
    "bracket_spacing": "must be one of: " + ", ".join(style.value for style in BracketSpacing),
    "trailing_comma": "must be one of: " + ", ".join(style.value for style in TrailingComma),
}


class FormatterConfig(BaseModel):
    """Formatting options. Immutable once built; invalid values raise ConfigError."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    indent_width: int = Field(2, ge=INDENT_WIDTH_RANGE[0], le=INDENT_WIDTH_RANGE[1], strict=True)
    max_width: int = Field(100, ge=MAX_WIDTH_RANGE[0], le=MAX_WIDTH_RANGE[1], strict=True)
    quote_style: QuoteStyle = QuoteStyle.DOUBLE
    bracket_spacing: BracketSpacing = BracketSpacing.SPACED
    trailing_comma: TrailingComma = TrailingComma.ALWAYS

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _config_error(exc) from exc


def _config_error(exc: ValidationError) -> ConfigError:
    error = exc.errors()[0]
    field_name = str(error["loc"][0]) if error["loc"] else ""
    if error["type"] == "extra_forbidden":
        return ConfigError(f"unknown config key '{field_name}'", field=field_name)
    if field_name in _CONSTRAINTS:
        return ConfigError(f"{field_name} {_CONSTRAINTS[field_name]}, got {error.get('input')!r}", field=field_name)
    return ConfigError(f"{field_name}: {error['msg']}", field=field_name)


def validate_config(data: Mapping[str, Any]) -> FormatterConfig:
    """Build a FormatterConfig from a plain mapping such as a parsed TOML table."""
    return FormatterConfig(**dict(data))


@dataclass
class FormatResult:
    source: str
    modified: bool
    errors: List[str] = field(default_factory=list)
    file_path: str = ""
    original: str = ""


@dataclass
class FormatResults:
    results: List[FormatResult]
    total_files: int
    modified_files: int
    error_files: int

    @property
    def unchanged_files(self) -> int:
        return self.total_files - self.modified_files - self.error_files
