"""Formatter for Nushell scripts."""

from .debug import TokenInfo, debug_tokens, render_token_dump
from .diagnostics import Diagnostics, SourceLocation
from .engine import FormatterEngine, format_source
from .errors import ConfigError, FormatError, NuSyntaxError
from .models import (
    BracketSpacing,
    FormatResult,
    FormatResults,
    FormatterConfig,
    QuoteStyle,
    TrailingComma,
    validate_config,
)

__version__ = "0.1.0"

__all__ = [
    "BracketSpacing",
    "ConfigError",
    "Diagnostics",
    "FormatError",
    "FormatResult",
    "FormatResults",
    "FormatterConfig",
    "FormatterEngine",
    "NuSyntaxError",
    "QuoteStyle",
    "SourceLocation",
    "TokenInfo",
    "TrailingComma",
    "debug_tokens",
    "format_source",
    "render_token_dump",
    "validate_config",
]
