from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .diagnostics import SourceLocation


class FormatError(Exception):
    """Base class for failures raised while formatting a single source."""


class NuSyntaxError(FormatError):
    """The source could not be tokenized or its delimiters do not match.

    ``str(error)`` is the rendered diagnostic with a caret under the
    offending column; the individual parts are kept as attributes.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        location: Optional["SourceLocation"] = None,
        source_line: str = "",
        help: Optional[str] = None,
        rendered: Optional[str] = None,
    ):
        self.message = message
        self.offset = offset
        self.location = location
        self.source_line = source_line
        self.help = help
        super().__init__(rendered or message)

    @property
    def line(self) -> int:
        return self.location.line if self.location else 0

    @property
    def column(self) -> int:
        return self.location.column if self.location else 0


class ConfigError(ValueError):
    """A configuration value is unknown or outside its valid range."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)
