from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional

from .errors import NuSyntaxError


@dataclass(frozen=True)
class SourceLocation:
    """1-based line and column of a character offset."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class Diagnostics:
    """Maps offsets of one source text to locations and renders errors."""

    def __init__(self, source: str):
        self.source = source
        self._line_starts: Optional[List[int]] = None

    @property
    def line_starts(self) -> List[int]:
        if self._line_starts is None:
            starts = [0]
            for index, char in enumerate(self.source):
                if char == "\n":
                    starts.append(index + 1)
            self._line_starts = starts
        return self._line_starts

    def location(self, offset: int) -> SourceLocation:
        offset = max(0, min(offset, len(self.source)))
        line_index = bisect_right(self.line_starts, offset) - 1
        return SourceLocation(line=line_index + 1, column=offset - self.line_starts[line_index] + 1)

    def line_text(self, line: int) -> str:
        starts = self.line_starts
        if line < 1 or line > len(starts):
            return ""
        start = starts[line - 1]
        end = self.source.find("\n", start)
        return self.source[start:] if end == -1 else self.source[start:end]

    def syntax_error(self, offset: int, message: str, help: Optional[str] = None) -> NuSyntaxError:
        location = self.location(offset)
        line_text = self.line_text(location.line)
        return NuSyntaxError(
            message,
            offset=offset,
            location=location,
            source_line=line_text,
            help=help,
            rendered=render_diagnostic(message, location, line_text, help),
        )


def render_diagnostic(message: str, location: SourceLocation, line_text: str, help: Optional[str] = None) -> str:
    """Render a diagnostic with a line-number gutter and a caret.

    Tabs before the caret are kept so the caret lines up with the
    offending character however the terminal expands them.
    """
    width = max(3, len(str(location.line)))
    gutter = " " * width
    pad = "".join("\t" if char == "\t" else " " for char in line_text[: location.column - 1])
    lines = [
        f"{location.line}:{location.column}: {message}",
        f"{gutter} |",
        f"{location.line:>{width}} | {line_text}",
        f"{gutter} | {pad}^",
    ]
    if help:
        lines.append(f"{gutter} = help: {help}")
    return "\n".join(lines)
