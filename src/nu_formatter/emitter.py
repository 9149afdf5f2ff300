from typing import List


class Emitter:
    """Output buffer that tracks indentation and the current column.

    Indentation is written lazily when the first text of a line arrives,
    so empty lines never carry indent and ``column`` already counts it.
    """

    def __init__(self, indent_width: int = 2):
        self.indent_width = indent_width
        self.indent_level = 0
        self._lines: List[str] = []
        self._line = ""
        self._started = False

    @property
    def column(self) -> int:
        if not self._started:
            return self.indent_level * self.indent_width
        newline = self._line.rfind("\n")
        return len(self._line) - newline - 1

    @property
    def at_line_start(self) -> bool:
        return not self._started

    def indent(self) -> None:
        self.indent_level += 1

    def dedent(self) -> None:
        if self.indent_level == 0:
            raise RuntimeError("dedent below zero indentation")
        self.indent_level -= 1

    def write(self, text: str) -> None:
        if not text:
            return
        if not self._started:
            self._line = " " * (self.indent_level * self.indent_width)
            self._started = True
        self._line += text

    def newline(self) -> None:
        """End the current line. Does nothing on an empty line."""
        if not self._started:
            return
        self._lines.append(self._line.rstrip(" \t"))
        self._line = ""
        self._started = False

    def blank_line(self) -> None:
        """End the current line and add one blank line, never two in a row."""
        self.newline()
        if self._lines and self._lines[-1] != "":
            self._lines.append("")

    def getvalue(self) -> str:
        self.newline()
        lines = self._lines
        start, end = 0, len(lines)
        while start < end and lines[start] == "":
            start += 1
        while end > start and lines[end - 1] == "":
            end -= 1
        return "\n".join(lines[start:end]) + "\n"
