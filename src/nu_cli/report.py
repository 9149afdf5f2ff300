import difflib
from enum import Enum

import typer

from nu_formatter import FormatResult, FormatResults


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def unified_diff(original: str, formatted: str, path: str) -> str:
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        formatted.splitlines(keepends=True),
        fromfile=f"{path} (original)",
        tofile=f"{path} (formatted)",
    )
    return "".join(diff)


class Reporter:
    """Prints per-file status lines, diffs and the run summary."""

    def __init__(self, color: ColorMode = ColorMode.AUTO, check: bool = False):
        self.color = {ColorMode.AUTO: None, ColorMode.ALWAYS: True, ColorMode.NEVER: False}[color]
        self.check = check

    def _echo(self, message: str, fg: str | None = None, err: bool = False) -> None:
        typer.secho(message, fg=fg, err=err, color=self.color)

    def error(self, message: str) -> None:
        self._echo(f"error: {message}", fg=typer.colors.RED, err=True)

    def file_result(self, result: FormatResult) -> None:
        if result.errors:
            self._echo(f"✗ {result.file_path}: {result.errors[0]}", fg=typer.colors.RED, err=True)
        elif result.modified and self.check:
            self._echo(f"! {result.file_path} (would reformat)", fg=typer.colors.YELLOW)
            self.diff(result)
        elif result.modified:
            self._echo(f"✓ {result.file_path}", fg=typer.colors.GREEN)

    def diff(self, result: FormatResult) -> None:
        for line in unified_diff(result.original, result.source, result.file_path).splitlines():
            if line.startswith("+") and not line.startswith("+++"):
                self._echo(line, fg=typer.colors.GREEN)
            elif line.startswith("-") and not line.startswith("---"):
                self._echo(line, fg=typer.colors.RED)
            else:
                self._echo(line)

    def summary(self, results: FormatResults) -> None:
        total = results.total_files
        noun = "file" if total == 1 else "files"
        if results.modified_files == 0 and results.error_files == 0:
            self._echo(f"✓ All {total} {noun} already formatted", fg=typer.colors.GREEN)
            return
        changed = "would reformat" if self.check else "formatted"
        self._echo(
            f"{total} {noun}: {results.modified_files} {changed}, "
            f"{results.unchanged_files} unchanged, {results.error_files} failed"
        )
