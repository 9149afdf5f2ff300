import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from .errors import FormatError
from .layout import LayoutEngine
from .lexer import tokenize
from .models import FormatResult, FormatResults, FormatterConfig
from .preprocess import preprocess

logger = logging.getLogger(__name__)


def format_source(source: str, config: Optional[FormatterConfig] = None) -> str:
    """Format Nushell source text.

    Pure and deterministic. Raises NuSyntaxError when the text cannot be
    tokenized or its delimiters do not match; unknown commands, unresolved
    variables and type errors are not this function's concern.
    """
    config = config or FormatterConfig()
    source = source.replace("\r\n", "\n")
    tokens = tokenize(source)
    stream = preprocess(source, tokens)
    return LayoutEngine(stream, config).render()


class FormatterEngine:
    """Formats strings and batches of files with one configuration."""

    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()

    def format_string(self, source: str, file_path: str = "") -> FormatResult:
        """Format a string, capturing syntax errors instead of raising them."""
        try:
            formatted = format_source(source, self.config)
        except FormatError as exc:
            logger.debug("failed to format %s: %s", file_path or "<string>", exc)
            return FormatResult(source=source, modified=False, errors=[str(exc)], file_path=file_path, original=source)
        return FormatResult(
            source=formatted,
            modified=formatted != source,
            file_path=file_path,
            original=source,
        )

    def format_file(self, file_path: Path, check: bool = False) -> FormatResult:
        """Format one file on disk, writing it back unless ``check`` is set."""
        try:
            source = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return FormatResult(source="", modified=False, errors=[f"failed to read: {exc}"], file_path=str(file_path))

        result = self.format_string(source, str(file_path))
        if result.modified and not check:
            try:
                file_path.write_text(result.source, encoding="utf-8")
            except OSError as exc:
                result.errors.append(f"failed to write: {exc}")
        logger.debug("%s: modified=%s errors=%d", file_path, result.modified, len(result.errors))
        return result

    def format_files(self, files: List[Path], check: bool = False, workers: Optional[int] = None) -> FormatResults:
        """Batch format files in parallel. Results keep the order of ``files``."""
        if len(files) <= 1 or workers == 1:
            results = [self.format_file(path, check) for path in files]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(lambda path: self.format_file(path, check), files))

        error_count = sum(1 for result in results if result.errors)
        modified_count = sum(1 for result in results if result.modified and not result.errors)
        return FormatResults(
            results=results,
            total_files=len(files),
            modified_files=modified_count,
            error_files=error_count,
        )
