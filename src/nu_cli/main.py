import logging
from pathlib import Path

import typer
from nu_formatter import ConfigError, FormatterEngine, NuSyntaxError, render_token_dump

from .config import CONFIG_FILE_NAME, DEFAULT_CONFIG, resolve_config
from .files import expand_patterns
from .report import ColorMode, Reporter, unified_diff

logger = logging.getLogger(__name__)

app = typer.Typer(help="nufmt - Format Nushell scripts")

EXIT_CHANGES = 1
EXIT_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _dump_tokens(source: str, reporter: Reporter) -> None:
    try:
        typer.echo(render_token_dump(source))
    except NuSyntaxError as exc:
        reporter.error(str(exc))
        raise typer.Exit(code=EXIT_ERROR)


@app.command("format")
def format_command(
    patterns: list[str] = typer.Argument(None, help="Files, directories or glob patterns to format"),
    check: bool = typer.Option(False, "--check", help="Report files that would change without writing them"),
    stdin: bool = typer.Option(False, "--stdin", help="Read source from stdin and write the result to stdout"),
    config_file: Path | None = typer.Option(None, "--config", help="Path to a .nufmt.toml file"),
    color: ColorMode = typer.Option(ColorMode.AUTO, "--color", help="Colorize output"),
    workers: int | None = typer.Option(None, "--workers", min=1, help="Number of files formatted in parallel"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug information to stderr"),
    debug_tokens: bool = typer.Option(False, "--debug-tokens", hidden=True),
):
    """Format Nushell files in place, or check that they are formatted"""
    _configure_logging(verbose)
    reporter = Reporter(color=color, check=check)

    if debug_tokens:
        if stdin:
            _dump_tokens(typer.get_text_stream("stdin").read(), reporter)
            return
        files, _ = expand_patterns(patterns or [])
        for file_path in files:
            try:
                source = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                reporter.error(f"{file_path}: failed to read: {exc}")
                raise typer.Exit(code=EXIT_ERROR)
            typer.echo(f"== {file_path}")
            _dump_tokens(source, reporter)
        return

    try:
        config, config_path = resolve_config(config_file)
    except ConfigError as exc:
        reporter.error(str(exc))
        raise typer.Exit(code=EXIT_ERROR)
    if config_path:
        logger.debug("using config %s", config_path)

    engine = FormatterEngine(config)

    if stdin:
        source = typer.get_text_stream("stdin").read()
        result = engine.format_string(source, "<stdin>")
        if result.errors:
            reporter.error(result.errors[0])
            raise typer.Exit(code=EXIT_ERROR)
        if check:
            if result.modified:
                typer.echo(unified_diff(result.original, result.source, "<stdin>"), nl=False)
                raise typer.Exit(code=EXIT_CHANGES)
            return
        typer.echo(result.source, nl=False)
        return

    if not patterns:
        reporter.error("no input files (pass paths, patterns or --stdin)")
        raise typer.Exit(code=EXIT_ERROR)

    files, unmatched = expand_patterns(patterns)
    for pattern in unmatched:
        reporter.error(f"no files matched '{pattern}'")
    if not files:
        raise typer.Exit(code=EXIT_ERROR)

    results = engine.format_files(files, check=check, workers=workers)
    for result in results.results:
        reporter.file_result(result)
    reporter.summary(results)

    if results.error_files or unmatched:
        raise typer.Exit(code=EXIT_ERROR)
    if check and results.modified_files:
        raise typer.Exit(code=EXIT_CHANGES)


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help=f"Overwrite an existing {CONFIG_FILE_NAME}"),
):
    """Write a default .nufmt.toml to the current directory"""
    path = Path(CONFIG_FILE_NAME)
    if path.exists() and not force:
        typer.echo(f"error: {CONFIG_FILE_NAME} already exists (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)
    try:
        path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as exc:
        typer.echo(f"error: failed to write {CONFIG_FILE_NAME}: {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR)
    typer.echo(f"Created {CONFIG_FILE_NAME}")


if __name__ == "__main__":
    app()
