import tomllib
from pathlib import Path

from nu_formatter import ConfigError, FormatterConfig, validate_config

CONFIG_FILE_NAME = ".nufmt.toml"

DEFAULT_CONFIG = """\
# nufmt configuration
#
# nufmt searches for .nufmt.toml in the current directory and its ancestors.

# Number of spaces per indentation level.
# Valid range: 1-16
indent_width = 2

# Maximum line width before a list, record or block is broken over lines.
# Valid range: 20-500
max_width = 100

# Preferred quote style for strings: "preserve", "double" or "single".
# Quotes are only converted when no escaping is needed.
quote_style = "double"

# Padding inside list and record brackets: "spaced" gives [ 1, 2 ],
# "compact" gives [1, 2].
bracket_spacing = "spaced"

# Trailing comma after the last item of a multiline list or record:
# "always" or "never".
trailing_comma = "always"
"""


def find_config(start: Path | None = None) -> Path | None:
    """Nearest .nufmt.toml in ``start`` or one of its ancestors."""
    directory = (start or Path.cwd()).resolve()
    for candidate in [directory, *directory.parents]:
        path = candidate / CONFIG_FILE_NAME
        if path.is_file():
            return path
    return None


def load_config(path: Path) -> FormatterConfig:
    """Read and validate a config file. Any problem raises ConfigError."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ConfigError(f"{path}: cannot read config: {exc.strerror or exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc

    try:
        return validate_config(data)
    except ConfigError as exc:
        raise ConfigError(f"{path}: {exc.message}", field=exc.field) from exc


def resolve_config(explicit: Path | None = None, start: Path | None = None) -> tuple[FormatterConfig, Path | None]:
    """Config from ``explicit``, else the nearest config file, else defaults."""
    path = explicit or find_config(start)
    if path is None:
        return FormatterConfig(), None
    return load_config(path), path
