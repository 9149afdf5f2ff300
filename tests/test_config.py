import tomllib

import pytest

from nu_cli.config import DEFAULT_CONFIG, find_config, load_config, resolve_config
from nu_formatter import ConfigError, FormatterConfig, validate_config
from nu_formatter.models import BracketSpacing, QuoteStyle, TrailingComma


def test_defaults():
    config = FormatterConfig()
    assert config.indent_width == 2
    assert config.max_width == 100
    assert config.quote_style == QuoteStyle.DOUBLE
    assert config.bracket_spacing == BracketSpacing.SPACED
    assert config.trailing_comma == TrailingComma.ALWAYS


@pytest.mark.parametrize("options, field, message", [
    ({"indent_width": 0}, "indent_width", "indent_width must be between 1 and 16, got 0"),
    ({"indent_width": 17}, "indent_width", "indent_width must be between 1 and 16, got 17"),
    ({"max_width": 19}, "max_width", "max_width must be between 20 and 500, got 19"),
    ({"max_width": 501}, "max_width", "max_width must be between 20 and 500, got 501"),
])
def test_out_of_range_values_are_rejected(options, field, message):
    with pytest.raises(ConfigError) as exc_info:
        FormatterConfig(**options)
    assert exc_info.value.field == field
    assert str(exc_info.value) == message


def test_bounds_are_inclusive():
    config = FormatterConfig(indent_width=16, max_width=500)
    assert (config.indent_width, config.max_width) == (16, 500)
    config = FormatterConfig(indent_width=1, max_width=20)
    assert (config.indent_width, config.max_width) == (1, 20)


def test_invalid_choice():
    with pytest.raises(ConfigError) as exc_info:
        FormatterConfig(quote_style="fancy")
    assert exc_info.value.field == "quote_style"
    assert "must be one of: preserve, double, single" in str(exc_info.value)


def test_non_integer_width_is_rejected():
    with pytest.raises(ConfigError):
        FormatterConfig(indent_width="4")
    with pytest.raises(ConfigError):
        FormatterConfig(indent_width=True)


def test_unknown_key():
    with pytest.raises(ConfigError) as exc_info:
        validate_config({"tab_width": 4})
    assert str(exc_info.value) == "unknown config key 'tab_width'"


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        FormatterConfig(max_width=10)


def test_config_is_frozen():
    config = FormatterConfig()
    with pytest.raises(ValueError):
        config.indent_width = 4


def test_validate_config_from_mapping():
    config = validate_config({"indent_width": 4, "quote_style": "single", "trailing_comma": "never"})
    assert config.indent_width == 4
    assert config.quote_style == QuoteStyle.SINGLE
    assert config.trailing_comma == TrailingComma.NEVER


def test_default_config_file_matches_defaults():
    assert validate_config(tomllib.loads(DEFAULT_CONFIG)) == FormatterConfig()


def test_load_config(tmp_path):
    path = tmp_path / ".nufmt.toml"
    path.write_text('indent_width = 4\nbracket_spacing = "compact"\n')
    config = load_config(path)
    assert config.indent_width == 4
    assert config.bracket_spacing == BracketSpacing.COMPACT


def test_load_config_invalid_value_names_file(tmp_path):
    path = tmp_path / ".nufmt.toml"
    path.write_text("max_width = 5\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(path)
    assert str(path) in str(exc_info.value)
    assert "max_width must be between 20 and 500, got 5" in str(exc_info.value)


def test_load_config_invalid_toml(tmp_path):
    path = tmp_path / ".nufmt.toml"
    path.write_text("indent_width = = 2\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(path)
    assert "invalid TOML" in str(exc_info.value)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.toml")


def test_find_config_searches_ancestors(tmp_path):
    (tmp_path / ".nufmt.toml").write_text("indent_width = 4\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config(nested) == (tmp_path / ".nufmt.toml").resolve()


def test_resolve_config_defaults_without_file(tmp_path):
    config, path = resolve_config(start=tmp_path)
    assert path is None
    assert config == FormatterConfig()


def test_resolve_config_explicit_path(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text("max_width = 80\n")
    config, found = resolve_config(explicit=path)
    assert found == path
    assert config.max_width == 80
