import pytest

from nu_formatter import FormatterConfig, format_source


@pytest.fixture
def fmt():
    """Format a string with config overrides given as keyword arguments."""
    def _format(source: str, **options) -> str:
        return format_source(source, FormatterConfig(**options))
    return _format
