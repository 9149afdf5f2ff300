import pytest

from nu_formatter.emitter import Emitter


def test_indent_is_written_lazily():
    out = Emitter(indent_width=2)
    out.indent()
    assert out.column == 2
    assert out.at_line_start
    out.write("ls")
    assert out.column == 4
    out.newline()
    assert out.getvalue() == "  ls\n"


def test_newline_strips_trailing_whitespace():
    out = Emitter()
    out.write("ls   ")
    out.newline()
    out.write("pwd")
    assert out.getvalue() == "ls\npwd\n"


def test_blank_lines_never_double():
    out = Emitter()
    out.write("a")
    out.blank_line()
    out.blank_line()
    out.write("b")
    assert out.getvalue() == "a\n\nb\n"


def test_getvalue_trims_leading_and_trailing_blank_lines():
    out = Emitter()
    out.blank_line()
    out.write("a")
    out.blank_line()
    assert out.getvalue() == "a\n"


def test_column_after_multiline_text():
    out = Emitter()
    out.write('"one\ntwo"')
    assert out.column == 4


def test_dedent_below_zero():
    with pytest.raises(RuntimeError):
        Emitter().dedent()
