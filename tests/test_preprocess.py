from nu_formatter.lexer import tokenize
from nu_formatter.preprocess import ParamSlice, preprocess


def stream_for(source):
    return preprocess(source, tokenize(source))


def test_closure_params_are_found():
    stream = stream_for("{|x, y| $x + $y}")
    assert stream.params == {0: ParamSlice(open=1, close=5)}


def test_empty_closure_params():
    stream = stream_for("{|| ls}")
    assert stream.params == {0: ParamSlice(open=1, close=2)}


def test_pipe_on_next_line_is_not_params():
    stream = stream_for("{\n| ls }")
    assert stream.params == {}


def test_glued_after_marker():
    stream = stream_for("^git status")
    assert stream[1].glued
    assert not stream[2].glued


def test_optional_marker_is_glued():
    stream = stream_for("$x.a?")
    assert [token.glued for token in stream.tokens[:3]] == [False, True, True]


def test_trailing_and_leading_comments():
    stream = stream_for("ls # trailing\n# leading\npwd")
    assert stream[1].trailing
    assert not stream[2].trailing


def test_first_comment_is_leading():
    stream = stream_for("# header\nls")
    assert not stream[0].trailing


def test_gap_and_find_close():
    stream = stream_for("a  { b { c } }")
    assert stream.gap(1) == "  "
    assert stream.gap(0) == ""
    assert stream.find_close(1) == 6
    assert stream.find_close(3) == 5
