import pytest

from nu_formatter.errors import NuSyntaxError
from nu_formatter.lexer import tokenize
from nu_formatter.tokens import TokenKind as K


def kinds(source):
    return [token.kind for token in tokenize(source)][:-1]


def texts(source):
    return [token.text for token in tokenize(source)][:-1]


def test_pipeline_tokens():
    assert kinds("ls | sort-by name") == [K.IDENTIFIER, K.PIPE, K.IDENTIFIER, K.IDENTIFIER]


def test_eof_token_is_appended():
    tokens = tokenize("ls")
    assert tokens[-1].kind == K.EOF
    assert tokens[-1].span.start == tokens[-1].span.end == 2


def test_spans_match_text():
    source = 'let x = {a: [1 2], b: "c"} # done\nprint $x.a?'
    tokens = tokenize(source)
    for token in tokens:
        assert source[token.span.start:token.span.end] == token.text
    starts = [token.span.start for token in tokens]
    assert starts == sorted(starts)


def test_record_key_colon_is_split():
    assert kinds("{a:1}") == [K.BRACE_OPEN, K.IDENTIFIER, K.COLON, K.NUMBER, K.BRACE_CLOSE]
    assert texts("{a:1,b:2}") == ["{", "a", ":", "1", ",", "b", ":", "2", "}"]


def test_colon_inside_record_value_stays_in_word():
    assert texts("{url: http://example.com}") == ["{", "url", ":", "http://example.com", "}"]


def test_block_is_not_a_record():
    assert texts("{ http://example.com }") == ["{", "http://example.com", "}"]
    assert K.COLON not in kinds("{ print a:b }")


def test_quoted_record_key():
    assert kinds('{"first name": "x"}') == [K.BRACE_OPEN, K.STRING, K.COLON, K.STRING, K.BRACE_CLOSE]


def test_record_after_comment():
    assert K.COLON in kinds("{\n  # note\n  a: 1\n}")


def test_signature_colon_stays_in_word():
    assert texts("def f [x: int] {}") == ["def", "f", "[", "x:", "int", "]", "{", "}"]


def test_strings_are_single_tokens():
    assert texts('print "a \\" b" \'raw\\\' `back tick`') == ["print", '"a \\" b"', "'raw\\'", "`back tick`"]


def test_raw_string():
    assert texts("r#'it's'# x") == ["r#'it's'#", "x"]


def test_interpolation_with_nested_strings():
    source = '$"hi (1 + 2) ($"x")" done'
    assert texts(source) == ['$"hi (1 + 2) ($"x")"', "done"]
    assert kinds(source)[0] == K.STRING


def test_single_quoted_interpolation():
    assert texts("$'(ls | length) files'") == ["$'(ls | length) files'"]


def test_markers():
    assert texts("^git status") == ["^", "git", "status"]
    assert kinds("^git status")[0] == K.MARKER
    assert texts("$env.PATH") == ["$", "env.PATH"]
    assert texts("$x.a?.b") == ["$", "x.a", "?", ".b"]
    assert texts("...$rest") == ["...", "$", "rest"]
    assert kinds("...$rest")[:2] == [K.MARKER, K.MARKER]


def test_spread_without_target_is_a_word():
    assert kinds("def f [...rest] {}")[3] == K.IDENTIFIER


def test_numbers_operators_and_flags():
    assert kinds("1 + -2 --flag 1.5 10kb") == [K.NUMBER, K.OPERATOR, K.NUMBER, K.IDENTIFIER, K.NUMBER, K.NUMBER]
    assert kinds("$a and $b")[2] == K.OPERATOR
    assert kinds("1 => x")[1] == K.OPERATOR


def test_glued_operator_is_one_word():
    assert texts("1+2") == ["1+2"]


def test_comments():
    assert kinds("ls # list") == [K.IDENTIFIER, K.COMMENT]
    assert texts("ls # list  \npwd") == ["ls", "# list  ", "pwd"]
    assert texts("a#b") == ["a#b"]


def test_separators():
    assert kinds("ls; pwd") == [K.IDENTIFIER, K.SEMICOLON, K.IDENTIFIER]
    assert kinds("[1, 2]") == [K.BRACKET_OPEN, K.NUMBER, K.COMMA, K.NUMBER, K.BRACKET_CLOSE]


def test_flag_with_glued_string():
    assert texts('--name="a b"') == ["--name=", '"a b"']


def test_unknown_commands_are_not_errors():
    tokenize("frobnicate $undefined | no-such-command --weird")


def test_unclosed_delimiter():
    with pytest.raises(NuSyntaxError) as exc_info:
        tokenize("let x = [1, 2")
    error = exc_info.value
    assert error.message == "unclosed delimiter '['"
    assert (error.line, error.column) == (1, 9)
    assert error.help == "add a matching ']'"


def test_unexpected_closing_delimiter():
    with pytest.raises(NuSyntaxError) as exc_info:
        tokenize("ls )")
    assert exc_info.value.message == "unexpected closing delimiter ')'"
    assert exc_info.value.column == 4


def test_mismatched_closing_delimiter():
    with pytest.raises(NuSyntaxError) as exc_info:
        tokenize("(ls]")
    assert "mismatched closing delimiter" in exc_info.value.message
    assert exc_info.value.column == 4


def test_unterminated_string():
    with pytest.raises(NuSyntaxError) as exc_info:
        tokenize('print "oops')
    assert exc_info.value.message == "unterminated string"
    assert exc_info.value.column == 7


def test_delimiters_inside_strings_are_ignored():
    assert kinds('print "(" \'[\'') == [K.IDENTIFIER, K.STRING, K.STRING]
