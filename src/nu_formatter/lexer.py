"""Nushell lexer: turns source text into a flat list of tokens.

Only what the formatter needs is recognized. Strings, comments and
interpolations are opaque tokens, delimiters are matched on a stack, and
record literals get their key colons split out so that ``{a:1}`` can be
re-spaced. Nothing here knows about commands or types.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .diagnostics import Diagnostics
from .errors import NuSyntaxError
from .tokens import CLOSING_CHAR, CLOSE_TO_OPEN, DELIMITER_CHARS, Span, Token, TokenKind

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"
QUOTES = "\"'`"
WORD_TERMINATORS = frozenset(WHITESPACE + QUOTES + "()[]{}|,;")
SPREAD_TARGETS = "$[{("

OPERATORS = frozenset({
    "=", "+=", "-=", "*=", "/=", "++=",
    "+", "-", "*", "/", "//", "**", "++", "mod",
    "==", "!=", "<", "<=", ">", ">=", "=~", "!~", "=>",
    "and", "or", "xor", "not", "in", "not-in", "has", "not-has", "like", "not-like",
    "starts-with", "ends-with",
    "bit-and", "bit-or", "bit-xor", "bit-shl", "bit-shr",
})


class RecordState(Enum):
    KEY = auto()
    COLON_EXPECT = auto()
    VALUE = auto()
    IN_VALUE = auto()


@dataclass
class _Frame:
    char: str
    offset: int
    record: bool = False
    state: RecordState = RecordState.KEY


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _is_path_char(char: str) -> bool:
    return char.isalnum() or char in "_-."


def classify_word(text: str) -> TokenKind:
    if text in OPERATORS:
        return TokenKind.OPERATOR
    if text[0].isdigit() or (len(text) > 1 and text[0] in "+-." and text[1].isdigit()):
        return TokenKind.NUMBER
    return TokenKind.IDENTIFIER


class Lexer:
    """Tokenize one Nushell source text."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Token] = []
        self.frames: List[_Frame] = []
        self.diagnostics = Diagnostics(source)

    def tokenize(self) -> List[Token]:
        while self.pos < len(self.source):
            char = self._peek()
            if char in WHITESPACE:
                self._skip_whitespace()
            elif char == "#":
                self._lex_comment()
            elif char in DELIMITER_CHARS:
                self._lex_delimiter(char)
            elif char == "|":
                self._emit_single(TokenKind.PIPE)
            elif char == ",":
                self._emit_single(TokenKind.COMMA)
                self._reset_record_key()
            elif char == ";":
                self._emit_single(TokenKind.SEMICOLON)
                self._reset_record_key()
            elif char == ":" and self._record_state() == RecordState.COLON_EXPECT:
                self._emit_single(TokenKind.COLON)
                self.frames[-1].state = RecordState.VALUE
            elif char in QUOTES:
                self._lex_string(self.pos)
            elif char == "$" and self._peek(1) in ("\"", "'"):
                self._lex_interpolation()
            elif char == "r" and self._raw_string_hashes() is not None:
                self._lex_raw_string()
            elif char == "$" and _is_name_char(self._peek(1)):
                self._lex_variable()
            elif char == "^" and self._peek(1) and self._peek(1) not in WORD_TERMINATORS:
                self._emit_single(TokenKind.MARKER)
            elif self.source.startswith("...", self.pos) and self._peek(3) and self._peek(3) in SPREAD_TARGETS:
                self._emit(TokenKind.MARKER, self.pos, self.pos + 3)
                if self._record_state() == RecordState.KEY:
                    self.frames[-1].state = RecordState.VALUE
            else:
                self._lex_word()

        if self.frames:
            frame = self.frames[-1]
            raise self._error(
                frame.offset,
                f"unclosed delimiter '{frame.char}'",
                f"add a matching '{CLOSING_CHAR[frame.char]}'",
            )

        end = len(self.source)
        self.tokens.append(Token(TokenKind.EOF, Span(end, end), ""))
        logger.debug("tokenized %d characters into %d tokens", len(self.source), len(self.tokens))
        return self.tokens

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index < len(self.source):
            return self.source[index]
        return ""

    def _emit(self, kind: TokenKind, start: int, end: int) -> Token:
        token = Token(kind, Span(start, end), self.source[start:end])
        self.tokens.append(token)
        self.pos = end
        return token

    def _emit_single(self, kind: TokenKind) -> Token:
        return self._emit(kind, self.pos, self.pos + 1)

    def _error(self, offset: int, message: str, help: Optional[str] = None) -> NuSyntaxError:
        return self.diagnostics.syntax_error(offset, message, help)

    # Record key tracking

    def _record_state(self) -> Optional[RecordState]:
        if self.frames and self.frames[-1].record:
            return self.frames[-1].state
        return None

    def _reset_record_key(self) -> None:
        if self._record_state() is not None:
            self.frames[-1].state = RecordState.KEY

    def _advance_record_state(self) -> None:
        state = self._record_state()
        if state is None:
            return
        frame = self.frames[-1]
        if state == RecordState.KEY:
            frame.state = RecordState.COLON_EXPECT
        elif state in (RecordState.COLON_EXPECT, RecordState.VALUE):
            frame.state = RecordState.IN_VALUE

    def _looks_like_record(self, index: int) -> bool:
        """Decide whether the brace ending just before ``index`` opens a record."""
        source = self.source
        while index < len(source):
            if source[index] in WHITESPACE:
                index += 1
            elif source[index] == "#":
                newline = source.find("\n", index)
                index = len(source) if newline == -1 else newline
            else:
                break
        if index >= len(source):
            return False
        char = source[index]
        if char == "|":
            return False
        if source.startswith("...", index):
            return True
        if char in "\"'":
            close = source.find(char, index + 1)
            if close == -1:
                return False
            index = close + 1
        else:
            start = index
            while index < len(source) and source[index] not in WORD_TERMINATORS and source[index] != ":":
                index += 1
            if index == start:
                return False
        while index < len(source) and source[index] in " \t":
            index += 1
        if index >= len(source) or source[index] != ":":
            return False
        following = source[index + 1:index + 3]
        return not (following.startswith(":") or following == "//")

    # Token scanners

    def _skip_whitespace(self) -> None:
        state = self._record_state()
        while self._peek() and self._peek() in WHITESPACE:
            self.pos += 1
        if state == RecordState.IN_VALUE:
            self.frames[-1].state = RecordState.KEY

    def _lex_comment(self) -> None:
        end = self.source.find("\n", self.pos)
        if end == -1:
            end = len(self.source)
        self._emit(TokenKind.COMMENT, self.pos, end)

    def _lex_delimiter(self, char: str) -> None:
        kind = DELIMITER_CHARS[char]
        if kind.is_open:
            self._advance_record_state()
            self.frames.append(_Frame(char, self.pos, record=char == "{" and self._looks_like_record(self.pos + 1)))
            self._emit_single(kind)
            return

        if not self.frames:
            opener = next(open_ for open_, close in CLOSING_CHAR.items() if close == char)
            raise self._error(
                self.pos,
                f"unexpected closing delimiter '{char}'",
                f"remove it or add a matching '{opener}' before it",
            )
        frame = self.frames[-1]
        expected = CLOSING_CHAR[frame.char]
        if DELIMITER_CHARS[frame.char] != CLOSE_TO_OPEN[kind]:
            opened = self.diagnostics.location(frame.offset)
            raise self._error(
                self.pos,
                f"mismatched closing delimiter: expected '{expected}', found '{char}'",
                f"the '{frame.char}' opened at {opened} is still open",
            )
        self.frames.pop()
        self._emit_single(kind)

    def _scan_quoted(self, start: int, quote: str, escapes: bool) -> int:
        """Return the offset just past the closing quote of a string opening at ``start``."""
        index = start + 1
        source = self.source
        while index < len(source):
            char = source[index]
            if escapes and char == "\\":
                index += 2
                continue
            if char == quote:
                return index + 1
            index += 1
        raise self._error(start, "unterminated string", f"add a closing {quote} to end the string")

    def _lex_string(self, start: int) -> None:
        quote = self.source[start]
        end = self._scan_quoted(start, quote, escapes=quote == "\"")
        self._advance_record_state()
        self._emit(TokenKind.STRING, start, end)

    def _raw_string_hashes(self) -> Optional[int]:
        index = self.pos + 1
        while self._peek(index - self.pos) == "#":
            index += 1
        hashes = index - self.pos - 1
        if hashes and self._peek(index - self.pos) == "'":
            return hashes
        return None

    def _lex_raw_string(self) -> None:
        start = self.pos
        hashes = self._raw_string_hashes()
        terminator = "'" + "#" * hashes
        body_start = start + hashes + 2
        end = self.source.find(terminator, body_start)
        if end == -1:
            raise self._error(start, "unterminated raw string", f"close it with {terminator}")
        self._advance_record_state()
        self._emit(TokenKind.STRING, start, end + len(terminator))

    def _lex_interpolation(self) -> None:
        start = self.pos
        quote = self.source[start + 1]
        index = start + 2
        source = self.source
        while index < len(source):
            char = source[index]
            if quote == "\"" and char == "\\":
                index += 2
            elif char == "(":
                index = self._skip_expression(index, start)
            elif char == quote:
                self._advance_record_state()
                self._emit(TokenKind.STRING, start, index + 1)
                return
            else:
                index += 1
        raise self._error(start, "unterminated string interpolation", f"add a closing {quote} to end the string")

    def _skip_expression(self, index: int, string_start: int) -> int:
        """Skip a parenthesized expression inside an interpolation."""
        depth = 0
        source = self.source
        while index < len(source):
            char = source[index]
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    return index + 1
            elif char in QUOTES:
                index = self._scan_quoted(index, char, escapes=char == "\"")
                continue
            index += 1
        raise self._error(string_start, "unterminated string interpolation", "close the ( expression and the string")

    def _lex_variable(self) -> None:
        self._advance_record_state()
        self._emit_single(TokenKind.MARKER)
        self._lex_path()

    def _lex_path(self) -> None:
        start = self.pos
        index = start
        while index < len(self.source) and _is_path_char(self.source[index]):
            index += 1
        self._emit(TokenKind.IDENTIFIER, start, index)
        # optional access: $x.a?.b
        if self._peek() == "?" and (not self._peek(1) or self._peek(1) in WORD_TERMINATORS or self._peek(1) == "."):
            self._emit_single(TokenKind.MARKER)
            if self._peek() == "." and _is_path_char(self._peek(1)):
                self._lex_path()

    def _lex_word(self) -> None:
        start = self.pos
        index = start
        key_mode = self._record_state() == RecordState.KEY
        source = self.source
        while index < len(source) and source[index] not in WORD_TERMINATORS:
            if key_mode and source[index] == ":" and index > start:
                break
            index += 1
        if index == start:
            index += 1
        self._advance_record_state()
        self._emit(classify_word(source[start:index]), start, index)


def tokenize(source: str) -> List[Token]:
    """Tokenize ``source``, raising NuSyntaxError on unbalanced input."""
    return Lexer(source).tokenize()
