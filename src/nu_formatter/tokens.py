from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    PIPE = "pipe"
    BRACE_OPEN = "brace_open"
    BRACE_CLOSE = "brace_close"
    BRACKET_OPEN = "bracket_open"
    BRACKET_CLOSE = "bracket_close"
    PAREN_OPEN = "paren_open"
    PAREN_CLOSE = "paren_close"
    COMMA = "comma"
    COLON = "colon"
    SEMICOLON = "semicolon"
    MARKER = "marker"
    EOF = "eof"

    @property
    def is_open(self) -> bool:
        return self in OPEN_TO_CLOSE

    @property
    def is_close(self) -> bool:
        return self in CLOSE_TO_OPEN


OPEN_TO_CLOSE = {
    TokenKind.BRACE_OPEN: TokenKind.BRACE_CLOSE,
    TokenKind.BRACKET_OPEN: TokenKind.BRACKET_CLOSE,
    TokenKind.PAREN_OPEN: TokenKind.PAREN_CLOSE,
}
CLOSE_TO_OPEN = {close: open_ for open_, close in OPEN_TO_CLOSE.items()}

DELIMITER_CHARS = {
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    "[": TokenKind.BRACKET_OPEN,
    "]": TokenKind.BRACKET_CLOSE,
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
}
CLOSING_CHAR = {"{": "}", "[": "]", "(": ")"}


@dataclass(frozen=True)
class Span:
    """Half-open character range into the normalized source."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    span: Span
    text: str

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end
