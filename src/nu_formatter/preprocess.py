from dataclasses import dataclass
from typing import Dict, List, Optional

from .tokens import OPEN_TO_CLOSE, Span, Token, TokenKind


@dataclass
class WorkToken:
    """A lexer token annotated for layout."""
    token: Token
    index: int
    glued: bool = False
    trailing: bool = False

    @property
    def kind(self) -> TokenKind:
        return self.token.kind

    @property
    def text(self) -> str:
        return self.token.text

    @property
    def span(self) -> Span:
        return self.token.span


@dataclass(frozen=True)
class ParamSlice:
    """Token indices of the pipes around a closure's parameter list."""
    open: int
    close: int


class TokenStream:
    """Annotated tokens plus the source they index into."""

    def __init__(self, source: str, tokens: List[WorkToken], params: Dict[int, ParamSlice]):
        self.source = source
        self.tokens = tokens
        self.params = params

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> WorkToken:
        return self.tokens[index]

    def gap(self, index: int) -> str:
        """Whitespace between token ``index - 1`` and token ``index``."""
        end = self.tokens[index].span.start
        start = self.tokens[index - 1].span.end if index > 0 else 0
        return self.source[start:end]

    def find_close(self, open_index: int) -> int:
        """Index of the delimiter matching the one at ``open_index``."""
        kind = self.tokens[open_index].kind
        depth = 0
        for index in range(open_index, len(self.tokens)):
            current = self.tokens[index].kind
            if current == kind:
                depth += 1
            elif current == OPEN_TO_CLOSE[kind]:
                depth -= 1
                if depth == 0:
                    return index
        raise ValueError(f"no closing delimiter for token {open_index}")


def _find_param_close(tokens: List[WorkToken], pipe_index: int) -> Optional[int]:
    depth = 0
    for index in range(pipe_index + 1, len(tokens)):
        kind = tokens[index].kind
        if kind.is_open:
            depth += 1
        elif kind.is_close:
            if depth == 0:
                return None
            depth -= 1
        elif kind == TokenKind.PIPE and depth == 0:
            return index
    return None


def preprocess(source: str, tokens: List[Token]) -> TokenStream:
    """Annotate raw tokens with glue, comment placement and closure params."""
    work = [WorkToken(token, index) for index, token in enumerate(tokens)]
    params: Dict[int, ParamSlice] = {}

    for index, current in enumerate(work):
        if index == 0:
            continue
        previous = work[index - 1]
        gap = source[previous.span.end:current.span.start]
        if not gap and (previous.kind == TokenKind.MARKER or (current.kind == TokenKind.MARKER and current.text == "?")):
            current.glued = True
        if current.kind == TokenKind.COMMENT and "\n" not in gap:
            current.trailing = True
        if (
            previous.kind == TokenKind.BRACE_OPEN
            and current.kind == TokenKind.PIPE
            and "\n" not in gap
        ):
            close = _find_param_close(work, index)
            if close is not None:
                params[index - 1] = ParamSlice(open=index, close=close)

    return TokenStream(source, work, params)
