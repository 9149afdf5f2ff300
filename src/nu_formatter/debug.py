from dataclasses import dataclass
from typing import List

from .lexer import tokenize
from .tokens import Span, TokenKind


@dataclass(frozen=True)
class TokenInfo:
    kind: TokenKind
    span: Span
    text: str


def debug_tokens(source: str) -> List[TokenInfo]:
    """Tokens of ``source`` in order, without the end-of-file marker."""
    source = source.replace("\r\n", "\n")
    return [
        TokenInfo(token.kind, token.span, token.text)
        for token in tokenize(source)
        if token.kind != TokenKind.EOF
    ]


def render_token_dump(source: str) -> str:
    """Human-readable listing of tokens and the gaps between them."""
    source = source.replace("\r\n", "\n")
    lines = [f"Source: {source!r} (len={len(source)})", "", "Tokens:"]
    position = 0
    for info in debug_tokens(source):
        gap = source[position:info.span.start]
        if gap:
            lines.append(f"  GAP: {gap!r}")
        lines.append(f"  {info.kind.name}: {info.text!r} ({info.span.start}-{info.span.end})")
        position = info.span.end
    if position < len(source):
        lines.append(f"  TRAILING: {source[position:]!r}")
    return "\n".join(lines)
