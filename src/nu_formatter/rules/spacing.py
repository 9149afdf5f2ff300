from ..preprocess import WorkToken
from ..tokens import TokenKind
from .base import FormattingRule

NO_SPACE_BEFORE = (TokenKind.COMMA, TokenKind.SEMICOLON, TokenKind.COLON)
ONE_SPACE_AFTER = (TokenKind.COMMA, TokenKind.SEMICOLON, TokenKind.COLON)


class SpacingRule(FormattingRule):
    """Chooses the separator for a gap that stays on one line.

    Whitespace is significant in Nushell (``1+2`` is a single word), so a
    gap that was empty in the source stays empty unless a separator token
    is involved. Padding just inside delimiters is decided by the layout.
    """

    @property
    def rule_id(self) -> str: return "F001"
    @property
    def name(self) -> str: return "spacing"

    def separator(self, previous: WorkToken, current: WorkToken, gap: str, in_params: bool = False) -> str:
        if current.kind in NO_SPACE_BEFORE:
            return ""
        if current.glued:
            return ""
        if in_params and (previous.kind == TokenKind.PIPE or current.kind == TokenKind.PIPE):
            return ""
        if previous.kind in ONE_SPACE_AFTER:
            return " "
        if previous.kind == TokenKind.PIPE or current.kind == TokenKind.PIPE:
            return " "
        return " " if gap else ""
