from enum import Enum

from .models import FormatterConfig
from .preprocess import TokenStream, WorkToken
from .rules import BlankLineRule, CommentRule, SpacingRule


class GapKind(Enum):
    SAME_LINE = "same_line"
    LINE_BREAK = "line_break"
    BLANK = "blank"


def classify(gap: str) -> GapKind:
    newlines = gap.count("\n")
    if newlines == 0:
        return GapKind.SAME_LINE
    if newlines == 1:
        return GapKind.LINE_BREAK
    return GapKind.BLANK


class GapAnalyzer:
    """Answers layout questions about the whitespace between two tokens."""

    def __init__(self, stream: TokenStream, config: FormatterConfig):
        self.stream = stream
        self.spacing = SpacingRule(config)
        self.blank_lines = BlankLineRule(config)
        self.comments = CommentRule(config)

    def kind(self, index: int) -> GapKind:
        return classify(self.stream.gap(index))

    def breaks_line(self, index: int) -> bool:
        return "\n" in self.stream.gap(index)

    def blank_before(self, index: int) -> bool:
        return self.blank_lines.preserved(self.stream.gap(index)) > 0

    def separator(self, previous: WorkToken, current: WorkToken, in_params: bool = False) -> str:
        """Same-line separator between two tokens that end up next to each other."""
        return self.spacing.separator(previous, current, self.stream.gap(current.index), in_params)

    def comment_text(self, token: WorkToken) -> str:
        return self.comments.normalize(token.text)
