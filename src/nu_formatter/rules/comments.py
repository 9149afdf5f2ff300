from .base import FormattingRule


class CommentRule(FormattingRule):
    """Normalizes comment text. Content after ``#`` is never reflowed."""

    @property
    def rule_id(self) -> str: return "F003"
    @property
    def name(self) -> str: return "comments"

    trailing_separator = " "

    def normalize(self, text: str) -> str:
        return text.rstrip()
