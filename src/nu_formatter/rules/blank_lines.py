from ..models import FormatterConfig
from .base import FormattingRule


class BlankLineRule(FormattingRule):
    """Collapses runs of blank lines; at most one survives between items."""

    def __init__(self, config: FormatterConfig, max_blank_lines: int = 1):
        super().__init__(config)
        self.max_blank_lines = max_blank_lines

    @property
    def rule_id(self) -> str: return "F002"
    @property
    def name(self) -> str: return "blank-lines"

    @staticmethod
    def blank_lines_in(gap: str) -> int:
        return max(0, gap.count("\n") - 1)

    def preserved(self, gap: str) -> int:
        """Blank lines kept for a gap between two items of the same region.

        Blank lines right after an opening delimiter or right before a
        closing one are never kept; callers skip those positions.
        """
        return min(self.blank_lines_in(gap), self.max_blank_lines)
