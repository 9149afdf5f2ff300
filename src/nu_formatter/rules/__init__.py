from .base import FormattingRule
from .spacing import SpacingRule
from .blank_lines import BlankLineRule
from .comments import CommentRule
from .quotes import QuoteNormalizationRule

__all__ = [
    "FormattingRule",
    "SpacingRule",
    "BlankLineRule",
    "CommentRule",
    "QuoteNormalizationRule",
]
