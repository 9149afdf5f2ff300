from ..models import QuoteStyle
from .base import FormattingRule


class QuoteNormalizationRule(FormattingRule):
    """Rewrites string quotes to the configured style when no escaping is needed.

    Single-quoted strings are raw in Nushell, so a conversion is only safe
    when the content holds neither the target quote nor a backslash.
    Backtick and ``r#'...'#`` strings are left alone.
    """

    @property
    def rule_id(self) -> str: return "F004"
    @property
    def name(self) -> str: return "quote-style"

    def normalize(self, text: str) -> str:
        style = self.config.quote_style
        if style == QuoteStyle.PRESERVE:
            return text

        prefix = "$" if text.startswith("$") else ""
        body = text[len(prefix):]
        if len(body) < 2 or body[0] not in "\"'" or body[-1] != body[0]:
            return text
        quote, content = body[0], body[1:-1]
        if "\\" in content:
            return text

        if style == QuoteStyle.DOUBLE and quote == "'" and "\"" not in content:
            return f"{prefix}\"{content}\""
        if style == QuoteStyle.SINGLE and quote == "\"" and "'" not in content:
            return f"{prefix}'{content}'"
        return text
