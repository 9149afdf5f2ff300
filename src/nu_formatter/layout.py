"""Region discovery and the inline/multiline layout decision.

Every delimiter pair becomes a Region whose own-depth tokens are grouped
into Elements (statements, list items, record entries or match arms).
A region is rendered on one line when nothing forces it open and it
fits the remaining width; otherwise each element goes on its own line
one indent level deeper. The file itself is an always-multiline root.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .emitter import Emitter
from .gaps import GapAnalyzer
from .models import BracketSpacing, FormatterConfig, TrailingComma
from .preprocess import ParamSlice, TokenStream, WorkToken
from .rules import QuoteNormalizationRule
from .tokens import TokenKind

logger = logging.getLogger(__name__)


class RegionKind(Enum):
    ROOT = "root"
    BLOCK = "block"
    CLOSURE = "closure"
    RECORD = "record"
    LIST = "list"
    PAREN = "paren"
    MATCH = "match"


# elements are source lines
BLOCK_LIKE = (RegionKind.ROOT, RegionKind.BLOCK, RegionKind.CLOSURE, RegionKind.PAREN)
# elements are comma separated
SEPARATED = (RegionKind.LIST, RegionKind.RECORD, RegionKind.MATCH)
TRAILING_COMMA_KINDS = (RegionKind.LIST, RegionKind.RECORD)
CONTINUATION_KINDS = (TokenKind.PIPE, TokenKind.COLON)
# words like `-`, `*` or `in` are also plain command arguments
CONTINUATION_OPERATORS = frozenset({"=", "+=", "-=", "*=", "/=", "++=", "=>"})


@dataclass
class Comment:
    token: WorkToken
    blank_before: bool = False


@dataclass
class Element:
    items: List[Union[WorkToken, "Region"]] = field(default_factory=list)
    leading: List[Comment] = field(default_factory=list)
    trailing: List[Comment] = field(default_factory=list)
    blank_before: bool = False

    @property
    def ends_with_semicolon(self) -> bool:
        last = self.items[-1] if self.items else None
        return isinstance(last, WorkToken) and last.kind == TokenKind.SEMICOLON


@dataclass
class Region:
    kind: RegionKind
    open: Optional[WorkToken]
    close: Optional[WorkToken]
    depth: int
    params: Optional[ParamSlice] = None
    elements: List[Element] = field(default_factory=list)
    head_comments: List[Comment] = field(default_factory=list)
    dangling: List[Comment] = field(default_factory=list)
    forced_multiline: bool = False
    # Only meaningful when the region is not forced multiline.
    single_line_length: int = 0
    inline_text: str = ""
    start_column: int = 0


def _first_token(item: Union[WorkToken, Region]) -> WorkToken:
    return item.open if isinstance(item, Region) else item


def _last_token(item: Union[WorkToken, Region]) -> WorkToken:
    return item.close if isinstance(item, Region) else item


def _is_token(item, kind: TokenKind, text: Optional[str] = None) -> bool:
    return isinstance(item, WorkToken) and item.kind == kind and (text is None or item.text == text)


class LayoutEngine:
    """Lays out one token stream into an Emitter."""

    def __init__(self, stream: TokenStream, config: FormatterConfig):
        self.stream = stream
        self.config = config
        self.gaps = GapAnalyzer(stream, config)
        self.quotes = QuoteNormalizationRule(config)
        self.emitter = Emitter(config.indent_width)

    def render(self) -> str:
        root = self.build()
        self._emit_multiline(root)
        return self.emitter.getvalue()

    # Region discovery

    def build(self) -> Region:
        root = Region(RegionKind.ROOT, open=None, close=None, depth=0)
        eof = len(self.stream) - 1
        self._split(root, self._collect(0, eof, depth=1))
        self._measure(root)
        root.forced_multiline = True
        return root

    def _collect(self, start: int, end: int, depth: int) -> List[Union[WorkToken, Region]]:
        items: List[Union[WorkToken, Region]] = []
        index = start
        while index < end:
            token = self.stream[index]
            if token.kind.is_open:
                region = self._build_region(index, depth)
                items.append(region)
                index = region.close.index + 1
            else:
                items.append(token)
                index += 1
        return items

    def _build_region(self, open_index: int, depth: int) -> Region:
        close_index = self.stream.find_close(open_index)
        params = self.stream.params.get(open_index)
        body_start = params.close + 1 if params else open_index + 1
        items = self._collect(body_start, close_index, depth + 1)

        region = Region(
            self._classify(self.stream[open_index], params, items),
            open=self.stream[open_index],
            close=self.stream[close_index],
            depth=depth,
            params=params,
        )
        self._split(region, items)
        self._measure(region)
        return region

    @staticmethod
    def _classify(open_token: WorkToken, params: Optional[ParamSlice], items) -> RegionKind:
        if open_token.kind == TokenKind.BRACKET_OPEN:
            return RegionKind.LIST
        if open_token.kind == TokenKind.PAREN_OPEN:
            return RegionKind.PAREN
        if params is not None:
            return RegionKind.CLOSURE
        if not items:
            return RegionKind.RECORD
        code = [item for item in items if not _is_token(item, TokenKind.COMMENT)]
        if code and _is_token(code[0], TokenKind.MARKER, "..."):
            return RegionKind.RECORD
        if any(_is_token(item, TokenKind.COLON) for item in code):
            return RegionKind.RECORD
        if any(_is_token(item, TokenKind.OPERATOR, "=>") for item in code):
            return RegionKind.MATCH
        return RegionKind.BLOCK

    @staticmethod
    def _is_plain_list(items) -> bool:
        """A list of bare values, where whitespace separates items."""
        for item in items:
            if isinstance(item, Region):
                continue
            if item.kind in (TokenKind.OPERATOR, TokenKind.COLON, TokenKind.PIPE):
                return False
            if item.kind == TokenKind.IDENTIFIER and (item.text.endswith(":") or item.text.startswith("-")):
                return False
        return True

    @staticmethod
    def _continues(previous, item) -> bool:
        """A line break that does not end the current element."""
        if isinstance(previous, WorkToken):
            if previous.kind in CONTINUATION_KINDS:
                return True
            if previous.kind == TokenKind.OPERATOR and previous.text in CONTINUATION_OPERATORS:
                return True
        return _is_token(item, TokenKind.PIPE)

    @staticmethod
    def _entry_complete(element: Element, item) -> bool:
        """Whether a record entry is finished so whitespace may start the next one."""
        has_key = any(
            _is_token(part, TokenKind.COLON) or _is_token(part, TokenKind.MARKER, "...")
            for part in element.items
        )
        if not has_key:
            return False
        last = element.items[-1]
        if isinstance(last, WorkToken) and last.kind in (TokenKind.COLON, TokenKind.OPERATOR, TokenKind.MARKER):
            return False
        return not _is_token(item, TokenKind.OPERATOR)

    def _split(self, region: Region, items) -> None:
        kind = region.kind
        split_on_space = kind == RegionKind.LIST and self._is_plain_list(items)
        current: Optional[Element] = None
        pending: List[Comment] = []
        previous = None

        for item in items:
            first = _first_token(item)
            gap = self.stream.gap(first.index)
            breaks = "\n" in gap
            blank = self.gaps.blank_before(first.index)

            if _is_token(item, TokenKind.COMMENT):
                comment = Comment(item, blank_before=blank)
                if not item.trailing:
                    current = None
                    pending.append(comment)
                elif current is not None:
                    current.trailing.append(comment)
                    current = None
                elif region.elements:
                    region.elements[-1].trailing.append(comment)
                else:
                    region.head_comments.append(comment)
                continue

            if kind in SEPARATED and _is_token(item, TokenKind.COMMA):
                current = None
                previous = item
                continue

            starts_new = current is None
            if not starts_new and gap:
                if breaks:
                    starts_new = not self._continues(previous, item)
                elif split_on_space:
                    starts_new = True
                elif kind == RegionKind.RECORD:
                    starts_new = self._entry_complete(current, item)

            if starts_new:
                current = Element(leading=pending, blank_before=blank)
                pending = []
                region.elements.append(current)
            current.items.append(item)
            previous = item
            if kind == RegionKind.LIST and _is_token(item, TokenKind.SEMICOLON):
                current = None

        region.dangling = pending

    def _measure(self, region: Region) -> None:
        forced = bool(region.head_comments or region.dangling) or self._params_have_comment(region)
        emitted = False
        for element in region.elements:
            if element.leading or element.trailing:
                forced = True
            if element.blank_before and (emitted or element.leading):
                forced = True
            emitted = True
            for item in element.items:
                if isinstance(item, Region):
                    forced = forced or item.forced_multiline
                elif "\n" in item.text:
                    forced = True
        if region.kind in BLOCK_LIKE and len(region.elements) > 1:
            forced = True

        region.forced_multiline = forced
        if not forced and region.kind != RegionKind.ROOT:
            region.inline_text = self._render_inline(region)
            region.single_line_length = len(region.inline_text) - 2 * len(self._padding(region))

    def _params_have_comment(self, region: Region) -> bool:
        if region.params is None:
            return False
        return any(
            self.stream[index].kind == TokenKind.COMMENT
            for index in range(region.params.open, region.params.close + 1)
        )

    # Rendering helpers

    def _padding(self, region: Region) -> str:
        if region.kind in (RegionKind.LIST, RegionKind.RECORD):
            return " " if self.config.bracket_spacing == BracketSpacing.SPACED else ""
        if region.kind == RegionKind.PAREN:
            return ""
        return " "

    def _token_text(self, token: WorkToken) -> str:
        if token.kind == TokenKind.STRING:
            return self.quotes.normalize(token.text)
        if token.kind == TokenKind.COMMENT:
            return self.gaps.comment_text(token)
        return token.text

    def _render_params(self, region: Region) -> str:
        parts = []
        previous = None
        for index in range(region.params.open, region.params.close + 1):
            token = self.stream[index]
            if previous is not None:
                parts.append(self.gaps.separator(previous, token, in_params=True))
            parts.append(self._token_text(token))
            previous = token
        return "".join(parts)

    def _render_element_inline(self, element: Element) -> str:
        parts = []
        previous = None
        for item in element.items:
            if previous is not None:
                parts.append(self.gaps.separator(previous, _first_token(item)))
            parts.append(item.inline_text if isinstance(item, Region) else self._token_text(item))
            previous = _last_token(item)
        return "".join(parts)

    def _render_inline(self, region: Region) -> str:
        params = self._render_params(region) if region.params else ""
        if not region.elements:
            if params:
                return f"{region.open.text}{params} {region.close.text}"
            return region.open.text + region.close.text

        parts = []
        for position, element in enumerate(region.elements):
            if position:
                parts.append(" " if region.elements[position - 1].ends_with_semicolon else ", ")
            parts.append(self._render_element_inline(element))
        pad = self._padding(region)
        return f"{region.open.text}{params}{pad}{''.join(parts)}{pad}{region.close.text}"

    # Emission

    def fits(self, region: Region, column: int) -> bool:
        return column + region.single_line_length + 2 <= self.config.max_width

    def _emit_region(self, region: Region) -> None:
        region.start_column = self.emitter.column
        if not region.forced_multiline and self.fits(region, region.start_column):
            self.emitter.write(region.inline_text)
            return
        logger.debug(
            "%s region at offset %d laid out multiline (forced=%s)",
            region.kind.value, region.open.span.start, region.forced_multiline,
        )
        self._emit_multiline(region)

    def _emit_element(self, element: Element) -> None:
        previous = None
        for item in element.items:
            if previous is not None:
                self.emitter.write(self.gaps.separator(previous, _first_token(item)))
            if isinstance(item, Region):
                self._emit_region(item)
            else:
                self.emitter.write(self._token_text(item))
            previous = _last_token(item)

    def _emit_params(self, region: Region) -> None:
        """Write closure params; a comment among them ends its line."""
        out = self.emitter
        previous = None
        for index in range(region.params.open, region.params.close + 1):
            token = self.stream[index]
            if token.kind == TokenKind.COMMENT:
                if not token.trailing:
                    out.newline()
                elif not out.at_line_start:
                    out.write(self.gaps.comments.trailing_separator)
                out.write(self._token_text(token))
                out.newline()
                continue
            if previous is not None and not out.at_line_start:
                out.write(self.gaps.separator(previous, token, in_params=True))
            out.write(self._token_text(token))
            previous = token

    def _emit_comment_line(self, comment: Comment, first: bool) -> None:
        if comment.blank_before and not first:
            self.emitter.blank_line()
        self.emitter.write(self._token_text(comment.token))
        self.emitter.newline()

    def _emit_multiline(self, region: Region) -> None:
        out = self.emitter
        is_root = region.kind == RegionKind.ROOT
        if not is_root:
            out.write(region.open.text)
            out.indent()
            if region.params:
                self._emit_params(region)
            for comment in region.head_comments:
                out.write(self.gaps.comments.trailing_separator + self._token_text(comment.token))
            out.newline()

        first = True
        last = len(region.elements) - 1
        for position, element in enumerate(region.elements):
            for comment in element.leading:
                self._emit_comment_line(comment, first)
                first = False
            if element.blank_before and not first:
                out.blank_line()
            self._emit_element(element)
            if region.kind in SEPARATED and not element.ends_with_semicolon:
                if position < last:
                    out.write(",")
                elif region.kind in TRAILING_COMMA_KINDS and self.config.trailing_comma == TrailingComma.ALWAYS:
                    out.write(",")
            for comment in element.trailing:
                out.write(self.gaps.comments.trailing_separator + self._token_text(comment.token))
            out.newline()
            first = False

        for comment in region.dangling:
            self._emit_comment_line(comment, first)
            first = False

        if not is_root:
            out.newline()
            out.dedent()
            out.write(region.close.text)
