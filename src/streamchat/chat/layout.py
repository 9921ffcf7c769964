"""Bottom-anchored chat layout.

Hides how the message log becomes viewport rows:
- Word wrapping measured in terminal cells, keeping character offsets
- Row chrome (timestamp, aligned username)
- Newest-first fill with scroll offset and top padding
- Which glyphs are offered to the overlay manager, and when they are hidden
"""

import logging
import re
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field

from rich.cells import cell_len, set_cell_size
from rich.style import Style
from rich.text import Text

from ..config import FrontendConfig, UsernameAlignment
from ..errors import MalformedGlyphRange, NonTextPayloadError
from .colors import author_style
from .emotes import EmoteOverlayManager, display_text, glyph_char_range
from .models import GlyphKey, GlyphRef, Message
from .store import MessageStore

logger = logging.getLogger(__name__)

TIMESTAMP_STYLE = Style(dim=True)
SEPARATOR = ": "

_WORD = re.compile(r"\S+")
# Hard line breaks; everything between two of them is wrapped on its own
_SEGMENT = re.compile(r"[^\n\r\v\f\x1c-\x1e\x85\u2028\u2029]+")


def wrap_offsets(text: str, width: int) -> list[tuple[int, int]]:
    """Greedy word wrap that returns character ranges instead of strings.

    Line break characters always end a line. Within each segment lines
    break at whitespace and words wider than `width` are split. Leading
    and trailing whitespace of each line is dropped, and segments with no
    words add no line. Control characters such as tabs are measured as one
    cell, the way display_text() draws them.

    Args:
        text: Text to wrap
        width: Maximum line width in terminal cells

    Returns:
        Half-open (start, end) character offsets, one per physical line
    """
    width = max(width, 1)
    drawn = display_text(text)
    lines: list[tuple[int, int]] = []

    for segment in _SEGMENT.finditer(text):
        current: tuple[int, int] | None = None

        for match in _WORD.finditer(text, segment.start(), segment.end()):
            start, end = match.span()
            if current is not None:
                if cell_len(drawn[current[0]:end]) <= width:
                    current = (current[0], end)
                    continue
                lines.append(current)
                current = None

            if cell_len(drawn[start:end]) <= width:
                current = (start, end)
                continue

            # Split an over-long word into chunks of at most `width` cells
            chunk_start = start
            used = 0
            for index in range(start, end):
                char_width = cell_len(drawn[index])
                if used and used + char_width > width:
                    lines.append((chunk_start, index))
                    chunk_start, used = index, 0
                used += char_width
            current = (chunk_start, end)

        if current is not None:
            lines.append(current)
    return lines


def align_username(name: str, alignment: UsernameAlignment, length: int) -> str:
    """Pad or truncate a username to exactly `length` cells."""
    if cell_len(name) > length:
        return set_cell_size(name, length)

    pad = length - cell_len(name)
    if alignment == UsernameAlignment.RIGHT:
        return " " * pad + name
    if alignment == UsernameAlignment.CENTER:
        return " " * (pad // 2) + name + " " * (pad - pad // 2)
    return name + " " * pad


@dataclass
class WrappedMessage:
    """A message broken into physical lines for a given width."""

    message: Message
    chrome_width: int
    lines: list[tuple[int, int]]
    line_glyphs: list[list[GlyphRef]] = field(default_factory=list)

    @property
    def height(self) -> int:
        return len(self.lines)

    def glyphs_on_line(self, index: int) -> list[GlyphRef]:
        return self.line_glyphs[index]


@dataclass
class Row:
    """One physical line of the viewport."""

    text: Text
    source: Message | None = None
    line_index: int = 0
    glyphs: tuple[GlyphRef, ...] = ()
    height: int = 1

    @classmethod
    def blank(cls) -> "Row":
        return cls(text=Text(""))

    @property
    def is_blank(self) -> bool:
        return self.source is None

    @property
    def plain(self) -> str:
        return self.text.plain


@dataclass
class LayoutResult:
    """Rows for one redraw, top to bottom."""

    rows: list[Row]
    content_height: int
    placed: frozenset[GlyphKey]


class LayoutEngine:
    """Fits the newest messages into a viewport, bottom-anchored.

    Messages are walked newest to oldest and their lines are pushed onto the
    front of a deque, so the newest line ends up at the bottom. Glyphs on
    emitted lines are offered to the overlay manager; glyphs on lines that
    are scrolled past or cut off are hidden.
    """

    def __init__(self, config: FrontendConfig, overlays: EmoteOverlayManager) -> None:
        self.config = config
        self.overlays = overlays

    def chrome_width(self, message: Message) -> int:
        """Columns taken by the timestamp and username before the text."""
        width = self.config.maximum_username_length + cell_len(SEPARATOR)
        if self.config.date_shown:
            width += cell_len(message.sent_at) + 1
        return width

    def wrap(self, message: Message, width: int) -> WrappedMessage:
        """Wrap a text message to fit `width` columns including chrome.

        Raises:
            NonTextPayloadError: If the message does not carry a text payload.
                Error payloads must be converted before layout.
        """
        if not message.is_text:
            raise NonTextPayloadError(
                f"Only text payloads can be laid out, got {message.payload.kind!r}"
            )

        chrome = self.chrome_width(message)
        text = message.text
        lines = wrap_offsets(text, width - chrome)
        line_glyphs: list[list[GlyphRef]] = [[] for _ in lines]

        if lines:
            for glyph in message.glyphs:
                line_glyphs[self._line_of(glyph, text, lines)].append(glyph)

        return WrappedMessage(message=message, chrome_width=chrome, lines=lines, line_glyphs=line_glyphs)

    @staticmethod
    def _line_of(glyph: GlyphRef, text: str, lines: list[tuple[int, int]]) -> int:
        # Malformed ranges go on the first line so the failure is reported once
        try:
            char_start, _ = glyph_char_range(glyph, text)
        except MalformedGlyphRange:
            return 0
        index = 0
        for position, (start, _) in enumerate(lines):
            if start <= char_start:
                index = position
        return index

    def render_line(self, wrapped: WrappedMessage, index: int) -> Text:
        """Styled cells for one physical line of a wrapped message."""
        message = wrapped.message
        start, end = wrapped.lines[index]
        text = Text(no_wrap=True, overflow="crop")

        if index == 0:
            if self.config.date_shown:
                text.append(message.sent_at + " ", style=TIMESTAMP_STYLE)
            name = align_username(
                display_text(message.author),
                self.config.username_alignment,
                self.config.maximum_username_length,
            )
            text.append(name, style=author_style(message.author, message.is_system, self.config.palette))
            text.append(SEPARATOR)
        else:
            text.append(" " * wrapped.chrome_width)

        text.append(display_text(message.text[start:end]))
        return text

    def layout(
        self,
        store: MessageStore,
        height: int,
        width: int,
        scroll_offset: int = 0,
    ) -> LayoutResult:
        """Compute exactly `height` rows ending `scroll_offset` lines above the newest.

        Args:
            store: Message log, already trimmed to capacity
            height: Usable viewport rows
            width: Usable viewport columns
            scroll_offset: Newest physical lines to skip

        Returns:
            LayoutResult whose rows are ordered top to bottom
        """
        self.overlays.begin_frame()
        rows: deque[Row] = deque()
        total = 0
        messages = store.iterate_from_newest()

        for message in messages:
            wrapped = self.wrap(message, width)
            if not wrapped.lines:
                continue

            for index in reversed(range(wrapped.height)):
                glyphs = wrapped.glyphs_on_line(index)

                if scroll_offset > 0:
                    scroll_offset -= 1
                    self.overlays.hide_all(glyphs)
                    continue

                if total >= height:
                    # Lines above the cut of a partially visible message
                    self._hide_unplaced(glyphs)
                    continue

                row_index = height - 1 - total
                if self.overlays.enabled:
                    for glyph in glyphs:
                        self.overlays.place_or_warn(
                            glyph,
                            row_index,
                            width,
                            self.config.margin,
                            text=message.text,
                            line_start=wrapped.lines[index][0],
                            line_end=wrapped.lines[index][1],
                            column_offset=wrapped.chrome_width,
                        )
                rows.appendleft(
                    Row(
                        text=self.render_line(wrapped, index),
                        source=message,
                        line_index=index,
                        glyphs=tuple(glyphs),
                    )
                )
                total += 1

            if self.viewport_full(total, height):
                self.resolve_overflow(messages)
                break

        content_height = total
        while total < height:
            rows.appendleft(Row.blank())
            total += 1

        placed = self.overlays.placed_this_frame
        dropped = self.overlays.end_frame()
        if dropped:
            logger.debug("Released %d glyph(s) no longer on screen", len(dropped))

        return LayoutResult(rows=list(rows), content_height=content_height, placed=placed)

    def viewport_full(self, total: int, height: int) -> bool:
        return total >= height

    def resolve_overflow(self, older: Iterator[Message]) -> int:
        """Hide glyphs of messages above the viewport after it filled up.

        Stops right away when overlays are off or nothing is displayed.
        Otherwise walks older messages until one had nothing displayed,
        since everything older was released by an earlier redraw.

        Returns:
            Number of older messages visited
        """
        if not self.overlays.enabled or self.overlays.is_empty():
            return 0

        visited = 0
        for message in older:
            visited += 1
            if not self._hide_unplaced(message.glyphs):
                break
            if self.overlays.is_empty():
                break
        return visited

    def _hide_unplaced(self, glyphs: list[GlyphRef] | tuple[GlyphRef, ...]) -> int:
        placed = self.overlays.placed_this_frame
        return self.overlays.hide_all(g for g in glyphs if g.key not in placed)
