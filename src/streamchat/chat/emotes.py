"""Emote overlay bookkeeping.

Hides the decisions about inline glyphs drawn over the character grid:
- Mapping UTF-8 byte ranges to terminal column spans
- Whether a glyph fits (width, margin, collisions in its row)
- Which glyphs are currently materialized and when they go away
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from rich.cells import cell_len

from ..errors import (
    GlyphCollision,
    GlyphPlacementError,
    InsufficientWidth,
    MalformedGlyphRange,
    OverlaysDisabled,
)
from .models import GlyphKey, GlyphRef, Message

logger = logging.getLogger(__name__)

# C0 and C1 control characters, DEL included, each drawn as one blank cell
_CONTROL_TO_SPACE = {code: " " for code in [*range(0x20), *range(0x7F, 0xA0)]}


def display_text(text: str) -> str:
    """Text as it is drawn: control characters become spaces.

    Length is preserved, so character offsets into `text` stay valid.
    """
    return text.translate(_CONTROL_TO_SPACE)


@dataclass(frozen=True)
class DisplayedGlyph:
    """A glyph currently drawn on screen."""

    key: GlyphKey
    row: int  # viewport row, top = 0
    col_span: tuple[int, int]  # half-open terminal columns

    @property
    def width(self) -> int:
        return self.col_span[1] - self.col_span[0]


def glyph_char_range(glyph: GlyphRef, text: str) -> tuple[int, int]:
    """Convert a glyph's byte range into a character range of `text`.

    Raises:
        MalformedGlyphRange: If the range is empty, out of bounds, or splits
            a multi-byte character
    """
    start, end = glyph.byte_range
    encoded = text.encode("utf-8")
    if not 0 <= start < end <= len(encoded):
        raise MalformedGlyphRange(
            glyph.key, f"byte range {start}..{end} outside payload of {len(encoded)} bytes"
        )
    try:
        char_start = len(encoded[:start].decode("utf-8"))
        char_len = len(encoded[start:end].decode("utf-8"))
    except UnicodeDecodeError:
        raise MalformedGlyphRange(
            glyph.key, f"byte range {start}..{end} splits a character"
        ) from None
    return char_start, char_start + char_len


class EmoteOverlayManager:
    """Tracks the glyphs materialized on screen.

    A redraw is bracketed by begin_frame() and end_frame(). Collisions are
    checked only against glyphs placed in the current frame, since entries
    left over from the previous frame may sit at stale rows until they are
    placed again or dropped by end_frame().
    """

    def __init__(self, enabled: bool = True) -> None:
        self.displayed: dict[GlyphKey, DisplayedGlyph] = {}
        self._enabled = enabled
        self._frame: set[GlyphKey] = set()
        # Last failure reason per key, so a glyph that never fits is warned about once
        self._failures: dict[GlyphKey, str] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        """Switch overlays off and drop everything on screen."""
        self._enabled = False
        self.hide_everything()

    def is_empty(self) -> bool:
        return not self.displayed

    def __contains__(self, key: object) -> bool:
        return key in self.displayed

    def __len__(self) -> int:
        return len(self.displayed)

    def placements(self) -> list[DisplayedGlyph]:
        """Displayed glyphs ordered by row, then column."""
        return sorted(self.displayed.values(), key=lambda g: (g.row, g.col_span))

    # Frame bracketing

    def begin_frame(self) -> None:
        self._frame = set()

    @property
    def placed_this_frame(self) -> frozenset[GlyphKey]:
        return frozenset(self._frame)

    def end_frame(self) -> list[GlyphKey]:
        """Drop every glyph not placed since begin_frame()."""
        return self.retain(self._frame)

    # Placement

    def try_place(
        self,
        glyph: GlyphRef,
        row: int,
        available_width: int,
        margin: int,
        *,
        text: str,
        line_start: int = 0,
        line_end: int | None = None,
        column_offset: int = 0,
    ) -> DisplayedGlyph:
        """Materialize a glyph at its column span within a rendered line.

        Args:
            glyph: Glyph reference to place
            row: Viewport row the line is drawn on
            available_width: Columns available to the row
            margin: Horizontal padding kept free at the right edge and
                between neighbouring glyphs
            text: Full message text the byte range refers to
            line_start: Character offset where the rendered line starts
            line_end: Character offset where the rendered line ends
            column_offset: Column where the line's text starts (after chrome)

        Returns:
            The placed glyph

        Raises:
            GlyphPlacementError: If the glyph cannot be drawn. State is left
                unchanged.
        """
        key = glyph.key
        if not self._enabled:
            raise OverlaysDisabled(key, "overlays are disabled")

        char_start, char_end = glyph_char_range(glyph, text)
        if line_end is None:
            line_end = len(text)
        if char_start < line_start or char_end > line_end:
            raise InsufficientWidth(key, "placeholder is split across wrapped lines")

        col_start = column_offset + cell_len(display_text(text[line_start:char_start]))
        col_end = col_start + cell_len(display_text(text[char_start:char_end]))
        if col_end > available_width - margin:
            raise InsufficientWidth(
                key, f"columns {col_start}..{col_end} exceed width {available_width} - margin {margin}"
            )

        for other_key in self._frame:
            if other_key == key:
                continue
            other = self.displayed[other_key]
            if other.row != row:
                continue
            other_start, other_end = other.col_span
            if col_start < other_end + margin and other_start < col_end + margin:
                raise GlyphCollision(
                    key, f"overlaps {other_key[0]}#{other_key[1]} in row {row}"
                )

        placed = DisplayedGlyph(key=key, row=row, col_span=(col_start, col_end))
        self.displayed[key] = placed
        self._frame.add(key)
        return placed

    def place_or_warn(
        self,
        glyph: GlyphRef,
        row: int,
        available_width: int,
        margin: int,
        **kwargs,
    ) -> DisplayedGlyph | None:
        """try_place() that logs failures instead of raising.

        A failure is logged at WARNING the first time it happens for a key,
        or when the reason changes. Repeats of the same failure, which
        happen on every redraw, go to DEBUG.
        """
        try:
            placed = self.try_place(glyph, row, available_width, margin, **kwargs)
        except OverlaysDisabled:
            return None
        except GlyphPlacementError as e:
            if self._failures.get(glyph.key) == e.reason:
                logger.debug("Still unable to display emote: %s", e)
            else:
                logger.warning("Unable to display emote: %s", e)
                self._failures[glyph.key] = e.reason
            return None

        self._failures.pop(glyph.key, None)
        return placed

    # Removal

    def hide(self, glyph: GlyphRef) -> bool:
        """Remove a glyph. Returns True if it was displayed."""
        self._frame.discard(glyph.key)
        self._failures.pop(glyph.key, None)
        return self.displayed.pop(glyph.key, None) is not None

    def hide_all(self, glyphs: Iterable[GlyphRef]) -> int:
        """Remove several glyphs. Returns how many were displayed."""
        return sum(1 for glyph in glyphs if self.hide(glyph))

    def hide_message(self, message: Message) -> int:
        return self.hide_all(message.glyphs)

    def hide_everything(self) -> None:
        self.displayed.clear()
        self._frame.clear()
        self._failures.clear()

    def retain(self, keys: Iterable[GlyphKey]) -> list[GlyphKey]:
        """Keep only the given keys. Returns the keys that were dropped."""
        keep = set(keys)
        dropped = [key for key in self.displayed if key not in keep]
        for key in dropped:
            del self.displayed[key]
        self._frame &= keep
        return dropped
