"""Exception hierarchy for streamchat.

Placement errors are recoverable and stay inside the overlay boundary.
NonTextPayloadError is a caller contract violation and propagates.
"""


class StreamChatError(Exception):
    """Base class for all streamchat errors."""


class NonTextPayloadError(StreamChatError, ValueError):
    """Raised when a non-text payload reaches row rendering."""


class GlyphPlacementError(StreamChatError):
    """A glyph could not be drawn; its text is rendered plainly instead."""

    def __init__(self, key: tuple[str, int], reason: str) -> None:
        super().__init__(f"glyph {key[0]}#{key[1]}: {reason}")
        self.key = key
        self.reason = reason


class MalformedGlyphRange(GlyphPlacementError):
    """Byte range is out of bounds or does not fall on character boundaries."""


class InsufficientWidth(GlyphPlacementError):
    """Glyph span does not fit in the available columns."""


class GlyphCollision(GlyphPlacementError):
    """Glyph span overlaps another glyph already placed in the same row."""


class OverlaysDisabled(GlyphPlacementError):
    """Overlays are globally switched off."""


class ConfigError(StreamChatError):
    """Configuration file is unreadable or invalid."""
