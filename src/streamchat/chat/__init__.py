"""Chat core: message log, layout and emote overlays.

Module structure (each module hides a design decision):
- models.py: Message and glyph reference representation
- colors.py: Username color hashing
- store.py: Bounded message log
- emotes.py: Which glyphs are drawn and where
- layout.py: How messages become bottom-anchored viewport rows
- controller.py: Ownership of the above for the redraw loop
- feed.py: Message channel from producer to UI
"""

from .colors import author_style, hash_username, hsl_to_rgb
from .controller import ChatController, Frame
from .emotes import DisplayedGlyph, EmoteOverlayManager
from .feed import MessageFeed, run_demo_producer
from .layout import LayoutEngine, LayoutResult, Row, wrap_offsets
from .models import DataBuilder, ErrorPayload, GlyphRef, Message, TextPayload, locate_glyphs
from .store import MessageStore

__all__ = [
    "ChatController",
    "DataBuilder",
    "DisplayedGlyph",
    "EmoteOverlayManager",
    "ErrorPayload",
    "Frame",
    "GlyphRef",
    "LayoutEngine",
    "LayoutResult",
    "Message",
    "MessageFeed",
    "MessageStore",
    "Row",
    "TextPayload",
    "author_style",
    "hash_username",
    "hsl_to_rgb",
    "locate_glyphs",
    "run_demo_producer",
    "wrap_offsets",
]
