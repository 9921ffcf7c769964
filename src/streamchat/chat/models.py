"""Data models for chat messages.

Hides the representation of messages, payload variants and the inline
glyph references embedded in message text.
"""

import itertools
import re
from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

GlyphKey = tuple[str, int]

_WORD = re.compile(r"\S+")


class GlyphRef(BaseModel):
    """Reference to an inline image inside a message's text."""

    model_config = {"frozen": True}

    glyph_id: str = Field(description="Identifier of the image asset")
    placement_id: int = Field(default=0, description="Occurrence index within the message")
    byte_range: tuple[int, int] = Field(
        description="Half-open UTF-8 byte range of the placeholder text"
    )
    name: str = Field(default="", description="Placeholder text, e.g. the emote code")

    @property
    def key(self) -> GlyphKey:
        """Overlay identity key."""
        return (self.glyph_id, self.placement_id)


class TextPayload(BaseModel):
    """Renderable message text."""

    model_config = {"frozen": True}

    kind: Literal["text"] = "text"
    text: str


class ErrorPayload(BaseModel):
    """Error notice produced by the network layer."""

    model_config = {"frozen": True}

    kind: Literal["error"] = "error"
    text: str


class Message(BaseModel):
    """A single chat message. Immutable once created."""

    model_config = {"frozen": True}

    sent_at: str = Field(description="Formatted timestamp")
    author: str
    is_system: bool = False
    payload: TextPayload | ErrorPayload = Field(discriminator="kind")
    glyphs: tuple[GlyphRef, ...] = ()

    @property
    def is_text(self) -> bool:
        return isinstance(self.payload, TextPayload)

    @property
    def text(self) -> str:
        return self.payload.text


def locate_glyphs(
    text: str,
    emotes: Mapping[str, str],
    placement_ids: Iterator[int] | None = None,
) -> tuple[GlyphRef, ...]:
    """Find every whitespace-delimited word of `text` that names a known emote.

    Args:
        text: Message text
        emotes: Mapping of emote code (e.g. "Kappa") to glyph id
        placement_ids: Source of placement ids. Defaults to counting per
            glyph id within this message.

    Returns:
        Glyph references in text order
    """
    glyphs: list[GlyphRef] = []
    seen: dict[str, int] = {}

    for match in _WORD.finditer(text):
        word = match.group()
        glyph_id = emotes.get(word)
        if glyph_id is None:
            continue

        start = len(text[: match.start()].encode("utf-8"))
        end = start + len(word.encode("utf-8"))
        if placement_ids is not None:
            placement_id = next(placement_ids)
        else:
            placement_id = seen.get(glyph_id, 0)
            seen[glyph_id] = placement_id + 1
        glyphs.append(
            GlyphRef(
                glyph_id=glyph_id,
                placement_id=placement_id,
                byte_range=(start, end),
                name=word,
            )
        )

    return tuple(glyphs)


class DataBuilder:
    """Builds messages stamped with the configured date format.

    Placement ids are drawn from one counter shared by every message the
    builder creates, so overlay keys never repeat across messages.
    """

    def __init__(self, date_format: str, emotes: Mapping[str, str] | None = None) -> None:
        self.date_format = date_format
        self.emotes = dict(emotes or {})
        self._placement_ids = itertools.count()

    def _now(self) -> str:
        return datetime.now().strftime(self.date_format)

    def user(
        self,
        author: str,
        text: str,
        glyphs: tuple[GlyphRef, ...] | None = None,
    ) -> Message:
        if glyphs is None:
            glyphs = locate_glyphs(text, self.emotes, self._placement_ids)
        return Message(
            sent_at=self._now(),
            author=author,
            payload=TextPayload(text=text),
            glyphs=glyphs,
        )

    def system(self, text: str) -> Message:
        return Message(
            sent_at=self._now(),
            author="System",
            is_system=True,
            payload=TextPayload(text=text),
        )

    def twitch(self, text: str) -> Message:
        return Message(
            sent_at=self._now(),
            author="Twitch",
            is_system=True,
            payload=TextPayload(text=text),
        )

    def error(self, text: str) -> Message:
        return Message(
            sent_at=self._now(),
            author="System",
            is_system=True,
            payload=ErrorPayload(text=text),
        )
