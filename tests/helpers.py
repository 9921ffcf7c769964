"""Message builders shared by the tests."""
from streamchat.chat import GlyphRef, Message, TextPayload


def make_message(
    text: str,
    author: str = "bob",
    glyphs: tuple[GlyphRef, ...] = (),
    sent_at: str = "12:00:00",
) -> Message:
    """Build a text message with a fixed timestamp."""
    return Message(sent_at=sent_at, author=author, payload=TextPayload(text=text), glyphs=glyphs)


def glyph_for(text: str, word: str, glyph_id: str, placement_id: int = 0) -> GlyphRef:
    """GlyphRef covering the first occurrence of `word` in `text`."""
    start = len(text[: text.index(word)].encode("utf-8"))
    return GlyphRef(
        glyph_id=glyph_id,
        placement_id=placement_id,
        byte_range=(start, start + len(word.encode("utf-8"))),
        name=word,
    )
