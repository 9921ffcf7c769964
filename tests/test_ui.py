"""Tests for frame rendering, logging setup and the TUI."""
import logging

import pytest

from streamchat.chat import ChatController, MessageFeed
from streamchat.logging_config import LOG_FORMAT, level_from_string, setup_logging
from streamchat.ui import StreamChatApp, render_frame
from streamchat.ui.formatting import GLYPH_STYLE, column_to_offset

from helpers import glyph_for, make_message


class TestColumnToOffset:
    """Tests for column_to_offset."""

    def test_ascii(self):
        """Test that ASCII columns equal offsets."""
        assert column_to_offset("hello", 3) == 3

    def test_wide_characters(self):
        """Test that wide characters take two columns."""
        assert column_to_offset("日本 Kappa", 5) == 3

    def test_past_end(self):
        """Test columns past the text."""
        assert column_to_offset("hi", 10) == 2


class TestRenderFrame:
    """Tests for render_frame."""

    def test_rows_joined_top_to_bottom(self, config):
        """Test one text line per frame row."""
        controller = ChatController(config)
        controller.ingest(make_message("hi"))

        text = render_frame(controller.redraw(3, 30))

        assert text.plain == "\n\nbob : hi"

    def test_placements_highlighted(self, config):
        """Test that placement spans carry the glyph style."""
        controller = ChatController(config)
        text = "hi Kappa"
        controller.ingest(make_message(text, glyphs=(glyph_for(text, "Kappa", "25"),)))

        rendered = render_frame(controller.redraw(1, 30))

        spans = [(s.start, s.end) for s in rendered.spans if s.style == GLYPH_STYLE]
        assert spans == [(9, 14)]

    def test_newline_message_paints_height_lines(self, config):
        """Test that a multi-line message paints one line per row."""
        controller = ChatController(config)
        text = "ab\nKappa"
        controller.ingest(make_message(text, glyphs=(glyph_for(text, "Kappa", "25"),)))

        rendered = render_frame(controller.redraw(2, 30))

        assert rendered.plain.split("\n") == ["bob : ab", "      Kappa"]
        spans = [(s.start, s.end) for s in rendered.spans if s.style == GLYPH_STYLE]
        assert spans == [(15, 20)]
        assert rendered.plain[15:20] == "Kappa"

    def test_frame_rows_untouched(self, config):
        """Test that rendering does not restyle the frame's own rows."""
        controller = ChatController(config)
        text = "Kappa"
        controller.ingest(make_message(text, glyphs=(glyph_for(text, "Kappa", "25"),)))
        frame = controller.redraw(1, 30)
        before = list(frame.rows[0].text.spans)

        render_frame(frame)

        assert frame.rows[0].text.spans == before


class TestLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("streamchat")
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        yield
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = propagate

    def test_level_from_string(self):
        """Test level name parsing."""
        assert level_from_string("DEBUG") == logging.DEBUG
        assert level_from_string("info") == logging.INFO
        assert level_from_string("verbose") == logging.WARNING

    def test_file_handler(self, tmp_path):
        """Test that records reach the rotating file."""
        path = tmp_path / "logs" / "streamchat.log"

        logger = setup_logging("info", path)
        logging.getLogger("streamchat.chat.controller").info("Emote overlays %s", "disabled")
        for handler in logger.handlers:
            handler.flush()

        line = path.read_text(encoding="utf-8").strip()
        assert line.endswith("| INFO | streamchat.chat.controller | Emote overlays disabled")
        assert LOG_FORMAT.count("|") == line.count("|")

    def test_without_file(self):
        """Test that no console handler is installed."""
        logger = setup_logging()
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]
        assert not logger.propagate


class TestStreamChatApp:
    """Smoke tests driving the app headless."""

    @pytest.mark.asyncio
    async def test_messages_reach_panel(self, config):
        """Test that fed messages are drawn on the next tick."""
        feed = MessageFeed()
        app = StreamChatApp(config, demo=False, feed=feed)

        async with app.run_test(size=(60, 20)) as pilot:
            feed.put(make_message("hello from the feed"))
            await pilot.pause(0.2)
            app.tick()

            frame = app.query_one("#chat-panel").frame
            assert frame is not None
            assert any("hello from the feed" in row.plain for row in frame.rows)

    @pytest.mark.asyncio
    async def test_toggle_emotes_binding(self, config):
        """Test the emote toggle key."""
        app = StreamChatApp(config, demo=False)

        async with app.run_test() as pilot:
            await pilot.press("ctrl+e")
            assert not app.controller.overlays.enabled
            await pilot.press("ctrl+e")
            assert app.controller.overlays.enabled
