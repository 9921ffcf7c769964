"""Single owner of the chat state.

The redraw loop is the only caller. Store, overlay set and layout engine
are owned here and mutated only from within one redraw or one ingest.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from ..config import CompleteConfig
from .emotes import DisplayedGlyph, EmoteOverlayManager
from .layout import LayoutEngine, Row
from .models import Message, TextPayload
from .store import MessageStore

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """Everything the UI needs to paint one redraw."""

    rows: list[Row]
    placements: list[DisplayedGlyph]
    title: str
    scroll_offset: int

    @property
    def height(self) -> int:
        return len(self.rows)


class ChatController:
    """Owns the message store, the overlay set and the layout engine."""

    def __init__(
        self,
        config: CompleteConfig,
        store: MessageStore | None = None,
        overlays: EmoteOverlayManager | None = None,
    ) -> None:
        self.config = config
        self.store = store if store is not None else MessageStore()
        if overlays is None:
            overlays = EmoteOverlayManager(enabled=config.frontend.emotes_enabled)
        self.overlays = overlays
        self.engine = LayoutEngine(config.frontend, self.overlays)
        self.scroll_offset = 0
        self._width = 0

    def ingest(self, message: Message) -> bool:
        """Filter a message from the network and store it.

        Error payloads become system rows with a text payload; empty
        messages are dropped.

        Returns:
            True if the message was stored
        """
        if not message.text.strip():
            return False

        if not message.is_text:
            message = Message(
                sent_at=message.sent_at,
                author=message.author,
                is_system=True,
                payload=TextPayload(text=f"Error: {message.text}"),
            )

        self.store.push(message)
        return True

    def redraw(self, height: int, width: int) -> Frame:
        """Trim the store, lay out the viewport and reconcile overlays."""
        self._width = width
        self.store.enforce_capacity(self.config.terminal.maximum_messages, self.overlays)
        result = self.engine.layout(self.store, height, width, self.scroll_offset)
        return Frame(
            rows=result.rows,
            placements=self.overlays.placements(),
            title=self.title(),
            scroll_offset=self.scroll_offset,
        )

    def total_rows(self, width: int | None = None) -> int:
        """Physical lines the whole store wraps to at `width`."""
        width = self._width if width is None else width
        return sum(self.engine.wrap(message, width).height for message in self.store)

    def scroll_up(self, lines: int = 1) -> int:
        limit = max(self.total_rows() - 1, 0)
        self.scroll_offset = min(self.scroll_offset + lines, limit)
        return self.scroll_offset

    def scroll_down(self, lines: int = 1) -> int:
        self.scroll_offset = max(self.scroll_offset - lines, 0)
        return self.scroll_offset

    def scroll_to_bottom(self) -> None:
        self.scroll_offset = 0

    def toggle_overlays(self) -> bool:
        """Switch overlays on or off. Returns the new state."""
        if self.overlays.enabled:
            self.overlays.disable()
        else:
            self.overlays.enable()
        logger.info("Emote overlays %s", "enabled" if self.overlays.enabled else "disabled")
        return self.overlays.enabled

    def apply_config(self, config: CompleteConfig) -> None:
        """Swap in a reloaded configuration."""
        self.config = config
        self.engine.config = config.frontend
        if config.frontend.emotes_enabled and not self.overlays.enabled:
            self.overlays.enable()
        elif not config.frontend.emotes_enabled and self.overlays.enabled:
            self.overlays.disable()
        # Row geometry may have changed, so everything is placed afresh
        self.overlays.hide_everything()

    def title(self, now: datetime | None = None) -> str:
        frontend = self.config.frontend
        if not frontend.title_shown:
            return ""
        current = (now or datetime.now()).strftime(frontend.date_format)
        return f"Time: {current} | Channel: {self.config.twitch.channel}"
