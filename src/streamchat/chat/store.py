"""Bounded message log.

Hides the ring buffer used to hold chat history and the eviction order.
Messages are appended at the tail and evicted from the front.
"""

import logging
from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .models import Message

if TYPE_CHECKING:
    from .emotes import EmoteOverlayManager

logger = logging.getLogger(__name__)


class MessageStore:
    """Append-only message log truncated from the front.

    Iteration is oldest to newest. The store may exceed its capacity between
    a push and the next enforce_capacity call.
    """

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: deque[Message] = deque(messages or ())

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def push(self, message: Message) -> None:
        """Append a message at the tail."""
        self._messages.append(message)

    def newest(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def iterate_from_newest(self) -> Iterator[Message]:
        """Fresh iterator over messages, newest first."""
        return reversed(self._messages)

    def enforce_capacity(
        self,
        limit: int,
        overlays: "EmoteOverlayManager | None" = None,
    ) -> list[Message]:
        """Drop the oldest messages until at most `limit` remain.

        Glyphs of each removed message are hidden before it is dropped.

        Args:
            limit: Maximum number of messages to keep
            overlays: Overlay manager to notify about evicted glyphs

        Returns:
            Removed messages, oldest first
        """
        removed: list[Message] = []
        while len(self._messages) > limit:
            message = self._messages[0]
            if overlays is not None:
                overlays.hide_message(message)
            removed.append(self._messages.popleft())

        if removed:
            logger.debug("Evicted %d message(s), %d kept", len(removed), len(self._messages))
        return removed

    def clear(self, overlays: "EmoteOverlayManager | None" = None) -> None:
        """Remove every message, hiding their glyphs first."""
        self.enforce_capacity(0, overlays)
