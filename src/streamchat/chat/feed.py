"""Message channel between the network side and the redraw loop.

Hides how messages travel from the producer task to the UI:
- An unbounded single-producer/single-consumer asyncio queue
- A demo producer that stands in for a real platform client
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable

from .models import DataBuilder, Message

logger = logging.getLogger(__name__)

DEMO_EMOTES = {
    "Kappa": "25",
    "PogChamp": "305954156",
    "LUL": "425618",
    "BibleThump": "86",
    "SeemsGood": "64138",
}

DEMO_AUTHORS = [
    "human",
    "night_owl",
    "pixelpusher",
    "quietlurker",
    "speedrunner42",
    "a_very_long_username_for_testing",
]

DEMO_LINES = [
    "hello chat Kappa",
    "that was close PogChamp PogChamp",
    "LUL",
    "anyone know what song this is?",
    "first time catching the stream live, the setup looks great SeemsGood",
    "BibleThump rip run",
    "gg",
    "this boss fight has way too many phases, I would have quit three attempts ago Kappa",
]


class MessageFeed:
    """Unbounded queue of messages. One producer, one consumer.

    The store behind the consumer is capacity-bounded, so the producer is
    never blocked; old messages are dropped on the consumer side instead.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Message] = asyncio.Queue()
        self._closed = False

    def put(self, message: Message) -> None:
        """Hand a message to the consumer. Never blocks."""
        if self._closed:
            raise RuntimeError("Feed is closed")
        self._queue.put_nowait(message)

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        return self._queue.qsize()

    async def get(self) -> Message:
        return await self._queue.get()

    def drain(self) -> list[Message]:
        """Take every message currently queued without waiting."""
        messages = []
        while not self._queue.empty():
            messages.append(self._queue.get_nowait())
        return messages


async def run_demo_producer(
    feed: MessageFeed,
    builder: DataBuilder,
    interval: float = 0.8,
    count: int | None = None,
    rng: random.Random | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> int:
    """Push random chatter into `feed` until cancelled or `count` is reached.

    Args:
        feed: Destination feed
        builder: Message builder; its emote table decides which words
            become glyphs
        interval: Mean delay between messages in seconds
        count: Number of messages to produce, None for unlimited
        rng: Random source, for reproducible runs
        sleep: Awaitable delay function

    Returns:
        Number of messages produced
    """
    rng = rng or random.Random()
    produced = 0

    feed.put(builder.twitch("Connected to the demo channel."))
    logger.info("Demo producer started")

    while count is None or produced < count:
        author = rng.choice(DEMO_AUTHORS)
        if rng.random() < 0.03:
            feed.put(builder.error("Simulated connection hiccup, retrying."))
        else:
            feed.put(builder.user(author, rng.choice(DEMO_LINES)))
        produced += 1
        await sleep(rng.uniform(interval / 2, interval * 1.5))

    logger.info("Demo producer finished after %d message(s)", produced)
    return produced
