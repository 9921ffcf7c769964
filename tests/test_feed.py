"""Async tests for the message feed and demo producer."""
import asyncio
import random

import pytest

from streamchat.chat import DataBuilder, MessageFeed, run_demo_producer
from streamchat.chat.feed import DEMO_EMOTES

from helpers import make_message


async def _no_sleep(_delay: float) -> None:
    await asyncio.sleep(0)


class TestMessageFeed:
    """Tests for MessageFeed."""

    @pytest.mark.asyncio
    async def test_order_preserved(self):
        """Test that messages arrive in the order they were put."""
        feed = MessageFeed()
        messages = [make_message(f"m{i}") for i in range(5)]
        for message in messages:
            feed.put(message)

        received = [await feed.get() for _ in messages]

        assert received == messages

    @pytest.mark.asyncio
    async def test_get_waits_for_producer(self):
        """Test that the consumer blocks until a message arrives."""
        feed = MessageFeed()
        message = make_message("late")

        async def produce():
            await asyncio.sleep(0.01)
            feed.put(message)

        producer = asyncio.create_task(produce())
        received = await asyncio.wait_for(feed.get(), timeout=1)
        await producer

        assert received is message

    @pytest.mark.asyncio
    async def test_drain(self):
        """Test taking everything queued at once."""
        feed = MessageFeed()
        feed.put(make_message("a"))
        feed.put(make_message("b"))

        assert [m.text for m in feed.drain()] == ["a", "b"]
        assert feed.pending() == 0
        assert feed.drain() == []

    @pytest.mark.asyncio
    async def test_closed_feed_rejects(self):
        """Test that a closed feed refuses new messages."""
        feed = MessageFeed()
        feed.close()

        assert feed.closed
        with pytest.raises(RuntimeError):
            feed.put(make_message("late"))


class TestDemoProducer:
    """Tests for run_demo_producer."""

    @pytest.mark.asyncio
    async def test_bounded_run(self):
        """Test that a counted run queues a greeting plus `count` messages."""
        feed = MessageFeed()
        builder = DataBuilder("%H:%M:%S", DEMO_EMOTES)

        produced = await run_demo_producer(
            feed, builder, count=5, rng=random.Random(7), sleep=_no_sleep
        )

        messages = feed.drain()
        assert produced == 5
        assert len(messages) == 6
        assert messages[0].author == "Twitch"

    @pytest.mark.asyncio
    async def test_glyph_keys_unique(self):
        """Test that demo messages never share an overlay key."""
        feed = MessageFeed()
        builder = DataBuilder("%H:%M:%S", DEMO_EMOTES)

        await run_demo_producer(feed, builder, count=40, rng=random.Random(1), sleep=_no_sleep)

        keys = [g.key for m in feed.drain() for g in m.glyphs]
        assert len(keys) == len(set(keys))

    @pytest.mark.asyncio
    async def test_cancellation(self):
        """Test that an unbounded producer stops when cancelled."""
        feed = MessageFeed()
        task = asyncio.create_task(
            run_demo_producer(feed, DataBuilder("%H"), interval=0.001)
        )
        await asyncio.sleep(0.02)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert feed.pending() >= 1
