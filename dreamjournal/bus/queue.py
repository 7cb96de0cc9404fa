"""Async event queue feeding the main loop."""

from __future__ import annotations

import asyncio

from dreamjournal.bus.events import Event


class EventBus:
    """
    One-directional, ordered, unbounded queue between input producers and
    the single consumer (the main loop).

    Producers (key reader, ticker) publish; the main loop consumes exactly
    one event per iteration.
    """

    def __init__(self):
        self.events: asyncio.Queue[Event] = asyncio.Queue()

    async def publish(self, event: Event) -> None:
        """Publish an event from an async producer."""
        await self.events.put(event)

    def publish_nowait(self, event: Event) -> None:
        """Publish an event from a synchronous callback (the queue is unbounded)."""
        self.events.put_nowait(event)

    async def consume(self) -> Event:
        """Consume the next event (blocks until available)."""
        return await self.events.get()

    @property
    def size(self) -> int:
        """Number of pending events."""
        return self.events.qsize()
