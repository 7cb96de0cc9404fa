"""Terminal application: input producers plus the main consumer loop."""

from __future__ import annotations

import asyncio
import curses
import sys
from collections.abc import Callable

from loguru import logger

from dreamjournal.bus.events import KeyEvent, TickEvent
from dreamjournal.bus.queue import EventBus
from dreamjournal.config.schema import Config
from dreamjournal.journal.controller import ModeController, ViewState
from dreamjournal.journal.navigator import ListNavigator
from dreamjournal.journal.store import CollectionStore
from dreamjournal.tui import render
from dreamjournal.tui.keys import translate_key


class TerminalApp:
    """
    Runs the journal in a curses screen.

    Producers:
    - key reader: event-loop reader callback on stdin, drains pending keys
    - ticker: publishes a TickEvent every `tick_rate_ms`

    Consumer (main loop):
    - redraw, wait for the next event, hand it to the controller
    - exactly one event per iteration, redraw on every iteration
    """

    def __init__(
        self,
        config: Config,
        store: CollectionStore,
        bus: EventBus | None = None,
        draw: Callable[[curses.window, ViewState], None] = render.draw,
    ):
        self.config = config
        self.store = store
        self.bus = bus or EventBus()
        self.navigator = ListNavigator(store, window_size=config.journal.window_size)
        self.controller = ModeController(store, self.navigator, commit_key=config.interface.commit_key)
        self._draw = draw
        self._tasks: list[asyncio.Task] = []

    def read_keys(self, stdscr: curses.window) -> None:
        """Publish every key currently waiting on the terminal."""
        while True:
            try:
                key = stdscr.get_wch()
            except curses.error:
                # No input pending
                return
            event = translate_key(key)
            if event is not None:
                self.bus.publish_nowait(event)
            else:
                logger.trace("Ignored key {!r}", key)

    async def _tick(self) -> None:
        interval = self.config.interface.tick_rate_ms / 1000
        while True:
            await asyncio.sleep(interval)
            await self.bus.publish(TickEvent.now())

    async def process(self, stdscr: curses.window) -> None:
        """Main loop. Returns once the user confirmed quitting."""
        logger.info("Journal started with {} records", len(self.store))
        while self.controller.running:
            self._draw(stdscr, self.controller.snapshot())
            event = await self.bus.consume()
            if isinstance(event, KeyEvent):
                logger.trace("Key {}", event)
            self.controller.handle(event)
        logger.info("Journal closed")

    async def run(self, stdscr: curses.window) -> None:
        """Start the producers, run the main loop and tear the producers down."""
        loop = asyncio.get_running_loop()
        stdscr.nodelay(True)
        stdscr.keypad(True)

        loop.add_reader(sys.stdin.fileno(), self.read_keys, stdscr)
        self._tasks.append(asyncio.create_task(self._tick()))
        try:
            await self.process(stdscr)
        finally:
            loop.remove_reader(sys.stdin.fileno())
            for task in self._tasks:
                task.cancel()
            await asyncio.gather(*self._tasks, return_exceptions=True)
            self._tasks.clear()

    def main(self, stdscr: curses.window) -> None:
        """Entry point for `curses.wrapper`."""
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.set_escdelay(self.config.interface.escape_delay_ms)
        render.init_colors(self.config.interface.colors)
        asyncio.run(self.run(stdscr))


def run_terminal(config: Config, store: CollectionStore) -> None:
    """Open the curses screen and run the journal until the user quits."""
    app = TerminalApp(config, store)
    curses.wrapper(app.main)
