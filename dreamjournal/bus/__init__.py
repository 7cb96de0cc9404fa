"""Event bus module for decoupled input-loop communication."""

from dreamjournal.bus.events import KeyCode, KeyEvent, TickEvent
from dreamjournal.bus.queue import EventBus

__all__ = ["EventBus", "KeyCode", "KeyEvent", "TickEvent"]
