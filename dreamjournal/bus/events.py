"""Event types for the event bus."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class KeyCode(str, Enum):
    """Logical keys the journal understands."""

    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    FUNCTION = "function"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press from the terminal."""

    code: KeyCode
    char: str = ""  # Set for CHAR
    number: int = 0  # Set for FUNCTION (F1 -> 1)

    @classmethod
    def of(cls, char: str) -> KeyEvent:
        """Shortcut for a printable character."""
        return cls(KeyCode.CHAR, char=char)

    @classmethod
    def fn(cls, number: int) -> KeyEvent:
        """Shortcut for a function key."""
        return cls(KeyCode.FUNCTION, number=number)

    def is_char(self, char: str) -> bool:
        return self.code is KeyCode.CHAR and self.char == char


@dataclass(frozen=True)
class TickEvent:
    """Periodic timer event. Carries no state change, only forces a redraw."""

    timestamp: datetime | None = None

    @classmethod
    def now(cls) -> TickEvent:
        return cls(timestamp=datetime.now(timezone.utc))


Event = KeyEvent | TickEvent
