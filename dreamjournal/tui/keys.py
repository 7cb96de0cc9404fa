"""Translate curses key codes into journal key events."""

from __future__ import annotations

import curses

from dreamjournal.bus.events import KeyCode, KeyEvent

MAX_FUNCTION_KEY = 12

_SPECIAL_KEYS: dict[int, KeyCode] = {
    curses.KEY_ENTER: KeyCode.ENTER,
    curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
    curses.KEY_LEFT: KeyCode.LEFT,
    curses.KEY_RIGHT: KeyCode.RIGHT,
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
}

_CONTROL_CHARS: dict[str, KeyCode] = {
    "\n": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\x1b": KeyCode.ESC,
    "\x7f": KeyCode.BACKSPACE,
    "\b": KeyCode.BACKSPACE,
}


def translate_key(key: int | str) -> KeyEvent | None:
    """
    Map a value returned by `window.get_wch()` (or `getch()`) to a KeyEvent.

    Returns None for keys the journal has no use for (mouse, resize, tab...).
    """
    if isinstance(key, str):
        if key in _CONTROL_CHARS:
            return KeyEvent(_CONTROL_CHARS[key])
        if len(key) == 1 and key.isprintable():
            return KeyEvent.of(key)
        return None

    if key in _SPECIAL_KEYS:
        return KeyEvent(_SPECIAL_KEYS[key])
    if curses.KEY_F0 < key <= curses.KEY_F0 + MAX_FUNCTION_KEY:
        return KeyEvent.fn(key - curses.KEY_F0)
    # getch() returns plain ints for single-byte input
    if 0 <= key < 256:
        return translate_key(chr(key))
    return None
