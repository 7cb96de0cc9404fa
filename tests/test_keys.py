"""Tests for curses key translation."""

import curses

import pytest

from dreamjournal.bus.events import KeyCode, KeyEvent
from dreamjournal.tui.keys import translate_key


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a", KeyEvent.of("a")),
        ("é", KeyEvent.of("é")),
        (" ", KeyEvent.of(" ")),
        ("\n", KeyEvent(KeyCode.ENTER)),
        ("\r", KeyEvent(KeyCode.ENTER)),
        ("\x1b", KeyEvent(KeyCode.ESC)),
        ("\x7f", KeyEvent(KeyCode.BACKSPACE)),
        (curses.KEY_ENTER, KeyEvent(KeyCode.ENTER)),
        (curses.KEY_BACKSPACE, KeyEvent(KeyCode.BACKSPACE)),
        (curses.KEY_LEFT, KeyEvent(KeyCode.LEFT)),
        (curses.KEY_RIGHT, KeyEvent(KeyCode.RIGHT)),
        (curses.KEY_UP, KeyEvent(KeyCode.UP)),
        (curses.KEY_DOWN, KeyEvent(KeyCode.DOWN)),
        (curses.KEY_F1, KeyEvent.fn(1)),
        (curses.KEY_F0 + 12, KeyEvent.fn(12)),
        (ord("q"), KeyEvent.of("q")),
        (27, KeyEvent(KeyCode.ESC)),
        (10, KeyEvent(KeyCode.ENTER)),
        (127, KeyEvent(KeyCode.BACKSPACE)),
    ],
)
def test_translate(raw, expected):
    assert translate_key(raw) == expected


@pytest.mark.parametrize("raw", ["\t", "\x01", curses.KEY_RESIZE, curses.KEY_MOUSE, curses.KEY_F0, -1])
def test_ignored_keys(raw):
    assert translate_key(raw) is None


def test_is_char():
    assert KeyEvent.of("y").is_char("y")
    assert not KeyEvent.of("y").is_char("n")
    assert not KeyEvent(KeyCode.ENTER).is_char("")
