"""Curses rendering of a `ViewState` snapshot."""

from __future__ import annotations

import curses
import textwrap

from dreamjournal.journal.controller import InputMode, ViewState, WizardView
from dreamjournal.journal.record import DreamRecord, Intensity
from dreamjournal.journal.wizard import InputField

TITLE = "Dreaming Journal"
INSTRUCTIONS = (
    "Press 'a' to add, 'e' to edit, 'd' to delete, 's' to save, 'q' to quit.",
    "Use Left/Right to navigate, Enter to read a dream.",
)

MIN_COL_WIDTH = 14
MIN_HEIGHT = 16

# Color pair ids
PAIR_TEXT = 1
PAIR_LOW = 2
PAIR_MEDIUM = 3
PAIR_HIGH = 4
PAIR_TITLE = 5
PAIR_EMPTY = 6

INTENSITY_PAIRS = {
    Intensity.LOW: PAIR_LOW,
    Intensity.MEDIUM: PAIR_MEDIUM,
    Intensity.HIGH: PAIR_HIGH,
}

_colors_enabled = False


def init_colors(enabled: bool = True) -> None:
    """Register the color pairs. Falls back to monochrome when unsupported."""
    global _colors_enabled
    _colors_enabled = False
    if not enabled or not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(PAIR_TEXT, curses.COLOR_WHITE, -1)
    curses.init_pair(PAIR_LOW, curses.COLOR_GREEN, -1)  # low intensity, "up to date"
    curses.init_pair(PAIR_MEDIUM, curses.COLOR_YELLOW, -1)
    curses.init_pair(PAIR_HIGH, curses.COLOR_RED, -1)  # high intensity, unsaved changes
    curses.init_pair(PAIR_TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(PAIR_EMPTY, curses.COLOR_BLACK, -1)
    _colors_enabled = True


def color(pair: int) -> int:
    return curses.color_pair(pair) if _colors_enabled else 0


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text to width, keeping explicit line breaks and blank lines."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph, width=max(1, width)) or [""])
    return lines


def _put(win: curses.window, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x < 0 or x >= width:
        return
    try:
        win.addnstr(y, x, text, max(0, width - x - 1), attr)
    except curses.error:
        pass


def _box(win: curses.window, y: int, x: int, h: int, w: int, title: str, attr: int) -> None:
    if h < 2 or w < 2:
        return
    try:
        win.hline(y, x + 1, curses.ACS_HLINE | attr, w - 2)
        win.hline(y + h - 1, x + 1, curses.ACS_HLINE | attr, w - 2)
        win.vline(y + 1, x, curses.ACS_VLINE | attr, h - 2)
        win.vline(y + 1, x + w - 1, curses.ACS_VLINE | attr, h - 2)
        win.addch(y, x, curses.ACS_ULCORNER | attr)
        win.addch(y, x + w - 1, curses.ACS_URCORNER | attr)
        win.addch(y + h - 1, x, curses.ACS_LLCORNER | attr)
        win.addch(y + h - 1, x + w - 1, curses.ACS_LRCORNER | attr)
    except curses.error:
        pass
    if title and w > 4:
        _put(win, y, x + 2, f" {title} "[: w - 4], attr | curses.A_BOLD)


def record_summary(record: DreamRecord) -> list[str]:
    """Lines shown inside a record column."""
    return [
        "Dreamed at:",
        record.date,
        "",
        f"Intensity: {record.intensity.value}",
        f"Frequency: {record.frequency}",
        f"Style: {record.style.value}",
    ]


def draw(stdscr: curses.window, view: ViewState) -> None:
    """Draw one full frame for `view`."""
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    required_width = MIN_COL_WIDTH * view.window_size + 2
    if width < required_width or height < MIN_HEIGHT:
        msg = f"dreamjournal needs at least {required_width}x{MIN_HEIGHT}. current: {width}x{height}"
        _put(stdscr, max(0, height // 2 - 1), 1, msg, curses.A_BOLD)
        _put(stdscr, max(0, height // 2), 1, "resize your terminal to continue")
        stdscr.refresh()
        return

    _draw_header(stdscr, view, width)
    _draw_records(stdscr, view, height, width)
    _draw_footer(stdscr, view, height)
    stdscr.noutrefresh()

    popup = _draw_popup(stdscr, view)
    if popup is not None:
        popup.noutrefresh()
    curses.doupdate()


def _draw_header(stdscr: curses.window, view: ViewState, width: int) -> None:
    _put(stdscr, 0, 1, TITLE, color(PAIR_TITLE) | curses.A_BOLD | curses.A_ITALIC)
    if view.unsaved_changes:
        status, pair = "Changes ●", PAIR_HIGH
    else:
        status, pair = "Up to date ●", PAIR_LOW
    _put(stdscr, 0, max(1, width - len(status) - 2), status, color(pair))


def _draw_records(stdscr: curses.window, view: ViewState, height: int, width: int) -> None:
    top = 2
    box_h = height - top - 4
    col_w = (width - 2) // view.window_size

    for slot in range(view.window_size):
        index = view.visible_start + slot
        x = 1 + slot * col_w
        title = f"Record {index + 1}"

        if index >= len(view.records):
            _box(stdscr, top, x, box_h, col_w, title, color(PAIR_EMPTY) | curses.A_DIM)
            _put(stdscr, top + 1, x + 2, "No Dream", color(PAIR_EMPTY) | curses.A_DIM)
            continue

        record = view.records[index]
        attr = color(INTENSITY_PAIRS[record.intensity])
        selected = index == view.selected
        _box(stdscr, top, x, box_h, col_w, title, attr | (curses.A_BOLD if selected else 0))

        line_attr = attr | (curses.A_REVERSE if selected else 0)
        content_w = col_w - 4
        row = top + 1
        for line in record_summary(record):
            for part in wrap_text(line, content_w):
                if row >= top + box_h - 1:
                    break
                text = part.ljust(content_w) if selected else part
                _put(stdscr, row, x + 2, text[:content_w], line_attr)
                row += 1


def _draw_footer(stdscr: curses.window, view: ViewState, height: int) -> None:
    y = height - 3
    for offset, line in enumerate(INSTRUCTIONS):
        _put(stdscr, y + offset, 1, line, color(PAIR_TEXT))
    if view.notice:
        _put(stdscr, height - 1, 1, view.notice, curses.A_BOLD)


def _popup(stdscr: curses.window, lines: int, title: str) -> curses.window:
    height, width = stdscr.getmaxyx()
    win_w = min(width - 4, max(50, width // 2))
    win_h = min(height - 2, max(5, lines + 2))
    start_y = max(1, (height - win_h) // 2)
    start_x = max(2, (width - win_w) // 2)
    win = curses.newwin(win_h, win_w, start_y, start_x)
    win.erase()
    win.border()
    _put(win, 0, max(1, (win_w - len(title) - 2) // 2), f" {title} ", curses.A_BOLD)
    return win


def _draw_popup(stdscr: curses.window, view: ViewState) -> curses.window | None:
    if view.mode is InputMode.EDITING and view.wizard is not None:
        return _draw_wizard(stdscr, view.wizard)
    if view.mode is InputMode.CONFIRM_SAVE:
        return _draw_confirm(stdscr, "Save", ["Save all dreams to file? (y/n)"])
    if view.mode is InputMode.CONFIRM_DELETE:
        return _draw_confirm(stdscr, "Delete", ["Delete the selected dream? (y/n)"])
    if view.mode is InputMode.CONFIRM_QUIT:
        lines = ["Are you sure you want to quit? (y/n)"]
        if view.unsaved_changes:
            lines.append("Unsaved changes will be lost.")
        return _draw_confirm(stdscr, "Quit", lines)
    if view.mode is InputMode.VIEWING_DETAIL and view.selected_record is not None:
        return _draw_detail(stdscr, view.selected_record, view.selected)
    return None


def _draw_confirm(stdscr: curses.window, title: str, lines: list[str]) -> curses.window:
    win = _popup(stdscr, len(lines) + 2, title)
    for row, line in enumerate(lines, start=2):
        _put(win, row, 2, line, curses.A_BOLD if row == 2 else 0)
    return win


def _draw_wizard(stdscr: curses.window, wizard: WizardView) -> curses.window:
    heading = "Edit Dream" if wizard.is_editing else "New Dream"

    if wizard.field in (InputField.INTENSITY, InputField.STYLE):
        label = "Select Intensity" if wizard.field is InputField.INTENSITY else "Select Style"
        win = _popup(stdscr, len(wizard.options) + 4, f"{heading}: {label}")
        for row, option in enumerate(wizard.options):
            marker = ">" if row == wizard.option_cursor else " "
            attr = curses.A_REVERSE if row == wizard.option_cursor else 0
            _put(win, row + 2, 2, f"{marker} {option.value}", attr)
        _put(win, len(wizard.options) + 3, 2, "Up/Down to choose, Enter to confirm, Esc to cancel", curses.A_DIM)
        return win

    if wizard.field is InputField.FREQUENCY:
        win = _popup(stdscr, 5, f"{heading}: Frequency")
        _put(win, 2, 2, f"How often does this dream come back? {wizard.frequency} / 10", curses.A_BOLD)
        bar = "#" * wizard.frequency + "." * (10 - wizard.frequency)
        _put(win, 3, 2, f"[{bar}]")
        _put(win, 5, 2, "Up/Down to change, Enter to confirm, Esc to cancel", curses.A_DIM)
        return win

    height, _ = stdscr.getmaxyx()
    win = _popup(stdscr, height - 4, f"{heading}: Experience")
    win_h, win_w = win.getmaxyx()
    text_lines = wrap_text(wizard.text_buffer + "_", win_w - 4)
    room = win_h - 4
    for row, line in enumerate(text_lines[-room:], start=1):
        _put(win, row, 2, line)
    _put(win, win_h - 2, 2, f"Enter: new line  F{wizard.commit_key}: save  Esc: cancel", curses.A_DIM)
    return win


def _draw_detail(stdscr: curses.window, record: DreamRecord, index: int | None) -> curses.window:
    height, width = stdscr.getmaxyx()
    win_w = min(width - 4, max(50, width // 2))
    body = wrap_text(record.experience, win_w - 4)
    lines = [
        f"Dreamed at: {record.date}",
        f"Intensity: {record.intensity.value}",
        f"Frequency: {record.frequency}",
        f"Style: {record.style.value}",
        "",
        "Experience:",
        *body,
    ]
    title = f"Record {(index or 0) + 1} (Esc/Enter to close)"
    win = _popup(stdscr, len(lines) + 1, title)
    win_h, _ = win.getmaxyx()
    for row, line in enumerate(lines[: win_h - 2], start=1):
        _put(win, row, 2, line, curses.A_BOLD if row <= 4 else 0)
    return win
