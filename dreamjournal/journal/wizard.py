"""
Entry wizard: the step-by-step flow that builds one dream record.

Fields are visited strictly in order:

    Intensity -> Frequency -> Style -> Experience -> commit

Enter confirms the current field and moves to the next one; Esc aborts the
whole wizard. The record under construction (`pending`) is always a private
copy, so nothing reaches the collection until the final commit.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from loguru import logger

from dreamjournal.bus.events import KeyCode, KeyEvent
from dreamjournal.journal.record import (
    EMPTY_EXPERIENCE,
    FREQUENCY_MAX,
    FREQUENCY_MIN,
    INTENSITY_OPTIONS,
    STYLE_OPTIONS,
    DreamRecord,
)

DEFAULT_COMMIT_KEY = 1  # F1


class InputField(str, Enum):
    """Wizard field currently receiving input."""

    INTENSITY = "intensity"
    FREQUENCY = "frequency"
    STYLE = "style"
    EXPERIENCE = "experience"
    NONE = "none"


class WizardOutcome(str, Enum):
    """Result of feeding one key to the wizard."""

    CONTINUE = "continue"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


def _position(options: tuple, value: object) -> int:
    try:
        return options.index(value)
    except ValueError:
        return 0


class EntryWizard:
    """
    Builds a new record or edits a copy of an existing one.

    Use `EntryWizard.create()` for a new record and `EntryWizard.edit()` to
    resume from a stored one. Feed keys with `handle()` until it returns
    COMMITTED (read `pending` and `edit_target`) or CANCELLED (discard).
    """

    def __init__(
        self,
        pending: DreamRecord,
        edit_target: int | None = None,
        commit_key: int = DEFAULT_COMMIT_KEY,
    ):
        self.pending = pending
        self.edit_target = edit_target
        self.commit_key = commit_key
        self.field = InputField.INTENSITY
        self.option_cursor = 0
        self.frequency = FREQUENCY_MIN
        self.text_buffer = ""

        # Values the edited record had when the wizard started, used to seed each field
        self._original = pending.copy() if edit_target is not None else None
        if self._original is not None:
            self.option_cursor = _position(INTENSITY_OPTIONS, self._original.intensity)
            self.frequency = self._original.frequency
            self.text_buffer = self._original.experience

    @classmethod
    def create(cls, now: datetime | None = None, commit_key: int = DEFAULT_COMMIT_KEY) -> EntryWizard:
        """Start a wizard for a brand new record."""
        return cls(DreamRecord.blank(now), commit_key=commit_key)

    @classmethod
    def edit(cls, index: int, record: DreamRecord, commit_key: int = DEFAULT_COMMIT_KEY) -> EntryWizard:
        """Start a wizard seeded from the record stored at `index`."""
        return cls(record.copy(), edit_target=index, commit_key=commit_key)

    @property
    def is_editing(self) -> bool:
        return self.edit_target is not None

    @property
    def options(self) -> tuple:
        """Option list of the active selection field (empty for other fields)."""
        if self.field is InputField.INTENSITY:
            return INTENSITY_OPTIONS
        if self.field is InputField.STYLE:
            return STYLE_OPTIONS
        return ()

    def handle(self, event: KeyEvent) -> WizardOutcome:
        """Apply one key press to the active field."""
        if event.code is KeyCode.ESC:
            logger.debug("Wizard cancelled at {}", self.field.value)
            self.field = InputField.NONE
            return WizardOutcome.CANCELLED

        if self.field in (InputField.INTENSITY, InputField.STYLE):
            self._handle_selection(event)
        elif self.field is InputField.FREQUENCY:
            self._handle_frequency(event)
        elif self.field is InputField.EXPERIENCE:
            return self._handle_experience(event)

        return WizardOutcome.CONTINUE

    def _handle_selection(self, event: KeyEvent) -> None:
        if event.code is KeyCode.UP:
            if self.option_cursor > 0:
                self.option_cursor -= 1
        elif event.code is KeyCode.DOWN:
            if self.option_cursor < len(self.options) - 1:
                self.option_cursor += 1
        elif event.code is KeyCode.ENTER:
            choice = self.options[self.option_cursor]
            self.option_cursor = 0
            if self.field is InputField.INTENSITY:
                self.pending.intensity = choice
                self.field = InputField.FREQUENCY
                if self._original is None:
                    self.frequency = FREQUENCY_MIN
            else:
                self.pending.style = choice
                self.field = InputField.EXPERIENCE
                if self._original is None:
                    self.text_buffer = ""

    def _handle_frequency(self, event: KeyEvent) -> None:
        if event.code is KeyCode.UP:
            if self.frequency < FREQUENCY_MAX:
                self.frequency += 1
        elif event.code is KeyCode.DOWN:
            if self.frequency > FREQUENCY_MIN:
                self.frequency -= 1
        elif event.code is KeyCode.ENTER:
            self.pending.frequency = self.frequency
            self.field = InputField.STYLE
            self.option_cursor = 0
            if self._original is not None:
                self.option_cursor = _position(STYLE_OPTIONS, self._original.style)

    def _handle_experience(self, event: KeyEvent) -> WizardOutcome:
        if event.code is KeyCode.FUNCTION and event.number == self.commit_key:
            self._commit()
            return WizardOutcome.COMMITTED
        if event.code is KeyCode.ENTER:
            self.text_buffer += "\n"
        elif event.code is KeyCode.CHAR and event.char:
            self.text_buffer += event.char
        elif event.code is KeyCode.BACKSPACE:
            self.text_buffer = self.text_buffer[:-1]
        return WizardOutcome.CONTINUE

    def _commit(self) -> None:
        if self.text_buffer.strip():
            self.pending.experience = self.text_buffer
        else:
            self.pending.experience = EMPTY_EXPERIENCE
        self.text_buffer = ""
        self.field = InputField.NONE
        logger.debug("Wizard committed (edit target: {})", self.edit_target)
