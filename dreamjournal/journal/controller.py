"""
Mode controller: the top-level interaction state machine.

Exactly one `InputMode` is active at any time. Each key event is routed by
the active mode:

- NORMAL: browse the list, open the wizard, ask for save/delete/quit
- EDITING: every key goes to the entry wizard
- CONFIRM_SAVE / CONFIRM_DELETE / CONFIRM_QUIT: wait for y / n / Esc
- VIEWING_DETAIL: read-only view of the selected record

Keys a mode does not know are ignored. Tick events never change state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from loguru import logger

from dreamjournal.bus.events import Event, KeyCode, KeyEvent
from dreamjournal.journal.navigator import ListNavigator
from dreamjournal.journal.record import DreamRecord
from dreamjournal.journal.store import CollectionStore
from dreamjournal.journal.wizard import DEFAULT_COMMIT_KEY, EntryWizard, InputField, WizardOutcome


class InputMode(str, Enum):
    """Exclusive interaction modes."""

    NORMAL = "normal"
    EDITING = "editing"
    CONFIRM_SAVE = "confirm_save"
    CONFIRM_DELETE = "confirm_delete"
    CONFIRM_QUIT = "confirm_quit"
    VIEWING_DETAIL = "viewing_detail"


@dataclass(frozen=True)
class WizardView:
    """Read-only copy of the wizard state for rendering."""

    field: InputField
    options: tuple
    option_cursor: int
    frequency: int
    text_buffer: str
    pending: DreamRecord
    is_editing: bool
    commit_key: int = DEFAULT_COMMIT_KEY


@dataclass(frozen=True)
class ViewState:
    """Snapshot of everything the renderer needs for one frame."""

    mode: InputMode
    records: tuple[DreamRecord, ...]
    selected: int | None
    visible_start: int
    window_size: int
    unsaved_changes: bool
    wizard: WizardView | None = None
    notice: str = ""

    @property
    def selected_record(self) -> DreamRecord | None:
        if self.selected is None:
            return None
        return self.records[self.selected]


class ModeController:
    """
    Routes input events to the list navigator, the entry wizard or the
    confirmation dialogs and applies their results to the collection.
    """

    def __init__(
        self,
        store: CollectionStore,
        navigator: ListNavigator,
        commit_key: int = DEFAULT_COMMIT_KEY,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.navigator = navigator
        self.commit_key = commit_key
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.mode = InputMode.NORMAL
        self.wizard: EntryWizard | None = None
        self.notice = ""
        self.running = True

    def handle(self, event: Event) -> None:
        """Process exactly one event."""
        if not isinstance(event, KeyEvent):
            return

        # Notices live until the next key press
        self.notice = ""

        if self.mode is InputMode.NORMAL:
            self._handle_normal(event)
        elif self.mode is InputMode.EDITING:
            self._handle_editing(event)
        elif self.mode is InputMode.CONFIRM_SAVE:
            self._handle_confirm(event, self._save)
        elif self.mode is InputMode.CONFIRM_DELETE:
            self._handle_confirm(event, self._delete_selected)
        elif self.mode is InputMode.CONFIRM_QUIT:
            self._handle_confirm(event, self._quit)
        elif self.mode is InputMode.VIEWING_DETAIL:
            if event.code in (KeyCode.ESC, KeyCode.ENTER) or event.is_char("q"):
                self._set_mode(InputMode.NORMAL)

    def _set_mode(self, mode: InputMode) -> None:
        if mode is not self.mode:
            logger.debug("Mode {} -> {}", self.mode.value, mode.value)
        self.mode = mode

    # ------------------------------------------------------------------
    # Normal mode
    # ------------------------------------------------------------------

    def _handle_normal(self, event: KeyEvent) -> None:
        has_records = len(self.store) > 0

        if event.is_char("q"):
            self._set_mode(InputMode.CONFIRM_QUIT)
        elif event.is_char("a"):
            self.wizard = EntryWizard.create(self.clock(), commit_key=self.commit_key)
            self._set_mode(InputMode.EDITING)
        elif event.is_char("d"):
            if has_records:
                self._set_mode(InputMode.CONFIRM_DELETE)
        elif event.is_char("s"):
            self._set_mode(InputMode.CONFIRM_SAVE)
        elif event.is_char("e"):
            if has_records and self.navigator.selected is not None:
                index = self.navigator.selected
                self.wizard = EntryWizard.edit(index, self.store[index], commit_key=self.commit_key)
                self._set_mode(InputMode.EDITING)
        elif event.code is KeyCode.RIGHT:
            self.navigator.move_right()
        elif event.code is KeyCode.LEFT:
            self.navigator.move_left()
        elif event.code is KeyCode.ENTER:
            if has_records:
                self._set_mode(InputMode.VIEWING_DETAIL)

    # ------------------------------------------------------------------
    # Editing mode
    # ------------------------------------------------------------------

    def _handle_editing(self, event: KeyEvent) -> None:
        if self.wizard is None:
            self._set_mode(InputMode.NORMAL)
            return

        outcome = self.wizard.handle(event)
        if outcome is WizardOutcome.CONTINUE:
            return

        if outcome is WizardOutcome.COMMITTED:
            record = self.wizard.pending
            if self.wizard.edit_target is not None:
                self.store.replace(self.wizard.edit_target, record)
                logger.info("Updated record {}", self.wizard.edit_target + 1)
            else:
                self.store.insert(record)
                self.navigator.on_insert_at_end()
                logger.info("Added record {} ({})", len(self.store), record.date)

        self.wizard = None
        self._set_mode(InputMode.NORMAL)

    # ------------------------------------------------------------------
    # Confirmation dialogs
    # ------------------------------------------------------------------

    def _handle_confirm(self, event: KeyEvent, on_yes: Callable[[], None]) -> None:
        if event.is_char("y"):
            self._set_mode(InputMode.NORMAL)
            on_yes()
        elif event.is_char("n") or event.code is KeyCode.ESC:
            self._set_mode(InputMode.NORMAL)

    def _save(self) -> None:
        try:
            path = self.store.save()
        except OSError as e:
            self.notice = f"Save failed: {e}"
            return
        self.notice = f"Journal saved to {path}"

    def _delete_selected(self) -> None:
        index = self.navigator.selected
        if index is None:
            return
        self.store.delete(index)
        self.navigator.on_delete(index)
        logger.info("Deleted record {}", index + 1)

    def _quit(self) -> None:
        self.running = False
        logger.info("Quit confirmed")

    # ------------------------------------------------------------------
    # Rendering snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> ViewState:
        """Return an immutable view of the current state."""
        wizard_view = None
        if self.wizard is not None:
            wizard_view = WizardView(
                field=self.wizard.field,
                options=self.wizard.options,
                option_cursor=self.wizard.option_cursor,
                frequency=self.wizard.frequency,
                text_buffer=self.wizard.text_buffer,
                pending=self.wizard.pending.copy(),
                is_editing=self.wizard.is_editing,
                commit_key=self.wizard.commit_key,
            )

        return ViewState(
            mode=self.mode,
            records=self.store.records,
            selected=self.navigator.selected,
            visible_start=self.navigator.visible_start,
            window_size=self.navigator.window_size,
            unsaved_changes=self.store.unsaved_changes,
            wizard=wizard_view,
            notice=self.notice,
        )
