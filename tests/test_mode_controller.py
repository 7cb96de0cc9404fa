"""Tests for the mode controller state machine."""

import json
from pathlib import Path

import pytest

from conftest import FIXED_NOW, make_record
from dreamjournal.bus.events import KeyCode, KeyEvent, TickEvent
from dreamjournal.journal.controller import InputMode, ModeController
from dreamjournal.journal.navigator import ListNavigator
from dreamjournal.journal.record import EMPTY_EXPERIENCE, Intensity
from dreamjournal.journal.store import CollectionStore
from dreamjournal.journal.wizard import InputField

UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)
LEFT = KeyEvent(KeyCode.LEFT)
RIGHT = KeyEvent(KeyCode.RIGHT)
ENTER = KeyEvent(KeyCode.ENTER)
ESC = KeyEvent(KeyCode.ESC)
COMMIT = KeyEvent.fn(1)


def key(char: str) -> KeyEvent:
    return KeyEvent.of(char)


def press(controller: ModeController, *events: KeyEvent) -> None:
    for event in events:
        controller.handle(event)


@pytest.fixture
def make_controller(make_store):
    def _make(count: int = 0, window_size: int = 7) -> ModeController:
        store = make_store(count)
        navigator = ListNavigator(store, window_size=window_size)
        return ModeController(store, navigator, clock=lambda: FIXED_NOW)

    return _make


class TestNormalMode:
    """Key routing while browsing."""

    def test_initial_mode(self, make_controller):
        controller = make_controller(2)
        assert controller.mode is InputMode.NORMAL
        assert controller.running is True

    def test_navigation_scenario(self, make_controller):
        controller = make_controller(3)
        press(controller, RIGHT, RIGHT)
        assert controller.navigator.selected == 2
        assert controller.navigator.visible_start == 0
        press(controller, LEFT)
        assert controller.navigator.selected == 1

    def test_add_opens_blank_wizard(self, make_controller):
        controller = make_controller(1)
        press(controller, key("a"))
        assert controller.mode is InputMode.EDITING
        assert controller.wizard.field is InputField.INTENSITY
        assert controller.wizard.option_cursor == 0
        assert controller.wizard.edit_target is None
        assert controller.wizard.pending.date == "2024-03-01 06:30:00"

    def test_edit_opens_seeded_wizard(self, make_controller):
        controller = make_controller(3)
        press(controller, RIGHT, key("e"))
        assert controller.mode is InputMode.EDITING
        assert controller.wizard.edit_target == 1
        assert controller.wizard.pending == make_record(1)
        assert controller.wizard.pending is not controller.store[1]

    @pytest.mark.parametrize("char", ["d", "e"])
    def test_record_actions_need_records(self, make_controller, char):
        controller = make_controller(0)
        press(controller, key(char))
        assert controller.mode is InputMode.NORMAL

    def test_enter_needs_records(self, make_controller):
        controller = make_controller(0)
        press(controller, ENTER)
        assert controller.mode is InputMode.NORMAL

    def test_save_allowed_on_empty_journal(self, make_controller):
        controller = make_controller(0)
        press(controller, key("s"))
        assert controller.mode is InputMode.CONFIRM_SAVE

    def test_unknown_keys_ignored(self, make_controller):
        controller = make_controller(2)
        press(controller, key("z"), UP, DOWN, ESC, KeyEvent.fn(3), KeyEvent(KeyCode.BACKSPACE))
        assert controller.mode is InputMode.NORMAL
        assert controller.navigator.selected == 0
        assert controller.store.unsaved_changes is False

    def test_tick_changes_nothing(self, make_controller):
        controller = make_controller(2)
        press(controller, key("s"))
        controller.notice = "kept"
        controller.handle(TickEvent.now())
        assert controller.mode is InputMode.CONFIRM_SAVE
        assert controller.notice == "kept"


class TestEditing:
    """Wizard results applied to the collection."""

    def test_add_record(self, make_controller):
        controller = make_controller(2)
        press(controller, key("a"), DOWN, ENTER, UP, ENTER, ENTER)
        press(controller, key("h"), key("i"), COMMIT)

        assert controller.mode is InputMode.NORMAL
        assert controller.wizard is None
        assert len(controller.store) == 3
        added = controller.store[2]
        assert added.intensity is Intensity.MEDIUM
        assert added.frequency == 1
        assert added.experience == "hi"
        assert controller.store.unsaved_changes is True
        assert controller.navigator.selected == 2

    def test_add_ninth_record_scrolls(self, make_controller):
        controller = make_controller(8, window_size=7)
        press(controller, key("a"), ENTER, ENTER, ENTER, COMMIT)
        assert len(controller.store) == 9
        assert controller.navigator.selected == 8
        assert controller.navigator.visible_start == 2
        assert controller.store[8].experience == EMPTY_EXPERIENCE

    def test_edit_replaces_in_place(self, make_controller):
        controller = make_controller(3)
        press(controller, RIGHT, key("e"), ENTER, UP, ENTER, ENTER, key("!"), COMMIT)

        assert len(controller.store) == 3
        assert controller.store[1].frequency == make_record(1).frequency + 1
        assert controller.store[1].experience == "Dream number 1!"
        assert controller.store[0] == make_record(0)
        assert controller.navigator.selected == 1

    def test_edit_unchanged_round_trip(self, make_controller):
        controller = make_controller(4)
        press(controller, RIGHT, RIGHT, key("e"), ENTER, ENTER, ENTER, COMMIT)
        assert controller.store.records == tuple(make_record(i) for i in range(4))

    @pytest.mark.parametrize("steps", [0, 1, 2, 3])
    def test_cancel_leaves_collection_untouched(self, make_controller, steps):
        for start in (key("a"), key("e")):
            controller = make_controller(3)
            before = controller.store.records
            press(controller, start, DOWN, UP, UP)
            press(controller, *[ENTER] * steps)
            press(controller, key("x"), ESC)

            assert controller.mode is InputMode.NORMAL
            assert controller.wizard is None
            assert controller.store.records == before
            assert controller.store.unsaved_changes is False

    def test_edit_does_not_leak_before_commit(self, make_controller):
        controller = make_controller(2)
        press(controller, key("e"), DOWN, DOWN, ENTER)
        assert controller.store[0] == make_record(0)
        assert controller.snapshot().records[0] == make_record(0)

    def test_normal_keys_go_to_wizard(self, make_controller):
        controller = make_controller(2)
        press(controller, key("a"), ENTER, ENTER, ENTER, key("q"), key("d"))
        assert controller.mode is InputMode.EDITING
        assert controller.wizard.text_buffer == "qd"


class TestConfirmSave:
    """Save confirmation."""

    def test_yes_saves_and_clears_dirty(self, make_controller, journal_path: Path):
        controller = make_controller(2)
        press(controller, key("a"), ENTER, ENTER, ENTER, COMMIT)
        assert controller.store.unsaved_changes is True

        press(controller, key("s"), key("y"))
        assert controller.mode is InputMode.NORMAL
        assert controller.store.unsaved_changes is False
        data = json.loads(journal_path.read_text(encoding="utf-8"))
        assert data == [r.to_dict() for r in controller.store.records]
        assert "saved" in controller.notice

    @pytest.mark.parametrize("answer", [key("n"), ESC])
    def test_no_leaves_file_untouched(self, make_controller, journal_path: Path, answer):
        controller = make_controller(1)
        press(controller, key("a"), ENTER, ENTER, ENTER, COMMIT)

        press(controller, key("s"), answer)
        assert controller.mode is InputMode.NORMAL
        assert controller.store.unsaved_changes is True
        assert not journal_path.exists()

    def test_failed_save_reports_notice(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = CollectionStore(blocker / "dreams.json", [make_record(0)])
        store.insert(make_record(1))
        controller = ModeController(store, ListNavigator(store))

        press(controller, key("s"), key("y"))
        assert controller.mode is InputMode.NORMAL
        assert controller.notice.startswith("Save failed")
        assert store.unsaved_changes is True

        press(controller, RIGHT)
        assert controller.notice == ""

    def test_other_keys_ignored(self, make_controller):
        controller = make_controller(1)
        press(controller, key("s"), key("x"), ENTER, LEFT)
        assert controller.mode is InputMode.CONFIRM_SAVE


class TestConfirmDelete:
    """Delete confirmation."""

    def test_yes_deletes_selected(self, make_controller):
        controller = make_controller(3)
        press(controller, RIGHT, key("d"))
        assert controller.mode is InputMode.CONFIRM_DELETE
        press(controller, key("y"))

        assert controller.mode is InputMode.NORMAL
        assert controller.store.records == (make_record(0), make_record(2))
        assert controller.navigator.selected == 1
        assert controller.store.unsaved_changes is True

    @pytest.mark.parametrize("answer", [key("n"), ESC])
    def test_cancel_keeps_record(self, make_controller, answer):
        controller = make_controller(3)
        press(controller, key("d"), answer)
        assert controller.mode is InputMode.NORMAL
        assert len(controller.store) == 3
        assert controller.store.unsaved_changes is False

    def test_delete_only_record_then_noop(self, make_controller):
        controller = make_controller(1)
        press(controller, key("d"), key("y"))
        assert len(controller.store) == 0
        assert controller.navigator.selected is None
        assert controller.navigator.visible_start == 0

        press(controller, key("d"))
        assert controller.mode is InputMode.NORMAL
        press(controller, key("y"))
        assert controller.mode is InputMode.NORMAL


class TestConfirmQuit:
    """Quit confirmation."""

    def test_yes_stops(self, make_controller):
        controller = make_controller(1)
        press(controller, key("q"))
        assert controller.mode is InputMode.CONFIRM_QUIT
        press(controller, key("y"))
        assert controller.running is False

    @pytest.mark.parametrize("answer", [key("n"), ESC])
    def test_cancel_returns_to_normal(self, make_controller, answer):
        controller = make_controller(1)
        press(controller, key("q"), answer)
        assert controller.mode is InputMode.NORMAL
        assert controller.running is True


class TestViewingDetail:
    """Read-only detail view."""

    @pytest.mark.parametrize("close", [ESC, ENTER, key("q")])
    def test_close_keys(self, make_controller, close):
        controller = make_controller(2)
        press(controller, ENTER)
        assert controller.mode is InputMode.VIEWING_DETAIL
        press(controller, close)
        assert controller.mode is InputMode.NORMAL
        assert controller.running is True

    def test_other_keys_ignored(self, make_controller):
        controller = make_controller(2)
        press(controller, ENTER, RIGHT, key("d"), key("a"))
        assert controller.mode is InputMode.VIEWING_DETAIL
        assert controller.navigator.selected == 0


class TestSnapshot:
    """Render snapshots."""

    def test_snapshot_of_normal_mode(self, make_controller):
        controller = make_controller(3)
        press(controller, RIGHT)
        view = controller.snapshot()
        assert view.mode is InputMode.NORMAL
        assert view.selected == 1
        assert view.selected_record == make_record(1)
        assert view.window_size == 7
        assert view.wizard is None

    def test_snapshot_of_wizard(self, make_controller):
        controller = make_controller(0)
        press(controller, key("a"), ENTER, UP, UP)
        view = controller.snapshot()
        assert view.wizard.field is InputField.FREQUENCY
        assert view.wizard.frequency == 2
        assert view.wizard.is_editing is False
        assert view.selected_record is None
