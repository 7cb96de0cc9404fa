"""Journal core: records, storage, navigation, entry wizard and mode controller."""

from dreamjournal.journal.controller import InputMode, ModeController, ViewState
from dreamjournal.journal.navigator import ListNavigator
from dreamjournal.journal.record import DreamRecord, Intensity, Style
from dreamjournal.journal.store import CollectionStore
from dreamjournal.journal.wizard import EntryWizard, InputField, WizardOutcome

__all__ = [
    "CollectionStore",
    "DreamRecord",
    "EntryWizard",
    "InputField",
    "InputMode",
    "Intensity",
    "ListNavigator",
    "ModeController",
    "Style",
    "ViewState",
    "WizardOutcome",
]
