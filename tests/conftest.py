"""Shared fixtures for dreamjournal tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from dreamjournal.journal.record import DreamRecord, Intensity, Style
from dreamjournal.journal.store import CollectionStore

FIXED_NOW = datetime(2024, 3, 1, 6, 30, 0, tzinfo=timezone.utc)


def make_record(n: int = 0, **overrides) -> DreamRecord:
    """Build a distinguishable record."""
    values = {
        "date": f"2024-01-{n + 1:02d} 07:00:00",
        "intensity": list(Intensity)[n % len(Intensity)],
        "frequency": n % 11,
        "style": list(Style)[n % len(Style)],
        "experience": f"Dream number {n}",
    }
    values.update(overrides)
    return DreamRecord(**values)


@pytest.fixture
def journal_path(tmp_path: Path) -> Path:
    return tmp_path / "dreams.json"


@pytest.fixture
def make_store(journal_path: Path):
    """Factory for a store holding `count` records (not dirty)."""

    def _make(count: int = 0) -> CollectionStore:
        return CollectionStore(journal_path, [make_record(i) for i in range(count)])

    return _make
