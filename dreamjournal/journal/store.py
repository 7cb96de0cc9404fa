"""
Collection store for dream records.

The whole journal is an ordered list of records kept in memory and written
out as a single JSON array on explicit save. Loading is best-effort: a
missing or damaged file starts an empty journal rather than failing.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from dreamjournal.journal.record import DreamRecord
from dreamjournal.utils.helpers import ensure_dir


class CollectionStore:
    """
    Ordered, in-memory collection of dream records backed by a JSON file.

    Records keep insertion order and are not deduplicated. Every mutation
    sets `unsaved_changes`; only a successful `save()` clears it.
    """

    def __init__(self, path: Path, records: list[DreamRecord] | None = None):
        """
        Initialize the store.

        Args:
            path: Backing JSON file.
            records: Initial records (the store takes ownership).
        """
        self.path = path
        self._records: list[DreamRecord] = list(records or [])
        self.unsaved_changes = False

    @classmethod
    def load(cls, path: Path) -> CollectionStore:
        """
        Load the journal from disk.

        Never raises: a missing file, an I/O error or malformed content all
        yield an empty store.
        """
        try:
            if not path.exists():
                logger.info("No journal at {}, starting empty", path)
                return cls(path)
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError(f"Expected a JSON array, got {type(raw).__name__}")
            records = [DreamRecord.from_dict(item) for item in raw]
        except (OSError, ValueError, RecursionError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors.
            # Deeply nested arrays exhaust the decoder with RecursionError.
            logger.warning("Could not load journal {}: {}; starting empty", path, e)
            return cls(path)

        logger.info("Loaded {} records from {}", len(records), path)
        return cls(path, records)

    def save(self) -> Path:
        """
        Write every record to the backing file, replacing its contents.

        The data goes to a temporary file in the same directory first and is
        then moved over the target, so readers never see a half-written file.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file could not be written. `unsaved_changes` stays set.
        """
        payload = json.dumps([r.to_dict() for r in self._records], indent=2, ensure_ascii=False)

        tmp_name: str | None = None
        try:
            directory = ensure_dir(self.path.parent)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error("Failed to save journal {}: {}", self.path, e)
            raise
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        self.unsaved_changes = False
        logger.info("Saved {} records to {}", len(self._records), self.path)
        return self.path

    def insert(self, record: DreamRecord) -> int:
        """Append a record and return its index."""
        self._records.append(record)
        self.unsaved_changes = True
        logger.debug("Inserted record {} ({})", len(self._records) - 1, record.date)
        return len(self._records) - 1

    def replace(self, index: int, record: DreamRecord) -> None:
        """
        Overwrite the record at `index`.

        Raises:
            IndexError: If index is out of range.
        """
        self._check_index(index)
        self._records[index] = record
        self.unsaved_changes = True
        logger.debug("Replaced record {}", index)

    def delete(self, index: int) -> DreamRecord:
        """
        Remove and return the record at `index`.

        Raises:
            IndexError: If the collection is empty or index is out of range.
        """
        self._check_index(index)
        removed = self._records.pop(index)
        self.unsaved_changes = True
        logger.debug("Deleted record {} ({})", index, removed.date)
        return removed

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._records):
            raise IndexError(f"Record index {index} out of range (0..{len(self._records) - 1})")

    @property
    def records(self) -> tuple[DreamRecord, ...]:
        """Read-only view of the records in order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> DreamRecord:
        self._check_index(index)
        return self._records[index]

    def __iter__(self) -> Iterator[DreamRecord]:
        return iter(self._records)
