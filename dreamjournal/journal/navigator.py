"""List navigation over the collection store."""

from __future__ import annotations

from dreamjournal.journal.store import CollectionStore

DEFAULT_WINDOW_SIZE = 7


class ListNavigator:
    """
    Cursor and viewport over the records of a `CollectionStore`.

    Invariants while the store is non-empty:
        visible_start <= selected < visible_start + window_size
        0 <= visible_start <= max(0, len - window_size)

    When the store is empty `selected` is None and `visible_start` is 0.
    """

    def __init__(self, store: CollectionStore, window_size: int = DEFAULT_WINDOW_SIZE):
        if window_size < 1:
            raise ValueError(f"Window size must be at least 1, got {window_size}")
        self.store = store
        self.window_size = window_size
        self.selected: int | None = None
        self.visible_start = 0
        self.reset()

    def reset(self) -> None:
        """Select the first record (if any) and scroll to the top."""
        self.selected = 0 if len(self.store) else None
        self.visible_start = 0

    @property
    def max_start(self) -> int:
        return max(0, len(self.store) - self.window_size)

    def move_right(self) -> None:
        if self.selected is None:
            return
        if self.selected < len(self.store) - 1:
            self.selected += 1
            if self.selected >= self.visible_start + self.window_size:
                self.visible_start += 1

    def move_left(self) -> None:
        if self.selected is None:
            return
        if self.selected > 0:
            self.selected -= 1
            if self.selected < self.visible_start:
                self.visible_start -= 1

    def on_delete(self, index: int) -> None:
        """
        Restore the invariants after the store removed the record at `index`.

        The selection stays on the same position unless that position fell
        off the end, in which case it moves back by one.
        """
        length = len(self.store)
        if length == 0:
            self.selected = None
            self.visible_start = 0
            return

        selected = index if self.selected is None else self.selected
        if selected > length - 1 and selected > 0:
            selected -= 1
        self.selected = selected

        if self.visible_start > 0 and self.visible_start > self.selected:
            self.visible_start -= 1
        self.visible_start = min(self.visible_start, self.max_start)

    def on_insert_at_end(self) -> None:
        """Select the newly appended last record and scroll it into view."""
        self.selected = len(self.store) - 1
        self.visible_start = self.max_start

    def visible_indexes(self) -> range:
        """Indexes of the records inside the current window."""
        end = min(len(self.store), self.visible_start + self.window_size)
        return range(self.visible_start, end)
