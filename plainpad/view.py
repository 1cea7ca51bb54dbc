"""Viewport paging and dirty-row tracking for incremental redraws."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChangedLine:
    """A row of the viewport whose on-screen content is stale.

    ``number`` is the absolute line index, or None when the row lies past
    the end of the document and must be drawn blank.
    """
    screen_row: int
    number: Optional[int]
    content: str


class Viewport:
    """Window of at most ``page_size`` consecutive lines."""

    def __init__(self, page_size: int):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self.first_visible_row = 0

    def ensure_visible(self, row: int, line_count: int) -> bool:
        """Scroll so that ``row`` lies inside the window.

        The first visible row is clamped to ``[0, max(0, line_count - page_size)]``
        so the window never runs past the end of a document longer than a page.

        Args:
            row: Absolute row that must become visible (the cursor row)
            line_count: Number of lines in the document

        Returns:
            True if the window moved
        """
        first = self.first_visible_row
        if row < first:
            first = row
        elif row >= first + self.page_size:
            first = row - self.page_size + 1
        first = max(0, min(first, max(0, line_count - self.page_size)))
        moved = first != self.first_visible_row
        self.first_visible_row = first
        return moved

    def contains(self, row: int) -> bool:
        return self.first_visible_row <= row < self.first_visible_row + self.page_size

    def visible_rows(self) -> range:
        """Absolute rows covered by the window, including rows past the document end."""
        return range(self.first_visible_row, self.first_visible_row + self.page_size)

    def screen_row(self, row: int) -> int:
        """Map an absolute row inside the window to its on-screen offset."""
        if not self.contains(row):
            raise ValueError(f"row {row} is outside the viewport")
        return row - self.first_visible_row


class ChangeTracker:
    """Set of absolute rows whose rendered representation is stale."""

    def __init__(self):
        self._rows: set[int] = set()

    def mark(self, row: int) -> None:
        self._rows.add(row)

    def mark_range(self, start: int, stop: int) -> None:
        """Mark rows ``start`` (inclusive) through ``stop`` (exclusive)."""
        self._rows.update(range(max(0, start), stop))

    def clear(self) -> None:
        self._rows.clear()

    @property
    def dirty_rows(self) -> list[int]:
        return sorted(self._rows)

    @property
    def is_clean(self) -> bool:
        return not self._rows
