"""In-memory text buffer: line store, cursor and edit/navigation operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .view import ChangedLine, ChangeTracker, Viewport


@dataclass
class CursorPosition:
    row: int = 0
    col: int = 0


class TextModel:
    """The document being edited.

    Holds the ordered lines, the cursor, the viewport that shows a page of
    lines, and the set of rows that need to be redrawn. Every operation
    leaves the model in a stable state: the cursor is within bounds and
    inside the viewport, and every row whose content or screen position
    changed is marked dirty.
    """

    lines: list[str]
    cursor_position: CursorPosition
    desired_col: int
    view: Viewport
    changes: ChangeTracker

    def __init__(self, view: Viewport, lines: Optional[Iterable[str]] = None):
        self.view = view
        self.changes = ChangeTracker()
        self.initialize(lines if lines is not None else [""])

    def initialize(self, lines: Iterable[str]) -> None:
        """Replace the whole document and reset cursor and viewport."""
        self.lines = list(lines) or [""]
        self.cursor_position = CursorPosition()
        self.desired_col = 0
        self.view.first_visible_row = 0
        self.changes.clear()
        self._mark_visible()

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_position.row]

    def get_all_lines(self) -> list[str]:
        """Return a copy of every line, in order."""
        return list(self.lines)

    # --- Rendering support ---

    def changed_lines(self) -> Iterator[ChangedLine]:
        """Yield a record for every dirty row inside the viewport.

        Rows that scrolled out of view are dropped. The tracker is cleared
        once the records have been consumed, so each call describes only
        what changed since the previous render.
        """
        try:
            for row in self.changes.dirty_rows:
                if not self.view.contains(row):
                    continue
                if row < len(self.lines):
                    yield ChangedLine(self.view.screen_row(row), row, self.lines[row])
                else:
                    yield ChangedLine(self.view.screen_row(row), None, "")
        finally:
            self.changes.clear()

    @property
    def cursor_screen_row(self) -> int:
        return self.view.screen_row(self.cursor_position.row)

    def _mark_visible(self):
        rows = self.view.visible_rows()
        self.changes.mark_range(rows.start, rows.stop)

    def _scroll_to_cursor(self):
        if self.view.ensure_visible(self.cursor_position.row, len(self.lines)):
            self._mark_visible()

    def _move_to(self, row: int, col: int):
        """Place the cursor and remember its column for vertical moves."""
        self.cursor_position.row = row
        self.cursor_position.col = col
        self.desired_col = col
        self._scroll_to_cursor()

    # --- Content mutation ---

    def insert_char(self, ch: str) -> bool:
        row, col = self.cursor_position.row, self.cursor_position.col
        line = self.lines[row]
        self.lines[row] = line[:col] + ch + line[col:]
        self.changes.mark(row)
        self._move_to(row, col + len(ch))
        return True

    def split_line(self) -> bool:
        """Break the current line at the cursor; the tail becomes the next line."""
        row, col = self.cursor_position.row, self.cursor_position.col
        line = self.lines[row]
        self.lines[row:row + 1] = [line[:col], line[col:]]
        # Every following line moved down one row
        self.changes.mark_range(row, len(self.lines))
        self._move_to(row + 1, 0)
        return True

    def join_with_previous(self) -> bool:
        """Append the current line to the previous one and remove it."""
        row = self.cursor_position.row
        if row == 0:
            return False
        old_count = len(self.lines)
        prev_len = len(self.lines[row - 1])
        self.lines[row - 1] += self.lines.pop(row)
        # The old last row is now vacated and must be blanked
        self.changes.mark_range(row - 1, old_count)
        self._move_to(row - 1, prev_len)
        return True

    def delete_char_backward(self) -> bool:
        row, col = self.cursor_position.row, self.cursor_position.col
        if col == 0:
            return False
        line = self.lines[row]
        self.lines[row] = line[:col - 1] + line[col:]
        self.changes.mark(row)
        self._move_to(row, col - 1)
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor, joining lines at column 0."""
        if self.cursor_position.col > 0:
            return self.delete_char_backward()
        return self.join_with_previous()

    def delete_char_forward(self) -> bool:
        """Delete the character under the cursor, pulling up the next line at end of line."""
        row, col = self.cursor_position.row, self.cursor_position.col
        line = self.lines[row]
        if col < len(line):
            self.lines[row] = line[:col] + line[col + 1:]
            self.changes.mark(row)
        elif row + 1 < len(self.lines):
            old_count = len(self.lines)
            self.lines[row] = line + self.lines.pop(row + 1)
            self.changes.mark_range(row, old_count)
        else:
            return False
        self._move_to(row, col)
        return True

    # --- Navigation ---

    def left_char(self) -> None:
        row, col = self.cursor_position.row, self.cursor_position.col
        if col > 0:
            self._move_to(row, col - 1)
        elif row > 0:
            self._move_to(row - 1, len(self.lines[row - 1]))

    def right_char(self) -> None:
        row, col = self.cursor_position.row, self.cursor_position.col
        if col < len(self.lines[row]):
            self._move_to(row, col + 1)
        elif row + 1 < len(self.lines):
            self._move_to(row + 1, 0)

    def up_line(self) -> None:
        self._move_vertically(-1)

    def down_line(self) -> None:
        self._move_vertically(1)

    def _move_vertically(self, delta: int):
        # desired_col survives vertical moves
        row = max(0, min(self.cursor_position.row + delta, len(self.lines) - 1))
        self.cursor_position.row = row
        self.cursor_position.col = min(self.desired_col, len(self.lines[row]))
        self._scroll_to_cursor()

    def move_beginning_of_line(self) -> None:
        self._move_to(self.cursor_position.row, 0)

    def move_end_of_line(self) -> None:
        self._move_to(self.cursor_position.row, len(self.current_line))
