"""Terminal interface using Blessed for display and Curtsies for input."""

import contextlib
import select
import sys
import termios
from typing import Iterable, Optional

import blessed

from .constants import EditorConstants
from .view import ChangedLine


class TerminalInterface:
    """Draws the editor screen and reads keys.

    The screen is a fixed header, a body of ``page_size`` rows with a
    line-number margin, and a footer. Only the body rows handed to
    :meth:`render` are redrawn on each pass.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and start reading curtsies key tokens."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            curtsies_input = Input(keynames='curtsies')
            curtsies_input.__enter__()
            self._curtsies_input = curtsies_input

    def cleanup(self):
        """Clear the screen, exit fullscreen mode and restore the terminal."""
        if self.is_fullscreen:
            print(self.term.home + self.term.clear, end='')
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None

    @contextlib.contextmanager
    def input_mode(self):
        """Cbreak mode with XON/XOFF flow control off so Ctrl-S reaches the editor."""
        with self.term.cbreak():
            old_settings = None
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError, ValueError):
                # stdin is not a tty (tests, pipes); nothing to adjust
                old_settings = None
            try:
                yield
            finally:
                if old_settings is not None:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)

    def clear_screen(self):
        print(self.term.home + self.term.clear, end='', flush=True)

    @property
    def text_width(self) -> int:
        """Columns available for line content right of the number margin."""
        width = min(self.term.width, EditorConstants.SCREEN_WIDTH)
        return max(1, width - EditorConstants.LINE_NUMBER_WIDTH)

    def draw_header(self, name: str, modified: bool = False):
        width = min(self.term.width, EditorConstants.SCREEN_WIDTH)
        title = " plainpad"
        doc = f" {name}" + (" [modified]" if modified else "")
        print(self.term.move(0, 0) + self.term.bold + title.ljust(width)[:width] + self.term.normal, end='')
        print(self.term.move(1, 0) + doc.ljust(width)[:width], end='')
        print(self.term.move(2, 0) + "─" * width, end='', flush=True)

    def draw_footer(self, page_size: int, status: Optional[str] = None):
        width = min(self.term.width, EditorConstants.SCREEN_WIDTH)
        top = EditorConstants.HEADER_HEIGHT + page_size
        help_text = EditorConstants.HELP_TEXT
        print(self.term.move(top, 0) + "─" * width, end='')
        print(self.term.move(top + 1, 0) + f" {help_text}".ljust(width)[:width], end='')
        status_row = top + EditorConstants.FOOTER_HEIGHT - 1
        print(self.term.move(status_row, 0) + f" {status or ''}".ljust(width)[:width], end='', flush=True)

    def format_line(self, line: ChangedLine) -> str:
        """Compose the number margin and the content, padded to the screen width."""
        margin = EditorConstants.LINE_NUMBER_WIDTH
        if line.number is None:
            prefix = " " * margin
        else:
            prefix = f"{line.number + 1:>{margin - 3}} │ "[-margin:]
        return prefix + line.content[:self.text_width].ljust(self.text_width)

    def move_cursor(self, screen_row: int, col: int):
        """Place the terminal cursor at a body position."""
        x = min(col, self.text_width - 1) + EditorConstants.LINE_NUMBER_WIDTH
        y = screen_row + EditorConstants.HEADER_HEIGHT
        print(self.term.move(y, x), end='', flush=True)

    def render(self, changed: Iterable[ChangedLine], cursor_screen_row: int, cursor_col: int):
        """Redraw the changed body rows and reposition the cursor.

        Returns:
            Number of rows drawn
        """
        print(self.term.hide_cursor, end='')
        drawn = 0
        for line in changed:
            y = line.screen_row + EditorConstants.HEADER_HEIGHT
            print(self.term.move(y, 0) + self.format_line(line), end='')
            self.move_cursor(cursor_screen_row, cursor_col)
            drawn += 1
        self.move_cursor(cursor_screen_row, cursor_col)
        print(self.term.normal_cursor, end='', flush=True)
        return drawn

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None on timeout
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))