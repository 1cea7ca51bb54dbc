"""Main editor controller: the read-render-dispatch loop."""

import logging
from typing import Optional, Union

from .actions import Action, Quit, Save
from .commands import CommandTable
from .constants import EditorConstants
from .keyboard import KeyboardHandler
from .model import TextModel
from .source import FileSource, StreamSource
from .terminal import TerminalInterface
from .view import Viewport

logger = logging.getLogger(__name__)


class Editor:
    """Plain-text editor application controller.

    Each loop iteration renders whatever changed, waits for one key,
    classifies it and applies exactly one operation to the model.
    """

    def __init__(self, source: Union[FileSource, StreamSource],
                 page_size: int = EditorConstants.DEFAULT_PAGE_SIZE,
                 terminal: Optional[TerminalInterface] = None,
                 keyboard: Optional[KeyboardHandler] = None):
        self.source = source
        self.terminal = terminal or TerminalInterface()
        self.keyboard = keyboard or KeyboardHandler(self.terminal)
        self.view = Viewport(page_size)
        self.model = TextModel(self.view)
        self.commands = CommandTable()
        self.running = False
        self.modified = False
        self.status_message: Optional[str] = None
        self._chrome_dirty = True  # Header and footer need a redraw

    def load(self):
        """Read the document from the source into the model."""
        document = self.source.load()
        self.model.initialize(document.lines)
        self.modified = False
        self._chrome_dirty = True

    def run(self):
        """Run the main editor loop until Quit.

        The terminal is restored on every exit path. An unexpected error is
        logged and re-raised after cleanup.
        """
        self.running = True
        try:
            self.terminal.setup()
            with self.terminal.input_mode():
                self.terminal.clear_screen()
                while self.running:
                    self._draw()
                    action = self.keyboard.get_action()
                    if action is not None:
                        self.handle_action(action)
        except Exception:
            logger.exception("Unexpected error in editor loop")
            raise
        finally:
            self.terminal.cleanup()

    def _draw(self):
        if self._chrome_dirty:
            self.terminal.draw_header(self.source.name, self.modified)
            self.terminal.draw_footer(self.view.page_size, self.status_message)
            self._chrome_dirty = False
        self.terminal.render(self.model.changed_lines(),
                             self.model.cursor_screen_row,
                             self.model.cursor_position.col)

    def handle_action(self, action: Action):
        """Apply one classified key press."""
        if self.status_message:
            self.status_message = None
            self._chrome_dirty = True

        if isinstance(action, Quit):
            self.running = False
        elif isinstance(action, Save):
            self.save()
        elif self.commands.apply(self.model, action) and not self.modified:
            self.modified = True
            self._chrome_dirty = True

    def save(self) -> bool:
        """Write the document back to its source.

        Returns:
            True if save succeeded, False otherwise
        """
        self._chrome_dirty = True
        try:
            self.source.save(self.model.get_all_lines())
        except (OSError, UnicodeEncodeError) as e:
            logger.warning(f"Could not save {self.source.name}: {e}")
            self.status_message = EditorConstants.SAVE_FAILED_MESSAGE.format(self.source.name)
            return False
        self.modified = False
        self.status_message = EditorConstants.SAVED_MESSAGE.format(self.source.name)
        return True
