"""Command table mapping classified actions to text model operations."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Type

from .actions import (
    Action, Backspace, Delete, Direction, InsertChar, Navigate, NewLine,
)
from .model import TextModel


class EditorCommand(ABC):
    """Base class for commands that run against the text model."""

    @abstractmethod
    def execute(self, model: TextModel, action: Action) -> bool:
        """Execute the command.

        Args:
            model: Text model to operate on
            action: The action that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Cursor movement; never modifies the document."""

    _moves: Dict[Direction, Callable[[TextModel], None]] = {
        Direction.LEFT: TextModel.left_char,
        Direction.RIGHT: TextModel.right_char,
        Direction.UP: TextModel.up_line,
        Direction.DOWN: TextModel.down_line,
        Direction.HOME: TextModel.move_beginning_of_line,
        Direction.END: TextModel.move_end_of_line,
    }

    def execute(self, model: TextModel, action: Action) -> bool:
        self._moves[action.direction](model)
        return False


class EditCommand(EditorCommand):
    """Base class for commands that may change document content."""

    def execute(self, model: TextModel, action: Action) -> bool:
        return self._edit(model, action)

    @abstractmethod
    def _edit(self, model: TextModel, action: Action) -> bool:
        """Perform the edit; return False when it was a boundary no-op."""


class InsertCharCommand(EditCommand):
    def _edit(self, model, action):
        return model.insert_char(action.char)


class BackspaceCommand(EditCommand):
    def _edit(self, model, action):
        return model.backspace()


class DeleteCommand(EditCommand):
    def _edit(self, model, action):
        return model.delete_char_forward()


class NewLineCommand(EditCommand):
    def _edit(self, model, action):
        return model.split_line()


class CommandTable:
    """Registry mapping action types to commands."""

    def __init__(self):
        self._commands: Dict[Type, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register(Navigate, MovementCommand())
        self.register(InsertChar, InsertCharCommand())
        self.register(Backspace, BackspaceCommand())
        self.register(Delete, DeleteCommand())
        self.register(NewLine, NewLineCommand())

    def register(self, action_type: Type, command: EditorCommand):
        """Register a command for an action type."""
        self._commands[action_type] = command

    def get_command(self, action: Action) -> Optional[EditorCommand]:
        return self._commands.get(type(action))

    def apply(self, model: TextModel, action: Action) -> bool:
        """Apply the operation for an action.

        Actions with no registered command (Ignored, and the Save/Quit
        actions the editor loop handles itself) leave the model untouched.

        Returns:
            True if the document was modified
        """
        command = self.get_command(action)
        if command is None:
            return False
        return command.execute(model, action)
