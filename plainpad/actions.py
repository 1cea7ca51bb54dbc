"""Semantic editor actions produced by key classification.

Every key press is classified into exactly one of these actions before
it reaches the editor, so nothing below the keyboard layer ever sees a
platform key code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Direction(Enum):
    """Cursor movement directions."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"


@dataclass(frozen=True)
class Navigate:
    direction: Direction


@dataclass(frozen=True)
class InsertChar:
    char: str

    def __post_init__(self):
        if len(self.char) != 1:
            raise ValueError(f"InsertChar takes a single character, got {self.char!r}")


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class NewLine:
    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Ignored:
    pass


Action = Union[Navigate, InsertChar, Backspace, Delete, NewLine, Save, Quit, Ignored]
