"""Plainpad - a terminal plain-text editor."""

from .model import TextModel, CursorPosition
from .view import Viewport, ChangeTracker, ChangedLine

__all__ = [
    'TextModel',
    'CursorPosition',
    'Viewport',
    'ChangeTracker',
    'ChangedLine',
]
