"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .actions import (
    Action, Backspace, Delete, Direction, Ignored, InsertChar, Navigate,
    NewLine, Quit, Save,
)


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw token from curtsies
    is_alt: bool = False
    is_ctrl: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'tab', 'escape',
}

_NAVIGATION = {
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
    'up': Direction.UP,
    'down': Direction.DOWN,
    'home': Direction.HOME,
    'end': Direction.END,
}

_SPECIAL_ACTIONS = {
    'backspace': Backspace(),
    'delete': Delete(),
    'enter': NewLine(),
    'escape': Quit(),
}

_CTRL_ACTIONS = {
    's': Save(),
    'q': Quit(),
    'h': Backspace(),
}


def parse_key(key) -> KeyEvent:
    """Parse a curtsies key token into a KeyEvent.

    Args:
        key: Token such as 'a', '<LEFT>', '<Ctrl-s>' or '<Esc+x>'

    Returns:
        Parsed KeyEvent
    """
    key_str = str(key)

    if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-')
        base = parts[-1] or '-'
        mods = set(parts[:-1])
        if mods & {'meta', 'esc'}:
            mods.add('alt')
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'
        elif base in ('esc', 'escape'):
            base = 'escape'
        elif base in ('del',):
            base = 'delete'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(KeyType.REGULAR, ' ', key_str)
        if 'alt' in mods:
            return KeyEvent(KeyType.ALT, base, key_str, is_alt=True)
        if 'ctrl' in mods and len(base) == 1:
            # Terminals send Ctrl-J / Ctrl-M for Enter
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str, is_ctrl=True)
        # Unknown names (function keys, shifted specials) stay SPECIAL
        return KeyEvent(KeyType.SPECIAL, base, key_str)

    if len(key_str) == 1:
        o = ord(key_str)
        if o in (10, 13):
            return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
        if o == 9:
            return KeyEvent(KeyType.SPECIAL, 'tab', key_str)
        if o == 27:
            return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
        if o == 127:
            return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str, is_ctrl=True)

    return KeyEvent(KeyType.REGULAR, key_str, key_str)


def classify(event: KeyEvent) -> Action:
    """Map a parsed key event to exactly one editor action."""
    if event.key_type == KeyType.ALT:
        return Ignored()
    if event.key_type == KeyType.CTRL:
        return _CTRL_ACTIONS.get(event.value, Ignored())
    if event.key_type == KeyType.SPECIAL:
        if event.value in _NAVIGATION:
            return Navigate(_NAVIGATION[event.value])
        return _SPECIAL_ACTIONS.get(event.value, Ignored())
    if len(event.value) == 1 and event.value.isprintable():
        return InsertChar(event.value)
    return Ignored()


class KeyboardHandler:
    """Reads key tokens from a terminal and turns them into actions."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None if no key arrived."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return parse_key(key)

    def get_action(self, timeout: Optional[float] = None) -> Optional[Action]:
        """Get the next key press already classified as an action."""
        event = self.get_key_event(timeout)
        if event is None:
            return None
        return classify(event)
