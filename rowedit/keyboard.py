"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from the input layer
    is_ctrl: bool = False
    is_sequence: bool = False


# Curtsies names that map onto one of our special keys
_SPECIAL_NAMES = {
    'left': 'left',
    'right': 'right',
    'up': 'up',
    'down': 'down',
    'home': 'home',
    'end': 'end',
    'pageup': 'page_up',
    'page_up': 'page_up',
    'pagedown': 'page_down',
    'page_down': 'page_down',
    'backspace': 'backspace',
    'delete': 'delete',
    'enter': 'enter',
}


class KeyboardHandler:
    """Turns raw terminal tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None if nothing arrived."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token (or a raw character) into a KeyEvent."""
        key_str = str(key)

        # Curtsies-style names like '<LEFT>', '<Ctrl-q>', '<PAGEDOWN>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])

            if not mods:
                if base in ('space', 'spacebar', 'spc'):
                    return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
                if base == 'tab':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
                if base in ('esc', 'escape'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what the terminal sends for Enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if base in _SPECIAL_NAMES and not mods:
                return KeyEvent(key_type=KeyType.SPECIAL, value=_SPECIAL_NAMES[base],
                                raw=key_str, is_sequence=True)
            # Unknown token: report it, nothing is bound to it
            return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=key_str, is_sequence=True)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\n', '\r'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
