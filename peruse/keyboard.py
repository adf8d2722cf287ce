"""Keyboard input handling on top of blessed keystrokes."""

from typing import Union
from dataclasses import dataclass
from enum import Enum

from .events import MouseEvent


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'j', 'page_down', 'escape')
    raw: str  # The raw key string from blessed
    is_sequence: bool = False


# blessed names special keys 'KEY_<NAME>'; page keys have two names
_SPECIAL_NAMES = {
    'pgdown': 'page_down',
    'npage': 'page_down',
    'pgup': 'page_up',
    'ppage': 'page_up',
}


def parse_keystroke(key) -> Union[KeyEvent, MouseEvent]:
    """Parse a blessed keystroke into a KeyEvent.

    Mouse reports come back as MouseEvent so the dispatcher can reject them.

    Args:
        key: blessed.keyboard.Keystroke (or any str with ``name``)

    Returns:
        Parsed KeyEvent or MouseEvent
    """
    key_str = str(key)
    name = getattr(key, 'name', None) or ''

    if name.startswith('MOUSE_'):
        return MouseEvent(name=name, raw=key_str)

    if getattr(key, 'is_sequence', False) and name.startswith('KEY_'):
        base = name[len('KEY_'):].lower()
        base = _SPECIAL_NAMES.get(base, base)
        # Map named whitespace back to the regular character
        if base == 'space':
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

    # Regular character, control characters included; unbound keys are ignored
    return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
