"""Keyboard tokens parsed into key events, using curtsies-style key names."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token the event was parsed from
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    code: Optional[int] = None


SPECIAL_KEYS = frozenset({'left', 'right', 'home', 'end', 'enter', 'backspace', 'delete'})


def parse_key(key_str: str) -> KeyEvent:
    """Parse a key token into a KeyEvent.

    Accepts curtsies-style names such as '<Ctrl-b>', '<Alt-1>', '<Esc+i>'
    or '<Shift-LEFT>', single ASCII control characters, and plain text
    characters.
    """
    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        name = key_str[1:-1].lower()
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        name = name.replace('+', '-')
        parts = name.split('-')
        base = parts[-1]
        mods = set(parts[:-1])
        # Meta and a leading Esc both act as Alt
        if mods & {'meta', 'esc'}:
            mods.add('alt')

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key_str)
        if base == 'tab' and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
        if base == 'return':
            base = 'enter'
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-J / Ctrl-M are Enter
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
        if 'shift' in mods and base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str, is_shift=True)
        if base in ('esc', 'escape'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        # Unknown names stay special so they never insert text
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

    if len(key_str) == 1:
        o = ord(key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
            ch = chr(ord('a') + o - 1)
            if ch in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, code=o)
            return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True, code=o)
        if key_str == '\x7f':
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str, code=o)
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str, code=o)

    # ESC followed by a character is how terminals send Alt+character
    if len(key_str) == 2 and key_str[0] == '\x1b':
        return KeyEvent(key_type=KeyType.ALT, value=key_str[1].lower(), raw=key_str, is_alt=True)

    return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
