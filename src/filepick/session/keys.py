"""Closed set of input events understood by the picker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FILENAME_SAFE_PUNCTUATION = "._-/~+@#%=,:"


class KeyKind(str, Enum):
    BACKSPACE = "backspace"
    CLEAR_LINE = "clear_line"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    PRINTABLE = "printable"
    SPACE = "space"
    ESCAPE = "escape"
    OTHER = "other"


NAVIGATION_KINDS = frozenset(
    {
        KeyKind.SCROLL_UP,
        KeyKind.SCROLL_DOWN,
        KeyKind.PAGE_UP,
        KeyKind.PAGE_DOWN,
        KeyKind.HOME,
        KeyKind.END,
        KeyKind.ARROW_UP,
        KeyKind.ARROW_DOWN,
    }
)


@dataclass(frozen=True, slots=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def printable(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.PRINTABLE, char)

    @property
    def is_navigation(self) -> bool:
        return self.kind in NAVIGATION_KINDS


_TEXTUAL_KEYS: dict[str, KeyKind] = {
    "backspace": KeyKind.BACKSPACE,
    "ctrl+h": KeyKind.BACKSPACE,
    "ctrl+u": KeyKind.CLEAR_LINE,
    "shift+up": KeyKind.SCROLL_UP,
    "shift+down": KeyKind.SCROLL_DOWN,
    "pageup": KeyKind.PAGE_UP,
    "pagedown": KeyKind.PAGE_DOWN,
    "home": KeyKind.HOME,
    "end": KeyKind.END,
    "up": KeyKind.ARROW_UP,
    "down": KeyKind.ARROW_DOWN,
    "space": KeyKind.SPACE,
    "escape": KeyKind.ESCAPE,
}


def is_filename_char(char: str | None) -> bool:
    if not char or len(char) != 1 or not char.isprintable():
        return False
    return char.isalnum() or char in FILENAME_SAFE_PUNCTUATION


def key_event_from_textual(key: str, character: str | None = None) -> KeyEvent:
    """Map a Textual key name (and its character, when printable) to a :class:`KeyEvent`."""
    kind = _TEXTUAL_KEYS.get(key)
    if kind is KeyKind.SPACE:
        return KeyEvent(KeyKind.SPACE, " ")
    if kind is not None:
        return KeyEvent(kind)
    if is_filename_char(character):
        return KeyEvent.printable(character or "")
    return KeyEvent(KeyKind.OTHER)
