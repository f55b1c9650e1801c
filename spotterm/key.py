"""Keyboard keys as seen by the terminal front end."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyCode(Enum):
    """The kind of a key; the value is the key's display name."""

    ENTER = "Enter"
    TAB = "Tab"
    BACKSPACE = "Backspace"
    ESC = "Esc"
    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    INS = "Ins"
    DELETE = "Delete"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    F0 = "F0"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"
    CHAR = "Char"
    CTRL = "Ctrl"
    ALT = "Alt"
    UNKNOWN = "Unknown"


_FUNCTION_KEYS = tuple(KeyCode[f"F{n}"] for n in range(13))
_CHAR_CODES = frozenset({KeyCode.CHAR, KeyCode.CTRL, KeyCode.ALT})
_ARROWS = frozenset({KeyCode.LEFT, KeyCode.RIGHT, KeyCode.UP, KeyCode.DOWN})
_BRACKETED = frozenset(
    {
        KeyCode.ENTER,
        KeyCode.TAB,
        KeyCode.BACKSPACE,
        KeyCode.ESC,
        KeyCode.INS,
        KeyCode.DELETE,
        KeyCode.HOME,
        KeyCode.END,
        KeyCode.PAGE_UP,
        KeyCode.PAGE_DOWN,
    }
)


@dataclass(frozen=True)
class Key:
    """A key press; character keys carry the character in ``ch``."""

    code: KeyCode
    ch: str | None = None

    def __post_init__(self) -> None:
        if self.code in _CHAR_CODES:
            if not isinstance(self.ch, str) or len(self.ch) != 1:
                raise ValueError(f"{self.code.value} key needs exactly one character")
        elif self.ch is not None:
            raise ValueError(f"{self.code.value} key takes no character")

    @classmethod
    def from_f(cls, n: int) -> Key:
        """Return the function key Fn for 0 <= n <= 12."""
        if not 0 <= n < len(_FUNCTION_KEYS):
            raise ValueError(f"unknown function key: F{n}")
        return cls(_FUNCTION_KEYS[n])

    @classmethod
    def char(cls, c: str) -> Key:
        return cls(KeyCode.CHAR, c)

    @classmethod
    def ctrl(cls, c: str) -> Key:
        return cls(KeyCode.CTRL, c)

    @classmethod
    def alt(cls, c: str) -> Key:
        return cls(KeyCode.ALT, c)

    def __str__(self) -> str:
        code = self.code
        if code in _CHAR_CODES:
            if self.ch == " ":
                return "<Space>" if code is KeyCode.CHAR else f"<{code.value}+Space>"
            return self.ch if code is KeyCode.CHAR else f"<{code.value}+{self.ch}>"
        if code in _ARROWS:
            return f"<{code.value} Arrow Key>"
        if code in _BRACKETED:
            return f"<{code.value}>"
        return code.value