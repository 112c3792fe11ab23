"""Keyboard and mouse events delivered to widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Key(enum.Enum):
    """Keys that widgets react to."""

    RUNE = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PG_UP = enum.auto()
    PG_DN = enum.auto()
    ENTER = enum.auto()
    TAB = enum.auto()
    BACKTAB = enum.auto()
    ESCAPE = enum.auto()
    CTRL_F = enum.auto()
    CTRL_B = enum.auto()


class MouseAction(enum.Enum):
    """Mouse actions that widgets react to."""

    MOVE = enum.auto()
    LEFT_DOWN = enum.auto()
    LEFT_UP = enum.auto()
    LEFT_CLICK = enum.auto()
    LEFT_DOUBLE_CLICK = enum.auto()
    MIDDLE_DOWN = enum.auto()
    MIDDLE_UP = enum.auto()
    MIDDLE_CLICK = enum.auto()
    RIGHT_DOWN = enum.auto()
    RIGHT_UP = enum.auto()
    RIGHT_CLICK = enum.auto()
    SCROLL_UP = enum.auto()
    SCROLL_DOWN = enum.auto()
    SCROLL_LEFT = enum.auto()
    SCROLL_RIGHT = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press; char holds the character for Key.RUNE events."""

    key: Key
    char: str = ""

    def __post_init__(self) -> None:
        if self.key is Key.RUNE:
            if len(self.char) != 1:
                raise ValueError("a rune event needs exactly one character")
        elif self.char:
            raise ValueError("only rune events carry a character")

    @staticmethod
    def from_rune(char: str) -> KeyEvent:
        """Return the event for typing a character."""
        return KeyEvent(Key.RUNE, char)


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a screen position."""

    x: int
    y: int

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y