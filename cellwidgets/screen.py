"""Cell grid, styles, colours and alignment shared by the widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

COLOR_DEFAULT = "default"

COLOR_NAMES: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "maroon": (128, 0, 0),
    "green": (0, 128, 0),
    "olive": (128, 128, 0),
    "navy": (0, 0, 128),
    "purple": (128, 0, 128),
    "teal": (0, 128, 128),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "red": (255, 0, 0),
    "lime": (0, 255, 0),
    "yellow": (255, 255, 0),
    "blue": (0, 0, 255),
    "fuchsia": (255, 0, 255),
    "aqua": (0, 255, 255),
    "white": (255, 255, 255),
    "orange": (255, 165, 0),
    "pink": (255, 192, 203),
    "brown": (165, 42, 42),
    "darkgray": (169, 169, 169),
    "lightgray": (211, 211, 211),
    "darkcyan": (0, 139, 139),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gold": (255, 215, 0),
}

PRIMITIVE_BACKGROUND_COLOR = "black"
CONTRAST_BACKGROUND_COLOR = "blue"
PRIMARY_TEXT_COLOR = "white"
SECONDARY_TEXT_COLOR = "yellow"
GRAPHICS_COLOR = "white"

BORDER_HORIZONTAL = "\u2500"
BORDER_VERTICAL = "\u2502"
BORDER_TOP_LEFT = "\u250c"
BORDER_BOTTOM_LEFT = "\u2514"


class Align(enum.IntEnum):
    """Horizontal (and vertical) alignment."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2
    TOP = 0
    BOTTOM = 2


@dataclass(frozen=True)
class Style:
    """Foreground, background and text attributes of a cell."""

    foreground: str = COLOR_DEFAULT
    background: str = COLOR_DEFAULT
    attributes: frozenset[str] = frozenset()

    def with_foreground(self, color: str) -> Style:
        """Return a copy with another foreground colour."""
        return replace(self, foreground=color)

    def with_background(self, color: str) -> Style:
        """Return a copy with another background colour."""
        return replace(self, background=color)


@dataclass(frozen=True)
class Cell:
    """One screen cell: a character, its combining characters and a style."""

    char: str = " "
    combining: tuple[str, ...] = ()
    style: Style = field(default_factory=Style)


class CellScreen:
    """An in-memory grid of cells that widgets draw onto."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("screen dimensions must not be negative")
        self._width = width
        self._height = height
        self._cells: dict[tuple[int, int], Cell] = {}

    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self._width, self._height

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def set_content(self, x, y, char, combining, style) -> None:
        """Set a cell; positions outside the screen are ignored."""
        if not self._inside(x, y):
            return
        self._cells[(x, y)] = Cell(char, tuple(combining or ()), style)

    def get_content(self, x, y) -> Cell:
        """Return the cell at a position (a blank cell if unset or outside)."""
        return self._cells.get((x, y), Cell())

    def row_text(self, y) -> str:
        """Return the characters of one row, including combining characters."""
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} is outside the screen")
        cells = (self.get_content(x, y) for x in range(self._width))
        return "".join(cell.char + "".join(cell.combining) for cell in cells)