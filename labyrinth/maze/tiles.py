"""Cell alphabet and direction constants.

Cells are a closed enumeration internally; the single-character form is only
used when reading or writing maze records.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import Tuple


class Cell(str, Enum):
    WALL = "#"
    OPEN = " "
    EXIT = "E"

    @classmethod
    def from_char(cls, ch: str) -> "Cell":
        try:
            return cls(ch)
        except ValueError:
            raise ValueError(f"Invalid cell character: {ch!r}") from None

    @property
    def walkable(self) -> bool:
        return self is not Cell.WALL


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


WALL = Cell.WALL
OPEN = Cell.OPEN
EXIT = Cell.EXIT
CELL_CHARS = tuple(c.value for c in Cell)

# Fixed start position for every maze
START: Tuple[int, int] = (1, 1)

# Carving steps (up, right, down, left); order is the guarantor's tie-break order
CARVE_STEPS: Tuple[Tuple[int, int], ...] = ((0, -2), (2, 0), (0, 2), (-2, 0))
# Single-cell moves used by reachability search
WALK_STEPS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

__all__ = [
    "Cell",
    "Direction",
    "WALL",
    "OPEN",
    "EXIT",
    "CELL_CHARS",
    "START",
    "CARVE_STEPS",
    "WALK_STEPS",
]
