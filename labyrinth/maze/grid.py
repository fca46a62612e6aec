"""Maze grid model.

Row-major storage: ``rows[y][x]``. Coordinates are always passed as ``(x, y)``.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Set, Tuple

from .tiles import EXIT, OPEN, WALL, Cell

Coord2D = Tuple[int, int]
VisitedSet = Set[Coord2D]


class MazeGrid:
    __slots__ = ("width", "height", "rows")

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.rows: List[List[Cell]] = [[WALL for _ in range(width)] for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_interior(self, x: int, y: int) -> bool:
        """True if (x, y) may be carved; the outer boundary never is."""
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def get(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        self.rows[y][x] = cell

    def carve(self, x: int, y: int) -> None:
        self.rows[y][x] = OPEN

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.rows[y][x] is not WALL

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        for y, row in enumerate(self.rows):
            for x, cell in enumerate(row):
                yield x, y, cell

    def count(self, cell: Cell) -> int:
        return sum(row.count(cell) for row in self.rows)

    def find_exit(self) -> Optional[Coord2D]:
        for x, y, cell in self.cells():
            if cell is EXIT:
                return (x, y)
        return None

    def copy(self) -> "MazeGrid":
        clone = MazeGrid(self.width, self.height)
        clone.rows = [list(row) for row in self.rows]
        return clone

    def to_layout(self) -> List[List[str]]:
        return [[cell.value for cell in row] for row in self.rows]

    @classmethod
    def from_layout(cls, layout: Sequence[Sequence[str]]) -> "MazeGrid":
        """Build a grid from rows of single characters.

        Raises ValueError on ragged rows or characters outside the alphabet;
        run the validator first when the input is untrusted.
        """
        height = len(layout)
        width = len(layout[0]) if height else 0
        grid = cls(width, height)
        for y, row in enumerate(layout):
            if len(row) != width:
                raise ValueError(f"Layout row {y} width ({len(row)}) doesn't match width ({width})")
            grid.rows[y] = [Cell.from_char(ch) for ch in row]
        return grid

    def render(self) -> str:
        return "\n".join("".join(cell.value for cell in row) for row in self.rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MazeGrid):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"MazeGrid(width={self.width}, height={self.height})"


__all__ = ["MazeGrid", "Coord2D", "VisitedSet"]
