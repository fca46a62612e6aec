"""Exit-biased carving that connects the start cell to the exit.

Runs before any randomness is introduced. From the cursor it tries the four
2-cell moves ordered by Manhattan distance to the exit (ties keep
up/right/down/left order), descending depth-first and backing up when a
cell has no usable moves left. Once within 2 cells of the exit on both axes
it carves a straight connector: along the cursor row to the exit column, then
down/up the exit column to the exit.

The walk keeps its own stack of (cell, remaining moves) frames, so path
length is not bounded by the interpreter's recursion limit.
"""
from __future__ import annotations

from typing import Iterator, List, Tuple

from .grid import Coord2D, MazeGrid, VisitedSet
from .tiles import CARVE_STEPS


def _near(cursor: Coord2D, target: Coord2D) -> bool:
    return abs(cursor[0] - target[0]) <= 2 and abs(cursor[1] - target[1]) <= 2


def ranked_moves(cursor: Coord2D, target: Coord2D) -> List[Tuple[int, int]]:
    x, y = cursor
    tx, ty = target
    # sorted() is stable: equal distances keep CARVE_STEPS order
    return sorted(CARVE_STEPS, key=lambda d: abs(x + d[0] - tx) + abs(y + d[1] - ty))


def carve_connector(grid: MazeGrid, cursor: Coord2D, target: Coord2D, visited: VisitedSet) -> None:
    x, y = cursor
    tx, ty = target
    if tx != x:
        step = 1 if tx > x else -1
        for cx in range(x + step, tx + step, step):
            grid.carve(cx, y)
            visited.add((cx, y))
    if ty != y:
        step = 1 if ty > y else -1
        for cy in range(y + step, ty + step, step):
            grid.carve(tx, cy)
            visited.add((tx, cy))


def ensure_path(grid: MazeGrid, start: Coord2D, target: Coord2D, visited: VisitedSet) -> bool:
    """Carve a connected run of open cells from ``start`` to ``target``.

    Every carved coordinate is recorded in ``visited``. Cells carved on
    branches that were later abandoned stay open. Returns False only when
    every branch from ``start`` dead-ends; the caller decides the fallback.
    """
    if _near(start, target):
        carve_connector(grid, start, target, visited)
        return True

    stack: List[Tuple[Coord2D, Iterator[Tuple[int, int]]]] = [(start, iter(ranked_moves(start, target)))]
    while stack:
        (x, y), moves = stack[-1]
        for dx, dy in moves:
            nx, ny = x + dx, y + dy
            if not grid.is_interior(nx, ny) or (nx, ny) in visited:
                continue
            grid.carve(x + dx // 2, y + dy // 2)
            grid.carve(nx, ny)
            visited.add((nx, ny))
            if _near((nx, ny), target):
                carve_connector(grid, (nx, ny), target, visited)
                return True
            stack.append(((nx, ny), iter(ranked_moves((nx, ny), target))))
            break
        else:
            stack.pop()
    return False


__all__ = ["ensure_path", "ranked_moves", "carve_connector"]
