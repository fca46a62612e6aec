"""Randomized depth-first fill (recursive backtracker, iterative form)."""
from __future__ import annotations

import random
from typing import List, Optional

from .grid import Coord2D, MazeGrid, VisitedSet
from .tiles import CARVE_STEPS, WALL


def carvable_neighbors(grid: MazeGrid, cell: Coord2D, visited: VisitedSet) -> List[Coord2D]:
    x, y = cell
    out = []
    for dx, dy in CARVE_STEPS:
        nx, ny = x + dx, y + dy
        if grid.is_interior(nx, ny) and grid.get(nx, ny) is WALL and (nx, ny) not in visited:
            out.append((nx, ny))
    return out


def fill_remaining(grid: MazeGrid, visited: VisitedSet, rng: Optional[random.Random] = None) -> int:
    """Extend the carved region until every reachable lattice cell is visited.

    The stack starts with every already-visited coordinate, so the walk
    branches off the guaranteed path as well as the start. Existing open cells
    are never modified. Returns the number of cells newly visited.
    """
    if rng is None:
        rng = random.Random()
    stack: List[Coord2D] = list(visited)
    carved = 0
    while stack:
        cx, cy = stack[-1]
        options = carvable_neighbors(grid, (cx, cy), visited)
        if not options:
            stack.pop()
            continue
        nx, ny = rng.choice(options)
        grid.carve((cx + nx) // 2, (cy + ny) // 2)
        grid.carve(nx, ny)
        visited.add((nx, ny))
        stack.append((nx, ny))
        carved += 1
    return carved


__all__ = ["fill_remaining", "carvable_neighbors"]
