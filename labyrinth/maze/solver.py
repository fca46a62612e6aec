"""Reachability search from the start cell to the exit."""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from .grid import Coord2D, MazeGrid
from .tiles import START, WALL, WALK_STEPS


def shortest_path(grid: MazeGrid, start: Coord2D = START) -> Optional[List[Coord2D]]:
    """Return the BFS path from ``start`` to the exit cell, or None.

    Moves are 4-directional through OPEN/EXIT cells. The start cell itself is
    not required to be walkable; a start outside the grid yields None.
    """
    target = grid.find_exit()
    if target is None or not grid.in_bounds(*start):
        return None
    seen = [[False] * grid.width for _ in range(grid.height)]
    sx, sy = start
    seen[sy][sx] = True
    parents: Dict[Coord2D, Coord2D] = {}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == target:
            path = [cur]
            while path[-1] in parents:
                path.append(parents[path[-1]])
            path.reverse()
            return path
        cx, cy = cur
        for dx, dy in WALK_STEPS:
            nx, ny = cx + dx, cy + dy
            if grid.in_bounds(nx, ny) and not seen[ny][nx] and grid.get(nx, ny) is not WALL:
                seen[ny][nx] = True
                parents[(nx, ny)] = cur
                q.append((nx, ny))
    return None


def is_solvable(grid: MazeGrid, start: Coord2D = START) -> bool:
    return shortest_path(grid, start) is not None


__all__ = ["is_solvable", "shortest_path"]
