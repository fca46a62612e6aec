"""Maze generation pipeline.

Phases, in order, on a freshly allocated all-wall grid:
    * open the start cell and seed the visited set with it
    * guarantee a start -> exit path (exit-biased depth-first carve)
    * fall back to force-opening the exit if the guarantor dead-ends
    * randomized depth-first fill from every visited cell
    * label the exit cell

The grid belongs to a single ``run()`` call and is only returned once every
phase has finished. Each generator owns its ``random.Random`` so concurrent
generations never share state.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, NamedTuple, Optional

from labyrinth.logging_utils import get_logger

from .config import MazeConfig
from .filler import fill_remaining
from .grid import Coord2D, MazeGrid, VisitedSet
from .guarantor import ensure_path
from .metrics import init_metrics
from .tiles import EXIT, START, WALL

log = get_logger("labyrinth.maze.generator")

MIN_DIMENSION = 3


class GenerationOutputs(NamedTuple):
    grid: MazeGrid
    exit: Coord2D
    path_found: bool
    seed: Optional[int]
    metrics: Dict[str, Any]


def exit_for(width: int, height: int) -> Coord2D:
    return (width - 2, height - 2)


def check_dimensions(width, height) -> None:
    for label, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{label} must be an integer, got {value!r}")
        if value < MIN_DIMENSION:
            raise ValueError(f"{label} must be at least {MIN_DIMENSION}, got {value}")
    if exit_for(width, height) == START:
        raise ValueError(f"{width}x{height} leaves no room for an exit distinct from the start cell")


class MazeGenerator:
    def __init__(self, config: MazeConfig, rng: Optional[random.Random] = None, enable_metrics: bool = True):
        check_dimensions(config.width, config.height)
        self.config = config
        self.seed = config.seed
        if rng is None:
            if self.seed is None:
                self.seed = random.randint(0, 2**31 - 1)
            rng = random.Random(self.seed)
        self.rng = rng
        self.enable_metrics = enable_metrics

    def run(self) -> GenerationOutputs:
        width, height = self.config.width, self.config.height
        metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        started = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        grid = MazeGrid(width, height)
        exit_pos = exit_for(width, height)
        grid.carve(*START)
        visited: VisitedSet = {START}

        path_found = _phase("guarantee_path", ensure_path, grid, START, exit_pos, visited)
        if not path_found:
            grid.carve(*exit_pos)
            visited.add(exit_pos)
            log.warn(
                event="path_guarantor_fallback",
                width=width,
                height=height,
                seed=self.seed,
                exit=f"{exit_pos[0]},{exit_pos[1]}",
            )
        path_cells = len(visited)
        filled = _phase("fill_remaining", fill_remaining, grid, visited, self.rng)
        grid.set(*exit_pos, EXIT)

        if self.enable_metrics:
            metrics["path_cells"] = path_cells
            metrics["filled_cells"] = filled
            metrics["open_cells"] = width * height - grid.count(WALL)
            metrics["fallback_used"] = not path_found
            metrics["runtime_ms"] = int((time.perf_counter() - started) * 1000)
            metrics["phase_ms"] = phase_times
        log.debug(event="maze_generated", width=width, height=height, seed=self.seed, path_found=path_found)
        return GenerationOutputs(grid, exit_pos, path_found, self.seed, metrics)


def generate_maze(width: int, height: int, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> MazeGrid:
    """Return a completed maze grid of ``width`` x ``height``.

    Start is (1, 1), exit is (width-2, height-2). Pass ``seed`` or ``rng``
    for reproducible output.
    """
    return MazeGenerator(MazeConfig(width=width, height=height, seed=seed), rng=rng).run().grid


__all__ = ["MazeGenerator", "GenerationOutputs", "generate_maze", "check_dimensions", "exit_for", "MIN_DIMENSION"]
