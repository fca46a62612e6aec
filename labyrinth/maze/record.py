"""Maze record: a grid plus the metadata stored in maze files.

A record either owns a concrete grid or is *procedural* (``grid is None``),
meaning the layout is generated on demand from width/height. Serialized
records write the procedural state as the literal ``"PROCEDURAL"``.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .config import MazeConfig
from .errors import InvalidMazeError
from .generator import MazeGenerator
from .grid import Coord2D, MazeGrid
from .tiles import EXIT, START, Direction
from .validation import validate_header, validate_maze

PROCEDURAL = "PROCEDURAL"


def _is_coord(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class PlayerStart:
    x: int
    y: int
    direction: int = Direction.EAST

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "direction": int(self.direction)}


@dataclass(frozen=True)
class ExitPosition:
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass
class MazeRecord:
    name: str
    width: int
    height: int
    player_start: PlayerStart
    exit: ExitPosition
    grid: Optional[MazeGrid] = None

    @property
    def is_procedural(self) -> bool:
        return self.grid is None

    @property
    def start_pos(self) -> Coord2D:
        return (self.player_start.x, self.player_start.y)

    @property
    def exit_pos(self) -> Coord2D:
        return (self.exit.x, self.exit.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "playerStart": self.player_start.to_dict(),
            "exit": self.exit.to_dict(),
            "layout": PROCEDURAL if self.grid is None else self.grid.to_layout(),
        }

    def playable_grid(self) -> MazeGrid:
        """Copy of the grid with the exit cell labelled, ready for solving.

        Hand-authored files may leave the exit cell blank; the game labels it
        from the ``exit`` coordinates.
        """
        if self.grid is None:
            raise ValueError(f"Maze '{self.name}' is procedural; materialize it first")
        grid = self.grid.copy()
        if grid.find_exit() is None and grid.in_bounds(*self.exit_pos):
            grid.set(*self.exit_pos, EXIT)
        return grid

    def materialize(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> "MazeRecord":
        """Return a record with a generated grid if this one is procedural."""
        if self.grid is not None:
            return self
        generator = MazeGenerator(MazeConfig(width=self.width, height=self.height, seed=seed, name=self.name), rng=rng)
        return replace(self, grid=generator.run().grid)

    @classmethod
    def from_grid(cls, grid: MazeGrid, name: str = "Generated Maze", direction: int = Direction.EAST) -> "MazeRecord":
        exit_pos = grid.find_exit()
        if exit_pos is None:
            raise ValueError("Grid has no exit cell")
        return cls(
            name=name,
            width=grid.width,
            height=grid.height,
            player_start=PlayerStart(START[0], START[1], direction),
            exit=ExitPosition(*exit_pos),
            grid=grid,
        )

    @classmethod
    def from_dict(cls, data: Any, source: str = "<record>", allow_procedural: bool = True) -> "MazeRecord":
        """Validate and build a record; raises InvalidMazeError on any problem."""
        procedural = allow_procedural and isinstance(data, dict) and data.get("layout") == PROCEDURAL
        result = validate_header(data, source) if procedural else validate_maze(data, source)
        if not result.success:
            raise InvalidMazeError(source, result.errors)
        player = data["playerStart"]
        fields = {
            "width": data["width"],
            "height": data["height"],
            "playerStart.direction": player["direction"],
            "playerStart.x": player["x"],
            "playerStart.y": player["y"],
            "exit.x": data["exit"]["x"],
            "exit.y": data["exit"]["y"],
        }
        bad = [f"Invalid {k}: {v}. Must be a non-negative integer." for k, v in fields.items() if not _is_coord(v)]
        if bad:
            raise InvalidMazeError(source, bad)
        return cls(
            name=str(data.get("name") or source),
            width=data["width"],
            height=data["height"],
            player_start=PlayerStart(player["x"], player["y"], player["direction"]),
            exit=ExitPosition(data["exit"]["x"], data["exit"]["y"]),
            grid=None if procedural else MazeGrid.from_layout(data["layout"]),
        )


__all__ = ["MazeRecord", "PlayerStart", "ExitPosition", "PROCEDURAL"]
