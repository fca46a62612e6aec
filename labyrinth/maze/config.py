from dataclasses import dataclass
from typing import Optional

from .tiles import Direction


@dataclass
class MazeConfig:
    width: int = 21
    height: int = 21
    seed: Optional[int] = None
    direction: int = Direction.EAST
    name: str = "Generated Maze"


__all__ = ["MazeConfig"]
