"""Public maze package interface."""

from .config import MazeConfig
from .errors import InvalidMazeError, MazeError, MazeLoadError
from .generator import GenerationOutputs, MazeGenerator, generate_maze
from .grid import MazeGrid
from .record import PROCEDURAL, ExitPosition, MazeRecord, PlayerStart
from .solver import is_solvable, shortest_path
from .tiles import EXIT, OPEN, START, WALL, Cell, Direction
from .validation import ValidationResult, validate_maze

__all__ = [
    "MazeConfig",
    "MazeError",
    "MazeLoadError",
    "InvalidMazeError",
    "GenerationOutputs",
    "MazeGenerator",
    "generate_maze",
    "MazeGrid",
    "PROCEDURAL",
    "ExitPosition",
    "MazeRecord",
    "PlayerStart",
    "is_solvable",
    "shortest_path",
    "Cell",
    "Direction",
    "WALL",
    "OPEN",
    "EXIT",
    "START",
    "ValidationResult",
    "validate_maze",
]
