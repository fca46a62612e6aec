"""Maze file loading and bulk validation.

Files that cannot be read or parsed raise ``MazeLoadError``; in bulk runs they
are reported per file and counted invalid, never aborting the batch.
"""
from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from labyrinth.logging_utils import get_logger

from .errors import InvalidMazeError, MazeLoadError
from .record import PROCEDURAL, MazeRecord
from .solver import is_solvable
from .validation import ValidationResult, validate_maze

log = get_logger("labyrinth.maze.loader")

PathLike = Union[str, Path]


@dataclass
class BatchReport:
    valid: int = 0
    invalid: int = 0
    results: Dict[str, ValidationResult] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.invalid == 0

    def add(self, result: ValidationResult) -> None:
        self.results[result.source] = result
        if result.success:
            self.valid += 1
        else:
            self.invalid += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "invalid": self.invalid,
            "results": {k: v.to_dict() for k, v in self.results.items()},
        }


def list_maze_files(maze_dir: PathLike) -> List[Path]:
    path = Path(maze_dir)
    if not path.is_dir():
        raise MazeLoadError(str(path), "not a directory")
    return sorted(p for p in path.iterdir() if p.suffix == ".json" and p.is_file())


def load_maze_file(path: PathLike) -> Dict[str, Any]:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise MazeLoadError(path.name, f"Failed to read file: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise MazeLoadError(path.name, f"Failed to parse file: {e.msg} (line {e.lineno})") from e
    except UnicodeDecodeError as e:
        raise MazeLoadError(path.name, f"Failed to parse file: not UTF-8 text ({e.reason} at byte {e.start})") from e


def unreachable_message(record: MazeRecord) -> str:
    sx, sy = record.start_pos
    ex, ey = record.exit_pos
    return f"Exit ({ex},{ey}) is not reachable from start ({sx},{sy})"


def check_record(data: Any, source: str, check_solvable: bool = False) -> ValidationResult:
    """Structural validation, optionally followed by the reachability check."""
    result = validate_maze(data, source)
    if not (result.success and check_solvable):
        return result
    try:
        record = MazeRecord.from_dict(data, source, allow_procedural=False)
    except InvalidMazeError as e:
        return ValidationResult(False, e.errors, source)
    if not is_solvable(record.playable_grid(), record.start_pos):
        return ValidationResult(False, [unreachable_message(record)], source)
    return result


def _log_result(result: ValidationResult) -> None:
    if result.success:
        log.info(event="maze_valid", source=result.source)
    else:
        log.error(event="maze_invalid", source=result.source, issues=len(result.errors))
        for err in result.errors:
            log.error(event="maze_issue", source=result.source, detail=err)


def validate_records(records: Mapping[str, Any], check_solvable: bool = False) -> BatchReport:
    """Validate an in-memory listing of ``{label: parsed record}``."""
    report = BatchReport()
    for label, data in records.items():
        result = check_record(data, label, check_solvable)
        _log_result(result)
        report.add(result)
    return report


def validate_maze_file(path: PathLike, check_solvable: bool = False, generate_procedural: bool = False,
                       rng: Optional[random.Random] = None) -> ValidationResult:
    path = Path(path)
    try:
        data = load_maze_file(path)
    except MazeLoadError as e:
        return ValidationResult(False, [e.message], path.name)
    if generate_procedural and isinstance(data, dict) and data.get("layout") == PROCEDURAL:
        try:
            data = MazeRecord.from_dict(data, path.name).materialize(rng=rng).to_dict()
        except (InvalidMazeError, ValueError) as e:
            errors = e.errors if isinstance(e, InvalidMazeError) else [str(e)]
            return ValidationResult(False, errors, path.name)
    return check_record(data, path.name, check_solvable)


def validate_directory(maze_dir: PathLike, check_solvable: bool = False,
                       generate_procedural: bool = False) -> BatchReport:
    files = list_maze_files(maze_dir)
    log.info(event="validate_directory", path=str(maze_dir), files=len(files))
    report = BatchReport()
    for path in files:
        result = validate_maze_file(path, check_solvable, generate_procedural)
        _log_result(result)
        report.add(result)
    log.info(event="validation_summary", valid=report.valid, invalid=report.invalid)
    return report


def load_record(path: PathLike, generate_procedural: bool = True, seed: Optional[int] = None,
                rng: Optional[random.Random] = None) -> MazeRecord:
    """Load, validate and (optionally) materialize a maze file.

    Raises MazeLoadError for unreadable files and InvalidMazeError for files
    that fail validation.
    """
    path = Path(path)
    record = MazeRecord.from_dict(load_maze_file(path), path.name, allow_procedural=generate_procedural)
    if record.is_procedural:
        record = record.materialize(seed=seed, rng=rng)
    return record


def fill_procedural_file(path: PathLike, seed: Optional[int] = None) -> MazeRecord:
    """Replace a file's ``PROCEDURAL`` layout with a generated grid in place."""
    path = Path(path)
    data = load_maze_file(path)
    record = MazeRecord.from_dict(data, path.name)
    if record.is_procedural:
        record = record.materialize(seed=seed)
        data["layout"] = record.grid.to_layout()
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        log.info(event="procedural_filled", source=path.name, width=record.width, height=record.height)
    return record


__all__ = [
    "BatchReport",
    "list_maze_files",
    "load_maze_file",
    "load_record",
    "check_record",
    "validate_records",
    "validate_maze_file",
    "validate_directory",
    "fill_procedural_file",
    "unreachable_message",
]
