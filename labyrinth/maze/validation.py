"""Structural validation of deserialized maze records.

Operates on the raw JSON-like dict (not on MazeRecord) so that arbitrarily
malformed input can be checked. Never raises: every problem found is appended
to the error list, and all checks run so a caller can report everything in
one pass.

Checks:
    * required fields: width, height, playerStart, exit, layout
    * width / height are positive numbers
    * playerStart has x, y, direction with direction in [0, 3]; exit has x, y
    * layout is a list of ``height`` rows of ``width`` cells from the alphabet
    * outer boundary is all walls (top/bottom once each, left/right per row)
    * player start and exit, when inside the layout, are not walls
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tiles import CELL_CHARS, WALL

REQUIRED_FIELDS = ("width", "height", "playerStart", "exit", "layout")
PLAYER_START_FIELDS = ("x", "y", "direction")
EXIT_FIELDS = ("x", "y")
WALL_CHAR = WALL.value


@dataclass
class ValidationResult:
    success: bool
    errors: List[str] = field(default_factory=list)
    source: str = "<record>"

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "errors": list(self.errors)}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _check_header(record: Dict[str, Any], errors: List[str]) -> None:
    for prop in REQUIRED_FIELDS:
        if prop not in record:
            errors.append(f"Missing required property: {prop}")

    for dim in ("width", "height"):
        value = record.get(dim)
        if not _is_number(value) or value <= 0:
            errors.append(f"Invalid {dim}: {value}. Must be a positive number.")

    player = record.get("playerStart")
    if "playerStart" in record:
        if not isinstance(player, dict):
            errors.append(f"Invalid playerStart: {player}. Must be an object.")
        else:
            for prop in PLAYER_START_FIELDS:
                if prop not in player:
                    errors.append(f"Missing required playerStart property: {prop}")
            direction = player.get("direction")
            if not _is_number(direction) or direction < 0 or direction > 3:
                errors.append(f"Invalid playerStart.direction: {direction}. Must be 0-3.")

    exit_pos = record.get("exit")
    if "exit" in record:
        if not isinstance(exit_pos, dict):
            errors.append(f"Invalid exit: {exit_pos}. Must be an object.")
        else:
            for prop in EXIT_FIELDS:
                if prop not in exit_pos:
                    errors.append(f"Missing required exit property: {prop}")


def _check_layout(record: Dict[str, Any], errors: List[str]) -> None:
    layout = record.get("layout")
    if not isinstance(layout, list):
        errors.append("Layout is not an array")
        return
    height = record.get("height")
    width = record.get("width")
    if len(layout) != height:
        errors.append(f"Layout height ({len(layout)}) doesn't match specified height ({height})")
    valid = ", ".join(CELL_CHARS)
    for y, row in enumerate(layout):
        if not isinstance(row, list):
            errors.append(f"Layout row {y} is not an array")
            continue
        if len(row) != width:
            errors.append(f"Layout row {y} width ({len(row)}) doesn't match specified width ({width})")
        for x, cell in enumerate(row):
            if cell not in CELL_CHARS:
                errors.append(f'Invalid cell value at ({x},{y}): "{cell}". Valid values are: {valid}')


def _check_boundaries(layout: List[Any], errors: List[str]) -> None:
    top, bottom = layout[0], layout[-1]
    if isinstance(top, list) and any(c != WALL_CHAR for c in top):
        errors.append("Top boundary is not all walls (#)")
    if isinstance(bottom, list) and any(c != WALL_CHAR for c in bottom):
        errors.append("Bottom boundary is not all walls (#)")
    for y, row in enumerate(layout):
        if not isinstance(row, list):
            continue
        if (row[0] if row else None) != WALL_CHAR:
            errors.append(f"Left boundary at row {y} is not a wall (#)")
        if (row[-1] if row else None) != WALL_CHAR:
            errors.append(f"Right boundary at row {y} is not a wall (#)")


def _cell_at(layout: List[Any], pos: Any) -> Optional[Any]:
    """Cell value at pos if pos has integer coordinates inside the layout."""
    if not isinstance(pos, dict):
        return None
    x, y = pos.get("x"), pos.get("y")
    if not (_is_index(x) and _is_index(y)) or y >= len(layout):
        return None
    row = layout[y]
    if not isinstance(row, list) or x >= len(row):
        return None
    return row[x]


def _check_positions(record: Dict[str, Any], layout: List[Any], errors: List[str]) -> None:
    player = record.get("playerStart")
    if _cell_at(layout, player) == WALL_CHAR:
        errors.append(f"Player starting position ({player['x']},{player['y']}) is inside a wall")
    exit_pos = record.get("exit")
    if _cell_at(layout, exit_pos) == WALL_CHAR:
        errors.append(f"Exit position ({exit_pos['x']},{exit_pos['y']}) is inside a wall")


def validate_header(record: Any, source: str = "<record>") -> ValidationResult:
    """Run only the metadata checks (everything except layout contents)."""
    if not isinstance(record, dict):
        return ValidationResult(False, ["Maze record is not an object"], source)
    errors: List[str] = []
    _check_header(record, errors)
    return ValidationResult(not errors, errors, source)


def validate_maze(record: Any, source: str = "<record>") -> ValidationResult:
    if not isinstance(record, dict):
        return ValidationResult(False, ["Maze record is not an object"], source)
    errors: List[str] = []
    _check_header(record, errors)
    _check_layout(record, errors)
    layout = record.get("layout")
    if isinstance(layout, list) and layout:
        _check_boundaries(layout, errors)
        _check_positions(record, layout, errors)
    return ValidationResult(not errors, errors, source)


__all__ = ["ValidationResult", "validate_maze", "validate_header", "REQUIRED_FIELDS"]
