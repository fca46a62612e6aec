"""Exceptions raised by maze loading and record construction.

Validation itself never raises; it returns a result object. These exceptions
are for callers that need a hard failure (file I/O, record construction).
"""
from __future__ import annotations

from typing import List, Optional


class MazeError(Exception):
    pass


class MazeLoadError(MazeError):
    """A maze file could not be read or parsed as JSON."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class InvalidMazeError(MazeError):
    """A maze record failed validation; carries every error found."""

    def __init__(self, source: str, errors: List[str], message: Optional[str] = None):
        super().__init__(message or f"{source}: {len(errors)} validation issue(s)")
        self.source = source
        self.errors = list(errors)


__all__ = ["MazeError", "MazeLoadError", "InvalidMazeError"]
