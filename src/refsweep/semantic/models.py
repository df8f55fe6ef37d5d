"""Semantic models - positions, occurrence spans, identifier references."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_LOCATION_RE = re.compile(r"^(?P<file>.+?):(?P<line>\d+):(?P<column>\d+)$")


@dataclass(frozen=True, slots=True)
class Position:
    """A location in a project file.

    ``line`` is 1-based and ``column`` is a 0-based UTF-8 byte column.
    Paths are compared as given; build them from one root.
    """

    file: Path
    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")

    def display(self, root: Path | None = None) -> str:
        """Render as ``path:line:column`` with a 1-based column."""
        path = self.file
        if root is not None and path.is_relative_to(root):
            path = path.relative_to(root)
        return f"{path.as_posix()}:{self.line}:{self.column + 1}"

    @classmethod
    def parse(cls, location: str, root: Path) -> Position:
        """Parse ``path:line:column`` (1-based column) relative to root."""
        match = _LOCATION_RE.match(location.strip())
        if match is None:
            raise ValueError(f"Expected path:line:column, got {location!r}")
        column = int(match["column"])
        if column < 1:
            raise ValueError(f"Column is 1-based, got {column}")
        return cls(
            file=root / match["file"],
            line=int(match["line"]),
            column=column - 1,
        )

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


def equals(a: Position, b: Position) -> bool:
    """Field-by-field position equality. No path normalization."""
    return a.file == b.file and a.line == b.line and a.column == b.column


@dataclass(frozen=True, slots=True)
class Occurrence:
    """Span ``[start, end)`` of an identifier token in the current document."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class IdentifierReference:
    """Identifier under the cursor and the definition it resolves to."""

    identifier: str
    definition: Position
    origin: Position  # start of the occurrence under the cursor
