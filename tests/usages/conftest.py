"""Test fixtures for usage lookups.

The ``project`` fixture is a three-file OCaml project where ``count`` is
defined in a.ml, shadowed by a second definition in b.ml, and used through
``A.count`` in c.ml.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from refsweep.semantic.models import Occurrence, Position

A_ML = "let count = 0\n"
B_ML = "let count = 1\nlet y = count\n"
C_ML = "let z = A.count\n"

SEARCH_LINES = [
    "./lib/a.ml:1:5:let count = 0",
    "./lib/b.ml:1:5:let count = 1",
    "./lib/b.ml:2:9:let y = count",
    "./lib/c.ml:1:11:let z = A.count",
]


@dataclass
class OcamlProject:
    root: Path
    a: Path
    b: Path
    c: Path
    service: Any

    @property
    def definition(self) -> Position:
        return Position(self.a, 1, 4)

    @property
    def search_lines(self) -> list[str]:
        return list(SEARCH_LINES)

    @property
    def cursor(self) -> Position:
        """Inside ``A.count`` in c.ml."""
        return Position(self.c, 1, 12)


def _span(path: Path, line: int, column: int, length: int = 5) -> Occurrence:
    return Occurrence(Position(path, line, column), Position(path, line, column + length))


@pytest.fixture
def project(write_file: Callable[[str, str], Path], fake_service_cls: Any) -> OcamlProject:
    a = write_file("lib/a.ml", A_ML)
    b = write_file("lib/b.ml", B_ML)
    c = write_file("lib/c.ml", C_ML)
    write_file("dune-project", "(lang dune 3.0)\n")
    root = a.parent.parent

    spans = [_span(a, 1, 4), _span(b, 1, 4), _span(b, 2, 8), _span(c, 1, 10)]
    definition = Position(a, 1, 4)
    shadowed = Position(b, 1, 4)
    definitions = {
        Position(a, 1, 4): definition,
        Position(b, 1, 4): shadowed,
        Position(b, 2, 8): shadowed,
        Position(c, 1, 10): definition,
    }
    service = fake_service_cls(spans=spans, definitions=definitions)
    return OcamlProject(root=root, a=a, b=b, c=c, service=service)
