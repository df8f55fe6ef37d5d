"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides an in-memory semantic service for pipeline tests.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local refsweep package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of refsweep modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("refsweep"):
        del sys.modules[module_name]

from refsweep.core.errors import ResolutionError  # noqa: E402
from refsweep.semantic.document import Document  # noqa: E402
from refsweep.semantic.models import Occurrence, Position  # noqa: E402


class FakeSemanticService:
    """In-memory SemanticService.

    ``spans`` lists every identifier span the service knows; ``occurrences``
    returns the spans in the queried document. ``definitions`` maps a position
    to the definition it resolves to; unmapped positions raise NO_RESOLUTION.
    """

    def __init__(
        self,
        *,
        spans: list[Occurrence] | None = None,
        definitions: dict[Position, Position] | None = None,
    ) -> None:
        self.spans = spans or []
        self.definitions = definitions or {}
        self.locate_calls: list[Position] = []
        self.occurrence_calls: list[Position] = []

    def available(self) -> bool:
        return True

    async def occurrences(self, document: Document, position: Position) -> list[Occurrence]:
        self.occurrence_calls.append(position)
        return [span for span in self.spans if span.start.file == document.path]

    async def locate(self, document: Document, position: Position) -> Position:
        self.locate_calls.append(position)
        try:
            return self.definitions[position]
        except KeyError:
            raise ResolutionError.no_resolution(str(position), "Not in environment") from None


@pytest.fixture
def fake_service_cls() -> type[FakeSemanticService]:
    return FakeSemanticService


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a project file under tmp_path and return its absolute path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
