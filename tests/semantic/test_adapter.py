"""Tests for the view stack and the semantic query adapter."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from refsweep.core.errors import ErrorCode, InternalError, ResolutionError
from refsweep.semantic.adapter import SemanticQueryAdapter, ViewStack
from refsweep.semantic.models import Occurrence, Position


class TestViewStack:
    def test_push_pop_is_lifo(self) -> None:
        a, b, c = (Position(Path("/p/a.ml"), n, 0) for n in (1, 2, 3))
        view = ViewStack(a)

        view.push(b)
        view.push(c)
        assert view.current == c
        assert view.depth == 2

        assert view.pop() == b
        assert view.pop() == a
        assert view.depth == 0

    def test_pop_empty_raises_internal_error(self) -> None:
        view = ViewStack(Position(Path("/p/a.ml"), 1, 0))
        with pytest.raises(InternalError) as exc_info:
            view.pop()
        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR

    def test_restore_returns_to_snapshot(self) -> None:
        start = Position(Path("/p/a.ml"), 1, 0)
        view = ViewStack(start)
        snapshot = view.snapshot()

        view.push(Position(Path("/p/b.ml"), 4, 2))
        view.push(Position(Path("/p/c.ml"), 7, 8))
        view.restore(snapshot)

        assert view.current == start
        assert view.depth == 0

    def test_restore_is_idempotent(self) -> None:
        start = Position(Path("/p/a.ml"), 1, 0)
        view = ViewStack(start)
        snapshot = view.snapshot()
        view.restore(snapshot)
        view.restore(snapshot)
        assert view.current == start


class TestSemanticQueryAdapter:
    @pytest.fixture
    def project(self, write_file: Callable[[str, str], Path]) -> dict[str, Path]:
        return {
            "a": write_file("lib/a.ml", "let count = 0\nlet x = count\n"),
            "b": write_file("lib/b.ml", "let y = A.count\n"),
        }

    @pytest.mark.asyncio
    async def test_occurrences_use_current_document(
        self, project: dict[str, Path], fake_service_cls: Any
    ) -> None:
        a = project["a"]
        spans = [
            Occurrence(Position(a, 1, 4), Position(a, 1, 9)),
            Occurrence(Position(project["b"], 1, 10), Position(project["b"], 1, 15)),
        ]
        service = fake_service_cls(spans=spans)
        adapter = SemanticQueryAdapter(service, Position(a, 2, 9))

        result = await adapter.occurrences_in_current_document()

        assert result == spans[:1]
        assert service.occurrence_calls == [Position(a, 2, 9)]

    @pytest.mark.asyncio
    async def test_occurrences_fail_silently(self, project: dict[str, Path]) -> None:
        service = AsyncMock()
        service.occurrences.side_effect = ResolutionError.service_failed("occurrences", "boom")
        adapter = SemanticQueryAdapter(service, Position(project["a"], 1, 4))

        assert await adapter.occurrences_in_current_document() == []

    @pytest.mark.asyncio
    async def test_occurrences_empty_when_document_unreadable(
        self, tmp_path: Path, fake_service_cls: Any
    ) -> None:
        adapter = SemanticQueryAdapter(fake_service_cls(), Position(tmp_path / "gone.ml", 1, 0))
        assert await adapter.occurrences_in_current_document() == []

    @pytest.mark.asyncio
    async def test_definition_of_queries_target_document(
        self, project: dict[str, Path], fake_service_cls: Any
    ) -> None:
        a, b = project["a"], project["b"]
        definition = Position(a, 1, 4)
        service = fake_service_cls(definitions={Position(b, 1, 10): definition})
        adapter = SemanticQueryAdapter(service, Position(a, 1, 4))

        assert await adapter.definition_of(Position(b, 1, 10)) == definition

    @pytest.mark.asyncio
    async def test_definition_of_raises_no_resolution(
        self, project: dict[str, Path], fake_service_cls: Any
    ) -> None:
        adapter = SemanticQueryAdapter(fake_service_cls(), Position(project["a"], 1, 4))
        with pytest.raises(ResolutionError) as exc_info:
            await adapter.definition_of(Position(project["b"], 1, 0))
        assert exc_info.value.code == ErrorCode.NO_RESOLUTION

    def test_push_pop_moves_cursor(self, project: dict[str, Path], fake_service_cls: Any) -> None:
        start = Position(project["a"], 1, 4)
        adapter = SemanticQueryAdapter(fake_service_cls(), start)

        adapter.push_view(Position(project["b"], 1, 10))
        assert adapter.cursor.file == project["b"]
        assert adapter.view_depth == 1

        assert adapter.pop_view() == start
        assert adapter.cursor == start
        assert adapter.view_depth == 0
