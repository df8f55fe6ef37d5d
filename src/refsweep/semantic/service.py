"""Semantic service protocol.

A semantic service answers two questions about one document at a time:
which spans hold the identifier at a position, and where that identifier
is defined. Implementations raise ResolutionError when they cannot answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from refsweep.semantic.document import Document
    from refsweep.semantic.models import Occurrence, Position


@runtime_checkable
class SemanticService(Protocol):
    """Buffer-scoped semantic queries."""

    async def occurrences(self, document: Document, position: Position) -> list[Occurrence]:
        """Spans in ``document`` of the identifier found at ``position``."""
        ...

    async def locate(self, document: Document, position: Position) -> Position:
        """Definition site of the identifier at ``position``."""
        ...
