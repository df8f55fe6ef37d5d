"""Semantic query adapter.

Binds a SemanticService to a view: the current position decides which
document is "open", and push/pop navigation moves the view the way an editor
jump does. Queries always run against the document under the view.
"""

from __future__ import annotations

from dataclasses import dataclass

from refsweep.core.errors import InternalError, ResolutionError
from refsweep.core.logging import get_logger
from refsweep.semantic.document import Document, DocumentStore
from refsweep.semantic.models import Occurrence, Position
from refsweep.semantic.service import SemanticService

log = get_logger("semantic.adapter")


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Captured view state: where the view was and how deep the stack was."""

    position: Position
    depth: int


class ViewStack:
    """Current view position with a LIFO history of prior positions."""

    def __init__(self, position: Position) -> None:
        self._current = position
        self._history: list[Position] = []

    @property
    def current(self) -> Position:
        return self._current

    @property
    def depth(self) -> int:
        return len(self._history)

    def push(self, position: Position) -> None:
        self._history.append(self._current)
        self._current = position

    def pop(self) -> Position:
        if not self._history:
            raise InternalError.unexpected("view stack underflow", position=str(self._current))
        self._current = self._history.pop()
        return self._current

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(position=self._current, depth=len(self._history))

    def restore(self, snapshot: ViewSnapshot) -> None:
        del self._history[snapshot.depth :]
        self._current = snapshot.position


class SemanticQueryAdapter:
    """Wraps the service's primitives around a view stack and document store."""

    def __init__(
        self,
        service: SemanticService,
        cursor: Position,
        *,
        documents: DocumentStore | None = None,
    ) -> None:
        self._service = service
        self._documents = documents if documents is not None else DocumentStore()
        self._view = ViewStack(cursor)

    @property
    def cursor(self) -> Position:
        return self._view.current

    @property
    def view_depth(self) -> int:
        return self._view.depth

    @property
    def documents(self) -> DocumentStore:
        return self._documents

    def current_document(self) -> Document:
        return self._documents.open(self._view.current.file)

    async def occurrences_in_current_document(self) -> list[Occurrence]:
        """All occurrence spans the service knows at the cursor.

        Returns an empty list when the service has no data.
        """
        cursor = self._view.current
        try:
            document = self.current_document()
            return await self._service.occurrences(document, cursor)
        except ResolutionError as e:
            log.debug("occurrences_unavailable", position=str(cursor), error=e.error_name)
            return []

    async def definition_of(self, position: Position) -> Position:
        """Definition site of the identifier at ``position``.

        Raises:
            ResolutionError: No identifier there, or the service cannot resolve it.
        """
        document = self._documents.open(position.file)
        return await self._service.locate(document, position)

    def push_view(self, position: Position) -> None:
        self._view.push(position)

    def pop_view(self) -> Position:
        return self._view.pop()

    def snapshot(self) -> ViewSnapshot:
        return self._view.snapshot()

    def restore(self, snapshot: ViewSnapshot) -> None:
        self._view.restore(snapshot)
