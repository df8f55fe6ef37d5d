"""Usage operations - locate usages of the identifier at a cursor.

Pipeline:
1. Resolve the identifier and its definition at the cursor (fixed reference)
2. Build a whole-word pattern and launch ripgrep over the project
3. Await the search, then confirm each candidate with the semantic service
4. Close the search and restore the view, whatever happened
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from refsweep.config.models import RefSweepConfig
from refsweep.core.errors import SearchError
from refsweep.core.logging import get_logger, set_invocation_id
from refsweep.search.models import split_records
from refsweep.search.orchestrator import SearchHandle, SearchOrchestrator
from refsweep.search.pattern import build_pattern
from refsweep.semantic.adapter import SemanticQueryAdapter
from refsweep.semantic.document import DocumentStore
from refsweep.semantic.resolver import identifier_at_cursor
from refsweep.usages.completion import complete
from refsweep.usages.filter import FilterOutcome, RejectedCandidate, ResultFilter
from refsweep.usages.listing import ResultListing

if TYPE_CHECKING:
    from refsweep.search.models import Candidate
    from refsweep.semantic.models import IdentifierReference, Position
    from refsweep.semantic.service import SemanticService

log = get_logger("usages.ops")


@dataclass
class UsageResult:
    """Outcome of one usage lookup."""

    reference: IdentifierReference
    confirmed: list[Candidate] = field(default_factory=list)
    rejected: list[RejectedCandidate] = field(default_factory=list)
    unparseable: list[str] = field(default_factory=list)
    final_position: Position | None = None
    search_exit_message: str | None = None
    duration_seconds: float = 0.0

    @property
    def files(self) -> list[str]:
        seen: dict[str, None] = {}
        for candidate in self.confirmed:
            seen.setdefault(candidate.path)
        return list(seen)

    def listing(self, root: Path) -> ResultListing:
        return ResultListing(
            root=root,
            reference=self.reference,
            candidates=list(self.confirmed),
            rejected_count=len(self.rejected),
        )

    def to_dict(self, root: Path) -> dict[str, Any]:
        return {
            "identifier": self.reference.identifier,
            "definition": self.reference.definition.display(root),
            "usages": [
                {
                    "path": c.path,
                    "line": c.line,
                    "column": c.column,
                    "text": c.text,
                }
                for c in self.confirmed
            ],
            "rejected": [
                {
                    "location": r.candidate.render(),
                    "resolved": r.resolved.display(root) if r.resolved else None,
                    "reason": r.reason,
                }
                for r in self.rejected
            ],
            "unparseable": [
                SearchError.unparseable_line(raw).to_dict() for raw in self.unparseable
            ],
            "search": self.search_exit_message,
            "duration_seconds": round(self.duration_seconds, 3),
        }


class UsageOps:
    """Usage lookups for one project root."""

    def __init__(
        self,
        root: Path,
        service: SemanticService,
        *,
        config: RefSweepConfig | None = None,
    ) -> None:
        self._root = root
        self._service = service
        self._config = config or RefSweepConfig()
        self._orchestrator = SearchOrchestrator(root, self._config.search)

    @property
    def root(self) -> Path:
        return self._root

    def _adapter(self, cursor: Position) -> SemanticQueryAdapter:
        return SemanticQueryAdapter(self._service, cursor, documents=DocumentStore())

    async def locate_usages(self, cursor: Position) -> UsageResult:
        """Locate every usage of the identifier at ``cursor`` across the project.

        Raises:
            ResolutionError: NO_IDENTIFIER_AT_CURSOR before any search starts.
            SearchError: The search tool is missing or failed.
        """
        set_invocation_id()
        started = time.monotonic()
        adapter = self._adapter(cursor)
        snapshot = adapter.snapshot()
        handle: SearchHandle | None = None
        try:
            reference = await identifier_at_cursor(adapter, locate=True)
            log.info(
                "usage_lookup_started",
                identifier=reference.identifier,
                definition=str(reference.definition),
            )

            handle = await self._orchestrator.launch(build_pattern(reference.identifier))
            output = await handle.wait()

            outcome = await ResultFilter(adapter, reference, self._root).run(output.lines)
        finally:
            await complete(handle, adapter, snapshot)

        return self._result(
            reference,
            outcome,
            final_position=adapter.cursor,
            exit_message=output.exit_message,
            started=started,
        )

    async def refilter(self, listing_text: str, cursor: Position) -> UsageResult:
        """Re-run the filter over a saved listing for the identifier at ``cursor``.

        No search is launched; the listing's banner block is skipped.
        """
        set_invocation_id()
        started = time.monotonic()
        adapter = self._adapter(cursor)
        snapshot = adapter.snapshot()
        try:
            reference = await identifier_at_cursor(adapter, locate=True)
            outcome = await ResultFilter(adapter, reference, self._root).run(
                split_records(listing_text)
            )
        finally:
            await complete(None, adapter, snapshot)

        return self._result(
            reference,
            outcome,
            final_position=adapter.cursor,
            exit_message=None,
            started=started,
        )

    def _result(
        self,
        reference: IdentifierReference,
        outcome: FilterOutcome,
        *,
        final_position: Position,
        exit_message: str | None,
        started: float,
    ) -> UsageResult:
        return UsageResult(
            reference=reference,
            confirmed=outcome.confirmed,
            rejected=outcome.rejected,
            unparseable=outcome.unparseable,
            final_position=final_position,
            search_exit_message=exit_message,
            duration_seconds=time.monotonic() - started,
        )
