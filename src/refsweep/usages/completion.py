"""Completion and view restoration for a usage lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from refsweep.core.logging import get_logger

if TYPE_CHECKING:
    from refsweep.search.orchestrator import SearchHandle
    from refsweep.semantic.adapter import SemanticQueryAdapter, ViewSnapshot

log = get_logger("usages.completion")


async def complete(
    handle: SearchHandle | None,
    adapter: SemanticQueryAdapter,
    snapshot: ViewSnapshot,
) -> None:
    """Release the search and put the view back where the lookup started.

    Idempotent: the handle may already be closed, or no search may have
    been launched at all.
    """
    if handle is not None:
        await handle.close()
    adapter.restore(snapshot)
    log.debug("view_restored", position=str(snapshot.position))
