"""Identifier resolution at the cursor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, overload

from refsweep.core.errors import ErrorCode, ResolutionError
from refsweep.core.logging import get_logger
from refsweep.semantic.models import IdentifierReference, Occurrence

if TYPE_CHECKING:
    from refsweep.semantic.adapter import SemanticQueryAdapter
    from refsweep.semantic.document import Document

log = get_logger("semantic.resolver")


def occurrence_at_offset(
    document: Document,
    occurrences: list[Occurrence],
    offset: int,
) -> Occurrence | None:
    """First occurrence whose half-open span [start, end) holds ``offset``."""
    for occurrence in occurrences:
        if occurrence.start.file != document.path:
            continue
        start = document.offset_of(occurrence.start)
        end = document.offset_of(occurrence.end)
        if start <= offset < end:
            return occurrence
    return None


@overload
async def identifier_at_cursor(
    adapter: SemanticQueryAdapter, *, locate: Literal[False] = ...
) -> str: ...


@overload
async def identifier_at_cursor(
    adapter: SemanticQueryAdapter, *, locate: Literal[True]
) -> IdentifierReference: ...


async def identifier_at_cursor(
    adapter: SemanticQueryAdapter, *, locate: bool = False
) -> str | IdentifierReference:
    """Identifier under the cursor, optionally with its definition site.

    Args:
        adapter: Adapter whose view cursor is the lookup position.
        locate: Also resolve where the identifier is defined.

    Returns:
        The identifier text, or an IdentifierReference when ``locate`` is set.

    Raises:
        ResolutionError: NO_IDENTIFIER_AT_CURSOR if no occurrence holds the cursor.
    """
    cursor = adapter.cursor
    document = adapter.current_document()
    occurrences = await adapter.occurrences_in_current_document()
    try:
        occurrence = occurrence_at_offset(document, occurrences, document.offset_of(cursor))
    except ResolutionError:
        # Cursor beyond the end of the document
        occurrence = None
    if occurrence is None:
        raise ResolutionError.no_identifier_at_cursor(cursor.display())

    identifier = document.slice(occurrence.start, occurrence.end)
    if not locate:
        return identifier

    try:
        definition = await adapter.definition_of(occurrence.start)
    except ResolutionError as e:
        if e.code != ErrorCode.NO_RESOLUTION:
            raise
        # Standing on the definition itself
        definition = occurrence.start

    log.debug(
        "identifier_resolved",
        identifier=identifier,
        origin=str(occurrence.start),
        definition=str(definition),
    )
    return IdentifierReference(
        identifier=identifier,
        definition=definition,
        origin=occurrence.start,
    )
