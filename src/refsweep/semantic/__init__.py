"""Semantic module - positions, documents, and semantic service adapters."""

from refsweep.semantic.adapter import SemanticQueryAdapter, ViewSnapshot, ViewStack
from refsweep.semantic.document import Document, DocumentStore
from refsweep.semantic.merlin import MerlinService
from refsweep.semantic.models import IdentifierReference, Occurrence, Position, equals
from refsweep.semantic.resolver import identifier_at_cursor
from refsweep.semantic.service import SemanticService

__all__ = [
    "Document",
    "DocumentStore",
    "IdentifierReference",
    "MerlinService",
    "Occurrence",
    "Position",
    "SemanticQueryAdapter",
    "SemanticService",
    "ViewSnapshot",
    "ViewStack",
    "equals",
    "identifier_at_cursor",
]
