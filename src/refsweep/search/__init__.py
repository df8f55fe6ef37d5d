"""Search module - project-wide lexical search via ripgrep."""

from refsweep.search.models import Candidate, SearchOutput, SearchRequest, split_records
from refsweep.search.orchestrator import SearchHandle, SearchOrchestrator
from refsweep.search.parser import banner_length, parse_result_line
from refsweep.search.pattern import build_pattern, identifier_regex, is_identifier_at

__all__ = [
    "Candidate",
    "SearchHandle",
    "SearchOrchestrator",
    "SearchOutput",
    "SearchRequest",
    "banner_length",
    "build_pattern",
    "parse_result_line",
    "identifier_regex",
    "is_identifier_at",
    "split_records",
]
