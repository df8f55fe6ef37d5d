"""Usages module - confirm lexical matches into semantic usages."""

from refsweep.usages.filter import FilterOutcome, FilterState, RejectedCandidate, ResultFilter
from refsweep.usages.listing import ResultListing
from refsweep.usages.ops import UsageOps, UsageResult

__all__ = [
    "FilterOutcome",
    "FilterState",
    "RejectedCandidate",
    "ResultFilter",
    "ResultListing",
    "UsageOps",
    "UsageResult",
]
