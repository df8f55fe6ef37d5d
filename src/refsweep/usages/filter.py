"""Result filter - confirm lexical candidates with the semantic service.

Walks raw search output in order through three states::

    SKIPPING_HEADER -> FILTERING -> DONE

Each candidate is visited by pushing the view onto it, asking what the
identifier there resolves to, and popping the view again. A candidate is a
usage iff it resolves to the reference's definition. Matches that are only part
of a longer identifier are rejected without a semantic query. Candidates are
processed one at a time, in the search tool's output order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from refsweep.core.errors import ResolutionError
from refsweep.core.logging import get_logger
from refsweep.search.parser import banner_length, parse_result_line
from refsweep.search.pattern import is_identifier_at
from refsweep.semantic.models import equals

if TYPE_CHECKING:
    from refsweep.search.models import Candidate
    from refsweep.semantic.adapter import SemanticQueryAdapter
    from refsweep.semantic.models import IdentifierReference, Position

log = get_logger("usages.filter")


class FilterState(Enum):
    SKIPPING_HEADER = "skipping_header"
    FILTERING = "filtering"
    DONE = "done"


@dataclass(frozen=True)
class RejectedCandidate:
    """A candidate judged not to be a usage."""

    candidate: Candidate
    resolved: Position | None  # None when resolution failed
    reason: str


@dataclass
class FilterOutcome:
    """Confirmed candidates in output order, plus what was dropped."""

    confirmed: list[Candidate] = field(default_factory=list)
    rejected: list[RejectedCandidate] = field(default_factory=list)
    unparseable: list[str] = field(default_factory=list)
    header: list[str] = field(default_factory=list)

    @property
    def examined(self) -> int:
        return len(self.confirmed) + len(self.rejected)


class ResultFilter:
    """Confirms or rejects each result line against one fixed reference."""

    def __init__(
        self,
        adapter: SemanticQueryAdapter,
        reference: IdentifierReference,
        root: Path,
    ) -> None:
        self._adapter = adapter
        self._reference = reference
        self._root = root
        self.state = FilterState.SKIPPING_HEADER

    async def is_usage(self, candidate: Candidate) -> tuple[bool, Position | None, str]:
        """Visit one candidate and judge it.

        Returns:
            (is_usage, resolved definition or None, reason)
        """
        if not is_identifier_at(candidate.text, candidate.column, self._reference.identifier):
            # Part of a longer identifier such as foo' for foo
            return False, None, "partial_identifier"

        self._adapter.push_view(candidate.position)
        try:
            resolved = await self._adapter.definition_of(candidate.position)
        except ResolutionError as e:
            return False, None, e.error_name
        finally:
            self._adapter.pop_view()

        if equals(resolved, self._reference.definition):
            return True, resolved, "same_definition"
        return False, resolved, "other_definition"

    async def run(self, lines: list[str]) -> FilterOutcome:
        """Filter raw result lines, returning confirmed candidates in order."""
        outcome = FilterOutcome()

        self.state = FilterState.SKIPPING_HEADER
        skip = banner_length(lines, self._root)
        outcome.header = lines[:skip]
        index = skip

        self.state = FilterState.FILTERING
        while index < len(lines):
            raw = lines[index]
            index += 1
            if not raw.strip():
                continue

            candidate = parse_result_line(raw, self._root)
            if candidate is None:
                log.debug("result_line_unparseable", raw=raw)
                outcome.unparseable.append(raw)
                continue

            usage, resolved, reason = await self.is_usage(candidate)
            if usage:
                outcome.confirmed.append(candidate)
                log.debug("candidate_confirmed", candidate=candidate.render())
            else:
                outcome.rejected.append(RejectedCandidate(candidate, resolved, reason))
                log.debug(
                    "candidate_rejected",
                    candidate=candidate.render(),
                    resolved=str(resolved) if resolved else None,
                    reason=reason,
                )

        self.state = FilterState.DONE
        log.info(
            "filter_done",
            identifier=self._reference.identifier,
            confirmed=len(outcome.confirmed),
            rejected=len(outcome.rejected),
            unparseable=len(outcome.unparseable),
        )
        return outcome
