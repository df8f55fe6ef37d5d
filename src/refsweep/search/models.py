"""Search models - requests, raw output, parsed candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from refsweep.config.constants import SEARCH_SUCCESS_CODES
from refsweep.semantic.models import Position


@dataclass(frozen=True)
class SearchRequest:
    """One ripgrep invocation."""

    pattern: str
    root: Path
    file_type: str
    globs: list[str] = field(default_factory=list)


def split_records(text: str) -> list[str]:
    """Split tool output into records on ``\\n`` only.

    Source lines may contain form feeds or other characters that
    ``str.splitlines`` treats as breaks; ripgrep separates records with
    newlines alone.
    """
    records = [record.removesuffix("\r") for record in text.split("\n")]
    if records and records[-1] == "":
        records.pop()
    return records


@dataclass
class SearchOutput:
    """Completed search: raw output buffer plus exit status."""

    text: str
    returncode: int | None
    stderr: str = ""
    duration_seconds: float = 0.0

    @property
    def lines(self) -> list[str]:
        return split_records(self.text)

    @property
    def succeeded(self) -> bool:
        return self.returncode in SEARCH_SUCCESS_CODES

    @property
    def exit_message(self) -> str:
        if self.returncode == 0:
            return "finished"
        if self.returncode == 1:
            return "finished (no matches)"
        if self.returncode is None:
            return "killed"
        return f"exited abnormally with code {self.returncode}"


@dataclass(frozen=True)
class Candidate:
    """A lexical match, not yet confirmed as a usage."""

    raw_text: str
    path: str  # as printed by the search tool, relative to root
    line: int
    column: int  # 1-based, as printed
    text: str
    position: Position  # 0-based column, absolute file

    def render(self) -> str:
        return f"{self.path}:{self.line}:{self.column}:{self.text}"
