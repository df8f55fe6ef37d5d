"""Search output parsing.

Result lines have the shape ``path:line:column:text`` (1-based column).
Listings may open with a banner block: non-result lines closed by a blank
separator line.
"""

from __future__ import annotations

import re
from pathlib import Path

from refsweep.search.models import Candidate
from refsweep.semantic.models import Position

RESULT_LINE_RE = re.compile(r"^(?P<path>.+?):(?P<line>\d+):(?P<column>\d+):(?P<text>.*)$")


def normalize_result_path(path: str) -> str:
    """Strip the ``./`` prefix ripgrep prints when searching ``.``."""
    while path.startswith("./"):
        path = path[2:]
    return path


def parse_result_line(raw_text: str, root: Path) -> Candidate | None:
    """Parse one result line, or None if it does not have the result shape."""
    match = RESULT_LINE_RE.match(raw_text.rstrip("\r\n"))
    if match is None:
        return None
    line = int(match["line"])
    column = int(match["column"])
    if line < 1 or column < 1:
        return None
    path = normalize_result_path(match["path"])
    return Candidate(
        raw_text=raw_text,
        path=path,
        line=line,
        column=column,
        text=match["text"],
        position=Position(root / path, line, column - 1),
    )


def banner_length(lines: list[str], root: Path) -> int:
    """Number of leading lines forming a banner block (separator included).

    Zero when the first line is already a result or no blank separator
    precedes the first result.
    """
    for i, raw in enumerate(lines):
        if parse_result_line(raw, root) is not None:
            return 0
        if not raw.strip():
            return i + 1
    return 0
