"""Result listing - navigable ``path:line:column:text`` output.

A listing is a banner block, a blank separator, then one confirmed usage per
line in the same shape the search tool prints, so editors in grep mode can
jump straight to each usage. Listings can be fed back through the filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from refsweep.core.formatting import pluralize

if TYPE_CHECKING:
    from refsweep.search.models import Candidate
    from refsweep.semantic.models import IdentifierReference

BANNER_TITLE = "-*- refsweep usages -*-"


@dataclass
class ResultListing:
    """Confirmed usages of one identifier, ready to render."""

    root: Path
    reference: IdentifierReference
    candidates: list[Candidate] = field(default_factory=list)
    rejected_count: int = 0

    def banner(self) -> list[str]:
        return [
            BANNER_TITLE,
            f"identifier {self.reference.identifier} defined at "
            f"{self.reference.definition.display(self.root)} (root {self.root})",
            f"{pluralize(len(self.candidates), 'usage')} confirmed, "
            f"{self.rejected_count} rejected",
        ]

    def lines(self) -> list[str]:
        return [candidate.render() for candidate in self.candidates]

    def render(self) -> str:
        return "\n".join([*self.banner(), "", *self.lines()]) + "\n"

    def write(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")

    def print(self, console: Console | None = None) -> None:
        """Print the listing with the location prefix highlighted."""
        console = console or Console()
        for line in self.banner():
            console.print(Text(line, style="dim"))
        console.print()
        for candidate in self.candidates:
            text = Text()
            text.append(candidate.path, style="magenta")
            text.append(f":{candidate.line}:{candidate.column}:", style="green")
            text.append(candidate.text)
            console.print(text, soft_wrap=True)
