"""Document text and position/offset conversion.

Stands in for the host editor's open buffers: each file is read once per
invocation and handed to the semantic service as the "current document".
"""

from __future__ import annotations

from bisect import bisect_right
from pathlib import Path

from refsweep.core.errors import ResolutionError
from refsweep.core.logging import get_logger
from refsweep.semantic.models import Position

log = get_logger("semantic.document")


class Document:
    """Immutable text of one file with line-start offsets."""

    def __init__(self, path: Path, text: str) -> None:
        self.path = path
        self.text = text
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_of(self, position: Position) -> int:
        """Character offset of a (line, byte column) position in this document.

        Columns count UTF-8 bytes, as Merlin and ripgrep report them. Columns
        past the end of a line clamp to the line end.
        """
        if position.line > self.line_count:
            raise ResolutionError.no_resolution(
                position.display(), f"line beyond end of document ({self.line_count} lines)"
            )
        start = self._line_starts[position.line - 1]
        prefix = self.line_text(position.line).encode()[: position.column]
        # A column inside a multi-byte character rounds down to its start
        return start + len(prefix.decode(errors="ignore"))

    def position_of(self, offset: int) -> Position:
        """Position (with byte column) of a character offset, clamped to the document."""
        offset = max(0, min(offset, len(self.text)))
        line_idx = bisect_right(self._line_starts, offset) - 1
        column = len(self.text[self._line_starts[line_idx] : offset].encode())
        return Position(self.path, line_idx + 1, column)

    def slice(self, start: Position, end: Position) -> str:
        return self.text[self.offset_of(start) : self.offset_of(end)]

    def line_text(self, line: int) -> str:
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < self.line_count else len(self.text)
        return self.text[start:end]


class DocumentStore:
    """Loads documents on demand and keeps them for one invocation."""

    def __init__(self) -> None:
        self._documents: dict[Path, Document] = {}

    def open(self, path: Path) -> Document:
        doc = self._documents.get(path)
        if doc is None:
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise ResolutionError.no_resolution(str(path), f"cannot read file: {e}") from e
            doc = Document(path, text)
            self._documents[path] = doc
            log.debug("document_loaded", path=str(path), lines=doc.line_count)
        return doc

    def __len__(self) -> int:
        return len(self._documents)
