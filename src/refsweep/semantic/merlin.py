"""Merlin semantic service.

Runs ``ocamlmerlin single <command>`` per query with the document text on
stdin and decodes Merlin's JSON answer envelope::

    {"class": "return", "value": ..., "notifications": [...]}

``class`` is one of return, failure, error, exception. Only ``return`` carries
a usable value; ``failure`` means Merlin has no answer, while ``error`` and
``exception`` mean Merlin itself broke.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any

from refsweep.config.constants import MERLIN_ALREADY_AT_DEFINITION
from refsweep.config.models import SemanticConfig
from refsweep.core.errors import ResolutionError
from refsweep.core.logging import get_logger
from refsweep.semantic.document import Document
from refsweep.semantic.models import Occurrence, Position

log = get_logger("semantic.merlin")


def _format_position(position: Position) -> str:
    return f"{position.line}:{position.column}"


def _decode_position(data: Any, file: Path) -> Position:
    """Decode a Merlin ``{"line": L, "col": C}`` object."""
    try:
        return Position(file, int(data["line"]), int(data["col"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ResolutionError.service_failed("decode", f"bad position {data!r}") from e


class MerlinService:
    """SemanticService backed by the ocamlmerlin binary."""

    def __init__(self, config: SemanticConfig | None = None) -> None:
        self._config = config or SemanticConfig()

    @property
    def executable(self) -> str:
        return self._config.executable

    def available(self) -> bool:
        return shutil.which(self._config.executable) is not None

    def _build_command(self, command: str, document: Document, args: list[str]) -> list[str]:
        return [
            self._config.executable,
            "single",
            command,
            *args,
            "-filename",
            str(document.path),
            *self._config.extra_flags,
        ]

    async def _query(
        self,
        command: str,
        document: Document,
        position: Position,
        args: list[str],
    ) -> Any:
        """Run one Merlin query and return the ``value`` of a return answer."""
        cmd = self._build_command(command, document, args)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=document.path.parent,
            )
            stdout_bytes, stderr_bytes = await proc.communicate(document.text.encode())
        except OSError as e:
            raise ResolutionError.service_failed(command, str(e)) from e

        if proc.returncode != 0:
            stderr = stderr_bytes.decode(errors="replace")
            raise ResolutionError.service_failed(
                command, f"exit status {proc.returncode}: {stderr.strip()}"
            )

        try:
            answer = json.loads(stdout_bytes.decode(errors="replace"))
        except json.JSONDecodeError as e:
            raise ResolutionError.service_failed(command, f"invalid JSON: {e}") from e
        if not isinstance(answer, dict):
            raise ResolutionError.service_failed(command, f"unexpected answer {answer!r}")

        answer_class = answer.get("class")
        if answer_class in ("error", "exception"):
            raise ResolutionError.service_failed(
                command, f"{answer_class}: {answer.get('value')}"
            )
        if answer_class != "return":
            log.debug(
                "merlin_no_answer",
                command=command,
                position=str(position),
                answer_class=answer_class,
            )
            raise ResolutionError.no_resolution(
                str(position), f"{answer_class}: {answer.get('value')}"
            )
        return answer.get("value")

    async def occurrences(self, document: Document, position: Position) -> list[Occurrence]:
        value = await self._query(
            "occurrences",
            document,
            position,
            ["-identifier-at", _format_position(position)],
        )
        if not isinstance(value, list):
            raise ResolutionError.service_failed("occurrences", f"unexpected value {value!r}")
        return [
            Occurrence(
                start=_decode_position(item.get("start"), document.path),
                end=_decode_position(item.get("end"), document.path),
            )
            for item in value
            if isinstance(item, dict)
        ]

    async def locate(self, document: Document, position: Position) -> Position:
        value = await self._query(
            "locate",
            document,
            position,
            ["-look-for", self._config.look_for, "-position", _format_position(position)],
        )
        if isinstance(value, str):
            if value == MERLIN_ALREADY_AT_DEFINITION:
                return position
            raise ResolutionError.no_resolution(str(position), value)
        if not isinstance(value, dict) or "pos" not in value:
            raise ResolutionError.service_failed("locate", f"unexpected value {value!r}")
        # Definitions in the same buffer may come back without a file
        file = Path(value["file"]) if value.get("file") else document.path
        return _decode_position(value["pos"], file)
