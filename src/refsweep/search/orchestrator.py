"""Search orchestration - launch ripgrep and await its completion.

``launch`` returns a SearchHandle that owns the running process. Awaiting
``handle.wait()`` is the completion point; ``handle.close()`` releases the
process and may be called any number of times.
"""

from __future__ import annotations

import asyncio
import shutil
import time
from pathlib import Path
from typing import TYPE_CHECKING

from refsweep.config.constants import SEARCH_OUTPUT_FLAGS
from refsweep.config.models import SearchConfig
from refsweep.core.errors import SearchError
from refsweep.core.logging import get_logger
from refsweep.search.models import SearchOutput, SearchRequest

if TYPE_CHECKING:
    from types import TracebackType

log = get_logger("search.orchestrator")


class SearchHandle:
    """A launched search. Await ``wait()`` for its output."""

    def __init__(
        self,
        request: SearchRequest,
        command: list[str],
        proc: asyncio.subprocess.Process,
    ) -> None:
        self.request = request
        self.command = command
        self._proc = proc
        self._started = time.monotonic()
        self._output: SearchOutput | None = None
        self._closed = False

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def closed(self) -> bool:
        return self._closed

    async def wait(self) -> SearchOutput:
        """Wait for the process to exit and collect its output.

        Raises:
            SearchError: SEARCH_TOOL_FAILED on an unexpected exit status.
        """
        if self._output is None:
            stdout_bytes, stderr_bytes = await self._proc.communicate()
            self._output = SearchOutput(
                text=stdout_bytes.decode(errors="replace"),
                returncode=self._proc.returncode,
                stderr=stderr_bytes.decode(errors="replace"),
                duration_seconds=time.monotonic() - self._started,
            )
            log.info(
                "search_completed",
                returncode=self._output.returncode,
                exit_message=self._output.exit_message,
                lines=len(self._output.lines),
                duration_seconds=round(self._output.duration_seconds, 3),
            )
        if not self._output.succeeded:
            raise SearchError.tool_failed(self._output.returncode, self._output.stderr)
        return self._output

    async def close(self) -> None:
        """Release the process. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        if self._proc.returncode is None:
            log.debug("search_terminated", pid=self._proc.pid)
            try:
                self._proc.kill()
            except ProcessLookupError:
                pass
            await self._proc.wait()

    async def __aenter__(self) -> SearchHandle:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


class SearchOrchestrator:
    """Builds and launches project-wide ripgrep searches."""

    def __init__(self, root: Path, config: SearchConfig | None = None) -> None:
        self._root = root
        self._config = config or SearchConfig()

    @property
    def root(self) -> Path:
        return self._root

    def build_request(self, pattern: str) -> SearchRequest:
        return SearchRequest(
            pattern=pattern,
            root=self._root,
            file_type=self._config.file_type,
            globs=list(self._config.globs),
        )

    def build_command(self, request: SearchRequest) -> list[str]:
        """Build the ripgrep command line for a request."""
        cmd = [self._config.executable, *SEARCH_OUTPUT_FLAGS, "--type", request.file_type]
        for glob in request.globs:
            cmd.extend(["--glob", glob])
        cmd.extend(self._config.extra_args)
        # Explicit path keeps ripgrep from reading stdin
        cmd.extend(["-e", request.pattern, "."])
        return cmd

    async def launch(self, pattern: str) -> SearchHandle:
        """Start the search asynchronously.

        Raises:
            SearchError: SEARCH_TOOL_NOT_FOUND if the executable is missing.
        """
        if not shutil.which(self._config.executable):
            raise SearchError.tool_not_found(self._config.executable)

        request = self.build_request(pattern)
        cmd = self.build_command(request)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._root,
            )
        except OSError as e:
            raise SearchError.tool_not_found(f"{self._config.executable} ({e})") from e

        log.info("search_launched", pattern=pattern, root=str(self._root), pid=proc.pid)
        return SearchHandle(request, cmd, proc)
