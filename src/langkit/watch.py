"""Incremental rebuilds: directory polling and coalesced compile scheduling.

DirectoryPoller compares periodic snapshots of the locale directory and
reports added, changed and removed documents. RebuildScheduler turns any
number of rebuild requests into at most one compile in flight plus one
queued rerun:

    IDLE --request--> RUNNING --request--> RUNNING_WITH_PENDING
      ^                  |                         |
      |    (compile, sleep delay, nothing pending) |
      +------------------+                         |
                         ^   (compile, sleep delay, rerun once)
                         +-------------------------+

A burst of requests therefore costs at most two compiles. Compile errors are
logged and the previous artifacts stay in place; the scheduler keeps running.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from langkit.build import CompileOptions, compile_async
from langkit.constants import DEFAULT_DEBOUNCE_SECONDS, DEFAULT_POLL_INTERVAL, DOCUMENT_SUFFIX
from langkit.diagnostics import DiagnosticFormatter, LangError, OutputFormat
from langkit.enums import FileEventKind, RebuildState
from langkit.template import TemplateCompiler

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Events
    "FileEvent",
    "DirectoryPoller",
    # Scheduling
    "RebuildScheduler",
    "watch",
]

logger = logging.getLogger(__name__)

type Snapshot = dict[Path, tuple[int, int]]


# ============================================================================
# EVENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class FileEvent:
    """One observed change to a locale document."""

    kind: FileEventKind
    path: Path


class DirectoryPoller:
    """Snapshot-diff watcher for one directory.

    A snapshot maps every matching file to its (mtime_ns, size). The first
    snapshot is taken at construction, so only later changes are reported.
    A missing directory reads as empty.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        suffix: str = DOCUMENT_SUFFIX,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.directory = Path(directory)
        self.suffix = suffix
        self.interval = interval
        self._snapshot = self.snapshot()

    def snapshot(self) -> Snapshot:
        """Stat every matching file in the directory."""
        result: Snapshot = {}
        try:
            entries = list(os.scandir(self.directory))
        except FileNotFoundError:
            return result
        for entry in entries:
            if not entry.name.endswith(self.suffix):
                continue
            try:
                if not entry.is_file():
                    continue
                stat = entry.stat()
            except FileNotFoundError:
                # Removed between scandir and stat
                continue
            result[Path(entry.path)] = (stat.st_mtime_ns, stat.st_size)
        return result

    @staticmethod
    def diff(old: Snapshot, new: Snapshot) -> list[FileEvent]:
        """Events turning old into new, sorted by path."""
        events: list[FileEvent] = []
        for path in sorted(old.keys() | new.keys()):
            if path not in new:
                events.append(FileEvent(FileEventKind.REMOVED, path))
            elif path not in old:
                events.append(FileEvent(FileEventKind.ADDED, path))
            elif old[path] != new[path]:
                events.append(FileEvent(FileEventKind.CHANGED, path))
        return events

    def poll(self) -> list[FileEvent]:
        """Take a new snapshot and return the changes since the previous one."""
        current = self.snapshot()
        events = self.diff(self._snapshot, current)
        self._snapshot = current
        return events

    async def events(self, stop: asyncio.Event | None = None) -> AsyncIterator[FileEvent]:
        """Yield events forever (or until stop is set), polling every interval."""
        while stop is None or not stop.is_set():
            await asyncio.sleep(self.interval)
            for event in await asyncio.to_thread(self.poll):
                yield event


# ============================================================================
# SCHEDULING
# ============================================================================


class RebuildScheduler:
    """Coalesces rebuild requests into serialized compiles.

    Args:
        rebuild: Coroutine function running one compile
        delay: Seconds to wait after each compile before a queued rerun
        formatter: Renders the diagnostic of a failed compile (rust style by default)

    Must be used from a running event loop.
    """

    def __init__(
        self,
        rebuild: Callable[[], Awaitable[object]],
        *,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        formatter: DiagnosticFormatter | None = None,
    ) -> None:
        self._rebuild = rebuild
        self._delay = delay
        self._formatter = formatter or DiagnosticFormatter()
        self._state = RebuildState.IDLE
        self._task: asyncio.Task[None] | None = None
        self.runs = 0
        self.failures = 0

    @property
    def state(self) -> RebuildState:
        return self._state

    def request(self) -> None:
        """Ask for a rebuild; never blocks."""
        match self._state:
            case RebuildState.IDLE:
                self._state = RebuildState.RUNNING
                self._task = asyncio.get_running_loop().create_task(self._consume())
            case RebuildState.RUNNING:
                self._state = RebuildState.RUNNING_WITH_PENDING
                logger.debug("Rebuild queued behind the running compile")
            case RebuildState.RUNNING_WITH_PENDING:
                pass

    async def wait_idle(self) -> None:
        """Wait until no compile is running or queued."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def close(self) -> None:
        """Cancel any running compile and return to IDLE."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        self._state = RebuildState.IDLE

    async def _consume(self) -> None:
        try:
            while True:
                await self._attempt()
                await asyncio.sleep(self._delay)
                if self._state is not RebuildState.RUNNING_WITH_PENDING:
                    break
                self._state = RebuildState.RUNNING
        finally:
            self._state = RebuildState.IDLE

    async def _attempt(self) -> None:
        self.runs += 1
        try:
            await self._rebuild()
        except (LangError, OSError) as e:
            self.failures += 1
            diagnostic = getattr(e, "diagnostic", None)
            detail = self._formatter.format(diagnostic) if diagnostic is not None else str(e)
            logger.error("Rebuild failed, keeping previous artifacts:\n%s", detail)


async def watch(
    options: CompileOptions,
    *,
    compiler: TemplateCompiler | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    stop: asyncio.Event | None = None,
    output_format: OutputFormat = OutputFormat.RUST,
) -> RebuildScheduler:
    """Compile once, then recompile whenever a locale document changes.

    Runs until stop is set (or forever). Returns the scheduler so callers
    can inspect run counts after stopping. Failed rebuilds are logged in
    output_format.
    """

    async def rebuild() -> None:
        await compile_async(options, compiler)

    scheduler = RebuildScheduler(
        rebuild,
        delay=options.debounce,
        formatter=DiagnosticFormatter(output_format=output_format),
    )
    poller = DirectoryPoller(options.lang_dir, interval=poll_interval)
    scheduler.request()
    logger.info("Watching %s for changes", options.lang_dir)
    try:
        async for event in poller.events(stop):
            logger.info("%s: %s", event.kind, event.path.name)
            scheduler.request()
        await scheduler.wait_idle()
    finally:
        await scheduler.close()
    return scheduler
