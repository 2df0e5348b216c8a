"""Time-sliced breadth-first directory scanning.

A scan is driven by repeated calls to :meth:`Scanner.step`. Each call lists
directories from the pending queue until its wall-clock budget is spent, then
returns so the caller's event loop stays responsive. The caller re-invokes the
step on a schedule until it reports completion.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from filepick.config.models import ScanSettings
from filepick.fs.filtering import PathFilter
from filepick.fs.listing import Lister, list_directory
from filepick.paths import display_path, resolve_display_path
from filepick.runtime_logging import get_runtime_logger


@dataclass(slots=True)
class ScanState:
    root: Path
    pending_directories: deque[str] = field(default_factory=deque)
    discovered_files: list[str] = field(default_factory=list)
    is_active: bool = False
    steps: int = 0
    normalized: bool = False

    @classmethod
    def start(cls, root: Path) -> "ScanState":
        return cls(root=root, is_active=True)


@dataclass(slots=True)
class ScanStep:
    state: ScanState
    complete: bool
    added: int = 0
    no_files: bool = False
    normalized: bool = False


class Scanner:
    def __init__(
        self,
        path_filter: PathFilter | None = None,
        *,
        budget_s: float = 0.1,
        lister: Lister = list_directory,
        cwd: Path | None = None,
        home: Path | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.path_filter = path_filter or PathFilter()
        self.budget_s = budget_s
        self.lister = lister
        self.cwd = cwd
        self.home = home
        self.clock = clock
        self.logger = get_runtime_logger()

    @classmethod
    def from_settings(cls, root: Path, settings: ScanSettings, **kwargs) -> "Scanner":
        return cls(PathFilter.from_settings(root, settings), budget_s=settings.time_budget_s, **kwargs)

    def normalize(self, path: Path) -> str:
        return display_path(path, cwd=self.cwd, home=self.home)

    def resolve(self, state: ScanState, path: str) -> Path:
        """Absolute location of a path taken from ``state.discovered_files``."""
        if state.normalized:
            return resolve_display_path(path, cwd=self.cwd, home=self.home)
        return state.root / path

    def step(self, state: ScanState, directory: str | None = None) -> ScanStep:
        """Scan ``directory`` ("" is the root) or the next pending one, then keep
        going through the queue until the time budget is spent."""
        if not state.is_active:
            return ScanStep(state, complete=True)

        if directory is None:
            if not state.pending_directories:
                return self._finish(state, added=0)
            directory = state.pending_directories.popleft()

        started = self.clock()
        before = len(state.discovered_files)
        visited = 0
        while True:
            self._visit(state, directory)
            visited += 1
            if not state.pending_directories or self.clock() - started > self.budget_s:
                break
            directory = state.pending_directories.popleft()

        state.steps += 1
        added = len(state.discovered_files) - before
        self.logger.debug(
            "scan.step",
            root=str(state.root),
            step=state.steps,
            visited=visited,
            added=added,
            pending=len(state.pending_directories),
        )
        if state.pending_directories:
            return ScanStep(state, complete=False, added=added)
        return self._finish(state, added=added)

    def _visit(self, state: ScanState, directory: str) -> None:
        base = state.root / directory if directory else state.root
        for entry in self.lister(base):
            rel = f"{directory}/{entry.name}" if directory else entry.name
            is_dir = entry.kind == "dir"
            if self.path_filter.should_ignore(entry.name, rel, is_dir=is_dir):
                continue
            if is_dir:
                state.pending_directories.append(rel)
            else:
                state.discovered_files.append(rel)

    def _finish(self, state: ScanState, *, added: int) -> ScanStep:
        state.is_active = False
        if not state.discovered_files:
            self.logger.warning("scan.empty", root=str(state.root), steps=state.steps)
            return ScanStep(state, complete=True, added=added, no_files=True)

        if not state.normalized:
            state.discovered_files[:] = [self.normalize(state.root / rel) for rel in state.discovered_files]
            state.normalized = True
        self.logger.info(
            "scan.complete",
            root=str(state.root),
            steps=state.steps,
            file_count=len(state.discovered_files),
        )
        return ScanStep(state, complete=True, added=added, normalized=True)


def scan_all(root: Path, settings: ScanSettings | None = None, **kwargs) -> ScanStep:
    """Drive a scan of ``root`` to completion without yielding."""
    settings = settings or ScanSettings()
    scanner = Scanner.from_settings(root, settings, **kwargs)
    state = ScanState.start(root)
    result = scanner.step(state, "")
    while not result.complete:
        result = scanner.step(state)
    return result
