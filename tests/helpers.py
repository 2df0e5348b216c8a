from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from filepick.fs.filtering import PathFilter
from filepick.fs.scanner import Scanner


def make_tree(root: Path, files: Sequence[str]) -> None:
    for rel in files:
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"contents of {rel}\n", encoding="utf-8")


def ticking_clock(step: float = 1.0) -> Callable[[], float]:
    counter = itertools.count()
    return lambda: next(counter) * step


def slicing_scanner(root: Path, *, budget_s: float = 0.0, **kwargs: Any) -> Scanner:
    """Scanner whose clock advances on every read, so each step visits one directory
    when the budget is zero. Paths normalize relative to ``root``."""
    return Scanner(PathFilter(root), budget_s=budget_s, clock=ticking_clock(), cwd=root, **kwargs)


class FakeHost:
    def __init__(self, width: int = 80) -> None:
        self.width = width
        self.lines: list[str] = []
        self.titles: list[str] = []
        self.closed = 0
        self.highlight: int | None = None
        self.notices: list[tuple[str, str]] = []
        self.opened: list[Path] = []
        self.open_error: OSError | None = None

    def show_list(self, title: str, geometry: Any) -> None:  # noqa: ARG002
        self.titles.append(title)

    def set_lines(self, lines: Sequence[str]) -> None:
        self.lines = list(lines)

    def list_width(self) -> int:
        return self.width

    def move_highlight(self, index: int) -> None:
        self.highlight = index

    def close_list(self) -> None:
        self.closed += 1

    def notify(self, message: str, *, severity: str = "information") -> None:
        self.notices.append((severity, message))

    def open_path(self, path: Path) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened.append(path)


class ManualTask:
    def __init__(self, delay_s: float, callback: Callable[[], None]) -> None:
        self.delay_s = delay_s
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.tasks: list[ManualTask] = []

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(delay_s, callback)
        self.tasks.append(task)
        return task

    def pending(self) -> list[ManualTask]:
        return [task for task in self.tasks if not task.cancelled]

    def run_next(self) -> bool:
        for task in self.tasks:
            if not task.cancelled:
                self.tasks.remove(task)
                task.callback()
                return True
        return False

    def drain(self, limit: int = 1000) -> int:
        fired = 0
        while fired < limit and self.run_next():
            fired += 1
        return fired
