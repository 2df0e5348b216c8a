"""Picker session lifecycle: scan scheduling, filtering, selection.

The controller owns the single live :class:`SessionHandle`. Scan steps run from
scheduled callbacks and filter updates run from key handlers; both execute on
the host's event loop, so state is only ever touched by one call at a time.
Every scheduled callback carries the generation of the session that scheduled
it and is dropped when that session is gone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, Sequence

from filepick.config.models import AppSettings
from filepick.fs.scanner import Scanner, ScanState
from filepick.runtime_logging import get_runtime_logger
from filepick.search.formatting import DisplayItem, format_items
from filepick.search.matching import match_paths
from filepick.session.errors import ErrorKind, PickerError
from filepick.session.keys import KeyEvent, KeyKind
from filepick.session.scheduler import ScheduledTask, Scheduler

INPUT_CONSUMED = "input-consumed"


class SessionPhase(str, Enum):
    CLOSED = "closed"
    SCANNING = "scanning"
    IDLE = "idle"


class SelectionKind(str, Enum):
    OPENED = "opened"
    CANCELLED = "cancelled"
    INVALID = "invalid"
    EDIT_FAILURE = "edit_failure"


@dataclass(frozen=True, slots=True)
class ListGeometry:
    min_width: int
    max_width: int
    min_height: int
    max_height: int


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    kind: SelectionKind
    path: str | None = None
    error: PickerError | None = None


@dataclass(slots=True)
class FilterState:
    query: str = ""
    matched_paths: list[str] = field(default_factory=list)
    selected_path: str | None = None


@dataclass(slots=True)
class SessionHandle:
    generation: int
    scan: ScanState
    filter: FilterState
    phase: SessionPhase = SessionPhase.SCANNING
    task: ScheduledTask | None = None
    items: list[DisplayItem] = field(default_factory=list)
    last_error: PickerError | None = None


class PickerHost(Protocol):
    def show_list(self, title: str, geometry: ListGeometry) -> None: ...

    def set_lines(self, lines: Sequence[str]) -> None: ...

    def list_width(self) -> int: ...

    def move_highlight(self, index: int) -> None: ...

    def close_list(self) -> None: ...

    def notify(self, message: str, *, severity: str = "information") -> None: ...

    def open_path(self, path: Path) -> None: ...


class SessionController:
    def __init__(
        self,
        host: PickerHost,
        scheduler: Scheduler,
        *,
        root: Path,
        settings: AppSettings | None = None,
        scanner: Scanner | None = None,
    ) -> None:
        self.host = host
        self.scheduler = scheduler
        self.root = root
        self.settings = settings or AppSettings()
        self.scanner = scanner or Scanner.from_settings(root, self.settings.scan)
        self.logger = get_runtime_logger()
        self._session: SessionHandle | None = None
        self._generation = 0

    @property
    def session(self) -> SessionHandle | None:
        return self._session

    @property
    def phase(self) -> SessionPhase:
        if self._session is None:
            return SessionPhase.CLOSED
        return self._session.phase

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def geometry(self) -> ListGeometry:
        display = self.settings.display
        return ListGeometry(
            min_width=display.min_width,
            max_width=display.max_width,
            min_height=display.min_height,
            max_height=display.max_height,
        )

    def open(self, initial_query: str = "") -> SessionHandle | None:
        if self._session is not None:
            self.logger.debug("session.open.ignored", generation=self._session.generation)
            return None

        self._generation += 1
        session = SessionHandle(
            generation=self._generation,
            scan=ScanState.start(self.root),
            filter=FilterState(query=initial_query),
        )
        self._session = session
        self.host.show_list(self.settings.display.title, self.geometry)
        self.host.set_lines([])
        self.logger.info(
            "session.opened",
            generation=session.generation,
            root=str(self.root),
            initial_query=initial_query,
        )
        self._run_scan_step(session, "")
        return session

    def close(self) -> bool:
        session = self._session
        if session is None:
            return False

        self._session = None
        self._cancel_task(session)
        session.phase = SessionPhase.CLOSED
        self.host.close_list()
        self.logger.info(
            "session.closed",
            generation=session.generation,
            file_count=len(session.scan.discovered_files),
        )
        return True

    def toggle(self) -> str:
        if self._session is None:
            self.open()
        else:
            self.close()
        return INPUT_CONSUMED

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply ``event`` to the query; ``False`` means the host should handle it."""
        session = self._session
        if session is None:
            return False

        state = session.filter
        kind = event.kind
        if kind is KeyKind.ESCAPE:
            self.close()
            return True
        if kind is KeyKind.BACKSPACE:
            state.query = state.query[:-1]
        elif kind is KeyKind.CLEAR_LINE:
            state.query = ""
        elif kind is KeyKind.PRINTABLE and event.char:
            state.query += event.char
        elif kind is KeyKind.SPACE:
            state.query += " "
        else:
            return False

        self.logger.debug("session.query.changed", generation=session.generation, query=state.query)
        self._refresh(session)
        return True

    def note_highlight(self, index: int) -> None:
        session = self._session
        if session is None:
            return
        matched = session.filter.matched_paths
        if 0 <= index < len(matched):
            session.filter.selected_path = matched[index]

    def handle_selection(self, index: int) -> SelectionOutcome:
        """Open the ``index``-th (1-based) displayed path; ``index <= 0`` cancels."""
        session = self._session
        if session is None or index <= 0:
            self.close()
            return SelectionOutcome(SelectionKind.CANCELLED)

        matched = session.filter.matched_paths
        if index > len(matched):
            self.close()
            self.logger.warning("session.select.out_of_range", index=index, matched=len(matched))
            return SelectionOutcome(SelectionKind.INVALID)

        path = matched[index - 1]
        target = self.scanner.resolve(session.scan, path)
        self.close()
        try:
            self.host.open_path(target)
        except OSError as exc:
            error = PickerError(ErrorKind.EDIT_FAILURE, f"Cannot open {path}: {exc}", path=path)
            self.logger.error("session.select.open_failed", path=str(target), error=str(exc))
            self.host.notify(error.message, severity="error")
            return SelectionOutcome(SelectionKind.EDIT_FAILURE, path=path, error=error)

        self.logger.info("session.select.opened", path=str(target))
        return SelectionOutcome(SelectionKind.OPENED, path=path)

    def _on_scan_tick(self, generation: int) -> None:
        session = self._session
        if session is None or session.generation != generation:
            self.logger.debug(
                "session.scan.stale_callback",
                kind=ErrorKind.STALE_CALLBACK.value,
                generation=generation,
                current=session.generation if session else None,
            )
            return
        session.task = None
        if session.phase is SessionPhase.SCANNING:
            self._run_scan_step(session, None)

    def _run_scan_step(self, session: SessionHandle, directory: str | None) -> None:
        selected = session.filter.selected_path
        was_normalized = session.scan.normalized
        result = self.scanner.step(session.scan, directory)

        if result.normalized and not was_normalized and selected is not None:
            session.filter.selected_path = self.scanner.normalize(session.scan.root / selected)
        if result.complete:
            session.phase = SessionPhase.IDLE
            self._cancel_task(session)
        # The final refresh also redraws the host's scanning status.
        if result.added or result.normalized or result.complete:
            self._refresh(session)

        if result.no_files:
            error = PickerError(ErrorKind.EMPTY_RESULT, f"No files found under {session.scan.root}")
            session.last_error = error
            self.host.notify(error.message, severity="warning")

        if result.complete:
            self.logger.debug(
                "session.scan.idle",
                generation=session.generation,
                file_count=len(session.scan.discovered_files),
            )
            return

        generation = session.generation
        session.task = self.scheduler.schedule(
            self.settings.scan.interval_s,
            lambda: self._on_scan_tick(generation),
        )

    def _refresh(self, session: SessionHandle) -> None:
        state = session.filter
        state.matched_paths = match_paths(session.scan.discovered_files, state.query)

        width = self.host.list_width()
        if width <= 0:
            width = self.settings.display.fallback_width
        session.items = format_items(state.matched_paths, width)
        self.host.set_lines([item.short_label for item in session.items])

        if not state.matched_paths:
            return
        index = 0
        if state.selected_path is not None:
            try:
                index = state.matched_paths.index(state.selected_path)
            except ValueError:
                index = 0
        state.selected_path = state.matched_paths[index]
        self.host.move_highlight(index)

    def _cancel_task(self, session: SessionHandle) -> None:
        if session.task is not None:
            session.task.cancel()
            session.task = None
