"""filepick Textual application shell."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static, TabbedContent, TabPane, TextArea

from filepick.config.models import AppSettings
from filepick.config.store import SettingsStore
from filepick.messages import OpenFile
from filepick.paths import display_path, printable_path
from filepick.runtime_logging import configure_runtime_logging
from filepick.screens.picker import PickerScreen
from filepick.session.controller import ListGeometry, SessionController
from filepick.session.scheduler import Scheduler, TextualScheduler

WELCOME_PANE_ID = "welcome"


def read_view_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


class FileView(TabPane):
    """Read-only view of one file."""

    def __init__(self, path: Path, text: str, *, id: str) -> None:  # noqa: A002
        self.path = path
        super().__init__(
            printable_path(path.name),
            TextArea(text, read_only=True, show_line_numbers=True),
            id=id,
        )

    def show(self, path: Path, text: str) -> None:
        self.path = path
        self.query_one(TextArea).load_text(text)


class TextualPickerHost:
    """Adapts the app's screen stack, notifications and views to the session controller."""

    def __init__(self, app: "FilePickApp") -> None:
        self.app = app
        self.screen: PickerScreen | None = None

    def show_list(self, title: str, geometry: ListGeometry) -> None:
        self.screen = PickerScreen(self.app.picker, title=title, geometry=geometry)
        self.app.push_screen(self.screen)

    def set_lines(self, lines: Sequence[str]) -> None:
        if self.screen is not None:
            self.screen.set_lines(lines)

    def list_width(self) -> int:
        if self.screen is None:
            return 0
        return self.screen.list_width()

    def move_highlight(self, index: int) -> None:
        if self.screen is not None:
            self.screen.move_highlight(index)

    def close_list(self) -> None:
        screen, self.screen = self.screen, None
        if screen is not None and self.app.screen is screen:
            self.app.pop_screen()

    def notify(self, message: str, *, severity: str = "information") -> None:
        self.app.notify(message, severity=severity)  # type: ignore[arg-type]

    def open_path(self, path: Path) -> None:
        if not path.is_file():
            raise FileNotFoundError(f"not a file: {path}")
        if not os.access(path, os.R_OK):
            raise PermissionError(f"not readable: {path}")
        self.app.post_message(OpenFile(path=path))


class FilePickApp(App[None]):
    TITLE = "filepick"
    SUB_TITLE = "incremental fuzzy file picker"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+p", "toggle_picker", "Find file", priority=True),
        ("ctrl+w", "close_view", "Close view"),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }

    #welcome-text {
        height: 1fr;
        content-align: center middle;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        *,
        root: Path,
        initial_query: str | None = None,
        settings: AppSettings | None = None,
        settings_store: SettingsStore | None = None,
        scheduler: Scheduler | None = None,
        log_level: str | None = None,
        log_file: str | Path | None = None,
    ) -> None:
        self.root = root.expanduser().resolve()
        self.initial_query = initial_query
        self.logger = configure_runtime_logging(level=log_level, log_file=log_file)

        self.settings_store = settings_store
        if settings is None:
            self.settings_store = settings_store or SettingsStore()
            settings = self.settings_store.load()
        self.settings = settings
        self.settings.paths.root = str(self.root)

        self.host = TextualPickerHost(self)
        self.picker = SessionController(
            self.host,
            scheduler or TextualScheduler(self),
            root=self.root,
            settings=self.settings,
        )
        self._view_counter = 0

        self.logger.info("app.initialized", root=str(self.root), initial_query=initial_query)
        super().__init__()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with TabbedContent(id="views"):
            with TabPane("Welcome", id=WELCOME_PANE_ID):
                yield Static(
                    f"{printable_path(display_path(self.root))}\n\nctrl+p: find file",
                    id="welcome-text",
                    markup=False,
                )
        yield Footer()

    def on_mount(self) -> None:
        self.theme = self.settings.appearance.theme
        self.logger.info("app.mounted", theme=self.theme)
        if self.initial_query is not None:
            self.picker.open(self.initial_query)

    def action_toggle_picker(self) -> None:
        self.logger.debug("app.action_toggle_picker", open=self.picker.is_open)
        self.picker.toggle()

    async def action_close_view(self) -> None:
        tabs = self.query_one("#views", TabbedContent)
        active = tabs.active_pane
        if isinstance(active, FileView):
            await tabs.remove_pane(active.id or "")

    def find_view(self, path: Path) -> FileView | None:
        for view in self.query(FileView):
            if view.path == path:
                return view
        return None

    async def on_open_file(self, message: OpenFile) -> None:
        path = message.path
        tabs = self.query_one("#views", TabbedContent)

        existing = self.find_view(path)
        if existing is not None:
            tabs.active = existing.id or ""
            self.logger.info("app.open_file.activated", path=str(path))
            return

        try:
            text = read_view_text(path)
        except OSError as exc:
            self.notify(f"Cannot open {path.name}: {exc}", severity="error")
            self.logger.error("app.open_file.failed", path=str(path), error=str(exc))
            return

        active = tabs.active_pane
        if isinstance(active, FileView):
            # A clean, ordinary view is reused; the welcome pane is special.
            active.show(path, text)
            tabs.get_tab(active).label = printable_path(path.name)
            self.logger.info("app.open_file.replaced", path=str(path), view=active.id)
            return

        self._view_counter += 1
        view = FileView(path, text, id=f"view-{self._view_counter}")
        await tabs.add_pane(view)
        tabs.active = view.id or ""
        self.logger.info("app.open_file.opened", path=str(path), view=view.id)

    def on_unmount(self) -> None:
        # Screens are already being torn down; only the scan task needs cancelling.
        self.host.screen = None
        self.picker.close()
        if self.settings_store is not None:
            self.settings_store.save(self.settings)
        self.logger.info("app.exit")
