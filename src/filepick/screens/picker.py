"""Modal picker screen: renders the session's item list and routes keys."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static

from filepick.session.controller import SessionPhase
from filepick.session.keys import KeyEvent, KeyKind, key_event_from_textual

if TYPE_CHECKING:
    from filepick.session.controller import ListGeometry, SessionController


class PickerList(OptionList, can_focus=False):
    """Option list driven entirely by the picker screen's key handling."""


class PickerScreen(ModalScreen[None]):
    DEFAULT_CSS = """
    PickerScreen {
        align: center middle;
    }

    PickerScreen > Vertical {
        width: 80%;
        height: auto;
        border: round $secondary;
        background: $surface;
        padding: 0 1;
    }

    #picker-title {
        text-style: bold;
    }

    #picker-query {
        color: $text-muted;
    }

    PickerScreen PickerList {
        height: auto;
        border: none;
    }
    """

    def __init__(self, controller: SessionController, *, title: str, geometry: ListGeometry) -> None:
        self.controller = controller
        self.picker_title = title
        self.geometry = geometry
        self._lines: list[str] = []
        self._highlight: int | None = None
        self._ready = False
        super().__init__()

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield Static(self.picker_title, id="picker-title", markup=False)
            yield Static("> ", id="picker-query", markup=False)
            yield PickerList(id="picker-list")

    def on_mount(self) -> None:
        container = self.query_one("#picker", Vertical)
        container.styles.min_width = self.geometry.min_width
        container.styles.max_width = self.geometry.max_width
        options = self.query_one(PickerList)
        options.styles.min_height = self.geometry.min_height
        options.styles.max_height = self.geometry.max_height
        self._ready = True
        self._apply_lines()

    def set_lines(self, lines: Sequence[str]) -> None:
        self._lines = list(lines)
        self._highlight = None
        if self._ready:
            self._apply_lines()

    def move_highlight(self, index: int) -> None:
        self._highlight = index
        if self._ready:
            self.query_one(PickerList).highlighted = index

    def list_width(self) -> int:
        if not self._ready:
            return 0
        return self.query_one(PickerList).scrollable_content_region.width

    def _apply_lines(self) -> None:
        options = self.query_one(PickerList)
        options.clear_options()
        options.add_options(self._lines)
        if self._highlight is not None and self._highlight < len(self._lines):
            options.highlighted = self._highlight
        self._update_query_line()

    def query_line(self) -> str:
        session = self.controller.session
        if session is None:
            return "> "
        total = len(session.scan.discovered_files)
        status = " (scanning)" if self.controller.phase is SessionPhase.SCANNING else ""
        return f"> {session.filter.query}  [{len(self._lines)}/{total}]{status}"

    def _update_query_line(self) -> None:
        self.query_one("#picker-query", Static).update(self.query_line())

    def on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.stop()
            highlighted = self.query_one(PickerList).highlighted
            self.controller.handle_selection(-1 if highlighted is None else highlighted + 1)
            return

        key = key_event_from_textual(event.key, event.character)
        if self.controller.handle_key(key):
            event.stop()
            event.prevent_default()
            return

        if key.is_navigation:
            event.stop()
            self._forward_navigation(key)

    def _forward_navigation(self, key: KeyEvent) -> None:
        options = self.query_one(PickerList)
        kind = key.kind
        if kind is KeyKind.ARROW_UP:
            options.action_cursor_up()
        elif kind is KeyKind.ARROW_DOWN:
            options.action_cursor_down()
        elif kind is KeyKind.PAGE_UP:
            options.action_page_up()
        elif kind is KeyKind.PAGE_DOWN:
            options.action_page_down()
        elif kind is KeyKind.HOME:
            options.action_first()
        elif kind is KeyKind.END:
            options.action_last()
        elif kind is KeyKind.SCROLL_UP:
            options.scroll_up()
        elif kind is KeyKind.SCROLL_DOWN:
            options.scroll_down()

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        self.controller.note_highlight(event.option_index)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.controller.handle_selection(event.option_index + 1)
