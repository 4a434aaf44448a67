from typing import Optional

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, Static

from .config import SearchConfig
from .debug import get_logger
from .host import TextBuffer
from .keymap import viewer_bindings
from .search import SearchController
from .tips import prompt_hint, viewer_tips
from .widgets import SearchableTextPane


class SearchViewerApp(App):
    """Read-only file viewer with /, ?, n and N search and a live match counter."""

    CSS = """
    #text_view {
        height: 1fr;
    }
    #tips {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    """

    BINDINGS = viewer_bindings()

    def __init__(self, buffer: TextBuffer, config: Optional[SearchConfig] = None, pattern: str = ""):
        super().__init__()
        self.logr = get_logger("viewer")
        self.title = f"searchindex - {buffer.name}"
        self._search = SearchController(buffer=buffer, config=config or SearchConfig())
        self._initial_pattern = pattern
        # Text typed at the find prompt; None while the prompt is closed
        self._find_input: Optional[str] = None
        self._find_backward: bool = False

    def compose(self) -> ComposeResult:
        yield Header()
        self.text_view = SearchableTextPane(id="text_view", wrap=False)
        self.text_view.search = self._search
        yield self.text_view
        self.tips = Static("", id="tips")
        yield self.tips
        yield Footer()

    def on_mount(self) -> None:
        if self._initial_pattern:
            self._search.set_query(self._initial_pattern)
        self.text_view.focus()
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.text_view.apply_search()
        self._update_tips()

    def _update_tips(self) -> None:
        if self._find_input is not None:
            hint = prompt_hint(self._find_input, self._find_backward)
            self.tips.update(viewer_tips(hint, find_active=True))
            return
        self.tips.update(viewer_tips(self._search.counter_text() if self._search.has_query() else ""))

    # ---- Find prompt ----
    def action_start_find(self) -> None:
        self._find_input = ""
        self._find_backward = False
        self._update_tips()

    def action_start_find_backward(self) -> None:
        self._find_input = ""
        self._find_backward = True
        self._update_tips()

    def action_find_append_char(self, ch: str) -> None:
        if self._find_input is None or not ch:
            return
        self._find_input += ch
        self._update_tips()

    def action_find_backspace(self) -> None:
        if self._find_input is None:
            return
        if not self._find_input:
            self.action_cancel_find()
            return
        self._find_input = self._find_input[:-1]
        self._update_tips()

    def action_cancel_find(self) -> None:
        self._find_input = None
        self._update_tips()

    def action_submit_find(self) -> None:
        if self._find_input is None:
            return
        # An empty prompt repeats the last pattern, like pressing Enter after /
        pattern = self._find_input or self._search.query
        backward = self._find_backward
        self._find_input = None
        self.logr.debug("find: pattern=%r backward=%s", pattern, backward)
        self._search.set_query(pattern, backward=backward)
        self._refresh_view()

    def action_find_next(self) -> None:
        if self._search.next() is not None or self._search.error:
            self._refresh_view()

    def action_find_prev(self) -> None:
        if self._search.prev() is not None or self._search.error:
            self._refresh_view()

    # ---- Cursor movement ----
    def _move_cursor(self, line: int) -> None:
        buf = self._search.buffer
        buf.set_cursor(line, buf.cursor_position()[1])
        self._refresh_view()

    def action_cursor_down(self) -> None:
        self._move_cursor(self._search.buffer.cursor_position()[0] + 1)

    def action_cursor_up(self) -> None:
        self._move_cursor(self._search.buffer.cursor_position()[0] - 1)

    def action_cursor_top(self) -> None:
        self._move_cursor(1)

    def action_cursor_bottom(self) -> None:
        self._move_cursor(self._search.buffer.line_count())
