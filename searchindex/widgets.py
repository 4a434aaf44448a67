from __future__ import annotations

from typing import Optional
import os

from textual.widgets import RichLog
from textual import events
from .debug import get_logger
from .utils import safe_call, handle_search_key

from .search import SearchController


class SearchableTextPane(RichLog):
    """A scrollable text pane that renders a SearchController's buffer.

    The parent App owns the SearchController and the find prompt, and calls
    `apply_search()` after the query or cursor changes.
    """

    DEFAULT_CSS = """
    SearchableTextPane {
        overflow-y: scroll;
        overflow-x: auto;
    }
    """

    def __init__(self, *, id: Optional[str] = None, wrap: bool = False) -> None:
        super().__init__(id=id, wrap=wrap, highlight=False, markup=False, auto_scroll=False, max_lines=None)
        self.can_focus = True
        self._debug_keys = bool(os.environ.get("SEARCHINDEX_DEBUG_KEYS"))
        self._logr = get_logger("pane")
        # The app will attach a SearchController instance
        self.search: Optional[SearchController] = None

    def on_mouse_down(self, event: events.MouseDown) -> None:  # type: ignore[override]
        safe_call(self.focus)
        safe_call(event.stop)

    # ---- Rendering ----
    def apply_search(self) -> None:
        safe_call(super().clear)
        if self.search is None:
            return
        out = self.search.build_text()
        line, col = self.search.buffer.cursor_position()
        # Mark the cursor cell
        offset = sum(len(text) + 1 for text in self.search.buffer.lines[: line - 1]) + col
        if offset < len(out.plain):
            safe_call(out.stylize, "reverse", offset, offset + 1)
        self.write(out)
        self.scroll_cursor_into_view()

    def scroll_cursor_into_view(self, *, center: bool = True) -> None:
        if self.search is None:
            return
        line_idx = self.search.buffer.cursor_position()[0] - 1
        height = getattr(self.size, "height", 0) or 1
        if center:
            target = max(0, line_idx - max(height // 2, 0))
        else:
            target = max(0, line_idx)
        if self._debug_keys:
            self._logr.debug("pane.scroll_cursor_to: id=%s target_y=%s", getattr(self, 'id', None), target)
        try:
            self.scroll_to(y=target, animate=False)  # type: ignore[arg-type]
        except Exception as e:
            if self._debug_keys:
                self._logr.debug("pane.scroll_cursor_error: %s", e)

    # ---- Key handling for the find prompt ----
    def on_key(self, event: events.Key) -> None:  # type: ignore[override]
        if self._debug_keys:
            self._logr.debug(
                "pane.on_key: key=%s char=%s",
                getattr(event, 'key', None),
                getattr(event, 'character', None),
            )
        app = getattr(self, "app", None)
        if app is not None and getattr(app, "_find_input", None) is not None:
            handle_search_key(app, event)
