from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
from rich.text import Text

from .config import SearchConfig
from .debug import get_logger
from .engine import MatchCounts, SearchIndex
from .formatting import format_indicator, wrap_notice
from .host import InvalidPattern, Position, TextBuffer


log = get_logger("search")


@dataclass
class SearchController:
    """Stateful find-in-buffer controller that displays a match counter.

    - Tracks the active pattern and the search direction (/ or ?).
    - Moves the cursor for next/prev the way n and N do, wrapping if enabled.
    - Guards the counting engine with the line limit and hides a zero total.
    - Builds a Rich Text renderable with spans for highlighting.
    """

    buffer: TextBuffer = field(default_factory=TextBuffer)
    config: SearchConfig = field(default_factory=SearchConfig)
    index: Optional[SearchIndex] = None
    backward: bool = False
    wrapped: bool = False
    error: str = ""
    _last_backward: bool = False

    def __post_init__(self) -> None:
        if self.index is None:
            self.index = SearchIndex(self.config)

    @property
    def query(self) -> str:
        return self.buffer.search_pattern()

    def reset(self) -> None:
        self.buffer.set_search_pattern("")
        self.backward = False
        self.wrapped = False
        self.error = ""

    def set_lines(self, lines: List[str]) -> None:
        self.buffer.set_lines(lines)

    def set_query(self, query: str, backward: bool = False) -> Optional[Position]:
        """Make `query` the active pattern and jump to its next match in the given direction."""
        self.buffer.set_search_pattern(query)
        self.backward = backward
        self.wrapped = False
        self.error = ""
        if not self.query:
            return None
        return self._jump(backward)

    def has_query(self) -> bool:
        return bool(self.query)

    def has_matches(self) -> bool:
        counts = self.counter()
        return counts is None or counts.total > 0

    def next(self) -> Optional[Position]:
        if not self.query:
            return None
        return self._jump(self.backward)

    def prev(self) -> Optional[Position]:
        if not self.query:
            return None
        return self._jump(not self.backward)

    def counter(self) -> Optional[MatchCounts]:
        """Return (current, total), or None when the buffer is over the line limit."""
        if self.config.exceeds_limit(self.buffer.line_count()):
            log.debug("line limit: %d > %d", self.buffer.line_count(), self.config.line_limit)
            return None
        if not self.query:
            return MatchCounts(0, 0)
        try:
            return self.index.match_counts(self.buffer)
        except InvalidPattern as exc:
            self.error = str(exc)
            return MatchCounts(0, 0)

    def counter_text(self) -> str:
        if self.error:
            return self.error
        counts = self.counter()
        if self.error:
            return self.error
        parts = [
            format_indicator(counts, self.query, show_pattern=self.config.show_pattern),
            wrap_notice(self.wrapped, self._last_backward),
        ]
        return " ".join(p for p in parts if p)

    def iter_matches(self) -> Iterator[Tuple[Position, Optional[MatchCounts]]]:
        """Visit every match from the top of the buffer, yielding its position and counts."""
        if not self.query:
            return
        last = self.buffer.line_count()
        pos = self.buffer.find_next_match(self.query, 1, 0, last, True)
        while pos is not None:
            self.buffer.set_cursor(*pos)
            yield pos, self.counter()
            pos = self.buffer.find_next_match(self.query, pos[0], pos[1], last, False)

    def build_text(self, highlight_all: bool = True) -> Text:
        """Build a Rich Text renderable with highlighted matches.

        - All matches get a dim yellow background.
        - The match under the cursor is emphasized.
        """
        lines = self.buffer.lines
        if not self.query:
            return Text("\n".join(lines))
        cur_line, cur_col = self.buffer.cursor_position()
        out = Text()
        for lnum, line in enumerate(lines, start=1):
            segment = Text(line)
            try:
                spans = list(self.buffer.iter_matches(lnum))
            except InvalidPattern:
                spans = []
            for start, end in spans:
                is_current = lnum == cur_line and start == cur_col
                if end <= start or not (highlight_all or is_current):
                    continue
                style = "black on yellow" if is_current else "dim on yellow"
                segment.stylize(style, start, end)
            out.append(segment)
            if lnum < len(lines):
                out.append("\n")
        return out

    # Internal helpers
    def _jump(self, backward: bool) -> Optional[Position]:
        line, col = self.buffer.cursor_position()
        try:
            hit = self.buffer.search(self.query, line, col, backward=backward, wrap=self.config.wrapscan)
        except InvalidPattern as exc:
            self.error = str(exc)
            log.debug("search failed: %s", exc)
            return None
        if hit is None:
            self.wrapped = False
            if self.config.wrapscan:
                self.error = f"Pattern not found: {self.query}"
            else:
                edge = "TOP" if backward else "BOTTOM"
                self.error = f"search hit {edge} without match for: {self.query}"
            return None
        pos, wrapped = hit
        self.buffer.set_cursor(*pos)
        self.wrapped = wrapped
        self._last_backward = backward
        self.error = ""
        return pos
