from __future__ import annotations

import os
import re
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Protocol, Tuple

from .debug import get_logger


Position = Tuple[int, int]  # (line_number_1_based, column_0_based)

log = get_logger("host")


class InvalidPattern(ValueError):
    """Raised when the active search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ViewState(NamedTuple):
    """Cursor and scroll position of a buffer's view."""
    line: int
    col: int
    topline: int


class SearchHost(Protocol):
    """Primitives the counting engine needs from the editor hosting a buffer."""

    def buffer_version(self) -> int: ...

    def search_pattern(self) -> str: ...

    def line_count(self) -> int: ...

    def cursor_position(self) -> Position: ...

    def set_cursor(self, line: int, col: int) -> None: ...

    def view_state(self) -> ViewState: ...

    def restore_view(self, state: ViewState) -> None: ...

    def find_next_match(
        self,
        pattern: str,
        start_line: int,
        start_col: int,
        bound_line: int,
        allow_match_at_start: bool,
    ) -> Optional[Position]: ...

    def count_substitution_matches(self, first: int, last: int, global_flag: bool) -> int: ...


class ViewGuard:
    """Context manager that snapshots a host's view and restores it on exit.

    Restoration happens on every exit path, including exceptions raised by
    the host while the guard is active.
    """

    def __init__(self, host: SearchHost):
        self.host = host
        self.saved: Optional[ViewState] = None

    def __enter__(self) -> ViewState:
        self.saved = self.host.view_state()
        return self.saved

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.saved is not None:
            self.host.restore_view(self.saved)
        return False


class TextBuffer:
    """In-memory buffer implementing the SearchHost primitives with `re`.

    Lines are 1-based, columns 0-based. Every edit bumps the version token,
    which is what invalidates cached counts. `count_substitution_matches`
    leaves the cursor on the last matching line, the way a count-only
    substitute does in an editor, so callers must guard the view.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None, *, name: str = "[No Name]", height: int = 24):
        self.name = name
        self.height = max(1, int(height))
        self._lines: List[str] = list(lines or []) or [""]
        self._version = 0
        self._line = 1
        self._col = 0
        self._topline = 1
        self._pattern = ""
        self._compiled: Dict[str, "re.Pattern[str]"] = {}

    def __repr__(self) -> str:
        return f"TextBuffer(name={self.name!r}, lines={len(self._lines)}, version={self._version})"

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "TextBuffer":
        return cls((text or "").splitlines(), **kwargs)

    @classmethod
    def from_file(cls, path: str, **kwargs) -> "TextBuffer":
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
        kwargs.setdefault("name", os.path.basename(path))
        return cls.from_text(text, **kwargs)

    # ---- Content ----
    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    def line(self, lnum: int) -> str:
        if not 1 <= lnum <= len(self._lines):
            raise IndexError(f"line {lnum} out of range 1..{len(self._lines)}")
        return self._lines[lnum - 1]

    def set_lines(self, lines: Iterable[str]) -> None:
        self._lines = list(lines or []) or [""]
        self._touch()

    def replace_line(self, lnum: int, text: str) -> None:
        self.line(lnum)
        self._lines[lnum - 1] = text
        self._touch()

    def insert_line(self, lnum: int, text: str) -> None:
        """Insert `text` so it becomes line `lnum` (len+1 appends)."""
        if not 1 <= lnum <= len(self._lines) + 1:
            raise IndexError(f"cannot insert at line {lnum}")
        self._lines.insert(lnum - 1, text)
        self._touch()

    def delete_line(self, lnum: int) -> None:
        self.line(lnum)
        del self._lines[lnum - 1]
        if not self._lines:
            self._lines = [""]
        self._touch()

    def _touch(self) -> None:
        self._version += 1
        self.set_cursor(self._line, self._col)

    # ---- SearchHost primitives ----
    def buffer_version(self) -> int:
        return self._version

    def line_count(self) -> int:
        return len(self._lines)

    def search_pattern(self) -> str:
        return self._pattern

    def set_search_pattern(self, pattern: str) -> None:
        self._pattern = pattern or ""

    def cursor_position(self) -> Position:
        return (self._line, self._col)

    def set_cursor(self, line: int, col: int) -> None:
        self._line = max(1, min(int(line), len(self._lines)))
        text = self._lines[self._line - 1]
        self._col = max(0, min(int(col), len(text)))
        # Keep the cursor line visible
        if self._line < self._topline:
            self._topline = self._line
        elif self._line >= self._topline + self.height:
            self._topline = self._line - self.height + 1

    @property
    def topline(self) -> int:
        return self._topline

    def scroll_to(self, topline: int) -> None:
        self._topline = max(1, min(int(topline), len(self._lines)))

    def view_state(self) -> ViewState:
        return ViewState(self._line, self._col, self._topline)

    def restore_view(self, state: ViewState) -> None:
        self._line = max(1, min(state.line, len(self._lines)))
        self._col = max(0, state.col)
        self._topline = max(1, min(state.topline, len(self._lines)))

    def compile(self, pattern: str) -> Optional["re.Pattern[str]"]:
        """Compile `pattern`, returning None for an empty pattern."""
        if not pattern:
            return None
        rx = self._compiled.get(pattern)
        if rx is None:
            try:
                rx = re.compile(pattern)
            except re.error as exc:
                raise InvalidPattern(pattern, str(exc)) from exc
            self._compiled[pattern] = rx
        return rx

    def find_next_match(
        self,
        pattern: str,
        start_line: int,
        start_col: int,
        bound_line: int,
        allow_match_at_start: bool,
    ) -> Optional[Position]:
        """Find the first match at or after (start_line, start_col), stopping at bound_line.

        Candidates are the non-overlapping matches of the whole line, the same
        set count_substitution_matches counts. With allow_match_at_start False
        the match must start strictly after start_col on the starting line.
        Never wraps.
        """
        rx = self.compile(pattern)
        if rx is None:
            return None
        first = max(1, start_line)
        last = min(bound_line, len(self._lines))
        for lnum in range(first, last + 1):
            text = self._lines[lnum - 1]
            pos = 0
            if lnum == start_line:
                pos = start_col if allow_match_at_start else start_col + 1
            for m in rx.finditer(text):
                if m.start() >= pos:
                    return (lnum, m.start())
        return None

    def count_substitution_matches(self, first: int, last: int, global_flag: bool) -> int:
        """Count matches in lines first..last without changing the text.

        global_flag counts every match on a line, otherwise one per matching line.
        """
        rx = self.compile(self._pattern)
        if rx is None:
            return 0
        first = max(1, first)
        last = min(last, len(self._lines))
        count = 0
        last_hit = 0
        for lnum in range(first, last + 1):
            text = self._lines[lnum - 1]
            if global_flag:
                hits = sum(1 for _ in rx.finditer(text))
            else:
                hits = 1 if rx.search(text) is not None else 0
            if hits:
                count += hits
                last_hit = lnum
        if last_hit:
            self.set_cursor(last_hit, 0)
        log.debug("count %d..%d g=%s -> %d", first, last, global_flag, count)
        return count

    # ---- Navigation and highlighting ----
    def iter_matches(self, lnum: int) -> Iterator[Tuple[int, int]]:
        """Yield (start, end) spans of the active pattern on line lnum."""
        rx = self.compile(self._pattern)
        if rx is None:
            return
        for m in rx.finditer(self.line(lnum)):
            yield (m.start(), m.end())

    def search(
        self,
        pattern: str,
        line: int,
        col: int,
        *,
        backward: bool = False,
        wrap: bool = True,
    ) -> Optional[Tuple[Position, bool]]:
        """Find the next match from (line, col) in the given direction.

        Returns ((line, col), wrapped) or None when nothing matches.
        """
        if self.compile(pattern) is None:
            return None
        last = len(self._lines)
        if not backward:
            pos = self.find_next_match(pattern, line, col, last, False)
            if pos is not None:
                return pos, False
            if wrap:
                pos = self.find_next_match(pattern, 1, 0, line, True)
                if pos is not None:
                    return pos, True
            return None
        pos = self._find_prev_match(pattern, line, col, 1)
        if pos is not None:
            return pos, False
        if wrap:
            pos = self._find_prev_match(pattern, last, None, line)
            if pos is not None:
                return pos, True
        return None

    def _find_prev_match(self, pattern: str, line: int, col: Optional[int], bound_line: int) -> Optional[Position]:
        rx = self.compile(pattern)
        if rx is None:
            return None
        for lnum in range(min(line, len(self._lines)), max(bound_line, 1) - 1, -1):
            starts = [m.start() for m in rx.finditer(self._lines[lnum - 1])]
            if lnum == line and col is not None:
                starts = [s for s in starts if s < col]
            if starts:
                return (lnum, starts[-1])
        return None
