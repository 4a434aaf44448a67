from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Hashable, NamedTuple, Optional

from .config import SearchConfig
from .counter import count_in_range, locate_in_line
from .debug import get_logger
from .host import SearchHost


class Fingerprint(NamedTuple):
    """Identity of a match set: equal fingerprints see the same matches."""
    version: Hashable
    pattern: str
    count_all: bool


class CacheValue(NamedTuple):
    reference_line: int
    matches_before: int
    total: int


class MatchCounts(NamedTuple):
    """(current, total); current is 0 when the cursor is before the first match."""
    current: int
    total: int


@dataclass
class SearchState:
    key: Fingerprint
    value: CacheValue


class SearchIndex:
    """Per-buffer match counter with an incremental cache.

    Each buffer gets its own SearchState, created on first query and
    overwritten by every query. The cached reference line follows the cursor,
    so a query after a short cursor move only counts the lines in between.

    Callers must check the buffer against `SearchConfig.line_limit` before
    calling `match_counts`; the engine itself counts whatever it is given.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.logr = get_logger("engine")
        self._states: "weakref.WeakKeyDictionary[SearchHost, SearchState]" = weakref.WeakKeyDictionary()

    def state_for(self, host: SearchHost) -> Optional[SearchState]:
        return self._states.get(host)

    def forget(self, host: SearchHost) -> None:
        self._states.pop(host, None)

    def fingerprint(self, host: SearchHost) -> Fingerprint:
        return Fingerprint(host.buffer_version(), host.search_pattern(), self.config.count_all_per_line)

    def match_counts(self, host: SearchHost) -> MatchCounts:
        count_all = self.config.count_all_per_line
        line, _col = host.cursor_position()
        last = host.line_count()

        in_line = locate_in_line(host, count_all)
        key = self.fingerprint(host)
        state = self._states.get(host)

        if state is not None and state.key == key:
            total = state.value.total
            before = self._update_before(host, state.value, line, last)
        else:
            self.logr.debug("cache miss: line=%d key=%s", line, key)
            before = 0 if line == 1 else count_in_range(host, 1, line - 1, count_all)
            total = before + count_in_range(host, line, last, count_all)

        self._states[host] = SearchState(key, CacheValue(line, before, total))
        return MatchCounts(before + in_line, total)

    def _update_before(self, host: SearchHost, cached: CacheValue, line: int, last: int) -> int:
        """Matches above `line`, derived from the cached anchor by the cheapest span."""
        count_all = self.config.count_all_per_line
        old_line, old_before, total = cached
        if line == 1:
            return 0

        to_top = line
        to_old = abs(line - old_line)
        to_bottom = last - line
        cheapest = min(to_top, to_bottom, to_old)

        if to_top == cheapest:
            self.logr.debug("cache hit: line=%d from top", line)
            return count_in_range(host, 1, line - 1, count_all)
        if to_bottom == cheapest:
            self.logr.debug("cache hit: line=%d from bottom", line)
            return total - count_in_range(host, line, last, count_all)
        self.logr.debug("cache hit: line=%d from reference line %d", line, old_line)
        if old_line < line:
            return old_before + count_in_range(host, old_line, line - 1, count_all)
        if old_line > line:
            return old_before - count_in_range(host, line, old_line - 1, count_all)
        return old_before
