from __future__ import annotations

from typing import Optional

from .debug import get_logger
from .host import SearchHost, ViewGuard


log = get_logger("counter")


def count_in_range(host: SearchHost, first: int, last: Optional[int] = None, count_all: bool = True) -> int:
    """Count matches of the host's active pattern in lines first..last (inclusive).

    `last=None` runs to the end of the buffer. An empty or inverted range is 0
    and never reaches the host. The host's cursor and scroll offset are the
    same after the call as before it.
    """
    if last is None:
        last = host.line_count()
    first = max(1, first)
    if first > last:
        return 0
    with ViewGuard(host):
        return max(0, int(host.count_substitution_matches(first, last, count_all)))


def locate_in_line(host: SearchHost, count_all: bool = True) -> int:
    """Return how many matches on the cursor line start at or before the cursor.

    Scans the line from column 0, accepting a match right at column 0 and
    requiring every later match to start strictly after the previous one.
    """
    pattern = host.search_pattern()
    if not pattern:
        return 0
    line, col = host.cursor_position()
    found = 0
    with ViewGuard(host):
        host.set_cursor(line, 0)
        pos = host.find_next_match(pattern, line, 0, line, True)
        while pos is not None and pos[0] == line and pos[1] <= col:
            found += 1
            if not count_all:
                break
            pos = host.find_next_match(pattern, line, pos[1], line, False)
    log.debug("in-line: line=%d col=%d -> %d", line, col, found)
    return found
