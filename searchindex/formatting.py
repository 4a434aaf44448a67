from __future__ import annotations

from typing import Optional, Tuple


UNKNOWN_COUNTS = "[?/??]"
WRAP_BOTTOM = "search hit BOTTOM, continuing at TOP"
WRAP_TOP = "search hit TOP, continuing at BOTTOM"


def format_indicator(counts: Optional[Tuple[int, int]], pattern: str = "", *, show_pattern: bool = True) -> str:
    """Return the "[current/total] pattern" message, or "" when there is nothing to show.

    counts=None means counting was skipped (buffer over the line limit).
    A total of 0 is never displayed.
    """
    if counts is None:
        head = UNKNOWN_COUNTS
    else:
        current, total = counts
        if total <= 0:
            return ""
        head = f"[{current}/{total}]"
    if show_pattern and pattern:
        return f"{head} {pattern}"
    return head


def wrap_notice(wrapped: bool, backward: bool) -> str:
    if not wrapped:
        return ""
    return WRAP_TOP if backward else WRAP_BOTTOM
