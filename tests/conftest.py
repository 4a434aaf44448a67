from __future__ import annotations

import re
from typing import List, Sequence, Tuple

import pytest

from searchindex.host import TextBuffer


# Matches: line 2 once, line 4 twice
SCENARIO_LINES = ["alpha", "foo here", "gamma", "foo and foo", "omega"]


class CountingBuffer(TextBuffer):
    """TextBuffer that records every count_substitution_matches range."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.count_calls: List[Tuple[int, int]] = []

    def count_substitution_matches(self, first: int, last: int, global_flag: bool) -> int:
        self.count_calls.append((first, last))
        return super().count_substitution_matches(first, last, global_flag)


def brute_force_before(lines: Sequence[str], pattern: str, line: int) -> int:
    rx = re.compile(pattern)
    return sum(len(list(rx.finditer(text))) for text in lines[: line - 1])


@pytest.fixture
def scenario() -> CountingBuffer:
    buf = CountingBuffer(SCENARIO_LINES, name="scenario")
    buf.set_search_pattern("foo")
    return buf


@pytest.fixture
def tall() -> CountingBuffer:
    lines = ["foo bar foo" if i % 3 == 0 else "nothing to see" for i in range(100)]
    buf = CountingBuffer(lines, name="tall")
    buf.set_search_pattern("foo")
    return buf
