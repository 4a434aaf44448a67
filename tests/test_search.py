from searchindex.config import SearchConfig
from searchindex.engine import MatchCounts
from searchindex.host import TextBuffer
from searchindex.search import SearchController


def test_set_query_jumps_to_first_match(scenario):
    c = SearchController(buffer=scenario)
    assert c.set_query("foo") == (2, 0)
    assert c.counter() == MatchCounts(1, 3)
    assert c.counter_text() == "[1/3] foo"


def test_next_walks_matches_and_wraps(scenario):
    c = SearchController(buffer=scenario)
    c.set_query("foo")
    assert c.next() == (4, 0)
    assert c.counter_text() == "[2/3] foo"
    assert c.next() == (4, 8)
    assert c.counter_text() == "[3/3] foo"
    assert c.next() == (2, 0)
    assert c.wrapped
    assert c.counter_text() == "[1/3] foo search hit BOTTOM, continuing at TOP"


def test_backward_search_reverses_next_and_prev(scenario):
    c = SearchController(buffer=scenario)
    assert c.set_query("foo", backward=True) == (4, 8)
    assert c.counter_text() == "[3/3] foo search hit TOP, continuing at BOTTOM"
    assert c.next() == (4, 0)
    assert c.counter_text() == "[2/3] foo"
    assert c.prev() == (4, 8)
    assert c.counter_text() == "[3/3] foo"


def test_nowrapscan_stops_at_bottom(scenario):
    c = SearchController(buffer=scenario, config=SearchConfig(wrapscan=False))
    c.set_query("foo")
    c.next()
    c.next()
    assert c.next() is None
    assert scenario.cursor_position() == (4, 8)
    assert c.counter_text() == "search hit BOTTOM without match for: foo"


def test_line_limit_skips_counting(scenario):
    c = SearchController(buffer=scenario, config=SearchConfig(line_limit=3))
    c.set_query("foo")
    assert c.counter() is None
    assert c.counter_text() == "[?/??] foo"
    assert c.has_matches()
    assert scenario.count_calls == []


def test_pattern_not_found(scenario):
    c = SearchController(buffer=scenario)
    assert c.set_query("zzz") is None
    assert c.counter_text() == "Pattern not found: zzz"
    assert not c.has_matches()


def test_invalid_pattern_is_reported(scenario):
    c = SearchController(buffer=scenario)
    assert c.set_query("foo(") is None
    assert c.counter_text().startswith("invalid pattern 'foo('")
    assert c.counter() == (0, 0)


def test_hide_pattern(scenario):
    c = SearchController(buffer=scenario, config=SearchConfig(show_pattern=False))
    c.set_query("foo")
    assert c.counter_text() == "[1/3]"


def test_no_query(scenario):
    c = SearchController(buffer=scenario)
    c.set_query("foo")
    c.reset()
    assert not c.has_query()
    assert c.next() is None
    assert c.prev() is None
    assert c.counter() == (0, 0)
    assert c.counter_text() == ""


def test_iter_matches_counts_each_match(scenario):
    c = SearchController(buffer=scenario)
    scenario.set_search_pattern("foo")
    visited = list(c.iter_matches())
    assert [pos for pos, _ in visited] == [(2, 0), (4, 0), (4, 8)]
    assert [counts for _, counts in visited] == [(1, 3), (2, 3), (3, 3)]


def test_cursor_moves_reuse_cache(scenario):
    c = SearchController(buffer=scenario)
    c.set_query("foo")
    c.counter()
    scenario.count_calls.clear()
    c.next()
    assert c.counter() == (2, 3)
    assert len(scenario.count_calls) == 1


def test_build_text_highlights_matches(scenario):
    c = SearchController(buffer=scenario)
    c.set_query("foo")
    text = c.build_text()
    assert text.plain == "\n".join(scenario.lines)
    spans = [(s.start, s.end, s.style) for s in text.spans]
    assert (6, 9, "black on yellow") in spans
    assert sum(1 for *_, style in spans if style == "dim on yellow") == 2
    only_current = c.build_text(highlight_all=False)
    assert len(only_current.spans) == 1


def test_build_text_without_query(scenario):
    c = SearchController(buffer=scenario)
    c.reset()
    text = c.build_text()
    assert text.plain == "\n".join(scenario.lines)
    assert text.spans == []


def test_overlapping_candidates_follow_counted_matches():
    buf = TextBuffer(["aaaa"])
    buf.set_search_pattern("aa")
    c = SearchController(buffer=buf)
    visited = list(c.iter_matches())
    assert visited == [((1, 0), (1, 2)), ((1, 2), (2, 2))]
    assert all(counts.current <= counts.total for _, counts in visited)
