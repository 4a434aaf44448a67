import pytest
from click.testing import CliRunner

from searchindex.cli import main

from .conftest import SCENARIO_LINES


@pytest.fixture
def sample(tmp_path, monkeypatch):
    for name in ("SEARCHINDEX_LINE_LIMIT", "SEARCHINDEX_COUNT_ALL", "SEARCHINDEX_WRAPSCAN"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "sample.txt"
    path.write_text("\n".join(SCENARIO_LINES) + "\n", encoding="utf-8")
    return str(path)


def test_count_on_match(sample):
    result = CliRunner().invoke(main, ["count", sample, "foo", "--line", "4", "--col", "8"])
    assert result.exit_code == 0, result.output
    assert result.output == "[3/3] foo\n"


def test_count_before_first_match(sample):
    result = CliRunner().invoke(main, ["count", sample, "foo"])
    assert result.exit_code == 0, result.output
    assert result.output == "[0/3] foo\n"


def test_count_first_only(sample):
    result = CliRunner().invoke(main, ["--first-only", "count", sample, "foo", "--line", "4", "--col", "8"])
    assert result.exit_code == 0, result.output
    assert result.output == "[2/2] foo\n"


def test_count_over_line_limit(sample):
    result = CliRunner().invoke(main, ["--line-limit", "2", "count", sample, "foo"])
    assert result.exit_code == 0, result.output
    assert result.output == "[?/??] foo\n"


def test_count_no_matches(sample):
    result = CliRunner().invoke(main, ["count", sample, "zzz"])
    assert result.exit_code == 1
    assert "No matches" in result.output


def test_count_invalid_pattern(sample):
    result = CliRunner().invoke(main, ["count", sample, "foo("])
    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_walk(sample):
    result = CliRunner().invoke(main, ["walk", sample, "foo"])
    assert result.exit_code == 0, result.output
    for counter in ("[1/3]", "[2/3]", "[3/3]"):
        assert counter in result.output


def test_walk_limit(sample):
    result = CliRunner().invoke(main, ["walk", sample, "foo", "--limit", "1"])
    assert result.exit_code == 0, result.output
    assert "[1/3]" in result.output
    assert "[2/3]" not in result.output


def test_walk_no_matches(sample):
    result = CliRunner().invoke(main, ["walk", sample, "zzz"])
    assert result.exit_code == 1
