import pytest

from logstream.stream.filters import FilterCriteria, matches, visible

from helpers import make_entry


@pytest.fixture
def entries():
    return [
        make_entry(id="1", project="web", level="info", message="boot ok"),
        make_entry(id="2", project="api", level="error", message="boot fail"),
    ]


def ids(result):
    return [entry.id for entry in result]


def test_no_criteria_returns_everything(entries):
    assert ids(visible(entries, FilterCriteria())) == ["1", "2"]


def test_project_filter(entries):
    assert ids(visible(entries, FilterCriteria(project="web"))) == ["1"]


def test_query_filter(entries):
    assert ids(visible(entries, FilterCriteria(query="fail"))) == ["2"]


def test_level_and_query_combined(entries):
    assert ids(visible(entries, FilterCriteria(level="error", query="boot"))) == ["2"]


def test_filters_are_anded(entries):
    assert visible(entries, FilterCriteria(project="web", level="error")) == []


def test_query_is_case_insensitive(entries):
    assert ids(visible(entries, FilterCriteria(query="BOOT FAIL"))) == ["2"]


def test_project_and_level_are_exact(entries):
    assert visible(entries, FilterCriteria(project="we")) == []
    assert visible(entries, FilterCriteria(level="ERROR")) == []


def test_query_only_searches_message():
    entry = make_entry(project="payments", message="charged")
    assert not matches(entry, FilterCriteria(query="payments"))


def test_order_is_preserved():
    entries = [make_entry(id=str(i), message=f"tick {i}") for i in range(5)]
    assert ids(visible(entries, FilterCriteria(query="tick"))) == ["0", "1", "2", "3", "4"]


def test_visible_is_deterministic_and_pure(entries):
    criteria = FilterCriteria(query="boot")
    before = list(entries)

    first = visible(entries, criteria)
    second = visible(entries, criteria)

    assert first == second
    assert entries == before


def test_is_active():
    assert not FilterCriteria().is_active
    assert FilterCriteria(level="warn").is_active
