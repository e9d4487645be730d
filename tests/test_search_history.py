"""Tests for search history and query-string building."""
import json
from datetime import datetime, timezone

from src.utils import search_history
from src.utils.search_history import MAX_SEARCH_HISTORY, SEARCH_HISTORY_KEY, SearchHistory, build_search_params
from src.utils.storage import InMemoryStore

WHEN = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_add_records_query_criteria_and_time(memory_store):
    history = SearchHistory(memory_store)

    history.add("retirement", {"location": "Seattle, WA", "radius": "25"}, timestamp=WHEN)

    assert history.entries() == [
        {
            "query": "retirement",
            "criteria": {"location": "Seattle, WA", "radius": "25"},
            "timestamp": "2024-05-01T12:00:00+00:00",
        }
    ]


def test_same_criteria_replaces_older_entry(memory_store):
    history = SearchHistory(memory_store)
    history.add("a", {"location": "Seattle"}, timestamp=WHEN)
    history.add("b", {"location": "Portland"}, timestamp=WHEN)

    history.add("c", {"location": "Seattle"}, timestamp=WHEN)

    entries = history.entries()
    assert [e["query"] for e in entries] == ["c", "b"]


def test_list_criteria_compare_after_storage(memory_store):
    history = SearchHistory(memory_store)
    history.add("a", {"specializations": ("Tax", "Estate")}, timestamp=WHEN)

    history.add("b", {"specializations": ["Tax", "Estate"]}, timestamp=WHEN)

    assert len(history.entries()) == 1


def test_history_is_capped(memory_store):
    history = SearchHistory(memory_store)
    for i in range(MAX_SEARCH_HISTORY + 3):
        history.add(str(i), {"page": i}, timestamp=WHEN)

    entries = history.entries()
    assert len(entries) == MAX_SEARCH_HISTORY
    assert entries[0]["query"] == str(MAX_SEARCH_HISTORY + 2)


def test_remove_by_index(memory_store):
    history = SearchHistory(memory_store)
    for name in ("a", "b", "c"):
        history.add(name, {"q": name}, timestamp=WHEN)

    history.remove(1)

    assert [e["query"] for e in history.entries()] == ["c", "a"]


def test_remove_out_of_range_is_ignored(memory_store):
    history = SearchHistory(memory_store)
    history.add("a", {"q": "a"}, timestamp=WHEN)

    history.remove(5)
    history.remove(-1)

    assert len(history.entries()) == 1


def test_clear(memory_store):
    history = SearchHistory(memory_store)
    history.add("a", {"q": "a"}, timestamp=WHEN)

    history.clear()

    assert history.entries() == []


def test_build_search_params():
    params = build_search_params(
        {
            "location": "Seattle, WA",
            "radius": 25,
            "minRating": None,
            "specializations": ["Tax", "Estate"],
            "certifications": [],
            "verifiedOnly": True,
            "feeOnly": False,
        }
    )

    assert params == {
        "location": "Seattle, WA",
        "radius": "25",
        "specializations": "Tax,Estate",
        "verifiedOnly": "true",
    }


def test_non_dict_entries_are_skipped():
    store = InMemoryStore({SEARCH_HISTORY_KEY: json.dumps([1, "x", {"query": "old", "criteria": {"radius": "5"}}])})
    history = SearchHistory(store)

    assert history.entries() == [{"query": "old", "criteria": {"radius": "5"}}]

    updated = history.add("new", {"radius": "10"}, timestamp=WHEN)

    assert [e["query"] for e in updated] == ["new", "old"]


def test_cap_comes_from_search_config(memory_store, monkeypatch):
    monkeypatch.setattr(search_history, "get_search_config", lambda: {"search_history_max": 2})
    history = SearchHistory(memory_store)

    for i in range(4):
        history.add(f"q{i}", {"page": i}, timestamp=WHEN)

    assert [e["query"] for e in history.entries()] == ["q3", "q2"]
