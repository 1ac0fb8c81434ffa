"""Tests for regex search over the store."""

import pytest

from zjump.errors import InvalidPatternError
from zjump.query.scoring import DAY, Scorer
from zjump.query.search import filter_table, search
from zjump.store.models import Entry

NOW = 10_000_000


def _write(store_path, *lines: str):
    store_path.parent.mkdir(parents=True, exist_ok=True)
    store_path.write_text("".join(line + "\n" for line in lines))


def test_search_on_missing_store_creates_it(store_path):
    store_path.parent.mkdir(parents=True)

    assert search(store_path, "anything", now=NOW) == []
    assert store_path.exists()


def test_search_sorts_ascending(populated_store):
    results = search(populated_store, "home", Scorer.RANK, now=NOW)

    assert [r.path for r in results] == ["/home/alex/public_html", "/home/john", "/home/alex"]
    assert [r.score for r in results] == [3.0, 5.0, 10.0]


def test_search_is_read_only(populated_store):
    before = populated_store.read_bytes()
    inode = populated_store.stat().st_ino

    search(populated_store, "home", now=NOW)

    assert populated_store.read_bytes() == before
    assert populated_store.stat().st_ino == inode


def test_empty_pattern_matches_everything(populated_store):
    assert len(search(populated_store, "", now=NOW)) == 4


def test_case_insensitive_fallback(store_path):
    _write(store_path, "/home/x|1|1")

    assert filter_table([Entry("/home/x", 1.0, 1)], "HOME") == [Entry("/home/x", 1.0, 1)]
    assert [r.path for r in search(store_path, "HOME", now=NOW)] == ["/home/x"]


def test_case_sensitive_hits_suppress_fallback(store_path):
    _write(store_path, "/srv/Projects|1|1", "/srv/projects-old|9|1")

    assert [r.path for r in search(store_path, "Projects", now=NOW)] == ["/srv/Projects"]


def test_invalid_pattern_is_reported(populated_store):
    with pytest.raises(InvalidPatternError) as exc_info:
        search(populated_store, "home(", now=NOW)
    assert exc_info.value.pattern == "home("


def test_common_parent_is_boosted_to_the_top(store_path):
    _write(
        store_path,
        "/home|1|1000000",
        "/home/alex|50|1000000",
        "/home/alex/public_html|20|1000000",
        "/home/john|30|1000000",
        "/home/faux|10|1000000",
    )

    results = search(store_path, "home", Scorer.RANK, now=NOW)

    assert results[-1].path == "/home"
    assert results[-1].score == 100.0


def test_no_boost_when_parent_is_not_stored(store_path):
    _write(store_path, "/home/alex|50|1", "/home/john|30|1")

    results = search(store_path, "home", Scorer.RANK, now=NOW)

    assert [(r.path, r.score) for r in results] == [("/home/john", 30.0), ("/home/alex", 50.0)]


def test_frecent_prefers_recent_visits(store_path):
    _write(
        store_path,
        f"/old/favourite|10|{NOW - 30 * DAY}",
        f"/new/thing|4|{NOW - 60}",
    )

    results = search(store_path, "/", Scorer.FRECENT, now=NOW)

    assert results[-1].path == "/new/thing"
    assert results[-1].score == 16.0
    assert results[0].score == 2.5


def test_recent_scorer_orders_by_age(store_path):
    _write(store_path, f"/a|100|{NOW - 500}", f"/b|1|{NOW - 5}")

    results = search(store_path, "/", Scorer.RECENT, now=NOW)

    assert [r.path for r in results] == ["/a", "/b"]


def test_search_skips_corrupt_lines(store_path, log_messages):
    _write(store_path, "/ok|1|1", "/broken|", "/also-ok|2|1")

    assert {r.path for r in search(store_path, "ok", now=NOW)} == {"/ok", "/also-ok"}
    assert any("/broken|" in m for m in log_messages)
