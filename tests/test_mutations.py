"""Tests for record-visit and prune-stale."""

import pytest

from zjump.store.models import Entry
from zjump.store.mutations import prune_stale, record_visit, total_rank
from zjump.store.storage import update_store


def test_record_visit_appends_new_path():
    table: list[Entry] = []
    visited = record_visit(table, "/a", 100)

    assert table == [Entry("/a", 1.0, 100)]
    assert visited is table[0]


def test_record_visit_bumps_existing_path():
    table = [Entry("/a", 3.0, 10), Entry("/b", 1.0, 10)]
    record_visit(table, "/a", 500)

    assert table[0] == Entry("/a", 4.0, 500)
    assert table[1] == Entry("/b", 1.0, 10)
    assert len(table) == 2


def test_record_visit_matches_path_exactly():
    table = [Entry("/a/b", 3.0, 10)]
    record_visit(table, "/a", 20)

    assert [e.path for e in table] == ["/a/b", "/a"]


def test_no_aging_at_or_below_threshold():
    table = [Entry("/a", 8999.0, 10)]
    record_visit(table, "/b", 20)  # total is exactly 9000

    assert total_rank(table) == 9000.0
    assert table[0].rank == 8999.0


def test_aging_applies_once_when_threshold_exceeded():
    table = [Entry("/a", 8999.5, 10), Entry("/b", 100.0, 10)]
    record_visit(table, "/b", 20)

    assert table[0].rank == pytest.approx(8999.5 * 0.99)
    assert table[1].rank == pytest.approx(101.0 * 0.99)


def test_aging_uses_configured_constants():
    table = [Entry("/a", 10.0, 10)]
    record_visit(table, "/a", 20, decay_threshold=5.0, decay_factor=0.5)

    assert table[0].rank == 5.5


def test_aged_entries_below_floor_disappear_on_write(store_path):
    """Decay and the retention floor together garbage-collect faded paths."""
    store_path.parent.mkdir(parents=True)
    store_path.write_text("/heavy|9000|10\n/light|0.985|10\n")

    update_store(store_path, lambda table: record_visit(table, "/heavy", 20))

    lines = store_path.read_text().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("/heavy|")


def test_bumped_rank_is_written_at_single_precision(store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_text("/a|0.1|1\n")

    update_store(store_path, lambda table: record_visit(table, "/a", 5), retention_floor=0.0)

    assert store_path.read_text() == "/a|1.1|5\n"


def test_prune_stale_removes_missing_directories(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    a_file = tmp_path / "file.txt"
    a_file.write_text("x")
    table = [
        Entry(str(real), 2.0, 1),
        Entry(str(tmp_path / "gone"), 2.0, 1),
        Entry(str(a_file), 2.0, 1),
    ]

    removed = prune_stale(table)

    assert removed == 2
    assert [e.path for e in table] == [str(real)]


def test_prune_stale_is_idempotent(tmp_path, store_path):
    real = tmp_path / "real"
    real.mkdir()
    store_path.parent.mkdir(parents=True)
    store_path.write_text(f"{real}|2|1\n{tmp_path / 'gone'}|2|1\n")

    first = update_store(store_path, prune_stale)
    contents = store_path.read_text()
    second = update_store(store_path, prune_stale)

    assert first == 1
    assert second == 0
    assert store_path.read_text() == contents


def test_prune_stale_accepts_custom_predicate():
    table = [Entry("/keep", 1.0, 1), Entry("/drop", 1.0, 1)]
    assert prune_stale(table, is_dir=lambda p: p == "/keep") == 1
    assert [e.path for e in table] == ["/keep"]
