from __future__ import annotations

import json
import logging
import threading

import pytest

from tetris_ai.score import JsonScoreStore, ScoreEntry, ScoreLedger, ScoreStoreError
from tetris_ai.score.ledger import ReadWriteLock


class MemoryStore:
    def __init__(self, entries=None):
        self.entries = list(entries or [])
        self.saves = 0

    def load(self):
        return list(self.entries)

    def save(self, entries):
        self.saves += 1
        self.entries = list(entries)


class FailingStore(MemoryStore):
    def save(self, entries):
        raise ScoreStoreError("disk full")


class BlockingStore(MemoryStore):
    def __init__(self):
        super().__init__()
        self.release = threading.Event()

    def save(self, entries):
        self.release.wait(5)
        super().save(entries)


@pytest.fixture
def json_path(tmp_path):
    return str(tmp_path / "data" / "highscores.json")


def test_entry_normalizes_name_and_score():
    assert ScoreEntry("  ", 10).name == "Player"
    assert ScoreEntry("ada", -5).score == 0
    assert str(ScoreEntry("ada", 7)) == "ada: 7"


def test_empty_ledger():
    with ScoreLedger(MemoryStore()) as ledger:
        assert ledger.top_scores() == []
        assert ledger.highest_score() == 0


def test_eligibility_rules():
    full = [ScoreEntry(f"p{i}", 100 * (i + 1)) for i in range(10)]
    with ScoreLedger(MemoryStore(full)) as ledger:
        assert not ledger.is_eligible(0)
        assert not ledger.is_eligible(100)
        assert ledger.is_eligible(101)
    with ScoreLedger(MemoryStore()) as ledger:
        assert ledger.is_eligible(1)
        assert not ledger.is_eligible(-3)


def test_submissions_are_ranked_and_capped():
    store = MemoryStore()
    with ScoreLedger(store) as ledger:
        for score in range(10, 130, 10):
            assert ledger.submit(f"p{score}", score)
        top = ledger.top_scores()
    assert len(top) == 10
    assert [e.score for e in top] == list(range(120, 20, -10))
    assert store.entries == top


def test_ineligible_submission_is_not_saved():
    full = [ScoreEntry("p", 500)] * 10
    store = MemoryStore(full)
    with ScoreLedger(store) as ledger:
        assert ledger.submit("late", 500) is False
        assert ledger.submit("zero", 0) is False
    assert store.saves == 0


def test_submit_async_returns_future():
    with ScoreLedger(MemoryStore()) as ledger:
        future = ledger.submit_async("ada", 300)
        assert future.result(timeout=5) is True
        assert ledger.highest_score() == 300


def test_store_failure_is_reported_as_false(caplog):
    with ScoreLedger(FailingStore()) as ledger:
        with caplog.at_level(logging.WARNING, logger="tetris_ai.score.ledger"):
            assert ledger.submit("ada", 300) is False
        assert ledger.top_scores() == []
    assert any("failed" in r.getMessage() for r in caplog.records)


def test_submit_times_out_without_blocking_caller():
    store = BlockingStore()
    ledger = ScoreLedger(store)
    try:
        assert ledger.submit("ada", 300, timeout=0.05) is False
    finally:
        store.release.set()
        ledger.shutdown()
    assert store.entries == [ScoreEntry("ada", 300)]


def test_json_store_round_trip(json_path):
    store = JsonScoreStore(json_path)
    with ScoreLedger(store) as ledger:
        ledger.submit("ada", 400)
        ledger.submit("", 900)
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)
    assert data == [{"name": "Player", "score": 900}, {"name": "ada", "score": 400}]
    with ScoreLedger(JsonScoreStore(json_path)) as reopened:
        assert reopened.highest_score() == 900


def test_json_store_missing_file_is_empty_and_corrupt_file_raises(json_path, tmp_path):
    assert JsonScoreStore(json_path).load() == []
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ScoreStoreError):
        JsonScoreStore(str(bad)).load()


def test_corrupt_store_is_never_overwritten(json_path, caplog):
    store = JsonScoreStore(json_path)
    store.save([ScoreEntry(f"p{i}", 100 * (i + 1)) for i in range(10)])
    with open(json_path, "w", encoding="utf-8") as f:
        f.write("{truncated")

    with caplog.at_level(logging.WARNING, logger="tetris_ai.score.ledger"):
        with ScoreLedger(store) as ledger:
            assert ledger.top_scores() == []
            assert ledger.submit("new", 2000) is False

    with open(json_path, encoding="utf-8") as f:
        assert f.read() == "{truncated"
    assert any("unavailable" in r.getMessage() for r in caplog.records)


def test_json_store_save_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(ScoreStoreError):
        JsonScoreStore(str(blocker / "scores.json")).save([ScoreEntry("a", 1)])


def test_refresh_and_clear(json_path):
    store = JsonScoreStore(json_path)
    with ScoreLedger(store) as ledger:
        assert ledger.top_scores() == []
        store.save([ScoreEntry("outside", 50)])
        assert ledger.top_scores() == []
        ledger.refresh()
        assert ledger.highest_score() == 50
        ledger.clear()
        assert ledger.top_scores() == []
    assert store.load() == []


def test_rw_lock_excludes_writer_while_reading():
    lock = ReadWriteLock()
    acquired = threading.Event()

    def writer():
        with lock.write_locked():
            acquired.set()

    with lock.read_locked():
        with lock.read_locked():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not acquired.wait(0.1)
    thread.join(2)
    assert acquired.is_set()
