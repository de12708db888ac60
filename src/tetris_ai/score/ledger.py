from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .store import ScoreEntry, ScoreStore, ScoreStoreError, ranked

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10
SUBMIT_TIMEOUT = 5.0


class ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ScoreLedger:
    """Top-N high-score list shared by every session.

    Loading and saving run on a small worker pool. The in-memory list sits behind
    a read-write lock that writers hold only while swapping the list in; store I/O
    happens outside it.
    """

    def __init__(self, store: ScoreStore, max_entries: int = MAX_ENTRIES, workers: int = 2) -> None:
        self.store = store
        self.max_entries = max_entries
        self._scores: List[ScoreEntry] = []
        self._lock = ReadWriteLock()
        # Serialises load-modify-save cycles against the store.
        self._io_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="highscore-worker")
        self._loaded: Future = self._executor.submit(self._load)

    def __enter__(self) -> "ScoreLedger":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    def _load(self) -> None:
        try:
            entries = ranked(self.store.load(), self.max_entries)
        except ScoreStoreError as exc:
            logger.warning("high scores unavailable: %s", exc)
            return
        with self._lock.write_locked():
            self._scores = entries

    def _wait_loaded(self, timeout: Optional[float] = SUBMIT_TIMEOUT) -> None:
        try:
            self._loaded.result(timeout=timeout)
        except FutureTimeout:
            logger.warning("high scores still loading after %.1fs", timeout)
        except Exception:
            logger.exception("loading high scores failed")

    def top_scores(self) -> List[ScoreEntry]:
        self._wait_loaded()
        with self._lock.read_locked():
            return list(self._scores)

    def highest_score(self) -> int:
        scores = self.top_scores()
        return scores[0].score if scores else 0

    def is_eligible(self, score: int) -> bool:
        """A positive score qualifies while the list has room or when it beats the lowest entry."""
        if score <= 0:
            return False
        self._wait_loaded()
        with self._lock.read_locked():
            if len(self._scores) < self.max_entries:
                return True
            return score > self._scores[-1].score

    def _submit(self, name: str, score: int) -> bool:
        # An unreadable store raises here, so nothing is written over it.
        self._wait_loaded()
        if not self.is_eligible(score):
            return False
        entry = ScoreEntry(name, score)
        with self._io_lock:
            updated = ranked([*self.store.load(), entry], self.max_entries)
            if entry not in updated:
                return False
            self.store.save(updated)
        with self._lock.write_locked():
            self._scores = updated
        logger.info("recorded high score %s", entry)
        return True

    def submit_async(self, name: str, score: int) -> "Future[bool]":
        return self._executor.submit(self._submit, name, score)

    def submit(self, name: str, score: int, timeout: float = SUBMIT_TIMEOUT) -> bool:
        """Blocking wrapper over `submit_async`; False on timeout or failure."""
        future = self.submit_async(name, score)
        try:
            return future.result(timeout=timeout)
        except FutureTimeout:
            logger.warning("high score submission timed out after %.1fs", timeout)
        except Exception as exc:
            logger.warning("high score submission failed: %s", exc)
        return False

    def refresh(self) -> None:
        self._wait_loaded()
        self._load()

    def clear(self) -> None:
        with self._io_lock:
            self.store.save([])
        with self._lock.write_locked():
            self._scores = []

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
