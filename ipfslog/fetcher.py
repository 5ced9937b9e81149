"""Concurrent traversal of a log's entries from a content store."""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Any, Iterable, Optional

from .entry import Entry, from_multihash
from .process_queue import ProcessQueue
from .types import EntryIO, FetchOptions

DEFAULT_CONCURRENCY = 32


class _TaskState(Enum):
    ADDED = 0
    IN_PROGRESS = 1
    DONE = 2


def _is_defined(hash: Any) -> bool:
    return hash is not None and str(hash) != ""


class Fetcher:
    """Fetches entries and the entries they link to, a few at a time.

    With no ``length`` every reachable entry is fetched. With a ``length``
    the traversal favours the latest entries and stops following links
    once enough of them are known.
    """

    def __init__(self, ipfs: Any, options: Optional[FetchOptions] = None) -> None:
        options = options if options is not None else FetchOptions()
        if options.io is None:
            raise TypeError("an entry IO is required")
        self._ipfs = ipfs
        self._io: EntryIO = options.io
        self._provider = options.provider
        self._length = options.length if options.length is not None else -1
        self._timeout = options.timeout
        self._should_exclude = options.should_exclude
        self._on_progress = options.on_progress
        concurrency = options.concurrency if options.concurrency > 0 else DEFAULT_CONCURRENCY
        self._slots = threading.Semaphore(concurrency)
        self._cond = threading.Condition()
        self._tasks: dict[str, _TaskState] = {}
        self._max_clock = 0
        self._min_clock = 0

    def fetch(self, hashes: Iterable[Any]) -> list[Entry]:
        """Return the entries reachable from ``hashes`` in the order they arrived."""
        deadline = time.monotonic() + self._timeout if self._timeout > 0 else None
        return self._process_queue(list(hashes), deadline)

    def _process_queue(self, hashes: list[Any], deadline: Optional[float]) -> list[Entry]:
        results: list[Entry] = []
        queue = ProcessQueue()
        in_progress = 0

        def expired() -> bool:
            return deadline is not None and time.monotonic() >= deadline

        def run(hash: Any) -> None:
            nonlocal in_progress
            try:
                entry = None if expired() else self._fetch_entry(hash)
            except Exception:
                entry = None
            self._slots.release()

            with self._cond:
                if entry is not None and not expired():
                    self._accept(entry, queue, results)
                in_progress -= 1
                self._cond.notify()

        with self._cond:
            self._add_hashes(queue, hashes)
            while len(queue) > 0:
                if not self._acquire_slot(deadline):
                    break
                hash = queue.next()
                self._tasks[str(hash)] = _TaskState.IN_PROGRESS
                threading.Thread(target=run, args=(hash,), daemon=True).start()
                in_progress += 1
                while len(queue) == 0 and in_progress > 0:
                    self._cond.wait()

            while in_progress > 0:
                self._cond.wait()

        return results

    def _accept(self, entry: Entry, queue: ProcessQueue, results: list[Entry]) -> None:
        last_entry = results[-1] if results else None
        self._update_clock(entry, last_entry)

        key = str(entry.hash)
        if self._tasks.get(key, _TaskState.ADDED) is _TaskState.DONE:
            return

        ts = entry.clock.time
        is_later = len(results) >= self._length and ts >= self._min_clock
        if self._length < 0 or len(results) < self._length or is_later:
            results.append(entry)
            if self._on_progress is not None:
                self._on_progress(entry)

        self._tasks[key] = _TaskState.DONE
        self._add_next_entry(queue, entry, results)

    def _update_clock(self, entry: Entry, last_entry: Optional[Entry]) -> None:
        ts = entry.clock.time
        if self._max_clock < ts:
            self._max_clock = ts
        if last_entry is not None:
            last_ts = last_entry.clock.time
            if last_ts < self._min_clock:
                self._min_clock = last_ts
        else:
            self._min_clock = self._max_clock

    def _exclude(self, hash: Any) -> bool:
        if not _is_defined(hash):
            return True
        if str(hash) in self._tasks:
            return True
        if self._should_exclude is None:
            return False
        return bool(self._should_exclude(hash))

    def _add_next_entry(self, queue: ProcessQueue, entry: Entry, results: list[Entry]) -> None:
        ts = entry.clock.time

        if self._length < 0:
            self._add_hashes(queue, entry.next)
            self._add_hashes(queue, entry.refs)
            return

        # Once the result is full, still follow links of entries at least as
        # late as the oldest kept one, in case a later entry lies behind them.
        if len(results) < self._length or ts >= self._min_clock:
            for h in entry.next:
                self._add_hash(queue, self._max_clock - ts, h)
        if len(results) + len(entry.refs) <= self._length:
            for i, h in enumerate(entry.refs):
                self._add_hash(queue, self._max_clock - ts + (i + 1) * i, h)

    def _fetch_entry(self, hash: Any) -> Entry:
        return from_multihash(self._ipfs, hash, self._provider, self._io)

    def _add_hashes(self, queue: ProcessQueue, hashes: Iterable[Any]) -> int:
        return sum(self._add_hash(queue, i, h) for i, h in enumerate(hashes or []))

    def _add_hash(self, queue: ProcessQueue, index: int, hash: Any) -> int:
        if self._exclude(hash):
            return 0
        queue.add(index, hash)
        self._tasks[str(hash)] = _TaskState.ADDED
        return 1

    def _acquire_slot(self, deadline: Optional[float]) -> bool:
        if deadline is None:
            return self._slots.acquire()
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        return self._slots.acquire(timeout=remaining)


def fetch_all(ipfs: Any, hashes: Iterable[Any], options: Optional[FetchOptions] = None) -> list[Entry]:
    """Fetch the entries reachable from ``hashes``."""
    return Fetcher(ipfs, options).fetch(hashes)


def fetch_parallel(
    ipfs: Any, hashes: Iterable[Any], options: Optional[FetchOptions] = None
) -> list[Entry]:
    """Same as fetch_all."""
    return Fetcher(ipfs, options).fetch(hashes)