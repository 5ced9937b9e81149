"""A min-priority queue of hashes keyed by an integer index."""

from __future__ import annotations

from typing import Any


class ProcessQueue:
    """Binary min-heap of (index, hash) pairs; lowest index comes out first.

    Not thread safe. The heap follows the classic sift-up / sift-down
    layout so that entries with equal indexes come out in a fixed order.
    """

    def __init__(self) -> None:
        self._items: list[tuple[int, Any]] = []

    def add(self, index: int, hash: Any) -> None:
        """Queue ``hash`` with priority ``index``."""
        self._items.append((index, hash))
        self._up(len(self._items) - 1)

    def next(self) -> Any:
        """Remove and return the hash with the lowest index."""
        if not self._items:
            raise IndexError("next from an empty process queue")
        last = len(self._items) - 1
        self._swap(0, last)
        self._down(0, last)
        return self._items.pop()[1]

    def __len__(self) -> int:
        return len(self._items)

    def _less(self, i: int, j: int) -> bool:
        return self._items[i][0] < self._items[j][0]

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]

    def _up(self, j: int) -> None:
        while j > 0:
            i = (j - 1) // 2
            if not self._less(j, i):
                break
            self._swap(i, j)
            j = i

    def _down(self, i: int, n: int) -> None:
        while True:
            j = 2 * i + 1
            if j >= n:
                break
            right = j + 1
            if right < n and self._less(right, j):
                j = right
            if not self._less(j, i):
                break
            self._swap(i, j)
            i = j