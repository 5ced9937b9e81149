"""An insertion-ordered, thread-safe map of entries keyed by hash."""

from __future__ import annotations

import threading
from typing import Any, Iterable, Iterator, Optional


class OrderedEntries:
    """Entries keyed by hash string, remembering insertion order."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._keys: list[str] = []
        self._values: dict[str, Any] = {}

    @classmethod
    def from_entries(cls, entries: Iterable[Any]) -> "OrderedEntries":
        """Build a map from entries, keyed by their hash; None is skipped."""
        ordered = cls()
        for entry in entries:
            if entry is None:
                continue
            ordered.set(str(entry.hash), entry)
        return ordered

    def copy(self) -> "OrderedEntries":
        """Return a shallow copy with its own key order."""
        with self._lock:
            other = OrderedEntries()
            other._keys = list(self._keys)
            other._values = dict(self._values)
            return other

    def reverse(self) -> "OrderedEntries":
        """Reverse the key order in place and return this map."""
        with self._lock:
            self._keys.reverse()
            return self

    def merge(self, other: "OrderedEntries") -> "OrderedEntries":
        """Return a new map holding this map's entries, then the other's."""
        merged = OrderedEntries()
        for source in (self, other):
            for key in source.keys():
                merged.set(key, source.get(key))
        return merged

    def get(self, key: str) -> Optional[Any]:
        """Return the entry under ``key`` or None."""
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store ``value``; a new key goes last, an existing one keeps its place."""
        with self._lock:
            if key not in self._values:
                self._keys.append(key)
            self._values[key] = value

    def values(self) -> list[Any]:
        """Return the entries in key order."""
        with self._lock:
            return [self._values[key] for key in self._keys]

    def keys(self) -> list[str]:
        """Return the keys in order."""
        with self._lock:
            return list(self._keys)

    def at(self, index: int) -> Optional[Any]:
        """Return the entry at ``index`` or None when out of range."""
        with self._lock:
            if index < 0 or index >= len(self._keys):
                return None
            return self._values[self._keys[index]]

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())


def difference(a: Iterable[Any], b: Iterable[Any]) -> list[Any]:
    """Return the entries of ``b`` absent from ``a``, each hash once."""
    existing = {str(entry.hash) for entry in a}
    seen: set[str] = set()
    diff = []
    for entry in b:
        key = str(entry.hash)
        if key in existing or key in seen:
            continue
        seen.add(key)
        diff.append(entry)
    return diff


def find_heads(entries: Optional[OrderedEntries]) -> list[Any]:
    """Return the entries no other entry points to, ordered by clock id."""
    if entries is None:
        return []
    referenced = {str(n) for entry in entries.values() for n in entry.next}
    heads = [entries.get(key) for key in entries.keys() if key not in referenced]
    heads.sort(key=lambda entry: bytes(entry.clock.id))
    return heads