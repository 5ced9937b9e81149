"""Comparators and sorting helpers for log entries."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .errors import ErrorCode, LogError

Comparator = Callable[[Any, Any], int]

_log = logging.getLogger(__name__)

# Result meaning "the first argument sorts after the second".
_AFTER = 1


def _compare_bytes(a: bytes, b: bytes) -> int:
    a, b = bytes(a), bytes(b)
    return (a > b) - (a < b)


def sort_by_clocks(a: Any, b: Any, resolve_conflict: Comparator) -> int:
    """Order by clock; concurrent clocks are settled by ``resolve_conflict``."""
    diff = a.clock.compare(b.clock)
    if diff == 0:
        return resolve_conflict(a, b)
    return diff


def sort_by_clock_id(a: Any, b: Any, resolve_conflict: Comparator) -> int:
    """Order by clock id; equal ids are settled by ``resolve_conflict``."""
    compared = _compare_bytes(a.clock.id, b.clock.id)
    if compared == 0:
        return resolve_conflict(a, b)
    return compared


def first(a: Any, b: Any) -> int:
    """Always put ``a`` after ``b``."""
    ordering = {id(b): 0, id(a): _AFTER} if a is not b else {id(a): _AFTER}
    return ordering[id(a)]


def last_write_wins(a: Any, b: Any) -> int:
    """Order by clock, then clock id, with the later write last."""
    return sort_by_clocks(a, b, lambda x, y: sort_by_clock_id(x, y, first))


def first_write_wins(a: Any, b: Any) -> int:
    """The inverse of last_write_wins."""
    try:
        result = last_write_wins(a, b)
    except LogError as exc:
        raise ErrorCode.TIEBREAKER_FAILED.wrap(exc) from exc
    return -result


def sort_by_entry_hash(a: Any, b: Any) -> int:
    """Order by clock, then clock id, then hash string."""

    def compare_hash(x: Any, y: Any) -> int:
        hx, hy = str(x.hash), str(y.hash)
        return (hx > hy) - (hx < hy)

    return sort_by_clocks(a, b, lambda x, y: sort_by_clock_id(x, y, compare_hash))


def no_zeroes(comp_func: Comparator) -> Comparator:
    """Wrap a comparator so that a zero result raises instead."""

    def wrapped(a: Any, b: Any) -> int:
        try:
            result = comp_func(a, b)
        except LogError as exc:
            raise ErrorCode.TIEBREAKER_FAILED.wrap(exc) from exc
        if result != 0:
            return result
        raise LogError(ErrorCode.TIEBREAKER_BOGUS)

    return wrapped


def compare(a: Any, b: Any) -> int:
    """Compare two entries by their clocks."""
    if a is None or b is None:
        raise LogError(ErrorCode.ENTRY_NOT_DEFINED)
    return a.clock.compare(b.clock)


def sort_entries(comp_func: Comparator, values: list[Any], reverse: bool = False) -> None:
    """Stable in-place sort of ``values``.

    A comparison that raises LogError is logged and counts as "not less".
    """

    class _Key:
        __slots__ = ("value",)

        def __init__(self, value: Any) -> None:
            self.value = value

        def __lt__(self, other: "_Key") -> bool:
            try:
                result = comp_func(self.value, other.value)
            except LogError as exc:
                _log.warning("error while comparing: %s", exc)
                return False
            return result > 0 if reverse else result < 0

    values[:] = sorted(values, key=_Key)