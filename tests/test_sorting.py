from dataclasses import dataclass, field

import pytest

from ipfslog.clock import LamportClock
from ipfslog.errors import ErrorCode, LogError
from ipfslog.sorting import (
    compare,
    first,
    first_write_wins,
    last_write_wins,
    no_zeroes,
    sort_by_clock_id,
    sort_by_clocks,
    sort_by_entry_hash,
    sort_entries,
)


@dataclass
class FakeEntry:
    hash: str
    clock: LamportClock = field(default_factory=LamportClock)
    payload: bytes = b""


def _e(hash, id, time):
    return FakeEntry(hash, LamportClock(id, time), hash.encode())


def test_sort_by_clocks_uses_time_first():
    later, earlier = _e("a", b"x", 3), _e("b", b"x", 1)
    assert sort_by_clocks(later, earlier, lambda a, b: 0) > 0
    assert sort_by_clocks(earlier, later, lambda a, b: 0) < 0


def test_sort_by_clocks_resolves_conflict():
    a, b = _e("a", b"x", 1), _e("b", b"x", 1)
    assert sort_by_clocks(a, b, lambda x, y: 7) == 7


def test_sort_by_clock_id():
    a, b = _e("a", b"a", 1), _e("b", b"b", 1)
    assert sort_by_clock_id(a, b, first) < 0
    assert sort_by_clock_id(b, a, first) > 0
    assert sort_by_clock_id(a, _e("c", b"a", 9), lambda x, y: 42) == 42


def test_first_is_one():
    assert first(None, None) == 1


def test_last_write_wins_and_first_write_wins_are_opposite():
    pairs = [
        (_e("a", b"x", 2), _e("b", b"x", 1)),
        (_e("a", b"a", 1), _e("b", b"b", 1)),
        (_e("a", b"a", 1), _e("b", b"a", 1)),
    ]
    for a, b in pairs:
        assert first_write_wins(a, b) == -last_write_wins(a, b)
    assert last_write_wins(*pairs[2]) == first(*pairs[2])


def test_sort_by_entry_hash_breaks_full_ties():
    a, b = _e("a", b"x", 1), _e("b", b"x", 1)
    assert sort_by_entry_hash(a, b) < 0
    assert sort_by_entry_hash(b, a) > 0
    assert sort_by_entry_hash(a, a) == 0


def test_no_zeroes_passes_results_through():
    a, b = _e("a", b"x", 2), _e("b", b"x", 1)
    assert no_zeroes(compare)(a, b) == compare(a, b)


def test_no_zeroes_rejects_zero():
    with pytest.raises(LogError) as info:
        no_zeroes(lambda a, b: 0)(None, None)
    assert info.value.code is ErrorCode.TIEBREAKER_BOGUS


def test_no_zeroes_wraps_failures():
    def broken(a, b):
        raise LogError(ErrorCode.ENTRY_NOT_DEFINED)

    with pytest.raises(LogError) as info:
        no_zeroes(broken)(None, None)
    assert info.value.code is ErrorCode.TIEBREAKER_FAILED


def test_compare_requires_entries():
    with pytest.raises(LogError) as info:
        compare(None, _e("a", b"x", 1))
    assert info.value.code is ErrorCode.ENTRY_NOT_DEFINED


def test_sort_entries_ascending_and_reverse():
    a, b, c = _e("a", b"x", 1), _e("b", b"x", 2), _e("c", b"x", 3)
    values = [c, a, b]
    sort_entries(compare, values, False)
    assert values == [a, b, c]
    sort_entries(compare, values, True)
    assert values == [c, b, a]


def test_sort_entries_is_stable():
    a, b, c = _e("a", b"x", 1), _e("b", b"x", 1), _e("c", b"x", 0)
    values = [b, a, c]
    sort_entries(compare, values, False)
    assert values == [c, b, a]


def test_sort_entries_failing_comparator_keeps_order():
    values = [_e("c", b"x", 3), _e("a", b"x", 1)]
    original = list(values)

    def broken(a, b):
        raise LogError(ErrorCode.ENTRY_NOT_DEFINED)

    sort_entries(broken, values, False)
    assert values == original


def test_sort_entries_deterministic_from_any_order():
    entries = [_e(h, bytes([i]), i % 3) for i, h in enumerate("abcdef")]
    expected = list(entries)
    sort_entries(compare, expected, False)
    shuffled = list(reversed(entries))
    sort_entries(compare, shuffled, False)
    assert shuffled == expected