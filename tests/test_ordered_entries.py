from dataclasses import dataclass, field

from ipfslog.clock import LamportClock
from ipfslog.ordered_entries import OrderedEntries, difference, find_heads


@dataclass
class FakeEntry:
    hash: str
    clock: LamportClock = field(default_factory=LamportClock)
    next: list = field(default_factory=list)
    payload: bytes = b""


def _entries(*names):
    return [FakeEntry(name) for name in names]


def test_set_and_get_keep_insertion_order():
    om = OrderedEntries()
    a, b = _entries("a", "b")
    om.set("b", b)
    om.set("a", a)
    assert om.keys() == ["b", "a"]
    assert om.values() == [b, a]
    assert om.get("a") is a
    assert om.get("missing") is None
    assert len(om) == 2


def test_overwrite_keeps_position():
    om = OrderedEntries()
    a, b, c = _entries("a", "b", "c")
    om.set("a", a)
    om.set("b", b)
    om.set("a", c)
    assert om.keys() == ["a", "b"]
    assert om.get("a") is c


def test_from_entries_keys_by_hash_and_skips_none():
    a, b = _entries("h1", "h2")
    om = OrderedEntries.from_entries([a, None, b, a])
    assert om.keys() == ["h1", "h2"]
    assert "h1" in om
    assert list(om) == [a, b]


def test_at_bounds():
    a, b = _entries("a", "b")
    om = OrderedEntries.from_entries([a, b])
    assert om.at(0) is a
    assert om.at(1) is b
    assert om.at(2) is None
    assert om.at(-1) is None


def test_reverse_in_place():
    entries = _entries("a", "b", "c")
    om = OrderedEntries.from_entries(entries)
    assert om.reverse() is om
    assert om.values() == list(reversed(entries))


def test_copy_is_independent():
    a, b = _entries("a", "b")
    om = OrderedEntries.from_entries([a])
    cp = om.copy()
    cp.set("b", b)
    cp.reverse()
    assert om.keys() == ["a"]
    assert cp.keys() == ["b", "a"]


def test_keys_returns_a_copy():
    om = OrderedEntries.from_entries(_entries("a"))
    om.keys().append("z")
    assert om.keys() == ["a"]


def test_merge_appends_other_and_leaves_inputs():
    a, b, c = _entries("a", "b", "c")
    left = OrderedEntries.from_entries([a, b])
    right = OrderedEntries.from_entries([b, c])
    merged = left.merge(right)
    assert merged.keys() == ["a", "b", "c"]
    assert left.keys() == ["a", "b"]
    assert right.keys() == ["b", "c"]


def test_difference_returns_new_entries_once():
    a, b, c = _entries("a", "b", "c")
    assert difference([a], [a, b, b, c]) == [b, c]
    assert difference([a, b], [a, b]) == []


def test_find_heads_single_chain():
    first = FakeEntry("1", LamportClock(b"x", 1))
    second = FakeEntry("2", LamportClock(b"x", 2), next=["1"])
    third = FakeEntry("3", LamportClock(b"x", 3), next=["2"])
    heads = find_heads(OrderedEntries.from_entries([first, second, third]))
    assert heads == [third]


def test_find_heads_sorted_by_clock_id():
    root = FakeEntry("r", LamportClock(b"m", 1))
    branch_z = FakeEntry("z", LamportClock(b"z", 2), next=["r"])
    branch_a = FakeEntry("a", LamportClock(b"a", 2), next=["r"])
    heads = find_heads(OrderedEntries.from_entries([root, branch_z, branch_a]))
    assert heads == [branch_a, branch_z]


def test_find_heads_of_none():
    assert find_heads(None) == []