from ipfslog.clock import LamportClock, copy_lamport_clock


def test_defined_requires_id():
    assert LamportClock(b"abc", 0).defined
    assert not LamportClock().defined


def test_tick_advances_and_returns_copy():
    clock = LamportClock(b"abc", 4)
    start = clock.time
    ticked = clock.tick()
    assert clock.time == start + 1
    assert ticked == clock
    assert ticked is not clock
    ticked.time += 10
    assert clock.time == start + 1


def test_merge_keeps_maximum():
    low = LamportClock(b"a", 2)
    high = LamportClock(b"b", 7)
    merged = low.merge(high)
    assert low.time == high.time
    assert merged.id == b"a"
    assert merged.time == high.time

    again = high.merge(LamportClock(b"c", 1))
    assert again.time == 7
    assert high.time == 7


def test_compare_by_time():
    later = LamportClock(b"a", 5)
    earlier = LamportClock(b"a", 3)
    assert later.compare(earlier) > 0
    assert earlier.compare(later) < 0
    assert later.compare(earlier) == -earlier.compare(later)


def test_compare_concurrent_uses_id():
    a = LamportClock(b"aaa", 3)
    b = LamportClock(b"bbb", 3)
    assert a.compare(b) == -1
    assert b.compare(a) == 1
    assert a.compare(LamportClock(b"aaa", 3)) == 0


def test_copy_is_independent():
    clock = LamportClock(b"xyz", 9)
    copied = copy_lamport_clock(clock)
    assert copied == clock
    copied.tick()
    assert clock.time == 9
    assert copied.time > clock.time