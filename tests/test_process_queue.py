import random

import pytest

from ipfslog.process_queue import ProcessQueue


def test_empty_queue_has_no_length_and_raises():
    queue = ProcessQueue()
    assert len(queue) == 0
    with pytest.raises(IndexError):
        queue.next()


def test_lowest_index_first():
    queue = ProcessQueue()
    queue.add(5, "e")
    queue.add(1, "a")
    queue.add(3, "c")
    queue.add(2, "b")
    assert len(queue) == 4
    assert [queue.next() for _ in range(4)] == ["a", "b", "c", "e"]
    assert len(queue) == 0


def test_random_contents_come_out_sorted():
    rng = random.Random(1234)
    indexes = [rng.randint(-50, 50) for _ in range(200)]
    queue = ProcessQueue()
    for position, index in enumerate(indexes):
        queue.add(index, (index, position))
    popped = [queue.next() for _ in range(len(indexes))]
    popped_indexes = [index for index, _ in popped]
    assert popped_indexes == sorted(indexes)
    assert sorted(position for _, position in popped) == list(range(len(indexes)))


def test_interleaved_add_and_next():
    queue = ProcessQueue()
    queue.add(10, "x")
    queue.add(4, "y")
    assert queue.next() == "y"
    queue.add(7, "z")
    queue.add(12, "w")
    assert queue.next() == "z"
    assert queue.next() == "x"
    assert queue.next() == "w"
    with pytest.raises(IndexError):
        queue.next()


def test_equal_indexes_all_returned():
    queue = ProcessQueue()
    for name in ["p", "q", "r", "s"]:
        queue.add(0, name)
    assert sorted(queue.next() for _ in range(4)) == ["p", "q", "r", "s"]