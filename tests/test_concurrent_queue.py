import threading
import time
from queue import Empty

import pytest

from logerr.concurrent_queue import ConcurrentQueue


def test_fifo_order():
    q = ConcurrentQueue()
    for value in ["a", "b", "c"]:
        q.push(value)
    assert [q.try_pop(), q.try_pop(), q.try_pop()] == ["a", "b", "c"]


def test_try_pop_on_empty_raises():
    q = ConcurrentQueue()
    with pytest.raises(Empty):
        q.try_pop()


def test_empty_and_len_track_contents():
    q = ConcurrentQueue()
    assert q.empty()
    assert len(q) == 0
    q.push(1)
    q.push(2)
    assert not q.empty()
    assert len(q) == 2
    q.try_pop()
    assert len(q) == 1


def test_initial_items_and_iteration():
    q = ConcurrentQueue([3, 1, 2])
    with q.read_lock():
        assert list(q) == [3, 1, 2]


def test_clear_removes_everything():
    q = ConcurrentQueue(range(5))
    q.clear()
    assert q.empty()
    with pytest.raises(Empty):
        q.try_pop()


def test_try_pop_fails_while_write_locked():
    q = ConcurrentQueue(["x"])
    with q.write_lock():
        with pytest.raises(Empty):
            q.try_pop()
    assert q.try_pop() == "x"


def test_try_pop_for_returns_available_item():
    q = ConcurrentQueue(["ready"])
    assert q.try_pop_for(0.5) == "ready"


def test_try_pop_for_times_out():
    q = ConcurrentQueue()
    start = time.monotonic()
    with pytest.raises(Empty):
        q.try_pop_for(0.1)
    assert time.monotonic() - start >= 0.09


def test_try_pop_for_receives_item_pushed_later():
    q = ConcurrentQueue()

    def producer():
        time.sleep(0.05)
        q.push("late")

    t = threading.Thread(target=producer)
    t.start()
    try:
        assert q.try_pop_for(5.0) == "late"
    finally:
        t.join()


def test_try_pop_for_waits_for_lock_release():
    q = ConcurrentQueue(["held"])
    locked = threading.Event()
    release = threading.Event()

    def holder():
        with q.write_lock():
            locked.set()
            release.wait(5)

    t = threading.Thread(target=holder)
    t.start()
    locked.wait(5)
    threading.Timer(0.05, release.set).start()
    try:
        assert q.try_pop_for(5.0) == "held"
    finally:
        release.set()
        t.join()


def test_equality():
    assert ConcurrentQueue([1, 2]) == ConcurrentQueue([1, 2])
    assert ConcurrentQueue([1, 2]) != ConcurrentQueue([2, 1])
    assert ConcurrentQueue([1]) != ConcurrentQueue([1, 1])
    q = ConcurrentQueue([1])
    assert q == q


def test_equality_with_other_types_is_false():
    assert (ConcurrentQueue([1]) == [1]) is False


def test_copy_is_independent():
    original = ConcurrentQueue(["a", "b"])
    duplicate = original.copy()
    assert duplicate == original
    duplicate.push("c")
    assert len(original) == 2
    assert len(duplicate) == 3


def test_assign_copies_contents():
    target = ConcurrentQueue([9])
    source = ConcurrentQueue([1, 2, 3])
    target.assign(source)
    assert target == source
    source.push(4)
    assert len(target) == 3


def test_assign_wakes_waiting_consumer():
    target = ConcurrentQueue()
    source = ConcurrentQueue(["assigned"])
    threading.Timer(0.05, lambda: target.assign(source)).start()
    assert target.try_pop_for(5.0) == "assigned"


def test_swap_exchanges_contents():
    left = ConcurrentQueue([1, 2])
    right = ConcurrentQueue(["x"])
    left.swap(right)
    with left.read_lock():
        assert list(left) == ["x"]
    with right.read_lock():
        assert list(right) == [1, 2]


def test_swap_with_itself_keeps_contents():
    q = ConcurrentQueue([1, 2])
    q.swap(q)
    assert q == ConcurrentQueue([1, 2])


def test_unhashable():
    with pytest.raises(TypeError):
        hash(ConcurrentQueue())


def test_concurrent_producers_and_consumers_lose_nothing():
    q = ConcurrentQueue()
    producers = 4
    per_producer = 200
    received = []
    received_lock = threading.Lock()

    def produce(base):
        for i in range(per_producer):
            q.push(base * per_producer + i)

    def consume():
        while True:
            try:
                item = q.try_pop_for(0.5)
            except Empty:
                return
            with received_lock:
                received.append(item)

    threads = [threading.Thread(target=produce, args=(n,)) for n in range(producers)]
    threads += [threading.Thread(target=consume) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(received) == list(range(producers * per_producer))
    assert q.empty()