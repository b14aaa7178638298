import threading

import pytest

from syslab.blockqueue import BlockQueue


def test_items_come_out_in_order():
    queue = BlockQueue(4)
    for item in ["a", "b", "c"]:
        queue.put(item)
    assert len(queue) == 3
    assert [queue.take() for _ in range(3)] == ["a", "b", "c"]
    assert len(queue) == 0


def test_default_capacity_from_source():
    assert BlockQueue().capacity == 5


def test_invalid_capacity_rejected():
    with pytest.raises(ValueError):
        BlockQueue(0)


def test_put_blocks_while_full():
    queue = BlockQueue(1)
    queue.put("first")
    finished = threading.Event()

    def producer():
        queue.put("second")
        finished.set()

    thread = threading.Thread(target=producer, daemon=True)
    thread.start()
    assert finished.wait(0.2) is False
    assert queue.take() == "first"
    assert finished.wait(5) is True
    assert queue.take() == "second"
    thread.join(5)


def test_take_blocks_while_empty():
    queue = BlockQueue(2)
    got = []

    def consumer():
        got.append(queue.take())

    thread = threading.Thread(target=consumer, daemon=True)
    thread.start()
    thread.join(0.2)
    assert got == []
    assert len(queue) == 0
    queue.put("item")
    thread.join(5)
    assert got == ["item"]
    assert len(queue) == 0


def test_many_producers_and_consumers_deliver_everything():
    queue = BlockQueue(3)
    received = []
    lock = threading.Lock()
    per_producer = 40

    def producer(base):
        for i in range(per_producer):
            queue.put(base + i)

    def consumer(count):
        for _ in range(count):
            item = queue.take()
            with lock:
                received.append(item)

    producers = [threading.Thread(target=producer, args=(p * 1000,), daemon=True)
                 for p in range(3)]
    consumers = [threading.Thread(target=consumer, args=(60,), daemon=True)
                 for _ in range(2)]
    for thread in producers + consumers:
        thread.start()
    for thread in producers + consumers:
        thread.join(10)
    expected = sorted(p * 1000 + i for p in range(3) for i in range(per_producer))
    assert sorted(received) == expected
    assert len(queue) == 0