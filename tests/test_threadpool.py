import threading

import pytest

from syslab.threadpool import ThreadPool


def test_enqueue_before_start_is_refused():
    pool = ThreadPool(2)
    assert pool.enqueue(lambda: None) is False


def test_all_tasks_run_before_workers_exit():
    pool = ThreadPool(3)
    pool.start()
    done = []
    lock = threading.Lock()

    def make(i):
        def task():
            with lock:
                done.append(i)
        return task

    for i in range(50):
        assert pool.enqueue(make(i)) is True
    pool.stop()
    pool.join()
    assert sorted(done) == list(range(50))


def test_enqueue_after_stop_is_refused():
    pool = ThreadPool(2)
    pool.start()
    pool.stop()
    pool.join()
    assert pool.running is False
    assert pool.enqueue(lambda: None) is False


def test_single_worker_keeps_fifo_order():
    pool = ThreadPool(1)
    pool.start()
    order = []
    for i in range(10):
        pool.enqueue(lambda i=i: order.append(i))
    pool.stop()
    pool.join()
    assert order == list(range(10))


def test_failing_task_does_not_kill_worker():
    pool = ThreadPool(1)
    pool.start()
    results = []

    def boom():
        raise RuntimeError("boom")

    pool.enqueue(boom)
    pool.enqueue(lambda: results.append("ok"))
    pool.stop()
    pool.join()
    assert results == ["ok"]


def test_tasks_run_on_several_workers():
    pool = ThreadPool(2)
    pool.start()
    barrier = threading.Barrier(2, timeout=5)
    names = set()
    lock = threading.Lock()

    def task():
        barrier.wait()
        with lock:
            names.add(threading.current_thread().name)

    assert pool.enqueue(task) is True
    assert pool.enqueue(task) is True
    pool.stop()
    pool.join()
    assert pool.running is False
    assert len(names) == 2


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        ThreadPool(0)


def test_instance_is_shared_and_running():
    first = ThreadPool.instance()
    second = ThreadPool.instance()
    assert first is second
    assert first.running is True
    seen = threading.Event()
    assert first.enqueue(seen.set) is True
    assert seen.wait(5) is True