"""A fixed-size pool of worker threads consuming a task queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable

from .log import LogLevel, logger
from .thread import Thread

DEFAULT_SIZE = 5


class ThreadPool:
    """Workers take tasks in FIFO order; stopping drains the queue first."""

    _instance: ThreadPool | None = None
    _instance_lock = threading.Lock()

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size < 1:
            raise ValueError(f"pool size must be positive: {size}")
        self.size = size
        self._tasks: deque[Callable[[], Any]] = deque()
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        self._running = False
        self._sleeping = 0
        self._workers = [Thread(self._work) for _ in range(size)]

    @property
    def running(self) -> bool:
        return self._running

    @classmethod
    def instance(cls) -> ThreadPool:
        """Return the shared pool, creating and starting it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    pool = cls()
                    pool.start()
                    cls._instance = pool
        return cls._instance

    def _work(self) -> None:
        while True:
            with self._cond:
                while not self._tasks and self._running:
                    self._sleeping += 1
                    self._cond.wait()
                    self._sleeping -= 1
                if not self._running and not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception as exc:
                logger.log(LogLevel.ERROR, "task failed: ", exc)

    def start(self) -> None:
        """Start every worker; does nothing if already running."""
        if self._running:
            return
        self._running = True
        for worker in self._workers:
            worker.start()

    def stop(self) -> None:
        """Refuse new tasks and wake idle workers so they exit once the queue is empty."""
        if not self._running:
            return
        with self._cond:
            self._running = False
            if self._sleeping:
                self._cond.notify_all()

    def join(self) -> None:
        """Wait for every worker to exit."""
        for worker in self._workers:
            worker.join()

    def enqueue(self, task: Callable[[], Any]) -> bool:
        """Queue a task; False if the pool is not running."""
        with self._cond:
            if not self._running:
                return False
            self._tasks.append(task)
            if self._sleeping == len(self._workers):
                self._cond.notify()
            return True