"""A bounded blocking queue for producers and consumers."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any

DEFAULT_CAPACITY = 5


class BlockQueue:
    """Producers block while it is full; consumers block while it is empty."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive: {capacity}")
        self.capacity = capacity
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)
        self._waiting_producers = 0
        self._waiting_consumers = 0

    def put(self, item: Any) -> None:
        """Append ``item``, waiting for room if the queue is full."""
        with self._lock:
            while len(self._items) >= self.capacity:
                self._waiting_producers += 1
                self._not_full.wait()
                self._waiting_producers -= 1
            self._items.append(item)
            if self._waiting_consumers:
                self._not_empty.notify()

    def take(self) -> Any:
        """Remove and return the oldest item, waiting if the queue is empty."""
        with self._lock:
            while not self._items:
                self._waiting_consumers += 1
                self._not_empty.wait()
                self._waiting_consumers -= 1
            item = self._items.popleft()
            if self._waiting_producers:
                self._not_full.notify()
            return item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)