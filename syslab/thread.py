"""A named worker thread with start, stop, join and detach controls."""

from __future__ import annotations

import itertools
import threading
from typing import Any, Callable

_numbers = itertools.count(1)


class Thread:
    """Runs ``func`` on its own thread; unnamed threads are called ``thread-N``."""

    def __init__(self, func: Callable[[], Any], name: str | None = None) -> None:
        self.func = func
        self.name = name if name is not None else f"thread-{next(_numbers)}"
        self.result: Any = None
        self._thread: threading.Thread | None = None
        self._running = False
        self._detached = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def detached(self) -> bool:
        return self._detached

    def _routine(self) -> None:
        self.result = self.func()

    def start(self) -> bool:
        """Start the thread; False if it is already running or cannot start."""
        if self._running:
            return False
        thread = threading.Thread(target=self._routine, name=self.name, daemon=True)
        try:
            thread.start()
        except RuntimeError:
            return False
        self._thread = thread
        self._running = True
        return True

    def stop(self) -> bool:
        """Mark a running thread as stopped; False if it was not running.

        Python threads cannot be cancelled from outside, so the function
        itself runs on to completion.
        """
        if not self._running:
            return False
        self._running = False
        return True

    def join(self) -> bool:
        """Wait for the thread to finish; False if detached or never started."""
        if self._detached or self._thread is None:
            return False
        self._thread.join()
        return True

    def detach(self) -> None:
        """Detach the thread so it can no longer be joined."""
        if self._detached:
            return
        self._detached = True