"""A pool of worker processes fed task codes through pipes."""

from __future__ import annotations

import argparse
import functools
import itertools
import multiprocessing
import os
import random
import struct
import sys
from dataclasses import dataclass
from multiprocessing.connection import Connection
from typing import Any, Callable, Iterator

CODE = struct.Struct("i")
DEFAULT_SIZE = 5
DEFAULT_ROUNDS = 3

Task = Callable[[], Any]


def _context() -> Any:
    methods = multiprocessing.get_all_start_methods()
    return multiprocessing.get_context("fork" if "fork" in methods else None)


class TaskRegistry:
    """Tasks addressed by their registration order."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._tasks: list[Task] = []
        self._rng = rng if rng is not None else random.Random()

    def register(self, task: Task) -> int:
        """Add a task and return its code."""
        self._tasks.append(task)
        return len(self._tasks) - 1

    def pick(self) -> int:
        """Choose a random task code."""
        if not self._tasks:
            raise ValueError("no tasks registered")
        return self._rng.randrange(len(self._tasks))

    def execute(self, code: int) -> Any:
        """Run the task with this code."""
        if not 0 <= code < len(self._tasks):
            raise IndexError(f"unknown task code: {code}")
        return self._tasks[code]()

    def __len__(self) -> int:
        return len(self._tasks)


def _announce(number: int) -> None:
    print(f"you ran task {number}")


def default_registry() -> TaskRegistry:
    """A registry holding the three demo tasks."""
    registry = TaskRegistry()
    for number in (1, 2, 3):
        registry.register(functools.partial(_announce, number))
    return registry


@dataclass
class Channel:
    """The write end of a pipe and the worker process reading from it."""

    conn: Connection
    process: Any

    @property
    def fd(self) -> int:
        return self.conn.fileno()

    @property
    def pid(self) -> int:
        return self.process.pid

    def send(self, code: int) -> int:
        """Write a task code; return the number of bytes written."""
        data = CODE.pack(code)
        self.conn.send_bytes(data)
        return len(data)

    def close(self) -> None:
        self.conn.close()

    def wait(self) -> int:
        """Reap the worker and return its exit code."""
        self.process.join()
        return self.process.exitcode


def _read_codes(reader: Connection) -> Iterator[int]:
    while True:
        try:
            data = reader.recv_bytes()
        except EOFError:
            return
        if len(data) != CODE.size:
            continue
        yield CODE.unpack(data)[0]


def _work(reader: Connection, registry: TaskRegistry) -> None:
    for code in _read_codes(reader):
        print(f"process {os.getpid()} got code {code}")
        try:
            registry.execute(code)
        except Exception as exc:
            print(f"task {code} failed: {exc}")
    print("worker exits")


def _worker_main(reader: Connection, inherited: list[Connection],
                 registry: TaskRegistry) -> None:
    for conn in inherited:
        conn.close()
    try:
        _work(reader, registry)
    finally:
        reader.close()
        sys.stdout.flush()


class ProcessPool:
    """Starts workers and hands out task codes round-robin."""

    def __init__(self, size: int = DEFAULT_SIZE, registry: TaskRegistry | None = None) -> None:
        if size < 1:
            raise ValueError(f"pool size must be positive: {size}")
        self.size = size
        self.registry = registry if registry is not None else default_registry()
        self._channels: list[Channel] = []
        self._order: Iterator[Channel] = iter(())

    @property
    def channels(self) -> list[Channel]:
        return list(self._channels)

    def create(self) -> None:
        """Start the workers, each reading from its own pipe."""
        if self._channels:
            raise RuntimeError("pool already created")
        ctx = _context()
        for _ in range(self.size):
            reader, writer = ctx.Pipe(duplex=False)
            inherited = [writer, *(channel.conn for channel in self._channels)]
            sys.stdout.flush()
            process = ctx.Process(target=_worker_main,
                                  args=(reader, inherited, self.registry))
            process.start()
            reader.close()
            self._channels.append(Channel(writer, process))
        self._order = itertools.cycle(self._channels)

    def run(self) -> tuple[Channel, int]:
        """Send a random task code to the next worker; return the channel and code."""
        if not self._channels:
            raise RuntimeError("pool has no workers; call create() first")
        channel = next(self._order)
        print(f"selected channel: {channel.pid}")
        code = self.registry.pick()
        channel.send(code)
        print(f"sent code: {code}")
        return channel, code

    def close_and_wait(self) -> list[int]:
        """Close every pipe, then reap every worker; return their exit codes."""
        for channel in self._channels:
            channel.close()
        codes = [channel.wait() for channel in self._channels]
        self._channels = []
        self._order = iter(())
        return codes


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="processpool",
                                     description="Dispatch demo tasks to worker processes.")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE)
    parser.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS)
    args = parser.parse_args(argv)
    pool = ProcessPool(args.size, default_registry())
    pool.create()
    try:
        for _ in range(args.rounds):
            pool.run()
    finally:
        pool.close_and_wait()
    return 0