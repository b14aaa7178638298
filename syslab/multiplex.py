"""Single-threaded TCP servers that multiplex connections with select, poll or epoll."""

from __future__ import annotations

import argparse
import select
from abc import ABC, abstractmethod
from typing import Any

from .log import LogLevel, logger
from .tcpsocket import ExitCode, SocketError, TcpSocket

SLOTS = 64


class _MultiplexServer(ABC):
    """Accepts connections and logs whatever the clients send."""

    default_timeout: float = 10.0
    max_connections: int | None = SLOTS - 1

    def __init__(self, port: int) -> None:
        self._listener = TcpSocket()
        try:
            self._listener.init_server(port)
            self._setup()
        except Exception:
            self._listener.close()
            raise
        self._connections: dict[int, TcpSocket] = {}
        self._running = False
        self.timeout = self.default_timeout
        self.received: list[str] = []

    @property
    def port(self) -> int:
        """The port the listener is bound to."""
        return self._listener.local_port

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    @property
    def running(self) -> bool:
        return self._running

    def _setup(self) -> None:
        """Prepare the readiness mechanism once the listener exists."""

    def _watch(self, fd: int) -> None:
        """Start watching a new connection."""

    def _forget(self, fd: int) -> None:
        """Stop watching a connection about to be closed."""

    def _teardown(self) -> None:
        """Release the readiness mechanism."""

    @abstractmethod
    def _wait(self, timeout: float | None) -> list[int]:
        """Return the descriptors that are ready to read."""

    def serve_once(self, timeout: float | None = None) -> int:
        """Wait once for readiness and handle it; return the number of ready descriptors."""
        ready = self._wait(self.timeout if timeout is None else timeout)
        if not ready:
            logger.log(LogLevel.ERROR, "time out")
            return 0
        for fd in ready:
            self._dispatch(fd)
        return len(ready)

    def _dispatch(self, fd: int) -> None:
        if fd == self._listener.fileno():
            self._accept()
        elif fd in self._connections:
            self._receive(fd)

    def _accept(self) -> None:
        conn, _peer = self._listener.accept()
        logger.log(LogLevel.DEBUG, "new connect")
        if self.max_connections is not None and len(self._connections) >= self.max_connections:
            logger.log(LogLevel.ERROR, "error: no free slot")
            conn.close()
            return
        fd = conn.fileno()
        self._connections[fd] = conn
        self._watch(fd)

    def _drop(self, fd: int) -> None:
        conn = self._connections.pop(fd)
        self._forget(fd)
        conn.close()

    def _receive(self, fd: int) -> None:
        conn = self._connections[fd]
        try:
            text = conn.recv()
        except OSError as exc:
            logger.log(LogLevel.ERROR, "read error: ", exc)
            self._drop(fd)
            return
        if not text:
            logger.log(LogLevel.DEBUG, "quit")
            self._drop(fd)
            return
        logger.log(LogLevel.DEBUG, "read success message is:", text)
        self.received.append(text)

    def start(self) -> None:
        """Serve until ``stop`` is called."""
        self._running = True
        while self._running:
            try:
                self.serve_once()
            except SocketError:
                self._running = False
                raise
            except OSError as exc:
                logger.log(LogLevel.ERROR, "select error: ", exc)

    def stop(self) -> None:
        """Ask the serving loop to finish after its current wait."""
        self._running = False

    def close(self) -> None:
        """Close every connection, the listener and the readiness mechanism."""
        for fd in list(self._connections):
            self._drop(fd)
        self._teardown()
        self._listener.close()

    def __enter__(self) -> _MultiplexServer:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class SelectServer(_MultiplexServer):
    """Rebuilds the read set before every ``select`` call."""

    default_timeout = 2.000002

    def __init__(self, port: int) -> None:
        super().__init__(port)

    def serve_once(self, timeout: float | None = None) -> int:
        """Wait once with ``select`` and handle what became readable."""
        return super().serve_once(timeout)

    def start(self) -> None:
        """Serve until ``stop`` is called."""
        super().start()

    def stop(self) -> None:
        """Ask the serving loop to finish after its current wait."""
        super().stop()

    def _wait(self, timeout: float | None) -> list[int]:
        fds = [self._listener.fileno(), *self._connections]
        readable, _, _ = select.select(fds, [], [], timeout)
        return list(readable)


class PollServer(_MultiplexServer):
    """Keeps its descriptors registered with a ``poll`` object."""

    default_timeout = 10.0

    def __init__(self, port: int) -> None:
        super().__init__(port)

    def serve_once(self, timeout: float | None = None) -> int:
        """Wait once with ``poll`` and handle what became readable."""
        return super().serve_once(timeout)

    def start(self) -> None:
        """Serve until ``stop`` is called."""
        super().start()

    def stop(self) -> None:
        """Ask the serving loop to finish after its current wait."""
        super().stop()

    def _setup(self) -> None:
        self._poller = select.poll()
        self._poller.register(self._listener.fileno(), select.POLLIN)

    def _watch(self, fd: int) -> None:
        self._poller.register(fd, select.POLLIN)

    def _forget(self, fd: int) -> None:
        self._poller.unregister(fd)

    def _wait(self, timeout: float | None) -> list[int]:
        millis = None if timeout is None else int(timeout * 1000)
        mask = select.POLLIN | select.POLLHUP | select.POLLERR
        return [fd for fd, events in self._poller.poll(millis) if events & mask]


class EpollServer(_MultiplexServer):
    """Lets the kernel track registered descriptors with ``epoll``."""

    default_timeout = 10.0
    max_connections = None

    def __init__(self, port: int) -> None:
        super().__init__(port)

    def serve_once(self, timeout: float | None = None) -> int:
        """Wait once with ``epoll`` and handle what became readable."""
        return super().serve_once(timeout)

    def start(self) -> None:
        """Serve until ``stop`` is called."""
        super().start()

    def stop(self) -> None:
        """Ask the serving loop to finish after its current wait."""
        super().stop()

    def _setup(self) -> None:
        if not hasattr(select, "epoll"):
            raise OSError("epoll is not available on this platform")
        self._epoll = select.epoll()
        self._epoll.register(self._listener.fileno(), select.EPOLLIN)

    def _watch(self, fd: int) -> None:
        self._epoll.register(fd, select.EPOLLIN)

    def _forget(self, fd: int) -> None:
        self._epoll.unregister(fd)

    def _teardown(self) -> None:
        self._epoll.close()

    def _wait(self, timeout: float | None) -> list[int]:
        mask = select.EPOLLIN | select.EPOLLHUP | select.EPOLLERR
        events = self._epoll.poll(-1 if timeout is None else timeout, SLOTS)
        return [fd for fd, flags in events if flags & mask]


SERVERS = {"select": SelectServer, "poll": PollServer, "epoll": EpollServer}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="multiplexserver",
                                     description="Log what TCP clients send.")
    parser.add_argument("port", type=int)
    parser.add_argument("--mode", choices=sorted(SERVERS), default="select")
    args = parser.parse_args(argv)
    try:
        server = SERVERS[args.mode](args.port)
    except SocketError as exc:
        logger.log(LogLevel.ERROR, exc)
        return int(exc.code)
    except OSError as exc:
        logger.log(LogLevel.ERROR, "create error: ", exc)
        return int(ExitCode.USE_ERROR)
    with server:
        try:
            server.start()
        except KeyboardInterrupt:
            server.stop()
    return int(ExitCode.OK)