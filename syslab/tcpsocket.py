"""A TCP socket with server and client set-up helpers."""

from __future__ import annotations

import enum
import errno
import socket
from typing import Any

from .inetaddr import InetAddr
from .log import LogLevel, logger

DEFAULT_BACKLOG = 16
RECV_SIZE = 1024


class ExitCode(enum.IntEnum):
    """Status codes reported by the network programs."""

    OK = 0
    SOCK_ERROR = 1
    BIND_ERROR = 2
    LISTEN_ERROR = 3
    ACCEPT_ERROR = 4
    FORK_ERROR = 5
    CIN_ERROR = 6
    USE_ERROR = 7
    CON_ERROR = 8
    RECV_ERROR = 9
    QUIT = 10


class SocketError(OSError):
    """A socket set-up step failed; ``code`` tells which one."""

    def __init__(self, code: ExitCode, message: str) -> None:
        super().__init__(message)
        self.code = code


class TcpSocket:
    """A stream socket used either as a listener or as a connection."""

    def __init__(self, sock: socket.socket | None = None) -> None:
        self._sock = sock

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise OSError(errno.EBADF, "socket is not open")
        return self._sock

    @property
    def local_port(self) -> int:
        """The port the socket is bound to."""
        return self._require().getsockname()[1]

    def create(self) -> None:
        """Open a new IPv4 stream socket."""
        try:
            self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "create error")
            raise SocketError(ExitCode.SOCK_ERROR, f"create error: {exc}") from exc
        logger.log(LogLevel.DEBUG, "create success")

    def bind(self, port: int) -> None:
        """Bind to the wildcard address on ``port``."""
        sock = self._require()
        address = InetAddr.any(port)
        try:
            sock.bind(address.sockaddr())
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "bind error")
            raise SocketError(ExitCode.BIND_ERROR, f"bind error: {exc}") from exc
        logger.log(LogLevel.DEBUG, "bind success")

    def listen(self, backlog: int = DEFAULT_BACKLOG) -> None:
        """Start accepting connections."""
        sock = self._require()
        try:
            sock.listen(backlog)
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "listen error")
            raise SocketError(ExitCode.LISTEN_ERROR, f"listen error: {exc}") from exc
        logger.log(LogLevel.DEBUG, "listen success")

    def init_server(self, port: int, backlog: int = DEFAULT_BACKLOG) -> None:
        """Create, bind and listen in one step."""
        self.create()
        self.bind(port)
        self.listen(backlog)

    def accept(self) -> tuple[TcpSocket, InetAddr]:
        """Accept one connection; return it with the peer's address."""
        sock = self._require()
        try:
            conn, peer = sock.accept()
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "accept error")
            raise SocketError(ExitCode.ACCEPT_ERROR, f"accept error: {exc}") from exc
        return TcpSocket(conn), InetAddr.from_sockaddr(peer)

    def recv(self) -> str:
        """Receive up to one buffer of text; an empty string means the peer closed."""
        data = self._require().recv(RECV_SIZE - 1)
        return data.decode("utf-8", errors="replace")

    def send(self, data: str | bytes) -> int:
        """Send text or bytes; return the number of bytes sent."""
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        return self._require().send(payload)

    def connect(self, ip: str, port: int) -> None:
        """Connect to ``ip:port``; raises OSError on failure."""
        address = InetAddr(ip, port)
        self._require().connect(address.sockaddr())

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def fileno(self) -> int:
        """The descriptor, or -1 if no socket is open."""
        return -1 if self._sock is None else self._sock.fileno()

    def __enter__(self) -> TcpSocket:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()