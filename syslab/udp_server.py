"""A UDP request/response server driven by a handler function."""

from __future__ import annotations

import argparse
import socket
from typing import Callable

from .dictionary import DEFAULT_PATH, Dictionary
from .inetaddr import InetAddr
from .log import LogLevel, logger
from .tcpsocket import ExitCode, SocketError

BUFFER_SIZE = 1024
POLL_INTERVAL = 0.2

Handler = Callable[[str, InetAddr], str]


class UdpServer:
    """Answers each datagram with ``handler(text, client)``."""

    def __init__(self, port: int, handler: Handler) -> None:
        self.port = port
        self.handler = handler
        self._sock: socket.socket | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def init(self) -> None:
        """Create the socket and bind it to the wildcard address."""
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            raise SocketError(ExitCode.SOCK_ERROR, f"socket error: {exc}") from exc
        try:
            sock.bind(InetAddr.any(self.port).sockaddr())
        except OSError as exc:
            sock.close()
            raise SocketError(ExitCode.BIND_ERROR, f"bind error: {exc}") from exc
        sock.settimeout(POLL_INTERVAL)
        self._sock = sock
        self.port = sock.getsockname()[1]

    def start(self) -> None:
        """Serve until ``stop`` is called; the socket is closed afterwards."""
        if self._sock is None:
            raise RuntimeError("server is not initialised; call init() first")
        sock = self._sock
        self._running = True
        try:
            while self._running:
                try:
                    data, peer = sock.recvfrom(BUFFER_SIZE - 1)
                except TimeoutError:
                    continue
                if not data:
                    continue
                text = data.decode("utf-8", errors="replace")
                print(text)
                result = self.handler(text, InetAddr.from_sockaddr(peer))
                payload = result.encode("utf-8")
                try:
                    sent = sock.sendto(payload, peer)
                except OSError as exc:
                    logger.log(LogLevel.ERROR, "sendto failed: ", exc)
                else:
                    print(f"{result} {sent}")
        finally:
            sock.close()
            self._sock = None
            self._running = False

    def stop(self) -> None:
        """Ask the serving loop to finish."""
        self._running = False


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="udpserver",
                                     description="Translate words sent over UDP.")
    parser.add_argument("port", type=int)
    parser.add_argument("--dictionary", default=DEFAULT_PATH)
    args = parser.parse_args(argv)
    dictionary = Dictionary(args.dictionary)
    try:
        dictionary.load()
    except OSError as exc:
        logger.log(LogLevel.WARNING, "cannot load dictionary: ", exc)
    server = UdpServer(args.port, dictionary.translate)
    server.init()
    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()
    return int(ExitCode.OK)