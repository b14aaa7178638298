"""An interactive UDP client that prints each reply."""

from __future__ import annotations

import socket
import sys
from typing import Any

from .inetaddr import InetAddr

BUFFER_SIZE = 1024


class UdpClient:
    """Sends a datagram to one server and waits for its answer."""

    def __init__(self, ip: str, port: int) -> None:
        self.server = InetAddr(ip, port)
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def request(self, text: str) -> str:
        """Send ``text`` and return the reply."""
        self._sock.sendto(text.encode("utf-8"), self.server.sockaddr())
        data, _ = self._sock.recvfrom(BUFFER_SIZE)
        return data.decode("utf-8", errors="replace")

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> UdpClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("usage: udpclient <server-ip> <server-port>")
        return 1
    try:
        client = UdpClient(args[0], int(args[1]))
    except ValueError as exc:
        print(f"bad address: {exc}")
        return 1
    except OSError as exc:
        print(f"socket error: {exc}")
        return 2
    with client:
        while True:
            print("input:")
            line = sys.stdin.readline()
            if not line:
                break
            print(client.request(line.rstrip("\n")))
    return 0