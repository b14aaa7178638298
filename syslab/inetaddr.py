"""IPv4 endpoint addresses."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

ANY_ADDRESS = "0.0.0.0"


@dataclass(frozen=True)
class InetAddr:
    """An IPv4 address and port; equal when both match."""

    ip: str
    port: int

    def __post_init__(self) -> None:
        ipaddress.IPv4Address(self.ip)
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")

    @classmethod
    def from_sockaddr(cls, sockaddr: tuple) -> InetAddr:
        """Build from an ``(ip, port)`` pair as returned by the socket module."""
        ip, port = sockaddr[0], sockaddr[1]
        return cls(ip, int(port))

    @classmethod
    def any(cls, port: int) -> InetAddr:
        """The wildcard address on the given port."""
        return cls(ANY_ADDRESS, port)

    def sockaddr(self) -> tuple[str, int]:
        """The ``(ip, port)`` pair for the socket module."""
        return (self.ip, self.port)

    def __str__(self) -> str:
        return self.ip