"""Parsing and formatting of IPv4/IPv6 socket addresses."""

from __future__ import annotations

import re
import socket
from dataclasses import dataclass


class AddressError(ValueError):
    """Raised when an address, port or protocol cannot be used."""


@dataclass(frozen=True)
class SocketAddress:
    """An IP address family, a textual host and a port."""

    family: socket.AddressFamily
    host: str
    port: int

    @property
    def sockaddr(self) -> tuple[str, int]:
        """The address in the form socket.connect and socket.bind expect."""
        return (self.host, self.port)


_ATOI = re.compile(r"\s*([+-]?\d+)")


def _parse_port(portstr: str) -> int:
    match = _ATOI.match(portstr)
    port = int(match.group(1)) & 0xFFFF if match else 0
    if port == 0:
        raise AddressError(f"invalid port: {portstr!r}")
    return port


def parse_address(addrstr: str, portstr: str) -> SocketAddress:
    """Parse a numeric IPv4 or IPv6 address and a port."""
    if addrstr is None or portstr is None:
        raise AddressError("address and port are required")
    port = _parse_port(portstr)
    for family in (socket.AF_INET, socket.AF_INET6):
        try:
            packed = socket.inet_pton(family, addrstr)
        except (OSError, ValueError):
            continue
        return SocketAddress(family, socket.inet_ntop(family, packed), port)
    raise AddressError(f"invalid address: {addrstr!r}")


def address_to_string(addr: SocketAddress) -> str:
    """Describe an address as 'IPv <version> <host> <port>'."""
    if addr.family == socket.AF_INET:
        version = 4
    elif addr.family == socket.AF_INET6:
        version = 6
    else:
        raise AddressError("unknown protocol family.")
    return f"IPv {version} {addr.host} {addr.port}"


def server_address(proto: str, portstr: str) -> SocketAddress:
    """Build the wildcard listening address for protocol 'v4' or 'v6'."""
    port = _parse_port(portstr)
    if proto == "v4":
        return SocketAddress(socket.AF_INET, "0.0.0.0", port)
    if proto == "v6":
        return SocketAddress(socket.AF_INET6, "::", port)
    raise AddressError(f"unknown protocol: {proto!r}")