"""Transport and address-family enums for network targets.

Purpose
-------
Give the rest of the package a domain vocabulary for the two socket choices a
target makes once and keeps for its lifetime: stream versus datagram and IPv4
versus IPv6.

Contents
--------
* :class:`AddressFamily` - IPv4/IPv6 with the matching ``socket`` constants.
* :class:`Transport` - TCP/UDP with the matching socket types.
* :class:`TargetKind` - frozen pairing used to pin a target's configuration.
* ``TCP4`` / ``TCP6`` / ``UDP4`` / ``UDP6`` - the four named kinds.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from enum import Enum


class AddressFamily(Enum):
    """Address family a target connects with."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def socket_family(self) -> int:
        """Return the :mod:`socket` constant (``AF_INET``/``AF_INET6``)."""

        return _FAMILY_TABLE[self]

    @classmethod
    def from_name(cls, name: str | "AddressFamily") -> "AddressFamily":
        """Parse user input such as ``"ipv6"``, ``"6"`` or ``"inet6"``.

        Examples
        --------
        >>> AddressFamily.from_name("IPv6")
        <AddressFamily.IPV6: 'ipv6'>
        >>> AddressFamily.from_name("4")
        <AddressFamily.IPV4: 'ipv4'>
        """
        if isinstance(name, AddressFamily):
            return name
        normalized = name.strip().lower()
        try:
            return _FAMILY_ALIASES[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown address family: {name!r}") from exc


class Transport(Enum):
    """Transport protocol a target sends over."""

    TCP = "tcp"
    UDP = "udp"

    @property
    def socket_type(self) -> int:
        """Return the :mod:`socket` constant (``SOCK_STREAM``/``SOCK_DGRAM``)."""

        return socket.SOCK_STREAM if self is Transport.TCP else socket.SOCK_DGRAM

    @property
    def is_stream(self) -> bool:
        return self is Transport.TCP

    @classmethod
    def from_name(cls, name: str | "Transport") -> "Transport":
        """Parse ``"tcp"``/``"stream"`` or ``"udp"``/``"datagram"``.

        Examples
        --------
        >>> Transport.from_name("Datagram")
        <Transport.UDP: 'udp'>
        """
        if isinstance(name, Transport):
            return name
        normalized = name.strip().lower()
        try:
            return _TRANSPORT_ALIASES[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown transport: {name!r}") from exc


@dataclass(slots=True, frozen=True)
class TargetKind:
    """Transport/family pair fixed for a target once it is first opened."""

    transport: Transport
    family: AddressFamily

    @property
    def label(self) -> str:
        """Return the short name used in logs, e.g. ``"tcp4"``.

        Examples
        --------
        >>> TargetKind(Transport.UDP, AddressFamily.IPV6).label
        'udp6'
        """
        suffix = "4" if self.family is AddressFamily.IPV4 else "6"
        return f"{self.transport.value}{suffix}"

    @classmethod
    def parse(cls, transport: str | Transport, family: str | AddressFamily) -> "TargetKind":
        """Build a kind from loosely typed transport and family inputs."""

        return cls(Transport.from_name(transport), AddressFamily.from_name(family))


_FAMILY_TABLE = {
    AddressFamily.IPV4: socket.AF_INET,
    AddressFamily.IPV6: socket.AF_INET6,
}

_FAMILY_ALIASES = {
    "ipv4": AddressFamily.IPV4,
    "4": AddressFamily.IPV4,
    "inet": AddressFamily.IPV4,
    "af_inet": AddressFamily.IPV4,
    "ipv6": AddressFamily.IPV6,
    "6": AddressFamily.IPV6,
    "inet6": AddressFamily.IPV6,
    "af_inet6": AddressFamily.IPV6,
}

_TRANSPORT_ALIASES = {
    "tcp": Transport.TCP,
    "stream": Transport.TCP,
    "udp": Transport.UDP,
    "datagram": Transport.UDP,
    "dgram": Transport.UDP,
}

TCP4 = TargetKind(Transport.TCP, AddressFamily.IPV4)
TCP6 = TargetKind(Transport.TCP, AddressFamily.IPV6)
UDP4 = TargetKind(Transport.UDP, AddressFamily.IPV4)
UDP6 = TargetKind(Transport.UDP, AddressFamily.IPV6)


__all__ = ["AddressFamily", "TCP4", "TCP6", "TargetKind", "Transport", "UDP4", "UDP6"]
