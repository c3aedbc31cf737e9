"""Socket-backed implementation of :class:`ConnectorPort`.

Purpose
-------
Perform the actual OS connect for a target: resolve the destination for the
requested family and socket type, try each returned address in order, and hand
back the first connected socket.

Contents
--------
* :class:`SocketConnector` - resolver + connect loop with optional timeout.

System Role
-----------
Default connector wired into :class:`lib_net_target.NetworkTarget`. Failures
are never raised; they are logged at DEBUG and reported as ``None`` so the
target can record the closed sentinel and leave escalation to its caller.
"""

from __future__ import annotations

import logging
import socket
from typing import Any, Callable, Sequence

from lib_net_target.application.ports.connector import ConnectorPort, SocketHandle
from lib_net_target.domain.transport import AddressFamily, Transport

LOGGER = logging.getLogger(__name__)

Resolver = Callable[..., Sequence[tuple[Any, ...]]]
SocketFactory = Callable[[int, int, int], socket.socket]


class SocketConnector(ConnectorPort):
    """Connect sockets using :func:`socket.getaddrinfo` for resolution."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        resolver: Resolver | None = None,
        socket_factory: SocketFactory | None = None,
    ) -> None:
        """Configure the connector.

        Parameters
        ----------
        timeout:
            Seconds allowed for each connect attempt. ``None`` blocks until
            the OS gives up. The returned socket is always left in blocking
            mode so sends are not subject to the timeout.
        resolver:
            Replacement for :func:`socket.getaddrinfo`, mainly for tests.
        socket_factory:
            Replacement for :class:`socket.socket`, mainly for tests.
        """
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = timeout
        self._resolver = resolver or socket.getaddrinfo
        self._socket_factory = socket_factory or socket.socket

    def connect(
        self,
        destination: str | tuple,
        port: int,
        family: AddressFamily,
        transport: Transport,
    ) -> SocketHandle | None:
        """Return a connected socket or ``None`` when every attempt failed.

        A pre-resolved address tuple skips resolution and is connected as
        given, with its port replaced by ``port``; trailing IPv6 items
        (flow info, scope id) are kept.
        """
        if isinstance(destination, tuple):
            host = destination[0]
            address = (host, port, *destination[2:])
            candidates: Sequence[tuple[Any, ...]] = [(family.socket_family, transport.socket_type, 0, "", address)]
        else:
            host = destination
            try:
                candidates = self._resolver(host, port, family.socket_family, transport.socket_type)
            except (OSError, UnicodeError) as exc:
                LOGGER.debug("Resolving %s:%s (%s/%s) failed: %s", host, port, transport.value, family.value, exc)
                return None

        for af, socktype, proto, _canonname, address in candidates:
            sock: socket.socket | None = None
            try:
                sock = self._socket_factory(af, socktype, proto)
                if self._timeout is not None:
                    sock.settimeout(self._timeout)
                sock.connect(address)
                sock.settimeout(None)
            except OSError as exc:
                LOGGER.debug("Connecting to %s via %s failed: %s", host, address, exc)
                if sock is not None:
                    sock.close()
                continue
            LOGGER.debug("Connected %s socket to %s", transport.value, address)
            return sock

        LOGGER.debug("No usable address for %s:%s (%s/%s)", host, port, transport.value, family.value)
        return None


__all__ = ["SocketConnector"]
