"""Ports for the connection-establishment helper and the sockets it returns."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_net_target.domain.transport import AddressFamily, Transport


@runtime_checkable
class SocketHandle(Protocol):
    """Connected OS descriptor a target writes to."""

    def send(self, data: bytes, flags: int = 0, /) -> int: ...

    def recv(self, bufsize: int, flags: int = 0, /) -> bytes: ...

    def close(self) -> None: ...

    def fileno(self) -> int: ...


@runtime_checkable
class ConnectorPort(Protocol):
    """Open a connected socket to ``destination:port``."""

    def connect(
        self,
        destination: str | tuple,
        port: int,
        family: AddressFamily,
        transport: Transport,
    ) -> SocketHandle | None:
        """Return a connected handle, or ``None`` when the attempt failed."""


__all__ = ["ConnectorPort", "SocketHandle"]
