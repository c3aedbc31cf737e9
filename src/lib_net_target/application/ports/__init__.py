"""Protocols the network target depends on."""

from __future__ import annotations

from .connector import ConnectorPort, SocketHandle
from .reporter import ErrorReporterPort
from .sync import LockFactory

__all__ = ["ConnectorPort", "ErrorReporterPort", "LockFactory", "SocketHandle"]
