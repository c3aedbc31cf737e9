"""Public package surface for thread-safe TCP/UDP network targets.

Host applications typically only need :func:`create_target` (or
:func:`open_target`) and the :class:`SendResult` values returned by
:meth:`NetworkTarget.send`.
"""

from __future__ import annotations

from .adapters import LoggingErrorReporter, SocketConnector, ThreadLocalErrorReporter
from .application import DEFAULT_SEND_FLAGS, NetworkTarget
from .domain import (
    TCP4,
    TCP6,
    UDP4,
    UDP6,
    AddressFamily,
    ErrorKind,
    NetworkError,
    SendOutcome,
    SendResult,
    TargetKind,
    Transport,
)
from .lib_net_target import create_target, open_target, summary_info, target_from_settings

__all__ = [
    "AddressFamily",
    "DEFAULT_SEND_FLAGS",
    "ErrorKind",
    "LoggingErrorReporter",
    "NetworkError",
    "NetworkTarget",
    "SendOutcome",
    "SendResult",
    "SocketConnector",
    "TCP4",
    "TCP6",
    "TargetKind",
    "ThreadLocalErrorReporter",
    "Transport",
    "UDP4",
    "UDP6",
    "create_target",
    "open_target",
    "summary_info",
    "target_from_settings",
]
