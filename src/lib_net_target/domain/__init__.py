"""Domain values shared by targets, ports and adapters."""

from __future__ import annotations

from .errors import ErrorKind, NetworkError
from .messages import CATALOGUE, Messages, get_messages
from .results import SendOutcome, SendResult
from .transport import TCP4, TCP6, UDP4, UDP6, AddressFamily, TargetKind, Transport

__all__ = [
    "AddressFamily",
    "CATALOGUE",
    "ErrorKind",
    "Messages",
    "NetworkError",
    "SendOutcome",
    "SendResult",
    "TCP4",
    "TCP6",
    "TargetKind",
    "Transport",
    "UDP4",
    "UDP6",
    "get_messages",
]
