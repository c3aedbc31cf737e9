"""Reportable network failures.

The two conditions a target surfaces through its reporter: the peer closed a
stream connection, or the operating system rejected a send.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Category of a reported network failure."""

    NETWORK_CLOSED = "network_closed"
    SOCKET_SEND_FAILURE = "socket_send_failure"


@dataclass(slots=True, frozen=True)
class NetworkError:
    """Immutable record of a reported failure.

    Attributes
    ----------
    kind:
        :class:`ErrorKind` of the failure.
    message:
        Localised description supplied by the target.
    code:
        Operating-system error code for send failures, ``None`` otherwise.
    code_type:
        Label describing what ``code`` means (``"errno"`` for OS errors).
    """

    kind: ErrorKind
    message: str
    code: int | None = None
    code_type: str | None = None

    def describe(self) -> str:
        """Return a single-line description including the code when present.

        Examples
        --------
        >>> NetworkError(ErrorKind.NETWORK_CLOSED, "network connection was closed").describe()
        'network connection was closed'
        >>> NetworkError(ErrorKind.SOCKET_SEND_FAILURE, "send failed", 9, "errno").describe().startswith("send failed (errno=9")
        True
        """
        if self.code is None:
            return self.message
        label = self.code_type or "code"
        return f"{self.message} ({label}={self.code}: {os.strerror(self.code)})"


__all__ = ["ErrorKind", "NetworkError"]
