"""Send results returned by network targets.

Purpose
-------
Replace out-of-band error signalling with a value callers can branch on: every
send reports whether the whole message went out, the peer closed the stream,
or the operating system rejected the write.

Contents
--------
* :class:`SendOutcome` - discriminator for the three possible endings.
* :class:`SendResult` - immutable result with byte count and OS error code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SendOutcome(Enum):
    """How a send operation ended."""

    SENT = "sent"
    PEER_CLOSED = "peer_closed"
    SEND_FAILED = "send_failed"


@dataclass(slots=True, frozen=True)
class SendResult:
    """Outcome of a single ``send_*`` call on a target.

    Attributes
    ----------
    outcome:
        :class:`SendOutcome` describing how the call ended.
    bytes_sent:
        Number of bytes handed to the operating system before the call
        returned. Equals the requested length on success.
    error_code:
        ``errno`` of the failing send for :attr:`SendOutcome.SEND_FAILED`,
        otherwise ``None``.

    Examples
    --------
    >>> result = SendResult.sent(5)
    >>> bool(result), result.code
    (True, 1)
    >>> SendResult.send_failed(32).code
    -1
    """

    outcome: SendOutcome
    bytes_sent: int = 0
    error_code: int | None = None

    def __post_init__(self) -> None:
        if self.bytes_sent < 0:
            raise ValueError("bytes_sent must not be negative")
        if self.outcome is not SendOutcome.SEND_FAILED and self.error_code is not None:
            raise ValueError("error_code is only meaningful for failed sends")

    @property
    def ok(self) -> bool:
        """Return ``True`` when the entire message was sent."""

        return self.outcome is SendOutcome.SENT

    @property
    def code(self) -> int:
        """Return the integer status used by callers expecting ``1``/``-1``."""

        return 1 if self.ok else -1

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def sent(cls, bytes_sent: int) -> "SendResult":
        return cls(SendOutcome.SENT, bytes_sent)

    @classmethod
    def peer_closed(cls, bytes_sent: int = 0) -> "SendResult":
        return cls(SendOutcome.PEER_CLOSED, bytes_sent)

    @classmethod
    def send_failed(cls, error_code: int | None, bytes_sent: int = 0) -> "SendResult":
        return cls(SendOutcome.SEND_FAILED, bytes_sent, error_code)


__all__ = ["SendOutcome", "SendResult"]
