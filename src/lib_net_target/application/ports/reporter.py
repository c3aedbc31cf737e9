"""Port describing how targets report network failures."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ErrorReporterPort(Protocol):
    """Receive the failures a target detects while sending."""

    def network_closed(self, message: str) -> None:
        """Report that the remote end closed a stream connection."""

    def send_failure(self, message: str, code: int | None, code_type: str) -> None:
        """Report that the operating system rejected a send with ``code``."""


__all__ = ["ErrorReporterPort"]
