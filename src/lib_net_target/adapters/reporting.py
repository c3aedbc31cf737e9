"""Error reporters implementing :class:`ErrorReporterPort`.

Purpose
-------
Give targets somewhere to send the failures they detect: the process log by
default, or a per-thread "last error" slot callers can query after a failed
send.

Contents
--------
* :class:`LoggingErrorReporter` - writes reports to :mod:`logging`.
* :class:`ThreadLocalErrorReporter` - remembers the last failure per thread.
"""

from __future__ import annotations

import logging
import threading

from lib_net_target.application.ports.reporter import ErrorReporterPort
from lib_net_target.domain.errors import ErrorKind, NetworkError

LOGGER = logging.getLogger(__name__)


class LoggingErrorReporter(ErrorReporterPort):
    """Log reported failures at a configurable level."""

    def __init__(self, *, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self._logger = logger or LOGGER
        self._level = level

    def network_closed(self, message: str) -> None:
        self._logger.log(self._level, NetworkError(ErrorKind.NETWORK_CLOSED, message).describe())

    def send_failure(self, message: str, code: int | None, code_type: str) -> None:
        error = NetworkError(ErrorKind.SOCKET_SEND_FAILURE, message, code, code_type)
        self._logger.log(self._level, error.describe())


class ThreadLocalErrorReporter(ErrorReporterPort):
    """Keep the most recent :class:`NetworkError` for each calling thread.

    Reports can additionally be forwarded to ``delegate`` (for example a
    :class:`LoggingErrorReporter`).

    Examples
    --------
    >>> reporter = ThreadLocalErrorReporter()
    >>> reporter.last_error() is None
    True
    >>> reporter.send_failure("send failed", 32, "errno")
    >>> reporter.last_error().code
    32
    >>> reporter.clear()
    >>> reporter.last_error() is None
    True
    """

    def __init__(self, *, delegate: ErrorReporterPort | None = None) -> None:
        self._local = threading.local()
        self._delegate = delegate

    def network_closed(self, message: str) -> None:
        self._local.error = NetworkError(ErrorKind.NETWORK_CLOSED, message)
        if self._delegate is not None:
            self._delegate.network_closed(message)

    def send_failure(self, message: str, code: int | None, code_type: str) -> None:
        self._local.error = NetworkError(ErrorKind.SOCKET_SEND_FAILURE, message, code, code_type)
        if self._delegate is not None:
            self._delegate.send_failure(message, code, code_type)

    def last_error(self) -> NetworkError | None:
        """Return the last failure reported on the current thread."""

        return getattr(self._local, "error", None)

    def clear(self) -> None:
        """Forget the current thread's last failure."""

        self._local.error = None


__all__ = ["LoggingErrorReporter", "ThreadLocalErrorReporter"]
