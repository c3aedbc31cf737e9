"""Composition helpers that wire network targets to their default adapters.

Purpose
-------
Give host applications a one-call way to obtain a ready :class:`NetworkTarget`
without importing the adapter layer, and keep the metadata banner used by the
CLI in one place.

Contents
--------
* :func:`create_target` - construct a closed target with default collaborators.
* :func:`open_target` - construct and open in one step.
* :func:`target_from_settings` - build from :class:`TargetSettings`.
* :func:`summary_info` - metadata banner shown by ``lib_net_target info``.

System Role
-----------
Composition root. Policy lives in :mod:`lib_net_target.application.target`;
this module only decides which adapters it talks to.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from .adapters import LoggingErrorReporter, SocketConnector
from .application.ports import ConnectorPort, ErrorReporterPort, LockFactory
from .application.target import DEFAULT_SEND_FLAGS, NetworkTarget
from .domain import AddressFamily, TargetKind, Transport, get_messages

if TYPE_CHECKING:
    from .config import TargetSettings


def create_target(
    destination: str | tuple,
    port: int | str,
    *,
    kind: TargetKind | None = None,
    connector: ConnectorPort | None = None,
    reporter: ErrorReporterPort | None = None,
    connect_timeout: float | None = None,
    locale: str | None = None,
    lock_factory: LockFactory = threading.Lock,
    send_flags: int = DEFAULT_SEND_FLAGS,
) -> NetworkTarget:
    """Return a closed target wired to :class:`SocketConnector` and a logging reporter.

    Examples
    --------
    >>> target = create_target("127.0.0.1", 8125)
    >>> target.is_open
    False
    """
    return NetworkTarget(
        destination,
        port,
        kind=kind,
        connector=connector or SocketConnector(timeout=connect_timeout),
        reporter=reporter or LoggingErrorReporter(),
        lock_factory=lock_factory,
        send_flags=send_flags,
        messages=get_messages(locale),
    )


def open_target(
    destination: str | tuple,
    port: int | str,
    *,
    transport: Transport | str = Transport.UDP,
    family: AddressFamily | str = AddressFamily.IPV4,
    **options: object,
) -> NetworkTarget | None:
    """Create a target and open it; ``None`` when the connection attempt fails.

    ``options`` are forwarded to :func:`create_target`. A target whose open
    failed is destroyed before returning.
    """
    kind = TargetKind.parse(transport, family)
    target = create_target(destination, port, kind=kind, **options)  # type: ignore[arg-type]
    if target.open(kind.family, kind.transport) is None:
        target.destroy()
        return None
    return target


def target_from_settings(settings: TargetSettings, **options: object) -> NetworkTarget:
    """Build a closed target from environment-derived :class:`TargetSettings`."""
    options.setdefault("connect_timeout", settings.connect_timeout)
    options.setdefault("locale", settings.locale)
    return create_target(settings.host, settings.port, kind=settings.kind, **options)  # type: ignore[arg-type]


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = ["create_target", "open_target", "summary_info", "target_from_settings"]
