"""Network target: one remote endpoint plus its live connection state.

Purpose
-------
Own a single connected socket to a collector and serialise every state change
and write on it, so concurrent callers never interleave partial writes or
observe a half-replaced descriptor.

Contents
--------
* :data:`DEFAULT_SEND_FLAGS` - flags passed to every send (suppresses SIGPIPE
  where the platform supports it).
* :class:`NetworkTarget` - open/reopen/close/destroy lifecycle plus the stream
  and datagram send paths.

System Role
-----------
Application-layer core. It talks to the operating system only through the
injected :class:`ConnectorPort` (connect) and the returned
:class:`SocketHandle` (send/recv/close), and reports failures through an
:class:`ErrorReporterPort`. The composition helpers in
:mod:`lib_net_target.lib_net_target` wire the default adapters.

Locking
-------
Every target owns exactly one lock. ``open``, ``reopen``, ``close``,
``is_open`` and both send paths hold it for their full duration; ``destroy``
is a teardown step and deliberately does not. Reporters are invoked after the
lock has been released.
"""

from __future__ import annotations

import errno
import logging
import select
import socket
import threading

from lib_net_target.application.ports.connector import ConnectorPort, SocketHandle
from lib_net_target.application.ports.reporter import ErrorReporterPort
from lib_net_target.application.ports.sync import LockFactory
from lib_net_target.domain.messages import Messages, get_messages
from lib_net_target.domain.results import SendOutcome, SendResult
from lib_net_target.domain.transport import AddressFamily, TargetKind, Transport

LOGGER = logging.getLogger(__name__)

DEFAULT_SEND_FLAGS: int = getattr(socket, "MSG_NOSIGNAL", 0)
"""Send flags used unless a target is configured otherwise."""

_DONTWAIT: int = getattr(socket, "MSG_DONTWAIT", 0)
_DRAIN_SIZE = 4096

Message = bytes | bytearray | memoryview | str


class NetworkTarget:
    """Single remote endpoint reached over TCP or UDP, IPv4 or IPv6.

    Construction leaves the target closed and performs no I/O. The transport
    and family are fixed by ``kind`` or, when omitted, by the first
    :meth:`open` call; asking for a different combination later raises
    :class:`ValueError`.

    Parameters
    ----------
    destination:
        Host name, address literal, or a pre-resolved address tuple.
    port:
        Remote port (1-65535). Numeric strings are accepted.
    connector:
        :class:`ConnectorPort` performing the actual connect.
    reporter:
        :class:`ErrorReporterPort` notified of peer closes and send failures.
    kind:
        Optional :class:`TargetKind` pinning transport and family up front.
    lock_factory:
        Callable creating the target's lock; :class:`threading.Lock` by default.
    send_flags:
        Flags passed to every ``send`` call.
    messages:
        Localised strings handed to ``reporter``; English by default.

    Examples
    --------
    >>> class NoConnect:
    ...     def connect(self, destination, port, family, transport):
    ...         return None
    >>> class Quiet:
    ...     def network_closed(self, message): pass
    ...     def send_failure(self, message, code, code_type): pass
    >>> target = NetworkTarget("collector.invalid", 8125, connector=NoConnect(), reporter=Quiet())
    >>> target.is_open
    False
    >>> target.open_udp4() is None
    True
    >>> target.kind.label
    'udp4'
    """

    def __init__(
        self,
        destination: str | tuple,
        port: int | str,
        *,
        connector: ConnectorPort,
        reporter: ErrorReporterPort,
        kind: TargetKind | None = None,
        lock_factory: LockFactory = threading.Lock,
        send_flags: int = DEFAULT_SEND_FLAGS,
        messages: Messages | None = None,
    ) -> None:
        if not destination:
            raise ValueError("destination must not be empty")
        self._destination = destination
        self._port = _coerce_port(port)
        self._connector = connector
        self._reporter = reporter
        self._kind = kind
        self._send_flags = send_flags
        self._messages = messages or get_messages()
        self._handle: SocketHandle | None = None
        self._destroyed = False
        self._lock = lock_factory()

    @property
    def destination(self) -> str | tuple:
        return self._destination

    @property
    def port(self) -> int:
        return self._port

    @property
    def kind(self) -> TargetKind | None:
        """Return the pinned transport/family, or ``None`` before the first open."""

        return self._kind

    @property
    def is_open(self) -> bool:
        """Return ``True`` when the target currently holds a connected handle.

        The read happens under the target lock so it never observes a handle
        mid-replacement by a concurrent :meth:`open` or :meth:`reopen`.
        """
        if self._destroyed:
            return False
        with self._lock:
            return self._handle is not None

    def open(
        self,
        family: AddressFamily | str | None = None,
        transport: Transport | str | None = None,
    ) -> NetworkTarget | None:
        """Connect to the endpoint and return ``self``, or ``None`` on failure.

        A failed attempt leaves the target closed and usable; call
        :meth:`open` or :meth:`reopen` to retry. If the target was already
        open its previous handle is closed first.
        """
        kind = self._resolve_kind(family, transport)
        with self._lock:
            self._ensure_usable()
            self._pin_kind(kind)
            if self._handle is not None:
                self._close_handle()
            self._handle = self._connect(kind)
            opened = self._handle is not None
        return self if opened else None

    def open_tcp4(self) -> NetworkTarget | None:
        return self.open(AddressFamily.IPV4, Transport.TCP)

    def open_tcp6(self) -> NetworkTarget | None:
        return self.open(AddressFamily.IPV6, Transport.TCP)

    def open_udp4(self) -> NetworkTarget | None:
        return self.open(AddressFamily.IPV4, Transport.UDP)

    def open_udp6(self) -> NetworkTarget | None:
        return self.open(AddressFamily.IPV6, Transport.UDP)

    def reopen(
        self,
        family: AddressFamily | str | None = None,
        transport: Transport | str | None = None,
    ) -> NetworkTarget:
        """Replace the current connection with a fresh one.

        Only acts on an open target: the old handle is closed before the new
        connect is attempted, and the handle becomes the closed sentinel if
        that attempt fails. A closed target is left untouched. Always returns
        ``self``; check :attr:`is_open` for the outcome. A kind that differs
        from the pinned one raises :class:`ValueError` even when closed; an
        unpinned target stays unpinned.
        """
        kind = self._resolve_kind(family, transport)
        with self._lock:
            self._ensure_usable()
            if self._kind is not None:
                self._pin_kind(kind)
            if self._handle is not None:
                self._close_handle()
                self._handle = self._connect(kind)
                if self._handle is None:
                    LOGGER.debug("Reopening %r left it closed", self)
        return self

    def reopen_tcp4(self) -> NetworkTarget:
        return self.reopen(AddressFamily.IPV4, Transport.TCP)

    def reopen_tcp6(self) -> NetworkTarget:
        return self.reopen(AddressFamily.IPV6, Transport.TCP)

    def reopen_udp4(self) -> NetworkTarget:
        return self.reopen(AddressFamily.IPV4, Transport.UDP)

    def reopen_udp6(self) -> NetworkTarget:
        return self.reopen(AddressFamily.IPV6, Transport.UDP)

    def close(self) -> None:
        """Close the current connection; the target stays reusable."""
        with self._lock:
            self._ensure_usable()
            if self._handle is not None:
                self._close_handle()

    def destroy(self) -> None:
        """Release the handle and retire the target.

        Callers must ensure no other operation is in flight. Further calls
        other than :meth:`destroy` and :attr:`is_open` raise
        :class:`RuntimeError`.
        """
        if self._destroyed:
            return
        if self._handle is not None:
            self._close_handle()
        self._destroyed = True
        LOGGER.debug("Destroyed %r", self)

    def send(self, message: Message, length: int | None = None) -> SendResult:
        """Send ``message`` using the path matching the pinned transport."""
        if self._kind is None:
            raise ValueError("transport is unknown until the target has been opened")
        if self._kind.transport.is_stream:
            return self.send_stream(message, length)
        return self.send_datagram(message, length)

    def send_stream(self, message: Message, length: int | None = None) -> SendResult:
        """Write the first ``length`` bytes of ``message`` over a stream connection.

        Before every write the connection is read without blocking, discarding
        anything the peer sent, to detect a peer close. A detected close closes the target and yields
        :attr:`SendOutcome.PEER_CLOSED`; an OS send error yields
        :attr:`SendOutcome.SEND_FAILED` and leaves the handle as it is.
        Partial writes are continued until the whole payload is out.
        """
        payload = _as_bytes_view(message, length)
        with self._lock:
            self._ensure_usable()
            if self._handle is None:
                result = SendResult.send_failed(errno.EBADF)
            else:
                result = self._send_all(self._handle, payload)
        self._report(result)
        return result

    def send_datagram(self, message: Message, length: int | None = None) -> SendResult:
        """Send ``message`` as exactly one datagram.

        A datagram goes out whole or not at all; a short send is reported as
        a failure with ``errno.EMSGSIZE``.
        """
        payload = _as_bytes_view(message, length)
        with self._lock:
            self._ensure_usable()
            handle = self._handle
            if handle is None:
                result = SendResult.send_failed(errno.EBADF)
            else:
                try:
                    sent = handle.send(payload, self._send_flags)
                except OSError as exc:
                    result = SendResult.send_failed(exc.errno)
                else:
                    if sent < len(payload):
                        result = SendResult.send_failed(errno.EMSGSIZE, sent)
                    else:
                        result = SendResult.sent(sent)
        self._report(result)
        return result

    def __enter__(self) -> NetworkTarget:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.destroy()

    def __repr__(self) -> str:
        if self._destroyed:
            state = "destroyed"
        else:
            state = "open" if self._handle is not None else "closed"
        label = self._kind.label if self._kind is not None else "unbound"
        return f"NetworkTarget({self._destination!r}, {self._port}, kind={label}, state={state})"

    def _send_all(self, handle: SocketHandle, payload: memoryview) -> SendResult:
        """Stream loop; caller holds the lock."""
        total = len(payload)
        sent = 0
        while sent < total:
            if self._peer_closed(handle):
                self._close_handle()
                return SendResult.peer_closed(sent)
            try:
                sent += handle.send(payload[sent:], self._send_flags)
            except OSError as exc:
                return SendResult.send_failed(exc.errno, sent)
        return SendResult.sent(sent)

    @staticmethod
    def _peer_closed(handle: SocketHandle) -> bool:
        """Return ``True`` when a non-blocking read reaches an orderly shutdown.

        Collectors never answer, so any inbound bytes are read and discarded;
        an end-of-stream queued behind them is only visible once they are gone.
        """
        while True:
            if not _DONTWAIT:
                readable, _, _ = select.select([handle], [], [], 0)
                if not readable:
                    return False
            try:
                chunk = handle.recv(_DRAIN_SIZE, _DONTWAIT)
            except BlockingIOError:
                return False
            except OSError as exc:
                # the send that follows surfaces the error
                LOGGER.debug("Peer-close check failed: %s", exc)
                return False
            if not chunk:
                return True
            LOGGER.debug("Discarded %d unsolicited bytes from peer", len(chunk))

    def _connect(self, kind: TargetKind) -> SocketHandle | None:
        handle = self._connector.connect(self._destination, self._port, kind.family, kind.transport)
        if handle is None:
            LOGGER.debug("Opening %s target %s:%s failed", kind.label, self._destination, self._port)
        else:
            LOGGER.debug("Opened %s target %s:%s", kind.label, self._destination, self._port)
        return handle

    def _close_handle(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError as exc:
            LOGGER.debug("Closing handle of %s:%s failed: %s", self._destination, self._port, exc)

    def _resolve_kind(
        self,
        family: AddressFamily | str | None,
        transport: Transport | str | None,
    ) -> TargetKind:
        if family is None and transport is None:
            if self._kind is None:
                raise ValueError("family and transport are required until the target has been opened")
            return self._kind
        if family is None or transport is None:
            raise ValueError("family and transport must be given together")
        return TargetKind.parse(transport, family)

    def _pin_kind(self, kind: TargetKind) -> None:
        if self._kind is None:
            self._kind = kind
        elif self._kind != kind:
            raise ValueError(f"target is fixed to {self._kind.label}; cannot use {kind.label}")

    def _ensure_usable(self) -> None:
        if self._destroyed:
            raise RuntimeError("network target has been destroyed")

    def _report(self, result: SendResult) -> None:
        if result.outcome is SendOutcome.PEER_CLOSED:
            self._reporter.network_closed(self._messages.network_closed)
        elif result.outcome is SendOutcome.SEND_FAILED:
            self._reporter.send_failure(self._messages.send_failed, result.error_code, self._messages.errno_code_type)


def _coerce_port(port: int | str) -> int:
    """Validate ``port`` and return it as an integer.

    Examples
    --------
    >>> _coerce_port("514")
    514
    >>> _coerce_port(0)
    Traceback (most recent call last):
    ...
    ValueError: port must be between 1 and 65535, got 0
    """
    if isinstance(port, bool):
        raise ValueError("port must be an integer")
    try:
        value = int(port)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"port must be an integer, got {port!r}") from exc
    if not 1 <= value <= 65535:
        raise ValueError(f"port must be between 1 and 65535, got {value}")
    return value


def _as_bytes_view(message: Message, length: int | None) -> memoryview:
    """Return a byte view over the first ``length`` bytes of ``message``."""
    payload = message.encode("utf-8") if isinstance(message, str) else message
    view = memoryview(payload).cast("B")
    if length is None:
        return view
    if length < 0 or length > len(view):
        raise ValueError(f"length must be between 0 and {len(view)}, got {length}")
    return view[:length]


__all__ = ["DEFAULT_SEND_FLAGS", "Message", "NetworkTarget"]
