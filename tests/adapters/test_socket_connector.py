from __future__ import annotations

import logging
import socket

import pytest

from lib_net_target.adapters.connector import SocketConnector
from lib_net_target.domain.transport import AddressFamily, Transport
from tests.fakes import TcpListener, free_port
from tests.os_markers import IPV6_ONLY, OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_connects_tcp_to_listener(tcp_listener: TcpListener) -> None:
    sock = SocketConnector().connect("127.0.0.1", tcp_listener.port, AddressFamily.IPV4, Transport.TCP)

    assert sock is not None
    try:
        assert sock.type == socket.SOCK_STREAM
        assert sock.getpeername()[1] == tcp_listener.port
    finally:
        sock.close()


def test_connect_timeout_does_not_leak_into_sends(tcp_listener: TcpListener) -> None:
    sock = SocketConnector(timeout=2.0).connect("127.0.0.1", tcp_listener.port, AddressFamily.IPV4, Transport.TCP)

    assert sock is not None
    try:
        assert sock.gettimeout() is None
    finally:
        sock.close()


def test_connects_udp_without_listener() -> None:
    sock = SocketConnector().connect("127.0.0.1", free_port(socket.SOCK_DGRAM), AddressFamily.IPV4, Transport.UDP)

    assert sock is not None
    try:
        assert sock.type == socket.SOCK_DGRAM
    finally:
        sock.close()


def test_refused_tcp_connect_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_net_target.adapters.connector")

    sock = SocketConnector().connect("127.0.0.1", free_port(), AddressFamily.IPV4, Transport.TCP)

    assert sock is None
    assert any("failed" in record.getMessage() for record in caplog.records)


def test_resolution_failure_returns_none() -> None:
    def failing_resolver(*_args: object) -> list[tuple[object, ...]]:
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    connector = SocketConnector(resolver=failing_resolver)

    assert connector.connect("collector.invalid", 8125, AddressFamily.IPV4, Transport.UDP) is None


def test_resolver_receives_family_and_socket_type(tcp_listener: TcpListener) -> None:
    seen: list[tuple[object, ...]] = []

    def recording_resolver(*args: object) -> list[tuple[object, ...]]:
        seen.append(args)
        return socket.getaddrinfo(*args)  # type: ignore[arg-type]

    sock = SocketConnector(resolver=recording_resolver).connect(
        "127.0.0.1", tcp_listener.port, AddressFamily.IPV4, Transport.TCP
    )
    assert sock is not None
    sock.close()

    assert seen == [("127.0.0.1", tcp_listener.port, socket.AF_INET, socket.SOCK_STREAM)]


def test_tries_next_address_after_failure(tcp_listener: TcpListener) -> None:
    dead = ("127.0.0.1", free_port())
    live = ("127.0.0.1", tcp_listener.port)

    def two_addresses(*_args: object) -> list[tuple[object, ...]]:
        return [
            (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", dead),
            (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", live),
        ]

    sock = SocketConnector(resolver=two_addresses).connect("collector", 0, AddressFamily.IPV4, Transport.TCP)

    assert sock is not None
    try:
        assert sock.getpeername() == live
    finally:
        sock.close()


def test_accepts_pre_resolved_address_tuple(tcp_listener: TcpListener) -> None:
    sock = SocketConnector().connect(("127.0.0.1", 0), tcp_listener.port, AddressFamily.IPV4, Transport.TCP)

    assert sock is not None
    sock.close()


def test_pre_resolved_ipv6_tuple_keeps_scope_id() -> None:
    connected: list[object] = []

    class RecordingSocket:
        def __init__(self, *args: int) -> None:
            self.args = args

        def settimeout(self, _value: float | None) -> None:
            pass

        def connect(self, address: object) -> None:
            connected.append(address)

        def close(self) -> None:
            pass

    def unused_resolver(*_args: object) -> list[tuple[object, ...]]:
        raise AssertionError("pre-resolved addresses must not be resolved again")

    connector = SocketConnector(resolver=unused_resolver, socket_factory=RecordingSocket)  # type: ignore[arg-type]
    sock = connector.connect(("fe80::1", 0, 0, 3), 8125, AddressFamily.IPV6, Transport.UDP)

    assert isinstance(sock, RecordingSocket)
    assert sock.args == (socket.AF_INET6, socket.SOCK_DGRAM, 0)
    assert connected == [("fe80::1", 8125, 0, 3)]


def test_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValueError, match="timeout"):
        SocketConnector(timeout=0)


@IPV6_ONLY
def test_connects_tcp6_to_loopback() -> None:
    listener = TcpListener(socket.AF_INET6, "::1")
    try:
        sock = SocketConnector().connect("::1", listener.port, AddressFamily.IPV6, Transport.TCP)
        assert sock is not None
        assert sock.family == socket.AF_INET6
        sock.close()
    finally:
        listener.close()
