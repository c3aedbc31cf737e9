"""End-to-end sends over real loopback sockets."""

from __future__ import annotations

import socket
import threading
import time

from lib_net_target import ThreadLocalErrorReporter, create_target, open_target
from lib_net_target.domain.errors import ErrorKind
from lib_net_target.domain.results import SendOutcome
from tests.fakes import RecordingReporter, TcpListener, free_port
from tests.os_markers import IPV6_ONLY, OS_AGNOSTIC, POSIX_ONLY

pytestmark = [OS_AGNOSTIC]


def test_udp4_datagram_arrives_in_one_read(udp_listener: socket.socket) -> None:
    port = udp_listener.getsockname()[1]
    target = create_target("127.0.0.1", port)
    assert target.open_udp4() is target

    result = target.send_datagram(b"hello", 5)

    assert result.code == 1
    assert udp_listener.recv(65536) == b"hello"
    target.destroy()


@IPV6_ONLY
def test_udp6_datagram_arrives() -> None:
    listener = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
    listener.bind(("::1", 0))
    listener.settimeout(2.0)
    try:
        with create_target("::1", listener.getsockname()[1]) as target:
            assert target.open_udp6() is target
            assert target.send(b"gauge:3|g").ok
        assert listener.recv(1024) == b"gauge:3|g"
    finally:
        listener.close()


def test_tcp4_stream_delivers_whole_message(tcp_listener: TcpListener) -> None:
    payload = b"counter:1|c\n" * 50_000
    received: list[bytes] = []

    def drain() -> None:
        conn = tcp_listener.accept()
        with conn:
            received.append(tcp_listener.receive_all(conn))

    reader = threading.Thread(target=drain, daemon=True)
    reader.start()

    target = open_target("127.0.0.1", tcp_listener.port, transport="tcp")
    assert target is not None
    result = target.send_stream(payload)
    target.destroy()
    reader.join(timeout=5)

    assert result.ok
    assert result.bytes_sent == len(payload)
    assert received == [payload]


@POSIX_ONLY
def test_tcp4_peer_close_is_detected_before_sending(tcp_listener: TcpListener) -> None:
    reporter = RecordingReporter()
    target = create_target("127.0.0.1", tcp_listener.port, reporter=reporter)
    assert target.open_tcp4() is target
    conn = tcp_listener.accept()
    conn.shutdown(socket.SHUT_WR)
    time.sleep(0.05)

    result = target.send_stream(b"too late")

    assert result.outcome is SendOutcome.PEER_CLOSED
    assert result.code == -1
    assert reporter.kinds == ["network_closed"]
    assert target.is_open is False
    assert conn.recv(16) == b""
    conn.close()


@POSIX_ONLY
def test_tcp4_peer_close_after_unsolicited_bytes_is_detected(tcp_listener: TcpListener) -> None:
    reporter = RecordingReporter()
    target = create_target("127.0.0.1", tcp_listener.port, reporter=reporter)
    assert target.open_tcp4() is target
    conn = tcp_listener.accept()
    conn.sendall(b"hi")
    conn.close()
    time.sleep(0.05)

    result = target.send_stream(b"x")

    assert result.outcome is SendOutcome.PEER_CLOSED
    assert target.is_open is False
    assert reporter.kinds == ["network_closed"]


@POSIX_ONLY
def test_reopen_recovers_after_peer_close(tcp_listener: TcpListener) -> None:
    reporter = ThreadLocalErrorReporter()
    target = create_target("127.0.0.1", tcp_listener.port, reporter=reporter)
    target.open_tcp4()
    first = tcp_listener.accept()
    first.close()
    time.sleep(0.05)

    assert not target.send_stream(b"lost")
    assert reporter.last_error().kind is ErrorKind.NETWORK_CLOSED  # type: ignore[union-attr]

    target.reopen_tcp4()
    assert target.is_open is False

    assert target.open_tcp4() is target
    second = tcp_listener.accept()
    assert target.send_stream(b"again").ok
    target.destroy()
    assert tcp_listener.receive_all(second) == b"again"
    second.close()


def test_open_to_unreachable_tcp_port_fails_cleanly() -> None:
    target = create_target("127.0.0.1", free_port(), connect_timeout=2.0)

    assert target.open_tcp4() is None
    assert target.is_open is False
    target.destroy()


def test_open_target_returns_none_when_connect_fails() -> None:
    assert open_target("127.0.0.1", free_port(), transport="tcp") is None


def test_udp_send_to_closed_port_eventually_reports_failure() -> None:
    reporter = RecordingReporter()
    target = open_target("127.0.0.1", free_port(socket.SOCK_DGRAM), reporter=reporter)
    assert target is not None

    results = [target.send_datagram(b"ping") for _ in range(5)]
    target.destroy()

    # ICMP port-unreachable surfaces on a later send where the OS reports it
    failures = [result for result in results if not result]
    assert all(result.outcome is SendOutcome.SEND_FAILED for result in failures)
    assert len(reporter.calls) == len(failures)
