from __future__ import annotations

import socket

from lib_net_target.adapters import LoggingErrorReporter, SocketConnector, ThreadLocalErrorReporter
from lib_net_target.application.ports import ConnectorPort, ErrorReporterPort, SocketHandle
from tests.fakes import FakeConnector, FakeSocket, RecordingReporter
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_real_sockets_satisfy_socket_handle() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        assert isinstance(sock, SocketHandle)


def test_fakes_satisfy_their_ports() -> None:
    assert isinstance(FakeSocket(), SocketHandle)
    assert isinstance(FakeConnector(), ConnectorPort)
    assert isinstance(RecordingReporter(), ErrorReporterPort)


def test_adapters_satisfy_their_ports() -> None:
    assert isinstance(SocketConnector(), ConnectorPort)
    assert isinstance(LoggingErrorReporter(), ErrorReporterPort)
    assert isinstance(ThreadLocalErrorReporter(), ErrorReporterPort)
