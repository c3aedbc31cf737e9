"""Shared fixtures for the network target suite."""

from __future__ import annotations

import socket
from collections.abc import Iterator
from typing import Callable

import pytest

from lib_net_target.application.target import NetworkTarget
from tests.fakes import FakeConnector, FakeSocket, RecordingReporter, TcpListener


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_target(reporter: RecordingReporter) -> Callable[..., NetworkTarget]:
    """Build a target over a :class:`FakeConnector` loaded with ``handles``."""

    def _factory(*handles: FakeSocket | None, **kwargs: object) -> NetworkTarget:
        connector = kwargs.pop("connector", None) or FakeConnector(*handles)
        return NetworkTarget("collector.test", 8125, connector=connector, reporter=reporter, **kwargs)  # type: ignore[arg-type]

    return _factory


@pytest.fixture
def udp_listener() -> Iterator[socket.socket]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    try:
        yield sock
    finally:
        sock.close()


@pytest.fixture
def tcp_listener() -> Iterator[TcpListener]:
    listener = TcpListener()
    try:
        yield listener
    finally:
        listener.close()
