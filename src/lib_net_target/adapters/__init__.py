"""Concrete adapters for connecting, reporting, and console output."""

from __future__ import annotations

from .connector import SocketConnector
from .console import RichResultPrinter
from .reporting import LoggingErrorReporter, ThreadLocalErrorReporter

__all__ = ["LoggingErrorReporter", "RichResultPrinter", "SocketConnector", "ThreadLocalErrorReporter"]
