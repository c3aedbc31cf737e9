"""Rich-powered console output for send results.

Purpose
-------
Render :class:`SendResult` values for humans in the CLI, colouring each line
by outcome.

Contents
--------
* :data:`_STYLE_MAP` - default outcome-to-style mapping.
* :class:`RichResultPrinter` - printer used by ``lib_net_target send``/``probe``.
"""

from __future__ import annotations

import os
from typing import Mapping

from rich.console import Console

from lib_net_target.domain.results import SendOutcome, SendResult


_STYLE_MAP: Mapping[SendOutcome, str] = {
    SendOutcome.SENT: "green",
    SendOutcome.PEER_CLOSED: "yellow",
    SendOutcome.SEND_FAILED: "bold red",
}

#: Default Rich styles keyed by :class:`SendOutcome`.


class RichResultPrinter:
    """Print send results and status lines through a Rich console."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        no_color: bool = False,
        styles: Mapping[SendOutcome, str] | None = None,
    ) -> None:
        self._console = console or Console(no_color=no_color, highlight=False)
        self._no_color = no_color
        self._style_map = {**_STYLE_MAP, **(styles or {})}

    def emit(self, result: SendResult, *, endpoint: str, index: int | None = None) -> None:
        """Print one line describing ``result``.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> RichResultPrinter(console=console).emit(SendResult.sent(5), endpoint="127.0.0.1:8125")
        >>> "sent 5 bytes" in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(result.outcome, "")
        line = self._format_line(result, endpoint=endpoint, index=index)
        self._console.print(line, style=style, highlight=False, markup=False)

    def status(self, text: str, *, ok: bool) -> None:
        """Print a free-form status line in the success or failure colour."""
        outcome = SendOutcome.SENT if ok else SendOutcome.SEND_FAILED
        style = "" if self._no_color else self._style_map[outcome]
        self._console.print(text, style=style, highlight=False, markup=False)

    @staticmethod
    def _format_line(result: SendResult, *, endpoint: str, index: int | None = None) -> str:
        """Return the console text for ``result``.

        Examples
        --------
        >>> RichResultPrinter._format_line(SendResult.peer_closed(), endpoint="db:514", index=2)
        '[2] db:514 peer_closed after 0 bytes'
        """
        prefix = "" if index is None else f"[{index}] "
        if result.ok:
            return f"{prefix}{endpoint} sent {result.bytes_sent} bytes"
        detail = f"{prefix}{endpoint} {result.outcome.value} after {result.bytes_sent} bytes"
        if result.error_code is not None:
            detail += f" (errno={result.error_code}: {os.strerror(result.error_code)})"
        return detail


__all__ = ["RichResultPrinter"]
