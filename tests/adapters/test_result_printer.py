from __future__ import annotations

from io import StringIO

from rich.console import Console

from lib_net_target.adapters.console import RichResultPrinter
from lib_net_target.domain.results import SendOutcome, SendResult
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def _printer(**kwargs: object) -> tuple[RichResultPrinter, Console]:
    console = Console(file=StringIO(), record=True, width=200, force_terminal=True, color_system="standard", no_color=False)
    return RichResultPrinter(console=console, **kwargs), console  # type: ignore[arg-type]


def test_successful_result_line() -> None:
    printer, console = _printer()

    printer.emit(SendResult.sent(5), endpoint="127.0.0.1:8125")

    assert console.export_text() == "127.0.0.1:8125 sent 5 bytes\n"


def test_failure_line_includes_errno_and_index() -> None:
    printer, console = _printer()

    printer.emit(SendResult.send_failed(111, 0), endpoint="[::1]:514", index=3)

    text = console.export_text()
    assert text.startswith("[3] [::1]:514 send_failed after 0 bytes (errno=111: ")


def test_outcomes_are_coloured() -> None:
    printer, console = _printer()

    printer.emit(SendResult.peer_closed(), endpoint="h:1")

    assert "\x1b[" in console.export_text(styles=True)


def test_no_color_disables_styles() -> None:
    printer, console = _printer(no_color=True)

    printer.status("reachable", ok=True)

    assert console.export_text(styles=True) == "reachable\n"


def test_style_overrides_merge_with_defaults() -> None:
    printer, console = _printer(styles={SendOutcome.SENT: "blue"})

    printer.emit(SendResult.sent(1), endpoint="h:1")
    printer.emit(SendResult.peer_closed(), endpoint="h:1")

    styled = console.export_text(styles=True)
    assert "\x1b[34m" in styled
    assert "\x1b[33m" in styled
