"""Static package metadata surfaced to the CLI and the ``info`` banner.

Kept as plain module attributes so ``lib_net_target --version`` works without
reading installed distribution metadata.
"""

from __future__ import annotations

from typing import Callable

name = "lib_net_target"
title = "Thread-safe TCP/UDP network targets for metrics and log emitters"
version = "0.1.0"
author = "lib_net_target maintainers"
shell_command = "lib_net_target"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner through ``writer`` (``print`` semantics by default).

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_net_target:
    ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label:<{pad}} = {value}\n" for label, value in fields)
    text = "".join(lines)
    if writer is None:
        print(text, end="")
    else:
        writer(text)
