"""Click command group for sending test payloads to a collector.

Purpose
-------
Offer a small operator tool on top of :class:`NetworkTarget`: print package
metadata, send a message over TCP or UDP, or check whether an endpoint accepts
connections.

Contents
--------
* :func:`cli` - root group with traceback, dotenv and verbosity switches.
* ``info`` / ``send`` / ``probe`` subcommands.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.

System Role
-----------
Presentation layer. Settings come from :mod:`lib_net_target.config`, targets
from :mod:`lib_net_target.lib_net_target`, and output goes through
:class:`RichResultPrinter`.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.logging import RichHandler

from . import __init__conf__
from . import config as config_module
from .adapters import RichResultPrinter
from .lib_net_target import summary_info, target_from_settings

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_TRANSPORT_CHOICE = click.Choice(["tcp", "udp"], case_sensitive=False)
_FAMILY_CHOICE = click.Choice(["ipv4", "ipv6"], case_sensitive=False)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(show_path=False, show_time=False)],
    )


def _load_settings(**overrides: object) -> config_module.TargetSettings:
    try:
        return config_module.load_settings(**overrides)  # type: ignore[arg-type]
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


def _target_options(func):
    """Attach the endpoint options shared by ``send`` and ``probe``."""
    options = [
        click.option("--host", help="Collector host (overrides NET_TARGET_ENDPOINT)."),
        click.option("--port", type=click.IntRange(1, 65535), help="Collector port."),
        click.option("--transport", type=_TRANSPORT_CHOICE, help="tcp or udp (default: udp)."),
        click.option("--family", type=_FAMILY_CHOICE, help="ipv4 or ipv6 (default: ipv4)."),
        click.option("--connect-timeout", type=click.FloatRange(min=0, min_open=True), help="Seconds allowed for connecting."),
        click.option("--locale", help="Language for reported failures (en, de)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load NET_TARGET_* variables from the nearest .env before running.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log connection lifecycle details.")
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool, verbose: bool) -> None:
    """Send messages to a TCP or UDP collector."""
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if verbose:
        _configure_logging()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""
    click.echo(summary_info(), nl=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@_target_options
@click.option("--repeat", type=click.IntRange(min=1), default=1, show_default=True, help="Send the message N times.")
@click.pass_context
def cli_send(ctx: click.Context, message: str, repeat: int, **target_options: object) -> None:
    """Open a target and send MESSAGE, exiting 1 if any send fails."""
    settings = _load_settings(**target_options)
    printer = RichResultPrinter()
    failures = 0
    with target_from_settings(settings) as target:
        if target.open() is None:
            printer.status(f"could not connect to {settings.endpoint} ({settings.kind.label})", ok=False)
            ctx.exit(1)
        for index in range(1, repeat + 1):
            result = target.send(message)
            printer.emit(result, endpoint=settings.endpoint, index=index if repeat > 1 else None)
            if not result:
                failures += 1
    if failures:
        ctx.exit(1)


@cli.command("probe", context_settings=CLICK_CONTEXT_SETTINGS)
@_target_options
@click.pass_context
def cli_probe(ctx: click.Context, **target_options: object) -> None:
    """Check whether the endpoint accepts a connection.

    UDP has no handshake, so a UDP probe only proves the address resolves.
    """
    settings = _load_settings(**target_options)
    printer = RichResultPrinter()
    with target_from_settings(settings) as target:
        reachable = target.open() is not None
    verdict = "reachable" if reachable else "unreachable"
    printer.status(f"{settings.endpoint} ({settings.kind.label}) {verdict}", ok=reachable)
    if not reachable:
        ctx.exit(1)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run :func:`cli` through ``lib_cli_exit_tools`` and return the exit code.

    The global traceback preferences are restored afterwards so embedding
    callers are not affected by ``--traceback``.
    """
    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
