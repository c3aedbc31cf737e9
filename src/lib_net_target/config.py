"""Environment-driven configuration for CLI and host applications.

Purpose
-------
Translate ``NET_TARGET_*`` environment variables (optionally loaded from a
nearby ``.env`` file) into validated :class:`TargetSettings`.

Contents
--------
* :data:`DOTENV_ENV_VAR` / :func:`should_use_dotenv` / :func:`enable_dotenv` -
  opt-in ``.env`` loading via python-dotenv.
* :class:`TargetSettings` and :func:`load_settings` - endpoint, transport,
  family, locale and connect timeout with precedence
  ``explicit argument > environment > default``.

System Role
-----------
Outer-layer configuration. The network target itself never reads the
environment; only the CLI and :func:`lib_net_target.target_from_settings` do.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .domain.transport import AddressFamily, TargetKind, Transport

DOTENV_ENV_VAR = "NET_TARGET_USE_DOTENV"
ENDPOINT_ENV_VAR = "NET_TARGET_ENDPOINT"
TRANSPORT_ENV_VAR = "NET_TARGET_TRANSPORT"
FAMILY_ENV_VAR = "NET_TARGET_FAMILY"
LOCALE_ENV_VAR = "NET_TARGET_LOCALE"
CONNECT_TIMEOUT_ENV_VAR = "NET_TARGET_CONNECT_TIMEOUT"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8125

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_ATTEMPTED = False
_DOTENV_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """
    if explicit is not None:
        return explicit
    return (env_value or "").strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` above the working directory once per process.

    Existing environment variables are never overridden. Returns the resolved
    path of the loaded file, or ``None`` when none was found.
    """
    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    if _DOTENV_ATTEMPTED:
        return _DOTENV_PATH
    _DOTENV_ATTEMPTED = True
    found = find_dotenv(usecwd=True)
    if not found:
        return None
    path = Path(found).resolve()
    load_dotenv(path, override=False)
    _DOTENV_PATH = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    _DOTENV_ATTEMPTED = False
    _DOTENV_PATH = None


@dataclass(slots=True, frozen=True)
class TargetSettings:
    """Validated configuration for a single network target."""

    host: str
    port: int
    kind: TargetKind
    locale: str | None = None
    connect_timeout: float | None = None

    @property
    def endpoint(self) -> str:
        """Return ``host:port``, bracketing IPv6 literals.

        Examples
        --------
        >>> from lib_net_target.domain.transport import UDP6
        >>> TargetSettings("::1", 8125, UDP6).endpoint
        '[::1]:8125'
        """
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
    transport: str | Transport | None = None,
    family: str | AddressFamily | None = None,
    locale: str | None = None,
    connect_timeout: float | None = None,
) -> TargetSettings:
    """Merge explicit arguments, environment variables, and defaults.

    Examples
    --------
    >>> settings = load_settings({"NET_TARGET_ENDPOINT": "[::1]:9125", "NET_TARGET_FAMILY": "ipv6"})
    >>> settings.host, settings.port, settings.kind.label
    ('::1', 9125, 'udp6')
    """
    env = os.environ if environ is None else environ

    env_host, env_port = DEFAULT_HOST, DEFAULT_PORT
    endpoint = env.get(ENDPOINT_ENV_VAR)
    if endpoint:
        env_host, env_port = _parse_endpoint(endpoint, ENDPOINT_ENV_VAR)

    resolved_port = env_port if port is None else _validate_port(port, "port")
    kind = TargetKind.parse(
        transport if transport is not None else env.get(TRANSPORT_ENV_VAR, Transport.UDP.value),
        family if family is not None else env.get(FAMILY_ENV_VAR, AddressFamily.IPV4.value),
    )

    timeout = connect_timeout
    if timeout is None and env.get(CONNECT_TIMEOUT_ENV_VAR):
        timeout = _parse_timeout(env[CONNECT_TIMEOUT_ENV_VAR])
    elif timeout is not None and timeout <= 0:
        raise ValueError("connect_timeout must be positive")

    return TargetSettings(
        host=host or env_host,
        port=resolved_port,
        kind=kind,
        locale=locale or env.get(LOCALE_ENV_VAR) or None,
        connect_timeout=timeout,
    )


def _parse_endpoint(value: str, source: str) -> tuple[str, int]:
    """Split ``HOST:PORT`` (or ``[IPV6]:PORT``) into its parts.

    Examples
    --------
    >>> _parse_endpoint("collector:8125", "X")
    ('collector', 8125)
    >>> _parse_endpoint("[fe80::1]:514", "X")
    ('fe80::1', 514)
    """
    text = value.strip()
    if text.startswith("["):
        host, sep, port_text = text[1:].partition("]:")
    else:
        host, sep, port_text = text.rpartition(":")
    if not sep or not host:
        raise ValueError(f"{source} must use HOST:PORT, got {value!r}")
    try:
        port = int(port_text)
    except ValueError as exc:
        raise ValueError(f"{source} port must be an integer, got {port_text!r}") from exc
    return host, _validate_port(port, f"{source} port")


def _validate_port(port: int, label: str) -> int:
    if port <= 0:
        raise ValueError(f"{label} must be positive, got {port}")
    if port > 65535:
        raise ValueError(f"{label} must be at most 65535, got {port}")
    return port


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ValueError(f"{CONNECT_TIMEOUT_ENV_VAR} must be a number, got {value!r}") from exc
    if timeout <= 0:
        raise ValueError(f"{CONNECT_TIMEOUT_ENV_VAR} must be positive, got {value!r}")
    return timeout


__all__ = [
    "CONNECT_TIMEOUT_ENV_VAR",
    "DOTENV_ENV_VAR",
    "ENDPOINT_ENV_VAR",
    "FAMILY_ENV_VAR",
    "LOCALE_ENV_VAR",
    "TRANSPORT_ENV_VAR",
    "TargetSettings",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
