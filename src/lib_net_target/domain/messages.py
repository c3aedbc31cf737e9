"""Localised message catalogue for reported network failures.

Purpose
-------
Keep user-facing strings out of the target logic so reporters can be handed a
message in the caller's language.

Contents
--------
* :class:`Messages` - the strings a target needs.
* :data:`CATALOGUE` - built-in locales (``en``, ``de``).
* :func:`get_messages` - locale lookup with English fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(slots=True, frozen=True)
class Messages:
    """Strings used when reporting network failures."""

    network_closed: str
    send_failed: str
    errno_code_type: str


DEFAULT_LOCALE = "en"

CATALOGUE: Mapping[str, Messages] = MappingProxyType(
    {
        "en": Messages(
            network_closed="network connection was closed by the remote end",
            send_failed="failed to send message over the network socket",
            errno_code_type="errno",
        ),
        "de": Messages(
            network_closed="die Netzwerkverbindung wurde von der Gegenstelle geschlossen",
            send_failed="die Nachricht konnte nicht über den Netzwerk-Socket gesendet werden",
            errno_code_type="errno",
        ),
    }
)


def get_messages(locale: str | None = None) -> Messages:
    """Return the catalogue entry for ``locale`` falling back to English.

    POSIX-style tags are reduced to their language part.

    Examples
    --------
    >>> get_messages("de_DE.UTF-8") is CATALOGUE["de"]
    True
    >>> get_messages("tlh") is CATALOGUE["en"]
    True
    """
    if not locale:
        return CATALOGUE[DEFAULT_LOCALE]
    language = locale.split(".", 1)[0].replace("-", "_").split("_", 1)[0].lower()
    return CATALOGUE.get(language, CATALOGUE[DEFAULT_LOCALE])


__all__ = ["CATALOGUE", "DEFAULT_LOCALE", "Messages", "get_messages"]
