"""Application layer: the network target and the ports it talks through."""

from __future__ import annotations

from .target import DEFAULT_SEND_FLAGS, NetworkTarget

__all__ = ["DEFAULT_SEND_FLAGS", "NetworkTarget"]
