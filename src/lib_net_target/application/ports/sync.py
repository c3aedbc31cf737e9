"""Port for the mutual-exclusion primitive guarding a target."""

from __future__ import annotations

from typing import Callable, ContextManager

LockFactory = Callable[[], ContextManager]
"""Zero-argument callable producing a fresh exclusive lock per target."""


__all__ = ["LockFactory"]
