"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Scheduler protocol shared by the deferred-execution backends.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

Action = Callable[[], object]


@runtime_checkable
class Scheduler(Protocol):
    """Runs zero-argument actions on a later turn of a cooperative host."""

    def call_soon(self, action: Action) -> None:
        """Run `action` on the next turn, with no minimum delay."""
        ...

    def call_later(self, delay_s: float, action: Action) -> None:
        """Run `action` once at least `delay_s` seconds have elapsed."""
        ...
