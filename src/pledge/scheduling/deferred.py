"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deferred execution helper used by the promise factories.
"""

from __future__ import annotations

from .types import Action, Scheduler


def current_scheduler() -> Scheduler:
    """Return the scheduler the process-wide runtime resolves right now."""
    from ..runtime import get_runtime

    return get_runtime().resolve_scheduler()


def delayed(action: Action, delay_s: float | None = None) -> None:
    """
    Run `action` on a later turn of the current scheduler.

    Args:
        action: Zero-argument callable.
        delay_s: Minimum delay in seconds. ``None`` falls back to
            ``PromiseSettings.default_delay_s``. A zero delay uses the
            run-soon queue instead of a timer.
    """
    from ..runtime import get_runtime

    runtime = get_runtime()
    if delay_s is None:
        delay_s = runtime.settings.default_delay_s
    scheduler = runtime.resolve_scheduler()
    if delay_s <= 0:
        scheduler.call_soon(action)
        return
    scheduler.call_later(delay_s, action)
