"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cooperative promise runtime with chaining, progress events and fan-in.

Quick start::

    from pledge import Promise, when

    def fetch(callback):
        callback(None, "payload")

    first = Promise(fetch)
    second = Promise.resolved(2)

    when(first, second).then(
        lambda values: print(values),
        lambda error: print("failed:", error),
        lambda fraction: print(f"{fraction:.0%} done"),
    )

Deferred work runs on the running asyncio loop when there is one, otherwise
on the shared turn queue::

    from pledge import get_runtime

    get_runtime().turns.run_until_idle()
"""

from .core import (
    Listener,
    Outcome,
    Promise,
    Thenable,
    is_thenable,
    when,
)
from .errors import PledgeError, RejectionError, SchedulerError, SettingsError
from .interop import adapt, from_awaitable, to_future
from .metrics import NoOpPromiseMetrics, PromiseMetrics
from .runtime import PromiseRuntime, configure, get_runtime, reset_runtime
from .scheduling import LoopScheduler, Scheduler, TurnQueue, current_scheduler, delayed
from .settings import PromiseSettings

__all__ = [
    "Promise",
    "when",
    "Thenable",
    "is_thenable",
    "Listener",
    "Outcome",
    "adapt",
    "from_awaitable",
    "to_future",
    "PledgeError",
    "RejectionError",
    "SchedulerError",
    "SettingsError",
    "Scheduler",
    "LoopScheduler",
    "TurnQueue",
    "delayed",
    "current_scheduler",
    "PromiseSettings",
    "PromiseRuntime",
    "configure",
    "get_runtime",
    "reset_runtime",
    "PromiseMetrics",
    "NoOpPromiseMetrics",
]


# Lazy import for the Prometheus adapter
def __getattr__(name: str):
    """Lazily expose metrics adapters that require extra dependencies."""
    if name == "PrometheusPromiseMetrics":
        from .prometheus import PrometheusPromiseMetrics

        return PrometheusPromiseMetrics
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
