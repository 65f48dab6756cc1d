"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Process-wide runtime state: settings, scheduler selection and metrics sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock

from .errors import SchedulerError
from .metrics import PromiseMetrics, create_metrics
from .scheduling.loop import LoopScheduler, running_loop
from .scheduling.turns import TurnQueue
from .scheduling.types import Scheduler
from .settings import PromiseSettings

logger = logging.getLogger("pledge.scheduling")

_RUNTIME: PromiseRuntime | None = None
_LOCK = Lock()


@dataclass(slots=True)
class PromiseRuntime:
    """
    Collaborators shared by every promise in the process.

    Attributes:
        settings: Loaded runtime settings.
        metrics: Counter sink for dispatch events.
        turns: Shared turn queue used when no event loop is available.
        scheduler: Explicit scheduler override; wins over backend selection.
    """

    settings: PromiseSettings
    metrics: PromiseMetrics
    turns: TurnQueue = field(default_factory=TurnQueue)
    scheduler: Scheduler | None = None

    def resolve_scheduler(self) -> Scheduler:
        """Pick the scheduler for the calling context."""
        if self.scheduler is not None:
            return self.scheduler

        backend = self.settings.scheduler_backend
        if backend == "turns":
            return self.turns

        loop = running_loop()
        if loop is not None:
            return LoopScheduler(loop)
        if backend == "asyncio":
            raise SchedulerError(
                "PLEDGE_SCHEDULER=asyncio requires a running event loop"
            )
        logger.debug("No running event loop; deferring onto the shared turn queue")
        return self.turns


def get_runtime() -> PromiseRuntime:
    """Return the process-wide runtime, building it from env on first use."""
    global _RUNTIME
    with _LOCK:
        if _RUNTIME is None:
            settings = PromiseSettings.from_env()
            _RUNTIME = PromiseRuntime(
                settings=settings,
                metrics=create_metrics(settings),
            )
        return _RUNTIME


def configure(
    *,
    settings: PromiseSettings | None = None,
    scheduler: Scheduler | None = None,
    metrics: PromiseMetrics | None = None,
    turns: TurnQueue | None = None,
) -> PromiseRuntime:
    """
    Replace the process-wide runtime.

    Unspecified collaborators are rebuilt from `settings` (or from the
    environment when no settings are given).
    """
    global _RUNTIME
    resolved_settings = settings or PromiseSettings.from_env()
    runtime = PromiseRuntime(
        settings=resolved_settings,
        metrics=metrics or create_metrics(resolved_settings),
        turns=turns or TurnQueue(),
        scheduler=scheduler,
    )
    with _LOCK:
        _RUNTIME = runtime
    return runtime


def reset_runtime() -> None:
    """Drop the process-wide runtime so the next use reloads it from env."""
    global _RUNTIME
    with _LOCK:
        _RUNTIME = None
