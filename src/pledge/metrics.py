"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics adapters for promise dispatch observability.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from .settings import PromiseSettings

PROMISES_SETTLED = "promises_settled"
PROGRESS_CALLBACK_ERRORS = "progress_callback_errors"
LATE_LISTENER_REPLAYS = "late_listener_replays"


class PromiseMetrics(Protocol):
    """Minimal metrics interface for promise dispatch instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpPromiseMetrics:
    """Default metrics sink when no metrics backend is configured."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


def create_metrics(settings: PromiseSettings) -> PromiseMetrics:
    """Build the metrics sink selected by `settings.metrics_backend`."""
    if settings.metrics_backend == "prometheus":
        from .prometheus import PrometheusPromiseMetrics

        return PrometheusPromiseMetrics(namespace=settings.metrics_namespace)
    return NoOpPromiseMetrics()
