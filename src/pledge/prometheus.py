"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Prometheus counters for promise dispatch.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from .metrics import LATE_LISTENER_REPLAYS, PROGRESS_CALLBACK_ERRORS, PROMISES_SETTLED

# name -> (help text, label names)
PROMISE_COUNTERS: dict[str, tuple[str, tuple[str, ...]]] = {
    PROMISES_SETTLED: (
        "Promises completed, by terminal outcome (resolve or reject).",
        ("outcome",),
    ),
    PROGRESS_CALLBACK_ERRORS: (
        "Exceptions raised by progress callbacks and dropped.",
        (),
    ),
    LATE_LISTENER_REPLAYS: (
        "Listeners registered on an already completed promise and replayed.",
        (),
    ),
}

_LOCK = threading.Lock()
_DECLARED: dict[tuple[int, str], dict[str, Any]] = {}


def _declare(counter_cls: Any, namespace: str, registry: Any) -> dict[str, Any]:
    key = (id(registry), namespace)
    with _LOCK:
        counters = _DECLARED.get(key)
        if counters is None:
            counters = {
                name: counter_cls(
                    name=name,
                    documentation=documentation,
                    namespace=namespace,
                    labelnames=labelnames,
                    registry=registry,
                )
                for name, (documentation, labelnames) in PROMISE_COUNTERS.items()
            }
            _DECLARED[key] = counters
        return counters


class PrometheusPromiseMetrics:
    """
    Prometheus-backed promise metrics adapter.

    Requires `prometheus_client` package. The promise counters are declared
    up front, so every series is exported at zero before the first settle.
    Adapters sharing a registry and namespace share the same counters.
    """

    def __init__(self, *, namespace: str = "pledge", registry: Any | None = None) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusPromiseMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY
        self._counters = _declare(Counter, namespace, self._registry)

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        counter = self._counters.get(name)
        if counter is None:
            raise ValueError(f"Unknown promise metric: {name!r}")

        labelnames = PROMISE_COUNTERS[name][1]
        if labelnames:
            tags = tags or {}
            counter.labels(*[str(tags.get(label, "")) for label in labelnames]).inc(value)
        else:
            counter.inc(value)
