"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Fan-in aggregation of a fixed set of promises.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from ..scheduling.deferred import delayed
from .promise import Promise
from .types import is_thenable

logger = logging.getLogger("pledge.aggregate")


def _collect(promises: tuple[Any, ...]) -> list[Any]:
    if len(promises) == 1:
        only = promises[0]
        if only is None:
            return []
        if not is_thenable(only) and isinstance(only, Iterable) and not isinstance(
            only, (str, bytes)
        ):
            return list(only)
    return list(promises)


def when(*promises: Any) -> Promise[list[Any]]:
    """
    Combine promises into one that settles after every input has settled.

    Accepts either one iterable of promises or the promises as positional
    arguments. Plain values are wrapped with `Promise.wrap`.

    The result resolves with the index-aligned list of values once all
    inputs have completed. If any input rejected, it instead rejects with the
    first error seen, still only after every input has settled. Before the
    final settle a progress event carries the completed fraction
    ``count / total``. An empty input resolves with ``[]`` on the next turn.
    """
    inputs = [Promise.wrap(item) for item in _collect(promises)]
    total = len(inputs)
    aggregate: Promise[list[Any]] = Promise()
    results: list[Any] = [None] * total

    if total == 0:
        delayed(lambda: aggregate.resolve(results))
        return aggregate

    lock = threading.Lock()
    state: dict[str, Any] = {"count": 0, "failed": False, "error": None}

    def done() -> None:
        with lock:
            state["count"] += 1
            count = state["count"]
        if count < total:
            aggregate.progress(count / total)
        elif state["failed"]:
            logger.debug("Aggregate of %d promises rejected", total)
            aggregate.reject(state["error"])
        else:
            aggregate.resolve(results)

    def setup(index: int, item: Any) -> None:
        def on_resolve(value: Any) -> None:
            results[index] = value
            done()

        def on_reject(error: Any) -> None:
            with lock:
                if not state["failed"]:
                    state["failed"] = True
                    state["error"] = error
            done()

        item.then(on_resolve, on_reject)

    for index, item in enumerate(inputs):
        setup(index, item)
    return aggregate
