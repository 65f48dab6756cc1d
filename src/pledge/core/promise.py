"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

One-shot promise cell with chained continuations and progress events.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar

from ..errors import RejectionError
from ..metrics import LATE_LISTENER_REPLAYS, PROGRESS_CALLBACK_ERRORS, PROMISES_SETTLED
from ..runtime import get_runtime
from ..scheduling.deferred import delayed
from .types import (
    PROGRESS,
    REJECT,
    RESOLVE,
    Callback,
    EventKind,
    Listener,
    Outcome,
    PromiseState,
    is_thenable,
)

T = TypeVar("T")

logger = logging.getLogger("pledge.promise")


class Promise(Generic[T]):
    """
    Observable cell holding the eventual result (or failure) of a computation.

    A promise is created pending, may emit any number of progress events,
    then completes exactly once through `resolve` or `reject`. Completion
    fires every registered listener in registration order and releases
    them. Listeners registered after completion are replayed immediately
    with the stored outcome, or queued behind the remaining listeners when
    registered while the completing dispatch is still running.

    Construction:
        ``Promise()`` gives a bare pending cell.
        ``Promise(thenable)`` forwards the thenable's events.
        ``Promise(fn)`` calls ``fn(callback)`` synchronously, where
        ``callback(err, *results)`` rejects on a truthy ``err`` and
        resolves with the results otherwise.
    """

    def __init__(self, source: Any = None) -> None:
        self._listeners: list[Listener] = []
        self._outcome: Outcome | None = None
        self._lock = threading.Lock()
        self._dispatching = False
        self._late: list[Listener] = []

        if source is None:
            return
        if is_thenable(source):
            source.then(self.resolve, self.reject, self.progress)
        elif callable(source):
            try:
                source(self._node_callback)
            except Exception as exc:
                self.reject(exc)
        else:
            raise TypeError(
                f"Promise source must be a thenable or a callable, got {type(source).__name__}"
            )

    def _node_callback(self, err: Any = None, *results: Any) -> None:
        if err:
            self.reject(RejectionError(err, details=results) if results else err)
            return
        if not results:
            self.resolve()
        elif len(results) == 1:
            self.resolve(results[0])
        else:
            self.resolve(results)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PromiseState:
        return "pending" if self._outcome is None else "completed"

    @property
    def is_pending(self) -> bool:
        return self._outcome is None

    @property
    def is_resolved(self) -> bool:
        outcome = self._outcome
        return outcome is not None and outcome.kind == RESOLVE

    @property
    def is_rejected(self) -> bool:
        outcome = self._outcome
        return outcome is not None and outcome.kind == REJECT

    @property
    def value(self) -> T | None:
        """Resolved value; raises ``ValueError`` unless resolved."""
        outcome = self._outcome
        if outcome is None or outcome.kind != RESOLVE:
            raise ValueError("Promise is not resolved")
        return outcome.payload

    @property
    def error(self) -> Any:
        """Rejection reason; raises ``ValueError`` unless rejected."""
        outcome = self._outcome
        if outcome is None or outcome.kind != REJECT:
            raise ValueError("Promise is not rejected")
        return outcome.payload

    # ------------------------------------------------------------------
    # Producers
    # ------------------------------------------------------------------

    def resolve(self, value: Any = None) -> None:
        """Complete successfully. No-op once completed."""
        self._emit(RESOLVE, value)

    def reject(self, error: Any = None) -> None:
        """Complete with a failure. No-op once completed."""
        self._emit(REJECT, error)

    def progress(self, info: Any = None) -> None:
        """Report non-terminal progress. Ignored once completed."""
        self._emit(PROGRESS, info)

    def _emit(self, kind: EventKind, payload: Any) -> None:
        with self._lock:
            if self._outcome is not None:
                return
            listeners = list(self._listeners)
            if kind != PROGRESS:
                # Completed before any listener runs so reentrant calls are no-ops.
                self._outcome = Outcome(kind, payload)
                self._listeners.clear()
                self._dispatching = True

        if kind == PROGRESS:
            for listener in listeners:
                # A progress callback may have completed this promise.
                if self._outcome is not None:
                    return
                self._notify(listener, kind, payload)
            return

        get_runtime().metrics.incr(PROMISES_SETTLED, tags={"outcome": kind})
        try:
            for listener in listeners:
                self._notify(listener, kind, payload)
        finally:
            self._drain_late(kind, payload)

    def _drain_late(self, kind: EventKind, payload: Any) -> None:
        while True:
            with self._lock:
                if not self._late:
                    self._dispatching = False
                    return
                listener = self._late.pop(0)
            self._notify(listener, kind, payload)

    def _notify(self, listener: Listener, kind: EventKind, payload: Any) -> None:
        callback = listener.callback_for(kind)
        continuation = listener.continuation
        terminal = kind != PROGRESS

        if callback is None:
            if terminal:
                continuation._emit(kind, payload)
            return

        try:
            result = callback(payload)
        except Exception as exc:
            if terminal:
                continuation.reject(exc)
                return
            runtime = get_runtime()
            runtime.metrics.incr(PROGRESS_CALLBACK_ERRORS)
            if runtime.settings.log_dropped_progress_errors:
                logger.debug("Dropping exception raised by progress callback", exc_info=True)
            return

        if not terminal:
            return
        if is_thenable(result):
            result.then(continuation.resolve, continuation.reject, continuation.progress)
        else:
            continuation.resolve(result)

    # ------------------------------------------------------------------
    # Consumers
    # ------------------------------------------------------------------

    def then(
        self,
        on_resolve: Callback | Any | None = None,
        on_reject: Callback | None = None,
        on_progress: Callback | None = None,
    ) -> Promise[Any]:
        """
        Register callbacks and return the continuation promise.

        A callback's return value resolves the continuation (a returned
        thenable is adopted), and an exception it raises rejects it. Missing
        resolve/reject callbacks forward the outcome unchanged.

        When `on_resolve` is itself a thenable it becomes the continuation:
        this promise's events flow straight into it and it is returned.
        """
        if is_thenable(on_resolve):
            target = on_resolve if isinstance(on_resolve, Promise) else Promise(on_resolve)
            listener = Listener(continuation=target)
        else:
            listener = Listener(
                continuation=Promise(),
                on_resolve=on_resolve,
                on_reject=on_reject,
                on_progress=on_progress,
            )

        with self._lock:
            outcome = self._outcome
            if outcome is None:
                self._listeners.append(listener)
                return listener.continuation
            queued = self._dispatching
            if queued:
                # Replayed after the listeners registered before completion.
                self._late.append(listener)

        get_runtime().metrics.incr(LATE_LISTENER_REPLAYS)
        if queued:
            return listener.continuation
        self._notify(listener, outcome.kind, outcome.payload)
        return listener.continuation

    def always(self, action: Callable[[], Any]) -> Promise[T]:
        """Run `action()` once this promise completes either way; returns self."""

        def _run(_: Any) -> None:
            action()

        self.then(_run, _run)
        return self

    def __await__(self) -> Generator[Any, None, T]:
        from ..interop import to_future

        return to_future(self).__await__()

    def __repr__(self) -> str:
        outcome = self._outcome
        if outcome is None:
            return f"<{type(self).__name__} pending>"
        state = "resolved" if outcome.kind == RESOLVE else "rejected"
        return f"<{type(self).__name__} {state} {outcome.payload!r}>"

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def resolved(value: Any = None) -> Promise[Any]:
        """Promise resolving with `value` on the next turn."""
        promise: Promise[Any] = Promise()
        delayed(lambda: promise.resolve(value))
        return promise

    @staticmethod
    def rejected(error: Any) -> Promise[Any]:
        """Promise rejecting with `error` on the next turn."""
        promise: Promise[Any] = Promise()
        delayed(lambda: promise.reject(error))
        return promise

    @staticmethod
    def do(action: Callable[[], Any]) -> Promise[Any]:
        """Run `action` on the next turn and adopt its result."""
        return Promise.resolved().then(lambda _: action())

    @staticmethod
    def wrap(value: Any) -> Any:
        """Return thenables unchanged; wrap anything else with `resolved`."""
        if is_thenable(value):
            return value
        return Promise.resolved(value)

    @staticmethod
    def maybe(value: Any, action: Callable[[Any], Any]) -> Any:
        """Chain `action` onto a thenable, or call it directly on a plain value."""
        if is_thenable(value):
            return value.then(action)
        return action(value)

    @staticmethod
    def guarded(
        pred: Any,
        action: Callable[[], Any],
        after: Callable[[], Any],
    ) -> Any:
        """Run `action()` then `after()` when `pred` is truthy, else only `after()`."""
        if pred:
            return Promise.wrap(action()).then(lambda _: after())
        return after()

    @staticmethod
    def when(*promises: Any) -> Promise[list[Any]]:
        """Aggregate promises; see `pledge.core.aggregate.when`."""
        from .aggregate import when

        return when(*promises)

