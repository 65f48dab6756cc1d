"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Adapters between promises, foreign thenables and asyncio awaitables.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any

from .core.promise import Promise
from .core.types import is_thenable
from .errors import RejectionError, SchedulerError
from .scheduling.loop import running_loop

logger = logging.getLogger("pledge.interop")


def _as_exception(reason: Any) -> BaseException:
    if isinstance(reason, BaseException):
        return reason
    return RejectionError(reason)


def from_awaitable(
    awaitable: Any,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Promise[Any]:
    """
    Schedule an awaitable and mirror its outcome into a new promise.

    A cancelled future rejects the promise with ``asyncio.CancelledError``.
    Without an explicit `loop` a running event loop is required, otherwise
    `SchedulerError` is raised.
    """
    if loop is None and running_loop() is None:
        raise SchedulerError("from_awaitable requires a running event loop or an explicit loop")
    future = asyncio.ensure_future(awaitable, loop=loop)
    promise: Promise[Any] = Promise()

    def _settle(done: asyncio.Future[Any]) -> None:
        if done.cancelled():
            promise.reject(asyncio.CancelledError())
            return
        error = done.exception()
        if error is not None:
            promise.reject(error)
        else:
            promise.resolve(done.result())

    future.add_done_callback(_settle)
    return promise


def to_future(
    promise: Any,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> asyncio.Future[Any]:
    """
    Return an asyncio future completed by `promise`.

    Rejection reasons that are not exceptions are raised as
    `RejectionError`. Progress events are not forwarded.
    """
    target_loop = loop or asyncio.get_running_loop()
    future: asyncio.Future[Any] = target_loop.create_future()

    def _on_loop(apply: Any, payload: Any) -> None:
        if running_loop() is target_loop:
            apply(payload)
        else:
            target_loop.call_soon_threadsafe(apply, payload)

    def _set_result(value: Any) -> None:
        if not future.done():
            future.set_result(value)

    def _set_exception(reason: Any) -> None:
        if not future.done():
            future.set_exception(_as_exception(reason))

    promise.then(
        lambda value: _on_loop(_set_result, value),
        lambda reason: _on_loop(_set_exception, reason),
    )
    return future


def adapt(value: Any) -> Promise[Any]:
    """
    Convert `value` into a `Promise`.

    Promises pass through, foreign thenables are subscribed to, awaitables
    are scheduled on the running loop, and plain values resolve on the next
    turn.
    """
    if isinstance(value, Promise):
        return value
    if is_thenable(value):
        return Promise(value)
    if inspect.isawaitable(value):
        logger.debug("Adapting awaitable %r into a promise", value)
        return from_awaitable(value)
    return Promise.resolved(value)
