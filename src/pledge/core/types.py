"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Event, state, thenable and listener types for the promise core.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .promise import Promise

EventKind = Literal["resolve", "reject", "progress"]
PromiseState = Literal["pending", "completed"]

RESOLVE: EventKind = "resolve"
REJECT: EventKind = "reject"
PROGRESS: EventKind = "progress"

Callback = Callable[[Any], Any]


@runtime_checkable
class Thenable(Protocol):
    """
    Capability implemented by anything a promise can subscribe to.

    `then` must eventually call at most one of `on_resolve` / `on_reject`
    with a single payload, and may call `on_progress` any number of times
    before that.
    """

    def then(
        self,
        on_resolve: Callback | None = None,
        on_reject: Callback | None = None,
        on_progress: Callback | None = None,
    ) -> Any:
        ...


def is_thenable(value: object) -> bool:
    """Whether `value` exposes a callable `then` subscription."""
    return isinstance(value, Thenable) and callable(getattr(value, "then", None))


@dataclass(frozen=True, slots=True)
class Outcome:
    """Terminal event stored on a completed promise for late listeners."""

    kind: EventKind
    payload: Any = None


@dataclass(slots=True)
class Listener:
    """
    One registration made by `Promise.then`.

    Attributes:
        continuation: Promise receiving the chained result.
        on_resolve: Success callback, or ``None`` to forward unchanged.
        on_reject: Failure callback, or ``None`` to forward unchanged.
        on_progress: Progress callback, or ``None`` to drop progress.
    """

    continuation: Promise[Any]
    on_resolve: Callback | None = None
    on_reject: Callback | None = None
    on_progress: Callback | None = None

    def callback_for(self, kind: EventKind) -> Callback | None:
        if kind == RESOLVE:
            return self.on_resolve
        if kind == REJECT:
            return self.on_reject
        return self.on_progress
