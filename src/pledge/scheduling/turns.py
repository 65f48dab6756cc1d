"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Manually driven turn queue for hosts without an event loop.
"""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from collections import deque
from collections.abc import Callable

from .types import Action


class TurnQueue:
    """
    Cooperative run-soon queue with minimum-delay timers.

    Nothing runs until the host drives the queue with `run_once` or
    `run_until_idle`. Each turn runs the actions that were ready when the
    turn started; anything scheduled while the turn is running waits for the
    next one.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._ready: deque[Action] = deque()
        self._timers: list[tuple[float, int, Action]] = []
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def call_soon(self, action: Action) -> None:
        with self._lock:
            self._ready.append(action)

    def call_later(self, delay_s: float, action: Action) -> None:
        due = self._clock() + max(0.0, delay_s)
        with self._lock:
            heapq.heappush(self._timers, (due, next(self._seq), action))

    @property
    def pending_count(self) -> int:
        """Number of queued actions, including timers not yet due."""
        with self._lock:
            return len(self._ready) + len(self._timers)

    def _promote_due_timers(self) -> None:
        now = self._clock()
        while self._timers and self._timers[0][0] <= now:
            _, _, action = heapq.heappop(self._timers)
            self._ready.append(action)

    def _next_due_in(self) -> float | None:
        with self._lock:
            if self._ready:
                return 0.0
            if not self._timers:
                return None
            return max(0.0, self._timers[0][0] - self._clock())

    def run_once(self) -> int:
        """
        Run one turn and return how many actions ran.

        An exception raised by an action propagates; actions left in the
        same turn stay queued.
        """
        with self._lock:
            self._promote_due_timers()
            budget = len(self._ready)

        ran = 0
        while ran < budget:
            with self._lock:
                action = self._ready.popleft()
            ran += 1
            action()
        return ran

    def run_until_idle(self, *, timeout_s: float | None = None) -> int:
        """
        Run turns until nothing is queued, sleeping for pending timers.

        Args:
            timeout_s: Stop waiting for timers after this many seconds.
                ``None`` waits for every timer.

        Returns:
            Total number of actions that ran.
        """
        deadline = None if timeout_s is None else self._clock() + max(timeout_s, 0.0)
        total = 0
        while True:
            total += self.run_once()
            wait_s = self._next_due_in()
            if wait_s is None:
                return total
            remaining = None if deadline is None else deadline - self._clock()
            if remaining is not None and remaining <= 0:
                return total
            if wait_s > 0:
                if remaining is not None:
                    wait_s = min(wait_s, remaining)
                self._sleep(wait_s)
