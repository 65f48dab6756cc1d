"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Scheduler backed by an asyncio event loop.
"""

from __future__ import annotations

import asyncio

from ..errors import SchedulerError
from .types import Action


def running_loop() -> asyncio.AbstractEventLoop | None:
    """Return the loop running in this thread, or ``None``."""
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class LoopScheduler:
    """
    Schedule actions on an asyncio loop.

    Calls coming from a thread other than the loop's own are routed through
    ``call_soon_threadsafe`` so producers on worker threads can settle
    promises owned by the loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        if loop is None:
            loop = running_loop()
            if loop is None:
                raise SchedulerError(
                    "LoopScheduler requires a running event loop or an explicit loop"
                )
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def _on_loop_thread(self) -> bool:
        return running_loop() is self._loop

    def call_soon(self, action: Action) -> None:
        if self._on_loop_thread():
            self._loop.call_soon(action)
        else:
            self._loop.call_soon_threadsafe(action)

    def call_later(self, delay_s: float, action: Action) -> None:
        delay = max(0.0, delay_s)
        if self._on_loop_thread():
            self._loop.call_later(delay, action)
            return
        self._loop.call_soon_threadsafe(self._loop.call_later, delay, action)
