from __future__ import annotations

import asyncio

import pytest

from pledge import (
    LoopScheduler,
    PromiseSettings,
    SchedulerError,
    configure,
    current_scheduler,
    delayed,
    get_runtime,
)


class _RecordingScheduler:
    def __init__(self) -> None:
        self.calls: list[tuple[str, float | None]] = []

    def call_soon(self, action) -> None:
        self.calls.append(("soon", None))
        action()

    def call_later(self, delay_s: float, action) -> None:
        self.calls.append(("later", delay_s))
        action()


def test_auto_backend_without_loop_uses_shared_turn_queue():
    runtime = get_runtime()
    assert current_scheduler() is runtime.turns

    log: list[str] = []
    delayed(lambda: log.append("ran"))
    assert log == []

    runtime.turns.run_until_idle()
    assert log == ["ran"]


def test_auto_backend_inside_loop_uses_loop_scheduler():
    async def scenario() -> None:
        assert isinstance(current_scheduler(), LoopScheduler)

    asyncio.run(scenario())


def test_asyncio_backend_without_loop_raises():
    configure(settings=PromiseSettings(scheduler_backend="asyncio"))
    with pytest.raises(SchedulerError, match="running event loop"):
        delayed(lambda: None)


def test_turns_backend_ignores_running_loop():
    async def scenario() -> None:
        runtime = configure(settings=PromiseSettings(scheduler_backend="turns"))
        assert current_scheduler() is runtime.turns

    asyncio.run(scenario())


def test_explicit_scheduler_wins_and_prefers_call_soon():
    scheduler = _RecordingScheduler()
    configure(settings=PromiseSettings(scheduler_backend="turns"), scheduler=scheduler)

    delayed(lambda: None)
    delayed(lambda: None, 0)
    delayed(lambda: None, 0.25)

    assert scheduler.calls == [("soon", None), ("soon", None), ("later", 0.25)]


def test_default_delay_routes_through_timer():
    scheduler = _RecordingScheduler()
    configure(settings=PromiseSettings(default_delay_s=0.5), scheduler=scheduler)

    delayed(lambda: None)

    assert scheduler.calls == [("later", 0.5)]


def test_environment_selects_backend(monkeypatch):
    monkeypatch.setenv("PLEDGE_SCHEDULER", "turns")

    async def scenario() -> None:
        assert current_scheduler() is get_runtime().turns

    asyncio.run(scenario())
