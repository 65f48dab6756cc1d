from __future__ import annotations

import pytest

from pledge import PromiseSettings, TurnQueue, configure, reset_runtime

_ENV_NAMES = (
    "PLEDGE_SCHEDULER",
    "PLEDGE_DEFAULT_DELAY_S",
    "PLEDGE_LOG_DROPPED_PROGRESS_ERRORS",
    "PLEDGE_METRICS_BACKEND",
    "PLEDGE_METRICS_NAMESPACE",
)


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    reset_runtime()
    yield
    reset_runtime()


@pytest.fixture
def turns() -> TurnQueue:
    queue = TurnQueue()
    configure(settings=PromiseSettings(scheduler_backend="turns"), turns=queue)
    return queue
