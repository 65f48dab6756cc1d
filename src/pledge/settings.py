"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Promise runtime settings and explicit environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from .errors import SettingsError

SchedulerBackend = Literal["auto", "asyncio", "turns"]
MetricsBackend = Literal["none", "prometheus"]

_SCHEDULER_BACKENDS = ("auto", "asyncio", "turns")
_METRICS_BACKENDS = ("none", "prometheus")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise SettingsError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True, slots=True)
class PromiseSettings:
    """
    Explicit settings used by the scheduler, dispatch logging and metrics.

    Attributes:
        scheduler_backend: `auto` picks the running asyncio loop and falls back
            to the shared turn queue; `asyncio` and `turns` force one backend.
        default_delay_s: Delay applied when `delayed` is asked for a timer
            without an explicit delay.
        log_dropped_progress_errors: Log progress-callback exceptions at DEBUG
            before dropping them.
        metrics_backend: Counter sink used by the runtime.
        metrics_namespace: Namespace prefix for exported counters.
    """

    scheduler_backend: SchedulerBackend = "auto"
    default_delay_s: float = 0.0
    log_dropped_progress_errors: bool = True
    metrics_backend: MetricsBackend = "none"
    metrics_namespace: str = "pledge"

    def __post_init__(self) -> None:
        if self.scheduler_backend not in _SCHEDULER_BACKENDS:
            raise SettingsError(
                f"Unknown scheduler backend: {self.scheduler_backend}"
            )
        if self.metrics_backend not in _METRICS_BACKENDS:
            raise SettingsError(f"Unknown metrics backend: {self.metrics_backend}")
        if self.default_delay_s < 0:
            raise SettingsError("default_delay_s must be >= 0")
        if not self.metrics_namespace.strip():
            raise SettingsError("metrics_namespace must be a non-empty string")

    @staticmethod
    def from_env() -> "PromiseSettings":
        """Load settings from `PLEDGE_*` environment variables."""
        raw_delay = _env_first("PLEDGE_DEFAULT_DELAY_S", default="0") or "0"
        try:
            default_delay_s = float(raw_delay)
        except ValueError as exc:
            raise SettingsError(
                f"PLEDGE_DEFAULT_DELAY_S must be a number, got {raw_delay!r}"
            ) from exc

        log_flag = _env_first("PLEDGE_LOG_DROPPED_PROGRESS_ERRORS")
        return PromiseSettings(
            scheduler_backend=(
                _env_first("PLEDGE_SCHEDULER", default="auto") or "auto"
            ).lower(),  # type: ignore[arg-type]
            default_delay_s=default_delay_s,
            log_dropped_progress_errors=(
                True
                if log_flag is None
                else _parse_bool("PLEDGE_LOG_DROPPED_PROGRESS_ERRORS", log_flag)
            ),
            metrics_backend=(
                _env_first("PLEDGE_METRICS_BACKEND", default="none") or "none"
            ).lower(),  # type: ignore[arg-type]
            metrics_namespace=(
                _env_first("PLEDGE_METRICS_NAMESPACE", default="pledge") or "pledge"
            ),
        )
