"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the promise runtime.
"""

from __future__ import annotations

from typing import Any


class PledgeError(RuntimeError):
    """Base error for promise runtime failures."""


class RejectionError(PledgeError):
    """
    Structured rejection reason.

    Used when a rejection carries more than a bare error value (callback-style
    producers reporting extra arguments) or when a non-exception reason has to
    be raised, e.g. while awaiting a rejected promise.

    Attributes:
        reason: Original rejection value.
        details: Extra values reported alongside the reason.
    """

    def __init__(self, reason: Any, *, details: tuple[Any, ...] = ()) -> None:
        self.reason = reason
        self.details = tuple(details)
        message = f"Promise rejected: {reason!r}"
        if self.details:
            message = f"{message} (details={self.details!r})"
        super().__init__(message)


class SchedulerError(PledgeError):
    """Raised when deferred work cannot be scheduled."""


class SettingsError(PledgeError, ValueError):
    """Raised when runtime settings are invalid."""
