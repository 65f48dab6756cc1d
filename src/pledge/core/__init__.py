"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Promise state machine, event dispatch and aggregation.
"""

from .aggregate import when
from .promise import Promise
from .types import (
    PROGRESS,
    REJECT,
    RESOLVE,
    Callback,
    EventKind,
    Listener,
    Outcome,
    PromiseState,
    Thenable,
    is_thenable,
)

__all__ = [
    "Promise",
    "when",
    "Thenable",
    "is_thenable",
    "Listener",
    "Outcome",
    "Callback",
    "EventKind",
    "PromiseState",
    "RESOLVE",
    "REJECT",
    "PROGRESS",
]
