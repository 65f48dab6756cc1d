"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deferred-execution backends.

``delayed`` runs an action on a later turn of whichever scheduler the
runtime resolves: the running asyncio loop when there is one, otherwise the
shared ``TurnQueue`` that the host drains itself.
"""

from .deferred import current_scheduler, delayed
from .loop import LoopScheduler
from .turns import TurnQueue
from .types import Action, Scheduler

__all__ = [
    "Action",
    "Scheduler",
    "LoopScheduler",
    "TurnQueue",
    "current_scheduler",
    "delayed",
]
