"""Schedulers that decide when the timing primitives fire."""

from pacer.schedulers.base import Handle, Scheduler
from pacer.schedulers.loop import LoopScheduler
from pacer.schedulers.virtual import VirtualClock, VirtualHandle

__all__ = [
    "Handle",
    "LoopScheduler",
    "Scheduler",
    "VirtualClock",
    "VirtualHandle",
]
