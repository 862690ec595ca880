"""Scheduler backed by the running asyncio event loop."""

import asyncio
from collections.abc import Callable
from typing import Any

from pacer.schedulers.base import Scheduler


class LoopScheduler(Scheduler):
    """Delegates to whichever asyncio loop is running at call time.

    The loop is looked up on every call rather than cached, so one instance
    can be shared by primitives that outlive a single loop (for example a
    module-level ``@debounce`` used across ``asyncio.run`` invocations).
    Calling any method outside a running loop raises ``RuntimeError``.
    """

    __slots__ = ()

    def time(self) -> float:
        return asyncio.get_running_loop().time()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)

    async def sleep(self, delay: float) -> None:
        await asyncio.sleep(delay)

    def __repr__(self) -> str:
        return "LoopScheduler()"
