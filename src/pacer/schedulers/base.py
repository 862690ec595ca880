"""Abstract scheduling capability that every timing primitive is built on."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Protocol


class Handle(Protocol):
    """A scheduled callback that can be cancelled.

    ``cancel`` must be idempotent: calling it on a handle that already fired
    or was already cancelled is a no-op. ``asyncio.TimerHandle`` satisfies this.
    """

    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Base class for all schedulers.

    A scheduler answers three questions for the primitives: what time is it,
    run this callback later, and suspend the current task for a while.
    Subclasses must implement :meth:`time`, :meth:`call_later` and
    :meth:`sleep`.
    """

    __slots__ = ()

    @abstractmethod
    def time(self) -> float:
        """Return the scheduler's current time in seconds."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> Handle:
        """Run *callback* once after *delay* seconds."""

    @abstractmethod
    async def sleep(self, delay: float) -> None:
        """Suspend the calling task for *delay* seconds."""

    def create_future(self) -> asyncio.Future[Any]:
        """Create a future bound to the running event loop."""
        return asyncio.get_running_loop().create_future()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(time={self.time()})"
