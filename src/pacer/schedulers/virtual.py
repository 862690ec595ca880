"""Manually advanced scheduler for deterministic timing tests."""

import heapq
import itertools
from collections.abc import Callable
from typing import Any

from pacer.config import validate_delay
from pacer.schedulers.base import Scheduler


class VirtualHandle:
    """Handle returned by :meth:`VirtualClock.call_later`."""

    __slots__ = ("_callback", "_cancelled", "_fired", "when")

    def __init__(self, when: float, callback: Callable[[], Any]) -> None:
        self.when = when
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        """True while the callback is still waiting to run."""
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        if not self._fired:
            self._cancelled = True

    def _run(self) -> None:
        self._fired = True
        self._callback()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "fired" if self._fired else "pending"
        return f"VirtualHandle(when={self.when}, {state})"


def _wake(future: Any) -> None:
    if not future.done():
        future.set_result(None)


class VirtualClock(Scheduler):
    """A clock that only moves when told to.

    Callbacks are kept in a heap ordered by deadline, then by scheduling
    order. Nothing runs until :meth:`advance` is called, which makes timer
    races reproducible.

    Example::

        clock = VirtualClock()
        trigger = TimerDebouncer(0.05, scheduler=clock)

        trigger(lambda: print("first"))
        clock.advance(0.03)
        trigger(lambda: print("second"))
        clock.advance(0.05)  # prints "second" at t=0.08

    Tasks suspended in :meth:`sleep` are woken by ``advance`` but only resume
    once the test yields to the event loop.

    Args:
        start: Initial virtual time in seconds.
    """

    __slots__ = ("_counter", "_now", "_queue")

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, VirtualHandle]] = []
        self._counter = itertools.count()

    def time(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def call_later(self, delay: float, callback: Callable[[], Any]) -> VirtualHandle:
        validate_delay(delay)
        handle = VirtualHandle(self._now + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        return handle

    async def sleep(self, delay: float) -> None:
        future = self.create_future()
        handle = self.call_later(delay, lambda: _wake(future))
        try:
            await future
        finally:
            handle.cancel()

    def advance(self, delta: float) -> int:
        """Move time forward by *delta*, running every callback that falls due.

        Exceptions raised by a callback propagate to the caller; callbacks
        that have not run yet stay queued.

        Returns:
            The number of callbacks that ran.
        """
        validate_delay(delta, "delta")
        target = self._now + delta
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = when
            ran += 1
            handle._run()
        self._now = target
        return ran

    def next_deadline(self) -> float | None:
        """Deadline of the earliest live callback, or None when idle."""
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)
        return self._queue[0][0] if self._queue else None

    def __repr__(self) -> str:
        return f"VirtualClock(time={self._now}, pending={self.pending})"
