"""Leading-reset timer debounce for fire-and-forget callbacks."""

from collections.abc import Callable
from functools import partial
from typing import Any

from pacer.config import validate_delay
from pacer.schedulers.base import Handle, Scheduler
from pacer.schedulers.loop import LoopScheduler


class TimerDebouncer:
    """Run only the last callback handed to it, ``delay`` seconds later.

    How it works:
        - Every call cancels the pending callback, if any.
        - The new callback is scheduled ``delay`` seconds from now.
        - When calls stop, the last callback runs exactly once.

    Example::

        delay=0.5s

        t=0.0s trigger(save_a)   -> schedule save_a at 0.5s
        t=0.2s trigger(save_b)   -> cancel save_a, schedule save_b at 0.7s
        t=0.7s timer expires     -> save_b()

    Exceptions raised by the callback are not caught here. On the default
    scheduler they reach the event loop's exception handler.

    Args:
        delay: Quiet period in seconds.
        scheduler: Where timers are scheduled. Defaults to the running loop.
    """

    __slots__ = ("_delay", "_handle", "_scheduler")

    def __init__(self, delay: float, *, scheduler: Scheduler | None = None) -> None:
        self._delay = validate_delay(delay)
        self._scheduler = scheduler or LoopScheduler()
        self._handle: Handle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @delay.setter
    def delay(self, value: float) -> None:
        self._delay = validate_delay(value)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, callback: Callable[[], Any]) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._scheduler.call_later(self._delay, partial(self._run, callback))

    def cancel(self) -> None:
        """Drop the pending callback without running it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _run(self, callback: Callable[[], Any]) -> None:
        self._handle = None
        callback()

    def __repr__(self) -> str:
        return f"TimerDebouncer(delay={self.delay}, pending={self.pending})"
