"""Promise-style debouncer that settles every caller with one invocation."""

from __future__ import annotations

import asyncio
import inspect
import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pacer.config import validate_delay
from pacer.schedulers.loop import LoopScheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from pacer.schedulers.base import Handle, Scheduler

logger = logging.getLogger(__name__)

R = TypeVar("R")


class _Session:
    """State of one debounce window: the shared future and the latest call."""

    __slots__ = ("args", "future", "handle", "kwargs")

    def __init__(self, future: asyncio.Future[Any]) -> None:
        self.future = future
        self.handle: Handle | None = None
        self.args: tuple[Any, ...] = ()
        self.kwargs: dict[str, Any] = {}

    def cancel_timer(self) -> None:
        if self.handle is not None:
            self.handle.cancel()
            self.handle = None


def _settle(future: asyncio.Future[Any], task: asyncio.Future[Any]) -> None:
    """Copy the outcome of *task* onto *future* unless a caller cancelled it."""
    if task.cancelled():
        future.cancel()
        return
    exc = task.exception()
    if future.done():
        return
    if exc is not None:
        future.set_exception(exc)
    else:
        future.set_result(task.result())


class CoalescingDebouncer(Generic[R]):
    """Collapse a burst of calls into one call made with the last arguments.

    Every call made while a timer is pending returns the *same* future. When
    the quiet period expires the session is detached first, then *action* is
    invoked once with the most recent arguments, and the shared future settles
    with its outcome. A call that arrives while *action* is still running
    starts a fresh session.

    *action* may be a plain function or return an awaitable. Exceptions it
    raises, synchronously or from the awaitable, are set on the shared future
    so that every caller sees them.

    Cancelling the shared future, for example through ``asyncio.wait_for``
    timing out, ends the session: the next call starts a new one with a
    fresh future.

    Example::

        delay=0.05s

        t=0.00s search("a")   -> future F, fire at 0.05s
        t=0.01s search("ab")  -> future F, fire at 0.06s
        t=0.02s search("abc") -> future F, fire at 0.07s
        t=0.07s timer expires -> action("abc"), F resolves for all three

    Args:
        action: The callable to debounce.
        delay: Quiet period in seconds.
        scheduler: Where timers are scheduled. Defaults to the running loop.

    Complexity:
        Time:   O(1) per call
        Memory: O(1) per session plus in-flight action tasks
    """

    __slots__ = ("_action", "_closed", "_delay", "_in_flight", "_scheduler", "_session")

    def __init__(
        self,
        action: Callable[..., R],
        delay: float,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        if not callable(action):
            raise TypeError(f"action must be callable, got {action!r}")
        self._action = action
        self._delay = validate_delay(delay)
        self._scheduler = scheduler or LoopScheduler()
        self._session: _Session | None = None
        self._in_flight: set[asyncio.Future[Any]] = set()
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    @delay.setter
    def delay(self, value: float) -> None:
        self._delay = validate_delay(value)

    @property
    def pending(self) -> bool:
        """True while a session is waiting for its timer."""
        return self._session is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Future[R]:
        self._ensure_open()
        session = self._session
        if session is not None:
            session.cancel_timer()
            if session.future.done():
                # A caller cancelled the shared future; that session is over.
                session = None
        if session is None:
            session = self._session = _Session(self._scheduler.create_future())

        session.args = args
        session.kwargs = kwargs
        session.handle = self._scheduler.call_later(self._delay, self._fire)
        return session.future

    def flush(self) -> asyncio.Future[R] | None:
        """Fire the pending session now and return its future, if any."""
        session = self._take()
        if session is None:
            return None
        self._invoke(session)
        return session.future

    def cancel(self) -> None:
        """Drop the pending session; its callers see ``CancelledError``."""
        session = self._take()
        if session is not None:
            session.future.cancel()

    async def close(self) -> None:
        """Flush the pending session and wait for in-flight actions to finish."""
        if self._closed:
            return
        self._closed = True
        self.flush()
        if self._in_flight:
            await asyncio.wait(set(self._in_flight))

    async def __aenter__(self) -> CoalescingDebouncer[R]:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    def _take(self) -> _Session | None:
        """Detach the current session so later calls start a new one."""
        session, self._session = self._session, None
        if session is not None:
            session.cancel_timer()
        return session

    def _fire(self) -> None:
        session = self._take()
        if session is not None:
            self._invoke(session)

    def _invoke(self, session: _Session) -> None:
        future = session.future
        logger.debug("Invoking %r after coalesced calls", self._action)
        try:
            result = self._action(*session.args, **session.kwargs)
        except Exception as exc:
            logger.debug("Debounced action %r raised %r", self._action, exc)
            if not future.done():
                future.set_exception(exc)
            return

        if not inspect.isawaitable(result):
            if not future.done():
                future.set_result(result)
            return

        task = asyncio.ensure_future(result)
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        task.add_done_callback(partial(_settle, future))

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Debouncer is closed")

    def __repr__(self) -> str:
        return (
            f"CoalescingDebouncer(action={getattr(self._action, '__qualname__', self._action)!r}, "
            f"delay={self._delay}, "
            f"pending={self.pending}, "
            f"closed={self._closed})"
        )
