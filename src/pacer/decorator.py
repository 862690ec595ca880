"""Decorator API for debouncing and retrying functions."""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from functools import partial, wraps
from typing import Any, TypeVar, cast, overload

from pacer.coalescing import CoalescingDebouncer
from pacer.config import RetryConfig
from pacer.retry import retry_with_backoff
from pacer.schedulers.base import Scheduler

F = TypeVar("F", bound=Callable[..., Any])
AF = TypeVar("AF", bound=Callable[..., Awaitable[Any]])

DEFAULT_DEBOUNCE_DELAY = 0.3


@overload
def debounce(
    func: F,
    /,
) -> Callable[..., "asyncio.Future[Any]"]: ...


@overload
def debounce(
    *,
    delay: float = DEFAULT_DEBOUNCE_DELAY,
    scheduler: Scheduler | None = None,
) -> Callable[[F], Callable[..., "asyncio.Future[Any]"]]: ...


def debounce(
    func: F | None = None,
    /,
    *,
    delay: float = DEFAULT_DEBOUNCE_DELAY,
    scheduler: Scheduler | None = None,
) -> Any:
    """Decorator that coalesces bursts of calls into a single invocation.

    The decorated function returns an ``asyncio.Future`` instead of its usual
    result. All calls made within one quiet period share that future, and it
    settles with the outcome of one call to the original function made with
    the last arguments. Works on sync and async functions, and on methods
    (``self`` is captured like any other argument, so all instances share
    one debouncer).

    Args:
        func: The function to decorate (when used without parentheses).
        delay: Quiet-period delay in seconds.
        scheduler: Where timers are scheduled. Defaults to the running loop.

    Examples:
    ```python
        @debounce(delay=0.5)
        async def search(query: str) -> list[str]:
            return await backend.search(query)

        first = search("py")
        second = search("pyth")
        assert first is second
        results = await second  # backend.search("pyth") ran once
    ```
    """

    def decorator(fn: F) -> Callable[..., "asyncio.Future[Any]"]:
        debouncer: CoalescingDebouncer[Any] = CoalescingDebouncer(fn, delay, scheduler=scheduler)

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> "asyncio.Future[Any]":
            return debouncer(*args, **kwargs)

        wrapper.debouncer = debouncer  # type: ignore[attr-defined]
        wrapper.flush = debouncer.flush  # type: ignore[attr-defined]
        wrapper.cancel = debouncer.cancel  # type: ignore[attr-defined]
        wrapper.close = debouncer.close  # type: ignore[attr-defined]

        return wrapper

    if func is not None:
        return decorator(func)

    return decorator


@overload
def retrying(
    func: AF,
    /,
) -> AF: ...


@overload
def retrying(
    *,
    max_retries: int = 3,
    initial_delay: float = 0.1,
    max_delay: float = 10.0,
    jitter_factor: float = 0.3,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    scheduler: Scheduler | None = None,
) -> Callable[[AF], AF]: ...


def retrying(
    func: AF | None = None,
    /,
    *,
    max_retries: int = 3,
    initial_delay: float = 0.1,
    max_delay: float = 10.0,
    jitter_factor: float = 0.3,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    scheduler: Scheduler | None = None,
) -> AF | Callable[[AF], AF]:
    """Decorator that retries an async function with exponential backoff.

    Each call to the decorated function runs its own retry sequence through
    :func:`pacer.retry.retry_with_backoff`.

    Args:
        func: The function to decorate (when used without parentheses).
        max_retries: Retries after the first attempt.
        initial_delay: Backoff before the first retry, in seconds.
        max_delay: Cap on the pre-jitter backoff, in seconds.
        jitter_factor: Fraction of the backoff used as random jitter.
        retry_on: Exception types worth retrying.
        scheduler: Where backoff sleeps happen. Defaults to the running loop.
    """
    config = RetryConfig(
        max_retries=max_retries,
        initial_delay=initial_delay,
        max_delay=max_delay,
        jitter_factor=jitter_factor,
        retry_on=retry_on,
    )

    def decorator(fn: AF) -> AF:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError("@retrying only supports async functions.")

        @wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await retry_with_backoff(partial(fn, *args, **kwargs), config, scheduler=scheduler)

        wrapper.config = config  # type: ignore[attr-defined]

        return cast("AF", wrapper)

    if func is not None:
        return decorator(func)

    return decorator
