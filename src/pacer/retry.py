"""Retry an action with capped exponential backoff and symmetric jitter."""

from __future__ import annotations

import inspect
import logging
import random
from typing import TYPE_CHECKING, Any, TypeVar

from pacer.config import RetryConfig
from pacer.schedulers.loop import LoopScheduler

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pacer.schedulers.base import Scheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, config: RetryConfig) -> float:
    """Pre-jitter delay after the failed attempt *attempt* (0-based).

    ``min(initial_delay * 2**attempt, max_delay)``. Growth that overflows a
    float saturates at ``max_delay``.
    """
    if config.initial_delay == 0:
        return 0.0
    try:
        raw = config.initial_delay * 2.0**attempt
    except OverflowError:
        return config.max_delay
    return min(raw, config.max_delay)


def jittered_delay(
    attempt: int,
    config: RetryConfig,
    rng: random.Random | None = None,
) -> float:
    """Backoff for *attempt* with ``± jitter_factor`` noise, clamped at zero.

    Jitter is added after the ``max_delay`` cap, so the result may exceed
    ``max_delay`` by up to ``jitter_factor * max_delay``.
    """
    delay = backoff_delay(attempt, config)
    unit = (rng or random).random() * 2 - 1
    return max(0.0, delay + delay * config.jitter_factor * unit)


async def retry_with_backoff(
    action: Callable[[], Awaitable[T] | T],
    config: RetryConfig | None = None,
    *,
    scheduler: Scheduler | None = None,
    rng: random.Random | None = None,
) -> T:
    """Invoke *action* until it succeeds or ``config.max_retries`` is spent.

    Attempts run strictly one after another. Between attempts the task sleeps
    for :func:`jittered_delay`. Failures from earlier attempts are logged and
    discarded.

    Args:
        action: Zero-argument callable. Its result is awaited when awaitable.
        config: Retry budget and backoff shape. Defaults to ``RetryConfig()``.
        scheduler: Where the backoff sleeps happen. Defaults to the running loop.
        rng: Source of jitter. Defaults to the ``random`` module.

    Returns:
        The result of the first successful attempt.

    Raises:
        The exception from the final attempt once the budget is exhausted, or
        the first exception that does not match ``config.retry_on``.
    """
    config = config or RetryConfig()
    scheduler = scheduler or LoopScheduler()
    total = config.total_attempts

    for attempt in range(total):
        try:
            result: Any = action()
            if inspect.isawaitable(result):
                result = await result
            return result
        except config.retry_on as exc:
            if attempt == config.max_retries:
                logger.error("Action failed after %d attempt(s): %r", total, exc)
                raise

            delay = jittered_delay(attempt, config, rng)
            logger.warning(
                "Attempt %d/%d failed (%r), retrying in %.3fs",
                attempt + 1,
                total,
                exc,
                delay,
            )

        await scheduler.sleep(delay)

    raise AssertionError("unreachable: retry loop exited without a result")
