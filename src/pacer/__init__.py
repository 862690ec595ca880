"""Pacer: asyncio timing primitives for debouncing and retrying.

Provides a timer debouncer, a coalescing debouncer that settles every caller
with one invocation, and an exponential-backoff retrier. Every primitive takes
an injectable scheduler so timing can be tested with a virtual clock.

Debounce usage:

    from pacer import debounce

    @debounce(delay=0.3)
    async def search(query: str) -> list[str]:
        return await backend.search(query)

    a = search("py")
    b = search("python")  # same future as ``a``
    results = await b     # backend.search("python") ran once

Retry usage:

    from pacer import RetryConfig, retry_with_backoff

    body = await retry_with_backoff(fetch, RetryConfig(max_retries=5))
"""

import logging

from pacer.coalescing import CoalescingDebouncer
from pacer.config import RetryConfig, validate_delay
from pacer.decorator import debounce, retrying
from pacer.retry import backoff_delay, jittered_delay, retry_with_backoff
from pacer.schedulers.base import Handle, Scheduler
from pacer.schedulers.loop import LoopScheduler
from pacer.schedulers.virtual import VirtualClock
from pacer.timer import TimerDebouncer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CoalescingDebouncer",
    "Handle",
    "LoopScheduler",
    "RetryConfig",
    "Scheduler",
    "TimerDebouncer",
    "VirtualClock",
    "backoff_delay",
    "debounce",
    "jittered_delay",
    "retry_with_backoff",
    "retrying",
    "validate_delay",
]

__version__ = "0.1.0"
