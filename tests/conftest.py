"""Shared fixtures for pacer tests."""

import asyncio

import pytest

from pacer.config import RetryConfig
from pacer.schedulers.virtual import VirtualClock


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def no_jitter_config():
    return RetryConfig(max_retries=2, initial_delay=0.1, max_delay=10.0, jitter_factor=0.0)


@pytest.fixture
def drain():
    """Yield to the event loop until woken tasks have run their next step."""

    async def _drain(rounds: int = 5) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    return _drain
