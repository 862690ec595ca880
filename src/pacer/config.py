"""Configuration types and argument validation for the pacer library."""

import math
from dataclasses import dataclass


def validate_delay(value: float, name: str = "delay") -> float:
    """Return *value* unchanged if it is a usable duration in seconds.

    Raises:
        ValueError: If *value* is negative, NaN or infinite.
    """
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite non-negative number, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Configuration for :func:`pacer.retry.retry_with_backoff`.

    Attributes:
        max_retries: Retries after the first attempt. ``0`` means a single
                     attempt with no backoff.
        initial_delay: Backoff before the first retry, in seconds. Doubles
                       on every further retry.
        max_delay: Cap on the pre-jitter backoff, in seconds.
        jitter_factor: Fraction of the backoff used as symmetric random
                       jitter, in ``[0, 1]``.
        retry_on: Exception types treated as transient. Anything else
                  propagates on the first occurrence.
    """

    max_retries: int = 3
    initial_delay: float = 0.1
    max_delay: float = 10.0
    jitter_factor: float = 0.3
    retry_on: tuple[type[BaseException], ...] = (Exception,)

    def __post_init__(self) -> None:
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise TypeError(f"max_retries must be an int, got {self.max_retries!r}")

        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")

        validate_delay(self.initial_delay, "initial_delay")
        validate_delay(self.max_delay, "max_delay")

        if not 0 <= self.jitter_factor <= 1:
            raise ValueError(f"jitter_factor must be between 0 and 1, got {self.jitter_factor}")

        if not self.retry_on:
            raise ValueError("retry_on must name at least one exception type")

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1
