"""Tests for RetryConfig and delay validation."""

import math

import pytest

from pacer.config import RetryConfig, validate_delay


class TestValidateDelay:
    def test_returns_value(self):
        assert validate_delay(0.5) == 0.5

    def test_zero_allowed(self):
        assert validate_delay(0) == 0

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="delay must be a finite non-negative number"):
            validate_delay(-0.1)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_raises(self, value):
        with pytest.raises(ValueError, match="finite non-negative"):
            validate_delay(value)

    def test_uses_name_in_message(self):
        with pytest.raises(ValueError, match="max_delay must be"):
            validate_delay(-1, "max_delay")


class TestRetryConfig:
    def test_defaults(self):
        cfg = RetryConfig()
        assert cfg.max_retries == 3
        assert cfg.initial_delay == 0.1
        assert cfg.max_delay == 10.0
        assert cfg.jitter_factor == 0.3
        assert cfg.retry_on == (Exception,)

    def test_total_attempts(self):
        assert RetryConfig(max_retries=0).total_attempts == 1
        assert RetryConfig(max_retries=4).total_attempts == 5

    def test_negative_max_retries_raises(self):
        with pytest.raises(ValueError, match="max_retries must be >= 0"):
            RetryConfig(max_retries=-1)

    def test_non_int_max_retries_raises(self):
        with pytest.raises(TypeError, match="max_retries must be an int"):
            RetryConfig(max_retries=1.5)  # type: ignore[arg-type]

    def test_bool_max_retries_raises(self):
        with pytest.raises(TypeError, match="max_retries must be an int"):
            RetryConfig(max_retries=True)

    def test_negative_initial_delay_raises(self):
        with pytest.raises(ValueError, match="initial_delay must be"):
            RetryConfig(initial_delay=-1)

    def test_infinite_max_delay_raises(self):
        with pytest.raises(ValueError, match="max_delay must be"):
            RetryConfig(max_delay=math.inf)

    @pytest.mark.parametrize("factor", [-0.1, 1.5, math.nan])
    def test_jitter_factor_out_of_range_raises(self, factor):
        with pytest.raises(ValueError, match="jitter_factor must be between 0 and 1"):
            RetryConfig(jitter_factor=factor)

    def test_empty_retry_on_raises(self):
        with pytest.raises(ValueError, match="retry_on must name"):
            RetryConfig(retry_on=())

    def test_frozen(self):
        cfg = RetryConfig()
        with pytest.raises(AttributeError):
            cfg.max_retries = 5  # type: ignore[misc]
