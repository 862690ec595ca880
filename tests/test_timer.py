"""Tests for TimerDebouncer."""

import asyncio

import pytest

from pacer.timer import TimerDebouncer


class TestTimerDebouncerLastCallWins:
    def test_single_callback_fires_after_delay(self, clock):
        calls: list[float] = []
        trigger = TimerDebouncer(0.05, scheduler=clock)
        trigger(lambda: calls.append(clock.time()))
        clock.advance(0.04)
        assert calls == []
        clock.advance(0.02)
        assert calls == [pytest.approx(0.05)]

    def test_burst_runs_only_last_callback(self, clock):
        calls: list[str] = []
        trigger = TimerDebouncer(0.05, scheduler=clock)
        for name in ("a", "b", "c", "d"):
            trigger(lambda name=name: calls.append(name))
            clock.advance(0.04)
        clock.advance(1.0)
        assert calls == ["d"]

    def test_last_callback_fires_delay_after_last_call(self, clock):
        times: list[float] = []
        trigger = TimerDebouncer(0.05, scheduler=clock)
        trigger(lambda: times.append(clock.time()))
        clock.advance(0.03)
        trigger(lambda: times.append(clock.time()))
        clock.advance(1.0)
        assert times == [pytest.approx(0.08)]

    def test_calls_separated_by_quiet_period_both_fire(self, clock):
        calls: list[str] = []
        trigger = TimerDebouncer(0.05, scheduler=clock)
        trigger(lambda: calls.append("first"))
        clock.advance(0.1)
        trigger(lambda: calls.append("second"))
        clock.advance(0.1)
        assert calls == ["first", "second"]

    def test_only_one_timer_pending(self, clock):
        trigger = TimerDebouncer(0.05, scheduler=clock)
        for _ in range(10):
            trigger(lambda: None)
        assert clock.pending == 1


class TestTimerDebouncerControl:
    def test_pending_flag(self, clock):
        trigger = TimerDebouncer(0.05, scheduler=clock)
        assert trigger.pending is False
        trigger(lambda: None)
        assert trigger.pending is True
        clock.advance(0.05)
        assert trigger.pending is False

    def test_cancel_drops_callback(self, clock):
        calls: list[int] = []
        trigger = TimerDebouncer(0.05, scheduler=clock)
        trigger(lambda: calls.append(1))
        trigger.cancel()
        trigger.cancel()
        clock.advance(1.0)
        assert calls == []
        assert trigger.pending is False

    def test_callback_error_not_caught(self, clock):
        def boom():
            raise ValueError("callback failed")

        trigger = TimerDebouncer(0.05, scheduler=clock)
        trigger(boom)
        with pytest.raises(ValueError, match="callback failed"):
            clock.advance(0.05)
        assert trigger.pending is False

    def test_negative_delay_raises(self):
        with pytest.raises(ValueError, match="delay must be"):
            TimerDebouncer(-1)

    def test_delay_setter(self, clock):
        times: list[float] = []
        trigger = TimerDebouncer(0.05, scheduler=clock)
        trigger.delay = 0.2
        assert trigger.delay == 0.2
        trigger(lambda: times.append(clock.time()))
        clock.advance(1.0)
        assert times == [pytest.approx(0.2)]

    @pytest.mark.parametrize("value", [-1, float("nan"), float("inf")])
    def test_delay_setter_invalid_raises(self, value):
        trigger = TimerDebouncer(0.05)
        with pytest.raises(ValueError, match="delay must be"):
            trigger.delay = value
        assert trigger.delay == 0.05

    def test_repr(self):
        assert repr(TimerDebouncer(0.5)) == "TimerDebouncer(delay=0.5, pending=False)"


class TestTimerDebouncerRealLoop:
    async def test_fires_last_callback_on_running_loop(self):
        calls: list[str] = []
        trigger = TimerDebouncer(0.03)
        trigger(lambda: calls.append("a"))
        await asyncio.sleep(0.01)
        trigger(lambda: calls.append("b"))
        await asyncio.sleep(0.1)
        assert calls == ["b"]
