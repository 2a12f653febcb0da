"""Tests for ScaledClock."""

import pytest

from turnstile.clock import ScaledClock


def test_defaults():
    clock = ScaledClock()
    assert clock.interval_ms == 50.0
    assert clock.tick_number == 0
    assert clock.now_ms == 0.0
    assert clock.time_scale == 1.0
    assert clock.paused is False


@pytest.mark.parametrize("interval", [0, -50])
def test_rejects_non_positive_interval(interval):
    with pytest.raises(ValueError):
        ScaledClock(interval_ms=interval)


def test_rejects_non_positive_scale_floor():
    with pytest.raises(ValueError):
        ScaledClock(min_time_scale=0)


def test_advance_defaults_to_interval():
    clock = ScaledClock(interval_ms=50)
    assert clock.advance() == 1
    assert clock.now_ms == 50.0


def test_advance_applies_time_scale():
    clock = ScaledClock()
    clock.time_scale = 2.0
    clock.advance(100)
    assert clock.now_ms == 200.0


def test_time_scale_floor():
    clock = ScaledClock(min_time_scale=0.1)
    clock.time_scale = 0.0
    assert clock.time_scale == 0.1
    clock.advance(100)
    assert clock.now_ms == pytest.approx(10.0)


def test_paused_counts_ticks_but_not_time():
    clock = ScaledClock()
    clock.paused = True
    clock.advance(100)
    assert clock.tick_number == 1
    assert clock.now_ms == 0.0
    ctx = clock.context(lambda: None)
    assert ctx.paused is True
    assert ctx.elapsed_ms == 100
    assert ctx.scaled_ms == 0.0


def test_negative_delta_counts_as_zero():
    clock = ScaledClock()
    clock.advance(-30)
    assert clock.now_ms == 0.0


def test_reset():
    clock = ScaledClock()
    clock.advance(100)
    clock.reset(start_ms=5.0)
    assert clock.tick_number == 0
    assert clock.now_ms == 5.0
