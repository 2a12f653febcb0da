"""Tests for TurnConfig."""

import dataclasses
import logging

import pytest

from turnstile import TurnConfig


def test_defaults():
    config = TurnConfig()
    assert config.turn_duration_ms == 10000.0
    assert config.inter_turn_countdown_ms == 3000.0
    assert config.tick_interval_ms == 50.0
    assert config.min_time_scale == 0.1
    assert config.display_granularity_ms == 100.0
    assert config.lazy_start is True


def test_frozen():
    config = TurnConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.turn_duration_ms = 5  # type: ignore[misc]


@pytest.mark.parametrize("duration", [0, -100])
def test_non_positive_duration_uses_floor(duration):
    config = TurnConfig(turn_duration_ms=duration, min_turn_duration_ms=750)
    assert config.effective_turn_duration_ms == 750


def test_positive_duration_kept():
    assert TurnConfig(turn_duration_ms=400).effective_turn_duration_ms == 400


def test_negative_countdown_is_zero():
    assert TurnConfig(inter_turn_countdown_ms=-5).effective_countdown_ms == 0.0


@pytest.mark.parametrize(
    "field", ["tick_interval_ms", "min_time_scale", "min_turn_duration_ms"]
)
def test_rejects_non_positive_floors(field):
    with pytest.raises(ValueError):
        TurnConfig(**{field: 0})


def test_from_dict_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING, logger="turnstile.config"):
        config = TurnConfig.from_dict({"turn_duration_ms": 5000, "colour": "red"})
    assert config.turn_duration_ms == 5000
    assert "colour" in caplog.text
