"""Turn-flow configuration dataclass."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnConfig:
    """Immutable configuration for one encounter's turn flow.

    Attributes:
        turn_duration_ms: Base turn length at time scale 1.
        min_turn_duration_ms: Floor applied when the duration is zero or negative.
        inter_turn_countdown_ms: Length of the "get ready" delay between turns.
        inter_turn_countdown: Insert the countdown when the player's turn times out.
            An enemy timeout always goes through the countdown.
        local_turn_progression: Clock expiry switches sides. When off, an expired
            clock holds at zero until a side sync arrives.
        lazy_start: A fresh clock waits for the side's first accepted play.
        play_bonus_ms: Time added to a running clock by each accepted play.
        enforce_turn_ownership: Reject cards whose restriction excludes the active side.
        tick_interval_ms: Period of the combat loop.
        min_time_scale: Floor for any time scale.
        display_granularity_ms: Smallest clock change pushed to observers.
    """

    turn_duration_ms: float = 10000.0
    min_turn_duration_ms: float = 1000.0
    inter_turn_countdown_ms: float = 3000.0
    inter_turn_countdown: bool = False
    local_turn_progression: bool = True
    lazy_start: bool = True
    play_bonus_ms: float = 0.0
    enforce_turn_ownership: bool = True
    tick_interval_ms: float = 50.0
    min_time_scale: float = 0.1
    display_granularity_ms: float = 100.0

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.min_time_scale <= 0:
            raise ValueError(f"min_time_scale must be positive, got {self.min_time_scale}")
        if self.min_turn_duration_ms <= 0:
            raise ValueError(
                f"min_turn_duration_ms must be positive, got {self.min_turn_duration_ms}"
            )

    @property
    def effective_turn_duration_ms(self) -> float:
        if self.turn_duration_ms <= 0:
            return self.min_turn_duration_ms
        return self.turn_duration_ms

    @property
    def effective_countdown_ms(self) -> float:
        return max(0.0, self.inter_turn_countdown_ms)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TurnConfig:
        """Build a config from content data. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("ignoring unknown turn config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})
