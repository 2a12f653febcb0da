"""Turn phases, the owned turn state, and relic policy."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from turnstile import Side
from turnstile_turn.clock import TurnClock


class Phase(str, Enum):
    IDLE = "idle"
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    INTER_TURN_COUNTDOWN = "inter_turn_countdown"
    PENDING_FINAL_MOVE = "pending_final_move"

    @classmethod
    def turn_of(cls, side: Side) -> Phase:
        return cls.PLAYER_TURN if side is Side.PLAYER else cls.ENEMY_TURN

    @property
    def is_turn(self) -> bool:
        return self in (Phase.PLAYER_TURN, Phase.ENEMY_TURN)


@dataclass(frozen=True)
class TurnState:
    """Whose turn it is and how much of it is left.

    ``pending_side`` is set only during the inter-turn countdown, where
    ``active_side`` is still the side whose turn just ended.
    """

    phase: Phase
    active_side: Side
    clock: TurnClock
    pending_side: Side | None = None
    countdown_ms: float = 0.0

    @property
    def remaining_ms(self) -> float:
        return self.clock.remaining_ms

    @property
    def total_ms(self) -> float:
        return self.clock.total_ms

    @property
    def timer_active(self) -> bool:
        return self.clock.active

    @property
    def countdown_active(self) -> bool:
        return self.phase is Phase.INTER_TURN_COUNTDOWN

    @property
    def idle(self) -> bool:
        return self.phase is Phase.IDLE


# Relic behavior ids as authored, with any ``_v<n>`` suffix removed.
RELIC_BEHAVIORS: dict[str, str] = {
    "pause_on_drag": "pause_on_drag",
    "pause_during_drag": "pause_on_drag",
    "pause_while_dragging": "pause_on_drag",
    "drag_pause": "pause_on_drag",
    "final_move": "final_move",
    "last_move": "final_move",
    "delayed_turn_switch": "final_move",
    "zen": "zen",
    "zen_mode": "zen",
    "manual_end_turn": "zen",
}

_VERSION_SUFFIX = re.compile(r"_v\d+$")


def behavior_flag(behavior_id: str) -> str | None:
    """Map a relic behavior id to a policy flag name, or None."""
    key = _VERSION_SUFFIX.sub("", behavior_id.strip().lower().replace("-", "_"))
    return RELIC_BEHAVIORS.get(key)


@dataclass(frozen=True)
class RelicPolicy:
    """Turn-flow switches derived from equipped relics.

    Attributes:
        pause_on_drag: The turn clock does not drain while a drag is in progress.
        final_move: A player timeout during a drag waits for the drag to end.
        zen: The clock never expires a turn; only a manual end switches sides.
    """

    pause_on_drag: bool = False
    final_move: bool = False
    zen: bool = False

    @classmethod
    def from_relics(cls, relics: Iterable[Any]) -> RelicPolicy:
        """Build from behavior id strings or objects with ``behavior_id``.

        Objects whose ``enabled`` attribute is false are skipped.
        """
        flags: set[str] = set()
        for relic in relics:
            if isinstance(relic, str):
                behavior = relic
            else:
                if not getattr(relic, "enabled", True):
                    continue
                behavior = getattr(relic, "behavior_id", "")
            flag = behavior_flag(behavior)
            if flag is not None:
                flags.add(flag)
        return cls(**{name: True for name in flags})
