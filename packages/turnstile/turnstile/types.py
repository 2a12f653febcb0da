"""Shared types for the turnstile combat core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class Side(str, Enum):
    """One of the two parties in an encounter."""

    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opposite(self) -> Side:
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class TurnRestriction(str, Enum):
    """Whose turn a card may be played on."""

    PLAYER = "player"
    ENEMY = "enemy"
    ANYTIME = "anytime"

    def allows(self, side: Side) -> bool:
        return self is TurnRestriction.ANYTIME or self.value == side.value


@dataclass(frozen=True, slots=True)
class TickContext:
    """Per-tick information handed to every system.

    ``elapsed_ms`` is real (wall-clock) time since the previous tick.
    ``scaled_ms`` is the same interval after time scaling, and is 0 while
    the loop is paused. ``now_ms`` is the accumulated scaled clock.
    """

    tick_number: int
    elapsed_ms: float
    scaled_ms: float
    now_ms: float
    paused: bool
    request_stop: Callable[[], None]


class TickerClosedError(RuntimeError):
    """Raised when stepping or running a ticker after ``close()``."""


System = Callable[[TickContext], None]
