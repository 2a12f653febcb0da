"""Core data types for ability triggers."""
from __future__ import annotations

import operator as _op
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


class TriggerKind(str, Enum):
    """Canonical trigger kinds. ``UNKNOWN`` holds anything unrecognized."""

    BELOW_HP_PCT = "below_hp_pct"
    KNOCKOUT = "knockout"
    HAS_ARMOR = "has_armor"
    HAS_SUPER_ARMOR = "has_super_armor"
    INACTIVITY = "inactivity"
    COMBO = "combo"
    PARTY_COMBO = "party_combo"
    NO_MOVES_PLAYER = "no_moves_player"
    NO_MOVES_ENEMY = "no_moves_enemy"
    NOT_DISCARDED = "not_discarded"
    DISCARD_COUNT = "discard_count"
    ACTIVE_DECK_COUNT = "active_deck_count"
    UNKNOWN = "unknown"


class Target(str, Enum):
    SELF = "self"
    ENEMY = "enemy"
    ANYONE = "anyone"


class Operator(str, Enum):
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "="
    NE = "!="

    def apply(self, left: float, right: float) -> bool:
        return _COMPARATORS[self](left, right)


_COMPARATORS: dict[Operator, Callable[[float, float], bool]] = {
    Operator.LT: _op.lt,
    Operator.LE: _op.le,
    Operator.GT: _op.gt,
    Operator.GE: _op.ge,
    Operator.EQ: _op.eq,
    Operator.NE: _op.ne,
}


class CountdownType(str, Enum):
    """How a not-discarded window is measured."""

    SECONDS = "seconds"
    COMBO = "combo"


@dataclass(frozen=True)
class Trigger:
    """A normalized trigger. Build with ``compile_trigger``.

    ``value`` is already floored to a non-negative integer. ``raw_type``
    keeps the authored spelling for diagnostics.
    """

    kind: TriggerKind
    target: Target = Target.SELF
    operator: Operator = Operator.GE
    value: int = 0
    countdown_type: CountdownType = CountdownType.SECONDS
    raw_type: str = ""


@dataclass(frozen=True)
class Effect:
    kind: str
    dead_run_only: bool = False
    params: tuple[tuple[str, object], ...] = ()


@dataclass(frozen=True)
class Ability:
    """A named rule bundle: effects plus the triggers gating them."""

    ability_id: str
    effects: tuple[Effect, ...] = ()
    triggers: tuple[Trigger, ...] = ()
    name: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)

    @property
    def dead_run_only(self) -> bool:
        """True when every effect is only surfaced with no legal moves."""
        return bool(self.effects) and all(e.dead_run_only for e in self.effects)

    @property
    def play_triggers(self) -> tuple[Trigger, ...]:
        """Triggers gating play. Not-discarded windows are excluded."""
        return tuple(t for t in self.triggers if t.kind is not TriggerKind.NOT_DISCARDED)

    @property
    def rediscard_triggers(self) -> tuple[Trigger, ...]:
        return tuple(t for t in self.triggers if t.kind is TriggerKind.NOT_DISCARDED)
