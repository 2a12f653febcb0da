"""Load authored trigger and ability records into the typed model.

Content files spell trigger types, targets, and operators in several
legacy ways. Everything is normalized here, once, so evaluation only ever
dispatches on ``TriggerKind``.

Unrecognized types compile to ``TriggerKind.UNKNOWN``, which evaluates as
satisfied. That keeps older clients working when content ships a new
trigger kind, but it also hides typos: a misspelled trigger silently
passes. A warning is logged once per distinct spelling.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping

from turnstile_trigger.types import (
    Ability,
    CountdownType,
    Effect,
    Operator,
    Target,
    Trigger,
    TriggerKind,
)

logger = logging.getLogger(__name__)

TYPE_ALIASES: dict[str, TriggerKind] = {
    "below_hp_pct": TriggerKind.BELOW_HP_PCT,
    "below_hp_percent": TriggerKind.BELOW_HP_PCT,
    "hp_below_pct": TriggerKind.BELOW_HP_PCT,
    "hp_pct": TriggerKind.BELOW_HP_PCT,
    "hp_percent": TriggerKind.BELOW_HP_PCT,
    "hp_threshold": TriggerKind.BELOW_HP_PCT,
    "low_hp": TriggerKind.BELOW_HP_PCT,
    "knockout": TriggerKind.KNOCKOUT,
    "knocked_out": TriggerKind.KNOCKOUT,
    "is_knocked_out": TriggerKind.KNOCKOUT,
    "ko": TriggerKind.KNOCKOUT,
    "defeated": TriggerKind.KNOCKOUT,
    "has_armor": TriggerKind.HAS_ARMOR,
    "armor": TriggerKind.HAS_ARMOR,
    "armored": TriggerKind.HAS_ARMOR,
    "has_super_armor": TriggerKind.HAS_SUPER_ARMOR,
    "has_superarmor": TriggerKind.HAS_SUPER_ARMOR,
    "super_armor": TriggerKind.HAS_SUPER_ARMOR,
    "superarmor": TriggerKind.HAS_SUPER_ARMOR,
    "inactivity": TriggerKind.INACTIVITY,
    "inactivity_duration": TriggerKind.INACTIVITY,
    "inactive": TriggerKind.INACTIVITY,
    "inactive_for": TriggerKind.INACTIVITY,
    "idle": TriggerKind.INACTIVITY,
    "idle_for": TriggerKind.INACTIVITY,
    "combo": TriggerKind.COMBO,
    "combo_count": TriggerKind.COMBO,
    "personal_combo": TriggerKind.COMBO,
    "actor_combo": TriggerKind.COMBO,
    "party_combo": TriggerKind.PARTY_COMBO,
    "party_combo_count": TriggerKind.PARTY_COMBO,
    "team_combo": TriggerKind.PARTY_COMBO,
    "no_moves_player": TriggerKind.NO_MOVES_PLAYER,
    "no_legal_moves_player": TriggerKind.NO_MOVES_PLAYER,
    "no_valid_moves_player": TriggerKind.NO_MOVES_PLAYER,
    "player_no_moves": TriggerKind.NO_MOVES_PLAYER,
    "no_valid_moves": TriggerKind.NO_MOVES_PLAYER,
    "no_legal_moves": TriggerKind.NO_MOVES_PLAYER,
    "no_moves_enemy": TriggerKind.NO_MOVES_ENEMY,
    "no_legal_moves_enemy": TriggerKind.NO_MOVES_ENEMY,
    "no_valid_moves_enemy": TriggerKind.NO_MOVES_ENEMY,
    "enemy_no_moves": TriggerKind.NO_MOVES_ENEMY,
    "not_discarded": TriggerKind.NOT_DISCARDED,
    "not_discarded_for": TriggerKind.NOT_DISCARDED,
    "discard_cooldown": TriggerKind.NOT_DISCARDED,
    "rediscard": TriggerKind.NOT_DISCARDED,
    "discard_count": TriggerKind.DISCARD_COUNT,
    "discards": TriggerKind.DISCARD_COUNT,
    "foundation_discard_count": TriggerKind.DISCARD_COUNT,
    "actor_discard_count": TriggerKind.DISCARD_COUNT,
    "active_deck_count": TriggerKind.ACTIVE_DECK_COUNT,
    "active_deck": TriggerKind.ACTIVE_DECK_COUNT,
    "deck_count": TriggerKind.ACTIVE_DECK_COUNT,
    "foundation_active_deck_count": TriggerKind.ACTIVE_DECK_COUNT,
    "actor_active_deck_count": TriggerKind.ACTIVE_DECK_COUNT,
}

OPERATOR_ALIASES: dict[str, Operator] = {
    "<": Operator.LT,
    "lt": Operator.LT,
    "less_than": Operator.LT,
    "<=": Operator.LE,
    "=<": Operator.LE,
    "lte": Operator.LE,
    "le": Operator.LE,
    "at_most": Operator.LE,
    ">": Operator.GT,
    "gt": Operator.GT,
    "greater_than": Operator.GT,
    ">=": Operator.GE,
    "=>": Operator.GE,
    "gte": Operator.GE,
    "ge": Operator.GE,
    "at_least": Operator.GE,
    "=": Operator.EQ,
    "==": Operator.EQ,
    "===": Operator.EQ,
    "eq": Operator.EQ,
    "equals": Operator.EQ,
    "!=": Operator.NE,
    "!==": Operator.NE,
    "<>": Operator.NE,
    "ne": Operator.NE,
    "neq": Operator.NE,
    "not_equals": Operator.NE,
}

TARGET_ALIASES: dict[str, Target] = {
    "self": Target.SELF,
    "me": Target.SELF,
    "owner": Target.SELF,
    "actor": Target.SELF,
    "enemy": Target.ENEMY,
    "enemies": Target.ENEMY,
    "opponent": Target.ENEMY,
    "foe": Target.ENEMY,
    "anyone": Target.ANYONE,
    "any": Target.ANYONE,
    "either": Target.ANYONE,
}

# (operator, value) used when the author omits them.
DEFAULTS: dict[TriggerKind, tuple[Operator, int]] = {
    TriggerKind.BELOW_HP_PCT: (Operator.LE, 10),
    TriggerKind.KNOCKOUT: (Operator.LE, 0),
    TriggerKind.HAS_ARMOR: (Operator.GE, 1),
    TriggerKind.HAS_SUPER_ARMOR: (Operator.GE, 1),
    TriggerKind.INACTIVITY: (Operator.GE, 5),
    TriggerKind.COMBO: (Operator.GE, 1),
    TriggerKind.PARTY_COMBO: (Operator.GE, 1),
    TriggerKind.NO_MOVES_PLAYER: (Operator.EQ, 1),
    TriggerKind.NO_MOVES_ENEMY: (Operator.EQ, 1),
    TriggerKind.NOT_DISCARDED: (Operator.GE, 1),
    TriggerKind.DISCARD_COUNT: (Operator.GE, 1),
    TriggerKind.ACTIVE_DECK_COUNT: (Operator.GE, 1),
    TriggerKind.UNKNOWN: (Operator.GE, 0),
}

_warned: set[str] = set()
_CAMEL = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _key(raw: object) -> str:
    text = _CAMEL.sub("_", str(raw).strip())
    return re.sub(r"[\s\-]+", "_", text).lower()


def _warn_once(message: str, spelling: str) -> None:
    key = f"{message}:{spelling}"
    if key in _warned:
        return
    _warned.add(key)
    logger.warning(message, spelling)


def normalize_kind(raw: object) -> TriggerKind:
    if isinstance(raw, TriggerKind):
        return raw
    kind = TYPE_ALIASES.get(_key(raw))
    if kind is None:
        _warn_once("unknown trigger type %r treated as always satisfied", str(raw))
        return TriggerKind.UNKNOWN
    return kind


def normalize_operator(raw: object, default: Operator) -> Operator:
    if raw is None or raw == "":
        return default
    if isinstance(raw, Operator):
        return raw
    text = str(raw).strip()
    found = OPERATOR_ALIASES.get(text) or OPERATOR_ALIASES.get(_key(text))
    if found is None:
        _warn_once("unknown trigger operator %r replaced by the type default", text)
        return default
    return found


def normalize_target(raw: object) -> Target:
    if raw is None or raw == "":
        return Target.SELF
    if isinstance(raw, Target):
        return raw
    found = TARGET_ALIASES.get(_key(raw))
    if found is None:
        _warn_once("unknown trigger target %r treated as self", str(raw))
        return Target.SELF
    return found


def coerce_value(raw: object, default: int) -> int:
    """Floor to a non-negative integer. Unusable input falls back to ``default``."""
    if raw is None or raw == "":
        return default
    try:
        number = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        _warn_once("non-numeric trigger value %r replaced by the type default", str(raw))
        return default
    if not math.isfinite(number):
        return default
    return max(0, math.floor(number))


def _field(raw: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in raw:
            return raw[name]
    return None


def compile_trigger(raw: Mapping[str, Any] | Trigger) -> Trigger:
    if isinstance(raw, Trigger):
        return raw
    raw_type = _field(raw, "type", "kind")
    kind = normalize_kind(raw_type if raw_type is not None else "")
    default_op, default_value = DEFAULTS[kind]
    countdown_raw = _field(raw, "countdown_type", "countdownType")
    countdown = CountdownType.SECONDS
    if countdown_raw is not None and _key(countdown_raw) in ("combo", "combos"):
        countdown = CountdownType.COMBO
    return Trigger(
        kind=kind,
        target=normalize_target(raw.get("target")),
        operator=normalize_operator(_field(raw, "operator", "op"), default_op),
        value=coerce_value(raw.get("value"), default_value),
        countdown_type=countdown,
        raw_type="" if raw_type is None else str(raw_type),
    )


def compile_triggers(raws: Iterable[Mapping[str, Any] | Trigger] | None) -> tuple[Trigger, ...]:
    if not raws:
        return ()
    return tuple(compile_trigger(raw) for raw in raws)


def compile_effect(raw: Mapping[str, Any] | Effect) -> Effect:
    if isinstance(raw, Effect):
        return raw
    flag = _field(raw, "dead_run_only", "deadRunOnly", "dead_run")
    params = tuple(
        sorted(
            (k, v) for k, v in raw.items()
            if k not in ("type", "kind", "dead_run_only", "deadRunOnly", "dead_run")
        )
    )
    return Effect(
        kind=str(_field(raw, "type", "kind") or ""),
        dead_run_only=bool(flag),
        params=params,
    )


def compile_ability(raw: Mapping[str, Any] | Ability) -> Ability:
    if isinstance(raw, Ability):
        return raw
    ability_id = _field(raw, "id", "ability_id", "abilityId")
    if not ability_id:
        raise ValueError("ability record needs an 'id'")
    return Ability(
        ability_id=str(ability_id),
        name=str(raw.get("name") or ability_id),
        effects=tuple(compile_effect(e) for e in raw.get("effects") or ()),
        triggers=compile_triggers(raw.get("triggers")),
        tags=frozenset(raw.get("tags") or ()),
    )
