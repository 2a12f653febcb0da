"""Evaluate compiled triggers against a combat snapshot.

Actor metrics (hp, armor, knockout, inactivity) resolve ``enemy`` as "any
opposing actor satisfies the comparison". Count metrics resolve ``enemy``
to a single figure: the max over opposing actors, or the side total for
party combo. ``anyone`` is always the OR of the ``self`` and ``enemy``
comparisons, never a merged value.

Fractional metrics (hp percent, elapsed seconds) are floored to integers
before comparing, so ``=`` and ``!=`` are integer equality for every kind.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable

from turnstile import ActorSnapshot, CombatSnapshot, DiscardedCard, Side
from turnstile_trigger.guards import TriggerGuards
from turnstile_trigger.types import CountdownType, Target, Trigger, TriggerKind

if TYPE_CHECKING:
    from turnstile_trigger.guards import TriggerGuard


@dataclass(frozen=True)
class TriggerContext:
    """What a trigger is evaluated against.

    ``actor_id`` is the invoking actor. ``side`` overrides the side looked
    up from the snapshot, for cards with no source actor. ``discard`` is
    only read by not-discarded triggers.
    """

    snapshot: CombatSnapshot
    actor_id: str | None = None
    side: Side | None = None
    discard: DiscardedCard | None = None

    @property
    def actor(self) -> ActorSnapshot | None:
        if self.actor_id is None:
            return None
        return self.snapshot.actor(self.actor_id)

    @property
    def own_side(self) -> Side | None:
        if self.side is not None:
            return self.side
        if self.actor_id is None:
            return None
        return self.snapshot.side_of(self.actor_id)


def _resolve(trigger: Trigger, on_self: Callable[[], bool], on_enemy: Callable[[], bool]) -> bool:
    if trigger.target is Target.SELF:
        return on_self()
    if trigger.target is Target.ENEMY:
        return on_enemy()
    return on_self() or on_enemy()


def _opponents(ctx: TriggerContext) -> tuple[ActorSnapshot, ...]:
    side = ctx.own_side
    if side is None:
        return ()
    return ctx.snapshot.actors_on(side.opposite)


def actor_guard(metric: Callable[[ActorSnapshot, CombatSnapshot], float]) -> TriggerGuard:
    """Guard comparing a per-actor metric; ``enemy`` passes if any opponent does."""

    def guard(trigger: Trigger, ctx: TriggerContext) -> bool:
        def passes(actor: ActorSnapshot | None) -> bool:
            if actor is None:
                return False
            return trigger.operator.apply(math.floor(metric(actor, ctx.snapshot)), trigger.value)

        return _resolve(
            trigger,
            lambda: passes(ctx.actor),
            lambda: any(passes(a) for a in _opponents(ctx)),
        )

    return guard


def count_guard(metric: Callable[[ActorSnapshot], int]) -> TriggerGuard:
    """Guard comparing a count; ``enemy`` uses the max over opponents."""

    def guard(trigger: Trigger, ctx: TriggerContext) -> bool:
        def own() -> bool:
            actor = ctx.actor
            if actor is None:
                return False
            return trigger.operator.apply(metric(actor), trigger.value)

        def enemy() -> bool:
            opponents = _opponents(ctx)
            if not opponents:
                return False
            best = max(metric(a) for a in opponents)
            return trigger.operator.apply(best, trigger.value)

        return _resolve(trigger, own, enemy)

    return guard


def _party_combo(trigger: Trigger, ctx: TriggerContext) -> bool:
    side = ctx.own_side
    if side is None:
        return False
    snap = ctx.snapshot
    return _resolve(
        trigger,
        lambda: trigger.operator.apply(snap.combo_total(side), trigger.value),
        lambda: trigger.operator.apply(snap.combo_total(side.opposite), trigger.value),
    )


def _no_moves(side: Side) -> TriggerGuard:
    def guard(trigger: Trigger, ctx: TriggerContext) -> bool:
        flag = int(ctx.snapshot.no_legal_moves(side))
        return trigger.operator.apply(flag, trigger.value)

    return guard


def _inactive_seconds(actor: ActorSnapshot, snap: CombatSnapshot) -> float:
    since = actor.last_action_ms if actor.last_action_ms is not None else 0.0
    return max(0.0, snap.now_ms - since) / 1000.0


def _not_discarded(trigger: Trigger, ctx: TriggerContext) -> bool:
    discard = ctx.discard
    if discard is None:
        return True
    snap = ctx.snapshot
    if trigger.countdown_type is CountdownType.COMBO:
        side = ctx.own_side or Side.PLAYER
        elapsed = max(0, snap.combo_total(side) - discard.combo_at_discard)
    else:
        elapsed = math.floor(max(0.0, snap.now_ms - discard.discarded_at_ms) / 1000.0)
    return trigger.operator.apply(elapsed, trigger.value)


def default_guards() -> TriggerGuards:
    """A registry with a guard for every ``TriggerKind``."""
    guards = TriggerGuards()
    guards.register(TriggerKind.BELOW_HP_PCT, actor_guard(lambda a, _s: a.hp_pct))
    guards.register(TriggerKind.KNOCKOUT, actor_guard(lambda a, _s: a.hp))
    guards.register(TriggerKind.HAS_ARMOR, actor_guard(lambda a, _s: a.armor))
    guards.register(TriggerKind.HAS_SUPER_ARMOR, actor_guard(lambda a, _s: a.super_armor))
    guards.register(TriggerKind.INACTIVITY, actor_guard(_inactive_seconds))
    guards.register(TriggerKind.COMBO, count_guard(lambda a: a.combo))
    guards.register(TriggerKind.PARTY_COMBO, _party_combo)
    guards.register(TriggerKind.DISCARD_COUNT, count_guard(lambda a: a.discard_count))
    guards.register(TriggerKind.ACTIVE_DECK_COUNT, count_guard(lambda a: a.active_deck_count))
    guards.register(TriggerKind.NO_MOVES_PLAYER, _no_moves(Side.PLAYER))
    guards.register(TriggerKind.NO_MOVES_ENEMY, _no_moves(Side.ENEMY))
    guards.register(TriggerKind.NOT_DISCARDED, _not_discarded)
    guards.register(TriggerKind.UNKNOWN, lambda _t, _c: True)
    return guards


DEFAULT_GUARDS = default_guards()


def evaluate(trigger: Trigger, ctx: TriggerContext, guards: TriggerGuards | None = None) -> bool:
    return (guards or DEFAULT_GUARDS).check(trigger, ctx)


def evaluate_all(
    triggers: Iterable[Trigger], ctx: TriggerContext, guards: TriggerGuards | None = None
) -> bool:
    """Conjunction of ``triggers``. An empty set is satisfied."""
    registry = guards or DEFAULT_GUARDS
    return all(registry.check(t, ctx) for t in triggers)
