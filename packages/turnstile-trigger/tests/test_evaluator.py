"""Tests for trigger evaluation against combat snapshots."""

import pytest

from turnstile import ActorSnapshot, Card, CombatSnapshot, DiscardedCard, Side
from turnstile_trigger import (
    Operator,
    Target,
    Trigger,
    TriggerContext,
    TriggerGuards,
    TriggerKind,
    compile_trigger,
    default_guards,
    evaluate,
    evaluate_all,
)


def make_snapshot(enemy_hp=20, **kwargs):
    fields = dict(
        player_actors=(
            ActorSnapshot(
                "felis", Side.PLAYER, hp=50, hp_max=100, armor=2, combo=3,
                discard_count=1, active_deck_count=4, last_action_ms=1000.0,
            ),
            ActorSnapshot("ursus", Side.PLAYER, hp=100, hp_max=100, combo=1),
        ),
        enemy_actors=(
            ActorSnapshot("wolf", Side.ENEMY, hp=enemy_hp, hp_max=100, combo=5, discard_count=2),
            ActorSnapshot("crow", Side.ENEMY, hp=90, hp_max=100, super_armor=1, combo=1),
        ),
        now_ms=7000.0,
    )
    fields.update(kwargs)
    return CombatSnapshot(**fields)


def ctx(snapshot=None, actor_id="felis", **kwargs):
    return TriggerContext(snapshot=snapshot or make_snapshot(), actor_id=actor_id, **kwargs)


class TestHpThreshold:
    def test_enemy_below_threshold(self):
        trigger = compile_trigger(
            {"type": "below_hp_pct", "target": "enemy", "value": 25, "operator": "<="}
        )
        assert evaluate(trigger, ctx(make_snapshot(enemy_hp=20)))
        assert not evaluate(trigger, ctx(make_snapshot(enemy_hp=30)))

    def test_self_threshold(self):
        trigger = Trigger(TriggerKind.BELOW_HP_PCT, Target.SELF, Operator.LE, 50)
        assert evaluate(trigger, ctx())
        assert not evaluate(trigger, ctx(actor_id="ursus"))

    def test_fractional_percent_compares_as_integer(self):
        third = CombatSnapshot(
            player_actors=(ActorSnapshot("felis", Side.PLAYER, hp=1, hp_max=3),),
        )
        assert evaluate(compile_trigger({"type": "below_hp_pct", "value": 33, "operator": "="}), ctx(third))
        assert not evaluate(compile_trigger({"type": "below_hp_pct", "value": 33, "operator": "!="}), ctx(third))
        assert not evaluate(compile_trigger({"type": "below_hp_pct", "value": 34, "operator": "="}), ctx(third))

    def test_missing_actor_fails_self(self):
        trigger = Trigger(TriggerKind.BELOW_HP_PCT, Target.SELF, Operator.LE, 100)
        assert not evaluate(trigger, ctx(actor_id="ghost"))


class TestActorMetrics:
    def test_knockout(self):
        trigger = compile_trigger({"type": "knockout", "target": "enemy"})
        assert not evaluate(trigger, ctx())
        assert evaluate(trigger, ctx(make_snapshot(enemy_hp=0)))

    def test_armor(self):
        assert evaluate(compile_trigger({"type": "has_armor"}), ctx())
        assert not evaluate(compile_trigger({"type": "has_armor", "target": "enemy"}), ctx())

    def test_super_armor_any_enemy(self):
        trigger = compile_trigger({"type": "has_super_armor", "target": "enemy"})
        assert evaluate(trigger, ctx())

    def test_inactivity_in_seconds(self):
        # felis last acted at 1000 ms, now is 7000 ms: six seconds idle.
        assert evaluate(compile_trigger({"type": "inactivity", "value": 6}), ctx())
        assert not evaluate(compile_trigger({"type": "inactivity", "value": 7}), ctx())

    def test_inactivity_equality_uses_whole_seconds(self):
        snap = make_snapshot(now_ms=7999.0)
        assert evaluate(compile_trigger({"type": "inactivity", "value": 6, "operator": "="}), ctx(snap))


class TestCounts:
    def test_self_combo(self):
        assert evaluate(compile_trigger({"type": "combo", "value": 3}), ctx())
        assert not evaluate(compile_trigger({"type": "combo", "value": 4}), ctx())

    def test_enemy_combo_uses_max(self):
        trigger = compile_trigger({"type": "combo", "target": "enemy", "value": 5, "operator": "="})
        assert evaluate(trigger, ctx())

    def test_party_combo_sums_side(self):
        assert evaluate(compile_trigger({"type": "party_combo", "value": 4, "operator": "="}), ctx())
        trigger = compile_trigger({"type": "party_combo", "target": "enemy", "value": 6, "operator": "="})
        assert evaluate(trigger, ctx())

    def test_equality_is_exact(self):
        trigger = compile_trigger({"type": "discard_count", "value": 1.9, "operator": "="})
        assert evaluate(trigger, ctx())
        assert not evaluate(compile_trigger({"type": "discard_count", "value": 2, "operator": "="}), ctx())

    def test_active_deck_count(self):
        assert evaluate(compile_trigger({"type": "active_deck_count", "value": 4}), ctx())


class TestNoMovesAndUnknown:
    def test_no_moves_flags(self):
        snap = make_snapshot(no_moves_player=True)
        assert evaluate(compile_trigger({"type": "no_moves_player"}), ctx(snap))
        assert not evaluate(compile_trigger({"type": "no_moves_enemy"}), ctx(snap))

    def test_unknown_is_satisfied(self):
        assert evaluate(compile_trigger({"type": "weather_is_nice", "value": 99}), ctx())


class TestNotDiscarded:
    def card(self):
        return Card("c1", source_actor_id="felis")

    def test_without_discard_record_passes(self):
        assert evaluate(compile_trigger({"type": "not_discarded", "value": 60}), ctx())

    def test_seconds_window(self):
        trigger = compile_trigger({"type": "not_discarded", "value": 5})
        recent = DiscardedCard(self.card(), discarded_at_ms=4000.0)
        old = DiscardedCard(self.card(), discarded_at_ms=1000.0)
        assert not evaluate(trigger, ctx(discard=recent))
        assert evaluate(trigger, ctx(discard=old))

    def test_combo_window(self):
        trigger = compile_trigger({"type": "not_discarded", "value": 2, "countdownType": "combo"})
        # player side combo total is 4
        assert evaluate(trigger, ctx(discard=DiscardedCard(self.card(), 0.0, combo_at_discard=2)))
        assert not evaluate(trigger, ctx(discard=DiscardedCard(self.card(), 0.0, combo_at_discard=3)))


class TestConjunction:
    def test_empty_is_vacuously_true(self):
        assert evaluate_all([], ctx())

    def test_all_must_pass(self):
        passing = compile_trigger({"type": "combo", "value": 1})
        failing = compile_trigger({"type": "combo", "value": 10})
        assert evaluate_all([passing, passing], ctx())
        assert not evaluate_all([passing, failing], ctx())


class TestAnyoneDecomposition:
    KINDS = [
        TriggerKind.BELOW_HP_PCT,
        TriggerKind.KNOCKOUT,
        TriggerKind.HAS_ARMOR,
        TriggerKind.HAS_SUPER_ARMOR,
        TriggerKind.INACTIVITY,
        TriggerKind.COMBO,
        TriggerKind.PARTY_COMBO,
        TriggerKind.DISCARD_COUNT,
        TriggerKind.ACTIVE_DECK_COUNT,
    ]

    @pytest.mark.parametrize("kind", KINDS)
    @pytest.mark.parametrize("op", list(Operator))
    @pytest.mark.parametrize("value", [0, 1, 3, 25])
    @pytest.mark.parametrize("enemy_hp", [0, 20, 100])
    def test_anyone_is_self_or_enemy(self, kind, op, value, enemy_hp):
        context = ctx(make_snapshot(enemy_hp=enemy_hp))
        anyone = Trigger(kind, Target.ANYONE, op, value)
        own = Trigger(kind, Target.SELF, op, value)
        enemy = Trigger(kind, Target.ENEMY, op, value)
        assert evaluate(anyone, context) == (evaluate(own, context) or evaluate(enemy, context))


class TestGuardsRegistry:
    def test_defaults_cover_every_kind(self):
        guards = default_guards()
        assert set(guards.kinds()) == set(TriggerKind)

    def test_unregistered_kind_raises_keyerror(self):
        with pytest.raises(KeyError):
            TriggerGuards().check(Trigger(TriggerKind.COMBO), ctx())

    def test_override_on_copy(self):
        guards = default_guards().copy()
        guards.register(TriggerKind.COMBO, lambda trigger, context: False)
        trigger = compile_trigger({"type": "combo", "value": 0})
        assert not evaluate(trigger, ctx(), guards)
        assert evaluate(trigger, ctx())
        assert guards.has(TriggerKind.COMBO)


def test_evaluation_leaves_snapshot_untouched():
    snap = make_snapshot()
    before = (snap.player_actors, snap.enemy_actors, snap.now_ms)
    evaluate_all([compile_trigger({"type": t}) for t in ("combo", "knockout", "inactivity")], ctx(snap))
    assert (snap.player_actors, snap.enemy_actors, snap.now_ms) == before
