"""Tests for loading authored trigger and ability records."""

import logging

import pytest

from turnstile_trigger import (
    CountdownType,
    Operator,
    Target,
    TriggerKind,
    compile_ability,
    compile_trigger,
    compile_triggers,
)


class TestTypeAliases:
    @pytest.mark.parametrize(
        "raw, kind",
        [
            ("below_hp_pct", TriggerKind.BELOW_HP_PCT),
            ("belowHpPct", TriggerKind.BELOW_HP_PCT),
            ("hp-percent", TriggerKind.BELOW_HP_PCT),
            ("KO", TriggerKind.KNOCKOUT),
            ("superArmor", TriggerKind.HAS_SUPER_ARMOR),
            ("inactive_for", TriggerKind.INACTIVITY),
            ("party_combo", TriggerKind.PARTY_COMBO),
            ("no_valid_moves", TriggerKind.NO_MOVES_PLAYER),
            ("no_valid_moves_enemy", TriggerKind.NO_MOVES_ENEMY),
            ("foundation_discard_count", TriggerKind.DISCARD_COUNT),
            ("actor_active_deck_count", TriggerKind.ACTIVE_DECK_COUNT),
            ("notDiscarded", TriggerKind.NOT_DISCARDED),
        ],
    )
    def test_alias_resolves(self, raw, kind):
        assert compile_trigger({"type": raw}).kind is kind

    def test_unknown_type_is_kept_for_diagnostics(self):
        trigger = compile_trigger({"type": "moon_phase"})
        assert trigger.kind is TriggerKind.UNKNOWN
        assert trigger.raw_type == "moon_phase"

    def test_unknown_type_warns_once(self, caplog):
        with caplog.at_level(logging.WARNING, logger="turnstile_trigger.compile"):
            compile_trigger({"type": "tide_level"})
            compile_trigger({"type": "tide_level"})
        assert caplog.text.count("tide_level") == 1


class TestOperatorsAndDefaults:
    @pytest.mark.parametrize(
        "raw, op",
        [
            ("<", Operator.LT),
            ("lte", Operator.LE),
            ("at_least", Operator.GE),
            ("==", Operator.EQ),
            ("<>", Operator.NE),
            ("neq", Operator.NE),
            (">", Operator.GT),
        ],
    )
    def test_operator_aliases(self, raw, op):
        assert compile_trigger({"type": "combo", "operator": raw}).operator is op

    def test_hp_threshold_defaults(self):
        trigger = compile_trigger({"type": "below_hp_pct"})
        assert trigger.operator is Operator.LE
        assert trigger.value == 10
        assert trigger.target is Target.SELF

    @pytest.mark.parametrize("kind", ["inactivity", "combo", "discard_count", "active_deck_count"])
    def test_count_defaults_use_at_least(self, kind):
        assert compile_trigger({"type": kind}).operator is Operator.GE

    def test_unknown_operator_falls_back_to_default(self):
        trigger = compile_trigger({"type": "below_hp_pct", "operator": "approximately"})
        assert trigger.operator is Operator.LE


class TestValues:
    @pytest.mark.parametrize(
        "raw, value",
        [(25, 25), (2.9, 2), ("7", 7), (-3, 0), (None, 10), ("lots", 10), (float("nan"), 10)],
    )
    def test_value_is_floored_non_negative(self, raw, value):
        assert compile_trigger({"type": "below_hp_pct", "value": raw}).value == value

    def test_targets(self):
        assert compile_trigger({"type": "combo", "target": "opponent"}).target is Target.ENEMY
        assert compile_trigger({"type": "combo", "target": "any"}).target is Target.ANYONE
        assert compile_trigger({"type": "combo", "target": "???"}).target is Target.SELF

    def test_countdown_type(self):
        assert compile_trigger({"type": "not_discarded"}).countdown_type is CountdownType.SECONDS
        trigger = compile_trigger({"type": "not_discarded", "countdownType": "combo"})
        assert trigger.countdown_type is CountdownType.COMBO


class TestAbilities:
    def test_compile_ability(self):
        ability = compile_ability({
            "id": "second_wind",
            "effects": [{"type": "heal", "amount": 5}],
            "triggers": [{"type": "below_hp_pct", "value": 30}],
        })
        assert ability.ability_id == "second_wind"
        assert ability.name == "second_wind"
        assert ability.effects[0].params == (("amount", 5),)
        assert ability.play_triggers[0].value == 30
        assert not ability.dead_run_only

    def test_dead_run_only_needs_every_effect_flagged(self):
        flagged = compile_ability({"id": "a", "effects": [{"type": "x", "deadRunOnly": True}]})
        mixed = compile_ability({
            "id": "b",
            "effects": [{"type": "x", "deadRunOnly": True}, {"type": "y"}],
        })
        empty = compile_ability({"id": "c"})
        assert flagged.dead_run_only
        assert not mixed.dead_run_only
        assert not empty.dead_run_only

    def test_not_discarded_split_from_play_triggers(self):
        ability = compile_ability({
            "id": "a",
            "triggers": [{"type": "combo"}, {"type": "not_discarded", "value": 3}],
        })
        assert [t.kind for t in ability.play_triggers] == [TriggerKind.COMBO]
        assert [t.kind for t in ability.rediscard_triggers] == [TriggerKind.NOT_DISCARDED]

    def test_missing_id_raises(self):
        with pytest.raises(ValueError):
            compile_ability({"name": "nameless"})

    def test_compile_triggers_empty(self):
        assert compile_triggers(None) == ()
        assert compile_triggers([]) == ()
