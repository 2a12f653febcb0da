"""Tests for the playability gate."""

import pytest

from turnstile import ActorSnapshot, Card, CombatSnapshot, DiscardedCard, Side, TurnRestriction
from turnstile_play import GateOptions, is_playable, playable_cards, rediscard_ready, turn_playable
from turnstile_trigger import compile_ability


class TestTurnOwnership:
    @pytest.mark.parametrize(
        "restriction, side, expected",
        [
            (TurnRestriction.PLAYER, Side.PLAYER, True),
            (TurnRestriction.PLAYER, Side.ENEMY, False),
            (TurnRestriction.ENEMY, Side.ENEMY, True),
            (TurnRestriction.ENEMY, Side.PLAYER, False),
            (None, Side.PLAYER, True),
            (None, Side.ENEMY, False),
        ],
    )
    def test_restriction_table(self, restriction, side, expected):
        assert turn_playable(Card("c", turn_restriction=restriction), side) is expected

    @pytest.mark.parametrize("tag", ["interrupt", "quick"])
    def test_untagged_interrupt_allowed_on_enemy_turn(self, tag):
        card = Card("c", tags=frozenset({tag}))
        assert turn_playable(card, Side.ENEMY)

    def test_interrupt_tag_does_not_override_explicit_restriction(self):
        card = Card("c", turn_restriction=TurnRestriction.PLAYER, tags=frozenset({"interrupt"}))
        assert not turn_playable(card, Side.ENEMY)

    @pytest.mark.parametrize("cost, pool", [(0, 0), (2, 1), (2, 5)])
    def test_anytime_independent_of_side(self, cost, pool):
        card = Card("c", cost=cost, turn_restriction=TurnRestriction.ANYTIME, source_actor_id="a")
        resources = {"a": pool}
        assert is_playable(card, Side.PLAYER, resources) == is_playable(card, Side.ENEMY, resources)

    def test_enforcement_off_ignores_restriction(self):
        card = Card("c", turn_restriction=TurnRestriction.PLAYER)
        assert is_playable(card, Side.ENEMY, {}, GateOptions(enforce_turns=False))


class TestCostAndCooldown:
    def test_insufficient_then_sufficient_power(self):
        card = Card("c", cost=3, turn_restriction=TurnRestriction.PLAYER, source_actor_id="felis")
        assert not is_playable(card, Side.PLAYER, {"felis": 2})
        assert is_playable(card, Side.PLAYER, {"felis": 3})

    def test_cooldown_blocks(self):
        card = Card("c", cooldown=1, max_cooldown=3)
        assert not is_playable(card, Side.PLAYER, {})

    def test_zero_cost_needs_no_actor(self):
        assert is_playable(Card("c"), Side.PLAYER, None)

    def test_cost_without_source_actor(self):
        assert not is_playable(Card("c", cost=1), Side.PLAYER, {"felis": 9})

    def test_countdown_blocks_everything(self):
        card = Card("c", turn_restriction=TurnRestriction.ANYTIME)
        assert not is_playable(card, Side.PLAYER, {}, GateOptions(countdown_active=True))


def test_playable_cards_keeps_order():
    cards = [Card("a"), Card("b", cooldown=2), Card("c")]
    assert [c.card_id for c in playable_cards(cards, Side.PLAYER, {})] == ["a", "c"]


class TestRediscard:
    def snapshot(self, now_ms):
        felis = ActorSnapshot("felis", Side.PLAYER, hp=10, hp_max=10, combo=4)
        return CombatSnapshot(player_actors=(felis,), now_ms=now_ms)

    def test_ready_without_ability(self):
        discard = DiscardedCard(Card("c"), discarded_at_ms=0.0)
        assert rediscard_ready(discard, None, self.snapshot(0.0))

    def test_seconds_window(self):
        ability = compile_ability({"id": "a", "triggers": [{"type": "not_discarded", "value": 3}]})
        discard = DiscardedCard(Card("c", source_actor_id="felis"), discarded_at_ms=1000.0)
        assert not rediscard_ready(discard, ability, self.snapshot(2500.0))
        assert rediscard_ready(discard, ability, self.snapshot(4000.0))

    def test_combo_window_ignores_play_triggers(self):
        ability = compile_ability({
            "id": "a",
            "triggers": [
                {"type": "combo", "value": 99},
                {"type": "not_discarded", "value": 2, "countdownType": "combo"},
            ],
        })
        discard = DiscardedCard(Card("c", source_actor_id="felis"), 0.0, combo_at_discard=1)
        assert rediscard_ready(discard, ability, self.snapshot(0.0))
