"""A tiny local combat model standing in for the real simulation."""
from __future__ import annotations

import logging
from dataclasses import replace

from turnstile import ActorSnapshot, Card, CombatSnapshot, DiscardedCard, Side
from turnstile_combat import RelicInstance

from game.content import CARD_DAMAGE, ENEMY_HAND, PLAYER_HAND, RELICS

logger = logging.getLogger(__name__)

TURN_POWER = 3


class Duel:
    """Owns actors, hands, and discards. Serves snapshots and takes actions."""

    def __init__(self) -> None:
        self.actors: dict[str, ActorSnapshot] = {
            "felis": ActorSnapshot("felis", Side.PLAYER, hp=30, hp_max=30, armor=1, power=TURN_POWER),
            "ursus": ActorSnapshot("ursus", Side.PLAYER, hp=40, hp_max=40, power=TURN_POWER),
            "wolf": ActorSnapshot("wolf", Side.ENEMY, hp=35, hp_max=35),
            "crow": ActorSnapshot("crow", Side.ENEMY, hp=20, hp_max=20, super_armor=1),
        }
        self.hand: list[Card] = list(PLAYER_HAND) + list(ENEMY_HAND)
        self.discarded: list[DiscardedCard] = []
        self.relics: list[RelicInstance] = list(RELICS)
        self.side = Side.PLAYER
        self.now_ms = 0.0
        self.log: list[str] = []
        self._snapshot: CombatSnapshot | None = None

    # --- Snapshot source ---

    def snapshot(self) -> CombatSnapshot:
        if self._snapshot is None:
            players = tuple(a for a in self.actors.values() if a.side is Side.PLAYER)
            enemies = tuple(a for a in self.actors.values() if a.side is Side.ENEMY)
            self._snapshot = CombatSnapshot(
                player_actors=players,
                enemy_actors=enemies,
                now_ms=self.now_ms,
                no_moves_player=not self._has_moves(Side.PLAYER),
                no_moves_enemy=not self._has_moves(Side.ENEMY),
                cards=tuple(self.hand),
                discarded=tuple(self.discarded),
                active_side=self.side,
            )
        return self._snapshot

    def _has_moves(self, side: Side) -> bool:
        for card in self.hand:
            actor = self.actors.get(card.source_actor_id or "")
            if actor is not None and actor.side is side and actor.power >= card.cost:
                return True
        return False

    def _touch(self) -> None:
        self._snapshot = None

    # --- Actions ---

    def tick(self, now_ms: float) -> None:
        self.now_ms = now_ms
        self._recycle()
        self._touch()

    def advance_turn(self) -> None:
        self._start_turn(self.side.opposite)

    def end_turn(self) -> None:
        self._start_turn(self.side.opposite)

    def _start_turn(self, side: Side) -> None:
        self.side = side
        for actor_id, actor in self.actors.items():
            if actor.side is side:
                self.actors[actor_id] = replace(actor, power=TURN_POWER, combo=0)
        self.log.append(f"{side.value} turn")
        self._touch()

    def play_card(self, card: Card, target: str | None) -> bool:
        source = self.actors.get(card.source_actor_id or "")
        if source is None and card.cost > 0:
            return False
        if source is not None:
            self.actors[source.actor_id] = replace(
                source,
                power=source.power - card.cost,
                combo=source.combo + 1,
                last_action_ms=self.now_ms,
            )
        victim = self.actors.get(target or "") or self._default_target(source)
        if victim is not None:
            damage = CARD_DAMAGE.get(card.card_id, 1)
            soak = min(victim.armor, damage)
            self.actors[victim.actor_id] = replace(
                victim, hp=max(0, victim.hp - damage + soak), armor=victim.armor - soak
            )
        if card in self.hand:
            self.hand.remove(card)
        else:
            self.discarded = [d for d in self.discarded if d.card != card]
        side = source.side if source else Side.PLAYER
        combo = sum(a.combo for a in self.actors.values() if a.side is side)
        self.discarded.append(DiscardedCard(card, self.now_ms, combo))
        self._recycle()
        self.log.append(f"{card.card_id} -> {victim.actor_id if victim else '-'}")
        logger.info("played %s", card.card_id)
        self._touch()
        return True

    def _default_target(self, source: ActorSnapshot | None) -> ActorSnapshot | None:
        side = source.side.opposite if source else Side.ENEMY
        alive = [a for a in self.actors.values() if a.side is side and a.hp > 0]
        return alive[0] if alive else None

    def _recycle(self) -> None:
        """Discards without a re-availability window return to hand after 2 s."""
        keep = []
        for discard in self.discarded:
            if discard.card.ability_id != "recall" and self.now_ms - discard.discarded_at_ms >= 2000:
                self.hand.append(discard.card)
            else:
                keep.append(discard)
        self.discarded = keep

    def equipped_relics(self) -> list[RelicInstance]:
        return list(self.relics)

    def toggle_relic(self, index: int) -> RelicInstance:
        relic = self.relics[index]
        self.relics[index] = replace(relic, enabled=not relic.enabled)
        return self.relics[index]

    @property
    def finished(self) -> bool:
        return any(
            all(a.hp <= 0 for a in self.actors.values() if a.side is side) for side in Side
        )
