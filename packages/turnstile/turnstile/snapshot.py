"""Read-only combat snapshot consumed by triggers, the gate, and the controller.

Everything here is frozen. The external game-state collaborator builds a new
snapshot whenever its state changes; the core never mutates one.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from turnstile.types import Side, TurnRestriction


@dataclass(frozen=True)
class ActorSnapshot:
    """One combat participant at a point in time."""

    actor_id: str
    side: Side
    hp: int = 0
    hp_max: int = 0
    armor: int = 0
    super_armor: int = 0
    power: int = 0
    element: str | None = None
    modifier_slots: tuple[str, ...] = ()
    combo: int = 0
    discard_count: int = 0
    active_deck_count: int = 0
    last_action_ms: float | None = None

    @property
    def hp_pct(self) -> float:
        if self.hp_max <= 0:
            return 0.0
        return max(0, self.hp) * 100.0 / self.hp_max

    @property
    def knocked_out(self) -> bool:
        return self.hp <= 0


@dataclass(frozen=True)
class Card:
    """A playable action.

    ``cooldown`` is the remaining cooldown; the card is unplayable while it
    is nonzero. ``tags`` may contain ``"interrupt"`` or ``"quick"``.
    """

    card_id: str
    cost: int = 0
    cooldown: int = 0
    max_cooldown: int = 0
    turn_restriction: TurnRestriction | None = None
    source_actor_id: str | None = None
    ability_id: str | None = None
    tags: frozenset[str] = frozenset()


@dataclass(frozen=True)
class DiscardedCard:
    """A card in a discard pile, with what was true when it was discarded."""

    card: Card
    discarded_at_ms: float
    combo_at_discard: int = 0


@dataclass(frozen=True)
class CombatSnapshot:
    """Everything the core reads about one encounter.

    ``player_combo`` and ``enemy_combo`` override the per-side totals; when
    left as ``None`` they are the sum of the side's actor combos.
    ``active_side`` is only consulted in live mode.
    """

    player_actors: tuple[ActorSnapshot, ...] = ()
    enemy_actors: tuple[ActorSnapshot, ...] = ()
    now_ms: float = 0.0
    no_moves_player: bool = False
    no_moves_enemy: bool = False
    player_combo: int | None = None
    enemy_combo: int | None = None
    cards: tuple[Card, ...] = ()
    discarded: tuple[DiscardedCard, ...] = ()
    active_side: Side | None = None
    _index: dict[str, ActorSnapshot] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index = {a.actor_id: a for a in self.enemy_actors}
        index.update((a.actor_id, a) for a in self.player_actors)
        object.__setattr__(self, "_index", index)

    def actor(self, actor_id: str) -> ActorSnapshot | None:
        return self._index.get(actor_id)

    def side_of(self, actor_id: str) -> Side | None:
        found = self._index.get(actor_id)
        return found.side if found is not None else None

    def actors_on(self, side: Side) -> tuple[ActorSnapshot, ...]:
        return self.player_actors if side is Side.PLAYER else self.enemy_actors

    def combo_total(self, side: Side) -> int:
        override = self.player_combo if side is Side.PLAYER else self.enemy_combo
        if override is not None:
            return override
        return sum(a.combo for a in self.actors_on(side))

    def no_legal_moves(self, side: Side) -> bool:
        return self.no_moves_player if side is Side.PLAYER else self.no_moves_enemy

    def power_by_actor(self) -> dict[str, int]:
        return {actor_id: a.power for actor_id, a in self._index.items()}
