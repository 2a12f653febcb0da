"""Playability gate: turn ownership, cooldown, and cost."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from turnstile import Card, Side

INTERRUPT_TAGS = frozenset({"interrupt", "quick"})


@dataclass(frozen=True)
class GateOptions:
    """Encounter-wide switches for the gate.

    ``countdown_active`` blocks every card during the inter-turn countdown.
    With ``enforce_turns`` off, turn restrictions are ignored entirely.
    """

    countdown_active: bool = False
    enforce_turns: bool = True


def turn_playable(card: Card, active_side: Side) -> bool:
    """Whether ``card`` may be played on ``active_side``'s turn.

    Untagged cards are player-only. An untagged interrupt or quick card is
    still allowed against the enemy's turn.
    """
    restriction = card.turn_restriction
    if restriction is not None:
        return restriction.allows(active_side)
    if active_side is Side.PLAYER:
        return True
    return bool(card.tags & INTERRUPT_TAGS)


def is_playable(
    card: Card,
    active_side: Side,
    resource_pool: Mapping[str, int] | None,
    options: GateOptions = GateOptions(),
) -> bool:
    """``resource_pool`` maps actor id to its current power."""
    if options.countdown_active:
        return False
    if options.enforce_turns and not turn_playable(card, active_side):
        return False
    if card.cooldown != 0:
        return False
    if card.cost <= 0:
        return True
    if card.source_actor_id is None or resource_pool is None:
        return False
    return resource_pool.get(card.source_actor_id, 0) >= card.cost


def playable_cards(
    cards: Iterable[Card],
    active_side: Side,
    resource_pool: Mapping[str, int] | None,
    options: GateOptions = GateOptions(),
) -> list[Card]:
    """Filter ``cards`` through ``is_playable``, keeping input order."""
    return [c for c in cards if is_playable(c, active_side, resource_pool, options)]
