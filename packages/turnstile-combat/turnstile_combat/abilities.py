"""Which abilities an actor can currently use."""
from __future__ import annotations

from typing import Mapping

from turnstile import CombatSnapshot
from turnstile_trigger import Ability, TriggerContext, TriggerGuards, evaluate_all


def ability_ids_for(snapshot: CombatSnapshot, actor_id: str) -> list[str]:
    """Modifier-slot abilities first, then abilities of cards the actor sources."""
    actor = snapshot.actor(actor_id)
    if actor is None:
        return []
    ids = list(actor.modifier_slots)
    ids.extend(
        c.ability_id for c in snapshot.cards
        if c.source_actor_id == actor_id and c.ability_id
    )
    return list(dict.fromkeys(ids))


def satisfied_abilities(
    snapshot: CombatSnapshot,
    actor_id: str,
    abilities: Mapping[str, Ability],
    guards: TriggerGuards | None = None,
) -> list[Ability]:
    """Abilities whose play triggers hold for ``actor_id``.

    Dead-run-only abilities are left out unless the actor's side has no
    legal moves. Unknown ability ids are skipped.
    """
    actor = snapshot.actor(actor_id)
    if actor is None:
        return []
    stuck = snapshot.no_legal_moves(actor.side)
    ctx = TriggerContext(snapshot=snapshot, actor_id=actor_id)
    found = []
    for ability_id in ability_ids_for(snapshot, actor_id):
        ability = abilities.get(ability_id)
        if ability is None:
            continue
        if ability.dead_run_only and not stuck:
            continue
        if evaluate_all(ability.play_triggers, ctx, guards):
            found.append(ability)
    return found
