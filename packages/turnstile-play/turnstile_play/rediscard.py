"""Re-availability of discarded cards."""
from __future__ import annotations

from turnstile import CombatSnapshot, DiscardedCard, Side
from turnstile_trigger import Ability, TriggerContext, TriggerGuards, evaluate_all


def rediscard_ready(
    discard: DiscardedCard,
    ability: Ability | None,
    snapshot: CombatSnapshot,
    side: Side | None = None,
    guards: TriggerGuards | None = None,
) -> bool:
    """True once every not-discarded window on ``ability`` has elapsed.

    A card with no bound ability, or no such trigger, is ready at once.
    """
    if ability is None:
        return True
    ctx = TriggerContext(
        snapshot=snapshot,
        actor_id=discard.card.source_actor_id,
        side=side,
        discard=discard,
    )
    return evaluate_all(ability.rediscard_triggers, ctx, guards)
