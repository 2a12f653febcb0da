"""Per-actor AP summaries for foundation displays."""
from __future__ import annotations

from dataclasses import dataclass

from turnstile import CombatSnapshot, Side


@dataclass(frozen=True)
class FoundationAp:
    actor_id: str
    ap: int
    cards: int = 0
    affordable: int = 0

    @property
    def pips(self) -> int:
        return max(0, self.ap)


def foundation_ap(snapshot: CombatSnapshot, side: Side) -> list[FoundationAp]:
    """One entry per actor on ``side``, counting cards it can pay for now."""
    result = []
    for actor in snapshot.actors_on(side):
        owned = [c for c in snapshot.cards if c.source_actor_id == actor.actor_id]
        result.append(
            FoundationAp(
                actor_id=actor.actor_id,
                ap=actor.power,
                cards=len(owned),
                affordable=sum(1 for c in owned if c.cost <= actor.power),
            )
        )
    return result
