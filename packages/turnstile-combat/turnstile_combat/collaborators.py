"""Interfaces the controller expects from the surrounding game."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol, runtime_checkable

from turnstile import Card, CombatSnapshot


class CombatMode(str, Enum):
    """``LAB`` drives turn progression locally; ``LIVE`` follows the simulation."""

    LAB = "lab"
    LIVE = "live"


@dataclass(frozen=True)
class RelicInstance:
    """An equipped relic. Only enabled instances influence turn policy."""

    instance_id: str
    relic_id: str
    behavior_id: str
    enabled: bool = True
    level: int = 1


@runtime_checkable
class SnapshotSource(Protocol):
    def snapshot(self) -> CombatSnapshot: ...


@runtime_checkable
class CombatActions(Protocol):
    """Side-effecting calls into the game-state model.

    An implementation may also provide ``tick(now_ms)``; in lab mode it is
    called once per loop period with the scaled combat clock.
    """

    def advance_turn(self) -> None: ...

    def end_turn(self) -> None: ...

    def play_card(self, card: Card, target: str | None) -> bool: ...

    def equipped_relics(self) -> Iterable[RelicInstance]: ...
