"""turnstile-combat - combat controller composing the turnstile packages."""

from turnstile_combat.abilities import ability_ids_for, satisfied_abilities
from turnstile_combat.collaborators import (
    CombatActions,
    CombatMode,
    RelicInstance,
    SnapshotSource,
)
from turnstile_combat.controller import CombatController
from turnstile_combat.foundation import FoundationAp, foundation_ap

__all__ = [
    "CombatController",
    "CombatMode",
    "CombatActions",
    "SnapshotSource",
    "RelicInstance",
    "FoundationAp",
    "foundation_ap",
    "ability_ids_for",
    "satisfied_abilities",
]
