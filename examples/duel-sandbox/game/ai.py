"""Enemy turn driver: plays one card every few hundred milliseconds."""
from __future__ import annotations

from turnstile import Side
from turnstile_combat import CombatController

ENEMY_THINK_MS = 900.0


class EnemyAi:
    def __init__(self) -> None:
        self._waited = 0.0

    def update(self, controller: CombatController, elapsed_ms: float) -> None:
        state = controller.get_turn_state()
        if not state.phase.is_turn or state.active_side is not Side.ENEMY or controller.paused:
            self._waited = 0.0
            return
        self._waited += elapsed_ms
        if self._waited < ENEMY_THINK_MS:
            return
        self._waited = 0.0
        options = [c for c in controller.get_playable_cards() if c.source_actor_id in ("wolf", "crow")]
        if options:
            controller.play_card(options[0])
        else:
            controller.end_turn()
