"""Duel Sandbox - turn flow and trigger playground with pygame.

Exercises turnstile, turnstile-trigger, turnstile-play, turnstile-turn,
and turnstile-combat in lab mode over a small local simulation.

Controls:
  1-6     Play the n-th card in hand (re-available discards follow)
  E       End turn
  D       Hold to simulate dragging a card
  P       Pause / resume
  +/-     Change time scale
  F/Z/G   Toggle final-move / zen / pause-on-drag relics
  Esc     Quit
"""
from __future__ import annotations

import logging
import sys

import pygame

from turnstile import TurnConfig
from turnstile_combat import CombatController, CombatMode
from turnstile_turn import TurnClock, TurnSwitched

from game.ai import EnemyAi
from game.content import ABILITIES
from game.duel import Duel
from ui.board import draw_actors, draw_cards
from ui.constants import BG_COLOR, CARD_H, FPS, SCREEN_H, SCREEN_W, TICK_MS
from ui.hud import draw_hud, draw_turn_bar

SCALES = [0.25, 0.5, 1.0, 2.0, 4.0]
RELIC_KEYS = {pygame.K_f: 0, pygame.K_z: 1, pygame.K_g: 2}
CARD_KEYS = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5, pygame.K_6]

logger = logging.getLogger("duel-sandbox")


class GameState:
    """Holds the duel, the controller, and display bookkeeping."""

    def __init__(self) -> None:
        self.config = TurnConfig(turn_duration_ms=8000, inter_turn_countdown=True, play_bonus_ms=750)
        self.duel = Duel()
        self.controller = CombatController(
            self.duel, self.duel, ABILITIES, mode=CombatMode.LAB, config=self.config
        )
        self.ai = EnemyAi()
        self.scale_index = SCALES.index(1.0)
        self.shown_clock: TurnClock | None = None
        self.display_ms = 0.0
        self.controller.on_transition(self._on_transition)
        self.controller.open()

    def _on_transition(self, command) -> None:
        if isinstance(command, TurnSwitched):
            logger.info("%s -> %s (%s)", command.from_side.value, command.to_side.value, command.reason)

    def selectable(self) -> list:
        snap = self.duel.snapshot()
        cards = [c for c in snap.cards if c.source_actor_id in ("felis", "ursus")]
        return cards + [d.card for d in snap.discarded if d.card.ability_id == "recall"]

    def play(self, index: int) -> None:
        cards = self.selectable()
        if index < len(cards) and not self.controller.play_card(cards[index]):
            self.duel.log.append(f"{cards[index].card_id} rejected")

    def step_scale(self, delta: int) -> None:
        self.scale_index = max(0, min(len(SCALES) - 1, self.scale_index + delta))
        self.controller.set_time_scale(SCALES[self.scale_index])

    def toggle_relic(self, index: int) -> None:
        relic = self.duel.toggle_relic(index)
        self.controller.refresh_relics()
        self.duel.log.append(f"{relic.behavior_id} {'on' if relic.enabled else 'off'}")

    def tick(self) -> None:
        self.controller.tick(TICK_MS)
        self.ai.update(self.controller, TICK_MS)
        clock = self.controller.get_turn_state().clock
        if clock.display_changed(self.shown_clock, self.config.display_granularity_ms):
            self.display_ms = clock.display_ms(self.config.display_granularity_ms)
            self.shown_clock = clock


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Duel Sandbox - turnstile demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)

    state = GameState()

    tick_interval = TICK_MS / 1000.0
    accumulator = 0.0
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0
        accumulator += dt

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in CARD_KEYS:
                    state.play(CARD_KEYS.index(event.key))
                elif event.key == pygame.K_e:
                    state.controller.end_turn()
                elif event.key == pygame.K_d:
                    state.controller.begin_drag()
                elif event.key == pygame.K_p:
                    if state.controller.paused:
                        state.controller.resume()
                    else:
                        state.controller.pause()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    state.step_scale(1)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    state.step_scale(-1)
                elif event.key in RELIC_KEYS:
                    state.toggle_relic(RELIC_KEYS[event.key])

            elif event.type == pygame.KEYUP and event.key == pygame.K_d:
                state.controller.end_drag()

        # --- Tick ---
        while accumulator >= tick_interval:
            state.tick()
            accumulator -= tick_interval

        if state.duel.finished:
            running = False

        # --- Render ---
        screen.fill(BG_COLOR)
        snap = state.duel.snapshot()
        playable = state.controller.get_playable_cards()
        turn = state.controller.get_turn_state()

        draw_actors(screen, font, snap)
        draw_turn_bar(screen, font, turn, state.config.effective_countdown_ms, state.display_ms, 110)
        draw_cards(screen, font, state.selectable(), playable, 180, "your cards")
        enemy_cards = [c for c in snap.cards if c.source_actor_id in ("wolf", "crow")]
        draw_cards(screen, font, enemy_cards, playable, 200 + CARD_H + 20, "enemy cards")
        draw_hud(
            screen,
            font,
            state.controller.relics,
            state.controller.get_satisfied_abilities("felis"),
            state.duel.log,
            state.controller.paused,
            SCALES[state.scale_index],
        )

        pygame.display.flip()

    state.controller.close()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
