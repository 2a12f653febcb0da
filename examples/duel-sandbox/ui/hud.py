"""Turn bar, relic tray, abilities, and key help."""
from __future__ import annotations

import pygame

from turnstile_combat import RelicInstance
from turnstile_trigger import Ability
from turnstile_turn import Phase, TurnState

from ui.constants import (
    BAR_BG,
    BAR_COUNTDOWN,
    BAR_FILL,
    BAR_H,
    HUD_H,
    PANEL_BG,
    RELIC_ON,
    SCREEN_H,
    SCREEN_W,
    TEXT_COLOR,
    TEXT_DIM,
)

HELP = "1-6 play  E end turn  hold D drag  P pause  +/- speed  F/Z/G relics  Esc quit"


def draw_turn_bar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    state: TurnState,
    countdown_total_ms: float,
    display_ms: float,
    y: int,
) -> None:
    bar = pygame.Rect(20, y, SCREEN_W - 40, BAR_H)
    pygame.draw.rect(surface, BAR_BG, bar)
    fill = bar.copy()
    if state.phase is Phase.INTER_TURN_COUNTDOWN and countdown_total_ms > 0:
        fill.width = int(bar.width * state.countdown_ms / countdown_total_ms)
        pygame.draw.rect(surface, BAR_COUNTDOWN, fill)
        text = f"get ready: {state.pending_side.value if state.pending_side else '?'}"
    else:
        fill.width = int(bar.width * state.clock.fill)
        pygame.draw.rect(surface, BAR_FILL, fill)
        running = "running" if state.timer_active else "waiting for first play"
        text = f"{state.phase.value}  {display_ms / 1000.0:.1f}s  ({running})"
    surface.blit(font.render(text, True, TEXT_COLOR), (24, y + BAR_H + 4))


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    relics: list[RelicInstance],
    abilities: list[Ability],
    log: list[str],
    paused: bool,
    time_scale: float,
) -> None:
    top = SCREEN_H - HUD_H
    pygame.draw.rect(surface, PANEL_BG, pygame.Rect(0, top, SCREEN_W, HUD_H))
    x = 20
    for relic in relics:
        color = RELIC_ON if relic.enabled else TEXT_DIM
        label = font.render(relic.behavior_id, True, color)
        surface.blit(label, (x, top + 8))
        x += label.get_width() + 16
    names = ", ".join(a.name for a in abilities) or "none"
    surface.blit(font.render(f"felis abilities: {names}", True, TEXT_COLOR), (20, top + 30))
    status = f"speed x{time_scale:g}" + ("  PAUSED" if paused else "")
    surface.blit(font.render(status, True, TEXT_COLOR), (SCREEN_W - 200, top + 8))
    for i, line in enumerate(log[-2:]):
        surface.blit(font.render(line, True, TEXT_DIM), (20, top + 52 + i * 16))
    surface.blit(font.render(HELP, True, TEXT_DIM), (20, top + HUD_H - 20))
