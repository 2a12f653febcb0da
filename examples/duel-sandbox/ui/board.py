"""Actor panels and the card row."""
from __future__ import annotations

import pygame

from turnstile import ActorSnapshot, Card, CombatSnapshot, Side

from ui.constants import (
    ACTOR_H,
    ACTOR_W,
    CARD_BG,
    CARD_BORDER,
    CARD_H,
    CARD_PLAYABLE,
    CARD_W,
    ENEMY_COLOR,
    HP_BG,
    HP_COLOR,
    PANEL_BG,
    PLAYER_COLOR,
    SCREEN_W,
    TEXT_COLOR,
    TEXT_DIM,
)


def _draw_actor(surface: pygame.Surface, font: pygame.font.Font, actor: ActorSnapshot, x: int, y: int) -> None:
    color = PLAYER_COLOR if actor.side is Side.PLAYER else ENEMY_COLOR
    rect = pygame.Rect(x, y, ACTOR_W, ACTOR_H)
    pygame.draw.rect(surface, PANEL_BG, rect, border_radius=6)
    pygame.draw.rect(surface, color, rect, 2, border_radius=6)
    surface.blit(font.render(actor.actor_id, True, color), (x + 8, y + 6))
    stats = f"AP {actor.power}  combo {actor.combo}  arm {actor.armor}/{actor.super_armor}"
    surface.blit(font.render(stats, True, TEXT_DIM), (x + 8, y + 24))
    bar = pygame.Rect(x + 8, y + 46, ACTOR_W - 16, 12)
    pygame.draw.rect(surface, HP_BG, bar)
    fill = bar.copy()
    fill.width = int(bar.width * actor.hp_pct / 100.0)
    pygame.draw.rect(surface, HP_COLOR, fill)


def draw_actors(surface: pygame.Surface, font: pygame.font.Font, snapshot: CombatSnapshot) -> None:
    for i, actor in enumerate(snapshot.enemy_actors):
        _draw_actor(surface, font, actor, SCREEN_W - (i + 1) * (ACTOR_W + 20), 20)
    for i, actor in enumerate(snapshot.player_actors):
        _draw_actor(surface, font, actor, 20 + i * (ACTOR_W + 20), 20)


def draw_cards(
    surface: pygame.Surface,
    font: pygame.font.Font,
    cards: list[Card],
    playable: list[Card],
    y: int,
    label: str,
) -> None:
    """Draw ``cards`` in a row, numbering them from 1 for key selection."""
    surface.blit(font.render(label, True, TEXT_DIM), (20, y - 18))
    playable_ids = {c.card_id for c in playable}
    for i, card in enumerate(cards):
        rect = pygame.Rect(20 + i * (CARD_W + 10), y, CARD_W, CARD_H)
        pygame.draw.rect(surface, CARD_BG, rect, border_radius=6)
        border = CARD_PLAYABLE if card.card_id in playable_ids else CARD_BORDER
        pygame.draw.rect(surface, border, rect, 2, border_radius=6)
        surface.blit(font.render(f"{i + 1}. {card.card_id}", True, TEXT_COLOR), (rect.x + 6, rect.y + 6))
        restriction = card.turn_restriction.value if card.turn_restriction else "-"
        surface.blit(font.render(f"cost {card.cost}  {restriction}", True, TEXT_DIM), (rect.x + 6, rect.y + 26))
        owner = card.source_actor_id or ""
        surface.blit(font.render(owner, True, TEXT_DIM), (rect.x + 6, rect.y + 46))
        if card.tags:
            surface.blit(font.render(",".join(sorted(card.tags)), True, TEXT_DIM), (rect.x + 6, rect.y + 64))
