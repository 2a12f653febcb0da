"""Layout constants and color definitions."""

# Timing
FPS = 60
TICK_MS = 50

# Layout
SCREEN_W = 900
SCREEN_H = 560
ACTOR_W = 180
ACTOR_H = 70
CARD_W = 120
CARD_H = 90
BAR_H = 18
HUD_H = 110

# Colors
BG_COLOR = (18, 20, 28)
PANEL_BG = (32, 34, 48)
PLAYER_COLOR = (90, 170, 230)
ENEMY_COLOR = (220, 100, 90)
HP_COLOR = (110, 200, 120)
HP_BG = (60, 40, 40)
CARD_BG = (45, 48, 66)
CARD_PLAYABLE = (240, 210, 110)
CARD_BORDER = (80, 84, 110)
TEXT_COLOR = (210, 210, 220)
TEXT_DIM = (120, 122, 140)
BAR_FILL = (240, 170, 60)
BAR_COUNTDOWN = (150, 120, 230)
BAR_BG = (50, 52, 70)
RELIC_ON = (120, 220, 160)
