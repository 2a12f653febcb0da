"""turnstile-play - card playability gate for turnstile."""

from turnstile_play.gate import (
    INTERRUPT_TAGS,
    GateOptions,
    is_playable,
    playable_cards,
    turn_playable,
)
from turnstile_play.rediscard import rediscard_ready

__all__ = [
    "INTERRUPT_TAGS",
    "GateOptions",
    "is_playable",
    "playable_cards",
    "turn_playable",
    "rediscard_ready",
]
