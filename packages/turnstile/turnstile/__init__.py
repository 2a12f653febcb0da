"""turnstile - turn ownership and timing core for a real-time card combat client."""

from turnstile.clock import ScaledClock
from turnstile.config import TurnConfig
from turnstile.signals import TransitionBus
from turnstile.snapshot import ActorSnapshot, Card, CombatSnapshot, DiscardedCard
from turnstile.ticker import Ticker
from turnstile.types import Side, TickContext, TickerClosedError, TurnRestriction

__all__ = [
    "Ticker",
    "ScaledClock",
    "TickContext",
    "TurnConfig",
    "TransitionBus",
    "Side",
    "TurnRestriction",
    "ActorSnapshot",
    "Card",
    "DiscardedCard",
    "CombatSnapshot",
    "TickerClosedError",
]
