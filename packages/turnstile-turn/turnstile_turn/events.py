"""Events fed to the turn machine and the commands it emits."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from turnstile import Side


# --- Events ---

@dataclass(frozen=True)
class Tick:
    """One loop period. ``elapsed_ms`` is real time since the last tick."""

    elapsed_ms: float
    dragging: bool = False
    paused: bool = False


@dataclass(frozen=True)
class PlayAccepted:
    side: Side


@dataclass(frozen=True)
class DragEnded:
    pass


@dataclass(frozen=True)
class ManualEnd:
    pass


@dataclass(frozen=True)
class Extend:
    ms: float


@dataclass(frozen=True)
class SetTimeScale:
    scale: float


@dataclass(frozen=True)
class SyncSide:
    """The authoritative simulation reports ``side`` as active."""

    side: Side


@dataclass(frozen=True)
class Close:
    pass


TurnEvent = Union[Tick, PlayAccepted, DragEnded, ManualEnd, Extend, SetTimeScale, SyncSide, Close]


# --- Commands ---

@dataclass(frozen=True)
class TurnSwitched:
    """``reason`` is one of timeout, countdown, final_move, manual, sync."""

    from_side: Side
    to_side: Side
    reason: str


@dataclass(frozen=True)
class TurnExpired:
    side: Side


@dataclass(frozen=True)
class CountdownStarted:
    pending_side: Side
    duration_ms: float


@dataclass(frozen=True)
class FinalMoveHeld:
    side: Side


@dataclass(frozen=True)
class ClockStarted:
    side: Side


@dataclass(frozen=True)
class ClockExtended:
    side: Side
    ms: float
    remaining_ms: float


@dataclass(frozen=True)
class EncounterClosed:
    pass


TurnCommand = Union[
    TurnSwitched,
    TurnExpired,
    CountdownStarted,
    FinalMoveHeld,
    ClockStarted,
    ClockExtended,
    EncounterClosed,
]

# Reasons for switches the clock made on its own, as opposed to a
# player's end-turn or a sync from the authoritative simulation.
AUTOMATIC_REASONS = frozenset({"timeout", "countdown", "final_move"})
