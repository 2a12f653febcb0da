"""turnstile-turn - turn clock and turn state machine for turnstile."""

from turnstile_turn.clock import TurnClock
from turnstile_turn.events import (
    AUTOMATIC_REASONS,
    ClockExtended,
    ClockStarted,
    Close,
    CountdownStarted,
    DragEnded,
    EncounterClosed,
    Extend,
    FinalMoveHeld,
    ManualEnd,
    PlayAccepted,
    SetTimeScale,
    SyncSide,
    Tick,
    TurnCommand,
    TurnEvent,
    TurnExpired,
    TurnSwitched,
)
from turnstile_turn.machine import Step, TurnMachine, idle_state, initial_state, transition
from turnstile_turn.systems import make_turn_system
from turnstile_turn.types import Phase, RelicPolicy, TurnState, behavior_flag

__all__ = [
    "TurnClock",
    "Phase",
    "TurnState",
    "RelicPolicy",
    "behavior_flag",
    "Step",
    "TurnMachine",
    "idle_state",
    "initial_state",
    "transition",
    "make_turn_system",
    "AUTOMATIC_REASONS",
    "Tick",
    "PlayAccepted",
    "DragEnded",
    "ManualEnd",
    "Extend",
    "SetTimeScale",
    "SyncSide",
    "Close",
    "TurnEvent",
    "TurnSwitched",
    "TurnExpired",
    "CountdownStarted",
    "FinalMoveHeld",
    "ClockStarted",
    "ClockExtended",
    "EncounterClosed",
    "TurnCommand",
]
