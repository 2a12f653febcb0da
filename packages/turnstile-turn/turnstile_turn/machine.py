"""Turn state machine: a pure transition function plus a thin shell.

``transition`` never mutates anything. It takes the current ``TurnState``
and one event and returns the next state together with the commands the
shell should carry out. ``TurnMachine`` owns the state between calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from turnstile import Side, TurnConfig
from turnstile_turn.clock import TurnClock
from turnstile_turn.events import (
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
from turnstile_turn.types import Phase, RelicPolicy, TurnState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    state: TurnState
    commands: tuple[TurnCommand, ...] = ()


def _new_clock(config: TurnConfig, time_scale: float = 1.0) -> TurnClock:
    return TurnClock(
        duration_ms=config.effective_turn_duration_ms,
        time_scale=time_scale,
        min_duration_ms=config.min_turn_duration_ms,
        min_time_scale=config.min_time_scale,
    )


def idle_state(config: TurnConfig, time_scale: float = 1.0) -> TurnState:
    return TurnState(phase=Phase.IDLE, active_side=Side.PLAYER, clock=_new_clock(config, time_scale))


def _begin_turn(
    state: TurnState,
    side: Side,
    policy: RelicPolicy,
    config: TurnConfig,
    commands: list[TurnCommand],
) -> TurnState:
    clock = state.clock.reset()
    if not config.lazy_start and not policy.zen:
        clock = clock.start()
        commands.append(ClockStarted(side))
    return TurnState(phase=Phase.turn_of(side), active_side=side, clock=clock)


def initial_state(
    config: TurnConfig, policy: RelicPolicy = RelicPolicy(), time_scale: float = 1.0
) -> Step:
    """Player's turn with a fresh clock."""
    commands: list[TurnCommand] = []
    state = _begin_turn(idle_state(config, time_scale), Side.PLAYER, policy, config, commands)
    return Step(state, tuple(commands))


def _switch(
    state: TurnState,
    to_side: Side,
    reason: str,
    policy: RelicPolicy,
    config: TurnConfig,
    commands: list[TurnCommand],
) -> TurnState:
    commands.append(TurnSwitched(state.active_side, to_side, reason))
    return _begin_turn(state, to_side, policy, config, commands)


def _expire(
    state: TurnState,
    dragging: bool,
    policy: RelicPolicy,
    config: TurnConfig,
    commands: list[TurnCommand],
) -> TurnState:
    side = state.active_side
    commands.append(TurnExpired(side))
    if not config.local_turn_progression:
        return replace(state, clock=state.clock.freeze())
    if side is Side.PLAYER and policy.final_move and dragging:
        commands.append(FinalMoveHeld(side))
        return replace(state, phase=Phase.PENDING_FINAL_MOVE, clock=state.clock.freeze())
    countdown = config.effective_countdown_ms
    # An enemy timeout always counts down, even at zero length; the next
    # unpaused tick ends it.
    if side is Side.ENEMY or (config.inter_turn_countdown and countdown > 0):
        commands.append(CountdownStarted(side.opposite, countdown))
        return replace(
            state,
            phase=Phase.INTER_TURN_COUNTDOWN,
            clock=state.clock.freeze(),
            pending_side=side.opposite,
            countdown_ms=countdown,
        )
    return _switch(state, side.opposite, "timeout", policy, config, commands)


def _on_tick(
    state: TurnState,
    event: Tick,
    policy: RelicPolicy,
    config: TurnConfig,
    commands: list[TurnCommand],
) -> TurnState:
    if state.phase is Phase.PENDING_FINAL_MOVE:
        if event.dragging:
            return state
        return _switch(state, Side.ENEMY, "final_move", policy, config, commands)

    paused = event.paused or (policy.pause_on_drag and event.dragging)
    if paused:
        return state

    if state.phase is Phase.INTER_TURN_COUNTDOWN:
        left = max(0.0, state.countdown_ms - event.elapsed_ms)
        if left > 0:
            return replace(state, countdown_ms=left)
        pending = state.pending_side or state.active_side.opposite
        return _switch(state, pending, "countdown", policy, config, commands)

    if not state.phase.is_turn or policy.zen or not state.clock.active:
        return state
    clock = state.clock.tick(event.elapsed_ms)
    ticked = replace(state, clock=clock)
    if clock.expired:
        return _expire(ticked, event.dragging, policy, config, commands)
    return ticked


def _on_play(
    state: TurnState,
    event: PlayAccepted,
    policy: RelicPolicy,
    config: TurnConfig,
    commands: list[TurnCommand],
) -> TurnState:
    if not state.phase.is_turn or event.side is not state.active_side or policy.zen:
        return state
    if state.clock.expired:
        return state
    if not state.clock.active:
        commands.append(ClockStarted(state.active_side))
        return replace(state, clock=state.clock.start())
    if config.play_bonus_ms > 0:
        return _on_extend(state, config.play_bonus_ms, commands)
    return state


def _on_extend(state: TurnState, ms: float, commands: list[TurnCommand]) -> TurnState:
    if not state.phase.is_turn or ms <= 0:
        return state
    clock = state.clock.extend(ms)
    commands.append(ClockExtended(state.active_side, ms, clock.remaining_ms))
    return replace(state, clock=clock)


def transition(
    state: TurnState,
    event: TurnEvent,
    policy: RelicPolicy = RelicPolicy(),
    config: TurnConfig = TurnConfig(),
) -> Step:
    """Apply one event. Returns the next state and the commands it implies."""
    commands: list[TurnCommand] = []

    if isinstance(event, SetTimeScale):
        return Step(replace(state, clock=state.clock.set_time_scale(event.scale)))

    if isinstance(event, Close):
        if state.idle:
            return Step(state)
        return Step(idle_state(config, state.clock.time_scale), (EncounterClosed(),))

    if state.idle:
        return Step(state)

    if isinstance(event, Tick):
        nxt = _on_tick(state, event, policy, config, commands)
    elif isinstance(event, DragEnded):
        nxt = state
        if state.phase is Phase.PENDING_FINAL_MOVE:
            nxt = _switch(state, Side.ENEMY, "final_move", policy, config, commands)
    elif isinstance(event, ManualEnd):
        nxt = _switch(state, state.active_side.opposite, "manual", policy, config, commands)
    elif isinstance(event, PlayAccepted):
        nxt = _on_play(state, event, policy, config, commands)
    elif isinstance(event, Extend):
        nxt = _on_extend(state, event.ms, commands)
    elif isinstance(event, SyncSide):
        nxt = state
        if not (state.phase.is_turn and state.active_side is event.side):
            nxt = _switch(state, event.side, "sync", policy, config, commands)
    else:
        raise TypeError(f"unknown turn event: {event!r}")

    return Step(nxt, tuple(commands))


class TurnMachine:
    """Owns a ``TurnState`` and applies events to it."""

    def __init__(
        self,
        config: TurnConfig | None = None,
        policy: RelicPolicy | None = None,
    ) -> None:
        self._config = config or TurnConfig()
        self._policy = policy or RelicPolicy()
        self._state = idle_state(self._config)
        self._listeners: list[Callable[[TurnCommand], None]] = []

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def config(self) -> TurnConfig:
        return self._config

    @property
    def policy(self) -> RelicPolicy:
        return self._policy

    @policy.setter
    def policy(self, value: RelicPolicy) -> None:
        self._policy = value

    def on_command(self, listener: Callable[[TurnCommand], None]) -> None:
        self._listeners.append(listener)

    def open(self) -> list[TurnCommand]:
        """Start an encounter: player's turn with a fresh clock."""
        step = initial_state(self._config, self._policy, self._state.clock.time_scale)
        return self._apply(step)

    def dispatch(self, event: TurnEvent) -> list[TurnCommand]:
        return self._apply(transition(self._state, event, self._policy, self._config))

    def _apply(self, step: Step) -> list[TurnCommand]:
        before = self._state.phase
        self._state = step.state
        if step.state.phase is not before:
            logger.debug("turn phase %s -> %s", before.value, step.state.phase.value)
        commands = list(step.commands)
        for command in commands:
            for listener in list(self._listeners):
                listener(command)
        return commands
