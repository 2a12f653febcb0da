"""CombatController - one encounter's turn flow, playability, and abilities."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, Mapping

from turnstile import Card, CombatSnapshot, Side, Ticker, TickContext, TransitionBus, TurnConfig
from turnstile_combat.abilities import satisfied_abilities
from turnstile_combat.collaborators import CombatActions, CombatMode, RelicInstance, SnapshotSource
from turnstile_combat.foundation import FoundationAp, foundation_ap
from turnstile_play import GateOptions, is_playable, rediscard_ready
from turnstile_trigger import Ability, TriggerContext, TriggerGuards, evaluate_all
from turnstile_turn import (
    AUTOMATIC_REASONS,
    Close,
    DragEnded,
    Extend,
    ManualEnd,
    PlayAccepted,
    RelicPolicy,
    SetTimeScale,
    SyncSide,
    TurnCommand,
    TurnMachine,
    TurnState,
    TurnSwitched,
    make_turn_system,
)

logger = logging.getLogger(__name__)


class CombatController:
    """Composes the tick loop, turn machine, gate, and triggers.

    Each ``tick`` runs, in order: the simulation clock (lab mode) or side
    sync from the simulation (live mode), the turn clock and its
    transitions, trigger re-evaluation, and delivery of queued turn
    notifications.
    """

    def __init__(
        self,
        source: SnapshotSource,
        actions: CombatActions,
        abilities: Mapping[str, Ability] | Iterable[Ability] = (),
        mode: CombatMode = CombatMode.LAB,
        config: TurnConfig | None = None,
        guards: TriggerGuards | None = None,
    ) -> None:
        self._source = source
        self._actions = actions
        if isinstance(abilities, Mapping):
            self._abilities: dict[str, Ability] = dict(abilities)
        else:
            self._abilities = {a.ability_id: a for a in abilities}
        self._mode = mode
        self._config = config or TurnConfig()
        self._guards = guards
        self._ticker = Ticker(self._config.tick_interval_ms, self._config.min_time_scale)
        machine_config = self._config
        if mode is CombatMode.LIVE:
            # The simulation owns turn progression; expiry waits for SyncSide.
            machine_config = replace(machine_config, local_turn_progression=False)
        self._machine = TurnMachine(machine_config)
        self._bus: TransitionBus[TurnCommand] = TransitionBus()
        self._relics: list[RelicInstance] = []
        self._dragging = False
        self._opened = False
        self._closed = False
        self._cache_key: tuple[CombatSnapshot, TurnState] | None = None
        self._playable: list[Card] = []

    # --- Lifecycle ---

    @property
    def mode(self) -> CombatMode:
        return self._mode

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed

    @property
    def ticker(self) -> Ticker:
        return self._ticker

    @property
    def relics(self) -> list[RelicInstance]:
        return list(self._relics)

    def open(self) -> bool:
        """Start the encounter on the player's turn. False if already used."""
        if self._opened or self._closed:
            return False
        self._opened = True
        self.refresh_relics()
        if self._mode is CombatMode.LAB:
            self._ticker.add_system(self._sim_system)
        else:
            self._ticker.add_system(self._sync_system)
        self._ticker.add_system(
            make_turn_system(self._machine, lambda: self._dragging, self._on_tick_commands)
        )
        self._ticker.add_system(self._reevaluate_system)
        self._ticker.add_system(self._flush_system)
        self._handle(self._machine.open())
        logger.info("encounter opened in %s mode", self._mode.value)
        return True

    def close(self) -> None:
        """Stop every timer. Nothing fires after this returns."""
        if self._closed:
            return
        self._closed = True
        if self._opened:
            self._handle(self._machine.dispatch(Close()))
            self._bus.flush()
        self._ticker.close()
        self._bus.clear()
        self._playable = []
        self._cache_key = None
        logger.info("encounter closed")

    def tick(self, elapsed_ms: float | None = None) -> bool:
        """Run one loop period. False once the encounter is closed."""
        if not self.is_open:
            return False
        self._ticker.step(elapsed_ms)
        return True

    # --- Systems ---

    def _sim_system(self, ctx: TickContext) -> None:
        sim_tick = getattr(self._actions, "tick", None)
        if callable(sim_tick) and not ctx.paused:
            sim_tick(ctx.now_ms)

    def _on_tick_commands(self, ctx: TickContext, commands: list[TurnCommand]) -> None:
        self._handle(commands)

    def _sync_system(self, ctx: TickContext) -> None:
        side = self._source.snapshot().active_side
        if side is not None:
            self._handle(self._machine.dispatch(SyncSide(side)))

    def _reevaluate_system(self, ctx: TickContext) -> None:
        self._refresh_playable(self._source.snapshot())

    def _flush_system(self, ctx: TickContext) -> None:
        self._bus.flush()

    def _handle(self, commands: list[TurnCommand]) -> None:
        for command in commands:
            self._bus.publish(command)
            if not isinstance(command, TurnSwitched):
                continue
            logger.debug(
                "turn %s -> %s (%s)", command.from_side.value, command.to_side.value, command.reason
            )
            if self._mode is CombatMode.LAB and command.reason in AUTOMATIC_REASONS:
                self._actions.advance_turn()

    # --- Inputs ---

    def begin_drag(self) -> None:
        self._dragging = True

    def end_drag(self) -> None:
        self._dragging = False
        if self.is_open:
            self._handle(self._machine.dispatch(DragEnded()))

    @property
    def dragging(self) -> bool:
        return self._dragging

    def pause(self) -> None:
        self._ticker.clock.paused = True

    def resume(self) -> None:
        self._ticker.clock.paused = False

    @property
    def paused(self) -> bool:
        return self._ticker.clock.paused

    def set_time_scale(self, scale: float) -> None:
        self._ticker.clock.time_scale = scale
        self._machine.dispatch(SetTimeScale(scale))

    def refresh_relics(self) -> RelicPolicy:
        """Re-read equipped relics and rebuild the turn policy."""
        self._relics = list(self._actions.equipped_relics())
        policy = RelicPolicy.from_relics(self._relics)
        self._machine.policy = policy
        return policy

    def play_card(self, card: Card, target: str | None = None) -> bool:
        """Play ``card`` if it is currently playable. False when rejected."""
        if not self.is_open:
            return False
        snapshot = self._source.snapshot()
        if all(c.card_id != card.card_id for c in self._compute_playable(snapshot)):
            logger.debug("rejected play of %s", card.card_id)
            return False
        if not self._actions.play_card(card, target):
            logger.debug("play of %s refused by the simulation", card.card_id)
            return False
        side = self._card_side(card, snapshot, self._machine.state.active_side)
        self._handle(self._machine.dispatch(PlayAccepted(side)))
        self._cache_key = None
        return True

    def end_turn(self) -> bool:
        if not self.is_open:
            return False
        self._handle(self._machine.dispatch(ManualEnd()))
        self._actions.end_turn()
        self._cache_key = None
        return True

    def extend_turn(self, ms: float) -> None:
        if self.is_open:
            self._handle(self._machine.dispatch(Extend(ms)))

    # --- Queries ---

    def on_transition(self, handler: Callable[[TurnCommand], None]) -> Callable[[], None]:
        """Subscribe to turn notifications. Returns an unsubscribe callable."""
        return self._bus.subscribe(handler)

    def get_turn_state(self) -> TurnState:
        return self._machine.state

    def get_playable_cards(self) -> list[Card]:
        if not self.is_open:
            return []
        return list(self._refresh_playable(self._source.snapshot()))

    def get_satisfied_abilities(self, actor_id: str) -> list[Ability]:
        if not self.is_open:
            return []
        return satisfied_abilities(self._source.snapshot(), actor_id, self._abilities, self._guards)

    def foundation_ap(self, side: Side = Side.PLAYER) -> list[FoundationAp]:
        return foundation_ap(self._source.snapshot(), side)

    # --- Playability ---

    def _refresh_playable(self, snapshot: CombatSnapshot) -> list[Card]:
        state = self._machine.state
        key = (snapshot, state)
        cached = self._cache_key
        if cached is None or cached[0] is not snapshot or cached[1] is not state:
            self._playable = self._compute_playable(snapshot)
            self._cache_key = key
        return self._playable

    def _card_side(self, card: Card, snapshot: CombatSnapshot, fallback: Side) -> Side:
        if card.source_actor_id is not None:
            side = snapshot.side_of(card.source_actor_id)
            if side is not None:
                return side
        return fallback

    def _triggers_pass(self, card: Card, snapshot: CombatSnapshot, side: Side) -> bool:
        ability = self._abilities.get(card.ability_id) if card.ability_id else None
        if ability is None:
            return True
        ctx = TriggerContext(snapshot=snapshot, actor_id=card.source_actor_id, side=side)
        return evaluate_all(ability.play_triggers, ctx, self._guards)

    def _compute_playable(self, snapshot: CombatSnapshot) -> list[Card]:
        state = self._machine.state
        if state.idle:
            return []
        options = GateOptions(
            countdown_active=state.countdown_active,
            enforce_turns=self._config.enforce_turn_ownership,
        )
        pool = snapshot.power_by_actor()
        active = state.active_side
        playable = []
        for card in snapshot.cards:
            side = self._card_side(card, snapshot, active)
            if is_playable(card, active, pool, options) and self._triggers_pass(card, snapshot, side):
                playable.append(card)
        for discard in snapshot.discarded:
            card = discard.card
            side = self._card_side(card, snapshot, active)
            ability = self._abilities.get(card.ability_id) if card.ability_id else None
            if (
                is_playable(card, active, pool, options)
                and rediscard_ready(discard, ability, snapshot, side, self._guards)
                and self._triggers_pass(card, snapshot, side)
            ):
                playable.append(card)
        return playable
