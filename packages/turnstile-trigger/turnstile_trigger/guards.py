"""TriggerGuards registry."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from turnstile_trigger.evaluator import TriggerContext
    from turnstile_trigger.types import Trigger, TriggerKind

TriggerGuard = Callable[["Trigger", "TriggerContext"], bool]


class TriggerGuards:
    """Maps trigger kinds to predicates over a trigger and its context."""

    def __init__(self) -> None:
        self._guards: dict[TriggerKind, TriggerGuard] = {}

    def register(self, kind: TriggerKind, fn: TriggerGuard) -> None:
        """Register a guard for ``kind``. Overwrites if already registered."""
        self._guards[kind] = fn

    def check(self, trigger: Trigger, ctx: TriggerContext) -> bool:
        """Evaluate ``trigger``. Raises KeyError if its kind is not registered."""
        return self._guards[trigger.kind](trigger, ctx)

    def has(self, kind: TriggerKind) -> bool:
        return kind in self._guards

    def kinds(self) -> list[TriggerKind]:
        """List all registered kinds."""
        return list(self._guards)

    def copy(self) -> TriggerGuards:
        clone = TriggerGuards()
        clone._guards.update(self._guards)
        return clone
