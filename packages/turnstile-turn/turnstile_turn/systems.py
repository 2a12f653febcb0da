"""System factory driving a TurnMachine from the tick loop."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from turnstile_turn.events import Tick

if TYPE_CHECKING:
    from turnstile import TickContext

    from turnstile_turn.events import TurnCommand
    from turnstile_turn.machine import TurnMachine


def make_turn_system(
    machine: TurnMachine,
    is_dragging: Callable[[], bool] = lambda: False,
    on_commands: Callable[[TickContext, list[TurnCommand]], None] | None = None,
) -> Callable[[TickContext], None]:
    """Return a system that feeds one ``Tick`` per loop period to ``machine``.

    The turn clock drains real elapsed time; the loop's pause flag and the
    drag flag are sampled once per tick.
    """

    def turn_system(ctx: TickContext) -> None:
        commands = machine.dispatch(
            Tick(elapsed_ms=ctx.elapsed_ms, dragging=is_dragging(), paused=ctx.paused)
        )
        if commands and on_commands is not None:
            on_commands(ctx, commands)

    return turn_system
