"""Tests for make_turn_system."""

from turnstile import Side, Ticker, TurnConfig
from turnstile_turn import Phase, RelicPolicy, TurnMachine, TurnSwitched, make_turn_system


def test_system_drains_clock_each_tick():
    machine = TurnMachine(TurnConfig(lazy_start=False, turn_duration_ms=1000))
    machine.open()
    ticker = Ticker()
    ticker.add_system(make_turn_system(machine))
    ticker.step(300)
    assert machine.state.remaining_ms == 700.0


def test_commands_forwarded_with_context():
    machine = TurnMachine(TurnConfig(lazy_start=False, turn_duration_ms=1000))
    machine.open()
    seen = []
    ticker = Ticker()
    ticker.add_system(make_turn_system(machine, on_commands=lambda ctx, cmds: seen.append((ctx.tick_number, cmds))))
    ticker.step(600)
    ticker.step(600)
    assert len(seen) == 1
    tick_number, commands = seen[0]
    assert tick_number == 2
    assert TurnSwitched(Side.PLAYER, Side.ENEMY, "timeout") in commands


def test_loop_pause_reaches_the_machine():
    machine = TurnMachine(TurnConfig(lazy_start=False, turn_duration_ms=1000))
    machine.open()
    ticker = Ticker()
    ticker.add_system(make_turn_system(machine))
    ticker.clock.paused = True
    ticker.step(5000)
    assert machine.state.remaining_ms == 1000.0


def test_drag_flag_sampled_per_tick():
    dragging = [True]
    machine = TurnMachine(
        TurnConfig(lazy_start=False, turn_duration_ms=1000), RelicPolicy(final_move=True)
    )
    machine.open()
    ticker = Ticker()
    ticker.add_system(make_turn_system(machine, is_dragging=lambda: dragging[0]))
    ticker.step(1500)
    assert machine.state.phase is Phase.PENDING_FINAL_MOVE
    dragging[0] = False
    ticker.step(50)
    assert machine.state.phase is Phase.ENEMY_TURN
