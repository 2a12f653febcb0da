"""Ticker - cooperative fixed-period loop, pacing, and lifecycle hooks."""

import logging
import time
from typing import Callable

from turnstile.clock import DEFAULT_MIN_TIME_SCALE, ScaledClock
from turnstile.types import System, TickContext, TickerClosedError

logger = logging.getLogger(__name__)


class Ticker:
    """Runs registered systems once per tick on a single thread.

    ``step`` is the only place time moves forward. Callers embedding the
    ticker in their own loop pass the measured real delta; ``run_forever``
    measures it with ``time.monotonic`` and sleeps out the remainder of
    each period.
    """

    def __init__(
        self,
        interval_ms: float = 50.0,
        min_time_scale: float = DEFAULT_MIN_TIME_SCALE,
        time_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = ScaledClock(interval_ms, min_time_scale)
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[TickContext], None]] = []
        self._stop_hooks: list[Callable[[TickContext], None]] = []
        self._stop_requested: bool = False
        self._closed: bool = False
        self._time_fn = time_fn
        self._last_real: float | None = None

    @property
    def clock(self) -> ScaledClock:
        return self._clock

    @property
    def closed(self) -> bool:
        return self._closed

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def remove_system(self, system: System) -> None:
        try:
            self._systems.remove(system)
        except ValueError:
            pass

    def on_start(self, hook: Callable[[TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def stop(self) -> None:
        self._stop_requested = True

    def close(self) -> None:
        """Stop for good. Drops every system and hook."""
        if self._closed:
            return
        self._stop_requested = True
        self._closed = True
        self._systems.clear()
        self._start_hooks.clear()
        self._stop_hooks.clear()
        logger.debug("ticker closed at tick %d", self._clock.tick_number)

    def _check_open(self) -> None:
        if self._closed:
            raise TickerClosedError("ticker is closed")

    def _measure(self) -> float:
        now = self._time_fn()
        if self._last_real is None:
            self._last_real = now
            return self._clock.interval_ms
        delta = max(0.0, (now - self._last_real) * 1000.0)
        self._last_real = now
        return delta

    def _tick(self, elapsed_ms: float | None) -> None:
        self._clock.advance(elapsed_ms)
        ctx = self._clock.context(self.stop)
        # Systems may close the ticker mid-tick; iterate over a copy.
        for system in list(self._systems):
            if self._closed:
                break
            system(ctx)
            if self._stop_requested:
                break

    def step(self, elapsed_ms: float | None = None) -> None:
        """Advance one tick. ``elapsed_ms`` defaults to measured real time."""
        self._check_open()
        self._stop_requested = False
        self._tick(self._measure() if elapsed_ms is None else elapsed_ms)

    def run(self, n: int) -> None:
        """Run ``n`` ticks of exactly one interval each."""
        self._check_open()
        self._stop_requested = False
        self._fire(self._start_hooks)

        for _ in range(n):
            self._tick(self._clock.interval_ms)
            if self._stop_requested:
                break

        self._fire(self._stop_hooks)

    def run_forever(self) -> None:
        self._check_open()
        self._stop_requested = False
        self._fire(self._start_hooks)

        period = self._clock.interval_ms / 1000.0
        self._last_real = self._time_fn()
        while not self._stop_requested:
            start = self._time_fn()
            self._tick(self._measure())
            if self._stop_requested:
                break
            sleep_time = period - (self._time_fn() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._fire(self._stop_hooks)

    def _fire(self, hooks: list[Callable[[TickContext], None]]) -> None:
        ctx = self._clock.context(self.stop)
        for hook in list(hooks):
            hook(ctx)
