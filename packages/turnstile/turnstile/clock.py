"""ScaledClock and TickContext for the fixed-period combat loop."""

from typing import Callable

from turnstile.types import TickContext

DEFAULT_MIN_TIME_SCALE = 0.1


class ScaledClock:
    """Counts ticks and accumulates a time-scaled clock.

    Real elapsed time is multiplied by ``max(min_time_scale, time_scale)``
    before it is added to ``now_ms``. Nothing accumulates while paused,
    but the tick number still advances.
    """

    def __init__(
        self,
        interval_ms: float = 50.0,
        min_time_scale: float = DEFAULT_MIN_TIME_SCALE,
        start_ms: float = 0.0,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if min_time_scale <= 0:
            raise ValueError("min_time_scale must be positive")
        self._interval_ms = float(interval_ms)
        self._min_time_scale = float(min_time_scale)
        self._time_scale = 1.0
        self._paused = False
        self._tick_number = 0
        self._now_ms = float(start_ms)
        self._last_elapsed_ms = 0.0
        self._last_scaled_ms = 0.0

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        self._paused = bool(value)

    @property
    def time_scale(self) -> float:
        """Effective scale, never below the configured floor."""
        return max(self._min_time_scale, self._time_scale)

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        self._time_scale = float(value)

    def advance(self, real_delta_ms: float | None = None) -> int:
        """Advance one tick. Negative deltas count as zero."""
        delta = self._interval_ms if real_delta_ms is None else max(0.0, real_delta_ms)
        self._tick_number += 1
        self._last_elapsed_ms = delta
        if self._paused:
            self._last_scaled_ms = 0.0
        else:
            self._last_scaled_ms = delta * self.time_scale
            self._now_ms += self._last_scaled_ms
        return self._tick_number

    def context(self, stop_fn: Callable[[], None]) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            elapsed_ms=self._last_elapsed_ms,
            scaled_ms=self._last_scaled_ms,
            now_ms=self._now_ms,
            paused=self._paused,
            request_stop=stop_fn,
        )

    def reset(self, start_ms: float = 0.0) -> None:
        self._tick_number = 0
        self._now_ms = float(start_ms)
        self._last_elapsed_ms = 0.0
        self._last_scaled_ms = 0.0
