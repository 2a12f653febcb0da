"""TurnClock - an immutable countdown for one side's turn."""
from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_MIN_DURATION_MS = 1000.0
DEFAULT_MIN_TIME_SCALE = 0.1


@dataclass(frozen=True)
class TurnClock:
    """Remaining turn time, always within ``[0, total_ms]``.

    ``total_ms`` is the base duration divided by the time scale (floored at
    ``min_time_scale``). A duration of zero or less is clamped to
    ``min_duration_ms``. ``tick`` drains real elapsed milliseconds; the
    scale is already folded into ``total_ms``.

    Every operation returns a new clock.
    """

    duration_ms: float
    remaining_ms: float | None = None
    active: bool = False
    time_scale: float = 1.0
    min_duration_ms: float = DEFAULT_MIN_DURATION_MS
    min_time_scale: float = DEFAULT_MIN_TIME_SCALE

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            object.__setattr__(self, "duration_ms", float(self.min_duration_ms))
        total = self.total_ms
        if self.remaining_ms is None:
            object.__setattr__(self, "remaining_ms", total)
        else:
            object.__setattr__(self, "remaining_ms", min(total, max(0.0, self.remaining_ms)))

    @property
    def total_ms(self) -> float:
        return self.duration_ms / max(self.min_time_scale, self.time_scale)

    @property
    def expired(self) -> bool:
        return self.remaining_ms <= 0

    @property
    def fill(self) -> float:
        """Remaining fraction in ``[0, 1]``, for a countdown bar."""
        return self.remaining_ms / self.total_ms

    def display_ms(self, granularity_ms: float = 100.0) -> float:
        """Remaining time rounded up to the display granularity."""
        if granularity_ms <= 0:
            return self.remaining_ms
        steps = -(-self.remaining_ms // granularity_ms)
        return min(self.total_ms, steps * granularity_ms)

    def display_changed(self, previous: TurnClock | None, granularity_ms: float = 100.0) -> bool:
        """Whether observers need a new value after moving from ``previous``."""
        if previous is None or previous.active != self.active:
            return True
        if self.remaining_ms == self.total_ms:
            return previous.remaining_ms != self.remaining_ms
        return abs(previous.remaining_ms - self.remaining_ms) >= granularity_ms or (
            self.expired and not previous.expired
        )

    def tick(self, elapsed_ms: float, paused: bool = False) -> TurnClock:
        if not self.active or paused or elapsed_ms <= 0:
            return self
        return replace(self, remaining_ms=max(0.0, self.remaining_ms - elapsed_ms))

    def start(self) -> TurnClock:
        if self.active:
            return self
        return replace(self, active=True)

    def reset(self) -> TurnClock:
        """Full duration, not running."""
        return replace(self, remaining_ms=None, active=False)

    def freeze(self) -> TurnClock:
        """Hold at zero, not running."""
        return replace(self, remaining_ms=0.0, active=False)

    def extend(self, ms: float) -> TurnClock:
        """Add ``ms``, capped at ``total_ms``.

        A clock that has not started counts from the full duration.
        """
        if ms <= 0:
            return self
        base = self.remaining_ms if self.active else self.total_ms
        return replace(self, remaining_ms=base + ms)

    def set_time_scale(self, scale: float) -> TurnClock:
        """Re-derive ``total_ms``; the remainder is clamped to it."""
        fresh = not self.active and self.remaining_ms >= self.total_ms
        rescaled = replace(self, time_scale=float(scale), remaining_ms=self.remaining_ms)
        if fresh:
            return replace(rescaled, remaining_ms=None)
        return rescaled
