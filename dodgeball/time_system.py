"""Match time keeping.

Two clocks drive the simulation:
- MatchClock: tick counter plus logical milliseconds, advanced by a fixed
  step per tick. Duration timers (respawn, invulnerability, hit flash,
  start countdown) read ``now_ms``.
- FixedTimestep: converts variable frame durations from the display loop
  into a whole number of simulation ticks, carrying the remainder forward.
"""

import math
from typing import Any, Dict, Optional

from dodgeball.config.display import MAX_TICKS_PER_FRAME, TICK_RATE


class MatchClock:
    """Tick counter and logical millisecond clock."""

    def __init__(self, tick_ms: float = 1000.0 / TICK_RATE) -> None:
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")
        self._tick_ms = tick_ms
        self._tick = 0
        self._now_ms = 0.0

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def tick_ms(self) -> float:
        return self._tick_ms

    def advance(self) -> int:
        """Advance by one tick and return the new tick number."""
        self._tick += 1
        self._now_ms = self._tick * self._tick_ms
        return self._tick

    def reset(self, tick_ms: Optional[float] = None) -> None:
        if tick_ms is not None:
            if tick_ms <= 0:
                raise ValueError(f"tick_ms must be positive, got {tick_ms}")
            self._tick_ms = tick_ms
        self._tick = 0
        self._now_ms = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"tick": self._tick, "now_ms": self._now_ms, "tick_ms": self._tick_ms}

    def __repr__(self) -> str:
        return f"MatchClock(tick={self._tick}, now_ms={self._now_ms:.1f})"


class FixedTimestep:
    """Fixed-timestep accumulator.

    Each frame's elapsed time is added to an accumulator; every full
    ``step_ms`` in it yields one tick. After a long stall at most
    ``max_steps`` ticks are returned and the surplus is dropped so the
    simulation does not spiral trying to catch up.
    """

    def __init__(
        self,
        step_ms: float = 1000.0 / TICK_RATE,
        max_steps: int = MAX_TICKS_PER_FRAME,
    ) -> None:
        if step_ms <= 0:
            raise ValueError(f"step_ms must be positive, got {step_ms}")
        if max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")
        self.step_ms = step_ms
        self.max_steps = max_steps
        self._accumulator_ms = 0.0

    @property
    def accumulator_ms(self) -> float:
        return self._accumulator_ms

    @property
    def alpha(self) -> float:
        """Fraction of a tick left in the accumulator (for interpolation)."""
        return self._accumulator_ms / self.step_ms

    def consume(self, frame_ms: float) -> int:
        """Add a frame's elapsed time and return the ticks to run now."""
        if frame_ms > 0:
            self._accumulator_ms += frame_ms

        # Small epsilon so 1000/60 * 3 still yields three ticks
        steps = int(math.floor(self._accumulator_ms / self.step_ms + 1e-9))
        if steps > self.max_steps:
            steps = self.max_steps
            self._accumulator_ms = 0.0
        else:
            self._accumulator_ms = max(0.0, self._accumulator_ms - steps * self.step_ms)
        return steps

    def reset(self) -> None:
        self._accumulator_ms = 0.0
