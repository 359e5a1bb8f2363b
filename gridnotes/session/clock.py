"""Wall-clock to tick conversion.

The driver samples elapsed time as often as it likes; ``TickClock.poll``
reports each new tick index exactly once so the session advances once per
tick regardless of the driver's frame rate.
"""

import time
from typing import Callable, List, Optional


def tick_for_elapsed(elapsed: float, tick_rate: float = 4.0) -> int:
    """Tick index for ``elapsed`` seconds since start (never negative)."""
    return max(0, int(elapsed * tick_rate))


class TickClock:
    """Monotonic tick source derived from elapsed seconds.

    Attributes:
        tick_rate: Ticks per second
        last_tick: Last tick reported by ``poll`` (None before the first)
    """

    def __init__(self, tick_rate: float = 4.0,
                 time_source: Callable[[], float] = time.monotonic):
        """Initialize the clock.

        Args:
            tick_rate: Ticks per second
            time_source: Callable returning seconds; injectable for tests
        """
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        self.tick_rate = tick_rate
        self.time_source = time_source
        self.start = time_source()
        self.last_tick: Optional[int] = None

    def elapsed(self) -> float:
        return self.time_source() - self.start

    def current_tick(self) -> int:
        return tick_for_elapsed(self.elapsed(), self.tick_rate)

    def poll(self) -> List[int]:
        """Return the tick indexes reached since the previous poll, in order.

        The first poll reports every tick from 0 through the current one.
        """
        now = self.current_tick()
        first = 0 if self.last_tick is None else self.last_tick + 1
        if now < first:
            return []
        self.last_tick = now
        return list(range(first, now + 1))

    def seconds_until_next(self) -> float:
        """Seconds left before the next tick boundary."""
        next_boundary = (self.current_tick() + 1) / self.tick_rate
        return max(0.0, next_boundary - self.elapsed())
