"""Exponential backoff bookkeeping for detector health checks.

Hey future me - this is NOT a sleep-based backoff like the old RateLimiter! Nobody waits
here. The schedule only answers "may a health check hit the network yet?" and calls inside
the window just get the cached state back.

DELAY RULES:
- Last observed state GOOD → delay 0 (probe every time, tight recovery detection)
- Otherwise → delay = min(max(delay, initial) * 2, max)

With the defaults (2ms initial, 10 min max) the spacing goes 4ms, 8ms, 16ms ... 600s.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from weasel.domain.ports.image_detector import DetectorState


@dataclass
class BackoffSchedule:
    """Time of the last health check plus the current delay.

    Attributes:
        initial_delay: Lower bound that the first doubling starts from (seconds)
        max_delay: Ceiling for the delay (seconds)
        clock: Monotonic time source, injectable for tests
        last_checked: When the last probing check started (None = never)
        delay: Current delay in seconds
    """

    initial_delay: float = 0.002
    max_delay: float = 600.0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    last_checked: float | None = field(default=None, init=False)
    delay: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.delay = self.initial_delay

    def in_window(self) -> bool:
        """Whether we're still inside the backoff window (no I/O allowed)."""
        if self.last_checked is None:
            return False
        return self.clock() < self.last_checked + self.delay

    def mark_checked(self) -> None:
        """Record the current time as the start of a probing check."""
        self.last_checked = self.clock()

    def advance(self, state: DetectorState) -> float:
        """Update the delay from the state a probe just produced.

        Returns:
            The new delay in seconds
        """
        if state is DetectorState.GOOD:
            self.delay = 0.0
        else:
            current = max(self.delay, self.initial_delay)
            self.delay = min(current * 2, self.max_delay)
        return self.delay

    @property
    def next_check_at(self) -> float | None:
        """Clock value at which the next probing check becomes possible."""
        if self.last_checked is None:
            return None
        return self.last_checked + self.delay


__all__ = ["BackoffSchedule"]
