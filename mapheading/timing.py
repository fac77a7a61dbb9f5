"""Clock and rate-limit utilities for deterministic event gating."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

Clock = Callable[[], float]


@dataclass
class ManualClock:
    """Monotonic clock that only moves when explicitly advanced."""

    now: float = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("seconds must be non-negative")
        self.now += seconds
        return self.now


class MinIntervalGate:
    """Admits an event only if ``interval`` seconds passed since the last stamp.

    Checking never stamps; callers decide when an event actually counted so a
    rejected candidate further down the line does not consume the slot.
    """

    def __init__(self, interval: float, clock: Optional[Clock] = None) -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = float(interval)
        self._clock: Clock = clock or time.monotonic
        self._last: Optional[float] = None

    def ready(self, now: Optional[float] = None) -> bool:
        if self._last is None:
            return True
        current = self._clock() if now is None else now
        return current - self._last >= self.interval

    def stamp(self, now: Optional[float] = None) -> float:
        self._last = self._clock() if now is None else now
        return self._last

    def try_acquire(self, now: Optional[float] = None) -> bool:
        current = self._clock() if now is None else now
        if not self.ready(current):
            return False
        self.stamp(current)
        return True

    def reset(self) -> None:
        self._last = None

    @property
    def last(self) -> Optional[float]:
        return self._last
