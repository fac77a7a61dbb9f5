"""Rolling circular smoothing for heading samples."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

import numpy as np

from .constants import FULL_TURN_DEGREES


def normalize_degrees(heading: float) -> float:
    """Fold any angle into [0, 360)."""

    folded = ((heading % FULL_TURN_DEGREES) + FULL_TURN_DEGREES) % FULL_TURN_DEGREES
    # Tiny negatives can round up to exactly 360.0.
    if folded >= FULL_TURN_DEGREES:
        return 0.0
    return folded


def _wrap_delta(delta: float) -> float:
    wrapped = delta % FULL_TURN_DEGREES
    if wrapped > 180.0:
        wrapped -= FULL_TURN_DEGREES
    return wrapped


class HeadingBuffer:
    """Fixed-capacity window of headings with an exponentially recency-weighted mean.

    Samples are stored unwrapped: each new value is shifted by whole turns so it
    lies within (-180, 180] of the previous one, which keeps the window
    numerically continuous across north. Two consecutive samples more than 180
    degrees apart are therefore unwrapped the short way round; the recency
    weighting pulls the estimate back as later samples arrive.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = int(capacity)
        self._samples: Deque[float] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._samples)

    def values(self) -> List[float]:
        return list(self._samples)

    def add(self, heading: float) -> None:
        value = float(heading)
        if self._samples:
            last = self._samples[-1]
            value = last + _wrap_delta(value - last)
        self._samples.append(value)

    def get_smoothed(self) -> Optional[float]:
        if not self._samples:
            return None
        if len(self._samples) == 1:
            return normalize_degrees(self._samples[0])
        values = np.fromiter(self._samples, dtype=float, count=len(self._samples))
        weights = np.exp2(np.arange(values.size, dtype=float))
        weights /= weights.sum()
        return normalize_degrees(float(np.dot(values, weights)))

    def clear(self) -> None:
        self._samples.clear()
