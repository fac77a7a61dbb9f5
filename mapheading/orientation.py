"""Decoding of device-orientation events into compass headings."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .smoothing import normalize_degrees

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrientationReading:
    """One orientation event as delivered by the platform.

    ``compass_heading`` is a platform-native heading already referenced to
    north (0-360, clockwise). ``alpha`` is the raw rotation about the vertical
    axis, counter-clockwise; ``absolute`` marks events referenced to north.
    """

    alpha: Optional[float] = None
    compass_heading: Optional[float] = None
    absolute: bool = False


def alpha_to_heading(alpha: float) -> float:
    return normalize_degrees(360.0 - alpha)


def _usable(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


class OrientationDecoder:
    """Turns orientation events into headings, preferring north-referenced ones.

    Platforms may emit an absolute and a relative event for the same physical
    change. Once an absolute event has been seen, relative events are ignored
    for the rest of the session.
    """

    def __init__(self) -> None:
        self._absolute_seen = False

    @property
    def absolute_seen(self) -> bool:
        return self._absolute_seen

    def decode(self, reading: OrientationReading) -> Optional[float]:
        if reading.absolute:
            if not self._absolute_seen:
                logger.debug("absolute orientation events available")
            self._absolute_seen = True
        elif self._absolute_seen and not _usable(reading.compass_heading):
            return None

        if _usable(reading.compass_heading):
            return normalize_degrees(float(reading.compass_heading))  # type: ignore[arg-type]
        if _usable(reading.alpha):
            return alpha_to_heading(float(reading.alpha))  # type: ignore[arg-type]
        return None

    def reset(self) -> None:
        self._absolute_seen = False
