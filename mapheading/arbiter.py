"""Selection of the authoritative heading source from position fixes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import GPS_ACCURACY_THRESHOLD_METERS, SPEED_THRESHOLD_MPS


class HeadingSource(str, Enum):
    NONE = "none"
    SATELLITE = "satellite"
    COMPASS = "compass"


@dataclass(frozen=True)
class PositionFix:
    accuracy: Optional[float] = None
    speed: Optional[float] = None
    course: Optional[float] = None


def select_source(
    tracking: bool,
    accuracy: Optional[float],
    speed: Optional[float],
    course: Optional[float],
    *,
    accuracy_threshold: float = GPS_ACCURACY_THRESHOLD_METERS,
    speed_threshold: float = SPEED_THRESHOLD_MPS,
) -> HeadingSource:
    """Pick the authoritative heading source for one position update.

    Moving with a good fix trusts the direction of travel; slow or stationary
    with a good fix trusts the compass; a poor or missing fix trusts neither.
    """
    if not tracking:
        return HeadingSource.NONE
    if accuracy is None or not math.isfinite(accuracy) or accuracy >= accuracy_threshold:
        return HeadingSource.NONE
    if course is not None and speed is not None and speed > speed_threshold:
        return HeadingSource.SATELLITE
    return HeadingSource.COMPASS


def source_for_fix(
    fix: PositionFix,
    tracking: bool,
    *,
    accuracy_threshold: float = GPS_ACCURACY_THRESHOLD_METERS,
    speed_threshold: float = SPEED_THRESHOLD_MPS,
) -> HeadingSource:
    return select_source(
        tracking,
        fix.accuracy,
        fix.speed,
        fix.course,
        accuracy_threshold=accuracy_threshold,
        speed_threshold=speed_threshold,
    )
