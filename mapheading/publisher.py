"""Rate-limited publication of smoothed headings from both signal sources."""

from __future__ import annotations

import logging
import math
import time
from typing import Dict, Optional

from . import metrics
from .arbiter import HeadingSource, PositionFix, source_for_fix
from .config import HeadingSettings, get_settings
from .orientation import OrientationDecoder, OrientationReading
from .smoothing import HeadingBuffer
from .state import HeadingState
from .timing import Clock, MinIntervalGate

logger = logging.getLogger(__name__)


class HeadingPublisher:
    """Feeds raw samples into per-source buffers and publishes the result.

    Two gates throttle output: a global floor shared by both sources, and a
    compass-only pre-filter checked before a compass candidate is computed.
    Samples arriving too early are dropped, never queued; only the latest
    visual state matters.
    """

    def __init__(
        self,
        state: HeadingState,
        settings: Optional[HeadingSettings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._state = state
        self._settings = settings or get_settings()
        self._clock: Clock = clock or time.monotonic
        self._buffers: Dict[HeadingSource, HeadingBuffer] = {
            HeadingSource.SATELLITE: HeadingBuffer(self._settings.satellite_capacity),
            HeadingSource.COMPASS: HeadingBuffer(self._settings.compass_capacity),
        }
        self._floor_gate = MinIntervalGate(self._settings.min_update_interval_s, self._clock)
        self._compass_gate = MinIntervalGate(self._settings.compass_throttle_s, self._clock)
        self._decoder = OrientationDecoder()
        self._last_course: Optional[float] = None

    def buffer(self, source: HeadingSource) -> HeadingBuffer:
        return self._buffers[source]

    @property
    def decoder(self) -> OrientationDecoder:
        return self._decoder

    def on_position(self, fix: PositionFix) -> HeadingSource:
        """Re-arbitrate on a position update and feed the satellite course."""
        source = source_for_fix(
            fix,
            self._state.tracking,
            accuracy_threshold=self._settings.accuracy_threshold_m,
            speed_threshold=self._settings.speed_threshold_mps,
        )
        self._switch_source(source)
        if not self._state.tracking:
            return source
        self._state.set_raw_course(fix.course)

        if source != HeadingSource.SATELLITE:
            return source
        course = fix.course
        if course is None or not math.isfinite(course):
            metrics.record_sample(source.value, metrics.OUTCOME_MISSING)
            return source
        if course == self._last_course:
            metrics.record_sample(source.value, metrics.OUTCOME_DUPLICATE)
            return source
        self._last_course = course

        now = self._clock()
        if not self._floor_gate.ready(now):
            metrics.record_sample(source.value, metrics.OUTCOME_THROTTLED)
            return source
        self._feed(source, course, now)
        return source

    def on_orientation(self, reading: OrientationReading) -> Optional[float]:
        """Feed one orientation event; returns the published heading, if any."""
        if not self._state.tracking or self._state.source != HeadingSource.COMPASS:
            metrics.record_sample(HeadingSource.COMPASS.value, metrics.OUTCOME_INACTIVE)
            return None

        now = self._clock()
        if not self._compass_gate.ready(now) or not self._floor_gate.ready(now):
            metrics.record_sample(HeadingSource.COMPASS.value, metrics.OUTCOME_THROTTLED)
            return None

        heading = self._decoder.decode(reading)
        if heading is None:
            metrics.record_sample(HeadingSource.COMPASS.value, metrics.OUTCOME_MISSING)
            return None
        self._compass_gate.stamp(now)
        return self._feed(HeadingSource.COMPASS, heading, now)

    def reset(self) -> None:
        for buffer in self._buffers.values():
            buffer.clear()
        self._floor_gate.reset()
        self._compass_gate.reset()
        self._decoder.reset()
        self._last_course = None

    def _feed(self, source: HeadingSource, heading: float, now: float) -> Optional[float]:
        buffer = self._buffers[source]
        buffer.add(heading)
        smoothed = buffer.get_smoothed()
        if smoothed is None:
            return None
        self._floor_gate.stamp(now)
        self._state.publish_heading(smoothed)
        metrics.record_sample(source.value, metrics.OUTCOME_ACCEPTED)
        metrics.SMOOTHED_HEADING.set(smoothed)
        logger.debug("published %s heading %.2f from raw %.2f", source.value, smoothed, heading)
        return smoothed

    def _switch_source(self, source: HeadingSource) -> None:
        previous = self._state.source
        if source == previous:
            return
        logger.info("heading source %s -> %s", previous.value, source.value)
        metrics.SOURCE_TRANSITIONS.labels(source=source.value).inc()
        if self._settings.clear_on_source_switch and previous in self._buffers:
            self._buffers[previous].clear()
            if previous == HeadingSource.SATELLITE:
                self._last_course = None
        self._state.set_source(source)
