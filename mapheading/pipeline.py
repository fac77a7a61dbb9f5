"""Wiring of the heading pipeline and its tracking-session lifecycle."""

from __future__ import annotations

import logging
from typing import Optional

from . import metrics
from .arbiter import HeadingSource, PositionFix
from .config import HeadingSettings, get_settings
from .marker import MarkerController, MarkerIcon
from .orientation import OrientationReading
from .publisher import HeadingPublisher
from .state import HeadingSnapshot, HeadingState, NavigationMode
from .timing import Clock
from .view_rotation import MapView, ViewRotationController

logger = logging.getLogger(__name__)


class HeadingPipeline:
    """Entry point for position and orientation callbacks.

    Construct once per application; tracking sessions are delimited by
    :meth:`start_tracking` and :meth:`stop_tracking`, both of which clear the
    smoothing windows so no samples leak from one session into the next.
    """

    def __init__(
        self,
        view: MapView,
        marker: MarkerIcon,
        *,
        settings: Optional[HeadingSettings] = None,
        clock: Optional[Clock] = None,
        state: Optional[HeadingState] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.state = state or HeadingState()
        self.publisher = HeadingPublisher(self.state, self.settings, clock)
        self.view_controller = ViewRotationController(self.state, view, self.settings)
        self.marker_controller = MarkerController(self.state, marker)
        self.marker_controller.apply(self.state.snapshot)

    @property
    def tracking(self) -> bool:
        return self.state.tracking

    def snapshot(self) -> HeadingSnapshot:
        return self.state.snapshot

    def start_tracking(self) -> None:
        if self.state.tracking:
            return
        self.publisher.reset()
        self.state.set_tracking(True)
        logger.info("heading tracking started")

    def stop_tracking(self) -> None:
        if not self.state.tracking:
            return
        self.publisher.reset()
        self.state.reset()
        logger.info("heading tracking stopped")

    def on_position(self, fix: PositionFix) -> HeadingSource:
        if not self.state.tracking:
            metrics.record_sample(HeadingSource.SATELLITE.value, metrics.OUTCOME_INACTIVE)
            return HeadingSource.NONE
        return self.publisher.on_position(fix)

    def on_orientation(self, reading: OrientationReading) -> Optional[float]:
        return self.publisher.on_orientation(reading)

    def set_navigation_mode(self, mode: NavigationMode) -> None:
        self.state.set_navigation_mode(mode)

    def toggle_navigation_mode(self) -> NavigationMode:
        return self.state.toggle_navigation_mode()

    def set_rotation_enabled(self, enabled: bool) -> None:
        self.view_controller.set_rotation_enabled(enabled)

    def close(self) -> None:
        self.view_controller.close()
        self.marker_controller.close()


def build_pipeline(
    view: MapView,
    marker: MarkerIcon,
    settings: Optional[HeadingSettings] = None,
    clock: Optional[Clock] = None,
) -> HeadingPipeline:
    return HeadingPipeline(view, marker, settings=settings, clock=clock)
