"""Heading-up map rotation with hysteresis."""

from __future__ import annotations

import logging
import math
from typing import Callable, FrozenSet, Optional, Protocol

from . import metrics
from .config import HeadingSettings, get_settings
from .constants import FULL_TURN_RADIANS
from .state import HeadingSnapshot, HeadingState, NavigationMode

logger = logging.getLogger(__name__)

Easing = Callable[[float], float]

_WATCHED_FIELDS = frozenset({"tracking", "smoothed_heading", "navigation_mode"})


class MapView(Protocol):
    """Map view collaborator; animations are expected to take the shortest arc."""

    def get_rotation(self) -> float: ...

    def animate(self, rotation: float, duration_ms: int, easing: Optional[Easing] = None) -> None: ...


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def wrap_radians(angle: float) -> float:
    """Normalise an angle difference into (-pi, pi]."""
    wrapped = (angle + math.pi) % FULL_TURN_RADIANS - math.pi
    if wrapped <= -math.pi:
        return math.pi
    return wrapped


def heading_to_view_rotation(heading_degrees: float) -> float:
    # The view turns against the heading so the direction of travel points up.
    return -math.radians(heading_degrees)


class ViewRotationController:
    """Keeps the map view north-up or heading-up depending on the navigation mode.

    In heading-up mode new targets are compared against the last target issued
    rather than the view's in-flight rotation, so a burst of updates composes
    against where the view is headed, not where the animation happens to be.
    """

    def __init__(
        self,
        state: HeadingState,
        view: MapView,
        settings: Optional[HeadingSettings] = None,
    ) -> None:
        self._state = state
        self._view = view
        self._settings = settings or get_settings()
        self._baseline: Optional[float] = None
        self._rotation_enabled = True
        self._unsubscribe = state.subscribe(self._on_change)

    @property
    def baseline(self) -> Optional[float]:
        return self._baseline

    @property
    def rotation_enabled(self) -> bool:
        return self._rotation_enabled

    def set_rotation_enabled(self, enabled: bool) -> None:
        self._rotation_enabled = bool(enabled)
        self.apply(self._state.snapshot)

    def close(self) -> None:
        self._unsubscribe()

    def _on_change(self, snapshot: HeadingSnapshot, changed: FrozenSet[str]) -> None:
        if changed & _WATCHED_FIELDS:
            self.apply(snapshot)

    def apply(self, snapshot: HeadingSnapshot) -> None:
        if (
            snapshot.navigation_mode != NavigationMode.HEADING_UP
            or not snapshot.tracking
            or not self._rotation_enabled
        ):
            self._return_north_up()
            return
        if snapshot.smoothed_heading is None:
            return
        self._rotate_to_heading(snapshot.smoothed_heading)

    def _return_north_up(self) -> None:
        self._baseline = None
        if abs(self._view.get_rotation()) <= self._settings.reset_epsilon_rad:
            return
        self._view.animate(0.0, self._settings.reset_duration_ms)
        metrics.VIEW_ANIMATIONS.labels(kind="north_up").inc()
        logger.debug("returning map view to north-up")
        if self._state.tracking:
            self._state.set_rotation_degrees(0.0)

    def _rotate_to_heading(self, heading: float) -> None:
        target = heading_to_view_rotation(heading)
        reference = self._baseline if self._baseline is not None else self._view.get_rotation()
        delta = wrap_radians(target - reference)
        if abs(delta) < self._settings.rotation_threshold_rad:
            return
        self._view.animate(target, self._settings.heading_up_duration_ms, ease_in_out_quad)
        self._baseline = target
        metrics.VIEW_ANIMATIONS.labels(kind="heading_up").inc()
        self._state.set_rotation_degrees(heading)
