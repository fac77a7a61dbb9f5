"""Single-writer store for the shared heading, mode and rotation values."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Deque, FrozenSet, List, Optional

from .arbiter import HeadingSource

logger = logging.getLogger(__name__)


class NavigationMode(str, Enum):
    FREE = "free"
    HEADING_UP = "heading_up"


@dataclass(frozen=True)
class HeadingSnapshot:
    tracking: bool = False
    source: HeadingSource = HeadingSource.NONE
    smoothed_heading: Optional[float] = None
    raw_course: Optional[float] = None
    navigation_mode: NavigationMode = NavigationMode.FREE
    rotation_degrees: Optional[float] = None


Listener = Callable[[HeadingSnapshot, FrozenSet[str]], None]


class HeadingState:
    """Holds the shared heading values and notifies subscribers on change.

    Each field has one logical writer (the publisher writes the heading and
    source, the view controller writes ``rotation_degrees``, the host writes
    tracking and navigation mode). Every write swaps in a new immutable
    snapshot, so listeners never observe a partially applied update. A
    failing listener is logged and skipped; it never reaches the writer.
    """

    def __init__(self) -> None:
        self._snapshot = HeadingSnapshot()
        self._listeners: List[Listener] = []
        self._pending: Deque[FrozenSet[str]] = deque()
        self._notifying = False

    @property
    def snapshot(self) -> HeadingSnapshot:
        return self._snapshot

    @property
    def tracking(self) -> bool:
        return self._snapshot.tracking

    @property
    def source(self) -> HeadingSource:
        return self._snapshot.source

    @property
    def smoothed_heading(self) -> Optional[float]:
        return self._snapshot.smoothed_heading

    @property
    def navigation_mode(self) -> NavigationMode:
        return self._snapshot.navigation_mode

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_tracking(self, tracking: bool) -> None:
        self._apply(tracking=bool(tracking))

    def set_source(self, source: HeadingSource) -> None:
        self._apply(source=source)

    def set_raw_course(self, course: Optional[float]) -> None:
        self._apply(raw_course=course)

    def publish_heading(self, heading: Optional[float]) -> None:
        self._apply(smoothed_heading=heading)

    def set_navigation_mode(self, mode: NavigationMode) -> None:
        self._apply(navigation_mode=NavigationMode(mode))

    def toggle_navigation_mode(self) -> NavigationMode:
        mode = (
            NavigationMode.HEADING_UP
            if self._snapshot.navigation_mode == NavigationMode.FREE
            else NavigationMode.FREE
        )
        self._apply(navigation_mode=mode)
        return mode

    def set_rotation_degrees(self, degrees: Optional[float]) -> None:
        self._apply(rotation_degrees=degrees)

    def reset(self) -> None:
        """Tracking-stop transition: clear session values, return to north-up."""
        self._apply(
            tracking=False,
            source=HeadingSource.NONE,
            smoothed_heading=None,
            raw_course=None,
            navigation_mode=NavigationMode.FREE,
            rotation_degrees=None,
        )

    def _apply(self, **changes: object) -> None:
        current = self._snapshot
        changed = frozenset(
            name for name, value in changes.items() if getattr(current, name) != value
        )
        if not changed:
            return
        self._snapshot = replace(current, **changes)
        # Writes made by a listener are delivered after the current round.
        self._pending.append(changed)
        if self._notifying:
            return
        self._notifying = True
        try:
            while self._pending:
                self._notify(self._pending.popleft())
        finally:
            self._notifying = False

    def _notify(self, changed: FrozenSet[str]) -> None:
        snapshot = self._snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot, changed)
            except Exception:
                logger.exception("heading listener failed for %s", sorted(changed))
