"""Directional marker rotation driven by the smoothed heading."""

from __future__ import annotations

import math
from typing import FrozenSet, Protocol

from .state import HeadingSnapshot, HeadingState

_WATCHED_FIELDS = frozenset({"tracking", "smoothed_heading"})


class MarkerIcon(Protocol):
    def set_rotation(self, radians: float) -> None: ...

    def show_neutral(self) -> None: ...


class MarkerController:
    """Points the position marker along the smoothed heading.

    No hysteresis or animation: icon rotation is cheap, so every heading
    change is applied as soon as it is published.
    """

    def __init__(self, state: HeadingState, icon: MarkerIcon) -> None:
        self._state = state
        self._icon = icon
        self._unsubscribe = state.subscribe(self._on_change)

    def close(self) -> None:
        self._unsubscribe()

    def _on_change(self, snapshot: HeadingSnapshot, changed: FrozenSet[str]) -> None:
        if changed & _WATCHED_FIELDS:
            self.apply(snapshot)

    def apply(self, snapshot: HeadingSnapshot) -> None:
        if not snapshot.tracking:
            self._icon.show_neutral()
            return
        heading = snapshot.smoothed_heading
        self._icon.set_rotation(math.radians(heading) if heading is not None else 0.0)
