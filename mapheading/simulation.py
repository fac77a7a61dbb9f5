"""Deterministic replay of recorded sensor traces through the pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field

from .arbiter import PositionFix
from .config import HeadingSettings
from .marker import MarkerIcon
from .orientation import OrientationReading
from .pipeline import HeadingPipeline
from .state import HeadingSnapshot, NavigationMode
from .timing import ManualClock
from .view_rotation import MapView


class TraceEvent(BaseModel):
    t: float = Field(ge=0)
    kind: Literal["position", "orientation", "start", "stop", "mode"]
    accuracy: Optional[float] = None
    speed: Optional[float] = None
    course: Optional[float] = None
    alpha: Optional[float] = None
    compass_heading: Optional[float] = None
    absolute: bool = False
    mode: Optional[NavigationMode] = None


@dataclass
class ReplayResult:
    headings: List[float] = field(default_factory=list)
    final: HeadingSnapshot = field(default_factory=HeadingSnapshot)


def load_trace(path: Path) -> List[TraceEvent]:
    payload = json.loads(Path(path).read_text())
    if not isinstance(payload, list):
        raise ValueError("trace file must contain a JSON list of events")
    return [TraceEvent.model_validate(item) for item in payload]


def replay_trace(
    events: Iterable[TraceEvent],
    view: MapView,
    marker: MarkerIcon,
    *,
    settings: Optional[HeadingSettings] = None,
    start_tracking: bool = True,
) -> ReplayResult:
    """Feed time-ordered events through a fresh pipeline on a manual clock."""
    clock = ManualClock()
    pipeline = HeadingPipeline(view, marker, settings=settings, clock=clock)
    result = ReplayResult()

    def collect(snapshot: HeadingSnapshot, changed: FrozenSet[str]) -> None:
        if "smoothed_heading" in changed and snapshot.smoothed_heading is not None:
            result.headings.append(snapshot.smoothed_heading)

    unsubscribe = pipeline.state.subscribe(collect)
    try:
        if start_tracking:
            pipeline.start_tracking()
        for event in events:
            if event.t < clock.now:
                raise ValueError("trace events must be ordered by time")
            clock.advance(event.t - clock.now)
            _dispatch(pipeline, event)
        result.final = pipeline.snapshot()
    finally:
        unsubscribe()
        pipeline.close()
    return result


def _dispatch(pipeline: HeadingPipeline, event: TraceEvent) -> None:
    if event.kind == "position":
        pipeline.on_position(
            PositionFix(accuracy=event.accuracy, speed=event.speed, course=event.course)
        )
    elif event.kind == "orientation":
        pipeline.on_orientation(
            OrientationReading(
                alpha=event.alpha,
                compass_heading=event.compass_heading,
                absolute=event.absolute,
            )
        )
    elif event.kind == "start":
        pipeline.start_tracking()
    elif event.kind == "stop":
        pipeline.stop_tracking()
    elif event.kind == "mode" and event.mode is not None:
        pipeline.set_navigation_mode(event.mode)
