"""Heading estimation and map-orientation pipeline."""

from .arbiter import HeadingSource, PositionFix, select_source
from .config import HeadingSettings, get_settings
from .marker import MarkerController, MarkerIcon
from .orientation import OrientationDecoder, OrientationReading
from .pipeline import HeadingPipeline, build_pipeline
from .publisher import HeadingPublisher
from .smoothing import HeadingBuffer, normalize_degrees
from .state import HeadingSnapshot, HeadingState, NavigationMode
from .timing import ManualClock, MinIntervalGate
from .view_rotation import MapView, ViewRotationController, ease_in_out_quad

__all__ = [
    "HeadingSource",
    "PositionFix",
    "select_source",
    "HeadingSettings",
    "get_settings",
    "MarkerController",
    "MarkerIcon",
    "OrientationDecoder",
    "OrientationReading",
    "HeadingPipeline",
    "build_pipeline",
    "HeadingPublisher",
    "HeadingBuffer",
    "normalize_degrees",
    "HeadingSnapshot",
    "HeadingState",
    "NavigationMode",
    "ManualClock",
    "MinIntervalGate",
    "MapView",
    "ViewRotationController",
    "ease_in_out_quad",
]
