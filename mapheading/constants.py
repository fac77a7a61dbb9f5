"""Default thresholds for heading arbitration, smoothing and map rotation."""

from __future__ import annotations

import math

GPS_ACCURACY_THRESHOLD_METERS = 20.0
SPEED_THRESHOLD_MPS = 0.5  # ~1.8 km/h

SATELLITE_BUFFER_CAPACITY = 6
COMPASS_BUFFER_CAPACITY = 10

# ~30 Hz floor across both sources, ~12 Hz pre-filter for compass events.
MIN_UPDATE_INTERVAL_SECONDS = 0.033
COMPASS_THROTTLE_SECONDS = 0.080

ROTATION_THRESHOLD_RADIANS = 0.087  # ~5 degrees
HEADING_UP_ANIMATION_MS = 250
NORTH_UP_RESET_ANIMATION_MS = 500
ROTATION_EPSILON_RADIANS = 1e-6

FULL_TURN_DEGREES = 360.0
FULL_TURN_RADIANS = 2.0 * math.pi
