"""Configuration helpers for the heading pipeline."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mapheading.constants import (
    COMPASS_BUFFER_CAPACITY,
    COMPASS_THROTTLE_SECONDS,
    GPS_ACCURACY_THRESHOLD_METERS,
    HEADING_UP_ANIMATION_MS,
    MIN_UPDATE_INTERVAL_SECONDS,
    NORTH_UP_RESET_ANIMATION_MS,
    ROTATION_EPSILON_RADIANS,
    ROTATION_THRESHOLD_RADIANS,
    SATELLITE_BUFFER_CAPACITY,
    SPEED_THRESHOLD_MPS,
)


class HeadingSettings(BaseSettings):
    accuracy_threshold_m: float = Field(default=GPS_ACCURACY_THRESHOLD_METERS, gt=0)
    speed_threshold_mps: float = Field(default=SPEED_THRESHOLD_MPS, ge=0)

    satellite_capacity: int = Field(default=SATELLITE_BUFFER_CAPACITY, ge=1)
    compass_capacity: int = Field(default=COMPASS_BUFFER_CAPACITY, ge=1)

    min_update_interval_s: float = Field(default=MIN_UPDATE_INTERVAL_SECONDS, ge=0)
    compass_throttle_s: float = Field(default=COMPASS_THROTTLE_SECONDS, ge=0)

    rotation_threshold_rad: float = Field(default=ROTATION_THRESHOLD_RADIANS, ge=0)
    heading_up_duration_ms: int = Field(default=HEADING_UP_ANIMATION_MS, gt=0)
    reset_duration_ms: int = Field(default=NORTH_UP_RESET_ANIMATION_MS, gt=0)
    reset_epsilon_rad: float = Field(default=ROTATION_EPSILON_RADIANS, ge=0)

    # Off keeps a paused source's window warm until tracking stops.
    clear_on_source_switch: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MAPHEADING_", env_file=".env", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> HeadingSettings:
    """Return cached pipeline settings."""

    return HeadingSettings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = ["HeadingSettings", "get_settings", "reset_settings_cache"]
