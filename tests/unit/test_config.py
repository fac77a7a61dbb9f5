from __future__ import annotations

import pytest
from pydantic import ValidationError

from mapheading.config import HeadingSettings, get_settings, reset_settings_cache


def test_defaults_match_pipeline_constants() -> None:
    settings = HeadingSettings(_env_file=None)
    assert settings.accuracy_threshold_m == 20.0
    assert settings.speed_threshold_mps == 0.5
    assert (settings.satellite_capacity, settings.compass_capacity) == (6, 10)
    assert settings.min_update_interval_s == pytest.approx(0.033)
    assert settings.compass_throttle_s == pytest.approx(0.080)
    assert settings.rotation_threshold_rad == pytest.approx(0.087)
    assert (settings.heading_up_duration_ms, settings.reset_duration_ms) == (250, 500)
    assert settings.clear_on_source_switch is False


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MAPHEADING_COMPASS_CAPACITY", "12")
    monkeypatch.setenv("MAPHEADING_CLEAR_ON_SOURCE_SWITCH", "true")
    reset_settings_cache()
    try:
        settings = get_settings()
        assert settings.compass_capacity == 12
        assert settings.clear_on_source_switch is True
        assert get_settings() is settings
    finally:
        reset_settings_cache()


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValidationError):
        HeadingSettings(_env_file=None, satellite_capacity=0)
    with pytest.raises(ValidationError):
        HeadingSettings(_env_file=None, accuracy_threshold_m=-1.0)
