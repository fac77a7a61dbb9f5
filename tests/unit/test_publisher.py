from __future__ import annotations

import pytest

from mapheading import metrics
from mapheading.arbiter import HeadingSource, PositionFix
from mapheading.config import HeadingSettings
from mapheading.orientation import OrientationReading
from mapheading.publisher import HeadingPublisher
from mapheading.state import HeadingState
from mapheading.timing import ManualClock

MOVING = dict(accuracy=5.0, speed=5.0)
STATIONARY = PositionFix(accuracy=5.0, speed=0.0, course=None)


@pytest.fixture
def publisher(state: HeadingState, settings: HeadingSettings, clock: ManualClock) -> HeadingPublisher:
    state.set_tracking(True)
    return HeadingPublisher(state, settings, clock)


def test_satellite_courses_follow_closed_form(publisher, state, clock) -> None:
    for course in (0.0, 5.0, 10.0, 15.0, 20.0, 25.0):
        clock.advance(1.0)
        assert publisher.on_position(PositionFix(course=course, **MOVING)) == HeadingSource.SATELLITE
    assert state.source == HeadingSource.SATELLITE
    assert state.smoothed_heading == pytest.approx(1290.0 / 63.0)
    assert state.snapshot.raw_course == 25.0


def test_identical_course_is_skipped(publisher, clock) -> None:
    before = metrics.sample_count("satellite", metrics.OUTCOME_DUPLICATE)
    publisher.on_position(PositionFix(course=90.0, **MOVING))
    clock.advance(1.0)
    publisher.on_position(PositionFix(course=90.0, **MOVING))
    assert len(publisher.buffer(HeadingSource.SATELLITE)) == 1
    assert metrics.sample_count("satellite", metrics.OUTCOME_DUPLICATE) == before + 1


def test_global_floor_drops_early_satellite_updates(publisher, state, clock) -> None:
    publisher.on_position(PositionFix(course=10.0, **MOVING))
    clock.advance(0.010)
    publisher.on_position(PositionFix(course=20.0, **MOVING))
    assert len(publisher.buffer(HeadingSource.SATELLITE)) == 1
    assert state.smoothed_heading == pytest.approx(10.0)

    clock.advance(0.030)
    publisher.on_position(PositionFix(course=30.0, **MOVING))
    assert len(publisher.buffer(HeadingSource.SATELLITE)) == 2


def test_missing_course_while_moving_falls_back_to_compass(publisher, state) -> None:
    assert publisher.on_position(PositionFix(course=None, **MOVING)) == HeadingSource.COMPASS
    assert state.smoothed_heading is None


def test_compass_pre_filter(publisher, state, clock) -> None:
    publisher.on_position(STATIONARY)
    assert state.source == HeadingSource.COMPASS

    assert publisher.on_orientation(OrientationReading(compass_heading=40.0)) == pytest.approx(40.0)
    clock.advance(0.050)
    assert publisher.on_orientation(OrientationReading(compass_heading=50.0)) is None
    clock.advance(0.040)
    assert publisher.on_orientation(OrientationReading(compass_heading=50.0)) is not None
    assert len(publisher.buffer(HeadingSource.COMPASS)) == 2


def test_missing_alpha_does_not_consume_compass_slot(publisher, clock) -> None:
    publisher.on_position(STATIONARY)
    assert publisher.on_orientation(OrientationReading(alpha=None)) is None
    assert publisher.on_orientation(OrientationReading(alpha=90.0, absolute=True)) == pytest.approx(270.0)


def test_orientation_ignored_unless_compass_is_active(publisher, state, clock) -> None:
    publisher.on_position(PositionFix(course=10.0, **MOVING))
    clock.advance(1.0)
    assert publisher.on_orientation(OrientationReading(compass_heading=200.0)) is None
    assert len(publisher.buffer(HeadingSource.COMPASS)) == 0
    assert state.smoothed_heading == pytest.approx(10.0)


def test_poor_fix_freezes_heading(publisher, state, clock) -> None:
    publisher.on_position(PositionFix(course=80.0, **MOVING))
    clock.advance(1.0)
    assert publisher.on_position(PositionFix(accuracy=25.0, speed=10.0, course=120.0)) == HeadingSource.NONE
    assert state.source == HeadingSource.NONE
    assert state.smoothed_heading == pytest.approx(80.0)
    assert publisher.on_orientation(OrientationReading(compass_heading=10.0)) is None
    assert state.smoothed_heading == pytest.approx(80.0)


def test_buffers_survive_source_switch_by_default(publisher, clock) -> None:
    publisher.on_position(STATIONARY)
    publisher.on_orientation(OrientationReading(compass_heading=40.0))
    clock.advance(1.0)
    publisher.on_position(PositionFix(course=10.0, **MOVING))
    assert len(publisher.buffer(HeadingSource.COMPASS)) == 1


def test_source_switch_clearing_can_be_enabled(state, clock) -> None:
    state.set_tracking(True)
    publisher = HeadingPublisher(
        state, HeadingSettings(_env_file=None, clear_on_source_switch=True), clock
    )
    publisher.on_position(STATIONARY)
    publisher.on_orientation(OrientationReading(compass_heading=40.0))
    clock.advance(1.0)
    publisher.on_position(PositionFix(course=10.0, **MOVING))
    assert len(publisher.buffer(HeadingSource.COMPASS)) == 0
    assert len(publisher.buffer(HeadingSource.SATELLITE)) == 1


def test_reset_empties_buffers_and_gates(publisher, state, clock) -> None:
    publisher.on_position(PositionFix(course=10.0, **MOVING))
    publisher.reset()
    assert len(publisher.buffer(HeadingSource.SATELLITE)) == 0
    # Same course and no clock advance: accepted again after reset.
    publisher.on_position(PositionFix(course=10.0, **MOVING))
    assert len(publisher.buffer(HeadingSource.SATELLITE)) == 1


def test_not_tracking_ignores_everything(state, settings, clock) -> None:
    publisher = HeadingPublisher(state, settings, clock)
    assert publisher.on_position(PositionFix(course=10.0, **MOVING)) == HeadingSource.NONE
    assert publisher.on_orientation(OrientationReading(compass_heading=10.0)) is None
    assert state.smoothed_heading is None
    assert state.snapshot.raw_course is None


def test_decisions_are_exported_as_metrics(publisher, clock) -> None:
    publisher.on_position(PositionFix(course=33.0, **MOVING))
    exported = metrics.render_latest().decode()
    assert "mapheading_samples_total" in exported
    assert "mapheading_smoothed_heading_degrees 33.0" in exported
