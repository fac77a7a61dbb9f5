"""Shared pytest fixtures for heading pipeline tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import pytest

from mapheading.config import HeadingSettings
from mapheading.state import HeadingState
from mapheading.timing import ManualClock


@dataclass
class FakeMapView:
    """Records animation requests; animations complete instantly."""

    rotation: float = 0.0
    animations: List[Tuple[float, int, Optional[Callable[[float], float]]]] = field(
        default_factory=list
    )

    def get_rotation(self) -> float:
        return self.rotation

    def animate(self, rotation, duration_ms, easing=None) -> None:
        self.animations.append((rotation, duration_ms, easing))
        self.rotation = rotation


@dataclass
class FakeMarker:
    rotations: List[float] = field(default_factory=list)
    neutral_count: int = 0
    directional: bool = False

    def set_rotation(self, radians: float) -> None:
        self.rotations.append(radians)
        self.directional = True

    def show_neutral(self) -> None:
        self.neutral_count += 1
        self.directional = False


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(now=100.0)


@pytest.fixture
def settings() -> HeadingSettings:
    return HeadingSettings(_env_file=None)


@pytest.fixture
def state() -> HeadingState:
    return HeadingState()


@pytest.fixture
def view() -> FakeMapView:
    return FakeMapView()


@pytest.fixture
def marker() -> FakeMarker:
    return FakeMarker()
