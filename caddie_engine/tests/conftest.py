"""Shared pytest fixtures for the decision engine tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Callable

import pytest

from caddie_engine.config import reset_settings_cache
from caddie_engine.models import DecisionEngineInput, Wind

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: NOW


@pytest.fixture
def wind_aged() -> Callable[..., Wind]:
    """Build a wind reading observed ``minutes`` before the fixed clock."""

    def build(minutes: float, speed_mph: float = 8.0, direction_deg: float = 0.0) -> Wind:
        return Wind(
            speed_mph=speed_mph,
            direction_deg=direction_deg,
            observed_at=NOW - timedelta(minutes=minutes),
        )

    return build


@pytest.fixture
def base_input() -> DecisionEngineInput:
    return DecisionEngineInput.model_validate(
        {
            "holeId": "1",
            "par": 4,
            "teeBoxId": "blue",
            "teeboxLocation": {"lat": 35.0, "lng": -78.0},
            "greenCenter": {"lat": 35.001, "lng": -78.0},
            "hazards": [],
            "gpsAccuracyMeters": 6,
            "player": {
                "clubCarryYds": {"D": 250, "3W": 235, "5i": 175, "7i": 150, "9i": 125},
                "missBias": "right",
            },
            "isCourseConfirmed": True,
            "isTeeBoxConfirmed": True,
        }
    )
