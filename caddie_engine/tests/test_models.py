from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from caddie_engine.models import (
    ConfidenceLevel,
    Coordinate,
    DecisionEngineInput,
    Hazard,
    HazardType,
    PlayerProfile,
    Wind,
)


def _payload(**overrides) -> dict:
    payload = {
        "holeId": "7",
        "par": 3,
        "teeBoxId": "white",
        "teeboxLocation": {"lat": 35.0, "lng": -78.0},
        "greenCenter": {"lat": 35.001, "lng": -78.0},
        "gpsAccuracyMeters": 4,
        "player": {"clubCarryYds": {"7i": 150}},
        "isCourseConfirmed": True,
        "isTeeBoxConfirmed": False,
    }
    payload.update(overrides)
    return payload


def test_accepts_original_wire_names() -> None:
    inp = DecisionEngineInput.model_validate(
        _payload(
            wind={"speedMph": 9, "directionDeg": 45, "updatedAtUnixMs": 1_700_000_000_000},
            hazards=[{"type": "ob", "center": {"lat": 35.0005, "lng": -78.0}, "radiusYds": 10}],
            lieType="tee",
            elevationDeltaFeet=-12,
            temperatureF=55,
        )
    )
    assert inp.wind.observed_at == datetime.fromtimestamp(1_700_000_000, UTC)
    assert inp.hazards[0].type is HazardType.OUT_OF_BOUNDS
    assert inp.teebox_location == Coordinate(lat=35.0, lon=-78.0)
    assert inp.is_tee_box_confirmed is False
    assert inp.hazards == [
        Hazard(type="ob", center=Coordinate(lat=35.0005, lon=-78.0), radius_yds=10)
    ]


def test_defaults_for_optional_fields() -> None:
    inp = DecisionEngineInput.model_validate(_payload())
    assert inp.hazards == []
    assert inp.wind is None
    assert inp.pin_location is None
    assert inp.elevation_delta_feet is None
    assert inp.temperature_f is None
    assert inp.lie_type is None
    assert inp.aim_reference == inp.green_center


def test_aim_reference_prefers_pin() -> None:
    inp = DecisionEngineInput.model_validate(
        _payload(pinLocation={"lat": 35.0012, "lng": -78.0001})
    )
    assert inp.aim_reference == Coordinate(lat=35.0012, lon=-78.0001)


@pytest.mark.parametrize(
    "overrides",
    [
        {"par": 6},
        {"gpsAccuracyMeters": -1},
        {"hazards": [{"type": "water", "center": {"lat": 0, "lng": 0}, "radiusYds": -3}]},
        {"hazards": [{"type": "lava", "center": {"lat": 0, "lng": 0}, "radiusYds": 3}]},
        {"player": {"clubCarryYds": {}, "missBias": "sideways"}},
    ],
)
def test_shape_errors_raise_validation_error(overrides) -> None:
    with pytest.raises(ValidationError):
        DecisionEngineInput.model_validate(_payload(**overrides))


def test_coordinate_is_immutable_and_hashable() -> None:
    a = Coordinate(lat=1.0, lon=2.0)
    with pytest.raises(ValidationError):
        a.lat = 3.0
    assert len({a, Coordinate(lat=1.0, lng=2.0)}) == 1


def test_known_carries_skip_missing_values() -> None:
    profile = PlayerProfile(club_carry_yds={"D": 250, "3W": None, "Hybrid 4": 190.5})
    assert profile.known_carries() == {"D": 250.0, "Hybrid 4": 190.5}


def test_primary_danger_kinds() -> None:
    assert {kind for kind in HazardType if kind.is_primary_danger} == {
        HazardType.WATER,
        HazardType.OUT_OF_BOUNDS,
    }


def test_out_of_bounds_spellings() -> None:
    for spelling in ("ob", "out-of-bounds", "OUT_OF_BOUNDS"):
        hazard = Hazard(type=spelling, center=Coordinate(lat=0, lon=0), radius_yds=1)
        assert hazard.type is HazardType.OUT_OF_BOUNDS


def test_confidence_levels_are_ordered() -> None:
    ordered = sorted(ConfidenceLevel, key=lambda level: level.rank)
    assert ordered == [ConfidenceLevel.LOW, ConfidenceLevel.MEDIUM, ConfidenceLevel.HIGH]


def test_wind_keeps_aware_timestamps() -> None:
    stamp = datetime(2026, 6, 1, 8, 0, tzinfo=UTC)
    assert Wind(speed_mph=3, observed_at=stamp).observed_at == stamp


@pytest.mark.parametrize("name", ["observed_at", "observedAt"])
def test_explicit_observed_at_wins_over_unix_ms(name) -> None:
    stamp = datetime(2026, 6, 1, 8, 0, tzinfo=UTC)
    wind = Wind.model_validate(
        {"speedMph": 5, "updatedAtUnixMs": 1_700_000_000_000, name: stamp}
    )
    assert wind.observed_at == stamp
