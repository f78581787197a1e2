"""Domain models for the shot decision engine."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Coordinate(BaseModel):
    """Latitude/longitude pair in degrees (WGS-84)."""

    lat: float
    lon: float = Field(alias="lng")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class HazardType(str, Enum):
    WATER = "water"
    OUT_OF_BOUNDS = "ob"
    BUNKER = "bunker"
    TREES = "trees"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.lower() in ("out-of-bounds", "out_of_bounds"):
            return cls.OUT_OF_BOUNDS
        return None

    @property
    def is_primary_danger(self) -> bool:
        return self in (HazardType.WATER, HazardType.OUT_OF_BOUNDS)


class Hazard(_Model):
    type: HazardType
    center: Coordinate
    radius_yds: float = Field(..., ge=0, alias="radiusYds")


class Wind(_Model):
    speed_mph: float = Field(alias="speedMph")
    direction_deg: float = Field(default=0.0, alias="directionDeg")  # 0 = north
    observed_at: datetime = Field(alias="observedAt")

    @model_validator(mode="before")
    @classmethod
    def _accept_unix_ms(cls, data):
        if isinstance(data, dict) and "updatedAtUnixMs" in data:
            data = dict(data)
            millis = data.pop("updatedAtUnixMs")
            if "observed_at" not in data and "observedAt" not in data:
                data["observedAt"] = datetime.fromtimestamp(millis / 1000, UTC)
        return data

    @field_validator("observed_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class MissBias(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    SHORT = "short"
    LONG = "long"


class LieType(str, Enum):
    TEE = "tee"
    FAIRWAY = "fairway"
    ROUGH = "rough"
    BUNKER = "bunker"


class PlayerProfile(_Model):
    # e.g. {"7i": 150, "D": 250}; None marks a club without a measured carry
    club_carry_yds: dict[str, Optional[float]] = Field(
        default_factory=dict, alias="clubCarryYds"
    )
    miss_bias: Optional[MissBias] = Field(default=None, alias="missBias")

    def known_carries(self) -> dict[str, float]:
        return {
            club: float(carry)
            for club, carry in self.club_carry_yds.items()
            if carry is not None
        }


class DecisionEngineInput(_Model):
    hole_id: str = Field(alias="holeId")
    par: Literal[3, 4, 5]
    tee_box_id: str = Field(alias="teeBoxId")

    teebox_location: Coordinate = Field(alias="teeboxLocation")
    green_center: Coordinate = Field(alias="greenCenter")
    pin_location: Optional[Coordinate] = Field(default=None, alias="pinLocation")

    hazards: list[Hazard] = Field(default_factory=list)

    gps_accuracy_meters: float = Field(..., ge=0, alias="gpsAccuracyMeters")

    elevation_delta_feet: Optional[float] = Field(
        default=None, alias="elevationDeltaFeet"
    )
    temperature_f: Optional[float] = Field(default=None, alias="temperatureF")
    wind: Optional[Wind] = None

    lie_type: Optional[LieType] = Field(default=None, alias="lieType")

    player: PlayerProfile

    # Supplied by the layer that resolves course/tee ambiguity
    is_course_confirmed: bool = Field(alias="isCourseConfirmed")
    is_tee_box_confirmed: bool = Field(alias="isTeeBoxConfirmed")

    @property
    def aim_reference(self) -> Coordinate:
        """Pin when known, otherwise the green center."""

        return self.pin_location or self.green_center


class TargetZone(_Model):
    center: Coordinate
    radius_yds: float = Field(alias="radiusYds")


class LandingEllipse(_Model):
    center: Coordinate
    # whole yards and degrees; NaN when an input coordinate was NaN
    width_yds: Union[int, float] = Field(alias="widthYds")
    length_yds: Union[int, float] = Field(alias="lengthYds")
    bearing_deg: Union[int, float] = Field(alias="bearingDeg")  # tee toward target


class ConfidenceLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {
    ConfidenceLevel.LOW: 0,
    ConfidenceLevel.MEDIUM: 1,
    ConfidenceLevel.HIGH: 2,
}


class DecisionEngineOutput(_Model):
    distance_to_pin_yds: Union[int, float] = Field(alias="distanceToPinYds")
    effective_distance_yds: Union[int, float] = Field(alias="effectiveDistanceYds")

    recommended_club: Optional[str] = Field(alias="recommendedClub")

    target_zone: Optional[TargetZone] = Field(alias="targetZone")
    landing_ellipse: Optional[LandingEllipse] = Field(alias="landingEllipse")

    confidence: ConfidenceLevel

    # Only when confidence is HIGH and no gated input is stale/missing
    one_line_intent: Optional[str] = Field(default=None, alias="oneLineIntent")


__all__ = [
    "ConfidenceLevel",
    "Coordinate",
    "DecisionEngineInput",
    "DecisionEngineOutput",
    "Hazard",
    "HazardType",
    "LandingEllipse",
    "LieType",
    "MissBias",
    "PlayerProfile",
    "TargetZone",
    "Wind",
]
