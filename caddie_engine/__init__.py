"""Single-shot caddie decision engine."""

from .engine import decide
from .freshness import (
    FreshnessPolicy,
    FreshnessReport,
    FreshnessState,
    evaluate_freshness,
    should_suppress_intent,
)
from .geo import bearing_deg, distance_yds, project
from .models import (
    ConfidenceLevel,
    Coordinate,
    DecisionEngineInput,
    DecisionEngineOutput,
    Hazard,
    HazardType,
    LandingEllipse,
    LieType,
    MissBias,
    PlayerProfile,
    TargetZone,
    Wind,
)
from .service import recommend_shot

__all__ = [
    "ConfidenceLevel",
    "Coordinate",
    "DecisionEngineInput",
    "DecisionEngineOutput",
    "FreshnessPolicy",
    "FreshnessReport",
    "FreshnessState",
    "Hazard",
    "HazardType",
    "LandingEllipse",
    "LieType",
    "MissBias",
    "PlayerProfile",
    "TargetZone",
    "Wind",
    "bearing_deg",
    "decide",
    "distance_yds",
    "evaluate_freshness",
    "project",
    "recommend_shot",
    "should_suppress_intent",
]
