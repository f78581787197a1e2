"""Shot decision engine: distance, club, target and confidence."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Mapping, Optional, Tuple, Union

from .config import get_settings
from .freshness import (
    Clock,
    FreshnessPolicy,
    FreshnessReport,
    age_minutes,
    default_freshness_policy,
    evaluate_freshness,
    should_suppress_intent,
    utc_now,
)
from .geo import bearing_deg, distance_yds, project
from .models import (
    ConfidenceLevel,
    Coordinate,
    DecisionEngineInput,
    DecisionEngineOutput,
    LandingEllipse,
    MissBias,
    TargetZone,
)

logger = logging.getLogger(__name__)

ELEVATION_FEET_PER_YARD = 3.0
ELEVATION_CAP_YDS = 12.0
TEMP_BASELINE_F = 70.0
TEMP_PCT_PER_20F = 0.01
TEMP_CAP_PCT = 0.03
WIND_YDS_PER_MPH = 1.0
WIND_CAP_YDS = 15.0

CLUB_BAND_SHORT_YDS = 30.0
CLUB_BAND_LONG_YDS = 15.0
CLUB_TIE_YDS = 5.0

MISS_BIAS_LATERAL_YDS = 10.0
MISS_BIAS_DEPTH_YDS = 8.0

HAZARD_BUFFER_YDS = 12.0
HAZARD_EXTRA_PUSH_YDS = 6.0
HAZARD_MAX_PASSES = 4
HAZARD_COINCIDENT_YDS = 1.0

TARGET_RADIUS_YDS = 12.0

ELLIPSE_WIDTH_FACTOR = 0.08
ELLIPSE_WIDTH_RANGE = (10.0, 35.0)
ELLIPSE_LENGTH_FACTOR = 0.06
ELLIPSE_LENGTH_RANGE = (8.0, 25.0)

GPS_ACCURACY_LIMIT_M = 12.0
MIN_KNOWN_CLUBS = 5
STALE_WIND_MINUTES = 30.0
CONFIDENCE_PENALTIES = {
    "course_unconfirmed": 40,
    "tee_unconfirmed": 10,
    "gps_inaccurate": 30,
    "sparse_bag": 25,
    "no_pin": 10,
    "stale_wind": 10,
}
HIGH_CONFIDENCE_MIN = 70
MEDIUM_CONFIDENCE_MIN = 45


def _clamp(value: float, low: float, high: float) -> float:
    if math.isnan(value):
        return value
    return max(low, min(high, value))


def _round_half_up(value: float) -> Union[int, float]:
    # NaN and infinities pass through instead of raising
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def effective_distance_yds(
    inp: DecisionEngineInput, base_yds: float
) -> Tuple[Union[int, float], Dict[str, float]]:
    """Adjust the base distance for elevation, temperature and wind.

    Temperature scales the elevation-adjusted value, so the order matters.
    Wind is applied as a headwind regardless of its direction.
    """
    eff = float(base_yds)
    elevation_yds = temp_yds = wind_yds = 0.0

    if inp.elevation_delta_feet is not None:
        elevation_yds = _clamp(
            inp.elevation_delta_feet / ELEVATION_FEET_PER_YARD,
            -ELEVATION_CAP_YDS,
            ELEVATION_CAP_YDS,
        )
        eff += elevation_yds

    if inp.temperature_f is not None:
        pct = _clamp(
            (inp.temperature_f - TEMP_BASELINE_F) / 20.0 * TEMP_PCT_PER_20F,
            -TEMP_CAP_PCT,
            TEMP_CAP_PCT,
        )
        temp_yds = eff * pct
        eff += temp_yds

    if inp.wind is not None:
        wind_yds = _clamp(
            inp.wind.speed_mph * WIND_YDS_PER_MPH, -WIND_CAP_YDS, WIND_CAP_YDS
        )
        eff += wind_yds

    return _round_half_up(eff), {
        "elevation_yds": round(elevation_yds, 2),
        "temperature_yds": round(temp_yds, 2),
        "wind_yds": round(wind_yds, 2),
    }


def pick_club(carries: Mapping[str, float], effective_yds: float) -> Optional[str]:
    """Pick a club for the effective distance from the known carries."""
    if not carries:
        return None

    low = effective_yds - CLUB_BAND_SHORT_YDS
    high = effective_yds + CLUB_BAND_LONG_YDS
    candidates = sorted(
        ((club, carry) for club, carry in carries.items() if low <= carry <= high),
        key=lambda item: abs(item[1] - effective_yds),
    )
    if candidates:
        close = [item for item in candidates if abs(item[1] - effective_yds) <= CLUB_TIE_YDS]
        if len(close) > 1:
            # shorter carry is the more controllable swing
            return min(close, key=lambda item: item[1])[0]
        return candidates[0][0]

    by_carry = sorted(carries.items(), key=lambda item: item[1])
    under = [item for item in by_carry if item[1] <= effective_yds]
    choice = under[-1] if under else by_carry[0]
    logger.debug(
        "no club within band for %s yds; falling back to %s (%s yds)",
        effective_yds,
        choice[0],
        choice[1],
    )
    return choice[0]


def apply_miss_bias(inp: DecisionEngineInput, center: Coordinate) -> Coordinate:
    """Shift the aim point to compensate for the player's usual miss."""
    bias = inp.player.miss_bias
    if bias is None:
        return center

    shot_bearing = bearing_deg(inp.teebox_location, center)
    if bias is MissBias.RIGHT:
        return project(center, (shot_bearing + 270.0) % 360.0, MISS_BIAS_LATERAL_YDS)
    if bias is MissBias.LEFT:
        return project(center, (shot_bearing + 90.0) % 360.0, MISS_BIAS_LATERAL_YDS)
    if bias is MissBias.SHORT:
        return project(center, shot_bearing, MISS_BIAS_DEPTH_YDS)
    return project(center, (shot_bearing + 180.0) % 360.0, MISS_BIAS_DEPTH_YDS)


def avoid_hazards(inp: DecisionEngineInput, center: Coordinate) -> Coordinate:
    """Push the target clear of water and OB with a bounded relaxation."""
    adjusted = center
    dangers = [hazard for hazard in inp.hazards if hazard.type.is_primary_danger]
    if not dangers:
        return adjusted

    for _ in range(HAZARD_MAX_PASSES):
        moved = False
        for hazard in dangers:
            d = distance_yds(adjusted, hazard.center)
            min_safe = hazard.radius_yds + HAZARD_BUFFER_YDS
            if d >= min_safe:
                continue
            if d < HAZARD_COINCIDENT_YDS:
                push_bearing = bearing_deg(inp.teebox_location, inp.aim_reference)
            else:
                push_bearing = bearing_deg(hazard.center, adjusted)
            push = min_safe - d + HAZARD_EXTRA_PUSH_YDS
            adjusted = project(adjusted, push_bearing, push)
            moved = True
            logger.debug(
                "pushed target %.1f yds at %.0f deg away from %s hazard",
                push,
                push_bearing,
                hazard.type.value,
            )
        if not moved:
            break

    return adjusted


def target_zone(inp: DecisionEngineInput) -> TargetZone:
    biased = apply_miss_bias(inp, inp.aim_reference)
    safe = avoid_hazards(inp, biased)
    return TargetZone(center=safe, radius_yds=TARGET_RADIUS_YDS)


def landing_ellipse(inp: DecisionEngineInput, zone: TargetZone) -> LandingEllipse:
    dist = distance_yds(inp.teebox_location, zone.center)
    width = _clamp(dist * ELLIPSE_WIDTH_FACTOR, *ELLIPSE_WIDTH_RANGE)
    length = _clamp(dist * ELLIPSE_LENGTH_FACTOR, *ELLIPSE_LENGTH_RANGE)
    bearing = bearing_deg(inp.teebox_location, zone.center)
    return LandingEllipse(
        center=zone.center,
        width_yds=_round_half_up(width),
        length_yds=_round_half_up(length),
        bearing_deg=_round_half_up(bearing) % 360,
    )


def confidence_score(inp: DecisionEngineInput, *, now: datetime) -> int:
    """Start at 100 and deduct for each weak input."""
    score = 100
    if not inp.is_course_confirmed:
        score -= CONFIDENCE_PENALTIES["course_unconfirmed"]
    if not inp.is_tee_box_confirmed:
        score -= CONFIDENCE_PENALTIES["tee_unconfirmed"]
    if inp.gps_accuracy_meters > GPS_ACCURACY_LIMIT_M:
        score -= CONFIDENCE_PENALTIES["gps_inaccurate"]
    if len(inp.player.known_carries()) < MIN_KNOWN_CLUBS:
        score -= CONFIDENCE_PENALTIES["sparse_bag"]
    if inp.pin_location is None:
        score -= CONFIDENCE_PENALTIES["no_pin"]
    if inp.wind is not None and age_minutes(inp.wind.observed_at, now) > STALE_WIND_MINUTES:
        score -= CONFIDENCE_PENALTIES["stale_wind"]
    return max(score, 0)


def confidence_level(score: int) -> ConfidenceLevel:
    if score >= HIGH_CONFIDENCE_MIN:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE_MIN:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


@dataclass(frozen=True)
class DecisionTrace:
    """Intermediate values behind one decision, kept for the decision log."""

    breakdown: Dict[str, float]
    confidence_score: int
    freshness: FreshnessReport


def decide_with_trace(
    inp: DecisionEngineInput,
    *,
    now: datetime,
    policy: FreshnessPolicy,
) -> Tuple[DecisionEngineOutput, DecisionTrace]:
    """Compute the recommendation at ``now`` along with its intermediates."""
    base = _round_half_up(distance_yds(inp.teebox_location, inp.aim_reference))
    eff, breakdown = effective_distance_yds(inp, base)

    score = confidence_score(inp, now=now)
    confidence = confidence_level(score)
    report = evaluate_freshness(inp, policy, now=now)
    suppress = should_suppress_intent(report, policy)

    # LOW confidence still gets a conservative club and target; higher
    # layers decide what to show
    club = pick_club(inp.player.known_carries(), eff)
    zone = target_zone(inp)
    ellipse = landing_ellipse(inp, zone)

    intent = None
    if confidence is ConfidenceLevel.HIGH and not suppress:
        intent = get_settings().intent_text

    output = DecisionEngineOutput(
        distance_to_pin_yds=base,
        effective_distance_yds=eff,
        recommended_club=club,
        target_zone=zone,
        landing_ellipse=ellipse,
        confidence=confidence,
        one_line_intent=intent,
    )
    return output, DecisionTrace(
        breakdown=breakdown, confidence_score=score, freshness=report
    )


def decide(
    inp: DecisionEngineInput,
    *,
    clock: Optional[Clock] = None,
    policy: Optional[FreshnessPolicy] = None,
) -> DecisionEngineOutput:
    """Compute the recommendation for the next shot.

    ``clock`` is read exactly once; pass a fixed clock for reproducible output.
    """
    now = (clock or utc_now)()
    output, _ = decide_with_trace(
        inp, now=now, policy=policy or default_freshness_policy()
    )
    return output


__all__ = [
    "DecisionTrace",
    "apply_miss_bias",
    "avoid_hazards",
    "confidence_level",
    "confidence_score",
    "decide",
    "decide_with_trace",
    "effective_distance_yds",
    "landing_ellipse",
    "pick_club",
    "target_zone",
]
