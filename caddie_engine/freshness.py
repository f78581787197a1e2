"""Freshness classification for time-stamped inputs.

Each tracked input is looked up through ``TRACKED_INPUTS``; a new gated input
only needs a registry entry and a max age in the policy.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Callable, Iterator, Optional

from .config import get_settings
from .models import DecisionEngineInput

Clock = Callable[[], datetime]


class FreshnessState(str, Enum):
    FRESH = "FRESH"
    STALE = "STALE"
    MISSING = "MISSING"


def utc_now() -> datetime:
    return datetime.now(UTC)


def _wind_observed_at(inp: DecisionEngineInput) -> Optional[datetime]:
    return inp.wind.observed_at if inp.wind is not None else None


TRACKED_INPUTS: dict[str, Callable[[DecisionEngineInput], Optional[datetime]]] = {
    "wind": _wind_observed_at,
}


@dataclass(frozen=True)
class FreshnessPolicy:
    max_age_minutes: Mapping[str, float] = field(default_factory=dict)
    # Any key listed here that is STALE or MISSING suppresses the advisory
    suppress_intent_if_stale: tuple[str, ...] = ()


class FreshnessReport(Mapping):
    """Read-only mapping of tracked input key to its ``FreshnessState``."""

    def __init__(self, states: Mapping[str, FreshnessState]) -> None:
        self._states = dict(states)

    def __getitem__(self, key: str) -> FreshnessState:
        return self._states[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"FreshnessReport({self._states!r})"

    @property
    def wind(self) -> FreshnessState:
        return self._states["wind"]

    def as_dict(self) -> dict[str, str]:
        return {key: state.value for key, state in self._states.items()}


def default_freshness_policy() -> FreshnessPolicy:
    """Build the policy from configured settings."""

    settings = get_settings()
    return FreshnessPolicy(
        max_age_minutes={"wind": settings.wind_max_age_minutes},
        suppress_intent_if_stale=settings.suppress_keys,
    )


def age_minutes(observed_at: datetime, now: datetime) -> float:
    if observed_at.tzinfo is None:
        observed_at = observed_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return (now - observed_at).total_seconds() / 60.0


def evaluate_freshness(
    inp: DecisionEngineInput,
    policy: FreshnessPolicy,
    *,
    now: Optional[datetime] = None,
) -> FreshnessReport:
    """Classify every tracked input as FRESH, STALE or MISSING."""
    current = now if now is not None else utc_now()
    states: dict[str, FreshnessState] = {}
    for key, observed_at_of in TRACKED_INPUTS.items():
        observed_at = observed_at_of(inp)
        if observed_at is None:
            states[key] = FreshnessState.MISSING
            continue
        max_age = policy.max_age_minutes.get(key)
        if max_age is not None and age_minutes(observed_at, current) > max_age:
            states[key] = FreshnessState.STALE
        else:
            states[key] = FreshnessState.FRESH
    return FreshnessReport(states)


def should_suppress_intent(report: FreshnessReport, policy: FreshnessPolicy) -> bool:
    return any(
        report.get(key) is not FreshnessState.FRESH
        for key in policy.suppress_intent_if_stale
    )


__all__ = [
    "Clock",
    "FreshnessPolicy",
    "FreshnessReport",
    "FreshnessState",
    "TRACKED_INPUTS",
    "age_minutes",
    "default_freshness_policy",
    "evaluate_freshness",
    "should_suppress_intent",
    "utc_now",
]
