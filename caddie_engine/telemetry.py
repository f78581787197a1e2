"""Telemetry helpers for the shot decision engine."""

from __future__ import annotations

import os

from prometheus_client import CollectorRegistry, Counter, Histogram

REGISTRY = CollectorRegistry()

_decision_histogram = Histogram(
    "caddie_decision_latency_ms",
    "Latency of shot decisions in milliseconds",
    labelnames=("confidence",),
    registry=REGISTRY,
)

_decision_counter = Counter(
    "caddie_decisions_total",
    "Total shot decisions computed",
    labelnames=("confidence", "intent_shown"),
    registry=REGISTRY,
)

_fallback_counter = Counter(
    "caddie_decision_without_club_total",
    "Shot decisions that could not recommend a club",
    registry=REGISTRY,
)


def record_decision_metrics(
    *,
    duration_ms: float,
    confidence: str,
    intent_shown: bool,
    club_recommended: bool,
) -> None:
    """Publish Prometheus metrics for a decision."""
    _decision_histogram.labels(confidence=confidence).observe(duration_ms)
    _decision_counter.labels(
        confidence=confidence, intent_shown="true" if intent_shown else "false"
    ).inc()
    if not club_recommended:
        _fallback_counter.inc()


def build_structured_log_payload(
    *,
    decision_id: str,
    decision: dict,
    breakdown: dict,
    freshness: dict,
    confidence_score: int,
    duration_ms: float | None = None,
) -> dict:
    """Build a structured log record for downstream sinks."""
    payload = {
        "decision_id": decision_id,
        "decision": decision,
        "breakdown": breakdown,
        "freshness": freshness,
        "confidence_score": confidence_score,
        "build_version": os.getenv("BUILD_VERSION", "unknown"),
        "git_sha": os.getenv("GIT_SHA", "unknown"),
    }
    if duration_ms is not None:
        payload["duration_ms"] = duration_ms
    return payload


__all__ = ["REGISTRY", "build_structured_log_payload", "record_decision_metrics"]
