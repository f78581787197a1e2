"""Instrumented entry point around the decision engine."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Optional, Tuple

from . import engine, telemetry
from .freshness import Clock, FreshnessPolicy, default_freshness_policy, utc_now
from .models import DecisionEngineInput, DecisionEngineOutput

logger = logging.getLogger("caddie_engine")


def recommend_shot(
    inp: DecisionEngineInput,
    *,
    clock: Optional[Clock] = None,
    policy: Optional[FreshnessPolicy] = None,
) -> Tuple[DecisionEngineOutput, dict]:
    """Decide the shot and publish metrics plus a structured log record."""
    start = time.perf_counter()

    # Freeze "now" so decide and the log record agree on ages
    now = (clock or utc_now)()
    gate_policy = policy or default_freshness_policy()
    output, trace = engine.decide_with_trace(inp, now=now, policy=gate_policy)

    duration_ms = (time.perf_counter() - start) * 1000

    telemetry.record_decision_metrics(
        duration_ms=duration_ms,
        confidence=output.confidence.value,
        intent_shown=output.one_line_intent is not None,
        club_recommended=output.recommended_club is not None,
    )

    log_payload = telemetry.build_structured_log_payload(
        decision_id=f"dec-{uuid.uuid4()}",
        decision=output.model_dump(mode="json"),
        breakdown=trace.breakdown,
        freshness=trace.freshness.as_dict(),
        confidence_score=trace.confidence_score,
        duration_ms=duration_ms,
    )
    log_payload["hole_id"] = inp.hole_id
    log_payload["tee_box_id"] = inp.tee_box_id
    logger.info("caddie_decision", extra={"caddie_engine": log_payload})

    return output, log_payload


__all__ = ["recommend_shot"]
