"""Internal models describing how a recommendation was produced.

These travel alongside the ``Recommendation`` but are not part of it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from aqi_advisor.models.recommendation import Recommendation


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class Correction(BaseModel):
    """A field the validator rewrote or filled in."""

    field: str
    message: str
    expected: str | None = None
    actual: str | None = None


class ValidationResult(BaseModel):
    recommendation: Recommendation
    corrections: list[Correction] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Model attempts
# ---------------------------------------------------------------------------


class AttemptOutcome(StrEnum):
    SUCCESS = "success"
    EXTRACTION_OR_PARSE_FAILURE = "extraction_or_parse_failure"
    RETRYABLE_FAULT = "retryable_fault"
    FATAL_FAULT = "fatal_fault"


class AttemptRecord(BaseModel):
    """One call to one model identifier."""

    model: str
    outcome: AttemptOutcome
    error: str | None = None
    latency_ms: int = 0


class RecommendationSource(StrEnum):
    MODEL = "model"
    FALLBACK = "fallback"


class ReconciliationResult(BaseModel):
    """Output of one reconciliation pass."""

    recommendation: Recommendation
    source: RecommendationSource
    model: str | None = None
    prompt_version: str | None = None
    attempts: list[AttemptRecord] = Field(default_factory=list)
    corrections: list[Correction] = Field(default_factory=list)
    fallback_reason: str | None = None
