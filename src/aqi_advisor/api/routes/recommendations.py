"""Recommendation API routes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from ...models.aqi import AQIData

router = APIRouter()


@router.post("")
async def create_recommendation(aqi_data: AQIData, request: Request):
    """Run one reconciliation pass for the posted air quality reading.

    Extraction and parse failures still return 200 with ``source="fallback"``.
    """
    result = await request.app.state.engine.recommend(aqi_data)
    return {
        "source": result.source,
        "model": result.model,
        "promptVersion": result.prompt_version,
        "fallbackReason": result.fallback_reason,
        "attempts": [a.model_dump(mode="json") for a in result.attempts],
        "corrections": [c.model_dump() for c in result.corrections],
        "recommendation": result.recommendation.to_wire(),
    }
