"""Health check endpoint."""
from __future__ import annotations
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    settings = request.app.state.settings
    return {
        "status": "ok",
        "service": "aqi-advisor-api",
        "provider": settings.llm_provider,
        "models": settings.models,
    }
