"""FastAPI application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..engine import RecommendationEngine
from ..errors import MissingCredentialError, ProviderFaultError
from ..utils.logging import setup_logging
from .middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware
from .routes import health, recommendations

logger = structlog.get_logger(__name__)


async def _missing_credential(request: Request, exc: MissingCredentialError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


async def _provider_fault(request: Request, exc: ProviderFaultError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"detail": f"Model provider error ({exc.model}): {exc}", "statusCode": exc.status_code},
    )


def create_app(settings: Settings | None = None, engine: RecommendationEngine | None = None) -> FastAPI:
    """Build the app around one shared ``RecommendationEngine``.

    Passes are stateless, so concurrent requests share the engine. Fatal
    engine errors map to 503 (no credential) and 502 (provider fault).
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.json_logs)
        logger.info("api_start", provider=settings.llm_provider, models=settings.models)
        yield

    app = FastAPI(
        title="AQI Advisor API",
        description="Tree planting recommendations reconciled against AQI formulas",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_exception_handler(MissingCredentialError, _missing_credential)
    app.add_exception_handler(ProviderFaultError, _provider_fault)

    app.state.settings = settings
    app.state.engine = engine or RecommendationEngine(settings)

    app.include_router(health.router, tags=["health"])
    app.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
    return app
