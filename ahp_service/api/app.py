"""
FastAPI application factory.
Creates and configures the main API application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from elasticapm.contrib.starlette import make_apm_client, ElasticAPM
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from ahp_service.config import settings
from .middleware import CorrelationIdMiddleware, RequestLoggingMiddleware
from .routes import api_router
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    from ahp_service.modules.ahp_core import get_orchestrator

    logger.info("Starting application...")

    orchestrator = get_orchestrator()
    logger.info(
        f"AHP orchestrator ready (consistency threshold={orchestrator.consistency_threshold})"
    )

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.app_name,
        description="""
        # AHP Decision Service

        Ranks alternatives against weighted criteria with the Analytic Hierarchy Process.

        ## Features

        - **Priority vectors**: weights of a pairwise comparison matrix (column normalization)
        - **Consistency check**: Consistency Ratio, accepted when CR <= 0.10
        - **Synthesis**: weighted-sum ranking of the alternatives
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Request context and logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Elastic APM integration
    if settings.apm_enabled:
        apm_client = make_apm_client({
            'SERVICE_NAME': settings.app_name,
            'SERVER_URL': settings.apm_server_url,
            'ENVIRONMENT': settings.environment,
            'CAPTURE_BODY': 'all',
            'TRANSACTION_SAMPLE_RATE': 1.0,
        })
        app.add_middleware(ElasticAPM, client=apm_client)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        error = ErrorResponse(
            error="Internal server error",
            detail=str(exc) if settings.debug else "An error occurred",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error.model_dump(),
        )

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": f"{settings.api_prefix}/health",
        }

    return app


# Application instance
app = create_app()
