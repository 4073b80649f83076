"""FastAPI application for chart sonification.

This module provides the main FastAPI application with endpoints for:
- GET /health: Service health check
- POST /sonify: Render the tone sweep for a list of chart points

Example:
    Run with uvicorn:

    $ uvicorn src.api.main:app --host 0.0.0.0 --port 8000
"""

import logging
import math
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from sonify import sonify_graph

from .config import Settings, get_settings
from .deps import build_pipeline_configs
from .errors import InvalidConfigError, InvalidGraphError, register_exception_handlers
from .logging import add_middleware, setup_logging
from .schemas import HealthResponse, SonifyRequest, SonifyResponse


logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info(
        "Starting %s v%s",
        settings.app_name,
        settings.app_version,
    )
    logger.info(
        "Sonification defaults: sample_rate=%d frequencies=%s-%s duration=%s",
        settings.sample_rate,
        settings.min_frequency,
        settings.max_frequency,
        settings.default_playing_duration,
    )

    yield

    logger.info("Application shutdown")


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Audiograph API - Turn chart data into audible tone sweeps.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Add CORS middleware (allow all in development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_middleware(app)
    register_exception_handlers(app)
    register_routes(app)

    return app


def _validate_request(request: SonifyRequest, settings: Settings) -> None:
    """Reject requests the pipeline should never see."""
    if len(request.points) > settings.max_points:
        raise InvalidGraphError(
            message=f"Too many points: {len(request.points)} (max {settings.max_points})",
            details={"reason": "TOO_MANY_POINTS", "point_count": len(request.points), "max_points": settings.max_points},
        )

    for index, point in enumerate(request.points):
        if not (math.isfinite(point.time) and math.isfinite(point.value)):
            raise InvalidGraphError(
                message="Points must have finite time and value",
                details={"reason": "NON_FINITE", "index": index},
            )

    min_frequency = request.min_frequency if request.min_frequency is not None else settings.min_frequency
    max_frequency = request.max_frequency if request.max_frequency is not None else settings.max_frequency
    if min_frequency >= max_frequency:
        raise InvalidConfigError(
            message=f"min_frequency ({min_frequency}) must be below max_frequency ({max_frequency})",
            details={"min_frequency": min_frequency, "max_frequency": max_frequency},
        )


def register_routes(app: FastAPI) -> None:
    """Register all API routes on the application.

    Args:
        app: The FastAPI application.
    """

    # =========================================================================
    # Health Endpoint
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
        description="Check service health.",
    )
    async def health(request: Request) -> HealthResponse:
        settings: Settings = request.app.state.settings
        return HealthResponse(
            status="ok",
            app_version=settings.app_version,
            sample_rate=settings.sample_rate,
        )

    # =========================================================================
    # Sonify Endpoint
    # =========================================================================

    @app.post(
        "/sonify",
        response_model=SonifyResponse,
        response_model_exclude_none=True,
        tags=["Sonification"],
        summary="Sonify chart points",
        description="Render the tone sweep for a list of chart points.",
    )
    def sonify(body: SonifyRequest, request: Request) -> SonifyResponse:
        """Render the tone sweep for the submitted points.

        Parameters omitted from the body fall back to the service settings.
        """
        settings: Settings = request.app.state.settings
        _validate_request(body, settings)

        configs = build_pipeline_configs(settings, body)

        result = sonify_graph(
            [(p.time, p.value) for p in body.points],
            playing_duration=configs.playing_duration,
            smoothing_config=configs.smoothing_config,
            frequency_range=configs.frequency_range,
            synth_config=configs.synth_config,
        )

        return SonifyResponse(
            **result.to_dict(
                include_samples=configs.include_samples,
                include_points=configs.include_points,
            )
        )


# =============================================================================
# Application Instance
# =============================================================================


app = create_app()
