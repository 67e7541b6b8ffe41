"""
FastAPI Application Factory

Builds the QuantumSynth API from an explicit Settings value. Each app
owns its MetricsRegistry and QuantumDispatcher, stored on app.state.

Typed SynthError exceptions become {error, detail, timestamp} JSON
responses with the status code the error carries; anything unexpected
is logged and answered with a 500 so one failing request never takes
the service down.

Run with: uvicorn quantumsynth.main:create_app --factory --port 8080
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import api_router, router
from .core.config import Settings
from .core.exceptions import SynthError
from .core.metrics import MetricsRegistry
from .core.utils import format_duration, get_timestamp
from .synth.processor import QuantumDispatcher

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into 'field: message' pairs."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a configured QuantumSynth application.

    Args:
        settings: Configuration; Settings.load() is used when omitted

    Returns:
        The FastAPI application
    """
    if settings is None:
        settings = Settings.load()

    metrics = MetricsRegistry()
    dispatcher = QuantumDispatcher(settings, metrics)

    # ============================================================
    # Application Lifespan Handler
    # ============================================================

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log the effective configuration on startup and say goodbye on shutdown."""
        logger.info("=" * 60)
        logger.info("QUANTUMSYNTH API STARTING")
        logger.info("=" * 60)
        logger.info(f"Server: {settings.server.host}:{settings.server.port}")
        logger.info(f"API Version: {settings.api_version}")
        logger.info(f"Default mode: {settings.quantum.default_mode}")
        logger.info(f"Max concurrent jobs: {settings.quantum.max_jobs}")
        logger.info(f"Allowed origins: {', '.join(settings.security.origins)}")
        if settings.security.enable_auth:
            logger.warning("security.enable_auth is set but authentication is not enforced")
        logger.info("=" * 60)

        yield

        logger.info(
            f"QuantumSynth stopping after {format_duration(metrics.uptime_seconds())}, "
            f"{metrics.jobs_run} jobs run"
        )

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.dispatcher = dispatcher

    # ============================================================
    # Middleware Configuration
    # ============================================================

    origins = settings.security.origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================================================
    # Exception Handlers
    # ============================================================

    @app.exception_handler(SynthError)
    async def synth_exception_handler(request: Request, exc: SynthError):
        """Answer a typed synthesis error with its own status code."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error,
                "detail": exc.detail,
                "timestamp": get_timestamp()
            }
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ):
        """
        Handle validation errors with a clean response.

        Missing fields and malformed JSON are client errors: 400.
        """
        detail = _format_validation_errors(exc)
        logger.warning(f"Invalid request to {request.url.path}: {detail}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid input",
                "detail": detail,
                "timestamp": get_timestamp()
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Global exception handler for anything the dispatcher did not type.

        The failure is logged and confined to this request.
        """
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "detail": "An unexpected error occurred. Please try again.",
                "timestamp": get_timestamp()
            }
        )

    # ============================================================
    # Route Registration
    # ============================================================

    app.include_router(router, tags=["System"])
    app.include_router(api_router, tags=["Quantum"])

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint with API information.

        Provides basic info and links to documentation.
        """
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "description": settings.api_description,
            "uptime": format_duration(metrics.uptime_seconds()),
            "endpoints": {
                "health": "GET /health",
                "metrics": "GET /metrics",
                "process": "POST /api/v1/quantum/process",
                "models": "GET /api/v1/models",
                "inference": "POST /api/v1/inference",
                "matrix": "POST /api/v1/quantum/matrix",
                "collapse": "POST /api/v1/quantum/collapse",
                "docs": "GET /docs"
            },
            "timestamp": get_timestamp()
        }

    return app
