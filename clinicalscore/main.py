"""FastAPI application for the clinical questionnaire calculators."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinicalscore import __version__
from clinicalscore.api import calculators_router, sessions_router
from clinicalscore.core.config import configure_logging, settings
from clinicalscore.services.catalog import list_configs
from clinicalscore.services.scoring import get_scoring_service
from clinicalscore.services.sessions import get_session_registry

logger = logging.getLogger(__name__)

SERVICE_NAME = "clinicalscore"


def prewarm_services() -> dict[str, Any]:
    """Create the singleton services before the first request.

    Returns:
        Dictionary with service names and their stats.
    """
    start_time = time.perf_counter()
    services_loaded = {}

    try:
        services_loaded["scoring"] = get_scoring_service().get_stats()
    except Exception as e:
        logger.warning(f"Failed to prewarm scoring: {e}")

    try:
        services_loaded["sessions"] = get_session_registry().get_stats()
    except Exception as e:
        logger.warning(f"Failed to prewarm sessions: {e}")

    total_time_ms = (time.perf_counter() - start_time) * 1000

    return {
        "services_loaded": len(services_loaded),
        "total_prewarm_time_ms": round(total_time_ms, 2),
        "services": services_loaded,
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    - Startup: configure logging, prewarm singleton services
    - Shutdown: drop in-memory sessions
    """
    configure_logging()
    startup_start = time.perf_counter()

    prewarm_stats = prewarm_services()
    logger.info(
        f"Services pre-warmed: {prewarm_stats['services_loaded']} services "
        f"in {prewarm_stats['total_prewarm_time_ms']}ms"
    )
    if not settings.submission_url:
        logger.info("No submission URL configured, results stay local")

    total_startup_ms = (time.perf_counter() - startup_start) * 1000
    logger.info(f"Server ready - total startup time: {total_startup_ms:.0f}ms")

    app.state.prewarm_stats = prewarm_stats
    app.state.startup_time_ms = total_startup_ms

    yield

    get_session_registry().clear()


app = FastAPI(
    title=settings.app_name,
    description="Clinical questionnaire calculators with a SCORE2 cardiovascular risk engine.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculators_router)
app.include_router(sessions_router)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, Any]:
    """Health check endpoint (liveness probe).

    Use /ready for readiness checks.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, Any]:
    """Readiness check endpoint.

    Confirms the calculator catalog and scoring strategies are loaded.
    """
    prewarm_stats = getattr(app.state, "prewarm_stats", {})
    startup_time = getattr(app.state, "startup_time_ms", 0)

    return {
        "status": "ready",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
        "startup_time_ms": startup_time,
        "calculators": len(list_configs()),
        "scoring": get_scoring_service().get_stats(),
        "sessions": get_session_registry().get_stats(),
        "submission_enabled": bool(settings.submission_url),
        "prewarmed_services": prewarm_stats.get("services_loaded", 0),
    }


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "service": "Clinical Questionnaire Calculators API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
    }
