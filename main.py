# ============================================================================
# COMPLIANCE OPERATIONS SERVICE - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Health and deployment readiness endpoints
# ============================================================================
"""
Compliance Operations Service Main Application

FastAPI application that:
1. Reports dependency health (/livez, /health, /health/database, /health/ai)
2. Reports deployment readiness (/deployment/status)

Every request builds its own configuration snapshot from the environment,
so nothing here holds configuration state.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, APP_NAME, BUILD_DATE, SERVICE_NAME
from api import router as deployment_router, set_deployment_services
from services import EnvironmentPrerequisiteValidator
from core.logging import configure_logging, get_logger, log_context

# Health check system
from health import HealthAggregator, health_router, get_registry, set_health_services

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
    service=SERVICE_NAME,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Registers probes and injects services into the routers.
    """
    logger.info(f"Starting {SERVICE_NAME} v{__version__} (Build {BUILD_DATE})")

    import health.checks  # Register all dependency probes

    overall_timeout = float(os.environ.get("HEALTH_OVERALL_TIMEOUT", "15.0"))
    set_health_services(HealthAggregator(overall_timeout=overall_timeout))
    set_deployment_services(validator=EnvironmentPrerequisiteValidator())
    logger.info(f"Health checks initialized ({len(get_registry())} probes registered)")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}...")
    set_health_services(None)
    set_deployment_services()
    logger.info(f"{SERVICE_NAME} stopped")


# Create FastAPI app
app = FastAPI(
    title=APP_NAME,
    description="Dependency health and deployment readiness for the compliance platform",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REQUEST_ID_HEADER = "X-Request-ID"


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with its request id."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    with log_context(request_id=request_id):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# Include health check routes (no prefix - /livez, /health)
app.include_router(health_router)

# Include deployment routes (/deployment/status)
app.include_router(deployment_router)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "name": APP_NAME,
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
