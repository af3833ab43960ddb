# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health endpoints
# PURPOSE: Liveness, aggregate health and per-dependency health
# ============================================================================
"""
Health Check Router

Endpoints:
    GET /livez            - Process alive (no dependency checks)

    GET /health           - Aggregate health of every dependency
                            200 healthy/degraded, 503 unhealthy/error

    GET /health/database  - Primary data store only (service key if set)
                            200 healthy/degraded, 500 otherwise

    GET /health/ai        - AI provider only
                            200, with status "warning" when no key is set;
                            503 when the provider is unreachable

Every response carries a JSON body, including total failures.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from __version__ import __version__, BUILD_DATE
from core.logging import ComponentType, get_logger
from health.checks import AIProviderProbe, DatabaseProbe
from health.core import ProbeStatus
from health.executor import HealthAggregator

logger = get_logger(__name__, ComponentType.API)

health_router = APIRouter(tags=["Health"])

_aggregator: Optional[HealthAggregator] = None


def set_health_services(aggregator: Optional[HealthAggregator] = None) -> None:
    """Set the aggregator used by the health endpoints (None resets)."""
    global _aggregator
    _aggregator = aggregator


def get_aggregator() -> HealthAggregator:
    global _aggregator
    if _aggregator is None:
        _aggregator = HealthAggregator()
    return _aggregator


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@health_router.get("/livez")
async def liveness_probe():
    """Returns 200 while the process is responsive. No external checks."""
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


# ============================================================================
# AGGREGATE HEALTH
# ============================================================================

@health_router.get("/health")
async def full_health_check():
    """
    Aggregate health check.

    Runs every registered dependency probe and reduces them to one status.
    Degraded still returns 200: the system is operable, possibly in demo
    mode or without optional integrations.
    """
    health = await get_aggregator().aggregate()

    if health.http_status != 200:
        logger.warning(f"Health check reporting {health.overall_status.value}")

    return JSONResponse(status_code=health.http_status, content=health.to_dict())


# ============================================================================
# SINGLE DEPENDENCIES
# ============================================================================

@health_router.get("/health/database")
async def database_health_check():
    """Primary data store health using the service key when available."""
    result = await get_aggregator().run_probe(DatabaseProbe(use_service_key=True))

    operable = result.status in (ProbeStatus.HEALTHY, ProbeStatus.DEGRADED)
    return JSONResponse(status_code=200 if operable else 500, content=result.to_dict())


@health_router.get("/health/ai")
async def ai_health_check():
    """AI provider health. A missing key is a warning, not a failure."""
    result = await get_aggregator().run_probe(AIProviderProbe())

    body = result.to_dict()
    if result.status == ProbeStatus.NOT_CONFIGURED:
        body["status"] = "warning"
        return JSONResponse(status_code=200, content=body)

    failed = result.status in (ProbeStatus.UNHEALTHY, ProbeStatus.ERROR)
    return JSONResponse(status_code=503 if failed else 200, content=body)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "health_router",
    "set_health_services",
    "get_aggregator",
]
