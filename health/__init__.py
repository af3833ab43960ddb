# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Infrastructure - Dependency health aggregation
# PURPOSE: Probe external dependencies and report one overall status
# ============================================================================
"""
Health Check Module

Plugin-based dependency health for the compliance operations service:
- /livez: Process alive (instant)
- /health: Every dependency probe, reduced to one overall status
- /health/database, /health/ai: Single dependency

Architecture:
- HealthProbe: Base class, one subclass per DependencyKind
- ProbeRegistry: Probe discovery and registration
- HealthAggregator: Concurrent execution with timeouts and reduction

Usage:
    from health import health_router, HealthAggregator

    health = await HealthAggregator().aggregate()
    app.include_router(health_router)
"""

from health.core import (
    ProbeStatus,
    OverallStatus,
    DependencyKind,
    ProbeResult,
    AggregateHealth,
    HealthProbe,
)
from health.registry import (
    ProbeRegistry,
    register_probe,
    get_registry,
)
from health.executor import HealthAggregator
from health.router import health_router, set_health_services

__all__ = [
    # Core types
    "ProbeStatus",
    "OverallStatus",
    "DependencyKind",
    "ProbeResult",
    "AggregateHealth",
    "HealthProbe",
    # Registry
    "ProbeRegistry",
    "register_probe",
    "get_registry",
    # Executor
    "HealthAggregator",
    # Router
    "health_router",
    "set_health_services",
]
