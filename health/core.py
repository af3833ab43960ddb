# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Infrastructure - Base classes for dependency probes
# PURPOSE: Probe interface, result types and status reduction
# ============================================================================
"""
Health Check Core Types

Defines the probe interface and the result types for dependency health.

Probe statuses:
- healthy:        Dependency reachable within its latency budget
- degraded:       Reachable, but slower than its latency budget
- unhealthy:      Configured, but the live check failed
- not_configured: Required settings absent
- demo_mode:      Primary data store absent, app runs on sample data
- configured:     Settings present, nothing to probe live
- error:          Reserved for single-probe endpoints that could not run

Overall status reduction (order-independent):
1. any unhealthy                                  -> unhealthy
2. any of degraded / not_configured / demo_mode    -> degraded
3. otherwise                                      -> healthy
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional

import httpx

from core.config import ConfigurationSnapshot, ServiceConfig


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProbeStatus(str, Enum):
    """Status reported by a single dependency probe."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    NOT_CONFIGURED = "not_configured"
    DEMO_MODE = "demo_mode"
    CONFIGURED = "configured"
    ERROR = "error"


# Statuses that keep the system operable but not fully healthy
DEGRADING_STATUSES = frozenset({
    ProbeStatus.DEGRADED,
    ProbeStatus.NOT_CONFIGURED,
    ProbeStatus.DEMO_MODE,
})


class OverallStatus(str, Enum):
    """Overall system status derived from all probe results."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    ERROR = "error"

    @property
    def http_status(self) -> int:
        """Degraded is still operable, so it maps to 200."""
        if self in (OverallStatus.HEALTHY, OverallStatus.DEGRADED):
            return 200
        return 503

    @classmethod
    def aggregate(cls, statuses: Iterable[ProbeStatus]) -> "OverallStatus":
        """Reduce probe statuses to one overall status."""
        seen = set(statuses)
        if ProbeStatus.UNHEALTHY in seen:
            return cls.UNHEALTHY
        if seen & DEGRADING_STATUSES:
            return cls.DEGRADED
        return cls.HEALTHY


class DependencyKind(str, Enum):
    """Closed set of external dependencies the service probes."""
    DATABASE = "database"
    STORAGE = "storage"
    AI = "ai"
    EMAIL = "email"
    SECURITY = "security"


@dataclass(frozen=True)
class ProbeResult:
    """Result from a single dependency probe."""
    component: str
    status: ProbeStatus
    response_time_ms: Optional[float] = None
    message: Optional[str] = None
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    observed_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_exception(cls, component: str, e: BaseException) -> "ProbeResult":
        """Create unhealthy result from an exception raised inside a probe."""
        return cls(
            component=component,
            status=ProbeStatus.UNHEALTHY,
            error=str(e) or type(e).__name__,
            details={"exception_type": type(e).__name__},
        )

    def with_status(self, status: ProbeStatus) -> "ProbeResult":
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: Dict[str, Any] = {
            "component": self.component,
            "status": self.status.value,
            "observed_at": self.observed_at.isoformat(),
        }
        if self.response_time_ms is not None:
            result["response_time_ms"] = round(self.response_time_ms, 2)
        if self.message:
            result["message"] = self.message
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class AggregateHealth:
    """Aggregated result from every registered probe."""
    overall_status: OverallStatus
    services: Dict[str, ProbeResult]
    configuration: ConfigurationSnapshot = field(default_factory=ConfigurationSnapshot)
    version: Optional[str] = None
    environment: Optional[str] = None
    is_demo_mode: bool = False
    total_duration_ms: float = 0.0
    error: Optional[str] = None
    observed_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def build(
        cls,
        services: Dict[str, ProbeResult],
        config: ServiceConfig,
        configuration: ConfigurationSnapshot,
        total_duration_ms: float = 0.0,
    ) -> "AggregateHealth":
        """Derive the aggregate entirely from the probe results."""
        return cls(
            overall_status=OverallStatus.aggregate(r.status for r in services.values()),
            services=dict(services),
            configuration=configuration,
            version=config.app_version,
            environment=config.environment,
            is_demo_mode=config.is_demo_mode,
            total_duration_ms=total_duration_ms,
        )

    @classmethod
    def failed(cls, e: BaseException, version: str = None) -> "AggregateHealth":
        """Generic error object used when aggregation itself blew up."""
        return cls(
            overall_status=OverallStatus.ERROR,
            services={},
            version=version,
            error=str(e) or type(e).__name__,
        )

    @property
    def http_status(self) -> int:
        return self.overall_status.http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: Dict[str, Any] = {
            "overall_status": self.overall_status.value,
            "observed_at": self.observed_at.isoformat(),
            "version": self.version,
            "environment": self.environment,
        }
        if self.error:
            result["error"] = self.error
            return result

        result["services"] = {
            name: probe_result.to_dict()
            for name, probe_result in self.services.items()
        }
        result["is_demo_mode"] = self.is_demo_mode
        result["configuration"] = self.configuration.to_dict()
        result["total_duration_ms"] = round(self.total_duration_ms, 2)
        return result


class HealthProbe(ABC):
    """
    Base class for dependency probes.

    One subclass per DependencyKind. Subclasses implement probe() and must
    map every failure to a ProbeResult rather than raising; the executor
    still guards against exceptions that slip through.

    Attributes:
        kind: Dependency this probe covers (also its component name)
        timeout_seconds: Hard limit enforced by the executor
        latency_budget_ms: Successful checks slower than this are degraded
    """

    kind: DependencyKind
    timeout_seconds: float = 10.0
    latency_budget_ms: Optional[float] = None

    # Seconds; overridable per instance for deterministic latency in tests
    clock = staticmethod(time.perf_counter)

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    async def probe(
        self,
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        """
        Execute the probe.

        Args:
            config: Configuration snapshot for this invocation
            client: Shared HTTP client for live checks

        Returns:
            ProbeResult for this dependency
        """
        ...

    def classify_latency(self, elapsed_ms: float) -> ProbeStatus:
        """Healthy within budget (inclusive), degraded beyond it."""
        if self.latency_budget_ms is None or elapsed_ms <= self.latency_budget_ms:
            return ProbeStatus.HEALTHY
        return ProbeStatus.DEGRADED

    def result(self, status: ProbeStatus, **kwargs) -> ProbeResult:
        """Build a ProbeResult for this probe's component."""
        return ProbeResult(component=self.name, status=status, **kwargs)


__all__ = [
    "ProbeStatus",
    "OverallStatus",
    "DependencyKind",
    "ProbeResult",
    "AggregateHealth",
    "HealthProbe",
    "DEGRADING_STATUSES",
]
