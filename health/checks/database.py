# ============================================================================
# DATABASE HEALTH PROBES
# ============================================================================
# STATUS: Infrastructure - Hosted data store probes
# PURPOSE: Supabase REST connectivity and latency
# ============================================================================
"""
Database Health Probes

The primary data store is a hosted Supabase project reached over its REST
API. Probes send one small, bounded request and classify the outcome:

- URL or anon key missing  -> demo_mode (app still runs on sample data)
- transport error/timeout  -> unhealthy
- non-2xx response         -> unhealthy
- 2xx within 1000 ms       -> healthy
- 2xx slower than 1000 ms  -> degraded
"""

from typing import Any, Dict

import httpx

from core.config import ServiceConfig
from core.logging import get_logger
from health.core import (
    DependencyKind,
    HealthProbe,
    ProbeResult,
    ProbeStatus,
)
from health.registry import register_probe

logger = get_logger(__name__)


class SupabaseProbe(HealthProbe):
    """
    Shared request/classification logic for Supabase-backed probes.

    Subclasses set the REST path, query params and messages.
    """

    timeout_seconds = 6.0
    latency_budget_ms = 1000.0
    request_timeout = 5.0

    path: str = "/"
    params: Dict[str, str] = {}
    label: str = "Data store"
    success_message: str = "Data store reachable"
    unconfigured_message: str = "Supabase not configured"

    def __init__(self, use_service_key: bool = False):
        self.use_service_key = use_service_key

    def _api_key(self, config: ServiceConfig) -> str:
        if self.use_service_key and config.supabase_service_role_key:
            return config.supabase_service_role_key
        return config.supabase_anon_key

    def _config_details(self, config: ServiceConfig) -> Dict[str, Any]:
        return {
            "configured": config.has_data_store_config,
            "has_valid_url": config.has_secure_data_store_url,
            "has_key": bool(config.supabase_anon_key),
        }

    async def probe(
        self,
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        if not config.has_data_store_config:
            return self.result(
                ProbeStatus.DEMO_MODE,
                message=self.unconfigured_message,
                details=self._config_details(config),
            )

        url = f"{config.supabase_url.rstrip('/')}{self.path}"
        key = self._api_key(config)
        headers = {"apikey": key, "Authorization": f"Bearer {key}"}

        start = self.clock()
        try:
            response = await client.get(
                url,
                params=self.params,
                headers=headers,
                timeout=self.request_timeout,
            )
        except httpx.TimeoutException:
            logger.warning(f"{self.label} request timed out: {url}")
            return self.result(
                ProbeStatus.UNHEALTHY,
                error=f"{self.label} request timed out after {self.request_timeout}s",
            )
        except httpx.HTTPError as e:
            logger.warning(f"{self.label} request failed: {e}")
            return self.result(
                ProbeStatus.UNHEALTHY,
                error=f"{self.label} connection failed: {e}",
            )
        elapsed_ms = (self.clock() - start) * 1000

        if not response.is_success:
            return self.result(
                ProbeStatus.UNHEALTHY,
                response_time_ms=elapsed_ms,
                error=f"{self.label} returned {response.status_code}",
                details={"status_code": response.status_code},
            )

        return self.result(
            self.classify_latency(elapsed_ms),
            response_time_ms=elapsed_ms,
            message=self.success_message,
            details=self._config_details(config),
        )


@register_probe
class DatabaseProbe(SupabaseProbe):
    """
    Primary data store probe.

    Selects a single id from the projects table.
    """

    kind = DependencyKind.DATABASE
    path = "/rest/v1/projects"
    params = {"select": "id", "limit": "1"}
    label = "Database"
    success_message = "Database connection successful"
    unconfigured_message = "Supabase not configured - running in demo mode"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SupabaseProbe",
    "DatabaseProbe",
]
