# ============================================================================
# EXTERNAL SERVICE HEALTH PROBES
# ============================================================================
# STATUS: Infrastructure - Third-party provider probes
# PURPOSE: AI text-generation provider reachability
# ============================================================================
"""
External Service Health Probes

AIProviderProbe lists the provider's models with the configured key. The
request carries a 5 second timeout so a slow provider cannot hold up the
rest of the health report.
"""

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


@register_probe
class AIProviderProbe(HealthProbe):
    """
    AI provider health probe.

    Status logic:
    - NOT_CONFIGURED: no API key
    - UNHEALTHY: timeout, transport error or non-2xx
    - DEGRADED: reachable but slower than 2000 ms
    - HEALTHY: reachable within 2000 ms
    """

    kind = DependencyKind.AI
    timeout_seconds = 6.0
    latency_budget_ms = 2000.0
    request_timeout = 5.0

    async def probe(
        self,
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        if not config.has_ai_config:
            return self.result(
                ProbeStatus.NOT_CONFIGURED,
                message="OpenAI API key not configured",
                details={"configured": False},
            )

        start = self.clock()
        try:
            response = await client.get(
                config.ai_models_url,
                headers={"Authorization": f"Bearer {config.openai_api_key}"},
                timeout=self.request_timeout,
            )
        except httpx.TimeoutException:
            logger.warning("AI provider request timed out")
            return self.result(
                ProbeStatus.UNHEALTHY,
                error=f"AI service timed out after {self.request_timeout}s",
            )
        except httpx.HTTPError as e:
            logger.warning(f"AI provider request failed: {e}")
            return self.result(
                ProbeStatus.UNHEALTHY,
                error=f"AI service unavailable: {e}",
            )
        elapsed_ms = (self.clock() - start) * 1000

        if not response.is_success:
            return self.result(
                ProbeStatus.UNHEALTHY,
                response_time_ms=elapsed_ms,
                error=f"AI service returned {response.status_code}",
                details={"status_code": response.status_code},
            )

        return self.result(
            self.classify_latency(elapsed_ms),
            response_time_ms=elapsed_ms,
            message="AI service accessible",
            details={"configured": True},
        )


__all__ = [
    "AIProviderProbe",
]
