# ============================================================================
# HEALTH AGGREGATOR
# ============================================================================
# STATUS: Infrastructure - Concurrent probe execution
# PURPOSE: Run every probe with timeouts and reduce to one verdict
# ============================================================================
"""
Health Aggregator

Executes dependency probes with:
- Concurrent execution (probes share no mutable state)
- Per-probe timeouts
- A shared overall deadline
- Reduction to one overall status (see health.core.OverallStatus)

Failure containment:
- A probe that raises or times out becomes an unhealthy ProbeResult for
  its own component; the other probes still report.
- If the aggregation itself fails (for example the configuration snapshot
  cannot be built) the caller still gets an AggregateHealth, with status
  "error".
"""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import Callable, Dict, List, Optional

import httpx

from __version__ import __version__
from core.config import ServiceConfig, load_config
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from health.core import (
    AggregateHealth,
    DependencyKind,
    HealthProbe,
    ProbeResult,
    ProbeStatus,
)
from health.registry import ProbeRegistry, get_registry

logger = get_logger(__name__, ComponentType.HEALTH)

# Default client timeout; probes pass tighter per-request timeouts
DEFAULT_HTTP_TIMEOUT = 10.0


class HealthAggregator:
    """
    Runs all registered probes for one request and reduces the results.

    Attributes:
        registry: Probe registry (global registry if None)
        overall_timeout: Shared deadline for the whole probe fan-out
        config_loader: Builds a fresh ServiceConfig when none is passed
    """

    def __init__(
        self,
        registry: Optional[ProbeRegistry] = None,
        overall_timeout: float = 15.0,
        config_loader: Callable[[], ServiceConfig] = load_config,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize aggregator.

        Args:
            registry: Probe registry (uses global if None)
            overall_timeout: Max total execution time in seconds
            config_loader: Configuration snapshot factory
            client: Optional shared HTTP client (not closed by the aggregator)
        """
        self.registry = registry if registry is not None else get_registry()
        self.overall_timeout = overall_timeout
        self.config_loader = config_loader
        self._client = client

    @asynccontextmanager
    async def _http_client(self):
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=DEFAULT_HTTP_TIMEOUT) as client:
            yield client

    async def aggregate(self, config: Optional[ServiceConfig] = None) -> AggregateHealth:
        """
        Execute every registered probe and build the aggregate.

        Args:
            config: Configuration snapshot (loaded via config_loader if None)

        Returns:
            AggregateHealth; status "error" if aggregation itself failed
        """
        start_time = time.monotonic()

        try:
            if config is None:
                config = self.config_loader()
            configuration = config.validate()

            async with self._http_client() as client:
                services = await self._execute_all(self.registry.get_all(), config, client)

            total_duration_ms = (time.monotonic() - start_time) * 1000
            health = AggregateHealth.build(
                services=services,
                config=config,
                configuration=configuration,
                total_duration_ms=total_duration_ms,
            )

        except Exception as e:
            logger.exception(f"Health aggregation failed: {e}")
            return AggregateHealth.failed(e, version=__version__)

        log_checkpoint(
            "health_aggregated",
            {
                "overall_status": health.overall_status.value,
                "statuses": {name: r.status.value for name, r in services.items()},
                "total_duration_ms": round(total_duration_ms, 2),
            },
        )
        return health

    async def run_single(
        self,
        kind: DependencyKind,
        config: Optional[ServiceConfig] = None,
    ) -> Optional[ProbeResult]:
        """
        Execute a single probe by kind.

        Returns:
            ProbeResult, or None if no probe is registered for the kind.
            A configuration failure yields a result with status "error".
        """
        probe = self.registry.get(kind)
        if probe is None:
            return None
        return await self.run_probe(probe, config)

    async def run_probe(
        self,
        probe: HealthProbe,
        config: Optional[ServiceConfig] = None,
    ) -> ProbeResult:
        """Execute one probe instance, registered or not."""
        try:
            if config is None:
                config = self.config_loader()
        except Exception as e:
            logger.error(f"Cannot build configuration for {probe.name} probe: {e}")
            return probe.result(ProbeStatus.ERROR, error=str(e))

        async with self._http_client() as client:
            return await self._execute_probe(probe, config, client)

    async def _execute_all(
        self,
        probes: List[HealthProbe],
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> Dict[str, ProbeResult]:
        """Execute probes concurrently under the overall deadline."""
        if not probes:
            return {}

        tasks = {
            asyncio.create_task(self._execute_probe(probe, config, client)): probe
            for probe in probes
        }

        done, pending = await asyncio.wait(
            tasks.keys(),
            timeout=self.overall_timeout,
            return_when=asyncio.ALL_COMPLETED,
        )

        for task in pending:
            task.cancel()

        results: Dict[str, ProbeResult] = {}
        for task, probe in tasks.items():
            if task in pending:
                logger.warning(
                    f"Health probe {probe.name} exceeded overall deadline "
                    f"({self.overall_timeout}s)"
                )
                results[probe.name] = probe.result(
                    ProbeStatus.UNHEALTHY,
                    error=f"Skipped: overall timeout of {self.overall_timeout}s exceeded",
                )
                continue
            try:
                results[probe.name] = task.result()
            except Exception as e:
                logger.error(f"Error collecting health probe {probe.name}: {e}")
                results[probe.name] = ProbeResult.from_exception(probe.name, e)

        # Report in registry order regardless of completion order
        return {probe.name: results[probe.name] for probe in probes}

    async def _execute_probe(
        self,
        probe: HealthProbe,
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        """Execute a single probe with its own timeout; never raises."""
        start_time = time.monotonic()

        with log_context(probe=probe.name):
            try:
                result = await asyncio.wait_for(
                    probe.probe(config, client),
                    timeout=probe.timeout_seconds,
                )
                logger.debug(
                    f"Health probe {probe.name}: {result.status.value} "
                    f"({(time.monotonic() - start_time) * 1000:.1f}ms)"
                )
                return result

            except asyncio.TimeoutError:
                logger.warning(
                    f"Health probe {probe.name} timed out after {probe.timeout_seconds}s"
                )
                return probe.result(
                    ProbeStatus.UNHEALTHY,
                    response_time_ms=(time.monotonic() - start_time) * 1000,
                    error=f"Timeout after {probe.timeout_seconds}s",
                )

            except Exception as e:
                logger.error(f"Health probe {probe.name} failed: {e}")
                return ProbeResult.from_exception(probe.name, e)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthAggregator",
    "DEFAULT_HTTP_TIMEOUT",
]
