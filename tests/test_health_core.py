# ============================================================================
# HEALTH CORE TESTS
# ============================================================================
# STATUS: Tests - Status reduction, results and registry
# PURPOSE: Verify overall status derivation and HTTP mapping
# ============================================================================
"""
Health Core Tests

Pure unit tests for health.core and health.registry. No network.

Run with:
    pytest tests/test_health_core.py -v
"""

import itertools

import pytest

from core.config import ConfigurationSnapshot, ServiceConfig
from health.core import (
    AggregateHealth,
    DependencyKind,
    HealthProbe,
    OverallStatus,
    ProbeResult,
    ProbeStatus,
)
from health.registry import ProbeRegistry


# ============================================================================
# HELPERS
# ============================================================================

class _StaticProbe(HealthProbe):
    """Probe returning a fixed status."""

    def __init__(self, kind, status=ProbeStatus.HEALTHY, budget=None):
        self.kind = kind
        self.status = status
        self.latency_budget_ms = budget

    async def probe(self, config, client):
        return self.result(self.status)


def _make_result(component="database", status=ProbeStatus.HEALTHY, **kwargs):
    return ProbeResult(component=component, status=status, **kwargs)


# ============================================================================
# OVERALL STATUS REDUCTION
# ============================================================================

class TestOverallStatusAggregate:
    """Tests for OverallStatus.aggregate."""

    def test_all_healthy(self):
        statuses = [ProbeStatus.HEALTHY] * 4
        assert OverallStatus.aggregate(statuses) == OverallStatus.HEALTHY

    def test_empty_is_healthy(self):
        assert OverallStatus.aggregate([]) == OverallStatus.HEALTHY

    def test_configured_does_not_degrade(self):
        statuses = [ProbeStatus.HEALTHY, ProbeStatus.CONFIGURED]
        assert OverallStatus.aggregate(statuses) == OverallStatus.HEALTHY

    @pytest.mark.parametrize("status", [
        ProbeStatus.DEGRADED,
        ProbeStatus.NOT_CONFIGURED,
        ProbeStatus.DEMO_MODE,
    ])
    def test_degrading_statuses(self, status):
        statuses = [ProbeStatus.HEALTHY, status, ProbeStatus.CONFIGURED]
        assert OverallStatus.aggregate(statuses) == OverallStatus.DEGRADED

    def test_unhealthy_wins_over_degraded(self):
        statuses = [ProbeStatus.DEMO_MODE, ProbeStatus.UNHEALTHY, ProbeStatus.DEGRADED]
        assert OverallStatus.aggregate(statuses) == OverallStatus.UNHEALTHY

    def test_order_independent(self):
        statuses = [
            ProbeStatus.HEALTHY,
            ProbeStatus.NOT_CONFIGURED,
            ProbeStatus.UNHEALTHY,
            ProbeStatus.CONFIGURED,
        ]
        outcomes = {
            OverallStatus.aggregate(perm)
            for perm in itertools.permutations(statuses)
        }
        assert outcomes == {OverallStatus.UNHEALTHY}

    def test_accepts_generator(self):
        gen = (s for s in [ProbeStatus.HEALTHY, ProbeStatus.DEGRADED])
        assert OverallStatus.aggregate(gen) == OverallStatus.DEGRADED


class TestHttpStatus:
    """Tests for the overall status to HTTP code mapping."""

    @pytest.mark.parametrize("status,code", [
        (OverallStatus.HEALTHY, 200),
        (OverallStatus.DEGRADED, 200),
        (OverallStatus.UNHEALTHY, 503),
        (OverallStatus.ERROR, 503),
    ])
    def test_mapping(self, status, code):
        assert status.http_status == code


# ============================================================================
# PROBE RESULT
# ============================================================================

class TestProbeResult:
    """Tests for the ProbeResult value object."""

    def test_to_dict_omits_empty_fields(self):
        data = _make_result().to_dict()
        assert data["component"] == "database"
        assert data["status"] == "healthy"
        assert "observed_at" in data
        assert "response_time_ms" not in data
        assert "error" not in data
        assert "details" not in data

    def test_to_dict_rounds_response_time(self):
        data = _make_result(response_time_ms=12.3456).to_dict()
        assert data["response_time_ms"] == 12.35

    def test_from_exception(self):
        result = ProbeResult.from_exception("storage", RuntimeError("boom"))
        assert result.status == ProbeStatus.UNHEALTHY
        assert result.error == "boom"
        assert result.details["exception_type"] == "RuntimeError"

    def test_from_exception_without_message(self):
        result = ProbeResult.from_exception("ai", KeyError())
        assert result.error == "KeyError"

    def test_with_status_returns_copy(self):
        original = _make_result(message="ok")
        changed = original.with_status(ProbeStatus.DEGRADED)
        assert changed.status == ProbeStatus.DEGRADED
        assert changed.message == "ok"
        assert original.status == ProbeStatus.HEALTHY


# ============================================================================
# AGGREGATE HEALTH
# ============================================================================

class TestAggregateHealth:
    """Tests for AggregateHealth.build / failed / to_dict."""

    def test_build_derives_status_from_results(self):
        services = {
            "database": _make_result("database", ProbeStatus.HEALTHY),
            "ai": _make_result("ai", ProbeStatus.NOT_CONFIGURED),
        }
        config = ServiceConfig(environment="production")
        health = AggregateHealth.build(services, config, ConfigurationSnapshot())

        assert health.overall_status == OverallStatus.DEGRADED
        assert health.http_status == 200
        assert health.environment == "production"
        assert health.is_demo_mode is True

    def test_to_dict_shape(self):
        services = {"email": _make_result("email", ProbeStatus.HEALTHY)}
        snapshot = ConfigurationSnapshot(warnings=["w"], errors=[])
        health = AggregateHealth.build(services, ServiceConfig(), snapshot, 42.0)

        data = health.to_dict()
        assert data["overall_status"] == "healthy"
        assert data["services"]["email"]["status"] == "healthy"
        assert data["configuration"]["warnings"] == ["w"]
        assert data["total_duration_ms"] == 42.0
        assert "error" not in data

    def test_failed(self):
        health = AggregateHealth.failed(ValueError("bad config"), version="1.0.0")
        assert health.overall_status == OverallStatus.ERROR
        assert health.http_status == 503

        data = health.to_dict()
        assert data["error"] == "bad config"
        assert data["version"] == "1.0.0"
        assert "services" not in data


# ============================================================================
# LATENCY CLASSIFICATION
# ============================================================================

class TestClassifyLatency:
    """Tests for HealthProbe.classify_latency."""

    def test_no_budget_always_healthy(self):
        probe = _StaticProbe(DependencyKind.EMAIL)
        assert probe.classify_latency(99999) == ProbeStatus.HEALTHY

    def test_budget_is_inclusive(self):
        probe = _StaticProbe(DependencyKind.DATABASE, budget=1000.0)
        assert probe.classify_latency(1000.0) == ProbeStatus.HEALTHY
        assert probe.classify_latency(1000.1) == ProbeStatus.DEGRADED


# ============================================================================
# REGISTRY
# ============================================================================

class TestProbeRegistry:
    """Tests for ProbeRegistry."""

    def test_one_probe_per_kind(self):
        registry = ProbeRegistry()
        registry.register(_StaticProbe(DependencyKind.AI, ProbeStatus.HEALTHY))
        registry.register(_StaticProbe(DependencyKind.AI, ProbeStatus.DEGRADED))

        assert len(registry) == 1
        assert registry.get(DependencyKind.AI).status == ProbeStatus.DEGRADED

    def test_get_all_in_kind_order(self):
        registry = ProbeRegistry([
            _StaticProbe(DependencyKind.SECURITY),
            _StaticProbe(DependencyKind.DATABASE),
            _StaticProbe(DependencyKind.AI),
        ])
        names = [p.name for p in registry.get_all()]
        assert names == ["database", "ai", "security"]

    def test_get_by_string(self):
        registry = ProbeRegistry([_StaticProbe(DependencyKind.STORAGE)])
        assert registry.get("storage") is not None
        assert "storage" in registry
        assert registry.get("queue") is None
        assert "queue" not in registry

    def test_unregister(self):
        registry = ProbeRegistry([_StaticProbe(DependencyKind.EMAIL)])
        assert registry.unregister(DependencyKind.EMAIL) is True
        assert registry.unregister(DependencyKind.EMAIL) is False
        assert len(registry) == 0

    def test_global_registry_has_every_kind(self):
        import health.checks  # noqa: F401
        from health.registry import get_registry

        registry = get_registry()
        assert {p.kind for p in registry.get_all()} == set(DependencyKind)
