# ============================================================================
# HEALTH PROBE REGISTRY
# ============================================================================
# STATUS: Infrastructure - Probe registration
# PURPOSE: Register and discover dependency probes
# ============================================================================
"""
Health Probe Registry

Holds exactly one probe per DependencyKind. Probes are stateless; the
configuration they need is passed in at invocation time.

Usage:
    # Decorator registration
    @register_probe
    class DatabaseProbe(HealthProbe):
        kind = DependencyKind.DATABASE
        ...

    # Manual registration (tests)
    registry = ProbeRegistry()
    registry.register(DatabaseProbe())
"""

import logging
from typing import Dict, List, Optional, Type

from health.core import DependencyKind, HealthProbe

logger = logging.getLogger(__name__)


class ProbeRegistry:
    """Registry of dependency probes keyed by kind."""

    def __init__(self, probes: Optional[List[HealthProbe]] = None):
        self._probes: Dict[DependencyKind, HealthProbe] = {}
        for probe in probes or []:
            self.register(probe)

    def register(self, probe: HealthProbe) -> None:
        """
        Register a probe instance, replacing any probe of the same kind.

        Args:
            probe: Probe instance to register
        """
        if probe.kind in self._probes:
            logger.warning(f"Overwriting health probe: {probe.name}")

        self._probes[probe.kind] = probe
        logger.debug(
            f"Registered health probe: {probe.name} "
            f"(timeout={probe.timeout_seconds}s, budget={probe.latency_budget_ms}ms)"
        )

    def register_class(self, probe_class: Type[HealthProbe], **kwargs) -> HealthProbe:
        """Instantiate and register a probe class."""
        instance = probe_class(**kwargs)
        self.register(instance)
        return instance

    def unregister(self, kind: DependencyKind) -> bool:
        """
        Remove a probe by kind.

        Returns:
            True if probe was removed
        """
        return self._probes.pop(DependencyKind(kind), None) is not None

    def get(self, kind: DependencyKind) -> Optional[HealthProbe]:
        """Get probe by kind (enum or its string value)."""
        try:
            return self._probes.get(DependencyKind(kind))
        except ValueError:
            return None

    def get_all(self) -> List[HealthProbe]:
        """All probes in DependencyKind declaration order."""
        return [self._probes[k] for k in DependencyKind if k in self._probes]

    def clear(self) -> None:
        self._probes.clear()

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, kind) -> bool:
        return self.get(kind) is not None


# ============================================================================
# GLOBAL REGISTRY & DECORATOR
# ============================================================================

_registry: Optional[ProbeRegistry] = None


def get_registry() -> ProbeRegistry:
    """Get the global probe registry (populated by importing health.checks)."""
    global _registry
    if _registry is None:
        _registry = ProbeRegistry()
    return _registry


def register_probe(cls: Type[HealthProbe]) -> Type[HealthProbe]:
    """
    Decorator to register a probe class with the global registry.

    Example:
        @register_probe
        class EmailProbe(HealthProbe):
            kind = DependencyKind.EMAIL
    """
    get_registry().register_class(cls)
    return cls


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeRegistry",
    "get_registry",
    "register_probe",
]
