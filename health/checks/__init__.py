# ============================================================================
# HEALTH PROBE PLUGINS
# ============================================================================
# STATUS: Infrastructure - Dependency probe implementations
# PURPOSE: One probe per dependency kind
# ============================================================================
"""
Health Probe Plugins

Concrete probes, one per DependencyKind:

- database: Supabase REST query (demo_mode when unconfigured)
- storage:  Supabase Storage bucket listing (demo_mode when unconfigured)
- ai:       AI provider model listing (not_configured without a key)
- email:    SMTP host configured
- security: JWT secret and encryption key configured

Import this module to register all probes:
    import health.checks
"""

from health.checks.database import SupabaseProbe, DatabaseProbe
from health.checks.infrastructure import StorageProbe
from health.checks.external import AIProviderProbe
from health.checks.configuration import EmailProbe, SecurityKeysProbe

__all__ = [
    "SupabaseProbe",
    "DatabaseProbe",
    "StorageProbe",
    "AIProviderProbe",
    "EmailProbe",
    "SecurityKeysProbe",
]
