# ============================================================================
# INFRASTRUCTURE HEALTH PROBES
# ============================================================================
# STATUS: Infrastructure - Object storage probe
# PURPOSE: Supabase Storage connectivity and latency
# ============================================================================
"""
Infrastructure Health Probes

- StorageProbe: lists Supabase Storage buckets (same budget as the database)
"""

from health.checks.database import SupabaseProbe
from health.core import DependencyKind
from health.registry import register_probe


@register_probe
class StorageProbe(SupabaseProbe):
    """Supabase Storage probe; bucket listing needs the service key when set."""

    kind = DependencyKind.STORAGE
    path = "/storage/v1/bucket"
    label = "Storage"
    success_message = "Storage service accessible"
    unconfigured_message = "Storage not configured - Supabase required"

    def __init__(self, use_service_key: bool = True):
        super().__init__(use_service_key=use_service_key)


__all__ = [
    "StorageProbe",
]
