# ============================================================================
# CONFIGURATION HEALTH PROBES
# ============================================================================
# STATUS: Infrastructure - Configuration-only probes
# PURPOSE: Email and security-key readiness (no live calls)
# ============================================================================
"""
Configuration Health Probes

Dependencies that are only checked for presence of their settings:
- EmailProbe: SMTP host configured
- SecurityKeysProbe: JWT signing secret and encryption key configured
"""

import httpx

from core.config import ServiceConfig
from health.core import (
    DependencyKind,
    HealthProbe,
    ProbeResult,
    ProbeStatus,
)
from health.registry import register_probe


@register_probe
class EmailProbe(HealthProbe):
    """Outbound email probe. Configured host counts as healthy."""

    kind = DependencyKind.EMAIL
    timeout_seconds = 1.0

    async def probe(
        self,
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        details = {
            "smtp_host": bool(config.smtp_host),
            "credentials": bool(config.smtp_user and config.smtp_password),
        }
        if config.has_email_config:
            return self.result(
                ProbeStatus.HEALTHY,
                message="Email service configured",
                details=details,
            )
        return self.result(
            ProbeStatus.NOT_CONFIGURED,
            message="Email service not configured",
            details=details,
        )


@register_probe
class SecurityKeysProbe(HealthProbe):
    """Signing secret and encryption key presence."""

    kind = DependencyKind.SECURITY
    timeout_seconds = 1.0

    async def probe(
        self,
        config: ServiceConfig,
        client: httpx.AsyncClient,
    ) -> ProbeResult:
        details = {
            "jwt_secret": bool(config.jwt_secret),
            "encryption_key": bool(config.encryption_key),
        }
        if config.has_security_keys:
            return self.result(
                ProbeStatus.CONFIGURED,
                message="Security keys configured",
                details=details,
            )

        missing = [
            name for name, present in (
                ("JWT_SECRET", details["jwt_secret"]),
                ("ENCRYPTION_KEY", details["encryption_key"]),
            )
            if not present
        ]
        return self.result(
            ProbeStatus.NOT_CONFIGURED,
            message=f"Missing security keys: {', '.join(missing)}",
            details=details,
        )


__all__ = [
    "EmailProbe",
    "SecurityKeysProbe",
]
