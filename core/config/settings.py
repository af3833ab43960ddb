# ============================================================================
# SERVICE CONFIGURATION
# ============================================================================
# STATUS: Core - Environment-based configuration snapshot
# PURPOSE: Immutable configuration passed into every probe and check
# ============================================================================
"""
Service Configuration

Loads configuration from environment variables into an immutable snapshot.
A fresh snapshot is built per request (or per CLI run) and handed explicitly
to each health probe and prerequisite check; nothing reads os.environ
behind the caller's back.

Variable precedence mirrors the deployed app, which historically set both
the server-side and the NEXT_PUBLIC_* browser names:
- SUPABASE_URL, then NEXT_PUBLIC_SUPABASE_URL
- SUPABASE_ANON_KEY, then NEXT_PUBLIC_SUPABASE_ANON_KEY
- DATABASE_URL, then POSTGRES_URL
"""

import os
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from __version__ import APP_NAME, __version__

DEFAULT_AI_MODELS_URL = "https://api.openai.com/v1/models"
DEFAULT_SMTP_PORT = 587


class ConfigurationError(Exception):
    """Raised when a setting is present but cannot be interpreted."""

    def __init__(self, message: str, setting: str = None, value: Any = None):
        self.setting = setting
        self.value = value
        super().__init__(message)


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """Warnings and errors found while validating configuration."""
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self):
        return {
            "is_valid": self.is_valid,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration snapshot for the compliance operations service."""

    # App info
    app_name: str = APP_NAME
    app_version: str = __version__
    environment: str = "development"

    # Hosted data store (Supabase)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    database_url: str = ""

    # AI text-generation provider
    openai_api_key: str = ""
    ai_models_url: str = DEFAULT_AI_MODELS_URL

    # Outbound email
    smtp_host: str = ""
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_user: str = ""
    smtp_password: str = ""
    from_email: str = ""

    # SMS
    twilio_account_sid: str = ""

    # Security
    jwt_secret: str = ""
    encryption_key: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """
        Load configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If SMTP_PORT is not an integer
        """
        env = os.environ if environ is None else environ

        raw_port = env.get("SMTP_PORT") or str(DEFAULT_SMTP_PORT)
        try:
            smtp_port = int(raw_port)
        except ValueError:
            raise ConfigurationError(
                f"SMTP_PORT must be an integer, got {raw_port!r}",
                setting="SMTP_PORT",
                value=raw_port,
            )

        return cls(
            environment=env.get("APP_ENV") or env.get("NODE_ENV") or "development",
            supabase_url=env.get("SUPABASE_URL") or env.get("NEXT_PUBLIC_SUPABASE_URL", ""),
            supabase_anon_key=(
                env.get("SUPABASE_ANON_KEY") or env.get("NEXT_PUBLIC_SUPABASE_ANON_KEY", "")
            ),
            supabase_service_role_key=env.get("SUPABASE_SERVICE_ROLE_KEY", ""),
            database_url=env.get("DATABASE_URL") or env.get("POSTGRES_URL", ""),
            openai_api_key=env.get("OPENAI_API_KEY", ""),
            ai_models_url=env.get("OPENAI_MODELS_URL") or DEFAULT_AI_MODELS_URL,
            smtp_host=env.get("SMTP_HOST", ""),
            smtp_port=smtp_port,
            smtp_user=env.get("SMTP_USER", ""),
            smtp_password=env.get("SMTP_PASSWORD", ""),
            from_email=env.get("FROM_EMAIL", ""),
            twilio_account_sid=env.get("TWILIO_ACCOUNT_SID", ""),
            jwt_secret=env.get("JWT_SECRET", ""),
            encryption_key=env.get("ENCRYPTION_KEY", ""),
        )

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @property
    def has_data_store_config(self) -> bool:
        """Data store is usable only with both URL and anon key."""
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def has_secure_data_store_url(self) -> bool:
        return self.supabase_url.startswith("https://")

    @property
    def has_ai_config(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def has_email_config(self) -> bool:
        return bool(self.smtp_host)

    @property
    def has_sms_config(self) -> bool:
        return bool(self.twilio_account_sid)

    @property
    def has_security_keys(self) -> bool:
        return bool(self.jwt_secret and self.encryption_key)

    @property
    def is_demo_mode(self) -> bool:
        """Demo mode: the app falls back to sample data."""
        return not (self.database_url and self.supabase_url and self.supabase_anon_key)

    def validate(self) -> ConfigurationSnapshot:
        """Collect configuration warnings and errors (never raises)."""
        warnings: List[str] = []
        errors: List[str] = []

        if not self.database_url:
            warnings.append("DATABASE_URL or POSTGRES_URL not configured")
        if not self.supabase_url:
            warnings.append("SUPABASE_URL not configured")
        elif not self.has_secure_data_store_url:
            errors.append("SUPABASE_URL must be an https:// endpoint")
        if not self.supabase_anon_key:
            warnings.append("SUPABASE_ANON_KEY not configured")
        if not self.openai_api_key:
            warnings.append("OPENAI_API_KEY not configured - AI features will be disabled")

        return ConfigurationSnapshot(warnings=warnings, errors=errors)


def load_config() -> ServiceConfig:
    """Build a fresh configuration snapshot from the process environment."""
    return ServiceConfig.from_env()


__all__ = [
    "ConfigurationError",
    "ConfigurationSnapshot",
    "ServiceConfig",
    "load_config",
    "DEFAULT_AI_MODELS_URL",
]
