# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export configuration and logging utilities
# ============================================================================

from core.config import (
    ConfigurationError,
    ConfigurationSnapshot,
    ServiceConfig,
    load_config,
)

__all__ = [
    "ConfigurationError",
    "ConfigurationSnapshot",
    "ServiceConfig",
    "load_config",
]
