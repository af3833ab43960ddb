# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration snapshot
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides the immutable ServiceConfig snapshot read from the environment.
"""

from core.config.settings import (
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
