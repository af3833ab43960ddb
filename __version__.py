# ============================================================================
# VERSION - SECTION 3 COMPLIANCE OPERATIONS
# ============================================================================
"""
Version information for the Section 3 compliance operations service.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-19"

APP_NAME = "Section 3 Compliance System"
SERVICE_NAME = "section3-ops"
