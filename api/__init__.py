# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for deployment readiness
# ============================================================================
"""
API Module

FastAPI routes for the compliance operations service. Health endpoints
live in the health package; this module carries the deployment API.
"""

from .deployment_routes import router, set_deployment_services
from .schemas import (
    DeploymentActionRequest,
    DeploymentActionResponse,
    DeploymentStatusResponse,
)

__all__ = [
    "router",
    "set_deployment_services",
    "DeploymentActionRequest",
    "DeploymentActionResponse",
    "DeploymentStatusResponse",
]
