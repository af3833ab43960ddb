# ============================================================================
# DEPLOYMENT STATUS ROUTES
# ============================================================================
# STATUS: Core - Deployment readiness HTTP endpoints
# PURPOSE: Expose the environment prerequisite verdict over HTTP
# ============================================================================
"""
Deployment Status Routes

Endpoints:
- GET  /deployment/status - Run environment prerequisites, report can_deploy
- POST /deployment/status - Run an action; body {"action": "check-prerequisites"}

Any other action, a missing action or an unreadable body returns 400.
A validator failure returns 500 with can_deploy false.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.schemas import (
    CHECK_PREREQUISITES_ACTION,
    DeploymentActionRequest,
    DeploymentActionResponse,
    DeploymentErrorResponse,
    DeploymentStatusResponse,
)
from core.logging import ComponentType, get_logger
from services import (
    DeploymentContext,
    EnvironmentPrerequisiteValidator,
    PrerequisiteReport,
    PrerequisiteValidator,
)

logger = get_logger(__name__, ComponentType.DEPLOYMENT)

router = APIRouter(prefix="/deployment", tags=["Deployment"])


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_validator: Optional[PrerequisiteValidator] = None
_context_provider: Optional[Callable[[], DeploymentContext]] = None


def set_deployment_services(
    validator: Optional[PrerequisiteValidator] = None,
    context_provider: Optional[Callable[[], DeploymentContext]] = None,
) -> None:
    """Called by main.py at startup (and by tests) to inject collaborators."""
    global _validator, _context_provider
    _validator = validator
    _context_provider = context_provider


def _get_validator() -> PrerequisiteValidator:
    global _validator
    if _validator is None:
        _validator = EnvironmentPrerequisiteValidator()
    return _validator


def _run_prerequisites() -> PrerequisiteReport:
    """Build a fresh context for this request and run the checklist."""
    provider = _context_provider or DeploymentContext.from_env
    return _get_validator().validate(provider())


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_response(status_code: int, error: str, can_deploy: Optional[bool] = None) -> JSONResponse:
    body = DeploymentErrorResponse(
        error=error,
        can_deploy=can_deploy,
        timestamp=_timestamp() if can_deploy is not None else None,
    )
    return JSONResponse(status_code=status_code, content=body.to_content())


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/status", response_model=DeploymentStatusResponse)
async def get_deployment_status():
    """
    Deployment readiness.

    Always runs the environment checklist; nothing is cached between calls.
    """
    try:
        report = _run_prerequisites()
    except Exception as e:
        logger.error(f"Deployment status check failed: {e}", exc_info=True)
        return _error_response(500, "Failed to check deployment prerequisites", can_deploy=False)

    return DeploymentStatusResponse(
        success=True,
        can_deploy=report.passed,
        prerequisites=report.to_dict(),
        timestamp=_timestamp(),
    )


@router.post("/status", response_model=DeploymentActionResponse)
async def run_deployment_action(request: Request):
    """
    Run a deployment action.

    Only 'check-prerequisites' is supported.
    """
    try:
        payload = await request.json()
        action_request = DeploymentActionRequest.model_validate(payload)
    except ValueError:
        return _error_response(400, "Invalid action")

    if action_request.action != CHECK_PREREQUISITES_ACTION:
        logger.info(f"Rejected deployment action: {action_request.action!r}")
        return _error_response(400, "Invalid action")

    try:
        report = _run_prerequisites()
    except Exception as e:
        logger.error(f"Deployment action {action_request.action} failed: {e}", exc_info=True)
        return _error_response(500, "Failed to check deployment prerequisites", can_deploy=False)

    return DeploymentActionResponse(
        success=True,
        result=report.to_dict(),
        can_deploy=report.passed,
        timestamp=_timestamp(),
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "router",
    "set_deployment_services",
]
