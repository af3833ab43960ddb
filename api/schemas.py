# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Core - Request/Response schemas
# PURPOSE: Pydantic models for the deployment status API
# ============================================================================
"""
API Schemas

Request and response models for the deployment status endpoints.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


CHECK_PREREQUISITES_ACTION = "check-prerequisites"


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class DeploymentActionRequest(BaseModel):
    """Request to run a deployment action."""
    action: Optional[str] = Field(
        None,
        max_length=64,
        description="Action to run. Only 'check-prerequisites' is supported",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"action": CHECK_PREREQUISITES_ACTION}
            ]
        }
    }


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class PrerequisiteSummaryResponse(BaseModel):
    """Check counts for a prerequisite run."""
    total: int
    passed: int
    errors: int
    warnings: int


class PrerequisiteCheckResponse(BaseModel):
    """One evaluated prerequisite."""
    name: str
    passed: bool
    severity: str
    message: str


class PrerequisiteReportResponse(BaseModel):
    """Verdict of a prerequisite run."""
    passed: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    summary: PrerequisiteSummaryResponse
    checks: List[PrerequisiteCheckResponse] = Field(default_factory=list)


class DeploymentStatusResponse(BaseModel):
    """GET /deployment/status response."""
    success: bool
    can_deploy: bool
    prerequisites: PrerequisiteReportResponse
    timestamp: str


class DeploymentActionResponse(BaseModel):
    """POST /deployment/status response."""
    success: bool
    result: PrerequisiteReportResponse
    can_deploy: bool
    timestamp: str


class DeploymentErrorResponse(BaseModel):
    """Error body shared by the deployment endpoints."""
    success: bool = False
    error: str
    can_deploy: Optional[bool] = None
    timestamp: Optional[str] = None

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
