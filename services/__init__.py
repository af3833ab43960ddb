# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Deployment validation layer
# PURPOSE: Deployment prerequisite checks and validators
# ============================================================================
"""
Services Module

Usage:
    from services import DeploymentContext, get_prerequisite_validator

    validator = get_prerequisite_validator("environment")
    report = validator.validate(DeploymentContext.from_env())
"""

from .preflight_checks import (
    CheckSeverity,
    DeploymentContext,
    Prerequisite,
    PrerequisiteCheck,
)
from .preflight import (
    PrerequisiteReport,
    PrerequisiteSummary,
    PrerequisiteValidator,
    EnvironmentPrerequisiteValidator,
    WorkstationPrerequisiteValidator,
    get_prerequisite_validator,
)

__all__ = [
    "CheckSeverity",
    "DeploymentContext",
    "Prerequisite",
    "PrerequisiteCheck",
    "PrerequisiteReport",
    "PrerequisiteSummary",
    "PrerequisiteValidator",
    "EnvironmentPrerequisiteValidator",
    "WorkstationPrerequisiteValidator",
    "get_prerequisite_validator",
]
