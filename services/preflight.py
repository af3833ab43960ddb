# ============================================================================
# DEPLOYMENT PRE-FLIGHT VALIDATION
# ============================================================================
# STATUS: Service - Deployment prerequisite validation
# PURPOSE: Go/no-go verdict for a deployment from a static checklist
# ============================================================================
"""
Deployment Pre-flight Validation

Two invocation contexts, each with a fixed checklist:
  environment: settings only. Served by GET/POST /deployment/status.
  workstation: settings plus env files, project manifest, deployment CLI,
               git state and disk space. Run by scripts/check_prerequisites.py.

Design:
  - Every check runs; none aborts the run (collect ALL problems at once).
  - passed = no error-severity check failed. Warnings never block.
  - summary.total is the number of checks registered for the context, so
    it is fixed per context and never depends on what happened at runtime.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, List, Optional, Type

from core.logging import ComponentType, get_logger, log_checkpoint
from services.preflight_checks import (
    ENVIRONMENT_CHECKS,
    WORKSTATION_CHECKS,
    CheckSeverity,
    DeploymentContext,
    Prerequisite,
    PrerequisiteCheck,
)

logger = get_logger(__name__, ComponentType.DEPLOYMENT)


# ============================================================================
# REPORT
# ============================================================================

@dataclass(frozen=True)
class PrerequisiteSummary:
    """Counts shown alongside the verdict."""
    total: int
    passed: int
    errors: int
    warnings: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def _distinct(messages: Iterable[str]) -> List[str]:
    """Drop repeated messages, keeping first-seen order."""
    return list(dict.fromkeys(messages))


@dataclass(frozen=True)
class PrerequisiteReport:
    """
    Result of a prerequisite run.

    Collects all errors rather than failing on the first, so the caller
    can fix everything in one pass.
    """
    passed: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    summary: PrerequisiteSummary = field(
        default_factory=lambda: PrerequisiteSummary(0, 0, 0, 0)
    )
    checks: List[PrerequisiteCheck] = field(default_factory=list)

    @classmethod
    def from_checks(cls, checks: List[PrerequisiteCheck]) -> "PrerequisiteReport":
        """Fold individual check outcomes into a report."""
        errors = _distinct(
            c.message for c in checks
            if not c.passed and c.severity == CheckSeverity.ERROR
        )
        warnings = _distinct(
            c.message for c in checks
            if not c.passed and c.severity == CheckSeverity.WARNING
        )
        return cls(
            passed=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            summary=PrerequisiteSummary(
                total=len(checks),
                passed=sum(1 for c in checks if c.passed),
                errors=len(errors),
                warnings=len(warnings),
            ),
            checks=list(checks),
        )

    @classmethod
    def failed(cls, message: str, total: int = 0) -> "PrerequisiteReport":
        """Report used when the run itself could not complete."""
        return cls(
            passed=False,
            errors=[message],
            summary=PrerequisiteSummary(total=total, passed=0, errors=1, warnings=0),
        )

    def to_dict(self) -> Dict:
        return {
            "passed": self.passed,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "summary": self.summary.to_dict(),
            "checks": [c.to_dict() for c in self.checks],
        }


# ============================================================================
# VALIDATORS
# ============================================================================

class PrerequisiteValidator:
    """
    Runs a static checklist against a DeploymentContext.

    Subclasses declare CHECKS; order only affects report ordering.
    """

    CHECKS: ClassVar[List[Prerequisite]] = []
    context_name: ClassVar[str] = "base"

    @property
    def total_checks(self) -> int:
        return len(self.CHECKS)

    def validate(self, context: DeploymentContext) -> PrerequisiteReport:
        """
        Run every check and fold the outcomes.

        Args:
            context: Deployment context for this invocation

        Returns:
            PrerequisiteReport with collected errors and warnings
        """
        checks = [check.run(context) for check in self.CHECKS]
        report = PrerequisiteReport.from_checks(checks)

        log_checkpoint(
            "prerequisites_evaluated",
            {
                "context": self.context_name,
                "passed": report.passed,
                **report.summary.to_dict(),
            },
        )
        return report


class EnvironmentPrerequisiteValidator(PrerequisiteValidator):
    """Settings-only checklist, safe to run inside the deployed service."""

    CHECKS: ClassVar[List[Prerequisite]] = list(ENVIRONMENT_CHECKS)
    context_name: ClassVar[str] = "environment"


class WorkstationPrerequisiteValidator(PrerequisiteValidator):
    """Full checklist for the machine performing the deployment."""

    CHECKS: ClassVar[List[Prerequisite]] = list(ENVIRONMENT_CHECKS) + list(WORKSTATION_CHECKS)
    context_name: ClassVar[str] = "workstation"


# ============================================================================
# FACTORY
# ============================================================================

_VALIDATOR_REGISTRY: Dict[str, Type[PrerequisiteValidator]] = {
    EnvironmentPrerequisiteValidator.context_name: EnvironmentPrerequisiteValidator,
    WorkstationPrerequisiteValidator.context_name: WorkstationPrerequisiteValidator,
}


def get_prerequisite_validator(context_name: str) -> Optional[PrerequisiteValidator]:
    """
    Get the validator for an invocation context.

    Returns:
        PrerequisiteValidator instance, or None for an unknown context.
    """
    validator_cls = _VALIDATOR_REGISTRY.get(context_name)
    if validator_cls is None:
        return None
    return validator_cls()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PrerequisiteSummary",
    "PrerequisiteReport",
    "PrerequisiteValidator",
    "EnvironmentPrerequisiteValidator",
    "WorkstationPrerequisiteValidator",
    "get_prerequisite_validator",
]
