# ============================================================================
# DEPLOYMENT PREREQUISITE CHECKS
# ============================================================================
# STATUS: Service - Individual prerequisite check definitions
# PURPOSE: Environment, secret and tooling conditions required to deploy
# ============================================================================
"""
Deployment Prerequisite Checks

Each check is a Prerequisite: a name, a declared severity and an evaluate
function returning (passed, message). Prerequisite.run() never raises; an
exception inside evaluate becomes a failed check of the declared severity
with the exception message as its reason.

Severity:
- error:   blocks deployment when failed
- warning: reported, never blocks
- info:    informational only

Checklists:
- ENVIRONMENT_CHECKS: settings only (safe to run inside the service)
- WORKSTATION_CHECKS: files, tooling, git and disk on the deploying machine
"""

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Tuple

from core.config import ServiceConfig
from core.logging import get_logger, log_context

logger = get_logger(__name__)

MIN_PYTHON = (3, 10)
MIN_SECRET_LENGTH = 32
MIN_FREE_DISK_BYTES = 1024 ** 3
ENV_FILES = (".env.local", ".env.production")
PROJECT_MANIFEST = "pyproject.toml"
DEFAULT_DEPLOY_CLI = "vercel"


class CheckSeverity(str, Enum):
    """Severity of a failed prerequisite."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class PrerequisiteCheck:
    """Outcome of one prerequisite for one invocation."""
    name: str
    passed: bool
    severity: CheckSeverity
    message: str

    def to_dict(self):
        return {
            "name": self.name,
            "passed": self.passed,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class DeploymentContext:
    """Everything a prerequisite check may look at."""
    config: ServiceConfig
    project_root: Path = field(default_factory=Path.cwd)
    python_version: Tuple[int, ...] = tuple(sys.version_info[:3])
    deploy_cli: str = DEFAULT_DEPLOY_CLI

    @classmethod
    def from_env(
        cls,
        project_root: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "DeploymentContext":
        """
        Build a context from the environment.

        Raises:
            ConfigurationError: If the configuration snapshot cannot be built
        """
        env = os.environ if environ is None else environ
        return cls(
            config=ServiceConfig.from_env(env),
            project_root=Path(project_root) if project_root else Path.cwd(),
            deploy_cli=env.get("DEPLOY_CLI") or DEFAULT_DEPLOY_CLI,
        )


CheckFunction = Callable[[DeploymentContext], Tuple[bool, str]]


@dataclass(frozen=True)
class Prerequisite:
    """A named, severity-tagged prerequisite definition."""
    name: str
    severity: CheckSeverity
    evaluate: CheckFunction

    def run(self, context: DeploymentContext) -> PrerequisiteCheck:
        """Evaluate the prerequisite; exceptions become a failed check."""
        with log_context(check=self.name):
            try:
                passed, message = self.evaluate(context)
            except Exception as e:
                logger.warning(f"Prerequisite {self.name} raised: {e}")
                return PrerequisiteCheck(
                    name=self.name,
                    passed=False,
                    severity=self.severity,
                    message=str(e) or type(e).__name__,
                )

            if not passed:
                logger.info(f"Prerequisite {self.name} failed: {message}")
            return PrerequisiteCheck(
                name=self.name,
                passed=bool(passed),
                severity=self.severity,
                message=message,
            )


def prerequisite(name: str, severity: CheckSeverity = CheckSeverity.ERROR):
    """
    Decorator turning an evaluate function into a Prerequisite.

    Example:
        @prerequisite("disk_space", severity=CheckSeverity.WARNING)
        def check_disk_space(context):
            return True, "Disk space check passed"
    """
    def decorator(fn: CheckFunction) -> Prerequisite:
        return Prerequisite(name=name, severity=severity, evaluate=fn)
    return decorator


# ============================================================================
# ENVIRONMENT CHECKS
# ============================================================================

@prerequisite("python_version")
def check_python_version(context: DeploymentContext) -> Tuple[bool, str]:
    current = ".".join(str(part) for part in context.python_version)
    required = ".".join(str(part) for part in MIN_PYTHON)
    if tuple(context.python_version[:2]) < MIN_PYTHON:
        return False, f"Python {required} or higher required. Current: {current}"
    return True, f"Python version check passed: {current}"


def required_setting(name: str, env_var: str, attribute: str) -> Prerequisite:
    """Build a presence check for one required setting."""
    def evaluate(context: DeploymentContext) -> Tuple[bool, str]:
        if not getattr(context.config, attribute):
            return False, f"Missing required environment variable: {env_var}"
        return True, f"{env_var} is set"

    return Prerequisite(name=name, severity=CheckSeverity.ERROR, evaluate=evaluate)


REQUIRED_SETTINGS = [
    required_setting("env_supabase_url", "SUPABASE_URL", "supabase_url"),
    required_setting("env_supabase_anon_key", "SUPABASE_ANON_KEY", "supabase_anon_key"),
    required_setting(
        "env_supabase_service_role_key",
        "SUPABASE_SERVICE_ROLE_KEY",
        "supabase_service_role_key",
    ),
    required_setting("env_openai_api_key", "OPENAI_API_KEY", "openai_api_key"),
    required_setting("env_jwt_secret", "JWT_SECRET", "jwt_secret"),
    required_setting("env_encryption_key", "ENCRYPTION_KEY", "encryption_key"),
]


@prerequisite("supabase_url_format")
def check_supabase_url_format(context: DeploymentContext) -> Tuple[bool, str]:
    url = context.config.supabase_url
    if not url:
        return True, "SUPABASE_URL not set; format check skipped"
    if not context.config.has_secure_data_store_url:
        return False, "Invalid Supabase URL format: SUPABASE_URL must start with https://"
    return True, "Supabase URL format check passed"


def minimum_length(name: str, env_var: str, attribute: str) -> Prerequisite:
    """Build a minimum-length check; absence is left to the presence check."""
    def evaluate(context: DeploymentContext) -> Tuple[bool, str]:
        value = getattr(context.config, attribute)
        if not value:
            return True, f"{env_var} not set; length check skipped"
        if len(value) < MIN_SECRET_LENGTH:
            return False, f"{env_var} must be at least {MIN_SECRET_LENGTH} characters long"
        return True, f"{env_var} length check passed"

    return Prerequisite(name=name, severity=CheckSeverity.ERROR, evaluate=evaluate)


check_jwt_secret_length = minimum_length("jwt_secret_length", "JWT_SECRET", "jwt_secret")
check_encryption_key_length = minimum_length(
    "encryption_key_length", "ENCRYPTION_KEY", "encryption_key"
)


@prerequisite("smtp_configured", severity=CheckSeverity.WARNING)
def check_smtp_configured(context: DeploymentContext) -> Tuple[bool, str]:
    if not context.config.has_email_config:
        return False, "SMTP configuration missing - email notifications will not work"
    return True, "SMTP configuration present"


@prerequisite("twilio_configured", severity=CheckSeverity.WARNING)
def check_twilio_configured(context: DeploymentContext) -> Tuple[bool, str]:
    if not context.config.has_sms_config:
        return False, "Twilio configuration missing - SMS notifications will not work"
    return True, "Twilio configuration present"


# ============================================================================
# WORKSTATION CHECKS
# ============================================================================

@prerequisite("env_file_present")
def check_env_file_present(context: DeploymentContext) -> Tuple[bool, str]:
    for filename in ENV_FILES:
        if (context.project_root / filename).is_file():
            return True, f"Found environment file: {filename}"
    return False, f"No environment file found ({' or '.join(ENV_FILES)})"


@prerequisite("project_manifest")
def check_project_manifest(context: DeploymentContext) -> Tuple[bool, str]:
    if not (context.project_root / PROJECT_MANIFEST).is_file():
        return False, f"{PROJECT_MANIFEST} not found in {context.project_root}"
    return True, f"{PROJECT_MANIFEST} found"


@prerequisite("deploy_cli_available")
def check_deploy_cli_available(context: DeploymentContext) -> Tuple[bool, str]:
    path = shutil.which(context.deploy_cli)
    if path is None:
        return False, f"Deployment CLI '{context.deploy_cli}' not found on PATH"
    return True, f"Deployment CLI found: {path}"


@prerequisite("git_clean", severity=CheckSeverity.WARNING)
def check_git_clean(context: DeploymentContext) -> Tuple[bool, str]:
    try:
        completed = subprocess.run(
            ["git", "status", "--porcelain"],
            cwd=context.project_root,
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError):
        return False, "Not a git repository or git not available"

    if completed.returncode != 0:
        return False, "Not a git repository or git not available"
    if completed.stdout.strip():
        return False, "Uncommitted changes detected. Consider committing before deployment"
    return True, "Git working directory is clean"


@prerequisite("disk_space", severity=CheckSeverity.WARNING)
def check_disk_space(context: DeploymentContext) -> Tuple[bool, str]:
    free = shutil.disk_usage(context.project_root).free
    free_gib = free / 1024 ** 3
    if free < MIN_FREE_DISK_BYTES:
        return False, f"Low disk space: {free_gib:.2f} GiB free"
    return True, f"Disk space check passed: {free_gib:.1f} GiB free"


ENVIRONMENT_CHECKS: List[Prerequisite] = [
    check_python_version,
    *REQUIRED_SETTINGS,
    check_supabase_url_format,
    check_jwt_secret_length,
    check_encryption_key_length,
    check_smtp_configured,
    check_twilio_configured,
]

WORKSTATION_CHECKS: List[Prerequisite] = [
    check_env_file_present,
    check_project_manifest,
    check_deploy_cli_available,
    check_git_clean,
    check_disk_space,
]


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckSeverity",
    "PrerequisiteCheck",
    "DeploymentContext",
    "Prerequisite",
    "prerequisite",
    "ENVIRONMENT_CHECKS",
    "WORKSTATION_CHECKS",
    "MIN_SECRET_LENGTH",
]
