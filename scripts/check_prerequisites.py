#!/usr/bin/env python
# ============================================================================
# DEPLOYMENT PREREQUISITE CHECK SCRIPT
# ============================================================================
# PURPOSE: Go/no-go check on the machine performing a deployment
# USAGE:
#   python scripts/check_prerequisites.py                 # Workstation checks
#   python scripts/check_prerequisites.py --json          # Machine-readable
#   python scripts/check_prerequisites.py --context environment
# ============================================================================

import sys
import os
import argparse
import json
from pathlib import Path

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from dotenv import load_dotenv

from core.config import ConfigurationError
from core.logging import configure_logging
from services import DeploymentContext, PrerequisiteReport, get_prerequisite_validator
from services.preflight_checks import ENV_FILES


def load_env_files(project_root: Path) -> list:
    """
    Load .env.local then .env.production into the process environment.

    Variables already set in the environment are never overridden, and the
    first file to define a variable wins.

    Returns:
        Names of the files that were loaded
    """
    loaded = []
    for filename in ENV_FILES:
        path = project_root / filename
        if path.is_file():
            load_dotenv(dotenv_path=path, override=False)
            loaded.append(filename)
    return loaded


def print_report(report: PrerequisiteReport, verbose: bool = False) -> None:
    """Human-readable summary of a prerequisite run."""
    print("\n[RESULTS]\n")

    if verbose:
        for check in report.checks:
            status_emoji = "✅" if check.passed else (
                "❌" if check.severity.value == "error" else "⚠️"
            )
            print(f"{status_emoji} {check.name}: {check.message}")
        print()

    if report.errors:
        print(f"Errors ({len(report.errors)}):")
        for error in report.errors:
            print(f"   - {error}")

    if report.warnings:
        print(f"Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"   - {warning}")

    summary = report.summary
    print(f"\nPassed: {summary.passed}/{summary.total} checks")

    print("\n" + "=" * 70)
    if report.passed:
        print("✅ All prerequisites met. Ready for deployment.")
    else:
        print("❌ Prerequisites not met. Fix the errors above before deploying.")
    print("=" * 70)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate deployment prerequisites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/check_prerequisites.py                       # Full workstation checklist
  python scripts/check_prerequisites.py --context environment # Settings only
  python scripts/check_prerequisites.py --json                # JSON report

Environment files (loaded when present, existing variables win):
  .env.local
  .env.production
        """
    )
    parser.add_argument(
        "--project-root",
        type=str,
        default=PROJECT_ROOT,
        help="Project root to inspect (default: repository root)"
    )
    parser.add_argument(
        "--context",
        choices=["workstation", "environment"],
        default="workstation",
        help="Checklist to run (default: workstation)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="List every check and enable verbose logging"
    )
    args = parser.parse_args(argv)

    configure_logging(level="DEBUG" if args.verbose else "WARNING", stream=sys.stderr)

    project_root = Path(args.project_root).resolve()
    loaded = load_env_files(project_root)

    validator = get_prerequisite_validator(args.context)

    try:
        context = DeploymentContext.from_env(project_root=project_root)
        report = validator.validate(context)
    except ConfigurationError as e:
        report = PrerequisiteReport.failed(str(e), total=validator.total_checks)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.passed else 1

    print("=" * 70)
    print("Section 3 Compliance System - Deployment Prerequisites")
    print("=" * 70)
    print(f"Project root: {project_root}")
    print(f"Context: {args.context}")
    print(f"Environment files: {', '.join(loaded) if loaded else 'none'}")
    print("=" * 70)

    print_report(report, verbose=args.verbose)
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
