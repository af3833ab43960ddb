#!/usr/bin/env python
# ============================================================================
# POST-DEPLOYMENT HEALTH CHECK SCRIPT
# ============================================================================
# PURPOSE: Verify a deployed instance answers its health endpoints
# USAGE:
#   python scripts/post_deploy_check.py
#   python scripts/post_deploy_check.py --base-url https://app.example.org
# ============================================================================

import sys
import os
import argparse
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import httpx

DEFAULT_BASE_URL = os.environ.get("BASE_URL", "http://localhost:8000")

HEALTHY = "healthy"
WARNING = "warning"
ERROR = "error"


@dataclass
class EndpointCheck:
    """Outcome of calling one health endpoint."""
    component: str
    status: str
    message: str
    response_time_ms: Optional[float] = None


def _json_status(response: httpx.Response, key: str) -> Optional[str]:
    try:
        return response.json().get(key)
    except ValueError:
        return None


def classify_api(response: httpx.Response) -> EndpointCheck:
    """Aggregate health: 200 is up (degraded is a warning), anything else an error."""
    if response.status_code != 200:
        return EndpointCheck("API Health", ERROR, f"API returned {response.status_code}")
    overall = _json_status(response, "overall_status") or "unknown"
    if overall == "degraded":
        return EndpointCheck("API Health", WARNING, "API responding, running degraded")
    return EndpointCheck("API Health", HEALTHY, f"API responding correctly: {overall}")


def classify_database(response: httpx.Response) -> EndpointCheck:
    """Database health: any non-2xx is an error."""
    if response.is_success:
        return EndpointCheck("Database", HEALTHY, "Database connection successful")
    return EndpointCheck("Database", ERROR, "Database connection failed")


def classify_ai(response: httpx.Response) -> EndpointCheck:
    """AI integration never blocks: failures are warnings."""
    if not response.is_success:
        return EndpointCheck("AI Integration", WARNING, "AI services may be unavailable")
    if _json_status(response, "status") == WARNING:
        return EndpointCheck("AI Integration", WARNING, "AI services not configured")
    return EndpointCheck("AI Integration", HEALTHY, "AI services responding")


# (path, component, classifier, status when unreachable)
ENDPOINTS = [
    ("/health", "API Health", classify_api, ERROR),
    ("/health/database", "Database", classify_database, ERROR),
    ("/health/ai", "AI Integration", classify_ai, WARNING),
]


def check_endpoint(
    client: httpx.Client,
    path: str,
    component: str,
    classify: Callable[[httpx.Response], EndpointCheck],
    unreachable_status: str,
) -> EndpointCheck:
    start = time.perf_counter()
    try:
        response = client.get(path)
    except httpx.HTTPError as e:
        return EndpointCheck(component, unreachable_status, f"{component} unreachable: {e}")

    result = classify(response)
    result.response_time_ms = (time.perf_counter() - start) * 1000
    return result


def run_checks(client: httpx.Client) -> List[EndpointCheck]:
    return [
        check_endpoint(client, path, component, classify, unreachable)
        for path, component, classify, unreachable in ENDPOINTS
    ]


def print_report(results: List[EndpointCheck]) -> None:
    healthy = sum(1 for r in results if r.status == HEALTHY)
    warnings = sum(1 for r in results if r.status == WARNING)
    errors = sum(1 for r in results if r.status == ERROR)

    print("\n" + "=" * 70)
    print("HEALTH CHECK REPORT")
    print("=" * 70)
    print(f"\nSUMMARY: {healthy} healthy, {warnings} warnings, {errors} errors\n")

    for result in results:
        status_emoji = {HEALTHY: "✅", WARNING: "⚠️", ERROR: "❌"}.get(result.status, "❓")
        timing = f" ({result.response_time_ms:.0f}ms)" if result.response_time_ms is not None else ""
        print(f"{status_emoji} {result.component}: {result.message}{timing}")

    print("\n" + "=" * 70)
    if errors:
        print("❌ Critical issues detected. Deployment may not be fully functional.")
    elif warnings:
        print("⚠️ Deployment is functional but some features may be limited.")
    else:
        print("✅ All systems healthy.")
    print("=" * 70)


def main(argv=None, transport: Optional[httpx.BaseTransport] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check health endpoints of a deployed instance",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=DEFAULT_BASE_URL,
        help=f"Base URL of the deployment (default: {DEFAULT_BASE_URL})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=15.0,
        help="Per-request timeout in seconds (default: 15)"
    )
    args = parser.parse_args(argv)

    print(f"Checking {args.base_url} ...")

    with httpx.Client(base_url=args.base_url, timeout=args.timeout, transport=transport) as client:
        results = run_checks(client)

    print_report(results)
    return 1 if any(r.status == ERROR for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
