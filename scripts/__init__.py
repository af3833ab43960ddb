# ============================================================================
# OPERATOR SCRIPTS
# ============================================================================
# STATUS: Tooling - Command-line entry points
# PURPOSE: Deployment prerequisite and post-deployment health checks
# ============================================================================
