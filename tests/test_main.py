# ============================================================================
# APPLICATION WIRING TESTS
# ============================================================================
# STATUS: Tests - FastAPI application
# PURPOSE: Verify the lifespan registers probes and mounts every router
# ============================================================================
"""
Application Wiring Tests

Run with:
    pytest tests/test_main.py -v
"""

from fastapi.testclient import TestClient

from __version__ import __version__
from health.registry import get_registry


class TestApplication:
    """Tests for main.app."""

    def test_root_and_routes(self):
        from main import app

        with TestClient(app) as client:
            root = client.get("/")
            assert root.status_code == 200
            assert root.json()["version"] == __version__

            assert client.get("/livez").status_code == 200

            paths = {route.path for route in app.routes}
            assert {"/health", "/health/database", "/health/ai", "/deployment/status"} <= paths

        assert len(get_registry()) == 5

    def test_request_id_echoed(self):
        from main import app

        with TestClient(app) as client:
            supplied = client.get("/livez", headers={"X-Request-ID": "req-abc"})
            generated = client.get("/livez")

        assert supplied.headers["X-Request-ID"] == "req-abc"
        assert generated.headers["X-Request-ID"]
