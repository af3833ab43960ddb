# ============================================================================
# STRUCTURED LOGGING TESTS
# ============================================================================
# STATUS: Tests - Log context and formatters
# PURPOSE: Verify context propagation across asyncio tasks and output shape
# ============================================================================
"""
Structured Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import asyncio
import io
import json
import logging

from core.logging import (
    ComponentType,
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_checkpoint,
    log_context,
)


# ============================================================================
# HELPERS
# ============================================================================

def _make_logger(formatter, name="tests.logging"):
    """ContextLogger writing to an in-memory stream with the given formatter."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    base = logging.getLogger(name)
    base.handlers = [handler]
    base.setLevel(logging.DEBUG)
    base.propagate = False
    return get_logger(name, ComponentType.HEALTH), stream


# ============================================================================
# CONTEXT
# ============================================================================

class TestLogContext:
    """Tests for log_context."""

    def test_nested_context_inherits(self):
        with log_context(request_id="req-1"):
            with log_context(probe="database"):
                context = get_current_context()
                assert context.request_id == "req-1"
                assert context.probe == "database"
            assert get_current_context().probe is None
        assert get_current_context().request_id is None

    def test_concurrent_tasks_isolated(self):
        async def worker(name, delay):
            with log_context(probe=name):
                await asyncio.sleep(delay)
                return get_current_context().probe

        async def run():
            return await asyncio.gather(
                asyncio.create_task(worker("database", 0.02)),
                asyncio.create_task(worker("ai", 0.0)),
            )

        assert asyncio.run(run()) == ["database", "ai"]


# ============================================================================
# FORMATTERS
# ============================================================================

class TestStructuredFormatter:
    """Tests for JSON output."""

    def test_context_promoted(self):
        logger, stream = _make_logger(StructuredFormatter(service="section3-ops"))

        with log_context(request_id="req-9", check="jwt_secret_length"):
            logger.info("Prerequisite failed", extra={"length": 31})

        record = json.loads(stream.getvalue())
        assert record["message"] == "Prerequisite failed"
        assert record["service"] == "section3-ops"
        assert record["request_id"] == "req-9"
        assert record["check"] == "jwt_secret_length"
        assert record["component"] == "health"
        assert record["data"] == {"length": 31}


class TestHumanFormatter:
    """Tests for human-readable output."""

    def test_tags(self):
        logger, stream = _make_logger(HumanFormatter(), name="tests.human")

        with log_context(probe="ai"):
            logger.warning("Health probe ai timed out")

        line = stream.getvalue()
        assert "WARNING" in line
        assert "[probe=ai]" in line
        assert line.rstrip().endswith("Health probe ai timed out")


class TestCheckpoint:
    """Tests for log_checkpoint."""

    def test_checkpoint_data(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        checkpoint_logger = logging.getLogger("tests.checkpoint")
        checkpoint_logger.handlers = [handler]
        checkpoint_logger.setLevel(logging.INFO)
        checkpoint_logger.propagate = False

        with log_context(request_id="req-7"):
            log_checkpoint("health_aggregated", {"overall_status": "degraded"}, checkpoint_logger)

        record = json.loads(stream.getvalue())
        assert record["message"] == "CHECKPOINT: health_aggregated"
        assert record["request_id"] == "req-7"
        assert record["data"]["data"] == {"overall_status": "degraded"}
