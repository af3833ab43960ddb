# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across probes, checks and routes
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted logging for the compliance operations
service.

Features:
- Component-based loggers
- Contextual fields (request_id, probe, check)
- JSON output for log aggregation
- Named checkpoints for tracing a request end to end

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("health.executor")

    with log_context(request_id="req-123", probe="database"):
        logger.info("Probing data store", extra={"timeout_s": 5.0})
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from enum import Enum


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    API = "api"
    HEALTH = "health"
    DEPLOYMENT = "deployment"
    CLI = "cli"


@dataclass
class LogContext:
    """
    Context for structured logging.

    Held in a context variable, so concurrent asyncio tasks each see their
    own fields.
    """
    request_id: Optional[str] = None
    probe: Optional[str] = None
    check: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Per-task context storage
_context_stack: ContextVar = ContextVar("log_context_stack", default=())


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _context_stack.get()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(request_id="req-123", check="jwt_secret_length"):
            logger.info("Evaluating check")
    """
    # Merge with parent context
    parent = get_current_context()
    new_context = LogContext(
        request_id=kwargs.get("request_id", parent.request_id),
        probe=kwargs.get("probe", parent.probe),
        check=kwargs.get("check", parent.check),
        component=kwargs.get("component", parent.component),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    token = _context_stack.set(_context_stack.get() + (new_context,))
    try:
        yield new_context
    finally:
        _context_stack.reset(token)


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields ContextLogger attached to the record (empty for plain loggers)."""
    fields = getattr(record, "extra", None)
    return fields if isinstance(fields, dict) else {}


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line, for the hosting platform's log drain.

    Context fields (request_id, probe, check) are promoted to the top level
    so they can be filtered on directly.
    """

    def __init__(self, service: Optional[str] = None):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        fields = dict(_record_fields(record))

        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            log_data["service"] = self.service

        for key in _PROMOTED_FIELDS:
            if fields.get(key) is not None:
                log_data[key] = fields.pop(key)

        if fields:
            log_data["data"] = fields

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = f"{record.filename}:{record.lineno}"

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Single-line formatter for terminals and the CLI scripts.

    Example:
        2026-10-19 09:14:02 WARNING  health.executor [probe=ai]: Health probe ai timed out
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        fields = _record_fields(record)

        tags = [
            f"{label}={fields[key]}"
            for key, label in (("request_id", "req"), ("probe", "probe"), ("check", "check"))
            if fields.get(key)
        ]
        tag_str = f" [{', '.join(tags)}]" if tags else ""

        line = f"{timestamp} {record.levelname:<8} {record.name}{tag_str}: {record.getMessage()}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


# Context keys lifted out of "data" in JSON output
_PROMOTED_FIELDS = ("request_id", "component", "probe", "check", "operation")


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter merging the current log context into every record.

    Call-site extras win over context fields with the same name; the
    adapter's component fills in only when the context has none.
    """

    def process(self, msg, kwargs):
        fields = get_current_context().to_dict()
        if self.extra.get("component") and "component" not in fields:
            fields["component"] = self.extra["component"]
        fields.update(kwargs.get("extra") or {})

        # One attribute, so record fields never collide with LogRecord's own
        kwargs["extra"] = {"extra": fields}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "health.executor")
        component: Optional component type for categorization
    """
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component else None},
    )


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    stream=None,
    service: Optional[str] = None,
) -> None:
    """
    Install a single root handler.

    Args:
        level: Log level name or number
        json_output: JSON lines instead of human-readable output
        stream: Output stream (defaults to stdout)
        service: Service name stamped on JSON records
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(service=service)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

# ============================================================================
# CHECKPOINT LOGGING
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named checkpoint.

    Checkpoints are named markers (e.g. "health_aggregated") that can be
    queried to reconstruct what a request did.

    Args:
        name: Checkpoint name
        data: Optional checkpoint data
        logger: Optional specific logger to use
    """
    if logger is None:
        logger = logging.getLogger("checkpoint")

    checkpoint_data = {
        "checkpoint": name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    context = get_current_context()
    if context.request_id:
        checkpoint_data["request_id"] = context.request_id

    if data:
        checkpoint_data["data"] = data

    logger.info(f"CHECKPOINT: {name}", extra={"extra": checkpoint_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
