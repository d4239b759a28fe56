"""
Structured Logging with Correlation IDs

Provides logging utilities that automatically include:
- request_id: Links logs to one inbound HTTP request
- tool_name: Links logs to a specific tool invocation
- category: Tool category of the invocation
- doctype: Doctype the tool targets, when known
- remote_method: Whitelisted server method being called, when any

Usage:
    from core.observability.logging import get_logger, with_correlation

    logger = get_logger(__name__)

    with with_correlation(tool_name="erpnext_customer_list", category="sales"):
        logger.info("Listing customers")  # Automatically includes correlation IDs
"""

import json
import logging
import sys
from contextvars import ContextVar
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Optional, Dict, Any, TextIO
from contextlib import contextmanager


# =============================================================================
# Correlation Context
# =============================================================================

@dataclass
class CorrelationContext:
    """Context for correlating logs across one tool invocation."""
    request_id: Optional[str] = None
    tool_name: Optional[str] = None
    category: Optional[str] = None
    doctype: Optional[str] = None
    remote_method: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "CorrelationContext":
        """Create a new context with merged values."""
        data = self.to_dict()
        data.update({k: v for k, v in kwargs.items() if v is not None})
        return CorrelationContext(**data)


# Context variable for async/thread-safe correlation
_correlation_context: ContextVar[CorrelationContext] = ContextVar(
    "correlation_context",
    default=CorrelationContext()
)


def get_correlation_context() -> CorrelationContext:
    """Get the current correlation context."""
    return _correlation_context.get()


@contextmanager
def with_correlation(**kwargs):
    """
    Context manager to set correlation IDs for logging.

    Usage:
        with with_correlation(request_id="req-1", tool_name="erpnext_item_get"):
            logger.info("Fetching")  # Will include request_id and tool_name
    """
    old_ctx = get_correlation_context()
    new_ctx = old_ctx.merge(**kwargs)
    token = _correlation_context.set(new_ctx)
    try:
        yield new_ctx
    finally:
        _correlation_context.reset(token)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Structured JSON Formatter
# =============================================================================

class StructuredFormatter(logging.Formatter):
    """
    JSON formatter that includes correlation context.

    Output format:
    {
        "timestamp": "2026-01-09T12:00:00.000Z",
        "level": "INFO",
        "logger": "tools.dispatcher",
        "message": "Tool completed: erpnext_customer_list",
        "tool_name": "erpnext_customer_list",
        "category": "sales",
        "duration_ms": 150
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        # Base log structure
        log_data = {
            "timestamp": _utcnow().strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add correlation context
        ctx = get_correlation_context()
        log_data.update(ctx.to_dict())

        # Add extra fields from log record
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter that includes key correlation IDs.

    Output format:
    2026-01-09 12:00:00 [INFO ] tools.dispatcher [req-1/erpnext_item_get]: Tool started
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_correlation_context()

        # Build correlation prefix
        correlation_parts = []
        if ctx.request_id:
            # Truncate request_id for readability
            correlation_parts.append(ctx.request_id[:12])
        if ctx.tool_name:
            correlation_parts.append(ctx.tool_name)
        if ctx.doctype:
            correlation_parts.append(f"dt:{ctx.doctype}")

        correlation = "/".join(correlation_parts) if correlation_parts else "-"

        timestamp = _utcnow().strftime("%Y-%m-%d %H:%M:%S")

        msg = f"{timestamp} [{record.levelname:5}] {record.name} [{correlation}]: {record.getMessage()}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


# =============================================================================
# Logger with Correlation Support
# =============================================================================

class CorrelatedLogger:
    """
    Logger wrapper that automatically includes correlation context.

    Also supports adding extra fields to individual log calls.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _log(self, level: int, msg: str, *args, **kwargs):
        """Log with extra fields support."""
        extra_fields = kwargs.pop("extra_fields", {})
        exc_info = sys.exc_info() if kwargs.pop("exc_info", False) else None

        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "(unknown file)",
            0,
            msg,
            args,
            exc_info,
        )
        record.extra_fields = extra_fields

        self._logger.handle(record)

    def debug(self, msg: str, *args, **kwargs):
        if self._logger.isEnabledFor(logging.DEBUG):
            self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        if self._logger.isEnabledFor(logging.INFO):
            self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        if self._logger.isEnabledFor(logging.WARNING):
            self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        if self._logger.isEnabledFor(logging.ERROR):
            self._log(logging.ERROR, msg, *args, **kwargs)


# =============================================================================
# Logger Factory
# =============================================================================

_loggers: Dict[str, CorrelatedLogger] = {}
_configured = False


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
):
    """
    Configure logging for the application.

    Logs go to stderr so stdout stays free for payload output.

    Args:
        level: Logging level
        json_format: If True, use JSON format; otherwise human-readable
        stream: Output stream, stderr when omitted
    """
    global _configured

    if _configured:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    for logger_name in ["connectors", "tools", "reporting", "api", "core"]:
        logging.getLogger(logger_name).setLevel(level)

    # Reduce noise from third-party libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> CorrelatedLogger:
    """
    Get a correlated logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        CorrelatedLogger instance
    """
    if name not in _loggers:
        if not _configured:
            configure_logging()

        base_logger = logging.getLogger(name)
        _loggers[name] = CorrelatedLogger(base_logger)

    return _loggers[name]


# =============================================================================
# Convenience Functions for Tool Invocations
# =============================================================================

def log_tool_start(tool_name: str, **kwargs):
    """Log tool start with correlation."""
    logger = get_logger("tools.dispatcher")
    logger.info(f"Tool started: {tool_name}", extra_fields=kwargs)


def log_tool_complete(tool_name: str, duration_ms: float = None, **kwargs):
    """Log tool completion with correlation."""
    logger = get_logger("tools.dispatcher")
    extra = {"duration_ms": duration_ms} if duration_ms else {}
    extra.update(kwargs)
    logger.info(f"Tool completed: {tool_name}", extra_fields=extra)


def log_tool_error(tool_name: str, error: str, **kwargs):
    """Log tool error with correlation."""
    logger = get_logger("tools.dispatcher")
    logger.error(f"Tool failed: {tool_name} - {error}", extra_fields=kwargs)
