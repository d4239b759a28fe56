"""
Observability Module for the ERPNext tool service

Provides:
- Structured logging with correlation IDs
- Metrics collection (tool calls, remote requests, processing times)
"""

from core.observability.metrics import (
    MetricsCollector,
    get_metrics,
    record_tool_started,
    record_tool_completed,
    record_tool_failed,
    record_request,
)

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    with_correlation,
    log_tool_start,
    log_tool_complete,
    log_tool_error,
)

__all__ = [
    # Metrics
    "MetricsCollector",
    "get_metrics",
    "record_tool_started",
    "record_tool_completed",
    "record_tool_failed",
    "record_request",
    # Logging
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "with_correlation",
    "log_tool_start",
    "log_tool_complete",
    "log_tool_error",
]
