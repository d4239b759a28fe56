"""
Observability Validation Test

This test validates the observability stack:
1. Metrics collection works (tool lifecycle, remote requests, timings)
2. Structured logging with correlation IDs works
3. Dispatcher runs are visible in both metrics and logs

Pass criteria: from one tool invocation you can find its request id, tool
name, category and outcome in the logs and the counters.
"""

import pytest
import json
import io
import logging
from datetime import datetime


def test_observability_imports():
    """Verify all observability modules import correctly."""
    from core.observability import (
        MetricsCollector, get_metrics,
        record_tool_started, record_tool_completed, record_tool_failed,
        record_request,
        get_logger, configure_logging, CorrelationContext, with_correlation,
        log_tool_start, log_tool_complete, log_tool_error,
    )
    assert MetricsCollector is not None
    assert get_metrics is not None
    assert CorrelationContext is not None


class TestMetricsCollector:
    """Test the metrics collection system."""

    def test_singleton_instance(self):
        """MetricsCollector returns same instance."""
        from core.observability.metrics import MetricsCollector
        m1 = MetricsCollector.instance()
        m2 = MetricsCollector.instance()
        assert m1 is m2

    def test_tool_metrics_tracking(self):
        """Track tool started/completed/failed counts."""
        from core.observability.metrics import MetricsCollector
        mc = MetricsCollector.instance()

        # Get baseline
        baseline = mc.get_summary()
        started_before = baseline["tools"]["started"]
        completed_before = baseline["tools"]["completed"]
        failed_before = baseline["tools"]["failed"]

        mc.record_tool_started("erpnext_test_metric")
        mc.record_tool_started("erpnext_test_metric")
        mc.record_tool_completed("erpnext_test_metric", duration_ms=12)
        mc.record_tool_failed("erpnext_test_metric", "boom")

        summary = mc.get_summary()
        assert summary["tools"]["started"] == started_before + 2
        assert summary["tools"]["completed"] == completed_before + 1
        assert summary["tools"]["failed"] == failed_before + 1
        assert summary["tools"]["by_name"]["erpnext_test_metric"]["started"] >= 2
        assert summary["tools"]["last_errors"]["erpnext_test_metric"] == "boom"

    def test_request_status_classes(self):
        """Remote requests are bucketed by status class."""
        from core.observability.metrics import MetricsCollector, status_class
        mc = MetricsCollector.instance()
        baseline = mc.get_summary()["requests"]

        mc.record_request("GET", 200, 5)
        mc.record_request("POST", 417, 5)
        mc.record_request("GET", 408)
        mc.record_request("GET", 0)

        after = mc.get_summary()["requests"]
        assert after["total"] == baseline["total"] + 4
        assert after["by_status"]["2xx"] >= 1
        assert after["by_status"]["4xx"] >= 1
        assert after["by_status"]["timeout"] >= 1
        assert after["by_status"]["network"] >= 1

        assert status_class(503) == "5xx"
        assert status_class(0) == "network"
        assert status_class(408) == "timeout"

    def test_timing_percentile_calculation(self):
        """Calculate p95 timing correctly."""
        from core.observability.metrics import MetricsCollector
        mc = MetricsCollector.instance()

        # Add 100 samples: 1-100ms to a unique tool stage
        tool_name = f"erpnext_timing_{datetime.now().timestamp()}"
        for i in range(1, 101):
            mc.record_tool_completed(tool_name, duration_ms=i)

        stats = mc.get_timing_stats(f"tool.{tool_name}")

        # Average should be ~50.5
        assert 49 <= stats["average_ms"] <= 52
        # P95 should be ~95
        assert 93 <= stats["p95_ms"] <= 97
        assert stats["sample_count"] == 100


class TestCorrelatedLogging:
    """Test structured logging with correlation IDs."""

    def test_correlation_context_creation(self):
        """Create correlation context with all fields."""
        from core.observability.logging import CorrelationContext

        ctx = CorrelationContext(
            request_id="req-001",
            tool_name="erpnext_sales_order_get",
            category="sales",
            doctype="Sales Order",
            remote_method="frappe.client.submit",
        )

        assert ctx.request_id == "req-001"
        assert ctx.tool_name == "erpnext_sales_order_get"
        assert ctx.to_dict()["doctype"] == "Sales Order"

    def test_merge_ignores_none(self):
        """Merging keeps existing ids when the new value is None."""
        from core.observability.logging import CorrelationContext

        ctx = CorrelationContext(request_id="req-1").merge(tool_name="erpnext_item_get", doctype=None)
        assert ctx.request_id == "req-1"
        assert ctx.tool_name == "erpnext_item_get"
        assert "doctype" not in ctx.to_dict()

    def test_context_var_isolation(self):
        """with_correlation restores the previous context on exit."""
        from core.observability.logging import get_correlation_context, with_correlation

        ctx = get_correlation_context()
        assert ctx.tool_name is None

        with with_correlation(tool_name="erpnext_item_list"):
            inner_ctx = get_correlation_context()
            assert inner_ctx.tool_name == "erpnext_item_list"

        after_ctx = get_correlation_context()
        assert after_ctx.tool_name is None

    def test_structured_formatter_json_output(self):
        """StructuredFormatter outputs valid JSON."""
        from core.observability.logging import StructuredFormatter, with_correlation

        formatter = StructuredFormatter()

        with with_correlation(request_id="req-42", tool_name="erpnext_kpi_revenue"):
            record = logging.LogRecord(
                name="test",
                level=logging.INFO,
                pathname="test.py",
                lineno=10,
                msg="Test message",
                args=(),
                exc_info=None,
            )
            record.extra_fields = {"duration_ms": 12.5}

            output = formatter.format(record)
            data = json.loads(output)

            assert data["message"] == "Test message"
            assert data["request_id"] == "req-42"
            assert data["tool_name"] == "erpnext_kpi_revenue"
            assert data["duration_ms"] == 12.5
            assert data["timestamp"].endswith("Z")

    def test_human_readable_formatter_prefix(self):
        """HumanReadableFormatter shows request id, tool and doctype."""
        from core.observability.logging import HumanReadableFormatter, with_correlation

        formatter = HumanReadableFormatter()
        with with_correlation(request_id="req-7", tool_name="erpnext_doc_get", doctype="Lead"):
            record = logging.LogRecord("tools", logging.INFO, "x.py", 1, "hello", (), None)
            output = formatter.format(record)

        assert "[req-7/erpnext_doc_get/dt:Lead]" in output
        assert output.endswith("hello")

    def test_correlated_logger_extra_fields(self):
        """CorrelatedLogger passes extra_fields to the formatter."""
        from core.observability.logging import CorrelatedLogger, StructuredFormatter

        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())

        base = logging.getLogger("test.correlated")
        base.setLevel(logging.INFO)
        base.propagate = False
        base.addHandler(handler)
        try:
            CorrelatedLogger(base).info("Tool completed", extra_fields={"duration_ms": 3})
        finally:
            base.removeHandler(handler)

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "Tool completed"
        assert data["duration_ms"] == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
