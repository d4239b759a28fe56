"""
Metrics Collection for ERPNext tool invocations

Collects and exposes metrics for:
- Tool lifecycle (started, completed, failed) per tool name
- Remote requests by HTTP method and status class
- Processing times (average, p95) per stage

Metrics live in memory for the lifetime of the process.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Any
import statistics


# =============================================================================
# Metric Data Classes
# =============================================================================

@dataclass
class ToolMetrics:
    """Metrics for tool execution."""
    started: int = 0
    completed: int = 0
    failed: int = 0

    # By tool name
    by_name: Dict[str, Dict[str, int]] = field(default_factory=lambda: defaultdict(lambda: {"started": 0, "completed": 0, "failed": 0}))

    # Most recent failure message per tool name
    last_errors: Dict[str, str] = field(default_factory=dict)


@dataclass
class RequestMetrics:
    """Metrics for remote HTTP requests."""
    total: int = 0

    # "2xx", "4xx", "5xx", "timeout", "network"
    by_status: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    by_method: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


@dataclass
class TimingMetrics:
    """Processing time metrics."""
    # Raw timing samples (keep last N for percentile calculations)
    samples: List[float] = field(default_factory=list)
    max_samples: int = 1000

    # By stage
    by_stage: Dict[str, List[float]] = field(default_factory=lambda: defaultdict(list))

    def add_sample(self, duration_ms: float, stage: str = None):
        """Add a timing sample."""
        self.samples.append(duration_ms)
        if len(self.samples) > self.max_samples:
            self.samples = self.samples[-self.max_samples:]

        if stage:
            self.by_stage[stage].append(duration_ms)
            if len(self.by_stage[stage]) > self.max_samples:
                self.by_stage[stage] = self.by_stage[stage][-self.max_samples:]

    def get_average(self, stage: str = None) -> float:
        """Get average processing time."""
        samples = self.by_stage.get(stage, []) if stage else self.samples
        return statistics.mean(samples) if samples else 0.0

    def get_p95(self, stage: str = None) -> float:
        """Get 95th percentile processing time."""
        samples = self.by_stage.get(stage, []) if stage else self.samples
        if not samples:
            return 0.0
        sorted_samples = sorted(samples)
        idx = int(len(sorted_samples) * 0.95)
        return sorted_samples[min(idx, len(sorted_samples) - 1)]


def status_class(status_code: int) -> str:
    """Bucket an HTTP status for request counters."""
    if status_code == 0:
        return "network"
    if status_code == 408:
        return "timeout"
    return f"{status_code // 100}xx"


# =============================================================================
# Metrics Collector (Singleton)
# =============================================================================

class MetricsCollector:
    """
    Thread-safe metrics collector.

    Usage:
        metrics = MetricsCollector.instance()
        metrics.record_tool_started("erpnext_customer_list")
        metrics.record_tool_completed("erpnext_customer_list", duration_ms=120)
    """

    _instance: Optional["MetricsCollector"] = None
    _lock = Lock()

    def __init__(self):
        self.tools = ToolMetrics()
        self.requests = RequestMetrics()
        self.timings = TimingMetrics()
        self._lock = Lock()

    @classmethod
    def instance(cls) -> "MetricsCollector":
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    # =========================================================================
    # Tool Metrics
    # =========================================================================

    def record_tool_started(self, tool_name: str):
        """Record a tool invocation start."""
        with self._lock:
            self.tools.started += 1
            self.tools.by_name[tool_name]["started"] += 1

    def record_tool_completed(self, tool_name: str, duration_ms: float = None):
        """Record a tool invocation that returned a result."""
        with self._lock:
            self.tools.completed += 1
            self.tools.by_name[tool_name]["completed"] += 1

            if duration_ms is not None:
                self.timings.add_sample(duration_ms, f"tool.{tool_name}")

    def record_tool_failed(self, tool_name: str, error: str = None):
        """Record a tool invocation that raised."""
        with self._lock:
            self.tools.failed += 1
            self.tools.by_name[tool_name]["failed"] += 1
            if error:
                self.tools.last_errors[tool_name] = error

    # =========================================================================
    # Request Metrics
    # =========================================================================

    def record_request(self, method: str, status_code: int, duration_ms: float = None):
        """Record one remote HTTP request."""
        with self._lock:
            self.requests.total += 1
            self.requests.by_status[status_class(status_code)] += 1
            self.requests.by_method[method] += 1

            if duration_ms is not None:
                self.timings.add_sample(duration_ms, f"request.{method}")

    # =========================================================================
    # Timing Metrics
    # =========================================================================

    def get_timing_stats(self, stage: str = None) -> Dict[str, float]:
        """Get timing statistics for a stage."""
        with self._lock:
            return {
                "average_ms": self.timings.get_average(stage),
                "p95_ms": self.timings.get_p95(stage),
                "sample_count": len(self.timings.by_stage.get(stage, []) if stage else self.timings.samples),
            }

    # =========================================================================
    # Summary
    # =========================================================================

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of all metrics."""
        with self._lock:
            return {
                "tools": {
                    "started": self.tools.started,
                    "completed": self.tools.completed,
                    "failed": self.tools.failed,
                    "by_name": {k: dict(v) for k, v in self.tools.by_name.items()},
                    "last_errors": dict(self.tools.last_errors),
                },
                "requests": {
                    "total": self.requests.total,
                    "by_status": dict(self.requests.by_status),
                    "by_method": dict(self.requests.by_method),
                },
                "timings": {
                    "overall": {
                        "average_ms": self.timings.get_average(),
                        "p95_ms": self.timings.get_p95(),
                    },
                    "by_stage": {
                        stage: {
                            "average_ms": self.timings.get_average(stage),
                            "p95_ms": self.timings.get_p95(stage),
                        }
                        for stage in self.timings.by_stage.keys()
                    },
                },
            }


# =============================================================================
# Module-level convenience functions
# =============================================================================

def get_metrics() -> MetricsCollector:
    """Get the global metrics collector."""
    return MetricsCollector.instance()


def record_tool_started(tool_name: str):
    get_metrics().record_tool_started(tool_name)


def record_tool_completed(tool_name: str, duration_ms: float = None):
    get_metrics().record_tool_completed(tool_name, duration_ms)


def record_tool_failed(tool_name: str, error: str = None):
    get_metrics().record_tool_failed(tool_name, error)


def record_request(method: str, status_code: int, duration_ms: float = None):
    get_metrics().record_request(method, status_code, duration_ms)
