"""Configuration tables for the analytics payloads.

Status maps, palettes and thresholds live here so they can be read and tested
on their own. Dict order is display order.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class StatusStyle:
    """Display label and color for one document status."""
    label: str
    color: str


@dataclass(frozen=True)
class AgingBucket:
    """Inclusive day range of an aging bucket."""
    label: str
    min_days: int
    max_days: int
    color: str

    def contains(self, days: int) -> bool:
        return self.min_days <= days <= self.max_days


DEFAULT_CURRENCY = "EUR"

# =============================================================================
# Pipelines
# =============================================================================

SALES_ORDER_STATUSES: Dict[str, StatusStyle] = {
    "Draft": StatusStyle("Draft", "#78716c"),
    "Open": StatusStyle("Open", "#fbbf24"),
    "To Deliver and Bill": StatusStyle("To Deliver", "#60a5fa"),
    "To Bill": StatusStyle("To Bill", "#c084fc"),
    "Completed": StatusStyle("Completed", "#4ade80"),
    "Cancelled": StatusStyle("Cancelled", "#f87171"),
}

PURCHASE_ORDER_STATUSES: Dict[str, StatusStyle] = {
    "Draft": StatusStyle("Draft", "#78716c"),
    "To Receive and Bill": StatusStyle("To Receive", "#60a5fa"),
    "To Receive": StatusStyle("To Receive Only", "#fbbf24"),
    "To Bill": StatusStyle("To Bill", "#c084fc"),
    "Completed": StatusStyle("Completed", "#4ade80"),
    "Cancelled": StatusStyle("Cancelled", "#f87171"),
}

# =============================================================================
# Order breakdown
# =============================================================================

ORDER_BREAKDOWN_STATUS_ORDER: Tuple[str, ...] = (
    "Draft",
    "To Deliver and Bill",
    "To Bill",
    "Completed",
    "Cancelled",
)

ORDER_BREAKDOWN_COLORS: Dict[str, str] = {
    "Draft": "#78716c",
    "To Deliver and Bill": "#60a5fa",
    "To Bill": "#c084fc",
    "Completed": "#4ade80",
    "Cancelled": "#f87171",
}

ORDER_BREAKDOWN_FALLBACK_COLOR = "#94a3b8"

ORDER_BREAKDOWN_LABELS: Dict[str, str] = {
    "To Deliver and Bill": "To Deliver",
}

# =============================================================================
# Palettes
# =============================================================================

SERIES_COLORS: Tuple[str, ...] = ("#60a5fa", "#4ade80", "#fbbf24", "#c084fc", "#f472b6")

RADAR_COLORS: Tuple[str, ...] = ("#60a5fa", "#f472b6", "#4ade80", "#fbbf24")

STOCK_TREEMAP_COLORS: Tuple[str, ...] = (
    "#60a5fa", "#4ade80", "#fbbf24", "#818cf8", "#c084fc", "#fb923c",
    "#34d399", "#f472b6", "#a78bfa", "#f97316", "#22d3ee", "#e879f9",
)

AGING_TREEMAP_COLORS: Tuple[str, ...] = STOCK_TREEMAP_COLORS[:10]

# =============================================================================
# Chart heuristics
# =============================================================================

# Above this many categories vertical bars stop being legible.
HORIZONTAL_BAR_THRESHOLD = 6

# Per-entity time series keep only the largest entities.
TOP_SERIES = 5

# Treemap labels longer than this are shortened.
TREEMAP_LABEL_MAX = 20
TREEMAP_LABEL_KEEP = 18

# =============================================================================
# Aging
# =============================================================================

AGING_BUCKETS: Tuple[AgingBucket, ...] = (
    AgingBucket("0-30 days", 0, 30, "#4ade80"),
    AgingBucket("31-60 days", 31, 60, "#fbbf24"),
    AgingBucket("61-90 days", 61, 90, "#fb923c"),
    AgingBucket("90+ days", 91, 99999, "#f87171"),
)

# =============================================================================
# KPIs
# =============================================================================

GROSS_MARGIN_GOOD = 30
GROSS_MARGIN_FAIR = 15

KPI_COLORS: Dict[str, str] = {
    "revenue": "#60a5fa",
    "outstanding": "#fbbf24",
    "orders": "#4ade80",
    "gross_margin": "#c084fc",
    "overdue": "#f87171",
}

SPARKLINE_MONTHS = 6

# =============================================================================
# Funnel
# =============================================================================

FUNNEL_STAGE_COLORS: Dict[str, str] = {
    "Leads": "#818cf8",
    "Opportunities": "#60a5fa",
    "Quotations": "#4ade80",
    "Orders": "#fbbf24",
}

FUNNEL_PERIOD_LABELS: Dict[str, str] = {
    "this_month": "This Month",
    "this_quarter": "This Quarter",
    "this_year": "This Year",
    "all": "All Time",
}

# =============================================================================
# Calendar
# =============================================================================

MONTH_ABBR: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
