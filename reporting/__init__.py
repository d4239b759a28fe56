"""Reporting package - pure aggregation of fetched ERPNext rows.

Every function here takes already-fetched rows plus explicit parameters
(reference date, limits, chart type) and returns a payload model. Nothing
performs I/O or reads the clock, so equal inputs give equal outputs.
"""

from reporting.numbers import (
    to_number,
    coalesce,
    round_half_up,
    round1,
    percent_change,
    format_currency,
)

from reporting.pipeline import build_pipeline, group_by_status, unmapped_statuses

from reporting.categorical import (
    group_sum,
    top_n,
    pick_bar_type,
    stock_levels_chart,
    sales_by_status_chart,
    sales_by_item_chart,
    sales_by_customer_chart,
    order_breakdown_chart,
)

from reporting.timeseries import (
    parse_date,
    shift_month,
    window_start,
    month_labels,
    previous_month_bounds,
    bucket_by_month,
    revenue_trend_chart,
    profit_loss_chart,
)

from reporting.composed import revenue_vs_orders_chart, gross_profit_chart
from reporting.radar import product_radar_chart, normalize_dimensions, RADAR_DIMENSIONS
from reporting.scatter import price_qty_points, price_vs_qty_chart, valuation_vs_stock_chart
from reporting.treemap import flatten_tree, truncate_label, stock_treemap_chart

from reporting.aging import (
    resolve_aging_date,
    aging_days,
    bucket_index,
    aging_date_sources,
    ar_aging_chart,
)

from reporting.funnel import conversion_rate, period_start, sales_funnel, PERIODS

from reporting.kpi import (
    trend_of,
    monthly_sparkline,
    revenue_kpi,
    outstanding_kpi,
    orders_kpi,
    gross_margin_kpi,
    overdue_kpi,
)

__all__ = [
    # Numbers
    "to_number",
    "coalesce",
    "round_half_up",
    "round1",
    "percent_change",
    "format_currency",
    # Pipeline
    "build_pipeline",
    "group_by_status",
    "unmapped_statuses",
    # Categorical
    "group_sum",
    "top_n",
    "pick_bar_type",
    "stock_levels_chart",
    "sales_by_status_chart",
    "sales_by_item_chart",
    "sales_by_customer_chart",
    "order_breakdown_chart",
    # Time series
    "parse_date",
    "shift_month",
    "window_start",
    "month_labels",
    "previous_month_bounds",
    "bucket_by_month",
    "revenue_trend_chart",
    "profit_loss_chart",
    # Composed / radar / scatter / treemap
    "revenue_vs_orders_chart",
    "gross_profit_chart",
    "product_radar_chart",
    "normalize_dimensions",
    "RADAR_DIMENSIONS",
    "price_qty_points",
    "price_vs_qty_chart",
    "valuation_vs_stock_chart",
    "flatten_tree",
    "truncate_label",
    "stock_treemap_chart",
    # Aging
    "resolve_aging_date",
    "aging_days",
    "bucket_index",
    "aging_date_sources",
    "ar_aging_chart",
    # Funnel
    "conversion_rate",
    "period_start",
    "sales_funnel",
    "PERIODS",
    # KPI
    "trend_of",
    "monthly_sparkline",
    "revenue_kpi",
    "outstanding_kpi",
    "orders_kpi",
    "gross_margin_kpi",
    "overdue_kpi",
]
