"""Monthly time series.

A window of N calendar months ends with the month of ``today``. Every month in
the window is emitted, including months with no documents.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from models.payloads import ChartPayload, Dataset
from reporting.categorical import Group, top_n
from reporting.numbers import coalesce, round_half_up, to_number
from reporting.tables import DEFAULT_CURRENCY, MONTH_ABBR, SERIES_COLORS, TOP_SERIES


# =============================================================================
# Calendar helpers
# =============================================================================

def parse_date(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (optionally followed by a time). None when unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def shift_month(day: date, months: int) -> date:
    """First day of the month ``months`` away from ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def window_start(today: date, months: int) -> date:
    """First day of the oldest month in a window of ``months`` ending this month."""
    return shift_month(today, -(months - 1))


def month_difference(later: date, earlier: date) -> int:
    """Calendar months between two dates, ignoring the day."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def month_label(day: date) -> str:
    """``Jan 26`` style label."""
    return f"{MONTH_ABBR[day.month - 1]} {day.year % 100:02d}"


def month_labels(today: date, months: int) -> List[str]:
    start = window_start(today, months)
    return [month_label(shift_month(start, m)) for m in range(months)]


def previous_month_bounds(today: date) -> Tuple[date, date]:
    """(first day, last day) of the month before ``today``'s month."""
    this_month = shift_month(today, 0)
    last_month = shift_month(today, -1)
    return last_month, date.fromordinal(this_month.toordinal() - 1)


def bucket_by_month(
    rows: List[Dict[str, Any]],
    start: date,
    months: int,
    date_field: str,
    value_field: str,
) -> List[float]:
    """Sum ``value_field`` into ``months`` monthly buckets starting at ``start``.

    Rows whose date is missing, unparsable or outside the window are skipped.
    """
    totals = [0.0] * months
    for row in rows:
        day = parse_date(row.get(date_field))
        if day is None:
            continue
        idx = month_difference(day, start)
        if 0 <= idx < months:
            totals[idx] += to_number(row.get(value_field))
    return totals


# =============================================================================
# Revenue trend
# =============================================================================

def revenue_by_entity(
    rows: List[Dict[str, Any]],
    start: date,
    months: int,
    entity_field: str = "customer_name",
    date_field: str = "transaction_date",
    value_field: str = "grand_total",
) -> Dict[str, List[float]]:
    """Monthly buckets per entity, entities in first-seen order."""
    series: Dict[str, List[float]] = {}
    for row in rows:
        day = parse_date(row.get(date_field))
        if day is None:
            continue
        idx = month_difference(day, start)
        if not 0 <= idx < months:
            continue
        entity = coalesce(row.get(entity_field), "Unknown")
        values = series.setdefault(entity, [0.0] * months)
        values[idx] += to_number(row.get(value_field))
    return series


def revenue_trend_chart(
    orders: List[Dict[str, Any]],
    *,
    today: date,
    months: int = 6,
    chart_type: str = "line",
    group_by: str = "total",
) -> ChartPayload:
    """Monthly order revenue, as one series or one series per top customer."""
    start = window_start(today, months)
    labels = month_labels(today, months)

    if group_by == "customer":
        series = revenue_by_entity(orders, start, months)
        ranked = top_n([Group(key=name, label=name, total=sum(v)) for name, v in series.items()], TOP_SERIES)
        datasets = [
            Dataset(
                label=group.key,
                values=series[group.key],
                color=SERIES_COLORS[i % len(SERIES_COLORS)],
                show_dots=chart_type == "line",
                stack="revenue" if chart_type == "stacked-area" else None,
            )
            for i, group in enumerate(ranked)
        ]
        title = "Revenue by Customer"
    else:
        totals = bucket_by_month(orders, start, months, "transaction_date", "grand_total")
        datasets = [Dataset(label="Revenue", values=totals, color="#60a5fa", show_dots=True)]
        title = "Revenue Trend"

    return ChartPayload(
        title=title,
        subtitle=f"Last {months} months",
        type=chart_type,
        labels=labels,
        datasets=datasets,
        currency=DEFAULT_CURRENCY,
        y_axis_label="Revenue",
    )


# =============================================================================
# Profit & loss
# =============================================================================

def profit_loss_chart(
    sales_orders: List[Dict[str, Any]],
    purchase_orders: List[Dict[str, Any]],
    *,
    today: date,
    months: int = 6,
    chart_type: str = "composed",
) -> ChartPayload:
    """Income vs expenses per month, with a net profit line when composed."""
    start = window_start(today, months)
    income = bucket_by_month(sales_orders, start, months, "transaction_date", "grand_total")
    expenses = bucket_by_month(purchase_orders, start, months, "transaction_date", "grand_total")

    datasets = [
        Dataset(label="Income", values=[round_half_up(v) for v in income], color="#4ade80", type="bar"),
        Dataset(label="Expenses", values=[round_half_up(v) for v in expenses], color="#f87171", type="bar"),
    ]

    composed = chart_type == "composed"
    if composed:
        datasets.append(Dataset(
            label="Net Profit",
            values=[round_half_up(inc - exp) for inc, exp in zip(income, expenses)],
            color="#60a5fa",
            type="line",
            y_axis_id="right",
            show_dots=True,
        ))

    return ChartPayload(
        title="Profit & Loss",
        subtitle=f"Last {months} months",
        type=chart_type,
        labels=month_labels(today, months),
        datasets=datasets,
        show_right_axis=True if composed else None,
        right_axis_label="Net Profit" if composed else None,
        currency=DEFAULT_CURRENCY,
        y_axis_label="Amount",
    )
