"""KPI cards.

Whether an upward trend is good news is declared per metric here, never
inferred from the numbers.
"""

from datetime import date
from typing import Any, Dict, List

from models.payloads import KPIPayload
from reporting.numbers import format_currency, percent_change, round1, to_number
from reporting.tables import (
    DEFAULT_CURRENCY,
    GROSS_MARGIN_FAIR,
    GROSS_MARGIN_GOOD,
    KPI_COLORS,
    SPARKLINE_MONTHS,
)
from reporting.timeseries import month_difference, parse_date

DELTA_LABEL = "vs last month"


def trend_of(delta: float) -> str:
    if delta > 0:
        return "up"
    if delta < 0:
        return "down"
    return "flat"


def monthly_sparkline(
    rows: List[Dict[str, Any]],
    today: date,
    months: int = SPARKLINE_MONTHS,
    date_field: str = "transaction_date",
    value_field: str = "grand_total",
) -> List[float]:
    """Trailing monthly totals, oldest first; the last slot is the current month."""
    sparkline = [0.0] * months
    for row in rows:
        day = parse_date(row.get(date_field))
        if day is None:
            continue
        idx = months - 1 - month_difference(today, day)
        if 0 <= idx < months:
            sparkline[idx] += to_number(row.get(value_field))
    return sparkline


def revenue_kpi(orders: List[Dict[str, Any]], today: date) -> KPIPayload:
    """Revenue this month vs last month, with a six month sparkline."""
    sparkline = monthly_sparkline(orders, today)
    current, previous = sparkline[-1], sparkline[-2]
    delta = percent_change(current, previous)

    return KPIPayload(
        label="Revenue MTD",
        value=current,
        currency=DEFAULT_CURRENCY,
        delta=round1(delta),
        delta_label=DELTA_LABEL,
        trend=trend_of(delta),
        trend_is_good=True,
        sparkline=sparkline,
        color=KPI_COLORS["revenue"],
    )


def outstanding_kpi(invoices: List[Dict[str, Any]]) -> KPIPayload:
    """Open receivables: total outstanding and invoice count."""
    total = sum(to_number(inv.get("outstanding_amount")) for inv in invoices)
    count = len(invoices)

    return KPIPayload(
        label="Outstanding Receivables",
        value=total,
        formatted_value=f"{count} inv. / {format_currency(total)}",
        currency=DEFAULT_CURRENCY,
        trend="up" if total > 0 else "flat",
        trend_is_good=False,
        color=KPI_COLORS["outstanding"],
    )


def orders_kpi(current_count: int, previous_count: int) -> KPIPayload:
    """Order count this month vs last month."""
    delta = percent_change(current_count, previous_count)

    return KPIPayload(
        label="Orders This Month",
        value=current_count,
        formatted_value=f"{current_count} orders",
        unit="orders",
        delta=round1(delta),
        delta_label=DELTA_LABEL,
        trend=trend_of(delta),
        trend_is_good=True,
        color=KPI_COLORS["orders"],
    )


def estimated_margin(order_items: List[Dict[str, Any]], bins: List[Dict[str, Any]]) -> float:
    """(revenue - cost) / revenue * 100 with cost from the first valuation rate seen per item."""
    revenue = sum(to_number(row.get("amount")) for row in order_items)

    quantities: Dict[str, float] = {}
    for row in order_items:
        code = row.get("item_code")
        quantities[code] = quantities.get(code, 0.0) + to_number(row.get("qty"))

    rates: Dict[str, float] = {}
    for row in bins:
        code = row.get("item_code")
        if not rates.get(code):
            rates[code] = to_number(row.get("valuation_rate"))

    cost = sum(rates[code] * qty for code, qty in quantities.items() if rates.get(code))

    if revenue > 0:
        return (revenue - cost) / revenue * 100
    return 0.0


def gross_margin_kpi(order_items: List[Dict[str, Any]], bins: List[Dict[str, Any]]) -> KPIPayload:
    margin = estimated_margin(order_items, bins)

    if margin >= GROSS_MARGIN_GOOD:
        trend = "up"
    elif margin >= GROSS_MARGIN_FAIR:
        trend = "flat"
    else:
        trend = "down"

    return KPIPayload(
        label="Gross Margin",
        value=round1(margin),
        unit="%",
        trend=trend,
        trend_is_good=True,
        color=KPI_COLORS["gross_margin"],
    )


def overdue_kpi(invoices: List[Dict[str, Any]]) -> KPIPayload:
    """Overdue invoices: count as the value, total in the formatted text."""
    count = len(invoices)
    total = sum(to_number(inv.get("outstanding_amount")) for inv in invoices)

    return KPIPayload(
        label="Overdue Invoices",
        value=count,
        formatted_value=f"{count} inv. / {format_currency(total)}",
        trend="up" if count > 0 else "flat",
        trend_is_good=False,
        color=KPI_COLORS["overdue"],
    )
