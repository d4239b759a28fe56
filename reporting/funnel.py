"""Sales funnel: Lead -> Opportunity -> Quotation -> Sales Order."""

from datetime import date
from typing import Any, Dict, List, Optional

from models.payloads import FunnelPayload, FunnelStage
from reporting.numbers import round_half_up, to_number
from reporting.tables import DEFAULT_CURRENCY, FUNNEL_PERIOD_LABELS, FUNNEL_STAGE_COLORS

PERIODS = tuple(FUNNEL_PERIOD_LABELS)


def conversion_rate(count: int, previous_count: int) -> int:
    """Whole percent of the previous stage that reached this one; 0 when it was empty."""
    if previous_count > 0:
        return round_half_up(count / previous_count * 100)
    return 0


def period_start(today: date, period: str) -> Optional[str]:
    """First day of the period as ``YYYY-MM-DD``; None for ``all``."""
    if period == "this_month":
        return date(today.year, today.month, 1).isoformat()
    if period == "this_quarter":
        quarter_month = (today.month - 1) // 3 * 3 + 1
        return date(today.year, quarter_month, 1).isoformat()
    if period == "this_year":
        return date(today.year, 1, 1).isoformat()
    return None


def sales_funnel(
    leads: List[Dict[str, Any]],
    opportunities: List[Dict[str, Any]],
    quotations: List[Dict[str, Any]],
    orders: List[Dict[str, Any]],
    period: str = "all",
) -> FunnelPayload:
    """Counts, values and conversion rates per stage."""
    stages = [
        FunnelStage(label="Leads", count=len(leads), color=FUNNEL_STAGE_COLORS["Leads"]),
    ]
    for label, rows, value_field in (
        ("Opportunities", opportunities, "opportunity_amount"),
        ("Quotations", quotations, "grand_total"),
        ("Orders", orders, "grand_total"),
    ):
        stages.append(FunnelStage(
            label=label,
            count=len(rows),
            value=sum(to_number(row.get(value_field)) for row in rows),
            color=FUNNEL_STAGE_COLORS[label],
            conversion_rate=conversion_rate(len(rows), stages[-1].count),
        ))

    return FunnelPayload(
        title="Sales Funnel",
        subtitle=FUNNEL_PERIOD_LABELS.get(period, FUNNEL_PERIOD_LABELS["all"]),
        stages=stages,
        currency=DEFAULT_CURRENCY,
    )
