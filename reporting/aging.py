"""Accounts receivable aging.

Each outstanding invoice is aged from its due date, falling back to the
posting date, falling back to today. ``resolve_aging_date`` reports which
of those was used so callers can audit the fallback.
"""

from collections import Counter
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from models.payloads import ChartPayload, Dataset
from reporting.categorical import UNKNOWN, Group, top_n
from reporting.numbers import coalesce, to_number
from reporting.tables import AGING_BUCKETS, AGING_TREEMAP_COLORS, DEFAULT_CURRENCY, AgingBucket
from reporting.timeseries import parse_date
from reporting.treemap import tree_nodes

DUE_DATE = "due_date"
POSTING_DATE = "posting_date"
TODAY = "today"


def resolve_aging_date(invoice: Dict[str, Any], today: date) -> Tuple[Optional[date], str]:
    """Reference date for aging and the field it came from.

    Returns ``(None, source)`` when the chosen value does not parse.
    """
    if invoice.get(DUE_DATE) is not None:
        raw, source = invoice[DUE_DATE], DUE_DATE
    else:
        raw, source = invoice.get(POSTING_DATE), POSTING_DATE
    if not raw:
        return today, TODAY
    return parse_date(raw), source


def aging_days(reference: Optional[date], today: date) -> Optional[int]:
    """Whole days overdue, clamped at 0. None for an unusable date."""
    if reference is None:
        return None
    return max(0, (today - reference).days)


def bucket_index(days: Optional[int], buckets: Sequence[AgingBucket] = AGING_BUCKETS) -> Optional[int]:
    if days is None:
        return None
    for i, bucket in enumerate(buckets):
        if bucket.contains(days):
            return i
    return None


def aging_matrix(invoices: List[Dict[str, Any]], today: date) -> Dict[str, List[float]]:
    """Outstanding amount per customer per bucket, customers in first-seen order."""
    matrix: Dict[str, List[float]] = {}
    for invoice in invoices:
        customer = coalesce(invoice.get("customer_name"), UNKNOWN)
        row = matrix.setdefault(customer, [0.0] * len(AGING_BUCKETS))
        reference, _ = resolve_aging_date(invoice, today)
        idx = bucket_index(aging_days(reference, today))
        if idx is not None:
            row[idx] += to_number(invoice.get("outstanding_amount"))
    return matrix


def aging_date_sources(invoices: List[Dict[str, Any]], today: date) -> Dict[str, int]:
    """How many invoices were aged from each date source."""
    return dict(Counter(resolve_aging_date(inv, today)[1] for inv in invoices))


def ar_aging_chart(
    invoices: List[Dict[str, Any]],
    *,
    today: date,
    limit: int = 10,
    chart_type: str = "stacked-bar",
) -> ChartPayload:
    """Top customers by outstanding amount, split into aging buckets."""
    matrix = aging_matrix(invoices, today)
    ranked = top_n([Group(key=name, label=name, total=sum(b)) for name, b in matrix.items()], limit)

    if chart_type == "treemap":
        return ChartPayload(
            title="Accounts Receivable by Customer",
            type="treemap",
            labels=[],
            datasets=[],
            tree_data=tree_nodes(ranked, AGING_TREEMAP_COLORS, ellipsis="..."),
            currency=DEFAULT_CURRENCY,
        )

    customers = [group.key for group in ranked]
    return ChartPayload(
        title="Accounts Receivable Aging",
        subtitle=f"Top {len(customers)} customers",
        type=chart_type,
        labels=customers,
        datasets=[
            Dataset(
                label=bucket.label,
                values=[matrix[c][i] for c in customers],
                color=bucket.color,
                stack="aging",
            )
            for i, bucket in enumerate(AGING_BUCKETS)
        ],
        currency=DEFAULT_CURRENCY,
        x_axis_label="Customer",
        y_axis_label="Outstanding Amount",
    )
