"""Categorical charts: group by one dimension, sum a metric, keep the top N."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from models.payloads import ChartPayload, Dataset
from reporting.numbers import coalesce, to_number
from reporting.tables import (
    DEFAULT_CURRENCY,
    HORIZONTAL_BAR_THRESHOLD,
    ORDER_BREAKDOWN_COLORS,
    ORDER_BREAKDOWN_FALLBACK_COLOR,
    ORDER_BREAKDOWN_LABELS,
    ORDER_BREAKDOWN_STATUS_ORDER,
)

UNKNOWN = "Unknown"


@dataclass
class Group:
    """Running total for one category."""
    key: str
    label: str
    total: float = 0.0
    count: int = 0


def group_sum(
    rows: List[Dict[str, Any]],
    key_field: str,
    value_field: str,
    label_field: Optional[str] = None,
    default_key: str = UNKNOWN,
) -> List[Group]:
    """Sum ``value_field`` per ``key_field``, in first-seen order.

    The label comes from ``label_field`` on the first row of each key, falling
    back to the key itself.
    """
    groups: Dict[str, Group] = {}
    for row in rows:
        key = coalesce(row.get(key_field), default_key)
        group = groups.get(key)
        if group is None:
            label = coalesce(row.get(label_field), key) if label_field else key
            group = groups[key] = Group(key=key, label=label)
        group.total += to_number(row.get(value_field))
        group.count += 1
    return list(groups.values())


def top_n(groups: List[Group], limit: Optional[int] = None) -> List[Group]:
    """Sort by total descending (stable) and keep the first ``limit``."""
    ranked = sorted(groups, key=lambda g: g.total, reverse=True)
    return ranked if limit is None else ranked[:limit]


def pick_bar_type(category_count: int, threshold: int = HORIZONTAL_BAR_THRESHOLD) -> str:
    """Horizontal bars once the category count passes the legibility threshold."""
    return "horizontal-bar" if category_count > threshold else "bar"


# =============================================================================
# Stock levels
# =============================================================================

def stock_levels_chart(
    bins: List[Dict[str, Any]],
    *,
    limit: int = 20,
    chart_type: Optional[str] = None,
    warehouse: Optional[str] = None,
    generated_at: Optional[str] = None,
) -> ChartPayload:
    """Quantity on hand per item, summed across warehouses."""
    ranked = top_n(group_sum(bins, "item_code", "actual_qty"), limit)

    return ChartPayload(
        title="Stock Levels",
        subtitle=coalesce(warehouse, "All Warehouses"),
        type=chart_type or pick_bar_type(len(ranked)),
        labels=[g.key for g in ranked],
        datasets=[Dataset(label="Qty on Hand", values=[g.total for g in ranked], color="#60a5fa")],
        unit="units",
        generated_at=generated_at,
    )


# =============================================================================
# Sales
# =============================================================================

def sales_by_status_chart(invoices: List[Dict[str, Any]], generated_at: Optional[str] = None) -> ChartPayload:
    """Invoice revenue per status as a donut."""
    ranked = top_n(group_sum(invoices, "status", "grand_total"))
    return ChartPayload(
        title="Invoice Revenue by Status",
        type="donut",
        labels=[g.key for g in ranked],
        datasets=[Dataset(label="Revenue", values=[g.total for g in ranked])],
        currency=DEFAULT_CURRENCY,
        generated_at=generated_at,
    )


def sales_by_item_chart(
    invoice_items: List[Dict[str, Any]],
    limit: int = 10,
    generated_at: Optional[str] = None,
) -> ChartPayload:
    """Top items by invoiced amount."""
    ranked = top_n(group_sum(invoice_items, "item_code", "amount", label_field="item_name"), limit)
    return ChartPayload(
        title="Top Items by Revenue",
        subtitle=f"Top {len(ranked)} items",
        type="horizontal-bar",
        labels=[g.label for g in ranked],
        datasets=[Dataset(label="Revenue", values=[g.total for g in ranked], color="#c084fc")],
        currency=DEFAULT_CURRENCY,
        generated_at=generated_at,
    )


def sales_by_customer_chart(
    invoices: List[Dict[str, Any]],
    limit: int = 10,
    generated_at: Optional[str] = None,
) -> ChartPayload:
    """Top customers by invoiced grand total."""
    ranked = top_n(group_sum(invoices, "customer", "grand_total", label_field="customer_name"), limit)
    return ChartPayload(
        title="Top Customers by Revenue",
        subtitle=f"Top {len(ranked)} customers",
        type="horizontal-bar",
        labels=[g.label for g in ranked],
        datasets=[Dataset(label="Revenue", values=[g.total for g in ranked], color="#4ade80")],
        currency=DEFAULT_CURRENCY,
        generated_at=generated_at,
    )


# =============================================================================
# Order breakdown
# =============================================================================

def orders_by_customer_chart(orders: List[Dict[str, Any]], chart_type: str = "pie", limit: int = 8) -> ChartPayload:
    """Order value per customer as a pie or donut."""
    ranked = top_n(group_sum(orders, "customer_name", "grand_total"), limit)
    return ChartPayload(
        title="Orders by Customer",
        type=chart_type,
        labels=[g.key for g in ranked],
        datasets=[Dataset(label="Total", values=[g.total for g in ranked])],
        currency=DEFAULT_CURRENCY,
    )


def customer_status_matrix(orders: List[Dict[str, Any]]) -> Tuple[Dict[str, Dict[str, float]], List[Group]]:
    """Order value per (customer, status) plus per-customer totals."""
    matrix: Dict[str, Dict[str, float]] = {}
    for order in orders:
        customer = coalesce(order.get("customer_name"), UNKNOWN)
        status = coalesce(order.get("status"), "Draft")
        by_status = matrix.setdefault(customer, {})
        by_status[status] = by_status.get(status, 0.0) + to_number(order.get("grand_total"))

    totals = [Group(key=c, label=c, total=sum(s.values())) for c, s in matrix.items()]
    return matrix, totals


def order_status_breakdown_chart(orders: List[Dict[str, Any]], limit: int = 8) -> ChartPayload:
    """Top customers on the X axis, order value stacked by status."""
    matrix, totals = customer_status_matrix(orders)
    customers = [g.key for g in top_n(totals, limit)]

    active_statuses = [
        status for status in ORDER_BREAKDOWN_STATUS_ORDER
        if any(matrix[c].get(status, 0) > 0 for c in customers)
    ]

    return ChartPayload(
        title="Order Value by Customer & Status",
        type="stacked-bar",
        labels=customers,
        datasets=[
            Dataset(
                label=ORDER_BREAKDOWN_LABELS.get(status, status),
                values=[matrix[c].get(status, 0.0) for c in customers],
                color=ORDER_BREAKDOWN_COLORS.get(status, ORDER_BREAKDOWN_FALLBACK_COLOR),
                stack="status",
            )
            for status in active_statuses
        ],
        currency=DEFAULT_CURRENCY,
        x_axis_label="Customer",
        y_axis_label="Order Value",
    )


def order_breakdown_chart(orders: List[Dict[str, Any]], chart_type: str = "stacked-bar", limit: int = 8) -> ChartPayload:
    """Dispatch on chart type: pie/donut totals or the stacked status view."""
    if chart_type in ("pie", "donut"):
        return orders_by_customer_chart(orders, chart_type, limit)
    return order_status_breakdown_chart(orders, limit)
