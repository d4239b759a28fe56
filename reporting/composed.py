"""Composed dual-axis charts: bars on the left axis, a line on the right axis."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models.payloads import ChartPayload, Dataset
from reporting.categorical import UNKNOWN, group_sum, top_n
from reporting.numbers import coalesce, round_half_up, to_number
from reporting.tables import DEFAULT_CURRENCY


def revenue_vs_orders_chart(orders: List[Dict[str, Any]], limit: int = 8) -> ChartPayload:
    """Revenue bars and order-count line per top customer."""
    ranked = top_n(group_sum(orders, "customer_name", "grand_total"), limit)

    return ChartPayload(
        title="Revenue vs Order Count",
        subtitle=f"Top {len(ranked)} customers",
        type="composed",
        labels=[g.key for g in ranked],
        datasets=[
            Dataset(label="Revenue", values=[g.total for g in ranked], color="#60a5fa", type="bar"),
            Dataset(
                label="Orders",
                values=[g.count for g in ranked],
                color="#fbbf24",
                type="line",
                y_axis_id="right",
                show_dots=True,
            ),
        ],
        show_right_axis=True,
        y_axis_label="Revenue (€)",
        right_axis_label="# Orders",
        currency=DEFAULT_CURRENCY,
    )


# =============================================================================
# Gross profit
# =============================================================================

@dataclass
class ProfitLine:
    key: str
    label: str
    revenue: float = 0.0
    cost: float = 0.0

    @property
    def margin(self) -> float:
        """Margin percent with two decimals; 0 without revenue."""
        if self.revenue > 0:
            return round_half_up((self.revenue - self.cost) / self.revenue * 10000) / 100
        return 0


def unit_cost_map(bins: List[Dict[str, Any]]) -> Dict[str, float]:
    """Highest valuation rate per item across warehouses."""
    costs: Dict[str, float] = {}
    for row in bins:
        code = row.get("item_code")
        costs[code] = max(costs.get(code, 0.0), to_number(row.get("valuation_rate")))
    return costs


def profit_lines(
    invoice_items: List[Dict[str, Any]],
    unit_costs: Dict[str, float],
    group_by: str = "item",
    customer_by_invoice: Optional[Dict[str, str]] = None,
) -> List[ProfitLine]:
    """Revenue and estimated cost per item or per customer."""
    lines: Dict[str, ProfitLine] = {}
    for row in invoice_items:
        if group_by == "customer":
            key = (customer_by_invoice or {}).get(row.get("parent"), UNKNOWN)
            label = key
        else:
            key = coalesce(row.get("item_code"), UNKNOWN)
            label = coalesce(row.get("item_name"), key)

        line = lines.get(key)
        if line is None:
            line = lines[key] = ProfitLine(key=key, label=label)
        line.revenue += to_number(row.get("amount"))
        line.cost += to_number(row.get("qty")) * unit_costs.get(row.get("item_code"), 0.0)
    return list(lines.values())


def gross_profit_chart(
    invoice_items: List[Dict[str, Any]],
    bins: List[Dict[str, Any]],
    *,
    group_by: str = "item",
    invoices: Optional[List[Dict[str, Any]]] = None,
    limit: int = 10,
) -> ChartPayload:
    """Revenue bars with a margin % line, by item or by customer.

    ``invoices`` maps invoice names to customers and is only read when
    grouping by customer.
    """
    customer_by_invoice = None
    if group_by == "customer":
        customer_by_invoice = {
            inv.get("name"): coalesce(inv.get("customer_name"), UNKNOWN)
            for inv in invoices or []
        }

    lines = profit_lines(invoice_items, unit_cost_map(bins), group_by, customer_by_invoice)
    ranked = sorted(lines, key=lambda line: line.revenue, reverse=True)[:limit]
    noun = "customers" if group_by == "customer" else "items"

    return ChartPayload(
        title="Gross Profit by Customer" if group_by == "customer" else "Gross Profit by Item",
        subtitle=f"Top {len(ranked)} {noun}",
        type="composed",
        labels=[line.label for line in ranked],
        datasets=[
            Dataset(
                label="Revenue",
                values=[round_half_up(line.revenue) for line in ranked],
                color="#60a5fa",
                type="bar",
            ),
            Dataset(
                label="Margin %",
                values=[line.margin for line in ranked],
                color="#4ade80",
                type="line",
                y_axis_id="right",
                show_dots=True,
            ),
        ],
        show_right_axis=True,
        currency=DEFAULT_CURRENCY,
        y_axis_label="Revenue",
        right_axis_label="Margin %",
    )
