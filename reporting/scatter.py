"""Scatter charts pairing two metrics per item."""

from typing import Any, Dict, List

from models.payloads import ChartPayload, ScatterPoint, ScatterSeries
from reporting.numbers import round_half_up, to_number

SCATTER_COLOR = "#818cf8"


def _scatter(title: str, points: List[ScatterPoint], x_label: str, y_label: str) -> ChartPayload:
    return ChartPayload(
        title=title,
        type="scatter",
        labels=[],
        datasets=[],
        scatter_data=[ScatterSeries(label="Items", color=SCATTER_COLOR, points=points)],
        x_axis_label=x_label,
        y_axis_label=y_label,
    )


def price_qty_points(
    item_prices: List[Dict[str, Any]],
    order_items: List[Dict[str, Any]],
    limit: int = 30,
) -> List[ScatterPoint]:
    """(selling price, ordered qty) for items that have both.

    The first non-zero price seen for an item is kept.
    """
    prices: Dict[str, float] = {}
    for row in item_prices:
        code = row.get("item_code")
        if not prices.get(code):
            prices[code] = to_number(row.get("price_list_rate"))

    quantities: Dict[str, float] = {}
    for row in order_items:
        code = row.get("item_code")
        quantities[code] = quantities.get(code, 0.0) + to_number(row.get("qty"))

    paired = [code for code in prices if code in quantities][:limit]
    return [
        ScatterPoint(x=round_half_up(prices[code]), y=round_half_up(quantities[code]), label=code)
        for code in paired
    ]


def price_vs_qty_chart(points: List[ScatterPoint]) -> ChartPayload:
    return _scatter("Price vs Quantity Ordered", points, "Selling Price (€)", "Total Qty Ordered")


def valuation_vs_stock_chart(bins: List[Dict[str, Any]]) -> ChartPayload:
    """Fallback view from stock bins: valuation rate vs quantity on hand."""
    points = [
        ScatterPoint(
            x=round_half_up(to_number(b.get("valuation_rate"))),
            y=round_half_up(to_number(b.get("actual_qty"))),
            label=b.get("item_code"),
        )
        for b in bins
    ]
    return _scatter("Valuation Rate vs Stock Qty", points, "Valuation Rate (€/unit)", "Stock Qty")
