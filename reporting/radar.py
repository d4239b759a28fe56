"""Radar comparison of a handful of items across several dimensions.

Each dimension is scaled to 0-100 against the largest value among the compared
items only, so adding or removing an item moves every other item's values.
"""

from typing import Any, Dict, List, Sequence

from models.payloads import ChartPayload, Dataset
from reporting.numbers import round_half_up, to_number
from reporting.tables import RADAR_COLORS

RADAR_DIMENSIONS = ("Stock Qty", "Stock Value", "Order Lines", "Revenue")

MIN_COMPARED_ITEMS = 2


def empty_radar() -> ChartPayload:
    return ChartPayload(title="Product Comparison", type="radar", labels=[], datasets=[])


def raw_dimensions(
    item_codes: Sequence[str],
    bins_by_item: Dict[str, List[Dict[str, Any]]],
    order_items: List[Dict[str, Any]],
) -> Dict[str, List[float]]:
    """Unscaled [qty, stock value, order lines, revenue] per item."""
    raw: Dict[str, List[float]] = {}
    for code in item_codes:
        bins = bins_by_item.get(code, [])
        raw[code] = [
            sum(to_number(b.get("actual_qty")) for b in bins),
            sum(to_number(b.get("stock_value")) for b in bins),
            0.0,
            0.0,
        ]

    for row in order_items:
        vector = raw.get(row.get("item_code"))
        if vector is not None:
            vector[2] += 1
            vector[3] += to_number(row.get("amount"))
    return raw


def normalize_dimensions(raw: Dict[str, List[float]], item_codes: Sequence[str]) -> Dict[str, List[int]]:
    """Scale each dimension to 0-100 against its maximum (at least 1)."""
    dimension_count = len(RADAR_DIMENSIONS)
    maxima = [
        max([1.0] + [raw.get(code, [0.0] * dimension_count)[d] for code in item_codes])
        for d in range(dimension_count)
    ]
    return {
        code: [
            round_half_up(raw.get(code, [0.0] * dimension_count)[d] / maxima[d] * 100)
            for d in range(dimension_count)
        ]
        for code in item_codes
    }


def product_radar_chart(
    item_codes: Sequence[str],
    bins_by_item: Dict[str, List[Dict[str, Any]]],
    order_items: List[Dict[str, Any]],
) -> ChartPayload:
    """Compare items on stock and sales dimensions."""
    if len(item_codes) < MIN_COMPARED_ITEMS:
        return empty_radar()

    scaled = normalize_dimensions(raw_dimensions(item_codes, bins_by_item, order_items), item_codes)

    return ChartPayload(
        title="Product Comparison",
        subtitle=" vs ".join(item_codes),
        type="radar",
        labels=list(RADAR_DIMENSIONS),
        datasets=[
            Dataset(label=code, values=scaled[code], color=RADAR_COLORS[i % len(RADAR_COLORS)])
            for i, code in enumerate(item_codes)
        ],
    )
