"""Numeric helpers shared by every aggregation.

Remote rows carry numbers as JSON numbers, numeric strings or nulls. Every
aggregation goes through ``to_number`` so a bad cell counts as zero instead of
poisoning a whole sum.
"""

import math
from typing import Any


def to_number(value: Any) -> float:
    """Coerce a remote cell to float. Missing or invalid values become 0."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coalesce(value: Any, default: Any) -> Any:
    """Return ``default`` only when ``value`` is None."""
    return default if value is None else value


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (display rounding)."""
    return int(math.floor(value + 0.5))


def round1(value: float) -> float:
    """Round to one decimal place, .05 going up."""
    return round_half_up(value * 10) / 10


def percent_change(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``; 0 when ``previous`` is not positive."""
    if previous > 0:
        return (current - previous) / previous * 100
    return 0.0


def format_currency(amount: float, symbol: str = "€") -> str:
    """Format as ``€1,234.50`` (en-US grouping, two decimals)."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
