"""Kanban pipeline aggregation.

Documents are grouped by their ``status`` using an explicit status map.
Statuses missing from the map are left out of the columns.
"""

from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional

from models.payloads import PipelineCard, PipelineColumn, PipelinePayload
from reporting.numbers import coalesce, to_number
from reporting.tables import DEFAULT_CURRENCY, StatusStyle

DEFAULT_STATUS = "Draft"


def group_by_status(rows: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Bucket rows by status, keeping row order. A missing status counts as Draft."""
    grouped: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
    for row in rows:
        grouped[coalesce(row.get("status"), DEFAULT_STATUS)].append(row)
    return grouped


def unmapped_statuses(rows: List[Dict[str, Any]], status_map: Mapping[str, StatusStyle]) -> List[str]:
    """Statuses present in ``rows`` that the map does not display."""
    return [status for status in group_by_status(rows) if status not in status_map]


def build_pipeline(
    rows: List[Dict[str, Any]],
    status_map: Mapping[str, StatusStyle],
    *,
    title: str,
    party_field: str,
    party_name_field: str,
    delivery_field: str,
    generated_at: Optional[str] = None,
    amount_field: str = "grand_total",
    currency: str = DEFAULT_CURRENCY,
) -> PipelinePayload:
    """Shape documents into kanban columns.

    Args:
        rows: Documents with name, status, amount, party and date fields
        status_map: Ordered status -> (label, color); its order is column order
        title: Pipeline heading
        party_field: Party id field (``customer`` / ``supplier``)
        party_name_field: Party display name field, preferred over the id
        delivery_field: Field copied to each card's ``delivery_date``
        generated_at: ISO timestamp stamped on the payload
    """
    grouped = group_by_status(rows)

    columns = []
    for status, style in status_map.items():
        status_rows = grouped.get(status)
        if not status_rows:
            continue
        cards = [
            PipelineCard(
                name=row.get("name"),
                customer=coalesce(row.get(party_name_field), row.get(party_field)),
                amount=to_number(row.get(amount_field)),
                date=row.get("transaction_date"),
                delivery_date=row.get(delivery_field),
            )
            for row in status_rows
        ]
        columns.append(PipelineColumn(
            status=status,
            label=style.label,
            color=style.color,
            count=len(status_rows),
            total=sum(to_number(row.get(amount_field)) for row in status_rows),
            orders=cards,
        ))

    return PipelinePayload(
        title=title,
        currency=currency,
        generated_at=generated_at,
        columns=columns,
    )
