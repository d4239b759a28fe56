"""Delivery tools: delivery notes and shipments."""

from typing import Any, Dict

from tools.builders import (
    RequiredField,
    RequiredKind,
    create_tool,
    date_range,
    eq,
    get_tool,
    list_tool,
    pick,
    string,
)
from tools.types import ToolCategory

CATEGORY = ToolCategory.DELIVERY


def _delivery_note_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    items = []
    for item in args["items"]:
        row = {"item_code": item["item_code"], "qty": item["qty"]}
        row.update(pick(item, ("against_sales_order",)))
        items.append(row)

    data = {"customer": args["customer"], "items": items}
    data.update(pick(args, ("posting_date",)))
    return data


delivery_tools = [
    list_tool(
        "erpnext_delivery_note_list",
        "Delivery Note",
        ["name", "customer", "posting_date", "status", "total_qty", "grand_total"],
        category=CATEGORY,
        description=(
            "List Delivery Notes by customer, status or posting date range. "
            "Fields: name, customer, posting_date, status, total_qty, grand_total."
        ),
        filters=[
            eq("customer", "Filter by customer"),
            eq("status", "Filter by status (Draft, To Bill, Completed, Return Issued, Cancelled, etc.)"),
            *date_range("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_delivery_note_get",
        "Delivery Note",
        category=CATEGORY,
        description="Get one Delivery Note with its items.",
        example="MAT-DN-00001",
    ),
    create_tool(
        "erpnext_delivery_note_create",
        "Delivery Note",
        category=CATEGORY,
        description=(
            "Create a Delivery Note for a customer with at least one item (item_code, qty), "
            "usually against a Sales Order."
        ),
        properties={
            "customer": string("Customer name (ID)"),
            "items": {
                "type": "array",
                "description": "Line items: [{item_code, qty, against_sales_order?}]",
                "items": {
                    "type": "object",
                    "properties": {
                        "item_code": {"type": "string"},
                        "qty": {"type": "number"},
                        "against_sales_order": {
                            "type": "string",
                            "description": "Sales Order reference (e.g. SO-00001)",
                        },
                    },
                    "required": ["item_code", "qty"],
                },
            },
            "posting_date": string("Posting date YYYY-MM-DD (default: today)"),
        },
        required=[
            RequiredField("customer"),
            RequiredField(
                "items",
                RequiredKind.NON_EMPTY_LIST,
                item_keys=("item_code", "qty"),
                item_message="Each item must have item_code and qty",
            ),
        ],
        build=_delivery_note_payload,
    ),
    list_tool(
        "erpnext_shipment_list",
        "Shipment",
        ["name", "status", "pickup_date", "delivery_date", "carrier", "shipment_amount"],
        category=CATEGORY,
        description=(
            "List Shipments by status, carrier or pickup date range. "
            "Fields: name, status, pickup_date, delivery_date, carrier, shipment_amount."
        ),
        filters=[
            eq("status", "Filter by status (Draft, Submitted, Booked, Cancelled)"),
            eq("carrier", "Filter by carrier name"),
            *date_range("pickup_date"),
        ],
    ),
    get_tool(
        "erpnext_shipment_get",
        "Shipment",
        category=CATEGORY,
        description="Get one Shipment with parcel and address details.",
    ),
]
