"""Purchasing tools: suppliers, purchase orders, invoices, receipts, supplier quotations."""

from typing import Any, Dict

from tools.builders import (
    RequiredField,
    RequiredKind,
    arg_or,
    create_tool,
    date_range,
    eq,
    exclude_disabled,
    get_tool,
    line_items,
    line_items_schema,
    list_tool,
    pick,
    string,
)
from tools.types import ToolCategory

CATEGORY = ToolCategory.PURCHASING

PRICED_KEYS = ("item_code", "qty", "rate")
DEFAULT_SUPPLIER_TYPE = "Company"


def _supplier_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    data = {
        "supplier_name": args["supplier_name"],
        "supplier_group": args["supplier_group"],
        "supplier_type": arg_or(args, "supplier_type", DEFAULT_SUPPLIER_TYPE),
    }
    data.update(pick(args, ("country", "default_currency")))
    return data


def _purchase_order_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    schedule_date = args.get("schedule_date")
    data = {
        "supplier": args["supplier"],
        "items": line_items(args["items"], PRICED_KEYS, schedule_date=schedule_date),
    }
    data.update(pick(args, ("schedule_date",)))
    return data


purchasing_tools = [
    list_tool(
        "erpnext_supplier_list",
        "Supplier",
        ["name", "supplier_name", "supplier_group", "supplier_type", "email_id", "disabled"],
        category=CATEGORY,
        description=(
            "List Suppliers (active only unless include_disabled) by group or type. "
            "Fields: name, supplier_name, supplier_group, supplier_type, email_id, disabled."
        ),
        filters=[
            exclude_disabled("suppliers"),
            eq("supplier_group", "Filter by supplier group"),
            eq("supplier_type", "Filter by supplier type (Company, Individual)"),
        ],
    ),
    get_tool(
        "erpnext_supplier_get",
        "Supplier",
        category=CATEGORY,
        description="Get one Supplier by name (ID).",
    ),
    create_tool(
        "erpnext_supplier_create",
        "Supplier",
        category=CATEGORY,
        description="Create a Supplier. Requires supplier_name and supplier_group; supplier_type defaults to Company.",
        properties={
            "supplier_name": string("Supplier company or person name"),
            "supplier_group": string("Supplier Group (e.g. 'Hardware', 'Services')"),
            "supplier_type": string("Company or Individual (default Company)"),
            "country": string("Country name"),
            "default_currency": string("Currency code (e.g. EUR, USD)"),
        },
        required=[RequiredField("supplier_name"), RequiredField("supplier_group")],
        build=_supplier_payload,
    ),
    list_tool(
        "erpnext_purchase_order_list",
        "Purchase Order",
        ["name", "supplier", "transaction_date", "schedule_date", "status", "grand_total", "currency"],
        category=CATEGORY,
        description=(
            "List Purchase Orders by supplier, status or transaction date range. "
            "Fields: name, supplier, transaction_date, schedule_date, status, grand_total, currency."
        ),
        filters=[
            eq("supplier", "Filter by supplier"),
            eq("status", "Filter by status (Draft, To Receive and Bill, To Bill, Completed, Cancelled, etc.)"),
            *date_range("transaction_date"),
        ],
    ),
    get_tool(
        "erpnext_purchase_order_get",
        "Purchase Order",
        category=CATEGORY,
        description="Get one Purchase Order with its line items.",
        example="PO-00001",
    ),
    create_tool(
        "erpnext_purchase_order_create",
        "Purchase Order",
        category=CATEGORY,
        description=(
            "Create a Purchase Order for a supplier with at least one item (item_code, qty, rate). "
            "schedule_date, when given, applies to the order and every line."
        ),
        properties={
            "supplier": string("Supplier name (ID)"),
            "items": line_items_schema(
                "Line items: [{item_code, qty, rate}]",
                {"item_code": "string", "qty": "number", "rate": "number"},
                PRICED_KEYS,
            ),
            "schedule_date": string("Expected delivery date YYYY-MM-DD"),
        },
        required=[
            RequiredField("supplier"),
            RequiredField("items", RequiredKind.NON_EMPTY_LIST, item_keys=PRICED_KEYS),
        ],
        build=_purchase_order_payload,
    ),
    list_tool(
        "erpnext_purchase_invoice_list",
        "Purchase Invoice",
        ["name", "supplier", "posting_date", "due_date", "status", "grand_total", "outstanding_amount"],
        category=CATEGORY,
        description=(
            "List Purchase Invoices by supplier, status or posting date range. "
            "Fields: name, supplier, posting_date, due_date, status, grand_total, outstanding_amount."
        ),
        filters=[
            eq("supplier", "Filter by supplier"),
            eq("status", "Filter by status (Draft, Unpaid, Paid, Overdue, Cancelled, etc.)"),
            *date_range("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_purchase_invoice_get",
        "Purchase Invoice",
        category=CATEGORY,
        description="Get one Purchase Invoice with its line items.",
        example="PINV-00001",
    ),
    list_tool(
        "erpnext_purchase_receipt_list",
        "Purchase Receipt",
        ["name", "supplier", "posting_date", "status", "total_qty", "grand_total"],
        category=CATEGORY,
        description=(
            "List Purchase Receipts by supplier, status or posting date range. "
            "Fields: name, supplier, posting_date, status, total_qty, grand_total."
        ),
        filters=[
            eq("supplier", "Filter by supplier"),
            eq("status", "Filter by status (Draft, To Bill, Completed, Cancelled, etc.)"),
            *date_range("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_purchase_receipt_get",
        "Purchase Receipt",
        category=CATEGORY,
        description="Get one Purchase Receipt with received items.",
        example="MAT-PRE-00001",
    ),
    list_tool(
        "erpnext_supplier_quotation_list",
        "Supplier Quotation",
        ["name", "supplier", "transaction_date", "status", "grand_total"],
        category=CATEGORY,
        description="List Supplier Quotations by supplier or status. Fields: name, supplier, transaction_date, status, grand_total.",
        filters=[
            eq("supplier", "Filter by supplier"),
            eq("status", "Filter by status (Draft, Submitted, Ordered, Lost, Cancelled)"),
        ],
    ),
]
