"""Sales tools: customers, sales orders, sales invoices, quotations."""

from typing import Any, Dict

from tools.builders import (
    RequiredField,
    RequiredKind,
    boolean,
    cancel_tool,
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
    submit_tool,
    update_tool,
)
from tools.types import INVOICE_UI, ToolCategory

CATEGORY = ToolCategory.SALES

PRICED_LINE = {"item_code": "string", "qty": "number", "rate": "number"}
PRICED_KEYS = ("item_code", "qty", "rate")

PRICED_ITEMS = RequiredField(
    "items",
    RequiredKind.NON_EMPTY_LIST,
    item_keys=PRICED_KEYS,
)


def _priced_items_schema(description: str = "Line items: [{item_code, qty, rate}]"):
    return line_items_schema(description, PRICED_LINE, PRICED_KEYS)


def _sales_order_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    delivery_date = args.get("delivery_date")
    data = {
        "customer": args["customer"],
        "items": line_items(args["items"], PRICED_KEYS, delivery_date=delivery_date),
    }
    data.update(pick(args, ("delivery_date",)))
    return data


def _sales_invoice_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    data = {"customer": args["customer"], "items": line_items(args["items"], PRICED_KEYS)}
    data.update(pick(args, ("posting_date", "due_date")))
    return data


def _quotation_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    data = {
        "quotation_to": args["quotation_to"],
        "party_name": args["party_name"],
        "items": line_items(args["items"], PRICED_KEYS),
    }
    data.update(pick(args, ("transaction_date", "valid_till")))
    return data


sales_tools = [
    # Customers
    list_tool(
        "erpnext_customer_list",
        "Customer",
        ["name", "customer_name", "customer_group", "territory", "email_id", "disabled"],
        category=CATEGORY,
        description=(
            "List ERPNext customers (active only unless include_disabled). "
            "Fields: name, customer_name, customer_group, territory, email_id, disabled."
        ),
        filters=[
            exclude_disabled("customers"),
            eq("customer_group", "Filter by customer group"),
            eq("territory", "Filter by territory"),
        ],
    ),
    get_tool(
        "erpnext_customer_get",
        "Customer",
        category=CATEGORY,
        description="Get one customer by name (ID), including contact details.",
    ),
    create_tool(
        "erpnext_customer_create",
        "Customer",
        category=CATEGORY,
        description="Create a Customer. Requires customer_name; group, territory, email and type are optional.",
        properties={
            "customer_name": string("Full customer name"),
            "customer_group": string("Customer group (default: 'Commercial')"),
            "territory": string("Territory (default: 'All Territories')"),
            "email_id": string("Primary email address"),
            "customer_type": string(
                "Customer type: Company or Individual (default: Company)",
                enum=["Company", "Individual"],
            ),
        },
        required=[RequiredField("customer_name")],
        optional=["customer_group", "territory", "email_id", "customer_type"],
    ),
    update_tool(
        "erpnext_customer_update",
        "Customer",
        category=CATEGORY,
        description="Update a Customer. Pass only the fields to change.",
        properties={
            "customer_name": string("New customer name"),
            "customer_group": string("New customer group"),
            "territory": string("New territory"),
            "email_id": string("New email address"),
            "disabled": boolean("Set to true to disable the customer"),
        },
    ),

    # Sales orders
    list_tool(
        "erpnext_sales_order_list",
        "Sales Order",
        ["name", "customer", "transaction_date", "status", "grand_total", "currency"],
        category=CATEGORY,
        description=(
            "List Sales Orders by customer, status or transaction date range. "
            "Fields: name, customer, transaction_date, status, grand_total, currency."
        ),
        filters=[
            eq("customer", "Filter by customer"),
            eq("status", "Filter by status (Draft, To Deliver and Bill, Completed, Cancelled, etc.)"),
            *date_range("transaction_date"),
        ],
    ),
    get_tool(
        "erpnext_sales_order_get",
        "Sales Order",
        category=CATEGORY,
        description="Get one Sales Order with its line items.",
        example="SO-00001",
    ),
    create_tool(
        "erpnext_sales_order_create",
        "Sales Order",
        category=CATEGORY,
        description=(
            "Create a Sales Order for a customer with at least one item (item_code, qty, rate). "
            "delivery_date, when given, applies to the order and every line."
        ),
        properties={
            "customer": string("Customer name (ID)"),
            "items": _priced_items_schema(),
            "delivery_date": string("Delivery date YYYY-MM-DD"),
        },
        required=[RequiredField("customer"), PRICED_ITEMS],
        build=_sales_order_payload,
    ),
    update_tool(
        "erpnext_sales_order_update",
        "Sales Order",
        category=CATEGORY,
        description="Update a Draft Sales Order's delivery_date or replace its items.",
        properties={
            "delivery_date": string("New delivery date YYYY-MM-DD"),
            "items": line_items_schema("Replacement item list: [{item_code, qty, rate}]", PRICED_LINE),
        },
        fields=["delivery_date", "items"],
        example="SO-00001",
    ),
    submit_tool(
        "erpnext_sales_order_submit",
        "Sales Order",
        category=CATEGORY,
        description="Submit a Draft Sales Order (status becomes 'To Deliver and Bill').",
        example="SO-00001",
    ),
    cancel_tool(
        "erpnext_sales_order_cancel",
        "Sales Order",
        category=CATEGORY,
        description="Cancel a submitted, not yet completed Sales Order.",
        example="SO-00001",
    ),

    # Sales invoices
    list_tool(
        "erpnext_sales_invoice_list",
        "Sales Invoice",
        ["name", "customer", "posting_date", "due_date", "status", "grand_total", "outstanding_amount"],
        category=CATEGORY,
        description=(
            "List Sales Invoices by customer, status or posting date range. "
            "Fields: name, customer, posting_date, due_date, status, grand_total, outstanding_amount."
        ),
        filters=[
            eq("customer", "Filter by customer"),
            eq("status", "Filter by status (Draft, Unpaid, Paid, Overdue, Cancelled, etc.)"),
            *date_range("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_sales_invoice_get",
        "Sales Invoice",
        category=CATEGORY,
        description="Get one Sales Invoice with its line items.",
        example="SINV-00001",
        meta=INVOICE_UI,
    ),
    create_tool(
        "erpnext_sales_invoice_create",
        "Sales Invoice",
        category=CATEGORY,
        description="Create a Sales Invoice for a customer with at least one item. posting_date and due_date are optional.",
        properties={
            "customer": string("Customer name (ID)"),
            "items": _priced_items_schema(),
            "posting_date": string("Invoice date YYYY-MM-DD (default: today)"),
            "due_date": string("Payment due date YYYY-MM-DD"),
        },
        required=[RequiredField("customer"), PRICED_ITEMS],
        build=_sales_invoice_payload,
    ),
    submit_tool(
        "erpnext_sales_invoice_submit",
        "Sales Invoice",
        category=CATEGORY,
        description="Submit a Draft Sales Invoice, posting it to the ledger (status becomes 'Unpaid').",
        example="SINV-00001",
    ),

    # Quotations
    list_tool(
        "erpnext_quotation_list",
        "Quotation",
        ["name", "party_name", "transaction_date", "status", "grand_total"],
        category=CATEGORY,
        description="List Quotations by party_name or status. Fields: name, party_name, transaction_date, status, grand_total.",
        filters=[
            eq("party_name", "Filter by party name"),
            eq("status", "Filter by status (Draft, Open, Replied, Ordered, Lost, Cancelled)"),
        ],
    ),
    get_tool(
        "erpnext_quotation_get",
        "Quotation",
        category=CATEGORY,
        description="Get one Quotation with line items and terms.",
        example="QTN-00001",
    ),
    create_tool(
        "erpnext_quotation_create",
        "Quotation",
        category=CATEGORY,
        description="Create a Quotation for a Customer or Lead with at least one item.",
        properties={
            "quotation_to": string("Party type: Customer or Lead", enum=["Customer", "Lead"]),
            "party_name": string("Customer or Lead name"),
            "items": _priced_items_schema(),
            "transaction_date": string("Quotation date YYYY-MM-DD (default: today)"),
            "valid_till": string("Validity date YYYY-MM-DD"),
        },
        required=[RequiredField("quotation_to"), RequiredField("party_name"), PRICED_ITEMS],
        build=_quotation_payload,
    ),
]
