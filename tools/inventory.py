"""Inventory tools: items, stock balances, warehouses, stock entries."""

from tools.builders import (
    RequiredField,
    RequiredKind,
    boolean,
    create_tool,
    date_range,
    eq,
    exclude_disabled,
    flag,
    get_tool,
    list_tool,
    number,
    string,
    update_tool,
)
from tools.types import STOCK_UI, ToolCategory

CATEGORY = ToolCategory.INVENTORY

STOCK_ENTRY_LINE = {
    "type": "array",
    "description": "Line items: [{item_code, qty, s_warehouse?, t_warehouse?, basic_rate?}]",
    "items": {
        "type": "object",
        "properties": {
            "item_code": {"type": "string"},
            "qty": {"type": "number"},
            "s_warehouse": {"type": "string", "description": "Source warehouse"},
            "t_warehouse": {"type": "string", "description": "Target warehouse"},
            "basic_rate": {"type": "number", "description": "Valuation rate (for receipts)"},
        },
        "required": ["item_code", "qty"],
    },
}


inventory_tools = [
    list_tool(
        "erpnext_item_list",
        "Item",
        ["name", "item_code", "item_name", "item_group", "stock_uom", "is_stock_item", "standard_rate"],
        category=CATEGORY,
        description=(
            "List Items (active only unless include_disabled), by item_group or stock flag. "
            "Fields: name, item_code, item_name, item_group, stock_uom, is_stock_item, standard_rate."
        ),
        filters=[
            exclude_disabled("items"),
            eq("item_group", "Filter by item group"),
            flag("is_stock_item", "Filter by stock item flag (true=stock items only)"),
        ],
    ),
    get_tool(
        "erpnext_item_get",
        "Item",
        category=CATEGORY,
        description="Get one Item by name/item_code, including pricing and stock details.",
    ),
    create_tool(
        "erpnext_item_create",
        "Item",
        category=CATEGORY,
        description=(
            "Create an Item (product or service). Requires item_code and item_name. "
            "Set is_stock_item=false for services."
        ),
        properties={
            "item_code": string("Unique item code"),
            "item_name": string("Human-readable item name"),
            "item_group": string("Item group (default: 'All Item Groups')"),
            "uom": string("Unit of measure (default: 'Nos')"),
            "is_stock_item": boolean("True for physical stock items (default: true)"),
            "standard_rate": number("Default selling rate"),
            "description": string("Item description"),
        },
        required=[RequiredField("item_code"), RequiredField("item_name")],
        optional=["item_group", "uom", "is_stock_item", "standard_rate", "description"],
    ),
    update_tool(
        "erpnext_item_update",
        "Item",
        category=CATEGORY,
        description="Update an Item. Pass only the fields to change.",
        properties={
            "item_name": string("New item name"),
            "item_group": string("New item group"),
            "standard_rate": number("New default selling rate"),
            "description": string("New description"),
            "disabled": boolean("Set to true to disable the item"),
        },
    ),
    list_tool(
        "erpnext_stock_balance",
        "Bin",
        [
            "name",
            "item_code",
            "warehouse",
            "actual_qty",
            "reserved_qty",
            "projected_qty",
            "valuation_rate",
            "stock_value",
        ],
        category=CATEGORY,
        description=(
            "Stock balance per item and warehouse, read from Bin. "
            "Fields: item_code, warehouse, actual_qty, reserved_qty, projected_qty, valuation_rate, stock_value."
        ),
        filters=[
            eq("item_code", "Filter by item code"),
            eq("warehouse", "Filter by warehouse"),
        ],
        limit=50,
        meta=STOCK_UI,
    ),
    list_tool(
        "erpnext_warehouse_list",
        "Warehouse",
        ["name", "warehouse_name", "warehouse_type", "company"],
        category=CATEGORY,
        description="List Warehouses. Fields: name, warehouse_name, warehouse_type, company.",
        filters=[
            eq("company", "Filter by company"),
            eq("warehouse_type", "Filter by warehouse type"),
        ],
    ),
    list_tool(
        "erpnext_stock_entry_list",
        "Stock Entry",
        ["name", "stock_entry_type", "posting_date", "from_warehouse", "to_warehouse", "total_amount"],
        category=CATEGORY,
        description=(
            "List Stock Entries (transfers, receipts, issues) by type or posting date range. "
            "Fields: name, stock_entry_type, posting_date, from_warehouse, to_warehouse, total_amount."
        ),
        filters=[
            eq("stock_entry_type", "Filter by type (Material Issue, Material Receipt, Material Transfer, etc.)"),
            *date_range("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_stock_entry_get",
        "Stock Entry",
        category=CATEGORY,
        description="Get one Stock Entry with its item details.",
        example="STE-00001",
    ),
    create_tool(
        "erpnext_stock_entry_create",
        "Stock Entry",
        category=CATEGORY,
        description=(
            "Create a Stock Entry (issue, receipt or transfer). Requires stock_entry_type and items "
            "with item_code and qty; warehouses may be set per line or as defaults."
        ),
        properties={
            "stock_entry_type": string(
                "Entry type: Material Issue, Material Receipt, Material Transfer",
                enum=["Material Issue", "Material Receipt", "Material Transfer"],
            ),
            "items": STOCK_ENTRY_LINE,
            "from_warehouse": string("Default source warehouse (applies to all items if not per-item)"),
            "to_warehouse": string("Default target warehouse (applies to all items if not per-item)"),
            "posting_date": string("Posting date YYYY-MM-DD"),
            "remarks": string("Optional remarks"),
        },
        required=[
            RequiredField("stock_entry_type"),
            RequiredField("items", RequiredKind.NON_EMPTY_LIST),
        ],
        optional=["from_warehouse", "to_warehouse", "posting_date", "remarks"],
    ),
]
