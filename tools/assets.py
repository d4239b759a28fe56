"""Fixed asset tools: assets, movements, maintenance, categories."""

from tools.builders import (
    RequiredField,
    RequiredKind,
    create_tool,
    date_range,
    eq,
    get_tool,
    list_tool,
    number,
    string,
)
from tools.types import ToolCategory

CATEGORY = ToolCategory.ASSETS


assets_tools = [
    list_tool(
        "erpnext_asset_list",
        "Asset",
        [
            "name",
            "asset_name",
            "asset_category",
            "status",
            "purchase_date",
            "gross_purchase_amount",
            "current_value",
            "location",
            "custodian",
        ],
        category=CATEGORY,
        description=(
            "List Fixed Assets by status, category, location or custodian. Fields: name, asset_name, "
            "asset_category, status, purchase_date, gross_purchase_amount, current_value, location, custodian."
        ),
        filters=[
            eq("status", "Filter by status (Draft, Submitted, Partially Depreciated, Fully Depreciated, Sold, Scrapped)"),
            eq("asset_category", "Filter by asset category"),
            eq("location", "Filter by location"),
            eq("custodian", "Filter by custodian (employee)"),
        ],
    ),
    get_tool(
        "erpnext_asset_get",
        "Asset",
        category=CATEGORY,
        description="Get one Asset including depreciation schedule and maintenance logs.",
    ),
    create_tool(
        "erpnext_asset_create",
        "Asset",
        category=CATEGORY,
        description=(
            "Create an Asset. Requires asset_name, asset_category, company, purchase_date and "
            "gross_purchase_amount; item_code, location and custodian are optional."
        ),
        properties={
            "asset_name": string("Name/description of the asset"),
            "asset_category": string("Asset category (e.g. Computers, Vehicles)"),
            "company": string("Company owning the asset"),
            "purchase_date": string("Purchase date YYYY-MM-DD"),
            "gross_purchase_amount": number("Purchase cost (before depreciation)"),
            "item_code": string("Linked item code (optional)"),
            "location": string("Physical location of the asset"),
            "custodian": string("Employee responsible for the asset"),
        },
        required=[
            RequiredField("asset_name"),
            RequiredField("asset_category"),
            RequiredField("company"),
            RequiredField("purchase_date"),
            RequiredField("gross_purchase_amount", RequiredKind.NOT_NULL),
        ],
        optional=["item_code", "location", "custodian"],
    ),
    list_tool(
        "erpnext_asset_movement_list",
        "Asset Movement",
        ["name", "transaction_date", "purpose", "company"],
        category=CATEGORY,
        description=(
            "List Asset Movements (transfers between locations or custodians) by purpose or date range. "
            "Fields: name, transaction_date, purpose, company."
        ),
        filters=[
            eq("purpose", "Filter by purpose", choices=["Issue", "Transfer", "Receipt"]),
            *date_range("transaction_date"),
        ],
    ),
    get_tool(
        "erpnext_asset_movement_get",
        "Asset Movement",
        category=CATEGORY,
        description="Get one Asset Movement including the assets moved.",
    ),
    list_tool(
        "erpnext_asset_maintenance_list",
        "Asset Maintenance",
        ["name", "asset_name", "asset_category", "maintenance_team", "maintenance_status"],
        category=CATEGORY,
        description=(
            "List Asset Maintenance records by asset_name or maintenance_status. "
            "Fields: name, asset_name, asset_category, maintenance_team, maintenance_status."
        ),
        filters=[
            eq("asset_name", "Filter by asset name"),
            eq(
                "maintenance_status",
                "Filter by status",
                choices=["Planned", "Overdue", "Cancelled", "Completed"],
            ),
        ],
    ),
    get_tool(
        "erpnext_asset_maintenance_get",
        "Asset Maintenance",
        category=CATEGORY,
        description="Get one Asset Maintenance record including its tasks.",
    ),
    list_tool(
        "erpnext_asset_category_list",
        "Asset Category",
        ["name", "asset_category_name"],
        category=CATEGORY,
        description="List Asset Categories. Fields: name, asset_category_name.",
    ),
]
