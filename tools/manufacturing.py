"""Manufacturing tools: bills of materials, work orders, job cards."""

from tools.builders import (
    RequiredField,
    RequiredKind,
    create_tool,
    date_range,
    eq,
    flag,
    get_tool,
    list_tool,
    number,
    string,
)
from tools.types import ToolCategory

CATEGORY = ToolCategory.MANUFACTURING


manufacturing_tools = [
    list_tool(
        "erpnext_bom_list",
        "BOM",
        ["name", "item", "item_name", "quantity", "uom", "is_active", "is_default", "total_cost"],
        category=CATEGORY,
        description=(
            "List Bills of Materials by item, active or default flag. "
            "Fields: name, item, item_name, quantity, uom, is_active, is_default, total_cost."
        ),
        filters=[
            eq("item", "Filter by finished goods item code"),
            flag("is_active", "Filter by active status (default: all)"),
            flag("is_default", "Filter for default BOMs only"),
        ],
    ),
    get_tool(
        "erpnext_bom_get",
        "BOM",
        category=CATEGORY,
        description="Get one BOM with raw materials and operations.",
        example="BOM-ITEM-00001",
    ),
    list_tool(
        "erpnext_work_order_list",
        "Work Order",
        ["name", "production_item", "qty", "produced_qty", "status", "planned_start_date", "planned_end_date"],
        category=CATEGORY,
        description=(
            "List Work Orders by production_item, status or planned start date range. "
            "Fields: name, production_item, qty, produced_qty, status, planned_start_date, planned_end_date."
        ),
        filters=[
            eq("production_item", "Filter by item being produced"),
            eq("status", "Filter by status (Draft, Not Started, In Process, Completed, Stopped, Cancelled)"),
            *date_range("planned_start_date"),
        ],
    ),
    get_tool(
        "erpnext_work_order_get",
        "Work Order",
        category=CATEGORY,
        description="Get one Work Order with operations and materials.",
        example="MFG-WO-00001",
    ),
    create_tool(
        "erpnext_work_order_create",
        "Work Order",
        category=CATEGORY,
        description=(
            "Create a Work Order from production_item, bom_no and qty. "
            "planned_start_date and the WIP/finished goods warehouses are optional."
        ),
        properties={
            "production_item": string("Item code of the item to produce"),
            "bom_no": string("BOM to use (e.g. BOM-ITEM-00001)"),
            "qty": number("Quantity to produce"),
            "planned_start_date": string("Planned start date YYYY-MM-DD"),
            "wip_warehouse": string("Work-In-Progress warehouse"),
            "fg_warehouse": string("Finished Goods target warehouse"),
        },
        required=[
            RequiredField("production_item"),
            RequiredField("bom_no"),
            RequiredField("qty", RequiredKind.NOT_NULL),
        ],
        optional=["planned_start_date", "wip_warehouse", "fg_warehouse"],
    ),
    list_tool(
        "erpnext_job_card_list",
        "Job Card",
        ["name", "work_order", "operation", "status", "for_quantity", "total_completed_qty", "workstation"],
        category=CATEGORY,
        description=(
            "List Job Cards (operation tracking) by work_order, status or operation. "
            "Fields: name, work_order, operation, status, for_quantity, total_completed_qty, workstation."
        ),
        filters=[
            eq("work_order", "Filter by Work Order"),
            eq("status", "Filter by status (Open, Work In Progress, Completed, Cancelled)"),
            eq("operation", "Filter by operation name"),
        ],
    ),
    get_tool(
        "erpnext_job_card_get",
        "Job Card",
        category=CATEGORY,
        description="Get one Job Card with time logs and material transfers.",
    ),
]
