"""Analytics tools.

Each handler fetches raw rows through the client, hands them to a pure
function in ``reporting`` and returns the payload in wire form with its
viewer hint. Reference dates and ``generatedAt`` come from ``ctx.clock`` so
tests can pin them.
"""

import logging
from typing import Any, Dict, List, Optional

from models.payloads import PayloadBase
from reporting.aging import aging_date_sources, ar_aging_chart
from reporting.categorical import (
    order_breakdown_chart,
    sales_by_customer_chart,
    sales_by_item_chart,
    sales_by_status_chart,
    stock_levels_chart,
)
from reporting.composed import gross_profit_chart, revenue_vs_orders_chart
from reporting.funnel import PERIODS, period_start, sales_funnel
from reporting.kpi import gross_margin_kpi, orders_kpi, outstanding_kpi, overdue_kpi, revenue_kpi
from reporting.pipeline import build_pipeline, unmapped_statuses
from reporting.radar import product_radar_chart
from reporting.scatter import price_qty_points, price_vs_qty_chart, valuation_vs_stock_chart
from reporting.tables import PURCHASE_ORDER_STATUSES, SALES_ORDER_STATUSES, SPARKLINE_MONTHS
from reporting.timeseries import (
    previous_month_bounds,
    profit_loss_chart,
    revenue_trend_chart,
    shift_month,
    window_start,
)
from reporting.treemap import stock_treemap_chart
from tools.builders import arg_or, boolean, int_arg, number, object_schema, string
from tools.types import (
    CHART_UI,
    FUNNEL_UI,
    KPI_UI,
    PIPELINE_UI,
    RequiredField,
    RequiredKind,
    ToolCategory,
    ToolContext,
    ToolDefinition,
    iso_timestamp,
)

logger = logging.getLogger(__name__)

CATEGORY = ToolCategory.ANALYTICS

NOT_CANCELLED = ["docstatus", "!=", 2]
SUBMITTED = ["docstatus", "=", 1]


def _wire(payload: PayloadBase, meta: Dict[str, Any]) -> Dict[str, Any]:
    return {**payload.to_wire(), "_meta": meta}


def _stamp(ctx: ToolContext) -> str:
    return iso_timestamp(ctx.clock())


def _pipeline_warning(kind: str, rows: List[Dict[str, Any]], status_map) -> None:
    dropped = unmapped_statuses(rows, status_map)
    if dropped:
        logger.warning(f"{kind} pipeline: statuses without a column were omitted: {', '.join(dropped)}")


# =============================================================================
# Pipelines
# =============================================================================

async def order_pipeline(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    filters = []
    if args.get("customer"):
        filters.append(["customer", "=", args["customer"]])
    if args.get("exclude_cancelled"):
        filters.append(["status", "!=", "Cancelled"])

    orders = await ctx.client.list(
        "Sales Order",
        fields=["name", "customer", "customer_name", "status", "grand_total", "transaction_date", "delivery_date"],
        filters=filters,
        limit=int_arg(args, "limit", 200),
        order_by="modified desc",
    )
    _pipeline_warning("Sales order", orders, SALES_ORDER_STATUSES)

    payload = build_pipeline(
        orders,
        SALES_ORDER_STATUSES,
        title="Sales Order Pipeline",
        party_field="customer",
        party_name_field="customer_name",
        delivery_field="delivery_date",
        generated_at=_stamp(ctx),
    )
    return _wire(payload, PIPELINE_UI)


async def purchase_pipeline(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    filters = []
    if args.get("supplier"):
        filters.append(["supplier_name", "=", args["supplier"]])

    orders = await ctx.client.list(
        "Purchase Order",
        fields=["name", "supplier", "supplier_name", "status", "grand_total", "transaction_date", "schedule_date"],
        filters=filters,
        limit=int_arg(args, "limit", 200),
        order_by="modified desc",
    )
    _pipeline_warning("Purchase order", orders, PURCHASE_ORDER_STATUSES)

    payload = build_pipeline(
        orders,
        PURCHASE_ORDER_STATUSES,
        title="Purchase Order Pipeline",
        party_field="supplier",
        party_name_field="supplier_name",
        delivery_field="schedule_date",
        generated_at=_stamp(ctx),
    )
    return _wire(payload, PIPELINE_UI)


# =============================================================================
# Charts
# =============================================================================

async def stock_chart(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    limit = int_arg(args, "limit", 20)
    filters = [["actual_qty", ">", arg_or(args, "min_qty", 0)]]
    if args.get("warehouse"):
        filters.append(["warehouse", "=", args["warehouse"]])
    if args.get("item_group"):
        filters.append(["item_group", "=", args["item_group"]])

    bins = await ctx.client.list(
        "Bin",
        fields=["item_code", "warehouse", "actual_qty", "stock_value"],
        filters=filters,
        limit=limit,
        order_by="actual_qty desc",
    )
    payload = stock_levels_chart(
        bins,
        limit=limit,
        chart_type=args.get("type"),
        warehouse=args.get("warehouse"),
        generated_at=_stamp(ctx),
    )
    return _wire(payload, CHART_UI)


async def sales_chart(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    limit = int_arg(args, "limit", 10)
    group_by = arg_or(args, "group_by", "customer")

    if group_by == "status":
        invoices = await ctx.client.list(
            "Sales Invoice",
            fields=["name", "status", "grand_total"],
            filters=[NOT_CANCELLED],
            limit=500,
            order_by="modified desc",
        )
        return _wire(sales_by_status_chart(invoices, generated_at=_stamp(ctx)), CHART_UI)

    if group_by == "item":
        items = await ctx.client.list(
            "Sales Invoice Item",
            fields=["item_code", "item_name", "amount"],
            filters=[SUBMITTED],
            limit=500,
            order_by="amount desc",
        )
        return _wire(sales_by_item_chart(items, limit=limit, generated_at=_stamp(ctx)), CHART_UI)

    filters = [] if args.get("include_drafts") else [SUBMITTED]
    invoices = await ctx.client.list(
        "Sales Invoice",
        fields=["customer", "customer_name", "grand_total"],
        filters=filters,
        limit=500,
        order_by="modified desc",
    )
    return _wire(sales_by_customer_chart(invoices, limit=limit, generated_at=_stamp(ctx)), CHART_UI)


async def revenue_trend(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    months = int_arg(args, "months", 6)
    today = ctx.clock().date()

    orders = await ctx.client.list(
        "Sales Order",
        fields=["customer_name", "grand_total", "transaction_date"],
        filters=[["transaction_date", ">=", window_start(today, months).isoformat()], NOT_CANCELLED],
        limit=1000,
        order_by="transaction_date asc",
    )
    payload = revenue_trend_chart(
        orders,
        today=today,
        months=months,
        chart_type=arg_or(args, "type", "line"),
        group_by=arg_or(args, "group_by", "total"),
    )
    return _wire(payload, CHART_UI)


async def order_breakdown(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    orders = await ctx.client.list(
        "Sales Order",
        fields=["customer_name", "status", "grand_total"],
        filters=[NOT_CANCELLED],
        limit=500,
        order_by="modified desc",
    )
    payload = order_breakdown_chart(
        orders,
        chart_type=arg_or(args, "type", "stacked-bar"),
        limit=int_arg(args, "limit", 8),
    )
    return _wire(payload, CHART_UI)


async def revenue_vs_orders(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    orders = await ctx.client.list(
        "Sales Order",
        fields=["customer_name", "grand_total"],
        filters=[NOT_CANCELLED],
        limit=500,
        order_by="modified desc",
    )
    return _wire(revenue_vs_orders_chart(orders, limit=int_arg(args, "limit", 8)), CHART_UI)


async def stock_treemap(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    bins = await ctx.client.list(
        "Bin",
        fields=["item_code", "warehouse", "stock_value"],
        filters=[["stock_value", ">", 0]],
        limit=500,
        order_by="stock_value desc",
    )
    payload = stock_treemap_chart(
        bins,
        group_by=arg_or(args, "group_by", "item"),
        limit=int_arg(args, "limit", 15),
    )
    return _wire(payload, CHART_UI)


async def product_radar(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    item_codes: List[str] = list(arg_or(args, "items", []))

    if not item_codes:
        top_bins = await ctx.client.list(
            "Bin",
            fields=["item_code"],
            filters=[["actual_qty", ">", 0]],
            limit=4,
            order_by="stock_value desc",
        )
        item_codes = [b.get("item_code") for b in top_bins]

    if len(item_codes) < 2:
        return _wire(product_radar_chart(item_codes, {}, []), CHART_UI)

    # no "in" operator in list filters, so one request per item
    bins_by_item: Dict[str, List[Dict[str, Any]]] = {}
    for code in item_codes:
        bins_by_item[code] = await ctx.client.list(
            "Bin",
            fields=["actual_qty", "stock_value"],
            filters=[["item_code", "=", code]],
            limit=100,
        )

    order_items = await ctx.client.list(
        "Sales Order Item",
        fields=["item_code", "qty", "amount"],
        filters=[NOT_CANCELLED],
        limit=500,
    )
    return _wire(product_radar_chart(item_codes, bins_by_item, order_items), CHART_UI)


async def price_vs_qty(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    limit = int_arg(args, "limit", 30)

    prices = await ctx.client.list(
        "Item Price",
        fields=["item_code", "price_list_rate"],
        filters=[["selling", "=", 1]],
        limit=200,
        order_by="modified desc",
    )
    order_items = await ctx.client.list(
        "Sales Order Item",
        fields=["item_code", "qty"],
        filters=[NOT_CANCELLED],
        limit=500,
    )

    points = price_qty_points(prices, order_items, limit=limit)
    if points:
        return _wire(price_vs_qty_chart(points), CHART_UI)

    logger.debug("price_vs_qty: no priced items with orders, falling back to valuation vs stock")
    bins = await ctx.client.list(
        "Bin",
        fields=["item_code", "valuation_rate", "actual_qty"],
        filters=[["actual_qty", ">", 0], ["valuation_rate", ">", 0]],
        limit=limit,
        order_by="stock_value desc",
    )
    return _wire(valuation_vs_stock_chart(bins), CHART_UI)


async def ar_aging(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    today = ctx.clock().date()
    invoices = await ctx.client.list(
        "Sales Invoice",
        fields=["customer_name", "outstanding_amount", "due_date", "posting_date"],
        filters=[["outstanding_amount", ">", 0], SUBMITTED],
        limit=500,
        order_by="outstanding_amount desc",
    )
    logger.debug(f"ar_aging date sources: {aging_date_sources(invoices, today)}")

    payload = ar_aging_chart(
        invoices,
        today=today,
        limit=int_arg(args, "limit", 10),
        chart_type=arg_or(args, "type", "stacked-bar"),
    )
    return _wire(payload, CHART_UI)


async def gross_profit(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    group_by = arg_or(args, "group_by", "item")

    invoice_items = await ctx.client.list(
        "Sales Invoice Item",
        fields=["parent", "item_code", "item_name", "amount", "qty"],
        filters=[SUBMITTED],
        limit=500,
        order_by="amount desc",
    )
    bins = await ctx.client.list(
        "Bin",
        fields=["item_code", "valuation_rate"],
        filters=[["valuation_rate", ">", 0]],
        limit=500,
    )

    invoices: Optional[List[Dict[str, Any]]] = None
    if group_by == "customer":
        invoices = await ctx.client.list(
            "Sales Invoice",
            fields=["name", "customer_name"],
            filters=[SUBMITTED],
            limit=500,
        )

    payload = gross_profit_chart(
        invoice_items,
        bins,
        group_by=group_by,
        invoices=invoices,
        limit=int_arg(args, "limit", 10),
    )
    return _wire(payload, CHART_UI)


async def profit_loss(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    months = int_arg(args, "months", 6)
    today = ctx.clock().date()
    since = window_start(today, months).isoformat()

    sales_orders = await ctx.client.list(
        "Sales Order",
        fields=["grand_total", "transaction_date"],
        filters=[["transaction_date", ">=", since], SUBMITTED],
        limit=1000,
        order_by="transaction_date asc",
    )
    purchase_orders = await ctx.client.list(
        "Purchase Order",
        fields=["grand_total", "transaction_date"],
        filters=[["transaction_date", ">=", since], SUBMITTED],
        limit=1000,
        order_by="transaction_date asc",
    )
    payload = profit_loss_chart(
        sales_orders,
        purchase_orders,
        today=today,
        months=months,
        chart_type=arg_or(args, "type", "composed"),
    )
    return _wire(payload, CHART_UI)


# =============================================================================
# KPI cards and funnel
# =============================================================================

async def kpi_revenue(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    today = ctx.clock().date()
    orders = await ctx.client.list(
        "Sales Order",
        fields=["grand_total", "transaction_date"],
        filters=[["transaction_date", ">=", window_start(today, SPARKLINE_MONTHS).isoformat()], NOT_CANCELLED],
        limit=5000,
    )
    return _wire(revenue_kpi(orders, today), KPI_UI)


async def kpi_outstanding(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    invoices = await ctx.client.list(
        "Sales Invoice",
        fields=["outstanding_amount"],
        filters=[["outstanding_amount", ">", 0], SUBMITTED],
        limit=1000,
    )
    return _wire(outstanding_kpi(invoices), KPI_UI)


async def kpi_orders(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    today = ctx.clock().date()
    month_start = shift_month(today, 0)
    last_start, last_end = previous_month_bounds(today)

    current = await ctx.client.list(
        "Sales Order",
        fields=["grand_total"],
        filters=[["transaction_date", ">=", month_start.isoformat()], NOT_CANCELLED],
        limit=1000,
    )
    previous = await ctx.client.list(
        "Sales Order",
        fields=["grand_total"],
        filters=[
            ["transaction_date", ">=", last_start.isoformat()],
            ["transaction_date", "<=", last_end.isoformat()],
            NOT_CANCELLED,
        ],
        limit=1000,
    )
    return _wire(orders_kpi(len(current), len(previous)), KPI_UI)


async def kpi_gross_margin(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    order_items = await ctx.client.list(
        "Sales Order Item",
        fields=["item_code", "qty", "amount"],
        filters=[NOT_CANCELLED],
        limit=1000,
    )
    bins = await ctx.client.list(
        "Bin",
        fields=["item_code", "valuation_rate"],
        filters=[["valuation_rate", ">", 0]],
        limit=500,
    )
    return _wire(gross_margin_kpi(order_items, bins), KPI_UI)


async def kpi_overdue(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    today = ctx.clock().date()
    invoices = await ctx.client.list(
        "Sales Invoice",
        fields=["outstanding_amount", "due_date"],
        filters=[["due_date", "<", today.isoformat()], ["outstanding_amount", ">", 0], SUBMITTED],
        limit=1000,
    )
    return _wire(overdue_kpi(invoices), KPI_UI)


async def funnel(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    period = arg_or(args, "period", "all")
    since = period_start(ctx.clock().date(), period)

    # leads carry no transaction_date
    lead_filters = [["creation", ">=", since]] if since else []
    txn_filters = [["transaction_date", ">=", since]] if since else []

    leads = await ctx.client.list("Lead", fields=["name"], filters=lead_filters, limit=500)
    opportunities = await ctx.client.list(
        "Opportunity", fields=["name", "opportunity_amount"], filters=txn_filters, limit=500
    )
    quotations = await ctx.client.list(
        "Quotation", fields=["name", "grand_total"], filters=[*txn_filters, NOT_CANCELLED], limit=500
    )
    orders = await ctx.client.list(
        "Sales Order", fields=["name", "grand_total"], filters=[*txn_filters, NOT_CANCELLED], limit=500
    )
    return _wire(sales_funnel(leads, opportunities, quotations, orders, period), FUNNEL_UI)


# =============================================================================
# Definitions
# =============================================================================

def _analytics_tool(name: str, description: str, handler, meta: Dict[str, Any], properties=None) -> ToolDefinition:
    properties = properties or {}
    # Chart types outside the declared enum cannot be rendered
    chart_type = properties.get("type", {})
    required = ()
    if chart_type.get("enum"):
        required = (RequiredField("type", RequiredKind.ONE_OF, choices=tuple(chart_type["enum"])),)
    return ToolDefinition(
        name=name,
        description=description,
        category=CATEGORY,
        input_schema=object_schema(properties),
        handler=handler,
        meta=meta,
        required=required,
    )


analytics_tools = [
    _analytics_tool(
        "erpnext_order_pipeline",
        "Sales orders as a kanban pipeline: columns Draft, Open, To Deliver, To Bill, Completed, "
        "Cancelled with count, total value and order cards.",
        order_pipeline,
        PIPELINE_UI,
        {
            "limit": number("Max total orders to fetch (default 200)"),
            "customer": string("Filter by customer name"),
            "exclude_cancelled": boolean("Exclude cancelled orders from results (default false)"),
        },
    ),
    _analytics_tool(
        "erpnext_stock_chart",
        "Stock levels as a bar chart: actual_qty per item, optionally for one warehouse. "
        "Many items switch to horizontal bars.",
        stock_chart,
        CHART_UI,
        {
            "warehouse": string("Filter by warehouse name"),
            "item_group": string("Filter by item group"),
            "limit": number("Max items to show (default 20)"),
            "type": string(
                "Chart type (default: horizontal-bar for many items, bar for few)",
                enum=["bar", "horizontal-bar"],
            ),
            "min_qty": number("Only show items with qty above this value (default 0)"),
        },
    ),
    _analytics_tool(
        "erpnext_sales_chart",
        "Sales Invoice revenue as a chart: top customers or items (bars) or a status breakdown (donut).",
        sales_chart,
        CHART_UI,
        {
            "group_by": string("Dimension to group by (default: customer)", enum=["customer", "item", "status"]),
            "limit": number("Top N results (default 10)"),
            "include_drafts": boolean("Include Draft invoices (default false)"),
        },
    ),
    _analytics_tool(
        "erpnext_revenue_trend",
        "Monthly Sales Order revenue over time as a line or area chart, in total or one series per top customer.",
        revenue_trend,
        CHART_UI,
        {
            "months": number("How many months back to include (default 6)"),
            "type": string("Chart type (default: line)", enum=["line", "area", "stacked-area"]),
            "group_by": string("Group by total or per customer (default: total)", enum=["total", "customer"]),
        },
    ),
    _analytics_tool(
        "erpnext_order_breakdown",
        "Sales Orders per customer stacked by status, or total value per customer as a pie or donut.",
        order_breakdown,
        CHART_UI,
        {
            "type": string("Chart type (default: stacked-bar)", enum=["stacked-bar", "pie", "donut"]),
            "limit": number("Top N customers (default 8)"),
        },
    ),
    _analytics_tool(
        "erpnext_revenue_vs_orders",
        "Dual-axis composed chart per customer: revenue bars (left axis) and order count line (right axis).",
        revenue_vs_orders,
        CHART_UI,
        {"limit": number("Top N customers (default 8)")},
    ),
    _analytics_tool(
        "erpnext_stock_treemap",
        "Stock value as a treemap, one rectangle per item or per warehouse.",
        stock_treemap,
        CHART_UI,
        {
            "group_by": string("Group by item or warehouse (default: item)", enum=["item", "warehouse"]),
            "limit": number("Top N entries (default 15)"),
        },
    ),
    _analytics_tool(
        "erpnext_product_radar",
        "Radar chart comparing 2-4 items on stock qty, stock value, order lines and revenue.",
        product_radar,
        CHART_UI,
        {
            "items": {
                "type": "array",
                "items": {"type": "string"},
                "description": "2-4 item codes to compare. Leave empty to pick the top stocked items.",
            },
        },
    ),
    _analytics_tool(
        "erpnext_price_vs_qty",
        "Scatter chart of selling price (X) against total quantity ordered (Y), one point per item.",
        price_vs_qty,
        CHART_UI,
        {"limit": number("Max items to show (default 30)")},
    ),
    _analytics_tool(
        "erpnext_kpi_revenue",
        "KPI card: Sales Order revenue this month, delta vs last month and a 6 month sparkline.",
        kpi_revenue,
        KPI_UI,
    ),
    _analytics_tool(
        "erpnext_kpi_outstanding",
        "KPI card: total outstanding receivables and count of open submitted invoices.",
        kpi_outstanding,
        KPI_UI,
    ),
    _analytics_tool(
        "erpnext_kpi_orders",
        "KPI card: number of Sales Orders this month with delta vs last month.",
        kpi_orders,
        KPI_UI,
    ),
    _analytics_tool(
        "erpnext_kpi_gross_margin",
        "KPI card: estimated gross margin % from Sales Order revenue and Bin valuation rates.",
        kpi_gross_margin,
        KPI_UI,
    ),
    _analytics_tool(
        "erpnext_kpi_overdue",
        "KPI card: count and value of overdue submitted Sales Invoices.",
        kpi_overdue,
        KPI_UI,
    ),
    _analytics_tool(
        "erpnext_sales_funnel",
        "Sales funnel Lead -> Opportunity -> Quotation -> Sales Order with counts, values and conversion rates.",
        funnel,
        FUNNEL_UI,
        {"period": string("Time period (default: all)", enum=list(PERIODS))},
    ),
    _analytics_tool(
        "erpnext_ar_aging",
        "Accounts receivable aging per customer in 0-30, 31-60, 61-90 and 90+ day buckets.",
        ar_aging,
        CHART_UI,
        {
            "limit": number("Top N customers (default 10)"),
            "type": string("Chart type (default: stacked-bar)", enum=["stacked-bar", "horizontal-bar", "treemap"]),
        },
    ),
    _analytics_tool(
        "erpnext_gross_profit",
        "Composed chart of revenue (bars) and margin % (line) by item or customer, "
        "costed with Bin valuation rates.",
        gross_profit,
        CHART_UI,
        {
            "limit": number("Top N entries (default 10)"),
            "group_by": string("Group by item or customer (default: item)", enum=["item", "customer"]),
        },
    ),
    _analytics_tool(
        "erpnext_profit_loss",
        "Monthly income (Sales Orders) vs expenses (Purchase Orders) with a net profit line.",
        profit_loss,
        CHART_UI,
        {
            "months": number("How many months back (default 6)"),
            "type": string("Chart type (default: composed)", enum=["bar", "stacked-bar", "composed"]),
        },
    ),
    _analytics_tool(
        "erpnext_purchase_pipeline",
        "Purchase Orders as a kanban pipeline: columns Draft, To Receive, To Bill, Completed, "
        "Cancelled with count, total value and order cards.",
        purchase_pipeline,
        PIPELINE_UI,
        {
            "limit": number("Max POs (default 200)"),
            "supplier": string("Filter by supplier name"),
        },
    ),
]
