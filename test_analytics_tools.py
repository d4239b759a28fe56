"""
Analytics Tool Tests

Drives the erpnext_* analytics tools through ToolDispatcher with a mocked
client that answers per doctype, and a pinned clock. Checks what each tool
asks ERPNext for and the wire payload it returns.
"""

import asyncio
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock


FIXED_NOW = datetime(2026, 3, 15, 9, 30, 0, 123000, tzinfo=timezone.utc)
STAMP = "2026-03-15T09:30:00.123Z"


def _client(rows_by_doctype=None):
    """Mock client whose list() answers from a doctype -> rows table."""
    table = rows_by_doctype or {}

    async def fake_list(doctype, **kwargs):
        rows = table.get(doctype, [])
        if callable(rows):
            return rows(kwargs)
        return rows

    client = MagicMock()
    client.list = AsyncMock(side_effect=fake_list)
    return client


def _run(client, name, args=None):
    from tools.dispatcher import ToolDispatcher
    dispatcher = ToolDispatcher(client, categories=["analytics"], clock=lambda: FIXED_NOW)
    return asyncio.run(dispatcher.execute(name, args or {}))


def _calls(client, doctype):
    return [c.kwargs for c in client.list.call_args_list if c.args[0] == doctype]


class TestPipelines:
    """Kanban tools."""

    def test_order_pipeline(self):
        """Orders are fetched newest first and grouped into columns."""
        client = _client({"Sales Order": [
            {"name": "SO-1", "customer": "C1", "status": "Draft", "grand_total": 1000},
            {"name": "SO-2", "customer": "C2", "status": "Draft", "grand_total": 2000},
            {"name": "SO-3", "customer": "C3", "status": "Completed", "grand_total": 1500},
        ]})

        result = _run(client, "erpnext_order_pipeline", {"customer": "C1", "exclude_cancelled": True})

        kwargs = _calls(client, "Sales Order")[0]
        assert kwargs["filters"] == [["customer", "=", "C1"], ["status", "!=", "Cancelled"]]
        assert kwargs["limit"] == 200
        assert kwargs["order_by"] == "modified desc"

        assert result["generatedAt"] == STAMP
        assert [(c["status"], c["count"], c["total"]) for c in result["columns"]] == [
            ("Draft", 2, 3000),
            ("Completed", 1, 1500),
        ]
        assert result["_meta"]["ui"]["resourceUri"] == "ui://mcp-erpnext/order-pipeline-viewer"

    def test_unmapped_status_logged(self, caplog):
        """Statuses without a column are warned about."""
        import logging

        client = _client({"Sales Order": [{"name": "SO-1", "status": "On Hold", "grand_total": 1}]})

        with caplog.at_level(logging.WARNING, logger="tools.analytics"):
            result = _run(client, "erpnext_order_pipeline")

        assert result["columns"] == []
        assert "On Hold" in caplog.text

    def test_purchase_pipeline_supplier_filter(self):
        """The supplier argument filters on supplier_name."""
        client = _client({"Purchase Order": [
            {"name": "PO-1", "supplier": "S1", "status": "To Bill", "grand_total": 10, "schedule_date": "2026-04-01"},
        ]})

        result = _run(client, "erpnext_purchase_pipeline", {"supplier": "Parts Inc", "limit": 20})

        kwargs = _calls(client, "Purchase Order")[0]
        assert kwargs["filters"] == [["supplier_name", "=", "Parts Inc"]]
        assert kwargs["limit"] == 20
        assert result["columns"][0]["orders"][0]["delivery_date"] == "2026-04-01"
        assert result["columns"][0]["orders"][0]["customer"] == "S1"


class TestCharts:
    """Chart tools."""

    def test_stock_chart_filters(self):
        """min_qty leads the filters, then warehouse and item group."""
        client = _client({"Bin": [{"item_code": "A", "actual_qty": 3}]})

        result = _run(client, "erpnext_stock_chart", {"warehouse": "Stores", "item_group": "Raw", "min_qty": 2})

        kwargs = _calls(client, "Bin")[0]
        assert kwargs["filters"] == [["actual_qty", ">", 2], ["warehouse", "=", "Stores"], ["item_group", "=", "Raw"]]
        assert kwargs["order_by"] == "actual_qty desc"
        assert result["subtitle"] == "Stores"
        assert result["generatedAt"] == STAMP
        assert result["_meta"]["ui"]["resourceUri"].endswith("/chart-viewer")

    def test_sales_chart_branches(self):
        """Each grouping reads its own doctype and filters."""
        client = _client({
            "Sales Invoice": [{"customer": "C1", "customer_name": "Acme", "status": "Paid", "grand_total": 5}],
            "Sales Invoice Item": [{"item_code": "A", "item_name": "Alpha", "amount": 9}],
        })

        by_customer = _run(client, "erpnext_sales_chart")
        by_status = _run(client, "erpnext_sales_chart", {"group_by": "status"})
        by_item = _run(client, "erpnext_sales_chart", {"group_by": "item"})
        with_drafts = _run(client, "erpnext_sales_chart", {"include_drafts": True})

        invoice_calls = _calls(client, "Sales Invoice")
        assert invoice_calls[0]["filters"] == [["docstatus", "=", 1]]
        assert invoice_calls[1]["filters"] == [["docstatus", "!=", 2]]
        assert invoice_calls[2]["filters"] == []
        assert _calls(client, "Sales Invoice Item")[0]["filters"] == [["docstatus", "=", 1]]

        assert by_customer["labels"] == ["Acme"]
        assert by_status["type"] == "donut"
        assert by_item["labels"] == ["Alpha"]
        assert all(r["generatedAt"] == STAMP for r in (by_customer, by_status, by_item, with_drafts))

    def test_revenue_trend_window(self):
        """The date filter starts at the first month of the window."""
        client = _client({"Sales Order": [
            {"customer_name": "Acme", "grand_total": 1000, "transaction_date": "2026-01-10"},
            {"customer_name": "Acme", "grand_total": 500, "transaction_date": "2026-03-02"},
        ]})

        result = _run(client, "erpnext_revenue_trend", {"months": 3})

        kwargs = _calls(client, "Sales Order")[0]
        assert kwargs["filters"] == [["transaction_date", ">=", "2026-01-01"], ["docstatus", "!=", 2]]
        assert kwargs["limit"] == 1000
        assert kwargs["order_by"] == "transaction_date asc"
        assert result["labels"] == ["Jan 26", "Feb 26", "Mar 26"]
        assert result["datasets"][0]["values"] == [1000, 0, 500]

    def test_whole_number_arguments_accept_floats(self):
        """months=3.0 and limit=5.0 behave like 3 and 5."""
        client = _client({
            "Sales Order": [{"customer_name": "Acme", "grand_total": 1000, "transaction_date": "2026-01-10"}],
            "Sales Invoice": [
                {"customer": f"C{i}", "customer_name": f"Cust {i}", "grand_total": 100 - i}
                for i in range(7)
            ],
        })

        trend = _run(client, "erpnext_revenue_trend", {"months": 3.0})
        sales = _run(client, "erpnext_sales_chart", {"limit": 5.0})

        assert trend["labels"] == ["Jan 26", "Feb 26", "Mar 26"]
        assert trend["datasets"][0]["values"] == [1000, 0, 0]
        assert sales["labels"] == ["Cust 0", "Cust 1", "Cust 2", "Cust 3", "Cust 4"]

    def test_stock_treemap(self):
        """Only bins with stock value are read."""
        client = _client({"Bin": [{"item_code": "A", "warehouse": "W", "stock_value": 10}]})

        result = _run(client, "erpnext_stock_treemap", {"group_by": "warehouse"})

        assert _calls(client, "Bin")[0]["filters"] == [["stock_value", ">", 0]]
        assert result["title"] == "Stock Value by Warehouse"
        assert result["treeData"][0]["name"] == "W"

    def test_product_radar_picks_top_items(self):
        """Without items the top stocked bins are compared."""
        def bins(kwargs):
            if kwargs["fields"] == ["item_code"]:
                return [{"item_code": "A"}, {"item_code": "B"}]
            code = kwargs["filters"][0][2]
            return [{"actual_qty": 10 if code == "A" else 5, "stock_value": 100}]

        client = _client({"Bin": bins, "Sales Order Item": []})

        result = _run(client, "erpnext_product_radar")

        bin_calls = _calls(client, "Bin")
        assert bin_calls[0]["limit"] == 4
        assert [c["filters"] for c in bin_calls[1:]] == [[["item_code", "=", "A"]], [["item_code", "=", "B"]]]
        assert result["subtitle"] == "A vs B"
        assert result["datasets"][1]["values"][0] == 50

    def test_product_radar_single_item(self):
        """One item gives the empty radar without further requests."""
        client = _client()

        result = _run(client, "erpnext_product_radar", {"items": ["A"]})

        client.list.assert_not_awaited()
        assert result["type"] == "radar"
        assert result["labels"] == []

    def test_price_vs_qty(self):
        """Priced items with orders become scatter points."""
        client = _client({
            "Item Price": [{"item_code": "A", "price_list_rate": 12}],
            "Sales Order Item": [{"item_code": "A", "qty": 4}],
        })

        result = _run(client, "erpnext_price_vs_qty")

        assert result["title"] == "Price vs Quantity Ordered"
        assert result["scatterData"][0]["points"] == [{"x": 12, "y": 4, "label": "A"}]
        assert _calls(client, "Bin") == []

    def test_price_vs_qty_fallback(self):
        """No pairs falls back to valuation rate vs stock."""
        client = _client({
            "Item Price": [],
            "Sales Order Item": [],
            "Bin": [{"item_code": "B", "valuation_rate": 7, "actual_qty": 2}],
        })

        result = _run(client, "erpnext_price_vs_qty", {"limit": 5})

        kwargs = _calls(client, "Bin")[0]
        assert kwargs["filters"] == [["actual_qty", ">", 0], ["valuation_rate", ">", 0]]
        assert kwargs["limit"] == 5
        assert result["title"] == "Valuation Rate vs Stock Qty"

    def test_ar_aging(self):
        """Outstanding submitted invoices are bucketed against the pinned date."""
        client = _client({"Sales Invoice": [
            {"customer_name": "Acme", "outstanding_amount": 100, "due_date": "2026-03-10"},
            {"customer_name": "Acme", "outstanding_amount": 40, "due_date": None, "posting_date": "2026-01-01"},
        ]})

        result = _run(client, "erpnext_ar_aging")

        assert _calls(client, "Sales Invoice")[0]["filters"] == [["outstanding_amount", ">", 0], ["docstatus", "=", 1]]
        assert result["datasets"][0]["values"] == [100]
        assert result["datasets"][2]["values"] == [40]

    def test_gross_profit_invoices_only_for_customers(self):
        """Invoices are fetched only when grouping by customer."""
        rows = {
            "Sales Invoice Item": [{"parent": "SINV-1", "item_code": "A", "amount": 100, "qty": 1}],
            "Bin": [{"item_code": "A", "valuation_rate": 40}],
            "Sales Invoice": [{"name": "SINV-1", "customer_name": "Acme"}],
        }

        client = _client(rows)
        by_item = _run(client, "erpnext_gross_profit")
        assert _calls(client, "Sales Invoice") == []
        assert by_item["datasets"][1]["values"] == [60.0]

        client = _client(rows)
        by_customer = _run(client, "erpnext_gross_profit", {"group_by": "customer"})
        assert len(_calls(client, "Sales Invoice")) == 1
        assert by_customer["labels"] == ["Acme"]

    def test_profit_loss(self):
        """Both order doctypes are read from the window start, submitted only."""
        client = _client({
            "Sales Order": [{"grand_total": 1000, "transaction_date": "2026-03-01"}],
            "Purchase Order": [{"grand_total": 300, "transaction_date": "2026-03-03"}],
        })

        result = _run(client, "erpnext_profit_loss", {"months": 2})

        for doctype in ("Sales Order", "Purchase Order"):
            assert _calls(client, doctype)[0]["filters"] == [["transaction_date", ">=", "2026-02-01"], ["docstatus", "=", 1]]
        assert result["datasets"][2]["values"] == [0, 700]


class TestKpisAndFunnel:
    """KPI cards and the funnel."""

    def test_kpi_revenue(self):
        """Six months of orders feed the sparkline."""
        client = _client({"Sales Order": [
            {"grand_total": 200, "transaction_date": "2026-03-02"},
            {"grand_total": 100, "transaction_date": "2026-02-10"},
        ]})

        result = _run(client, "erpnext_kpi_revenue")

        kwargs = _calls(client, "Sales Order")[0]
        assert kwargs["filters"][0] == ["transaction_date", ">=", "2025-10-01"]
        assert kwargs["limit"] == 5000
        assert result["delta"] == 100.0
        assert result["_meta"]["ui"]["resourceUri"].endswith("/kpi-viewer")

    def test_kpi_orders_bounds(self):
        """This month is open-ended, last month is a closed range."""
        def orders(kwargs):
            return [{}] * (3 if len(kwargs["filters"]) == 2 else 2)

        client = _client({"Sales Order": orders})

        result = _run(client, "erpnext_kpi_orders")

        current, previous = _calls(client, "Sales Order")
        assert current["filters"] == [["transaction_date", ">=", "2026-03-01"], ["docstatus", "!=", 2]]
        assert previous["filters"] == [
            ["transaction_date", ">=", "2026-02-01"],
            ["transaction_date", "<=", "2026-02-28"],
            ["docstatus", "!=", 2],
        ]
        assert result["value"] == 3
        assert result["delta"] == 50.0
        assert result["formattedValue"] == "3 orders"

    def test_kpi_overdue_uses_today(self):
        """Overdue means due before the pinned date."""
        client = _client({"Sales Invoice": [{"outstanding_amount": 10, "due_date": "2026-03-01"}]})

        result = _run(client, "erpnext_kpi_overdue")

        assert _calls(client, "Sales Invoice")[0]["filters"][0] == ["due_date", "<", "2026-03-15"]
        assert result["value"] == 1
        assert result["trendIsGood"] is False

    def test_kpi_outstanding_and_margin(self):
        """Outstanding and margin cards read their doctypes."""
        client = _client({
            "Sales Invoice": [{"outstanding_amount": 1234.5}],
            "Sales Order Item": [{"item_code": "A", "qty": 1, "amount": 100}],
            "Bin": [{"item_code": "A", "valuation_rate": 80}],
        })

        outstanding = _run(client, "erpnext_kpi_outstanding")
        margin = _run(client, "erpnext_kpi_gross_margin")

        assert outstanding["formattedValue"] == "1 inv. / €1,234.50"
        assert margin["value"] == 20.0
        assert margin["trend"] == "flat"

    def test_funnel_period_filters(self):
        """Leads filter on creation, the other stages on transaction_date."""
        client = _client({
            "Lead": [{"name": "L1"}, {"name": "L2"}],
            "Opportunity": [{"name": "O1", "opportunity_amount": 500}],
        })

        result = _run(client, "erpnext_sales_funnel", {"period": "this_quarter"})

        assert _calls(client, "Lead")[0]["filters"] == [["creation", ">=", "2026-01-01"]]
        assert _calls(client, "Opportunity")[0]["filters"] == [["transaction_date", ">=", "2026-01-01"]]
        assert _calls(client, "Quotation")[0]["filters"] == [
            ["transaction_date", ">=", "2026-01-01"],
            ["docstatus", "!=", 2],
        ]
        assert result["subtitle"] == "This Quarter"
        assert [s["count"] for s in result["stages"]] == [2, 1, 0, 0]
        assert result["stages"][1]["conversionRate"] == 50
        assert result["_meta"]["ui"]["resourceUri"].endswith("/funnel-viewer")

    def test_funnel_all_time(self):
        """The all period applies no date filter."""
        client = _client()

        _run(client, "erpnext_sales_funnel")

        assert _calls(client, "Lead")[0]["filters"] == []
        assert _calls(client, "Sales Order")[0]["filters"] == [["docstatus", "!=", 2]]


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
