"""
Tool Dispatcher Tests

Runs typed CRUD tools end to end through ToolDispatcher with a mocked
FrappeClient. Covers name resolution, validation before any remote call,
request shaping per tool, result shapes, metrics and error propagation.
"""

import asyncio
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock


FIXED_NOW = datetime(2026, 3, 15, 9, 30, 0, 123000, tzinfo=timezone.utc)


def _mock_client():
    client = MagicMock()
    client.list = AsyncMock(return_value=[])
    client.get = AsyncMock(return_value={"name": "DOC-1"})
    client.create = AsyncMock(return_value={"name": "NEW-1"})
    client.update = AsyncMock(return_value={"name": "DOC-1"})
    client.delete = AsyncMock(return_value=None)
    client.submit = AsyncMock(return_value={"name": "DOC-1", "docstatus": 1})
    client.cancel = AsyncMock(return_value=None)
    return client


def _dispatcher(client=None, categories=None):
    from tools.dispatcher import ToolDispatcher
    return ToolDispatcher(client or _mock_client(), categories=categories, clock=lambda: FIXED_NOW)


class TestResolution:
    """Finding tools by name."""

    def test_unknown_tool_lists_available(self):
        """Unknown names raise with every available tool listed."""
        from tools.errors import UnknownToolError

        dispatcher = _dispatcher(categories=["setup"])
        with pytest.raises(UnknownToolError) as exc_info:
            asyncio.run(dispatcher.execute("erpnext_customer_list", {}))

        message = str(exc_info.value)
        assert message.startswith('Unknown tool: "erpnext_customer_list". Available: ')
        assert "erpnext_company_list, erpnext_company_create" in message

    def test_category_restriction(self):
        """Only tools from the enabled categories are registered."""
        dispatcher = _dispatcher(categories=["crm", "assets"])
        assert dispatcher.count == 16
        assert {t.category.value for t in dispatcher.list_tools()} == {"crm", "assets"}

    def test_all_categories_by_default(self):
        """No restriction means all 120 tools."""
        dispatcher = _dispatcher()
        assert dispatcher.count == 120
        assert len(dispatcher.to_wire_format()) == 120

    def test_wire_format_has_no_handlers(self):
        """Wire entries carry only protocol keys."""
        for entry in _dispatcher().to_wire_format():
            assert set(entry) <= {"name", "description", "inputSchema", "_meta"}


class TestValidation:
    """Required fields are checked before the client is touched."""

    def test_missing_field_blocks_remote_call(self):
        """A missing customer stops the create before any request."""
        from tools.errors import MissingFieldError

        client = _mock_client()
        dispatcher = _dispatcher(client)

        with pytest.raises(MissingFieldError, match="'customer' is required"):
            asyncio.run(dispatcher.execute("erpnext_sales_order_create", {"items": [{"item_code": "A", "qty": 1, "rate": 2}]}))

        client.create.assert_not_awaited()

    def test_none_args_treated_as_empty(self):
        """execute(name, None) behaves like an empty argument object."""
        client = _mock_client()
        result = asyncio.run(_dispatcher(client).execute("erpnext_company_list", None))
        assert result["count"] == 0

    def test_empty_update_rejected(self):
        """An update with nothing to change fails locally."""
        from tools.errors import MissingFieldError

        client = _mock_client()
        with pytest.raises(MissingFieldError, match="At least one field to update is required"):
            asyncio.run(_dispatcher(client).execute("erpnext_customer_update", {"name": "CUST-1"}))
        client.update.assert_not_awaited()


class TestListTools:
    """List tools shape filters and results."""

    def test_customer_list_filters(self):
        """Disabled filter comes first, then the equality filters."""
        client = _mock_client()
        client.list.return_value = [{"name": "CUST-1"}, {"name": "CUST-2"}]

        result = asyncio.run(_dispatcher(client).execute(
            "erpnext_customer_list",
            {"territory": "France", "limit": 5},
        ))

        args, kwargs = client.list.call_args
        assert args == ("Customer",)
        assert kwargs["filters"] == [["disabled", "=", 0], ["territory", "=", "France"]]
        assert kwargs["limit"] == 5
        assert kwargs["order_by"] == "modified desc"
        assert result["doctype"] == "Customer"
        assert result["count"] == 2
        assert result["_meta"]["ui"]["resourceUri"] == "ui://mcp-erpnext/doclist-viewer"

    def test_default_limit(self):
        """Omitted limit uses the tool default."""
        client = _mock_client()
        asyncio.run(_dispatcher(client).execute("erpnext_sales_order_list", {"date_from": "2026-01-01"}))

        kwargs = client.list.call_args.kwargs
        assert kwargs["limit"] == 20
        assert kwargs["filters"] == [["transaction_date", ">=", "2026-01-01"]]

    def test_account_list_ordering_and_flag(self):
        """Accounts sort by name and is_group false still filters."""
        client = _mock_client()
        asyncio.run(_dispatcher(client).execute("erpnext_account_list", {"is_group": False}))

        kwargs = client.list.call_args.kwargs
        assert kwargs["order_by"] == "name asc"
        assert kwargs["limit"] == 50
        assert ["is_group", "=", 0] in kwargs["filters"]

    def test_leave_balance(self):
        """Leave balance reads submitted allocations for one employee."""
        client = _mock_client()
        client.list.return_value = [{"leave_type": "Casual Leave", "total_leaves_allocated": 10}]

        result = asyncio.run(_dispatcher(client).execute("erpnext_leave_balance", {"employee": "HR-EMP-1"}))

        args, kwargs = client.list.call_args
        assert args == ("Leave Allocation",)
        assert kwargs["filters"] == [["employee", "=", "HR-EMP-1"], ["docstatus", "=", 1]]
        assert result["employee"] == "HR-EMP-1"
        assert result["count"] == 1


class TestWriteTools:
    """Create, update, submit and cancel through typed tools."""

    def test_customer_create_forwards_present_optionals(self):
        """Empty-string and None optionals are dropped."""
        client = _mock_client()
        client.create.return_value = {"name": "Acme"}

        result = asyncio.run(_dispatcher(client).execute(
            "erpnext_customer_create",
            {"customer_name": "Acme", "territory": "", "email_id": None, "customer_group": "Commercial"},
        ))

        client.create.assert_awaited_once_with("Customer", {"customer_name": "Acme", "customer_group": "Commercial"})
        assert result["message"] == "Customer Acme created successfully"

    def test_sales_order_delivery_date_on_lines(self):
        """delivery_date is copied onto the order and every line."""
        client = _mock_client()
        items = [{"item_code": "A", "qty": 2, "rate": 10, "note": "ignored"}]

        asyncio.run(_dispatcher(client).execute(
            "erpnext_sales_order_create",
            {"customer": "Acme", "items": items, "delivery_date": "2026-04-01"},
        ))

        doctype, data = client.create.call_args.args
        assert doctype == "Sales Order"
        assert data == {
            "customer": "Acme",
            "items": [{"item_code": "A", "qty": 2, "rate": 10, "delivery_date": "2026-04-01"}],
            "delivery_date": "2026-04-01",
        }

    def test_sales_order_update_only_known_fields(self):
        """Sales order update patches only delivery_date and items."""
        client = _mock_client()

        result = asyncio.run(_dispatcher(client).execute(
            "erpnext_sales_order_update",
            {"name": "SO-1", "delivery_date": "2026-05-01", "customer": "Other"},
        ))

        client.update.assert_awaited_once_with("Sales Order", "SO-1", {"delivery_date": "2026-05-01"})
        assert result["message"] == "Sales Order SO-1 updated successfully"

    def test_submit_goes_through_client_submit(self):
        """Typed submit uses the fetch-then-submit client path."""
        client = _mock_client()

        result = asyncio.run(_dispatcher(client).execute("erpnext_sales_invoice_submit", {"name": "SINV-1"}))

        client.submit.assert_awaited_once_with("Sales Invoice", "SINV-1")
        assert result["message"] == "Sales Invoice SINV-1 submitted successfully"

    def test_cancel(self):
        """Typed cancel calls client.cancel."""
        client = _mock_client()

        result = asyncio.run(_dispatcher(client).execute("erpnext_sales_order_cancel", {"name": "SO-9"}))

        client.cancel.assert_awaited_once_with("Sales Order", "SO-9")
        assert result["message"] == "Sales Order SO-9 cancelled successfully"

    def test_supplier_type_default(self):
        """supplier_type defaults to Company."""
        client = _mock_client()

        asyncio.run(_dispatcher(client).execute(
            "erpnext_supplier_create",
            {"supplier_name": "Parts Inc", "supplier_group": "Hardware"},
        ))

        data = client.create.call_args.args[1]
        assert data["supplier_type"] == "Company"

    def test_expense_claim_lines(self):
        """Expense lines get an empty description when none is given."""
        client = _mock_client()

        asyncio.run(_dispatcher(client).execute(
            "erpnext_expense_claim_create",
            {"employee": "HR-EMP-1", "expenses": [{"expense_type": "Travel", "amount": 120}]},
        ))

        data = client.create.call_args.args[1]
        assert data["expenses"] == [{"expense_type": "Travel", "amount": 120, "description": ""}]


class TestErrorsAndMetrics:
    """Failures propagate and are counted."""

    def test_remote_error_propagates_unchanged(self):
        """FrappeClientError from the client reaches the caller as-is."""
        from connectors.frappe import FrappeClientError

        error = FrappeClientError("POST ... failed: conflict (HTTP 409)", 409, {"exc_type": "TimestampMismatchError"})
        client = _mock_client()
        client.submit.side_effect = error

        with pytest.raises(FrappeClientError) as exc_info:
            asyncio.run(_dispatcher(client).execute("erpnext_sales_order_submit", {"name": "SO-1"}))

        assert exc_info.value is error
        assert client.submit.await_count == 1

    def test_metrics_recorded(self):
        """Completed and failed runs are counted per tool."""
        from core.observability import get_metrics
        from tools.errors import MissingFieldError

        before = get_metrics().get_summary()["tools"]["by_name"].get("erpnext_item_get", {})
        dispatcher = _dispatcher()

        asyncio.run(dispatcher.execute("erpnext_item_get", {"name": "ITEM-1"}))
        with pytest.raises(MissingFieldError) as exc_info:
            asyncio.run(dispatcher.execute("erpnext_item_get", {}))

        tools = get_metrics().get_summary()["tools"]
        assert tools["last_errors"]["erpnext_item_get"] == str(exc_info.value)
        after = tools["by_name"]["erpnext_item_get"]
        assert after["started"] == before.get("started", 0) + 2
        assert after["completed"] == before.get("completed", 0) + 1
        assert after["failed"] == before.get("failed", 0) + 1

    def test_concurrent_execution(self):
        """Concurrent invocations share one dispatcher safely."""
        client = _mock_client()
        dispatcher = _dispatcher(client)

        async def run_many():
            return await asyncio.gather(*[
                dispatcher.execute("erpnext_item_get", {"name": f"ITEM-{i}"}) for i in range(10)
            ])

        results = asyncio.run(run_many())
        assert len(results) == 10
        assert client.get.await_count == 10


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
