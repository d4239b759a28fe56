"""
HTTP Surface Tests

Runs the FastAPI app with an injected mock client through Starlette's
TestClient: listing, invocation and the mapping of tool and remote errors
to status codes.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient


def _mock_client():
    client = MagicMock()
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    client._session = object()
    client.list = AsyncMock(return_value=[])
    client.get = AsyncMock(return_value={"name": "ITEM-1"})
    client.create = AsyncMock(return_value={"name": "Acme"})
    return client


def _app(client):
    from api.server import create_app
    return create_app(client=client)


class TestLifecycle:
    """Startup and shutdown."""

    def test_client_connected_and_closed(self):
        """The lifespan opens and closes the ERPNext session."""
        client = _mock_client()

        with TestClient(_app(client)):
            client.connect.assert_awaited_once()
            client.disconnect.assert_not_awaited()

        client.disconnect.assert_awaited_once()

    def test_health(self):
        """Health reports the tool count and the session state."""
        client = _mock_client()

        with TestClient(_app(client)) as http:
            body = http.get("/health").json()

        assert body["status"] == "healthy"
        assert body["tool_count"] == 120
        assert body["services"] == {"api": "up", "erpnext": "connected"}

    def test_health_without_session(self):
        """A client without a session shows as disconnected."""
        client = _mock_client()
        client._session = None

        with TestClient(_app(client)) as http:
            body = http.get("/health").json()

        assert body["services"]["erpnext"] == "disconnected"


class TestListing:
    """Tool and category listings."""

    def test_list_all_tools(self):
        """All tools come back in wire format."""
        with TestClient(_app(_mock_client())) as http:
            tools = http.get("/tools").json()

        assert len(tools) == 120
        assert tools[0]["name"] == "erpnext_customer_list"
        assert "inputSchema" in tools[0]

    def test_list_one_category(self):
        """?category= narrows the listing."""
        with TestClient(_app(_mock_client())) as http:
            tools = http.get("/tools", params={"category": "Setup"}).json()

        assert [t["name"] for t in tools] == ["erpnext_company_list", "erpnext_company_create"]

    def test_unknown_category(self):
        """An unknown category is a 400."""
        with TestClient(_app(_mock_client())) as http:
            response = http.get("/tools", params={"category": "payroll"})

        assert response.status_code == 400
        assert "Unknown tool category" in response.json()["detail"]

    def test_categories(self):
        """Every category is listed with its enabled count."""
        with TestClient(_app(_mock_client())) as http:
            categories = {c["name"]: c["enabled_tools"] for c in http.get("/tools/categories").json()}

        assert len(categories) == 13
        assert categories["analytics"] == 19
        assert categories["setup"] == 2


class TestInvocation:
    """POST /tools/{name}."""

    def test_call_tool(self):
        """The JSON body is the argument object."""
        client = _mock_client()
        client.list.return_value = [{"name": "CUST-1"}]

        with TestClient(_app(client)) as http:
            response = http.post("/tools/erpnext_customer_list", json={"territory": "France"})

        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert client.list.call_args.kwargs["filters"] == [["disabled", "=", 0], ["territory", "=", "France"]]

    def test_call_without_body(self):
        """No body means no arguments."""
        with TestClient(_app(_mock_client())) as http:
            response = http.post("/tools/erpnext_company_list", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 200
        assert response.json()["count"] == 0

    def test_unknown_tool(self):
        """Unknown tools are a 404."""
        with TestClient(_app(_mock_client())) as http:
            response = http.post("/tools/erpnext_nope", json={})

        assert response.status_code == 404
        assert response.json()["error"] == "unknown_tool"

    def test_missing_field(self):
        """Validation failures are a 422 naming the field."""
        client = _mock_client()

        with TestClient(_app(client)) as http:
            response = http.post("/tools/erpnext_customer_create", json={})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "missing_field"
        assert body["tool"] == "erpnext_customer_create"
        assert body["field"] == "customer_name"
        client.create.assert_not_awaited()

    def test_unsupported_chart_type(self):
        """A chart type the tool cannot render is a 422, not a server error."""
        client = _mock_client()

        with TestClient(_app(client)) as http:
            response = http.post("/tools/erpnext_stock_chart", json={"type": "pie"})

        assert response.status_code == 422
        assert response.json()["field"] == "type"
        client.list.assert_not_awaited()


class TestRemoteErrors:
    """Remote failures keep their diagnostics."""

    def test_client_error_keeps_status(self):
        """A remote 404 stays a 404."""
        from connectors.frappe import FrappeClientError

        client = _mock_client()
        client.get.side_effect = FrappeClientError(
            "GET /api/resource/Item/X failed: DoesNotExistError (HTTP 404)",
            404,
            {"exc_type": "DoesNotExistError"},
        )

        with TestClient(_app(client)) as http:
            response = http.post("/tools/erpnext_item_get", json={"name": "X"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "FrappeClientError"
        assert body["exc_type"] == "DoesNotExistError"
        assert body["remote_status"] == 404

    def test_server_error_is_bad_gateway(self):
        """A remote 5xx becomes 502."""
        from connectors.frappe import FrappeServerError

        client = _mock_client()
        client.get.side_effect = FrappeServerError("boom (HTTP 500)", 500, {"message": "boom"})

        with TestClient(_app(client)) as http:
            response = http.post("/tools/erpnext_item_get", json={"name": "X"})

        assert response.status_code == 502
        assert response.json()["remote_status"] == 500
        assert response.json()["server_message"] == "boom"

    def test_network_error_is_bad_gateway(self):
        """No response at all is also a 502."""
        from connectors.frappe import FrappeNetworkError

        client = _mock_client()
        client.get.side_effect = FrappeNetworkError("Network error on GET /api/resource/Item/X: refused")

        with TestClient(_app(client)) as http:
            response = http.post("/tools/erpnext_item_get", json={"name": "X"})

        assert response.status_code == 502
        assert response.json()["remote_status"] == 0


class TestMetricsEndpoint:
    """GET /metrics."""

    def test_metrics_after_call(self):
        """Tool calls show up in the summary."""
        with TestClient(_app(_mock_client())) as http:
            http.post("/tools/erpnext_company_list", json={})
            summary = http.get("/metrics").json()

        assert summary["tools"]["by_name"]["erpnext_company_list"]["completed"] >= 1
        assert "timings" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
