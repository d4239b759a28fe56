"""Frappe / ERPNext HTTP Client.

Low-level HTTP client for the Frappe REST API.
Handles authentication headers, request shaping, timeouts and error classification.

API surface:
    GET    /api/resource/{doctype}            list documents
    GET    /api/resource/{doctype}/{name}     get one document
    POST   /api/resource/{doctype}            create
    PUT    /api/resource/{doctype}/{name}     update
    DELETE /api/resource/{doctype}/{name}     delete
    POST   /api/method/{method}               call a whitelisted method

No retries are performed here. Every failure surfaces as a FrappeApiError subclass.
"""

from typing import Any, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
from urllib.parse import quote
import asyncio
import json
import logging
import time

import aiohttp

from core.observability.logging import with_correlation
from core.observability.metrics import record_request

logger = logging.getLogger(__name__)

# A filter is a (field, operator, value) triple; filters are ANDed.
FrappeFilter = Sequence[Any]


class FrappeApiError(Exception):
    """Base exception for Frappe API errors."""
    def __init__(self, message: str, status_code: int = 0, response_body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    @property
    def exc_type(self) -> Optional[str]:
        """Server-side exception class, e.g. ``TimestampMismatchError``."""
        if isinstance(self.response_body, dict):
            return self.response_body.get("exc_type")
        return None

    @property
    def server_message(self) -> Optional[str]:
        """Short human summary reported by the server."""
        if isinstance(self.response_body, dict):
            message = self.response_body.get("message")
            if message is not None:
                return message
            return self.response_body.get("exc_type")
        return None

    @property
    def has_field_messages(self) -> bool:
        """True when the body carries ``_server_messages``.

        That channel holds field-level validation messages. It is reported
        here but not decoded; callers needing it read ``response_body``.
        """
        return isinstance(self.response_body, dict) and "_server_messages" in self.response_body


class FrappeNetworkError(FrappeApiError):
    """No response reached us (status 0)."""
    def __init__(self, message: str):
        super().__init__(message, 0, None)


class FrappeTimeoutError(FrappeApiError):
    """Request exceeded the configured timeout (status 408)."""
    def __init__(self, message: str):
        super().__init__(message, 408, None)


class FrappeClientError(FrappeApiError):
    """Request rejected by the server (4xx): validation, permission, not found, conflict."""
    pass


class FrappeServerError(FrappeApiError):
    """Server-side fault (5xx)."""
    pass


@dataclass
class FrappeClientConfig:
    """Configuration for the Frappe API client."""
    base_url: str
    api_key: str
    api_secret: str
    timeout_seconds: float = 30

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")

    @property
    def authorization_header(self) -> str:
        return f"token {self.api_key}:{self.api_secret}"


@dataclass
class ListOptions:
    """Query options for a list call."""
    fields: List[str] = field(default_factory=list)
    filters: List[FrappeFilter] = field(default_factory=list)
    order_by: Optional[str] = None
    limit: Optional[int] = None
    limit_start: Optional[int] = None

    def to_params(self) -> Dict[str, str]:
        """Encode as Frappe query parameters."""
        params: Dict[str, str] = {}
        if self.fields:
            params["fields"] = json.dumps(list(self.fields))
        if self.filters:
            params["filters"] = json.dumps([list(f) for f in self.filters])
        if self.order_by:
            params["order_by"] = self.order_by
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.limit_start is not None:
            params["limit_start"] = str(self.limit_start)
        params["as_dict"] = "1"
        return params


def _resource_path(doctype: str, name: Optional[str] = None) -> str:
    path = f"/api/resource/{quote(doctype, safe='')}"
    if name is not None:
        path += f"/{quote(name, safe='')}"
    return path


class FrappeClient:
    """HTTP client for the Frappe REST API.

    Holds only its fixed configuration and the aiohttp session, so one
    instance can serve concurrent tool invocations.

    Usage:
        client = FrappeClient(FrappeClientConfig(url, key, secret))
        await client.connect()
        orders = await client.list("Sales Order", fields=["name", "status"], limit=20)
        order = await client.get("Sales Order", "SO-00001")
    """

    def __init__(self, config: FrappeClientConfig):
        self.config = config
        self._headers = {
            "Authorization": config.authorization_header,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        self._session: Optional[aiohttp.ClientSession] = None

    async def connect(self) -> None:
        """Open the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession()

    async def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "FrappeClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make an authenticated API request.

        Args:
            method: HTTP method
            path: Path below the base URL, starting with ``/api``
            params: Query parameters
            body: JSON body

        Returns:
            Parsed JSON (or raw text for non-JSON responses)

        Raises:
            FrappeTimeoutError: Timeout fired before a response arrived
            FrappeNetworkError: Transport failure
            FrappeClientError: 4xx response
            FrappeServerError: 5xx response
        """
        if not self._session:
            raise FrappeApiError("Not connected. Call connect() first.")

        url = f"{self.config.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        started = time.monotonic()

        try:
            async with self._session.request(
                method,
                url,
                headers=self._headers,
                params=params,
                json=body,
                timeout=timeout,
            ) as response:
                response_text = await response.text()
                content_type = response.headers.get("Content-Type", "")
                status = response.status
                reason = response.reason or ""
        except asyncio.TimeoutError:
            record_request(method, 408, _elapsed_ms(started))
            logger.warning(f"Timeout after {self.config.timeout_seconds}s: {method} {path}")
            raise FrappeTimeoutError(
                f"Request timed out after {self.config.timeout_seconds}s: {method} {path}"
            )
        except aiohttp.ClientError as e:
            record_request(method, 0, _elapsed_ms(started))
            logger.warning(f"Network error on {method} {path}: {e}")
            raise FrappeNetworkError(f"Network error on {method} {path}: {e}")

        duration_ms = _elapsed_ms(started)
        record_request(method, status, duration_ms)
        logger.debug(f"{method} {path} -> {status} ({duration_ms:.0f}ms)")

        decoded = True
        response_body: Any = response_text
        if "application/json" in content_type and response_text:
            try:
                response_body = json.loads(response_text)
            except ValueError:
                decoded = False
                logger.warning(f"Malformed JSON body from {method} {path} (HTTP {status})")

        if 200 <= status < 300:
            if not decoded:
                raise FrappeApiError(
                    f"{method} {path} returned malformed JSON (HTTP {status})", status, response_text
                )
            return response_body

        summary = reason
        if isinstance(response_body, dict):
            if response_body.get("message") is not None:
                summary = response_body["message"]
            elif response_body.get("exc_type") is not None:
                summary = response_body["exc_type"]

        message = f"{method} {path} failed: {summary} (HTTP {status})"
        logger.warning(message)
        if status >= 500:
            raise FrappeServerError(message, status, response_body)
        if status >= 400:
            raise FrappeClientError(message, status, response_body)
        raise FrappeApiError(message, status, response_body)

    # =========================================================================
    # Resource CRUD
    # =========================================================================

    async def list(
        self,
        doctype: str,
        fields: Optional[List[str]] = None,
        filters: Optional[List[FrappeFilter]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        limit_start: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """List documents of a doctype.

        Args:
            doctype: Doctype name (e.g. "Sales Order")
            fields: Fields to project
            filters: (field, operator, value) triples
            order_by: Sort clause, e.g. "modified desc"
            limit: Maximum rows
            limit_start: Offset

        Returns:
            Rows as dicts
        """
        options = ListOptions(
            fields=fields or [],
            filters=filters or [],
            order_by=order_by,
            limit=limit,
            limit_start=limit_start,
        )
        response = await self._request("GET", _resource_path(doctype), params=options.to_params())
        return _field(response, "data") or []

    async def get(self, doctype: str, name: str) -> Dict[str, Any]:
        """Get a single document by name."""
        response = await self._request("GET", _resource_path(doctype, name))
        return _field(response, "data")

    async def create(self, doctype: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a document. The doctype is stamped onto the payload."""
        response = await self._request(
            "POST",
            _resource_path(doctype),
            body={"data": {**data, "doctype": doctype}},
        )
        return _field(response, "data")

    async def update(self, doctype: str, name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Partially update a document."""
        response = await self._request("PUT", _resource_path(doctype, name), body={"data": data})
        return _field(response, "data")

    async def delete(self, doctype: str, name: str) -> None:
        """Delete a document."""
        await self._request("DELETE", _resource_path(doctype, name))

    async def call(self, method: str, args: Optional[Dict[str, Any]] = None) -> Any:
        """Call a whitelisted server method and return its ``message``."""
        with with_correlation(remote_method=method):
            response = await self._request("POST", f"/api/method/{method}", body=args or {})
        return _field(response, "message")

    # =========================================================================
    # Lifecycle transitions
    # =========================================================================

    async def submit(self, doctype: str, name: str) -> Any:
        """Submit a document (Draft -> Submitted).

        frappe.client.submit rejects the request unless the payload carries the
        document's current ``modified`` timestamp, so the document is fetched
        first and forwarded whole. A concurrent edit between the two calls
        still fails with FrappeClientError, which propagates unchanged.
        """
        doc = await self.get(doctype, name)
        return await self.call("frappe.client.submit", {"doc": {**doc, "doctype": doctype}})

    async def cancel(self, doctype: str, name: str) -> Any:
        """Cancel a submitted document (Submitted -> Cancelled)."""
        return await self.call("frappe.client.cancel", {"doctype": doctype, "name": name})


def _field(response: Any, key: str) -> Any:
    if isinstance(response, dict):
        return response.get(key)
    return None


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000
