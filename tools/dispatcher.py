"""Tool dispatcher.

Resolves a tool by name, validates its required arguments and runs its
handler against the shared client. Holds no per-call state, so concurrent
``execute`` calls need no locking.
"""

import time
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from connectors.frappe import FrappeClient
from core.observability import (
    log_tool_complete,
    log_tool_error,
    log_tool_start,
    record_tool_completed,
    record_tool_failed,
    record_tool_started,
    with_correlation,
)
from tools.errors import UnknownToolError
from tools.registry import CategoryLike, all_tools
from tools.types import ToolContext, ToolDefinition, utc_now


class ToolDispatcher:
    """
    Entry point for tool invocations.

    Usage:
        dispatcher = ToolDispatcher(client, categories=["sales", "analytics"])
        result = await dispatcher.execute("erpnext_customer_list", {"limit": 5})
    """

    def __init__(
        self,
        client: FrappeClient,
        categories: Optional[Sequence[CategoryLike]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client
        self.context = ToolContext(client=client, clock=clock or utc_now)
        self._tools: Dict[str, ToolDefinition] = {t.name: t for t in all_tools(categories)}

    @property
    def count(self) -> int:
        return len(self._tools)

    def list_tools(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def to_wire_format(self) -> List[Dict[str, Any]]:
        """Handler-free listing for protocol exposure."""
        return [tool.to_wire_format() for tool in self._tools.values()]

    async def execute(
        self,
        name: str,
        args: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> Any:
        """Run one tool.

        Args:
            name: Tool name, e.g. ``erpnext_sales_order_submit``
            args: Tool arguments; None is treated as no arguments
            request_id: Correlation id for logs, generated when omitted

        Raises:
            UnknownToolError: No enabled tool has this name
            MissingFieldError: A required argument is missing or malformed
            FrappeApiError: The remote call failed
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name, self._tools.keys())

        args = args or {}
        doctype = args.get("doctype") if isinstance(args.get("doctype"), str) else None

        with with_correlation(
            request_id=request_id or str(uuid.uuid4()),
            tool_name=name,
            category=tool.category.value,
            doctype=doctype,
        ):
            record_tool_started(name)
            log_tool_start(name)
            started = time.monotonic()
            try:
                tool.validate(args)
                result = await tool.handler(args, self.context)
            except Exception as e:
                record_tool_failed(name, str(e))
                log_tool_error(name, str(e), error_type=type(e).__name__)
                raise

            duration_ms = (time.monotonic() - started) * 1000
            record_tool_completed(name, duration_ms)
            log_tool_complete(name, duration_ms=round(duration_ms, 1))
            return result
