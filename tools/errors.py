"""Tool-level exceptions.

Remote failures surface as ``connectors.frappe.FrappeApiError`` subclasses and
pass through the dispatcher untouched; these classes cover failures decided
locally before any request is made.
"""

from typing import Iterable, Optional


class ToolError(Exception):
    """Base exception for tool resolution and input errors."""
    pass


class UnknownToolError(ToolError):
    """No registered tool carries the requested name."""

    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available = list(available)
        super().__init__(f'Unknown tool: "{name}". Available: {", ".join(self.available)}')


class MissingFieldError(ToolError):
    """A required argument is missing or malformed."""

    def __init__(self, tool_name: str, field: Optional[str], message: str):
        self.tool_name = tool_name
        self.field = field
        self.message = message
        super().__init__(f"[{tool_name}] {message}")
