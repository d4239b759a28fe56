"""Tools package - named ERPNext operations and their dispatcher.

Each category module builds a list of ToolDefinitions; the registry maps
categories to those lists and the dispatcher runs them by name.
"""

from tools.errors import ToolError, UnknownToolError, MissingFieldError

from tools.types import (
    ToolCategory,
    ToolContext,
    ToolDefinition,
    RequiredField,
    RequiredKind,
    ui_meta,
    iso_timestamp,
)

from tools.registry import (
    TOOLS_BY_CATEGORY,
    all_tools,
    get_categories,
    get_tool_by_name,
    get_tools_by_category,
)

from tools.dispatcher import ToolDispatcher

__all__ = [
    # Errors
    "ToolError",
    "UnknownToolError",
    "MissingFieldError",
    # Types
    "ToolCategory",
    "ToolContext",
    "ToolDefinition",
    "RequiredField",
    "RequiredKind",
    "ui_meta",
    "iso_timestamp",
    # Registry
    "TOOLS_BY_CATEGORY",
    "all_tools",
    "get_categories",
    "get_tool_by_name",
    "get_tools_by_category",
    # Dispatcher
    "ToolDispatcher",
]
