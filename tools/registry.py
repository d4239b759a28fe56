"""Tool registry.

Maps every ``ToolCategory`` member to its bucket of definitions. The mapping
is checked at import: a category without a bucket, or two tools sharing a
name, fails loudly instead of shadowing silently.
"""

from typing import Dict, List, Optional, Sequence, Union

from tools.accounting import accounting_tools
from tools.analytics import analytics_tools
from tools.assets import assets_tools
from tools.crm import crm_tools
from tools.delivery import delivery_tools
from tools.hr import hr_tools
from tools.inventory import inventory_tools
from tools.manufacturing import manufacturing_tools
from tools.operations import operations_tools
from tools.project import project_tools
from tools.purchasing import purchasing_tools
from tools.sales import sales_tools
from tools.setup import setup_tools
from tools.types import ToolCategory, ToolDefinition

TOOLS_BY_CATEGORY: Dict[ToolCategory, List[ToolDefinition]] = {
    ToolCategory.SALES: sales_tools,
    ToolCategory.INVENTORY: inventory_tools,
    ToolCategory.ACCOUNTING: accounting_tools,
    ToolCategory.HR: hr_tools,
    ToolCategory.PROJECT: project_tools,
    ToolCategory.OPERATIONS: operations_tools,
    ToolCategory.PURCHASING: purchasing_tools,
    ToolCategory.DELIVERY: delivery_tools,
    ToolCategory.MANUFACTURING: manufacturing_tools,
    ToolCategory.CRM: crm_tools,
    ToolCategory.ASSETS: assets_tools,
    ToolCategory.SETUP: setup_tools,
    ToolCategory.ANALYTICS: analytics_tools,
}


def _check_registry() -> None:
    missing = [c.value for c in ToolCategory if c not in TOOLS_BY_CATEGORY]
    if missing:
        raise RuntimeError(f"Tool categories without a bucket: {', '.join(missing)}")

    seen = set()
    for category, tools in TOOLS_BY_CATEGORY.items():
        for tool in tools:
            if tool.category != category:
                raise RuntimeError(f"{tool.name} is declared {tool.category.value} but registered under {category.value}")
            if tool.name in seen:
                raise RuntimeError(f"Duplicate tool name: {tool.name}")
            seen.add(tool.name)


_check_registry()


CategoryLike = Union[ToolCategory, str]


def to_category(value: CategoryLike) -> ToolCategory:
    """Resolve a category name, raising ValueError on anything unknown."""
    if isinstance(value, ToolCategory):
        return value
    try:
        return ToolCategory(value.strip().lower())
    except ValueError:
        known = ", ".join(c.value for c in ToolCategory)
        raise ValueError(f"Unknown tool category: {value!r}. Known: {known}") from None


def get_categories() -> List[str]:
    return [c.value for c in ToolCategory]


def get_tools_by_category(category: CategoryLike) -> List[ToolDefinition]:
    return list(TOOLS_BY_CATEGORY[to_category(category)])


def all_tools(categories: Optional[Sequence[CategoryLike]] = None) -> List[ToolDefinition]:
    """Every tool in registry order, optionally restricted to some categories."""
    if categories is None:
        selected = list(ToolCategory)
    else:
        selected = [to_category(c) for c in categories]
    tools: List[ToolDefinition] = []
    for category in ToolCategory:
        if category in selected:
            tools.extend(TOOLS_BY_CATEGORY[category])
    return tools


def get_tool_by_name(name: str) -> Optional[ToolDefinition]:
    for tools in TOOLS_BY_CATEGORY.values():
        for tool in tools:
            if tool.name == name:
                return tool
    return None
