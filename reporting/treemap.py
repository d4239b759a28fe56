"""Treemaps.

Only leaves carry area. ``flatten_tree`` turns a nested tree into its leaves;
inner nodes contribute nothing of their own.
"""

from typing import Any, Dict, List, Sequence

from models.payloads import ChartPayload, TreeNode
from reporting.categorical import Group, group_sum, top_n
from reporting.numbers import round_half_up
from reporting.tables import (
    DEFAULT_CURRENCY,
    STOCK_TREEMAP_COLORS,
    TREEMAP_LABEL_KEEP,
    TREEMAP_LABEL_MAX,
)


def flatten_tree(nodes: Sequence[TreeNode]) -> List[TreeNode]:
    """Depth-first list of leaf nodes as ``{name, value}``."""
    leaves: List[TreeNode] = []
    for node in nodes:
        if node.children:
            leaves.extend(flatten_tree(node.children))
        elif node.value is not None:
            leaves.append(TreeNode(name=node.name, value=node.value, color=node.color))
    return leaves


def truncate_label(name: str, ellipsis: str = "…") -> str:
    if len(name) > TREEMAP_LABEL_MAX:
        return name[:TREEMAP_LABEL_KEEP] + ellipsis
    return name


def tree_nodes(
    groups: List[Group],
    palette: Sequence[str],
    ellipsis: str = "…",
) -> List[TreeNode]:
    return [
        TreeNode(
            name=truncate_label(group.key, ellipsis),
            value=round_half_up(group.total),
            color=palette[i % len(palette)],
        )
        for i, group in enumerate(groups)
    ]


def stock_treemap_chart(bins: List[Dict[str, Any]], group_by: str = "item", limit: int = 15) -> ChartPayload:
    """Stock value per item or per warehouse."""
    field = "warehouse" if group_by == "warehouse" else "item_code"
    ranked = top_n(group_sum(bins, field, "stock_value"), limit)

    return ChartPayload(
        title=f"Stock Value by {'Warehouse' if group_by == 'warehouse' else 'Item'}",
        type="treemap",
        labels=[],
        datasets=[],
        tree_data=tree_nodes(ranked, STOCK_TREEMAP_COLORS),
        currency=DEFAULT_CURRENCY,
    )
