"""Models Package.

Presentation payload models returned by the analytics tools:
- Chart payloads (datasets, scatter series, treemap nodes)
- KPI cards
- Kanban pipelines
- Funnels
"""

from models.payloads import (
    PayloadBase,
    Number,
    ChartType,
    Trend,

    # Charts
    Dataset,
    ScatterPoint,
    ScatterSeries,
    TreeNode,
    ChartPayload,

    # KPI
    KPIPayload,

    # Pipeline
    PipelineCard,
    PipelineColumn,
    PipelinePayload,

    # Funnel
    FunnelStage,
    FunnelPayload,
)

__all__ = [
    "PayloadBase",
    "Number",
    "ChartType",
    "Trend",

    # Charts
    "Dataset",
    "ScatterPoint",
    "ScatterSeries",
    "TreeNode",
    "ChartPayload",

    # KPI
    "KPIPayload",

    # Pipeline
    "PipelineCard",
    "PipelineColumn",
    "PipelinePayload",

    # Funnel
    "FunnelStage",
    "FunnelPayload",
]
