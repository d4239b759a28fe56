"""
Presentation payload models for ERPNext analytics.

These Pydantic models define the data contracts between the reporting layer and
whatever renders charts, KPI cards, kanban pipelines and funnels. Field names
are snake_case in Python and serialize to the camelCase keys the viewers read.

Hierarchy:
- ChartPayload: bar / line / area / donut / pie / composed / radar / scatter / treemap
- KPIPayload: single metric card with delta, trend and sparkline
- PipelinePayload: kanban columns of documents grouped by status
- FunnelPayload: ordered lifecycle stages with conversion rates

Serialize with ``to_wire()`` so aliases are used and unset fields are omitted.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

Number = Union[int, float]

ChartType = Literal[
    "bar",
    "horizontal-bar",
    "stacked-bar",
    "line",
    "area",
    "stacked-area",
    "pie",
    "donut",
    "composed",
    "radar",
    "scatter",
    "treemap",
]

Trend = Literal["up", "down", "flat"]


# =============================================================================
# BASE MODEL
# =============================================================================

class PayloadBase(BaseModel):
    """Base class for all presentation payloads."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Dump with camelCase aliases, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# CHART MODELS
# =============================================================================

class Dataset(PayloadBase):
    """One series of values aligned 1:1 with the chart labels."""
    label: str = Field(..., description="Series name shown in the legend")
    values: List[Number] = Field(default_factory=list, description="One value per label")
    color: Optional[str] = Field(default=None, description="Hex display color")
    type: Optional[Literal["bar", "line"]] = Field(default=None, description="Series mark inside a composed chart")
    stack: Optional[str] = Field(default=None, description="Stack group id")
    y_axis_id: Optional[Literal["left", "right"]] = Field(default=None, alias="yAxisId")
    show_dots: Optional[bool] = Field(default=None, alias="showDots")


class ScatterPoint(PayloadBase):
    """Single (x, y) point of a scatter series."""
    x: Number
    y: Number
    label: Optional[str] = None


class ScatterSeries(PayloadBase):
    """Group of scatter points sharing a color."""
    label: str
    color: Optional[str] = None
    points: List[ScatterPoint] = Field(default_factory=list)


class TreeNode(PayloadBase):
    """Treemap node. Leaves carry a value; inner nodes carry children."""
    name: str
    value: Optional[Number] = None
    color: Optional[str] = None
    children: Optional[List["TreeNode"]] = None


class ChartPayload(PayloadBase):
    """Chart-shaped result."""
    title: str = Field(..., description="Chart heading")
    subtitle: Optional[str] = None
    type: ChartType = Field(..., description="Chart kind tag")
    labels: List[str] = Field(default_factory=list, description="Ordered category labels")
    datasets: List[Dataset] = Field(default_factory=list)

    tree_data: Optional[List[TreeNode]] = Field(default=None, alias="treeData")
    scatter_data: Optional[List[ScatterSeries]] = Field(default=None, alias="scatterData")

    currency: Optional[str] = None
    unit: Optional[str] = None
    x_axis_label: Optional[str] = Field(default=None, alias="xAxisLabel")
    y_axis_label: Optional[str] = Field(default=None, alias="yAxisLabel")
    right_axis_label: Optional[str] = Field(default=None, alias="rightAxisLabel")
    show_right_axis: Optional[bool] = Field(default=None, alias="showRightAxis")
    generated_at: Optional[str] = Field(default=None, alias="generatedAt")

    @model_validator(mode="after")
    def _values_align_with_labels(self) -> "ChartPayload":
        for dataset in self.datasets:
            if len(dataset.values) != len(self.labels):
                raise ValueError(
                    f"Dataset '{dataset.label}' has {len(dataset.values)} values "
                    f"for {len(self.labels)} labels"
                )
        return self


# =============================================================================
# KPI MODEL
# =============================================================================

class KPIPayload(PayloadBase):
    """Single metric card."""
    label: str = Field(..., description="Metric name")
    value: Number = Field(..., description="Current value")
    formatted_value: Optional[str] = Field(default=None, alias="formattedValue")
    currency: Optional[str] = None
    unit: Optional[str] = None
    delta: Optional[Number] = Field(default=None, description="Percent change vs the prior period")
    delta_label: Optional[str] = Field(default=None, alias="deltaLabel")
    trend: Optional[Trend] = None
    trend_is_good: bool = Field(..., alias="trendIsGood", description="Whether an upward trend is good news")
    sparkline: Optional[List[Number]] = None
    color: Optional[str] = None


# =============================================================================
# PIPELINE MODELS
# =============================================================================

class PipelineCard(PayloadBase):
    """One document shown on a kanban column."""
    name: Optional[str] = None
    customer: Optional[str] = Field(default=None, description="Party display name")
    amount: Number = 0
    date: Optional[str] = None
    delivery_date: Optional[str] = None


class PipelineColumn(PayloadBase):
    """Kanban column for one lifecycle status."""
    status: str
    label: str
    color: str
    count: int
    total: Number
    orders: List[PipelineCard] = Field(default_factory=list)


class PipelinePayload(PayloadBase):
    """Kanban pipeline result."""
    title: str
    currency: Optional[str] = None
    generated_at: Optional[str] = Field(default=None, alias="generatedAt")
    columns: List[PipelineColumn] = Field(default_factory=list)


# =============================================================================
# FUNNEL MODELS
# =============================================================================

class FunnelStage(PayloadBase):
    """One stage of a sales funnel."""
    label: str
    count: int
    value: Optional[Number] = None
    color: Optional[str] = None
    conversion_rate: Optional[Number] = Field(default=None, alias="conversionRate")


class FunnelPayload(PayloadBase):
    """Funnel result."""
    title: str
    subtitle: Optional[str] = None
    stages: List[FunnelStage] = Field(default_factory=list)
    currency: Optional[str] = None


TreeNode.model_rebuild()
