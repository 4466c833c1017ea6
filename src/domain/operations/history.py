"""get_tool_history: monthly download series with growth analysis.

Returns at most ``months`` points, fewer when the stored series is shorter.
The average monthly growth divides the total growth by the requested
``months``, not by the number of points actually returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..dataset import Dataset
from ..models import HistoryPoint, MetricsSnapshot, ToolRecord
from ..utils.metrics import growth_percent
from . import Operation, require_known


class ToolHistoryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    tool: str
    months: int = Field(6, ge=3, le=12)


@dataclass(frozen=True)
class HistoryResult:
    tool: ToolRecord
    metrics: MetricsSnapshot
    months_requested: int
    points: Tuple[HistoryPoint, ...]
    total_growth_pct: float
    average_monthly_growth_pct: float


class ToolHistory(Operation[ToolHistoryRequest]):
    name = "get_tool_history"
    description = (
        "Get historical adoption data and growth trends for a specific AI developer tool"
    )
    request_model = ToolHistoryRequest

    def input_schema(self, dataset: Dataset) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "tool": {
                    "type": "string",
                    "enum": dataset.ids(),
                    "description": "Tool ID to get history for",
                },
                "months": {
                    "type": "integer",
                    "minimum": 3,
                    "maximum": 12,
                    "default": 6,
                    "description": "Number of months of history to return (3-12)",
                },
            },
            "required": ["tool"],
        }

    def execute(self, dataset: Dataset, request: ToolHistoryRequest) -> HistoryResult:
        require_known(dataset, [request.tool])
        points = dataset.get_history(request.tool, request.months)

        total = 0.0
        if points:
            total = growth_percent(points[-1].downloads, points[0].downloads)
        return HistoryResult(
            tool=dataset.get_tool(request.tool),
            metrics=dataset.get_metrics(request.tool),
            months_requested=request.months,
            points=points,
            total_growth_pct=total,
            average_monthly_growth_pct=total / request.months,
        )
