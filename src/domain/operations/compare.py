"""compare_tools: side-by-side adoption metrics for two or three tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..dataset import Dataset
from ..models import ToolEntry
from ..utils.metrics import GrowthWindow, growth_over_window, window_for_range
from . import TIME_RANGES, Operation, require_known


class CompareToolsRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    tools: List[str] = Field(..., min_length=2, max_length=3)
    time_range: Literal["7d", "30d", "90d"] = "30d"

    @field_validator("tools")
    @classmethod
    def _distinct(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("tool ids must be distinct")
        return value


@dataclass(frozen=True)
class CompareEntry:
    entry: ToolEntry
    growth: GrowthWindow


@dataclass(frozen=True)
class CompareResult:
    """Per-tool rows in request order plus the two highlights."""

    time_range: str
    entries: List[CompareEntry]
    leader: CompareEntry
    fastest: CompareEntry


class CompareTools(Operation[CompareToolsRequest]):
    name = "compare_tools"
    description = (
        "Compare adoption metrics between 2-3 AI developer tools "
        "(e.g., OpenAI vs Anthropic SDK)"
    )
    request_model = CompareToolsRequest

    def input_schema(self, dataset: Dataset) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "tools": {
                    "type": "array",
                    "items": {"type": "string", "enum": dataset.ids()},
                    "minItems": 2,
                    "maxItems": 3,
                    "description": "Array of 2-3 tool IDs to compare",
                },
                "time_range": {
                    "type": "string",
                    "enum": TIME_RANGES,
                    "default": "30d",
                    "description": "Time range: 7d (week), 30d (month), 90d (quarter)",
                },
            },
            "required": ["tools"],
        }

    def execute(self, dataset: Dataset, request: CompareToolsRequest) -> CompareResult:
        require_known(dataset, request.tools)
        window = window_for_range(request.time_range)
        rows = [
            CompareEntry(
                entry=dataset.get_entry(tool_id),
                growth=growth_over_window(dataset, tool_id, window),
            )
            for tool_id in request.tools
        ]
        # max() keeps the first maximal element, so ties go to input order
        leader = max(rows, key=lambda r: r.entry.monthly_downloads)
        fastest = max(rows, key=lambda r: r.growth.growth_pct)
        return CompareResult(
            time_range=request.time_range, entries=rows, leader=leader, fastest=fastest
        )
