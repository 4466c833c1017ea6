"""get_trending_tools: fastest-growing tools ranked by growth rate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..dataset import Dataset
from ..models import CATEGORY_VALUES, ToolEntry
from ..utils.metrics import (
    GrowthWindow,
    filter_entries,
    growth_over_window,
    rank_by_field,
    window_for_range,
)
from . import TIME_RANGES, Operation


class TrendingToolsRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    time_range: Literal["7d", "30d", "90d"] = "30d"
    limit: int = Field(5, ge=3, le=10)
    category: Literal["all", "llm-api", "editor", "assistant", "framework"] = "all"


@dataclass(frozen=True)
class TrendingEntry:
    entry: ToolEntry
    growth: GrowthWindow


@dataclass(frozen=True)
class TrendingResult:
    time_range: str
    category: str
    limit: int
    entries: List[TrendingEntry]


class TrendingTools(Operation[TrendingToolsRequest]):
    name = "get_trending_tools"
    description = "Get the fastest-growing AI developer tools ranked by growth rate"
    request_model = TrendingToolsRequest

    def input_schema(self, dataset: Dataset) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "time_range": {
                    "type": "string",
                    "enum": TIME_RANGES,
                    "default": "30d",
                    "description": "Time range for measuring growth",
                },
                "limit": {
                    "type": "integer",
                    "minimum": 3,
                    "maximum": 10,
                    "default": 5,
                    "description": "Maximum number of tools to return",
                },
                "category": {
                    "type": "string",
                    "enum": ["all", *CATEGORY_VALUES],
                    "default": "all",
                    "description": "Filter by tool category",
                },
            },
        }

    def execute(self, dataset: Dataset, request: TrendingToolsRequest) -> TrendingResult:
        staged = rank_by_field(dataset.list_all(), "downloads", descending=True)
        if request.category != "all":
            staged = filter_entries(staged, category=request.category)

        window = window_for_range(request.time_range)
        scored = [
            TrendingEntry(entry=e, growth=growth_over_window(dataset, e.id, window))
            for e in staged
        ]
        # Output order is growth; the downloads ranking above only fixes ties.
        scored.sort(key=lambda t: t.growth.growth_pct, reverse=True)
        return TrendingResult(
            time_range=request.time_range,
            category=request.category,
            limit=request.limit,
            entries=scored[: request.limit],
        )
