"""search_tools: filter and sort tools by category, popularity or keyword."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..dataset import Dataset
from ..models import CATEGORY_VALUES, ToolEntry
from ..utils.metrics import Aggregate, aggregate, filter_entries, rank_by_field
from . import Operation


class SearchToolsRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Optional[Literal["llm-api", "editor", "assistant", "framework"]] = None
    min_downloads: Optional[int] = Field(None, ge=0)
    keyword: Optional[str] = None
    sort_by: Literal["downloads", "stars", "name"] = "downloads"


@dataclass(frozen=True)
class SearchResult:
    """Matching entries in output order; ``summary`` is None when empty."""

    request: SearchToolsRequest
    entries: List[ToolEntry]
    summary: Optional[Aggregate]


class SearchTools(Operation[SearchToolsRequest]):
    name = "search_tools"
    description = (
        "Search and filter AI developer tools by category, popularity, or keyword"
    )
    request_model = SearchToolsRequest

    def input_schema(self, dataset: Dataset) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "enum": list(CATEGORY_VALUES),
                    "description": "Filter by tool category",
                },
                "min_downloads": {
                    "type": "integer",
                    "minimum": 0,
                    "description": "Minimum monthly downloads (e.g., 1000000 for 1M+)",
                },
                "keyword": {
                    "type": "string",
                    "description": "Search for keyword in tool name or description",
                },
                "sort_by": {
                    "type": "string",
                    "enum": ["downloads", "stars", "name"],
                    "default": "downloads",
                    "description": "How to sort results",
                },
            },
            "additionalProperties": False,
        }

    def execute(self, dataset: Dataset, request: SearchToolsRequest) -> SearchResult:
        matches = filter_entries(
            dataset.list_all(),
            category=request.category,
            min_downloads=request.min_downloads,
            keyword=request.keyword,
        )
        ordered = rank_by_field(
            matches, request.sort_by, descending=request.sort_by != "name"
        )
        summary = aggregate(ordered, "downloads") if ordered else None
        return SearchResult(request=request, entries=ordered, summary=summary)
