"""Canonical domain data model for tracked developer tools.

These Pydantic models describe the static records the dataset owns: tool
metadata, the current adoption snapshot, and the monthly download history.
All models are frozen so that views handed to operations cannot mutate the
shared dataset.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Fixed set of tool categories."""

    LLM_API = "llm-api"
    EDITOR = "editor"
    ASSISTANT = "assistant"
    FRAMEWORK = "framework"


CATEGORY_VALUES: List[str] = [c.value for c in Category]


class ToolRecord(BaseModel):
    """Static metadata for one tracked tool.

    Attributes
    ----------
    id: str
        Stable short identifier (e.g., "openai"). Unique across the dataset.
    name: str
        Display name (e.g., "OpenAI SDK").
    package: str
        Ecosystem package name (e.g., "@anthropic-ai/sdk").
    description: str
        One-line description used for keyword search.
    category: Category
        Tool category.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    name: str
    package: str
    description: str
    category: Category


class MetricsSnapshot(BaseModel):
    """Current adoption metrics for one tool.

    Attributes
    ----------
    npm_downloads_monthly: int
        Downloads over the last month.
    npm_downloads_weekly: int
        Downloads over the last week.
    github_stars: int
        Repository star count.
    stackoverflow_questions_30d: int
        Questions asked in the last 30 days.
    reddit_mentions_30d: int
        Mentions in the last 30 days.
    last_updated: str
        Calendar date (``YYYY-MM-DD``) the snapshot was taken.
    """

    model_config = ConfigDict(frozen=True)

    npm_downloads_monthly: int = Field(..., ge=0)
    npm_downloads_weekly: int = Field(..., ge=0)
    github_stars: int = Field(..., ge=0)
    stackoverflow_questions_30d: int = Field(..., ge=0)
    reddit_mentions_30d: int = Field(..., ge=0)
    last_updated: str


class HistoryPoint(BaseModel):
    """One monthly sample of a tool's download series."""

    model_config = ConfigDict(frozen=True)

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    downloads: int = Field(..., ge=0)


class ToolEntry(BaseModel):
    """Read-only pairing of a tool with its current metrics."""

    model_config = ConfigDict(frozen=True)

    tool: ToolRecord
    metrics: MetricsSnapshot

    @property
    def id(self) -> str:
        return self.tool.id

    @property
    def name(self) -> str:
        return self.tool.name

    @property
    def monthly_downloads(self) -> int:
        return self.metrics.npm_downloads_monthly
