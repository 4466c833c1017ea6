"""
Derived adoption metrics over the dataset.

Provides growth-rate computation (point-to-point and over a month window),
stable ranking, conjunctive filtering, and download aggregation. Functions
are pure: they read dataset views and never mutate them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..dataset import Dataset
from ..models import HistoryPoint, ToolEntry
from .units import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrowthWindow:
    """
    Growth between the latest history point and an earlier comparison point.

    Attributes
    ----------
    current : int
        Downloads at the latest point
    previous : int
        Downloads at the comparison point
    growth_pct : float
        Percentage change from previous to current
    period_months : int
        Requested window length in months
    """

    current: int
    previous: int
    growth_pct: float
    period_months: int


@dataclass(frozen=True)
class Aggregate:
    """Sum and rounded average of a numeric field over a result set."""

    total: int
    average: int
    count: int


# Sort keys addressable by name. Metric fields resolve through the snapshot,
# "name" through the tool record.
_FIELDS: Dict[str, Callable[[ToolEntry], object]] = {
    "downloads": lambda e: e.metrics.npm_downloads_monthly,
    "npm_downloads_monthly": lambda e: e.metrics.npm_downloads_monthly,
    "weekly_downloads": lambda e: e.metrics.npm_downloads_weekly,
    "npm_downloads_weekly": lambda e: e.metrics.npm_downloads_weekly,
    "stars": lambda e: e.metrics.github_stars,
    "github_stars": lambda e: e.metrics.github_stars,
    "name": lambda e: e.tool.name,
}


def growth_percent(current: float, previous: Optional[float]) -> float:
    """
    Relative change from ``previous`` to ``current`` in percent.

    A zero or missing ``previous`` yields ``0.0`` instead of infinity.

    Examples
    --------
    >>> growth_percent(150, 100)
    50.0
    >>> growth_percent(150, 0)
    0.0
    >>> growth_percent(150, None)
    0.0
    """
    if not previous:
        return 0.0
    return (current - previous) / previous * 100.0


def window_for_range(time_range: str) -> int:
    """Months of history compared for a time range (quarter vs. month)."""
    return 3 if time_range == "90d" else 1


def window_growth(history: Sequence[HistoryPoint], window_months: int) -> GrowthWindow:
    """
    Growth of the latest point against the point ``window_months`` earlier.

    The comparison index is clamped to the oldest point, so a short series
    compares against whatever is available. A single point compares against
    itself (zero growth); an empty series yields all zeros.
    """
    if not history:
        return GrowthWindow(current=0, previous=0, growth_pct=0.0, period_months=window_months)

    latest = history[-1]
    compare = history[max(0, len(history) - 1 - window_months)]
    return GrowthWindow(
        current=latest.downloads,
        previous=compare.downloads,
        growth_pct=growth_percent(latest.downloads, compare.downloads),
        period_months=window_months,
    )


def growth_over_window(dataset: Dataset, tool_id: str, window_months: int) -> GrowthWindow:
    """Windowed growth for a tool; raises ``UnknownTool`` for unknown ids."""
    return window_growth(dataset.get_history(tool_id), window_months)


def rank_by_field(
    entries: Sequence[ToolEntry], field: str, descending: bool = True
) -> List[ToolEntry]:
    """
    Stable sort of entries by a named field.

    Ties keep their incoming order (dataset insertion order when called on
    ``Dataset.list_all()``), never falling back to id or name.

    Raises
    ------
    KeyError
        If ``field`` is not a known sort field.
    """
    key = _FIELDS[field]
    return sorted(entries, key=key, reverse=descending)  # type: ignore[arg-type]


def filter_entries(
    entries: Sequence[ToolEntry],
    category: Optional[str] = None,
    min_downloads: Optional[int] = None,
    keyword: Optional[str] = None,
) -> List[ToolEntry]:
    """
    Keep entries matching every supplied predicate.

    Parameters
    ----------
    category : str, optional
        Exact category match
    min_downloads : int, optional
        Inclusive lower bound on monthly downloads
    keyword : str, optional
        Case-insensitive substring of the name or the description; an empty
        keyword is treated as absent
    """
    results = list(entries)
    if category:
        results = [e for e in results if e.tool.category == category]
    if min_downloads is not None:
        results = [e for e in results if e.metrics.npm_downloads_monthly >= min_downloads]
    if keyword:
        needle = keyword.lower()
        results = [
            e
            for e in results
            if needle in e.tool.name.lower() or needle in e.tool.description.lower()
        ]
    return results


def aggregate(entries: Sequence[ToolEntry], field: str = "downloads") -> Aggregate:
    """
    Sum and average of a numeric field.

    The average is rounded half-up to a whole unit.

    Raises
    ------
    ValueError
        If ``entries`` is empty; callers must skip aggregation for empty
        result sets.
    """
    if not entries:
        logger.warning("metrics.aggregate.empty", extra={"field": field})
        raise ValueError("cannot aggregate an empty result set")
    key = _FIELDS[field]
    values = [int(key(e)) for e in entries]  # type: ignore[call-overload]
    total = sum(values)
    average = int(round_half_up(total / len(values)))
    return Aggregate(total=total, average=average, count=len(values))
