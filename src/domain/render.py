"""Render operation results as narratable text.

Each renderer turns a structured result into a titled report with labeled
sections. Output is deterministic: counts go through ``format_count`` and
percentages through ``format_percent`` so identical results always produce
identical text.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from .operations.compare import CompareResult
from .operations.history import HistoryResult
from .operations.search import SearchResult
from .operations.trending import TrendingResult
from .utils.units import format_count, format_month, format_percent


def growth_indicator(growth_pct: float) -> str:
    """Symbol summarizing a growth rate."""
    if growth_pct > 50:
        return "🔥"
    if growth_pct > 20:
        return "⚡"
    if growth_pct > 0:
        return "↑"
    if growth_pct < 0:
        return "↓"
    return "→"


def render_comparison(result: CompareResult) -> str:
    lines: List[str] = [
        f"📊 AI Developer Tools Comparison: {len(result.entries)} tools ({result.time_range})",
        "",
    ]
    for index, row in enumerate(result.entries, start=1):
        tool, metrics, growth = row.entry.tool, row.entry.metrics, row.growth
        lines.append(f"**{index}. {tool.name}** (`{tool.package}`)")
        lines.append(
            f"   • Monthly Downloads: {format_count(metrics.npm_downloads_monthly)} "
            f"({growth_indicator(growth.growth_pct)} "
            f"{format_percent(growth.growth_pct)} vs last period)"
        )
        lines.append(f"   • Weekly Downloads: {format_count(metrics.npm_downloads_weekly)}")
        lines.append(f"   • GitHub Stars: {format_count(metrics.github_stars)}")
        lines.append(
            f"   • Community: {format_count(metrics.stackoverflow_questions_30d)} SO "
            f"questions, {format_count(metrics.reddit_mentions_30d)} Reddit mentions (30d)"
        )
        lines.append("")

    leader, fastest = result.leader, result.fastest
    lines.append("**Key Insights:**")
    lines.append(
        f"• **Most Downloads:** {leader.entry.name} "
        f"({format_count(leader.entry.monthly_downloads)}/month)"
    )
    lines.append(
        f"• **Fastest Growing:** {fastest.entry.name} "
        f"({format_percent(fastest.growth.growth_pct)})"
    )
    lines.append("")
    lines.append(f"_Last updated: {result.entries[0].entry.metrics.last_updated}_")
    return "\n".join(lines)


def render_trending(result: TrendingResult) -> str:
    if not result.entries:
        return (
            f"No trending tools found for {result.time_range} "
            f"(category: {result.category})."
        )

    lines: List[str] = [
        f"🔥 Trending: Fastest Growing AI Developer Tools ({result.time_range})",
        f"Category: {result.category} | Showing top {len(result.entries)}",
        "",
    ]
    for index, row in enumerate(result.entries, start=1):
        tool, metrics = row.entry.tool, row.entry.metrics
        lines.append(f"{index}. {growth_indicator(row.growth.growth_pct)} **{tool.name}**")
        lines.append(
            f"   Growth: {format_percent(row.growth.growth_pct)} "
            f"({format_count(metrics.npm_downloads_monthly)} downloads/month)"
        )
        lines.append(f"   Category: {tool.category}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def render_history(result: HistoryResult) -> str:
    tool, metrics = result.tool, result.metrics
    if not result.points:
        return f"No historical data available for {tool.name}."

    first, last = result.points[0], result.points[-1]
    lines: List[str] = [
        f"📈 {tool.name} - Historical Adoption",
        "",
        f"**{tool.description}**",
        f"Package: `{tool.package}`",
        f"Category: {tool.category}",
        "",
        "**Download History (Monthly)**",
    ]
    for point in result.points:
        lines.append(f"• {format_month(point.month)}: {format_count(point.downloads)}")
    lines.append("")
    lines.append("**Growth Analysis**")
    lines.append(f"• Period: {format_month(first.month)} to {format_month(last.month)}")
    lines.append(f"• Total Growth: {format_percent(result.total_growth_pct)}")
    lines.append(
        f"• Growth Rate: {format_percent(result.average_monthly_growth_pct, signed=False)}"
        f" per month (over {result.months_requested} months requested)"
    )
    lines.append("")
    lines.append("**Current Metrics**")
    lines.append(f"• Monthly Downloads: {format_count(metrics.npm_downloads_monthly)}")
    lines.append(f"• GitHub Stars: {format_count(metrics.github_stars)}")
    lines.append(
        f"• Community Activity: {format_count(metrics.stackoverflow_questions_30d)} SO "
        f"questions, {format_count(metrics.reddit_mentions_30d)} Reddit mentions (30d)"
    )
    lines.append("")
    lines.append(f"_Last updated: {metrics.last_updated}_")
    return "\n".join(lines)


def render_search(result: SearchResult) -> str:
    req = result.request
    filters: List[str] = []
    if req.category:
        filters.append(f"Category: {req.category}")
    if req.min_downloads:
        filters.append(f"Min Downloads: {format_count(req.min_downloads)}")
    if req.keyword:
        filters.append(f'Keyword: "{req.keyword}"')

    if not result.entries:
        text = "No tools found matching your search criteria."
        if filters:
            text += f"\n**Filters:** {' | '.join(filters)}"
        return text

    count = len(result.entries)
    lines: List[str] = ["🔍 AI Developer Tools Search Results", ""]
    if filters:
        lines.append(f"**Filters:** {' | '.join(filters)}")
    lines.append(f"**Found:** {count} tool{'' if count == 1 else 's'} (sorted by {req.sort_by})")
    lines.append("")
    for index, entry in enumerate(result.entries, start=1):
        tool, metrics = entry.tool, entry.metrics
        lines.append(f"{index}. **{tool.name}** (`{tool.package}`)")
        lines.append(f"   {tool.description}")
        lines.append(f"   • {format_count(metrics.npm_downloads_monthly)} downloads/month")
        lines.append(f"   • {format_count(metrics.github_stars)} GitHub stars")
        lines.append(f"   • Category: {tool.category}")
        lines.append("")

    if result.summary is not None:
        lines.append("**Summary:**")
        lines.append(f"• Total Monthly Downloads: {format_count(result.summary.total)}")
        lines.append(f"• Average per Tool: {format_count(result.summary.average)}")
    return "\n".join(lines).rstrip("\n")


_RENDERERS: Dict[str, Callable[[Any], str]] = {
    "compare_tools": render_comparison,
    "get_trending_tools": render_trending,
    "get_tool_history": render_history,
    "search_tools": render_search,
}


def render(operation_name: str, result: Any) -> str:
    """Render ``result`` with the renderer registered for ``operation_name``.

    Raises
    ------
    KeyError
        If no renderer exists for the operation.
    """
    return _RENDERERS[operation_name](result)
