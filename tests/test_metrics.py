"""
Tests for growth, ranking, filtering and aggregation utilities.
"""

import pytest

from src.domain.models import HistoryPoint
from src.domain.utils.metrics import (
    aggregate,
    filter_entries,
    growth_over_window,
    growth_percent,
    rank_by_field,
    window_for_range,
    window_growth,
)

# ============================================================================
# Growth
# ============================================================================


def test_growth_percent_basic():
    assert growth_percent(150, 100) == 50.0
    assert growth_percent(50, 100) == -50.0


def test_growth_percent_zero_previous_is_zero():
    assert growth_percent(150, 0) == 0.0
    assert growth_percent(150, None) == 0.0


def test_window_for_range():
    assert window_for_range("7d") == 1
    assert window_for_range("30d") == 1
    assert window_for_range("90d") == 3


def test_growth_over_one_month(dataset):
    window = growth_over_window(dataset, "openai", 1)
    assert window.current == 36_143_000
    assert window.previous == 32_400_000
    assert window.growth_pct == pytest.approx(11.5525, abs=1e-3)
    assert window.period_months == 1


def test_growth_over_quarter(dataset):
    window = growth_over_window(dataset, "cursor", 3)
    assert window.previous == 250_000
    assert window.growth_pct == pytest.approx(80.0)


def test_window_growth_clamps_to_oldest_point():
    history = [
        HistoryPoint(month="2024-11", downloads=100),
        HistoryPoint(month="2024-12", downloads=120),
    ]
    window = window_growth(history, 3)
    assert window.previous == 100
    assert window.growth_pct == pytest.approx(20.0)


def test_window_growth_single_point_is_flat():
    window = window_growth([HistoryPoint(month="2024-12", downloads=10)], 1)
    assert window.growth_pct == 0.0


def test_window_growth_empty_history():
    window = window_growth([], 1)
    assert (window.current, window.previous, window.growth_pct) == (0, 0, 0.0)


# ============================================================================
# Ranking and filtering
# ============================================================================


def test_rank_by_downloads_descending(dataset):
    ranked = rank_by_field(dataset.list_all(), "downloads")
    assert [e.id for e in ranked] == [
        "openai",
        "anthropic",
        "langchain",
        "copilot",
        "cursor",
    ]


def test_rank_by_stars_descending(dataset):
    ranked = rank_by_field(dataset.list_all(), "stars")
    assert [e.id for e in ranked] == [
        "langchain",
        "openai",
        "cursor",
        "copilot",
        "anthropic",
    ]


def test_rank_by_name_ascending(dataset):
    ranked = rank_by_field(dataset.list_all(), "name", descending=False)
    assert [e.name for e in ranked] == [
        "Anthropic SDK",
        "Cursor",
        "GitHub Copilot",
        "LangChain",
        "OpenAI SDK",
    ]


def test_rank_is_stable_on_ties(dataset):
    cursor = dataset.get_entry("cursor")
    twin = cursor.model_copy(
        update={"tool": cursor.tool.model_copy(update={"id": "cursor-twin"})}
    )
    for descending in (True, False):
        ranked = rank_by_field([twin, cursor], "downloads", descending=descending)
        assert [e.id for e in ranked] == ["cursor-twin", "cursor"]


def test_rank_unknown_field_raises(dataset):
    with pytest.raises(KeyError):
        rank_by_field(dataset.list_all(), "forks")


def test_filter_by_category(dataset):
    matches = filter_entries(dataset.list_all(), category="llm-api")
    assert [e.id for e in matches] == ["openai", "anthropic"]


def test_filter_min_downloads_is_inclusive(dataset):
    matches = filter_entries(dataset.list_all(), min_downloads=5_711_000)
    assert [e.id for e in matches] == ["openai", "anthropic", "langchain"]


def test_filter_keyword_case_insensitive_on_name_and_description(dataset):
    assert [e.id for e in filter_entries(dataset.list_all(), keyword="EDITOR")] == [
        "cursor"
    ]
    assert [e.id for e in filter_entries(dataset.list_all(), keyword="sdk")] == [
        "openai",
        "anthropic",
    ]


def test_filter_predicates_are_conjunctive(dataset):
    matches = filter_entries(
        dataset.list_all(), category="llm-api", min_downloads=20_000_000
    )
    assert [e.id for e in matches] == ["openai"]


# ============================================================================
# Aggregation
# ============================================================================


def test_aggregate_downloads(dataset):
    agg = aggregate(dataset.list_all())
    assert agg.total == 58_329_000
    assert agg.average == 11_665_800
    assert agg.count == 5


def test_aggregate_average_rounds_half_up(dataset):
    entries = [dataset.get_entry("openai"), dataset.get_entry("cursor")]
    # (36_143_000 + 450_000) / 2 = 18_296_500 exactly
    assert aggregate(entries).average == 18_296_500


def test_aggregate_empty_raises():
    with pytest.raises(ValueError):
        aggregate([])
