"""
Tests for display formatting utilities.
"""

from decimal import Decimal

from src.domain.utils.units import (
    CountUnit,
    format_count,
    format_month,
    format_percent,
    round_half_up,
    scale_count,
)

# ============================================================================
# Rounding
# ============================================================================


def test_round_half_up_rounds_ties_away_from_zero():
    assert round_half_up(18.5) == Decimal("19")
    assert round_half_up(87.5) == Decimal("88")
    assert round_half_up(2.5) == Decimal("3")


def test_round_half_up_keeps_requested_places():
    assert str(round_half_up(36.143, 1)) == "36.1"
    assert str(round_half_up(5.0, 1)) == "5.0"


# ============================================================================
# Counts
# ============================================================================


def test_scale_count_picks_unit():
    assert scale_count(36_143_000) == (Decimal("36.1"), CountUnit.MILLIONS)
    assert scale_count(450_000) == (Decimal("450"), CountUnit.THOUSANDS)
    assert scale_count(145) == (Decimal("145"), CountUnit.NONE)


def test_format_count_millions_one_decimal():
    assert format_count(36_143_000) == "36.1M"
    assert format_count(13_925_000) == "13.9M"
    assert format_count(2_100_000) == "2.1M"
    assert format_count(1_000_000) == "1.0M"


def test_format_count_thousands_whole():
    assert format_count(12_300) == "12K"
    assert format_count(1_250) == "1K"
    assert format_count(1_000) == "1K"


def test_format_count_thousands_round_half_up():
    """Exact halves round up rather than to even."""
    assert format_count(18_500) == "19K"
    assert format_count(87_500) == "88K"


def test_format_count_small_numbers_plain():
    assert format_count(892) == "892"
    assert format_count(0) == "0"


def test_format_count_summary_values():
    assert format_count(58_329_000) == "58.3M"
    assert format_count(11_665_800) == "11.7M"


# ============================================================================
# Percentages and months
# ============================================================================


def test_format_percent_signs():
    assert format_percent(11.5524) == "+11.6%"
    assert format_percent(-3.25) == "-3.3%"
    assert format_percent(0.0) == "0.0%"


def test_format_percent_negative_zero_is_unsigned():
    assert format_percent(-0.01) == "0.0%"


def test_format_percent_unsigned():
    assert format_percent(45.8333, signed=False) == "45.8%"


def test_format_month():
    assert format_month("2024-07") == "Jul 2024"
    assert format_month("2024-12") == "Dec 2024"


def test_format_month_unparseable_returned_unchanged():
    assert format_month("2024-13") == "2024-13"
