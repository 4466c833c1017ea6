"""
Display formatting for counts, percentages and months.

Provides the abbreviation rule used by every rendered report (millions with
one decimal, thousands as whole numbers, plain integers below that) and
half-up rounding so identical input always renders identically.
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Tuple

logger = logging.getLogger(__name__)


class CountUnit(Enum):
    """Abbreviation suffixes for large counts."""

    NONE = ""
    THOUSANDS = "K"
    MILLIONS = "M"


_THOUSAND = 1_000
_MILLION = 1_000_000


def round_half_up(value: float, places: int = 0) -> Decimal:
    """
    Round the exact value of ``value`` half away from zero.

    Parameters
    ----------
    value : float
        Number to round
    places : int, default=0
        Number of decimal places to keep

    Returns
    -------
    Decimal
        Rounded value carrying exactly ``places`` decimals

    Examples
    --------
    >>> round_half_up(18.5)
    Decimal('19')
    >>> round_half_up(2.25, 1)
    Decimal('2.3')
    """
    exponent = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def scale_count(value: float) -> Tuple[Decimal, CountUnit]:
    """
    Scale a count to the unit used for display.

    Examples
    --------
    >>> scale_count(36_143_000)
    (Decimal('36.1'), <CountUnit.MILLIONS: 'M'>)
    >>> scale_count(450_000)
    (Decimal('450'), <CountUnit.THOUSANDS: 'K'>)
    >>> scale_count(145)
    (Decimal('145'), <CountUnit.NONE: ''>)
    """
    if value >= _MILLION:
        return (round_half_up(value / _MILLION, 1), CountUnit.MILLIONS)
    if value >= _THOUSAND:
        return (round_half_up(value / _THOUSAND, 0), CountUnit.THOUSANDS)
    return (round_half_up(value, 0), CountUnit.NONE)


def format_count(value: float) -> str:
    """
    Abbreviate a count for display.

    Examples
    --------
    >>> format_count(36_143_000)
    '36.1M'
    >>> format_count(12_300)
    '12K'
    >>> format_count(892)
    '892'
    """
    scaled, unit = scale_count(value)
    return f"{scaled}{unit.value}"


def format_percent(value: float, signed: bool = True) -> str:
    """
    Format a percentage with one decimal.

    Positive values carry a leading ``+`` when ``signed`` is set.

    Examples
    --------
    >>> format_percent(11.5524)
    '+11.6%'
    >>> format_percent(-3.25)
    '-3.3%'
    >>> format_percent(0.0)
    '0.0%'
    """
    rounded = round_half_up(value, 1)
    if rounded == 0:
        rounded = abs(rounded)
    sign = "+" if signed and rounded > 0 else ""
    return f"{sign}{rounded}%"


def format_month(month: str) -> str:
    """
    Render a ``YYYY-MM`` key as an abbreviated month and year.

    Unparseable keys are returned unchanged.

    Examples
    --------
    >>> format_month("2024-07")
    'Jul 2024'
    """
    try:
        return datetime.strptime(month, "%Y-%m").strftime("%b %Y")
    except ValueError:
        logger.warning("units.format_month.unparseable", extra={"month": month})
        return month
