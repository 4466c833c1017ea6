"""
Shared utilities for the query operations.

Modules
-------
metrics
    Growth windows, ranking, filtering and aggregation over dataset entries
units
    Half-up rounding and human-readable formatting of counts, percentages
    and months
"""

__all__ = []
