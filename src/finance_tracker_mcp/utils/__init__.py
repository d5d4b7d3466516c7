"""
Utility functions for the finance tracker.
"""

from finance_tracker_mcp.utils.date_utils import (
    MonthBucket,
    get_month_range,
    month_buckets,
    months_for_period,
    parse_period,
    parse_timestamp,
)

__all__ = [
    "MonthBucket",
    "get_month_range",
    "month_buckets",
    "months_for_period",
    "parse_period",
    "parse_timestamp",
]
