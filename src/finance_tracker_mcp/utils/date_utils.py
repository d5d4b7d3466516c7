"""
Date utilities for timestamps, calendar-month buckets and period presets.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, NamedTuple, Optional, Tuple, Union

TimestampLike = Union[datetime, date, str]

# Bucket counts used by the monthly series when a preset is given instead of
# an explicit number of months.
PERIOD_MONTHS = {
    "last-1-day": 1,
    "this-month": 1,
    "last-month": 1,
    "last-3-months": 3,
    "last-6-months": 6,
    "this-year": 12,
}


class MonthBucket(NamedTuple):
    """One calendar month as a half-open interval [start, end)."""

    year: int
    month: int
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        """Three-letter month name, e.g. "Oct"."""
        return calendar.month_abbr[self.month]

    @property
    def period(self) -> str:
        """Year and month as "YYYY-MM"."""
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, value: datetime) -> bool:
        return self.start <= value < self.end


def parse_timestamp(value: TimestampLike) -> datetime:
    """
    Convert a date, datetime or ISO-8601 string into a naive local datetime.

    Bare dates ("2026-10-01") become midnight of that day. Timezone-aware
    values are converted to local time before the offset is dropped.

    Raises:
        ValueError: If the value is not a date, datetime or ISO-8601 string
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Date must not be empty")
        try:
            result = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None
    else:
        raise ValueError(f"Unsupported date value: {value!r}")

    if result.tzinfo is not None:
        result = result.astimezone().replace(tzinfo=None)
    return result


def parse_end_timestamp(value: TimestampLike) -> datetime:
    """
    Like parse_timestamp, but a bare date covers the whole day.

    Used for inclusive upper bounds so that an end date of "2026-10-31"
    still matches transactions recorded during that day.
    """
    if isinstance(value, str):
        try:
            day = date.fromisoformat(value.strip())
        except ValueError:
            return parse_timestamp(value)
        return datetime.combine(day, time.max)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.max)
    return parse_timestamp(value)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move (year, month) by offset months, which may be negative."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_bucket(year: int, month: int) -> MonthBucket:
    """Build the bucket for one calendar month."""
    next_year, next_month = shift_month(year, month, 1)
    return MonthBucket(
        year=year,
        month=month,
        start=datetime(year, month, 1),
        end=datetime(next_year, next_month, 1),
    )


def month_buckets(count: int, now: Optional[datetime] = None) -> List[MonthBucket]:
    """
    Consecutive month buckets ending at the current month, oldest first.

    Args:
        count: Number of buckets; anything below 1 yields an empty list
        now: Reference time (default: current local time)

    Returns:
        List of exactly max(count, 0) buckets without gaps
    """
    now = now or datetime.now()
    buckets = []
    for offset in range(count - 1, -1, -1):
        year, month = shift_month(now.year, now.month, -offset)
        buckets.append(month_bucket(year, month))
    return buckets


def future_month_buckets(
    count: int, now: Optional[datetime] = None
) -> List[MonthBucket]:
    """The count months following the current month, nearest first."""
    now = now or datetime.now()
    buckets = []
    for offset in range(1, count + 1):
        year, month = shift_month(now.year, now.month, offset)
        buckets.append(month_bucket(year, month))
    return buckets


def get_month_range(year: int, month: int) -> Tuple[datetime, datetime]:
    """
    Get the inclusive datetime range for a specific month.

    Args:
        year: Year (e.g., 2026)
        month: Month (1-12)

    Returns:
        Tuple of (first day 00:00, last day 23:59:59.999999)

    Raises:
        ValueError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    _, last_day = calendar.monthrange(year, month)

    start = datetime(year, month, 1)
    end = datetime.combine(date(year, month, last_day), time.max)

    return start, end


def normalize_period(period: str) -> str:
    """Accept both "last_month" and "last-month" spellings."""
    return period.strip().lower().replace("_", "-")


def parse_period(
    period: str, now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """
    Parse a period preset into an inclusive (start, end) datetime range.

    Supported periods:
    - "this-month", "last-month"
    - "last-3-months", "last-6-months" (from the 1st of that month until now)
    - "this-year" (Jan 1 until now)
    - "last-1-day" (the 24 hours before now)

    Raises:
        ValueError: If period is not recognized
    """
    now = now or datetime.now()
    name = normalize_period(period)

    if name == "this-month":
        return get_month_range(now.year, now.month)

    elif name == "last-month":
        year, month = shift_month(now.year, now.month, -1)
        return get_month_range(year, month)

    elif name == "last-3-months":
        year, month = shift_month(now.year, now.month, -3)
        return datetime(year, month, 1), now

    elif name == "last-6-months":
        year, month = shift_month(now.year, now.month, -6)
        return datetime(year, month, 1), now

    elif name == "this-year":
        return datetime(now.year, 1, 1), now

    elif name == "last-1-day":
        return now - timedelta(days=1), now

    else:
        raise ValueError(f"Unknown period: {period}")


def months_for_period(period: str) -> int:
    """
    Number of monthly buckets a period preset covers.

    Raises:
        ValueError: If period is not recognized
    """
    try:
        return PERIOD_MONTHS[normalize_period(period)]
    except KeyError:
        raise ValueError(f"Unknown period: {period}") from None
