"""Shared date utilities for attendance-core.

This module provides the date handling used across the quality checks and
the attendance calculators:

- Date parsing: accepting ISO strings, dates and timestamps
- Window validation: rejecting ranges that start after they end
- Day counting: calendar days and business days (Mon-Fri) in a window
- Month windows: splitting a range into calendar months

Examples:
    >>> from datetime import date
    >>> business_days(date(2025, 5, 1), date(2025, 5, 31))
    22

"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd

from attendance_core.exceptions import ConfigError, DataFormatError

DateLike = str | date | datetime | pd.Timestamp


def parse_date(value: DateLike) -> date:
    """Parse a date argument into a ``datetime.date``.

    Args:
        value: ISO date string (``YYYY-MM-DD``), date, datetime or Timestamp.
            Any time-of-day component is dropped.

    Returns:
        Parsed date object.

    Raises:
        DataFormatError: If the value cannot be parsed as a date.

    Examples:
        >>> parse_date("2025-05-01")
        datetime.date(2025, 5, 1)

    """
    if value is None or value is pd.NaT:
        raise DataFormatError("Date value is missing")
    # Timestamp is a datetime subclass
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise DataFormatError(f"Could not parse date: {value!r}") from exc
    if pd.isna(ts):
        raise DataFormatError(f"Could not parse date: {value!r}")
    return ts.date()


def validate_range(start: DateLike, end: DateLike) -> tuple[date, date]:
    """Parse and validate an inclusive date window.

    Raises:
        DataFormatError: If either bound cannot be parsed.
        ConfigError: If ``start`` is after ``end``.

    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date > end_date:
        raise ConfigError(f"Invalid date range: start {start_date} is after end {end_date}")
    return start_date, end_date


def calendar_days(start: date, end: date) -> int:
    """Count calendar days in ``[start, end]`` (both inclusive)."""
    if start > end:
        return 0
    return (end - start).days + 1


def business_days(start: date, end: date) -> int:
    """Count business days (Mon-Fri, no holidays) in ``[start, end]``.

    Examples:
        >>> from datetime import date
        >>> business_days(date(2025, 5, 5), date(2025, 5, 5))
        1
        >>> business_days(date(2025, 5, 10), date(2025, 5, 11))
        0

    """
    if start > end:
        return 0
    return int(np.busday_count(start, end + timedelta(days=1)))


def event_days(timestamps: pd.Series) -> pd.Series:
    """Return the calendar day (midnight timestamp) of each event."""
    return timestamps.dt.normalize()


def within_window(timestamps: pd.Series, start: date, end: date) -> pd.Series:
    """Boolean mask of events whose calendar day lies in ``[start, end]``."""
    days = event_days(timestamps)
    return days.between(pd.Timestamp(start), pd.Timestamp(end))


def iter_month_windows(start: date, end: date) -> Iterable[tuple[date, date]]:
    """Yield calendar-month windows covering ``[start, end]``.

    The first and last windows are clipped to the range.

    Examples:
        >>> from datetime import date
        >>> list(iter_month_windows(date(2025, 4, 15), date(2025, 5, 10)))
        [(datetime.date(2025, 4, 15), datetime.date(2025, 4, 30)), (datetime.date(2025, 5, 1), datetime.date(2025, 5, 10))]

    """
    cur = start
    while cur <= end:
        if cur.month == 12:
            next_month = date(cur.year + 1, 1, 1)
        else:
            next_month = date(cur.year, cur.month + 1, 1)
        window_end = min(next_month - timedelta(days=1), end)
        yield cur, window_end
        cur = next_month
