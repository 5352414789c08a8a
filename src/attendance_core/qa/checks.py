"""Quality rules for month-scoped access logs.

Each ``detect_*`` function implements one independent rule. Every function
expects a frame already passed through
:func:`attendance_core.schema.normalize_access_log` and returns the rows
(or value) the rule reports. None of them filters the input unless the
rule says so.

Rule names below double as report sheet names.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import date

import pandas as pd

from attendance_core.config import GRANTED_STATUS
from attendance_core.schema import LOCATION, STATUS, SUBJECT, TIMESTAMP
from attendance_core.utils import calendar_days, event_days, within_window

MISSING_DAYS = "locations_with_missing_days"
INCOMPLETE_ATTENDANCE = "employees_with_incomplete_attendance"
DUPLICATE_ENTRIES = "duplicate_entries"
MULTIPLE_LOCATIONS = "employees_in_multiple_locations"
DATES_OUT_OF_RANGE = "dates_out_of_range"
INVALID_STATUSES = "invalid_access_statuses"
WEEKEND_ACCESS = "access_granted_on_weekends"
LAST_DATE = "last_date_in_data"

RULE_NAMES = [
    MISSING_DAYS,
    INCOMPLETE_ATTENDANCE,
    DUPLICATE_ENTRIES,
    MULTIPLE_LOCATIONS,
    DATES_OUT_OF_RANGE,
    INVALID_STATUSES,
    WEEKEND_ACCESS,
    LAST_DATE,
]

# Saturday and Sunday in pandas' Monday=0 numbering
WEEKEND_DAYS = (5, 6)


def _distinct_days_below(
    df: pd.DataFrame, keys: list[str], month_start: date, month_end: date
) -> pd.DataFrame:
    days_expected = calendar_days(month_start, month_end)
    counts = (
        df.assign(_day=event_days(df[TIMESTAMP]))
        .groupby(keys)["_day"]
        .nunique()
        .reset_index(name="distinct_days")
    )
    flagged = counts[counts["distinct_days"] < days_expected].copy()
    flagged["days_expected"] = days_expected
    return flagged.reset_index(drop=True)


def detect_locations_with_missing_days(
    df: pd.DataFrame, month_start: date, month_end: date
) -> pd.DataFrame:
    """Flag locations with fewer distinct event days than the month has.

    The distinct-day count is taken over the whole input, not just the
    month window, while the target is the number of calendar days in
    ``[month_start, month_end]``. Rows outside the window therefore count
    towards coverage. This mirrors the long-standing report and is kept
    as is; the ``dates_out_of_range`` rule surfaces such rows separately.

    Args:
        df: Normalized access log.
        month_start: First day of the month (inclusive).
        month_end: Last day of the month (inclusive).

    Returns:
        DataFrame with columns: location, distinct_days, days_expected.

    Examples:
        >>> from datetime import date
        >>> df = pd.DataFrame({
        ...     'location': ['L', 'L'],
        ...     'timestamp': pd.to_datetime(['2025-05-01', '2025-05-02']),
        ... })
        >>> flagged = detect_locations_with_missing_days(df, date(2025, 5, 1), date(2025, 5, 3))
        >>> flagged["distinct_days"].tolist()
        [2]

    """
    return _distinct_days_below(df, [LOCATION], month_start, month_end)


def detect_incomplete_attendance(
    df: pd.DataFrame, month_start: date, month_end: date
) -> pd.DataFrame:
    """Flag (location, subject) pairs with fewer distinct days than the month has.

    Same unfiltered day count as :func:`detect_locations_with_missing_days`.

    Returns:
        DataFrame with columns: location, subject, distinct_days, days_expected.
    """
    return _distinct_days_below(df, [LOCATION, SUBJECT], month_start, month_end)


def detect_duplicate_entries(df: pd.DataFrame) -> pd.DataFrame:
    """Return every row whose (location, subject, timestamp) appears more than once.

    All members of a duplicate group are returned, including the first.

    Examples:
        >>> df = pd.DataFrame({
        ...     'location': ['L', 'L', 'L'],
        ...     'subject': ['A', 'A', 'B'],
        ...     'timestamp': pd.to_datetime(['2025-05-01 09:00'] * 3),
        ... })
        >>> len(detect_duplicate_entries(df))
        2

    """
    dup_mask = df.duplicated(subset=[LOCATION, SUBJECT, TIMESTAMP], keep=False)
    return df[dup_mask].copy()


def detect_multiple_locations(df: pd.DataFrame) -> pd.DataFrame:
    """Return subjects seen at more than one distinct location.

    Returns:
        DataFrame with columns: subject, location_count.
    """
    counts = df.groupby(SUBJECT)[LOCATION].nunique().reset_index(name="location_count")
    return counts[counts["location_count"] > 1].reset_index(drop=True)


def detect_dates_out_of_range(
    df: pd.DataFrame, month_start: date, month_end: date
) -> pd.DataFrame:
    """Return rows whose event day falls outside ``[month_start, month_end]``.

    Bounds are whole days: an event at 18:00 on ``month_end`` is in range.
    Comparing raw timestamps against a midnight ``month_end`` would flag it.
    """
    return df[~within_window(df[TIMESTAMP], month_start, month_end)].copy()


def detect_invalid_statuses(df: pd.DataFrame, valid_statuses: Collection[str]) -> pd.DataFrame:
    """Return rows whose status is not one of ``valid_statuses``.

    Missing statuses are never valid.
    """
    return df[~df[STATUS].isin(list(valid_statuses))].copy()


def detect_weekend_access(df: pd.DataFrame, granted_status: str = GRANTED_STATUS) -> pd.DataFrame:
    """Return granted events on a Saturday or Sunday.

    Only the single granted status counts here, regardless of which
    statuses the invalid-status rule accepts.
    """
    weekday = df[TIMESTAMP].dt.weekday
    mask = weekday.isin(WEEKEND_DAYS) & (df[STATUS] == granted_status)
    return df[mask].copy()


def last_date_in_data(df: pd.DataFrame) -> pd.Timestamp:
    """Return the latest timestamp in the log (``NaT`` when empty)."""
    return df[TIMESTAMP].max()
