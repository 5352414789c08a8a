"""Attendance percentage per subject and per location.

A subject's attendance is the number of distinct days with a granted access
event in a window, divided by the number of business days (Mon-Fri, no
holiday calendar) in that window. A location's attendance is the unweighted
mean over its subjects.
"""

from __future__ import annotations

import logging
from datetime import date

import pandas as pd

from attendance_core.config import GRANTED_STATUS
from attendance_core.exceptions import ConfigError
from attendance_core.schema import LOCATION, STATUS, SUBJECT, TIMESTAMP, normalize_access_log
from attendance_core.utils import (
    DateLike,
    business_days,
    event_days,
    iter_month_windows,
    validate_range,
    within_window,
)

logger = logging.getLogger(__name__)

SUBJECT_COLUMNS = [LOCATION, SUBJECT, "days_present", "expected_days", "attendance_pct"]
LOCATION_COLUMNS = [LOCATION, "attendance_pct"]


def checked_window(start: DateLike, end: DateLike) -> tuple[date, date, int]:
    """Validate a window and return its bounds and business-day count.

    Raises:
        ConfigError: If start is after end or the window has no business days.
        DataFormatError: If a bound cannot be parsed.

    Examples:
        >>> checked_window("2025-05-01", "2025-05-02")
        (datetime.date(2025, 5, 1), datetime.date(2025, 5, 2), 2)

    """
    start_date, end_date = validate_range(start, end)
    num_workdays = business_days(start_date, end_date)
    if num_workdays == 0:
        raise ConfigError(f"No business days between {start_date} and {end_date}")
    return start_date, end_date, num_workdays


def _subject_attendance(
    df: pd.DataFrame,
    window: tuple[date, date, int],
    granted_status: str,
) -> pd.DataFrame:
    start_date, end_date, num_workdays = window

    mask = within_window(df[TIMESTAMP], start_date, end_date) & (df[STATUS] == granted_status)
    granted = df[mask]

    if granted.empty:
        return pd.DataFrame(columns=SUBJECT_COLUMNS).astype(
            {"days_present": "int64", "expected_days": "int64", "attendance_pct": "float64"}
        )

    # Actual attendance days logged per subject per location
    actual = (
        granted.assign(_day=event_days(granted[TIMESTAMP]))
        .groupby([LOCATION, SUBJECT])["_day"]
        .nunique()
        .reset_index(name="days_present")
    )
    actual["expected_days"] = num_workdays
    actual["attendance_pct"] = actual["days_present"] / actual["expected_days"] * 100
    return actual[SUBJECT_COLUMNS]


def location_attendance(
    df: pd.DataFrame,
    window: tuple[date, date, int],
    granted_status: str,
) -> pd.DataFrame:
    """Location-grain attendance for an already normalized frame and checked window."""
    actual = _subject_attendance(df, window, granted_status)
    if actual.empty:
        return pd.DataFrame(columns=LOCATION_COLUMNS).astype({"attendance_pct": "float64"})
    office = actual.groupby(LOCATION)["attendance_pct"].mean().reset_index()
    return office.sort_values(LOCATION).reset_index(drop=True)


def subject_attendance(
    records: pd.DataFrame,
    start: DateLike,
    end: DateLike,
    *,
    granted_status: str = GRANTED_STATUS,
) -> pd.DataFrame:
    """Compute attendance percentage per (location, subject).

    Args:
        records: Raw or normalized access-log rows.
        start: First day of the window (inclusive).
        end: Last day of the window (inclusive).
        granted_status: Status literal counted as attendance.

    Returns:
        DataFrame with columns: location, subject, days_present,
        expected_days, attendance_pct. Values above 100 are possible and
        are not capped.

    Raises:
        ConfigError: If start is after end or the window has no business days.
        DataFormatError: If a date or timestamp cannot be parsed.
        DataQualityError: If required columns are missing.

    """
    window = checked_window(start, end)
    df = normalize_access_log(records)
    return _subject_attendance(df, window, granted_status)


def attendance_percentage(
    records: pd.DataFrame,
    start: DateLike,
    end: DateLike,
    *,
    granted_status: str = GRANTED_STATUS,
) -> pd.DataFrame:
    """Compute mean attendance percentage per location.

    Only events whose day falls in ``[start, end]`` and whose status equals
    ``granted_status`` count. Locations with no such events are absent from
    the result rather than reported as 0.

    Args:
        records: Raw or normalized access-log rows.
        start: First day of the window (inclusive).
        end: Last day of the window (inclusive).
        granted_status: Status literal counted as attendance.

    Returns:
        DataFrame with columns: location, attendance_pct, sorted by location.

    Raises:
        ConfigError: If start is after end or the window has no business days.
        DataFormatError: If a date or timestamp cannot be parsed.
        DataQualityError: If required columns are missing.

    Examples:
        >>> df = pd.DataFrame({
        ...     'who': ['A'], 'when': ['2025-05-05'],
        ...     'What': ['Access Granted'], 'location': ['L'],
        ... })
        >>> attendance_percentage(df, '2025-05-05', '2025-05-05')['attendance_pct'].tolist()
        [100.0]

    """
    window = checked_window(start, end)
    df = normalize_access_log(records)
    result = location_attendance(df, window, granted_status)
    logger.debug("Attendance for %s to %s: %d locations", window[0], window[1], len(result))
    return result


def monthly_attendance(
    records: pd.DataFrame,
    start: DateLike,
    end: DateLike,
    *,
    granted_status: str = GRANTED_STATUS,
) -> pd.DataFrame:
    """Compute attendance percentage per location for each calendar month.

    The range is split into calendar months clipped to ``[start, end]``.
    Months left without business days after clipping are skipped.

    Returns:
        DataFrame with columns: month (``YYYY-MM``), location, attendance_pct.

    Raises:
        ConfigError: If start is after end.
        DataFormatError: If a date or timestamp cannot be parsed.

    """
    start_date, end_date = validate_range(start, end)
    df = normalize_access_log(records)

    frames = []
    for window_start, window_end in iter_month_windows(start_date, end_date):
        num_workdays = business_days(window_start, window_end)
        if num_workdays == 0:
            logger.debug("Skipping %s to %s: no business days", window_start, window_end)
            continue
        month_df = location_attendance(
            df, (window_start, window_end, num_workdays), granted_status
        )
        month_df.insert(0, "month", window_start.strftime("%Y-%m"))
        frames.append(month_df)

    if not frames:
        return pd.DataFrame(columns=["month", *LOCATION_COLUMNS]).astype(
            {"attendance_pct": "float64"}
        )
    return pd.concat(frames, ignore_index=True)


def count_subjects_per_location(records: pd.DataFrame) -> pd.DataFrame:
    """Count distinct subjects seen at each location over the whole log.

    Returns:
        DataFrame with columns: location, unique_employees.
    """
    df = normalize_access_log(records)
    counts = df.groupby(LOCATION)[SUBJECT].nunique().reset_index(name="unique_employees")
    return counts.sort_values(LOCATION).reset_index(drop=True)
