"""Compare location attendance between two periods."""

from __future__ import annotations

import logging

import pandas as pd

from attendance_core.attendance.percentage import checked_window, location_attendance
from attendance_core.config import GRANTED_STATUS
from attendance_core.schema import LOCATION, normalize_access_log
from attendance_core.utils import DateLike

logger = logging.getLogger(__name__)

TREND_COLUMNS = [LOCATION, "attendance_pct_previous", "attendance_pct_current", "trend"]


def compare_trend(
    records: pd.DataFrame,
    cur_start: DateLike,
    cur_end: DateLike,
    prev_start: DateLike,
    prev_end: DateLike,
    *,
    granted_status: str = GRANTED_STATUS,
) -> pd.DataFrame:
    """Compare per-location attendance between a previous and a current period.

    Both periods use the same calculation as
    :func:`attendance_core.attendance.percentage.attendance_percentage` and
    are full-outer-joined on location. ``trend`` is ``current - previous``; a
    location missing from either period keeps NaN on that side and NaN as its
    trend, since no data is not the same as zero attendance.

    Args:
        records: Raw or normalized access-log rows.
        cur_start: First day of the current period (inclusive).
        cur_end: Last day of the current period (inclusive).
        prev_start: First day of the previous period (inclusive).
        prev_end: Last day of the previous period (inclusive).
        granted_status: Status literal counted as attendance.

    Returns:
        DataFrame with columns: location, attendance_pct_previous,
        attendance_pct_current, trend, sorted by location.

    Raises:
        ConfigError: If either period is inverted or has no business days.
        DataFormatError: If a date or timestamp cannot be parsed.
        DataQualityError: If required columns are missing.

    """
    # Validate both periods before computing either
    current_window = checked_window(cur_start, cur_end)
    previous_window = checked_window(prev_start, prev_end)

    df = normalize_access_log(records)

    current = location_attendance(df, current_window, granted_status)
    previous = location_attendance(df, previous_window, granted_status)

    comparison = pd.merge(
        previous, current, on=LOCATION, how="outer", suffixes=("_previous", "_current")
    )
    for col in ["attendance_pct_previous", "attendance_pct_current"]:
        comparison[col] = comparison[col].astype("float64")
    comparison["trend"] = (
        comparison["attendance_pct_current"] - comparison["attendance_pct_previous"]
    )

    logger.info(
        "Trend %s..%s vs %s..%s: %d locations (%d without a comparable previous period)",
        current_window[0],
        current_window[1],
        previous_window[0],
        previous_window[1],
        len(comparison),
        int(comparison["trend"].isna().sum()),
    )
    return comparison[TREND_COLUMNS].sort_values(LOCATION).reset_index(drop=True)
