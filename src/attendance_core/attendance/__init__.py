"""Attendance analytics: percentages, monthly series and trends.

Example:
    >>> from attendance_core.attendance import attendance_percentage, compare_trend
    >>>
    >>> pct = attendance_percentage(df, "2025-05-01", "2025-05-31")
    >>> trend = compare_trend(
    ...     df,
    ...     cur_start="2025-05-01",
    ...     cur_end="2025-05-31",
    ...     prev_start="2025-04-01",
    ...     prev_end="2025-04-30",
    ... )

"""

from attendance_core.attendance.percentage import (
    attendance_percentage,
    count_subjects_per_location,
    monthly_attendance,
    subject_attendance,
)
from attendance_core.attendance.trend import compare_trend

__all__ = [
    "attendance_percentage",
    "compare_trend",
    "count_subjects_per_location",
    "monthly_attendance",
    "subject_attendance",
]
