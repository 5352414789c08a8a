"""Example: Attendance percentage and month-over-month trend

This example computes attendance percentage per office for a month, compares
it with the previous month, and prints the monthly series for the year so far.

Prerequisites:
- An access-log export under data/a_raw/access_logs/ with columns
  who, when, What, location, cardnum
"""

from pathlib import Path

from attendance_core import DataPaths, load_access_log
from attendance_core.attendance import (
    attendance_percentage,
    compare_trend,
    count_subjects_per_location,
    monthly_attendance,
)
from attendance_core.reports import write_excel_report

paths = DataPaths.from_root(Path("data"))
df = load_access_log(paths.raw_access_logs / "access_logs_2025.csv")  # MODIFY AS NEEDED

print("Unique employees per location:")
print(count_subjects_per_location(df))

attendance_pct_df = attendance_percentage(df, "2025-05-01", "2025-05-31")
print("\nAttendance % (May 2025):")
print(attendance_pct_df)

trend_df = compare_trend(
    df,
    cur_start="2025-05-01",
    cur_end="2025-05-31",
    prev_start="2025-04-01",
    prev_end="2025-04-30",
)
print("\nTrend vs April (NaN where a period has no data):")
print(trend_df)

monthly_df = monthly_attendance(df, "2025-01-01", "2025-05-31")
print("\nMonthly attendance % by location:")
print(monthly_df.pivot_table(index="month", columns="location", values="attendance_pct"))

paths.ensure_dirs()
write_excel_report(
    {
        "attendance_pct": attendance_pct_df,
        "attendance_trend": trend_df,
        "monthly_attendance": monthly_df,
    },
    paths.reports / "May_2025_Attendance_Trend.xlsx",
)
