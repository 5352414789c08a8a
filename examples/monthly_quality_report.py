"""Example: Monthly attendance quality report

This example runs the quality-check battery on one month of access logs and
saves the findings to a multi-sheet Excel workbook (one sheet per check plus
a summary sheet).

Prerequisites:
- An access-log export under data/a_raw/access_logs/ with columns
  who, when, What, location, cardnum
"""

from pathlib import Path

from attendance_core import DataPaths, load_access_log
from attendance_core.qa import run_quality_checks
from attendance_core.reports import format_quality_summary, write_excel_report

paths = DataPaths.from_root(Path("data"))
paths.ensure_dirs()

df = load_access_log(paths.raw_access_logs / "access_logs_2025.csv")  # MODIFY AS NEEDED
print(f"Loaded {len(df)} access-log rows")

result = run_quality_checks(
    df,
    month_start="2025-05-01",
    month_end="2025-05-31",
    valid_statuses={"Access Granted"},
)

print(format_quality_summary(result))

# Rows behind a single check
print("\nDuplicate entries (first 10 rows):")
print(result.findings["duplicate_entries"].to_frame().head(10))

report_path = paths.reports / "May_2025_Attendance_Quality_Report.xlsx"
write_excel_report(result.tables(), report_path)
print(f"\nData quality report saved to: {report_path}")
