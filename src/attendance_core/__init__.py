"""attendance-core: access-log quality checks and attendance analytics.

This package works on exported badge/access-control logs and provides:

- **Quality checks**: a fixed battery of rules over one month of logs
- **Attendance**: per-location attendance percentage, monthly series and
  two-period trends
- **Reports**: multi-sheet Excel or CSV output with sheet-name collision checks

Module Structure:
    attendance_core.qa: Quality-check battery (run_quality_checks)
    attendance_core.attendance: Attendance percentage and trend comparison
    attendance_core.reports: Excel/CSV writers and console summaries
    attendance_core.schema: Column normalization at the ingestion boundary
    attendance_core.loaders: CSV/Excel readers
    attendance_core.config: Defaults and DataPaths

Quick Start:
    >>> from attendance_core import load_access_log
    >>> from attendance_core.qa import run_quality_checks
    >>> from attendance_core.attendance import compare_trend
    >>> from attendance_core.reports import write_excel_report
    >>>
    >>> df = load_access_log("data/a_raw/access_logs/2025.csv")
    >>>
    >>> result = run_quality_checks(df, "2025-05-01", "2025-05-31")
    >>> write_excel_report(result.tables(), "May_2025_Attendance_Quality_Report.xlsx")
    >>>
    >>> trend = compare_trend(df, "2025-05-01", "2025-05-31", "2025-04-01", "2025-04-30")

Table Reference:
    Quality checks:
        - summary: check x issue_count
        - one table per rule (see attendance_core.qa.RULE_NAMES)

    Attendance:
        - attendance_percentage: location
        - subject_attendance: location x subject
        - monthly_attendance: month x location
        - compare_trend: location (outer join of two periods)
"""

__version__ = "0.1.0"

from attendance_core.config import DataPaths
from attendance_core.exceptions import (
    AttendanceAPIError,
    ConfigError,
    DataFormatError,
    DataQualityError,
    NamingCollisionError,
)
from attendance_core.loaders import load_access_log

__all__ = [
    "AttendanceAPIError",
    "ConfigError",
    "DataFormatError",
    "DataPaths",
    "DataQualityError",
    "NamingCollisionError",
    "__version__",
    "load_access_log",
]
