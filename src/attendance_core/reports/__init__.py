"""Report sinks for quality-check and attendance tables."""

from attendance_core.reports.console import format_quality_summary, format_table
from attendance_core.reports.sheets import truncate_sheet_name, validate_sheet_names
from attendance_core.reports.writers import write_csv_reports, write_excel_report, write_report

__all__ = [
    "format_quality_summary",
    "format_table",
    "truncate_sheet_name",
    "validate_sheet_names",
    "write_csv_reports",
    "write_excel_report",
    "write_report",
]
