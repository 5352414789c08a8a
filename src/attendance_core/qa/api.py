"""Public API for the attendance quality-check pipeline.

This module runs the quality rules from :mod:`attendance_core.qa.checks`
in memory and returns their findings together with a summary table. It
does not read or write files; rendering is left to
:mod:`attendance_core.reports`.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

import pandas as pd

from attendance_core.config import DEFAULT_VALID_STATUSES, GRANTED_STATUS, SUMMARY_SHEET
from attendance_core.exceptions import ConfigError
from attendance_core.qa import checks
from attendance_core.qa.findings import Finding, ScalarResult, TableResult
from attendance_core.schema import normalize_access_log
from attendance_core.utils import DateLike, validate_range

logger = logging.getLogger(__name__)


@dataclass
class QualityCheckResult:
    """Result of the quality-check pipeline.

    Attributes:
        summary: DataFrame with one row per rule: check, issue_count.
        findings: Findings keyed by rule name, in rule order.
    """

    summary: pd.DataFrame
    findings: dict[str, Finding]

    @property
    def total_issues(self) -> int:
        return int(sum(f.issue_count for f in self.findings.values()))

    def tables(self) -> dict[str, pd.DataFrame]:
        """Return the summary followed by every finding as a named table."""
        out = {SUMMARY_SHEET: self.summary}
        for name, finding in self.findings.items():
            out[name] = finding.to_frame()
        return out


def build_summary(findings: dict[str, Finding]) -> pd.DataFrame:
    """Build the summary table from findings.

    Returns:
        DataFrame with columns: check, issue_count.
    """
    rows = [{"check": name, "issue_count": f.issue_count} for name, f in findings.items()]
    return pd.DataFrame(rows, columns=["check", "issue_count"])


def run_quality_checks(
    records: pd.DataFrame,
    month_start: DateLike,
    month_end: DateLike,
    valid_statuses: Collection[str] | None = None,
    *,
    granted_status: str = GRANTED_STATUS,
) -> QualityCheckResult:
    """Run the quality-check battery against one month of access logs.

    This function:
    - does NOT read or write any files,
    - does NOT print (logging only),
    - does NOT modify ``records``.

    Args:
        records: Raw or normalized access-log rows. Column aliases such as
            'who', 'when' and 'What' are accepted.
        month_start: First day of the month (inclusive).
        month_end: Last day of the month (inclusive).
        valid_statuses: Statuses accepted by the invalid-status rule.
            Defaults to ``{"Access Granted"}``.
        granted_status: Status literal used by the weekend-access rule.

    Returns:
        QualityCheckResult with the summary table and one finding per rule:
        - locations_with_missing_days
        - employees_with_incomplete_attendance
        - duplicate_entries
        - employees_in_multiple_locations
        - dates_out_of_range
        - invalid_access_statuses
        - access_granted_on_weekends
        - last_date_in_data (scalar)

    Raises:
        ConfigError: If month_start is after month_end or valid_statuses is empty.
        DataFormatError: If a date argument or a timestamp cannot be parsed.
        DataQualityError: If required columns are missing.

    """
    start, end = validate_range(month_start, month_end)

    if valid_statuses is None:
        valid_statuses = DEFAULT_VALID_STATUSES
    elif isinstance(valid_statuses, str):
        valid_statuses = frozenset({valid_statuses})
    else:
        valid_statuses = frozenset(valid_statuses)
    if not valid_statuses:
        raise ConfigError("valid_statuses must contain at least one status")

    df = normalize_access_log(records)

    logger.info(f"Running quality checks for {start} to {end} on {len(df)} rows")

    findings: dict[str, Finding] = {}

    def add_table(name: str, rows: pd.DataFrame) -> None:
        findings[name] = TableResult(name=name, rows=rows)
        logger.debug("%s: %d rows", name, len(rows))

    # Completeness
    add_table(checks.MISSING_DAYS, checks.detect_locations_with_missing_days(df, start, end))
    add_table(checks.INCOMPLETE_ATTENDANCE, checks.detect_incomplete_attendance(df, start, end))

    # Duplicates and multi-location subjects
    add_table(checks.DUPLICATE_ENTRIES, checks.detect_duplicate_entries(df))
    add_table(checks.MULTIPLE_LOCATIONS, checks.detect_multiple_locations(df))

    # Dates and statuses
    add_table(checks.DATES_OUT_OF_RANGE, checks.detect_dates_out_of_range(df, start, end))
    add_table(checks.INVALID_STATUSES, checks.detect_invalid_statuses(df, valid_statuses))
    add_table(checks.WEEKEND_ACCESS, checks.detect_weekend_access(df, granted_status))

    findings[checks.LAST_DATE] = ScalarResult(
        name=checks.LAST_DATE, value=checks.last_date_in_data(df), label="last_date"
    )

    summary = build_summary(findings)
    result = QualityCheckResult(summary=summary, findings=findings)

    logger.info(
        f"Quality checks complete: {result.total_issues} issues across "
        f"{(summary['issue_count'] > 0).sum()} of {len(summary)} checks"
    )
    return result
