"""QA module for access-log quality checks.

Example:
    >>> from attendance_core.loaders import load_access_log
    >>> from attendance_core.qa import run_quality_checks
    >>>
    >>> df = load_access_log("data/a_raw/access_logs/may_2025.csv")
    >>> result = run_quality_checks(df, "2025-05-01", "2025-05-31")
    >>>
    >>> print(result.summary)
    >>> result.findings["duplicate_entries"].to_frame()

"""

from attendance_core.qa.api import QualityCheckResult, build_summary, run_quality_checks
from attendance_core.qa.checks import RULE_NAMES
from attendance_core.qa.findings import Finding, ScalarResult, TableResult

__all__ = [
    "Finding",
    "QualityCheckResult",
    "RULE_NAMES",
    "ScalarResult",
    "TableResult",
    "build_summary",
    "run_quality_checks",
]
