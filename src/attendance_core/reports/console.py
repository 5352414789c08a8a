"""Console output formatting utilities."""

from __future__ import annotations

import pandas as pd

from attendance_core.qa.api import QualityCheckResult


def format_quality_summary(result: QualityCheckResult) -> str:
    """Build a human-readable summary of a quality-check run.

    Args:
        result: QualityCheckResult returned by ``run_quality_checks``.

    Returns:
        Plain-text summary, one line per check.
    """
    lines = []
    lines.append("Attendance Quality Checks")
    lines.append("=" * 60)

    width = max((len(name) for name in result.findings), default=0)
    for name, finding in result.findings.items():
        lines.append(f"  {name:<{width}}  {finding.describe()}")

    lines.append("-" * 60)
    lines.append(f"  {'total issues':<{width}}  {result.total_issues:,}")
    return "\n".join(lines)


def format_table(df: pd.DataFrame, title: str) -> str:
    """Render a table with a title line, or a short note when it is empty."""
    if df.empty:
        return f"{title}: no rows."
    body = df.to_string(index=False, float_format=lambda v: f"{v:.1f}")
    return f"{title}\n{'=' * len(title)}\n{body}"
