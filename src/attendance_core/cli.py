"""Command-line entry point for attendance reports.

Examples:
    Monthly quality report:
        attendance-core qa logs.csv --month-start 2025-05-01 --month-end 2025-05-31 \\
            -o May_2025_Attendance_Quality_Report.xlsx

    Attendance percentage per location:
        attendance-core pct logs.csv --start 2025-05-01 --end 2025-05-31

    May vs April trend, written under the data root:
        attendance-core --data-root data trend logs.csv \\
            --current-start 2025-05-01 --current-end 2025-05-31 \\
            --previous-start 2025-04-01 --previous-end 2025-04-30

The input path may be omitted when ATTENDANCE_LOG is set.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from attendance_core.attendance import (
    attendance_percentage,
    compare_trend,
    count_subjects_per_location,
    monthly_attendance,
)
from attendance_core.config import DataPaths
from attendance_core.exceptions import AttendanceAPIError
from attendance_core.loaders import read_access_log
from attendance_core.qa import run_quality_checks
from attendance_core.reports import format_quality_summary, format_table, write_report

logger = logging.getLogger(__name__)

ENV_LOG_PATH = "ATTENDANCE_LOG"
ENV_DATA_ROOT = "ATTENDANCE_DATA_ROOT"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="attendance-core",
        description="Access-log quality checks and attendance reports",
    )
    p.add_argument(
        "--data-root",
        type=Path,
        default=os.environ.get(ENV_DATA_ROOT),
        help=f"Write reports under <data-root>/c_processed/reports (env: {ENV_DATA_ROOT})",
    )
    p.add_argument("--quiet", action="store_true", help="Less logging")

    sub = p.add_subparsers(dest="command", required=True)

    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "log",
            nargs="?",
            type=Path,
            default=os.environ.get(ENV_LOG_PATH),
            help=f"Access-log CSV or Excel export (env: {ENV_LOG_PATH})",
        )
        sp.add_argument(
            "-o",
            "--output",
            type=Path,
            default=None,
            help="Write a .xlsx workbook, or CSVs into a directory given without a suffix",
        )

    qa = sub.add_parser("qa", help="Run the monthly quality-check battery")
    add_common(qa)
    qa.add_argument("--month-start", required=True)
    qa.add_argument("--month-end", required=True)
    qa.add_argument(
        "--valid-status",
        action="append",
        dest="valid_statuses",
        default=None,
        help="Accepted status (repeatable; default: 'Access Granted')",
    )

    pct = sub.add_parser("pct", help="Attendance percentage per location")
    add_common(pct)
    pct.add_argument("--start", required=True)
    pct.add_argument("--end", required=True)

    monthly = sub.add_parser("monthly", help="Attendance percentage per location and month")
    add_common(monthly)
    monthly.add_argument("--start", required=True)
    monthly.add_argument("--end", required=True)

    trend = sub.add_parser("trend", help="Compare attendance between two periods")
    add_common(trend)
    trend.add_argument("--current-start", required=True)
    trend.add_argument("--current-end", required=True)
    trend.add_argument("--previous-start", required=True)
    trend.add_argument("--previous-end", required=True)

    headcount = sub.add_parser("headcount", help="Distinct employees per location")
    add_common(headcount)

    return p


def resolve_output(args: argparse.Namespace, stem: str) -> Path | None:
    """Pick the report destination: explicit -o, else the data root, else none."""
    if args.output is not None:
        return args.output
    if args.data_root is not None:
        paths = DataPaths.from_root(args.data_root)
        paths.ensure_dirs()
        return paths.reports / f"{stem}.xlsx"
    return None


def run(args: argparse.Namespace) -> dict[str, pd.DataFrame]:
    """Execute the selected command and return its named tables."""
    if args.log is None:
        raise SystemExit(f"No access log given (pass a path or set {ENV_LOG_PATH})")

    df = read_access_log(args.log)

    if args.command == "qa":
        result = run_quality_checks(
            df, args.month_start, args.month_end, valid_statuses=args.valid_statuses
        )
        print(format_quality_summary(result))
        return result.tables()

    if args.command == "pct":
        table = attendance_percentage(df, args.start, args.end)
        name = "attendance_pct"
    elif args.command == "monthly":
        table = monthly_attendance(df, args.start, args.end)
        name = "monthly_attendance"
    elif args.command == "trend":
        table = compare_trend(
            df,
            args.current_start,
            args.current_end,
            args.previous_start,
            args.previous_end,
        )
        name = "attendance_trend"
    else:
        table = count_subjects_per_location(df)
        name = "unique_employees"

    print(format_table(table, name))
    return {name: table}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        tables = run(args)
        output = resolve_output(args, f"{args.log.stem}_{args.command}")
        if output is not None:
            write_report(tables, output)
            print(f"\nWrote {output}")
    except (AttendanceAPIError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
