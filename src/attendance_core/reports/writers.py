"""Write named tables to an Excel workbook or a directory of CSVs.

Both writers validate every sheet name before touching the filesystem, so a
collision never leaves a half-written report behind.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from attendance_core.config import SHEET_NAME_LIMIT
from attendance_core.exceptions import ConfigError
from attendance_core.reports.sheets import validate_sheet_names

logger = logging.getLogger(__name__)


def write_excel_report(
    tables: Mapping[str, pd.DataFrame],
    path: str | Path,
    *,
    sheet_name_limit: int = SHEET_NAME_LIMIT,
) -> Path:
    """Write one sheet per table to an ``.xlsx`` workbook.

    Args:
        tables: Tables keyed by name, in sheet order.
        path: Output workbook path. Parent directories are created.
        sheet_name_limit: Maximum sheet-name length.

    Returns:
        The path written.

    Raises:
        NamingCollisionError: If two table names collide after truncation.

    """
    path = Path(path)
    sheets = validate_sheet_names(tables.keys(), sheet_name_limit)

    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="xlsxwriter") as xw:
        for sheet, table in zip(sheets, tables.values(), strict=True):
            table.to_excel(xw, sheet_name=sheet, index=False)

    logger.info("Wrote %s (%d sheets)", path, len(sheets))
    return path


def write_csv_reports(
    tables: Mapping[str, pd.DataFrame],
    out_dir: str | Path,
    *,
    sheet_name_limit: int = SHEET_NAME_LIMIT,
) -> list[Path]:
    """Write one ``<sheet>.csv`` per table into ``out_dir``.

    File names follow the same truncation and collision rules as sheets.

    Returns:
        Paths written, in table order.
    """
    out_dir = Path(out_dir)
    sheets = validate_sheet_names(tables.keys(), sheet_name_limit)

    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for sheet, table in zip(sheets, tables.values(), strict=True):
        out_path = out_dir / f"{sheet}.csv"
        table.to_csv(out_path, index=False, encoding="utf-8-sig", quoting=csv.QUOTE_MINIMAL)
        written.append(out_path)

    logger.info("Wrote %d CSV files to %s", len(written), out_dir)
    return written


def write_report(tables: Mapping[str, pd.DataFrame], output: str | Path) -> list[Path]:
    """Write tables to Excel or CSV based on the output path.

    A path ending in ``.xlsx`` produces a workbook; a path without a suffix
    is a directory of CSV files.

    Raises:
        ConfigError: If the path has any other suffix (``.xls``, ``.csv``, ...).
    """
    output = Path(output)
    suffix = output.suffix.lower()
    if suffix == ".xlsx":
        return [write_excel_report(tables, output)]
    if suffix:
        raise ConfigError(
            f"Unsupported report path {output}: use a .xlsx file or a directory without a suffix"
        )
    return write_csv_reports(tables, output)
