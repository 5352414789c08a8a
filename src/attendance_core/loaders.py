"""Load access-log exports from disk.

Reading the raw table is the caller's concern; these helpers cover the
common case of a CSV or Excel export and hand the result to the ingestion
boundary.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from attendance_core.schema import normalize_access_log

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xls"}


def read_access_log(path: str | Path) -> pd.DataFrame:
    """Read a raw access-log export without normalizing it.

    Raises:
        FileNotFoundError: If the file does not exist.

    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(path)
    else:
        # utf-8-sig handles a BOM from spreadsheet exports
        df = pd.read_csv(path, encoding="utf-8-sig")

    logger.info("Read %s (%d rows)", path, len(df))
    return df


def load_access_log(path: str | Path) -> pd.DataFrame:
    """Read an access-log export and normalize it to the internal schema.

    Args:
        path: CSV or Excel file with columns who, when, What, location,
            cardnum (or their internal names).

    Returns:
        Normalized DataFrame (see :func:`attendance_core.schema.normalize_access_log`).

    Raises:
        FileNotFoundError: If the file does not exist.
        DataQualityError: If required columns are missing.
        DataFormatError: If a timestamp cannot be parsed.

    Examples:
        >>> df = load_access_log("data/a_raw/access_logs/may_2025.csv")
        >>> list(df.columns)[:5]
        ['subject', 'timestamp', 'status', 'location', 'credential']

    """
    return normalize_access_log(read_access_log(path))
