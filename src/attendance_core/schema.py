"""Ingestion boundary: normalize raw access-log columns.

Access-log exports name their columns inconsistently (``who``, ``when``,
``What``, ``location``, ``cardnum``). Every public function in the package
runs its input through :func:`normalize_access_log` so the rest of the code
only sees the internal schema below.
"""

from __future__ import annotations

import logging

import pandas as pd

from attendance_core.exceptions import DataFormatError, DataQualityError

logger = logging.getLogger(__name__)

SUBJECT = "subject"
TIMESTAMP = "timestamp"
STATUS = "status"
LOCATION = "location"
CREDENTIAL = "credential"

REQUIRED_COLUMNS = [SUBJECT, TIMESTAMP, STATUS, LOCATION]

OUTPUT_COLUMNS = [SUBJECT, TIMESTAMP, STATUS, LOCATION, CREDENTIAL]

# Source column name (lowercased) -> internal column name
COLUMN_ALIASES = {
    "who": SUBJECT,
    "subject": SUBJECT,
    "when": TIMESTAMP,
    "timestamp": TIMESTAMP,
    "what": STATUS,
    "status": STATUS,
    "location": LOCATION,
    "cardnum": CREDENTIAL,
    "credential": CREDENTIAL,
}


def rename_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename known source columns to the internal schema.

    Matching is case-insensitive and ignores surrounding whitespace.
    Unknown columns are kept as they are.

    Examples:
        >>> raw = pd.DataFrame(columns=["who", "when", "What", "location", "cardnum"])
        >>> list(rename_columns(raw).columns)
        ['subject', 'timestamp', 'status', 'location', 'credential']

    Raises:
        DataQualityError: If two source columns map to the same internal
            column (e.g. both 'when' and 'timestamp').

    """
    mapping = {}
    sources: dict[str, list[str]] = {}
    for col in df.columns:
        key = str(col).strip().lower()
        if key in COLUMN_ALIASES:
            mapping[col] = COLUMN_ALIASES[key]
            sources.setdefault(COLUMN_ALIASES[key], []).append(str(col))

    clashes = {target: cols for target, cols in sources.items() if len(cols) > 1}
    if clashes:
        details = "; ".join(f"{cols} -> '{target}'" for target, cols in clashes.items())
        raise DataQualityError(f"Ambiguous access-log columns: {details}")
    return df.rename(columns=mapping)


def _wall_time(value: object) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def coerce_timestamps(values: pd.Series) -> pd.Series:
    """Parse a column to naive ``datetime64`` values.

    Offsets are dropped and the local wall time is kept, so a log spanning
    a daylight-saving change (``+01:00`` and ``+02:00`` rows) still reads
    09:00 as 09:00 on both sides.

    Raises:
        DataFormatError: If any value cannot be parsed. The whole call
            fails; no rows are dropped.

    """
    if pd.api.types.is_datetime64_any_dtype(values):
        parsed = values
    else:
        try:
            parsed = pd.to_datetime(values, format="mixed", errors="raise")
        except (ValueError, TypeError, OverflowError):
            parsed = None
        if parsed is None or not pd.api.types.is_datetime64_any_dtype(parsed):
            # mixed UTC offsets: parse each value and keep its wall time
            try:
                parsed = pd.to_datetime(values.map(_wall_time))
            except (ValueError, TypeError, OverflowError) as exc:
                raise DataFormatError(f"Could not parse '{TIMESTAMP}' column: {exc}") from exc

    if isinstance(parsed.dtype, pd.DatetimeTZDtype):
        parsed = parsed.dt.tz_localize(None)
    return parsed


def normalize_access_log(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` in the internal access-log schema.

    Args:
        df: Raw access-log rows. Expected columns (any casing):
            - 'who' or 'subject'
            - 'when' or 'timestamp'
            - 'What' or 'status'
            - 'location'
            - 'cardnum' or 'credential' (optional)

    Returns:
        DataFrame with columns subject, timestamp, status, location,
        credential (followed by any extra source columns). ``timestamp``
        is ``datetime64``.

    Raises:
        DataQualityError: If required columns are missing.
        DataFormatError: If a timestamp cannot be parsed.

    """
    out = rename_columns(df.copy())

    missing_cols = [col for col in REQUIRED_COLUMNS if col not in out.columns]
    if missing_cols:
        raise DataQualityError(
            f"Missing required columns in access log: {missing_cols}. Required: {REQUIRED_COLUMNS}"
        )

    if CREDENTIAL not in out.columns:
        out[CREDENTIAL] = pd.NA

    out[TIMESTAMP] = coerce_timestamps(out[TIMESTAMP])

    extra = [col for col in out.columns if col not in OUTPUT_COLUMNS]
    logger.debug("Normalized %d access-log rows (%d extra columns)", len(out), len(extra))
    return out[OUTPUT_COLUMNS + extra]
