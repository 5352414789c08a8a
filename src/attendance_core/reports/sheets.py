"""Sheet-name validation for multi-table reports.

Excel limits sheet names to 31 characters and compares them
case-insensitively. Table names are truncated to that limit, so two
distinct names can end up on the same sheet; this module detects that
before anything is written.
"""

from __future__ import annotations

from collections.abc import Iterable

from attendance_core.config import SHEET_NAME_LIMIT
from attendance_core.exceptions import ConfigError, NamingCollisionError


def truncate_sheet_name(name: str, limit: int = SHEET_NAME_LIMIT) -> str:
    """Truncate a table name to the sheet-name limit.

    Examples:
        >>> truncate_sheet_name("employees_with_incomplete_attendance")
        'employees_with_incomplete_atten'

    """
    return name[:limit]


def validate_sheet_names(names: Iterable[str], limit: int = SHEET_NAME_LIMIT) -> list[str]:
    """Map table names to sheet names, rejecting collisions.

    Args:
        names: Table names in output order.
        limit: Maximum sheet-name length.

    Returns:
        Truncated sheet names, in the same order as ``names``.

    Raises:
        ConfigError: If a name is empty or ``limit`` is not positive.
        NamingCollisionError: If two names share a sheet name after
            truncation (case-insensitive).

    Examples:
        >>> validate_sheet_names(["summary", "duplicate_entries"])
        ['summary', 'duplicate_entries']

    """
    if limit < 1:
        raise ConfigError(f"Sheet-name limit must be positive, got {limit}")

    sheets: list[str] = []
    groups: dict[str, list[str]] = {}
    for name in names:
        if not name:
            raise ConfigError("Table names must be non-empty")
        sheet = truncate_sheet_name(name, limit)
        sheets.append(sheet)
        groups.setdefault(sheet.casefold(), []).append(name)

    collisions = {
        truncate_sheet_name(members[0], limit): members
        for members in groups.values()
        if len(members) > 1
    }
    if collisions:
        raise NamingCollisionError(collisions)
    return sheets
