"""Configuration for attendance-core.

Module-level defaults shared by the quality checks, the attendance
calculators and the report writers, plus the dataclasses that bundle them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Status literal for a successful badge swipe
GRANTED_STATUS = "Access Granted"

DEFAULT_VALID_STATUSES: frozenset[str] = frozenset({GRANTED_STATUS})

# Excel refuses sheet names longer than this
SHEET_NAME_LIMIT = 31

SUMMARY_SHEET = "summary"


@dataclass
class DataPaths:
    """Filesystem paths used by the command-line reports.

    Attributes:
        data_root: Root directory for access-log exports and reports.

    Directory Structure:
        data_root/
        ├── a_raw/
        │   └── access_logs/   # exported badge logs (CSV or Excel)
        └── c_processed/
            └── reports/       # quality and attendance workbooks
    """

    data_root: Path

    @classmethod
    def from_root(cls, data_root: str | Path) -> DataPaths:
        """Create DataPaths from a root directory.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.reports
            PosixPath('data/c_processed/reports')

        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        return cls(data_root=data_root)

    @property
    def raw_access_logs(self) -> Path:
        """Bronze layer: raw access-log exports."""
        return self.data_root / "a_raw" / "access_logs"

    @property
    def reports(self) -> Path:
        """Gold layer: generated report workbooks."""
        return self.data_root / "c_processed" / "reports"

    def ensure_dirs(self) -> None:
        """Create all directories in the data structure."""
        for path in [self.raw_access_logs, self.reports]:
            path.mkdir(parents=True, exist_ok=True)
