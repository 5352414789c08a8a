"""Result types for the quality-check battery.

Each rule produces exactly one finding. The shape of a finding is fixed when
the rule runs: either a table of offending rows or a single scalar value.
Both shapes expose the same interface, so renderers never inspect types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

import pandas as pd


@dataclass(frozen=True)
class TableResult:
    """A finding made of zero or more rows.

    Attributes:
        name: Rule name; also used as the sheet name.
        rows: Offending or informational rows (possibly empty).
    """

    name: str
    rows: pd.DataFrame

    @property
    def issue_count(self) -> int:
        return len(self.rows)

    def describe(self) -> str:
        return f"{self.issue_count:,} rows"

    def to_frame(self) -> pd.DataFrame:
        return self.rows.reset_index(drop=True)


@dataclass(frozen=True)
class ScalarResult:
    """A finding holding a single value, e.g. the last date in the data.

    Attributes:
        name: Rule name; also used as the sheet name.
        value: The scalar value.
        label: Column name used when the value is rendered as a table.
    """

    name: str
    value: Any
    label: str = field(default="value")

    @property
    def issue_count(self) -> int:
        return 1

    def describe(self) -> str:
        return "n/a" if pd.isna(self.value) else str(self.value)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({self.label: [self.value]})


Finding = Union[TableResult, ScalarResult]
