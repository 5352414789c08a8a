"""Tests for column normalization and date helpers."""

from datetime import date, datetime
from pathlib import Path

import pandas as pd
import pytest

from attendance_core.exceptions import ConfigError, DataFormatError, DataQualityError
from attendance_core.loaders import load_access_log, read_access_log
from attendance_core.schema import normalize_access_log, rename_columns
from attendance_core.utils import (
    business_days,
    calendar_days,
    iter_month_windows,
    parse_date,
    validate_range,
)
from tests.test_utils import GRANTED, make_access_log


class TestNormalizeAccessLog:
    """Raw export columns map onto the internal schema."""

    def test_export_columns_are_renamed(self) -> None:
        df = normalize_access_log(make_access_log([("A", "2025-05-05 09:00", GRANTED, "L")]))

        assert list(df.columns) == ["subject", "timestamp", "status", "location", "credential"]
        assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])
        assert df.loc[0, "credential"] == "C-A"

    def test_matching_ignores_case_and_whitespace(self) -> None:
        raw = pd.DataFrame(columns=["WHO", " When ", "what", "Location", "CardNum"])

        assert list(rename_columns(raw).columns) == [
            "subject",
            "timestamp",
            "status",
            "location",
            "credential",
        ]

    def test_internal_names_pass_through(self) -> None:
        df = pd.DataFrame(
            {
                "subject": ["A"],
                "timestamp": pd.to_datetime(["2025-05-05 09:00"]),
                "status": [GRANTED],
                "location": ["L"],
                "credential": ["C-1"],
            }
        )

        pd.testing.assert_frame_equal(normalize_access_log(df), df)

    def test_credential_is_optional(self) -> None:
        raw = make_access_log([("A", "2025-05-05", GRANTED, "L")]).drop(columns=["cardnum"])

        df = normalize_access_log(raw)

        assert "credential" in df.columns
        assert df["credential"].isna().all()

    def test_extra_columns_are_kept_at_the_end(self) -> None:
        raw = make_access_log([("A", "2025-05-05", GRANTED, "L")])
        raw["door"] = ["North"]

        df = normalize_access_log(raw)

        assert list(df.columns)[-1] == "door"

    def test_timezone_is_dropped(self) -> None:
        raw = make_access_log([("A", "2025-05-05T09:00:00+02:00", GRANTED, "L")])

        df = normalize_access_log(raw)

        assert df.loc[0, "timestamp"] == pd.Timestamp("2025-05-05 09:00")

    def test_offsets_across_a_dst_change_keep_wall_time(self) -> None:
        raw = make_access_log(
            [
                ("A", "2025-03-28T09:00:00+01:00", GRANTED, "L"),
                ("A", "2025-03-31T09:00:00+02:00", GRANTED, "L"),
            ]
        )

        df = normalize_access_log(raw)

        assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])
        assert df["timestamp"].tolist() == [
            pd.Timestamp("2025-03-28 09:00"),
            pd.Timestamp("2025-03-31 09:00"),
        ]

    def test_alias_and_internal_name_together_are_rejected(self) -> None:
        raw = make_access_log([("A", "2025-05-05 09:00", GRANTED, "L")])
        raw["timestamp"] = ["2025-05-05 10:00"]

        with pytest.raises(DataQualityError, match="'when'"):
            normalize_access_log(raw)

    def test_missing_columns_are_listed(self) -> None:
        raw = make_access_log([]).drop(columns=["who", "What"])

        with pytest.raises(DataQualityError, match=r"\['subject', 'status'\]"):
            normalize_access_log(raw)

    def test_unparseable_timestamp_fails_the_whole_frame(self) -> None:
        raw = make_access_log(
            [
                ("A", "2025-05-05", GRANTED, "L"),
                ("B", "yesterday-ish", GRANTED, "L"),
            ]
        )

        with pytest.raises(DataFormatError):
            normalize_access_log(raw)

    def test_input_is_not_modified(self) -> None:
        raw = make_access_log([("A", "2025-05-05", GRANTED, "L")])

        normalize_access_log(raw)

        assert list(raw.columns) == ["who", "when", "What", "location", "cardnum"]
        assert raw.loc[0, "when"] == "2025-05-05"


class TestDates:
    """Date parsing and day counting."""

    @pytest.mark.parametrize(
        "value",
        ["2025-05-01", date(2025, 5, 1), datetime(2025, 5, 1, 13, 30), pd.Timestamp("2025-05-01")],
    )
    def test_parse_date_accepts_common_types(self, value: object) -> None:
        assert parse_date(value) == date(2025, 5, 1)

    def test_parse_date_rejects_garbage(self) -> None:
        with pytest.raises(DataFormatError):
            parse_date("not-a-date")

    def test_parse_date_rejects_nat(self) -> None:
        with pytest.raises(DataFormatError):
            parse_date(pd.NaT)

    def test_validate_range_allows_single_day(self) -> None:
        assert validate_range("2025-05-05", "2025-05-05") == (date(2025, 5, 5), date(2025, 5, 5))

    def test_validate_range_rejects_inverted_range(self) -> None:
        with pytest.raises(ConfigError):
            validate_range("2025-05-06", "2025-05-05")

    def test_calendar_days(self) -> None:
        assert calendar_days(date(2025, 5, 1), date(2025, 5, 31)) == 31
        assert calendar_days(date(2025, 5, 1), date(2025, 5, 1)) == 1

    def test_business_days(self) -> None:
        assert business_days(date(2025, 5, 1), date(2025, 5, 31)) == 22
        assert business_days(date(2025, 4, 1), date(2025, 4, 30)) == 22
        assert business_days(date(2025, 5, 5), date(2025, 5, 5)) == 1
        assert business_days(date(2025, 5, 10), date(2025, 5, 11)) == 0
        assert business_days(date(2025, 5, 2), date(2025, 5, 1)) == 0

    def test_month_windows_cross_year_boundary(self) -> None:
        windows = list(iter_month_windows(date(2024, 12, 20), date(2025, 1, 5)))

        assert windows == [
            (date(2024, 12, 20), date(2024, 12, 31)),
            (date(2025, 1, 1), date(2025, 1, 5)),
        ]


class TestLoaders:
    """Reading exports from disk."""

    def test_csv_export_is_normalized(self, tmp_path: Path) -> None:
        path = tmp_path / "log.csv"
        make_access_log([("A", "2025-05-05 09:00", GRANTED, "L")]).to_csv(
            path, index=False, encoding="utf-8-sig"
        )

        df = load_access_log(path)

        assert list(df.columns)[:4] == ["subject", "timestamp", "status", "location"]
        assert df.loc[0, "timestamp"] == pd.Timestamp("2025-05-05 09:00")

    def test_excel_export_is_read(self, tmp_path: Path) -> None:
        path = tmp_path / "log.xlsx"
        make_access_log([("A", "2025-05-05 09:00", GRANTED, "L")]).to_excel(path, index=False)

        df = load_access_log(path)

        assert df.loc[0, "subject"] == "A"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_access_log(tmp_path / "missing.csv")
