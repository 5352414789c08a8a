"""Tests for the individual quality rules and their summary.

Each class covers one rule through the public ``run_quality_checks`` API.
The input frames use the raw export column names (who, when, What,
location, cardnum) to exercise normalization at the same time.
"""

import pandas as pd
import pytest

from attendance_core.exceptions import ConfigError, DataFormatError, DataQualityError
from attendance_core.qa import ScalarResult, TableResult, run_quality_checks
from tests.test_utils import DENIED, GRANTED, make_access_log, verify_summary_matches_findings

MAY_START = "2025-05-01"
MAY_END = "2025-05-31"


@pytest.fixture
def may_log() -> pd.DataFrame:
    """A small May 2025 log with one issue of most kinds."""
    return make_access_log(
        [
            ("A", "2025-05-05 09:00", GRANTED, "L1"),
            ("A", "2025-05-05 09:00", GRANTED, "L1"),  # duplicate of the row above
            ("A", "2025-05-06 09:00", GRANTED, "L2"),  # A also at L2
            ("B", "2025-05-06 08:30", DENIED, "L1"),  # invalid status
            ("B", "2025-05-10 10:00", GRANTED, "L1"),  # Saturday
            ("C", "2025-06-02 08:00", GRANTED, "L2"),  # out of range
        ]
    )


class TestCompleteness:
    """Missing days per location and incomplete attendance per employee."""

    def test_every_location_short_of_a_full_month_is_flagged(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        missing = result.findings["locations_with_missing_days"].to_frame()

        assert sorted(missing["location"]) == ["L1", "L2"]
        assert (missing["days_expected"] == 31).all()
        l1 = missing.set_index("location").loc["L1", "distinct_days"]
        assert l1 == 3  # May 5, 6 and 10

    def test_full_coverage_is_not_flagged(self) -> None:
        rows = [("A", f"2025-05-0{d} 09:00", GRANTED, "L") for d in range(1, 4)]
        result = run_quality_checks(make_access_log(rows), "2025-05-01", "2025-05-03")

        assert result.findings["locations_with_missing_days"].issue_count == 0
        assert result.findings["employees_with_incomplete_attendance"].issue_count == 0

    def test_several_events_on_one_day_count_as_one_day(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-01 08:00", GRANTED, "L"),
                ("A", "2025-05-01 17:00", GRANTED, "L"),
            ]
        )
        result = run_quality_checks(df, "2025-05-01", "2025-05-02")
        missing = result.findings["locations_with_missing_days"].to_frame()

        assert missing["distinct_days"].tolist() == [1]

    def test_day_count_is_not_restricted_to_the_month(self) -> None:
        """Days outside the window still count towards coverage.

        L has events on two days inside a three-day window and one day
        before it. The distinct-day count over the whole input is 3, which
        meets the target, so L is not flagged even though the window itself
        is missing a day. The out-of-window row shows up in
        dates_out_of_range instead.
        """
        df = make_access_log(
            [
                ("A", "2025-04-30 09:00", GRANTED, "L"),
                ("A", "2025-05-01 09:00", GRANTED, "L"),
                ("A", "2025-05-02 09:00", GRANTED, "L"),
            ]
        )
        result = run_quality_checks(df, "2025-05-01", "2025-05-03")

        assert result.findings["locations_with_missing_days"].issue_count == 0
        assert result.findings["dates_out_of_range"].issue_count == 1

    def test_incomplete_attendance_is_per_location_and_subject(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-01 09:00", GRANTED, "L"),
                ("A", "2025-05-02 09:00", GRANTED, "L"),
                ("B", "2025-05-01 09:00", GRANTED, "L"),
            ]
        )
        result = run_quality_checks(df, "2025-05-01", "2025-05-02")
        incomplete = result.findings["employees_with_incomplete_attendance"].to_frame()

        assert incomplete[["location", "subject"]].values.tolist() == [["L", "B"]]
        assert incomplete["distinct_days"].tolist() == [1]
        assert result.findings["locations_with_missing_days"].issue_count == 0


class TestDuplicates:
    """Duplicate (location, subject, timestamp) entries."""

    def test_all_rows_of_a_duplicate_group_are_returned(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-05 09:00", GRANTED, "L"),
                ("A", "2025-05-05 09:00", GRANTED, "L"),
                ("A", "2025-05-05 09:00", GRANTED, "L"),
                ("B", "2025-05-05 09:00", GRANTED, "L"),
            ]
        )
        result = run_quality_checks(df, MAY_START, MAY_END)
        dups = result.findings["duplicate_entries"].to_frame()

        assert len(dups) == 3
        assert set(dups["subject"]) == {"A"}

    def test_same_time_at_different_locations_is_not_a_duplicate(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-05 09:00", GRANTED, "L1"),
                ("A", "2025-05-05 09:00", GRANTED, "L2"),
            ]
        )
        result = run_quality_checks(df, MAY_START, MAY_END)

        assert result.findings["duplicate_entries"].issue_count == 0

    def test_duplicate_rows_keep_all_columns(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        dups = result.findings["duplicate_entries"].to_frame()

        assert list(dups.columns) == ["subject", "timestamp", "status", "location", "credential"]
        assert len(dups) == 2


class TestMultipleLocations:
    """Subjects seen at more than one location."""

    def test_only_multi_location_subjects_are_reported(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        multi = result.findings["employees_in_multiple_locations"].to_frame()

        assert multi["subject"].tolist() == ["A"]
        assert (multi["location_count"] > 1).all()

    def test_out_of_range_rows_still_count(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-05 09:00", GRANTED, "L1"),
                ("A", "2025-03-05 09:00", GRANTED, "L2"),
            ]
        )
        result = run_quality_checks(df, MAY_START, MAY_END)

        assert result.findings["employees_in_multiple_locations"].issue_count == 1


class TestDatesAndStatuses:
    """Out-of-range dates, invalid statuses and weekend access."""

    def test_window_bounds_are_inclusive_days(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-04-30 23:59", GRANTED, "L"),
                ("A", "2025-05-01 00:00", GRANTED, "L"),
                ("A", "2025-05-31 18:30", GRANTED, "L"),
                ("A", "2025-06-01 00:00", GRANTED, "L"),
            ]
        )
        result = run_quality_checks(df, MAY_START, MAY_END)
        out = result.findings["dates_out_of_range"].to_frame()

        assert out["timestamp"].tolist() == [
            pd.Timestamp("2025-04-30 23:59"),
            pd.Timestamp("2025-06-01 00:00"),
        ]

    def test_invalid_status_uses_default_statuses(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        invalid = result.findings["invalid_access_statuses"].to_frame()

        assert invalid["status"].tolist() == [DENIED]

    def test_invalid_status_respects_explicit_statuses(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(
            may_log, MAY_START, MAY_END, valid_statuses={GRANTED, DENIED}
        )

        assert result.findings["invalid_access_statuses"].issue_count == 0

    def test_missing_status_is_invalid(self) -> None:
        df = make_access_log([("A", "2025-05-05 09:00", GRANTED, "L")])
        df.loc[0, "What"] = None
        result = run_quality_checks(df, MAY_START, MAY_END)

        assert result.findings["invalid_access_statuses"].issue_count == 1

    def test_weekend_rule_only_counts_granted_status(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-10 09:00", GRANTED, "L"),  # Saturday
                ("B", "2025-05-11 09:00", DENIED, "L"),  # Sunday
                ("C", "2025-05-12 09:00", GRANTED, "L"),  # Monday
            ]
        )
        result = run_quality_checks(
            df, MAY_START, MAY_END, valid_statuses={GRANTED, DENIED}
        )
        weekend = result.findings["access_granted_on_weekends"].to_frame()

        assert weekend["subject"].tolist() == ["A"]


class TestLastDate:
    """The last timestamp in the data is a scalar finding."""

    def test_last_date_is_scalar(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        finding = result.findings["last_date_in_data"]

        assert isinstance(finding, ScalarResult)
        assert finding.value == pd.Timestamp("2025-06-02 08:00")
        assert finding.issue_count == 1
        assert finding.to_frame().columns.tolist() == ["last_date"]

    def test_other_findings_are_tables(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        tables = [f for f in result.findings.values() if isinstance(f, TableResult)]

        assert len(tables) == len(result.findings) - 1

    def test_last_date_keeps_wall_time_across_dst(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-03-28T09:00:00+01:00", GRANTED, "L"),
                ("A", "2025-03-31T09:00:00+02:00", GRANTED, "L"),
            ]
        )

        result = run_quality_checks(df, "2025-03-01", "2025-03-31")

        assert result.findings["last_date_in_data"].value == pd.Timestamp("2025-03-31 09:00")
        assert result.findings["dates_out_of_range"].issue_count == 0


class TestSummary:
    """The summary never drifts from the findings."""

    def test_summary_counts(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)

        verify_summary_matches_findings(result)
        counts = dict(zip(result.summary["check"], result.summary["issue_count"]))
        assert counts["duplicate_entries"] == 2
        assert counts["employees_in_multiple_locations"] == 1
        assert counts["dates_out_of_range"] == 1
        assert counts["invalid_access_statuses"] == 1
        assert counts["access_granted_on_weekends"] == 1
        assert counts["last_date_in_data"] == 1

    def test_empty_log_reports_only_the_scalar(self) -> None:
        result = run_quality_checks(make_access_log([]), MAY_START, MAY_END)

        verify_summary_matches_findings(result)
        assert result.total_issues == 1
        assert pd.isna(result.findings["last_date_in_data"].value)

    def test_tables_start_with_summary(self, may_log: pd.DataFrame) -> None:
        result = run_quality_checks(may_log, MAY_START, MAY_END)
        tables = result.tables()

        assert list(tables)[0] == "summary"
        assert list(tables)[1:] == list(result.findings)


class TestErrors:
    """Configuration and format errors abort the run."""

    def test_inverted_month_raises_config_error(self, may_log: pd.DataFrame) -> None:
        with pytest.raises(ConfigError, match="start 2025-05-31 is after end 2025-05-01"):
            run_quality_checks(may_log, MAY_END, MAY_START)

    def test_unparseable_timestamp_raises_data_format_error(self) -> None:
        df = make_access_log(
            [
                ("A", "2025-05-05 09:00", GRANTED, "L"),
                ("B", "not a date", GRANTED, "L"),
            ]
        )
        with pytest.raises(DataFormatError, match="timestamp"):
            run_quality_checks(df, MAY_START, MAY_END)

    def test_unparseable_month_bound_raises_data_format_error(
        self, may_log: pd.DataFrame
    ) -> None:
        with pytest.raises(DataFormatError, match="Could not parse date"):
            run_quality_checks(may_log, "2025-13-45", MAY_END)

    def test_empty_valid_statuses_raises_config_error(self, may_log: pd.DataFrame) -> None:
        with pytest.raises(ConfigError, match="valid_statuses"):
            run_quality_checks(may_log, MAY_START, MAY_END, valid_statuses=set())

    def test_missing_column_raises_data_quality_error(self, may_log: pd.DataFrame) -> None:
        with pytest.raises(DataQualityError, match="location"):
            run_quality_checks(may_log.drop(columns=["location"]), MAY_START, MAY_END)

    def test_input_frame_is_not_modified(self, may_log: pd.DataFrame) -> None:
        before = may_log.copy()
        run_quality_checks(may_log, MAY_START, MAY_END)

        pd.testing.assert_frame_equal(may_log, before)
