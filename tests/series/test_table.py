"""Tests for series/table.py."""

from __future__ import annotations

import pandas as pd
import pytest

from timekit.core.errors import EAmbiguousColumn, EContractViolation
from timekit.series import ColumnKind, as_time_table


@pytest.fixture
def panel_df() -> pd.DataFrame:
    return pd.DataFrame({
        "symbol": ["B", "A", "B", "A"],
        "date": pd.to_datetime(["2024-01-01", "2024-01-01", "2024-01-03", "2024-01-02"]),
        "value": [1.0, 2.0, 3.0, 4.0],
    })


class TestAsTimeTable:
    """Tests for as_time_table."""

    def test_plain_frame(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df)
        assert table.time_col == "date"
        assert table.group_cols == ()
        assert not table.is_grouped
        assert not table.grouped_input
        assert table.kinds["value"] == ColumnKind.NUMERIC
        assert table.numeric_cols == ["value"]

    def test_group_by_string(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df, "date", group_by="symbol")
        assert table.group_cols == ("symbol",)
        assert table.is_grouped
        assert not table.grouped_input

    def test_dataframe_groupby(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df.groupby("symbol"))
        assert table.group_cols == ("symbol",)
        assert table.grouped_input
        assert table.data is not None
        assert len(table.data) == 4

    def test_groupby_multiple_keys(self, panel_df: pd.DataFrame) -> None:
        df = panel_df.assign(region="north")
        table = as_time_table(df.groupby(["region", "symbol"]))
        assert table.group_cols == ("region", "symbol")

    def test_groupby_with_group_by_rejected(self, panel_df: pd.DataFrame) -> None:
        with pytest.raises(EContractViolation):
            as_time_table(panel_df.groupby("symbol"), group_by="symbol")

    def test_groupby_on_series_rejected(self, panel_df: pd.DataFrame) -> None:
        with pytest.raises(EContractViolation, match="column names"):
            as_time_table(panel_df.groupby(panel_df["symbol"].str.lower()))

    def test_unsupported_type(self) -> None:
        with pytest.raises(EContractViolation, match="no method for class list"):
            as_time_table([1, 2, 3])  # type: ignore[arg-type]

    def test_missing_group_column(self, panel_df: pd.DataFrame) -> None:
        with pytest.raises(EContractViolation, match="not found"):
            as_time_table(panel_df, group_by="store")

    def test_time_column_as_group_column(self, panel_df: pd.DataFrame) -> None:
        with pytest.raises(EContractViolation):
            as_time_table(panel_df, time_column="date", group_by="date")

    def test_group_keys_excluded_from_detection(self, panel_df: pd.DataFrame) -> None:
        df = panel_df.assign(cohort=pd.Timestamp("2023-01-01"))
        with pytest.raises(EAmbiguousColumn):
            as_time_table(df)
        assert as_time_table(df, group_by="cohort").time_col == "date"


class TestGroups:
    """Group iteration and regrouping."""

    def test_plain_single_group(self, panel_df: pd.DataFrame) -> None:
        groups = list(as_time_table(panel_df).groups())
        assert len(groups) == 1
        assert groups[0][0] == ()
        assert len(groups[0][1]) == 4

    def test_sorted_keys(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df, group_by="symbol")
        assert [key for key, _ in table.groups()] == [("A",), ("B",)]

    def test_unsorted_groupby_keeps_appearance_order(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df.groupby("symbol", sort=False))
        assert [key for key, _ in table.groups()] == [("B",), ("A",)]

    def test_regroup_plain_returns_frame(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df, group_by="symbol")
        assert table.regroup(panel_df) is panel_df

    def test_regroup_grouped_input(self, panel_df: pd.DataFrame) -> None:
        table = as_time_table(panel_df.groupby("symbol"))
        regrouped = table.regroup(panel_df)
        assert isinstance(regrouped, pd.core.groupby.DataFrameGroupBy)
        assert regrouped.ngroups == 2
