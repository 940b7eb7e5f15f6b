"""Tests for series/alignment.py."""

import pandas as pd
import pytest

from timekit.core.errors import EContractViolation
from timekit.series import align_rows, check_alignment


@pytest.fixture
def sequence() -> pd.DatetimeIndex:
    return pd.date_range("2024-01-01", periods=4, freq="D")


class TestCheckAlignment:
    """Tests for check_alignment."""

    def test_aligned_rows_pass(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({"date": pd.to_datetime(["2024-01-01", "2024-01-03"])})
        check_alignment(df, "date", sequence)

    def test_missing_timestamp(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({"date": pd.to_datetime(["2024-01-01", None])})
        with pytest.raises(EContractViolation, match="missing values"):
            check_alignment(df, "date", sequence)

    def test_duplicate_timestamp(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({"date": pd.to_datetime(["2024-01-01", "2024-01-01"])})
        with pytest.raises(EContractViolation, match="duplicate") as exc_info:
            check_alignment(df, "date", sequence)
        assert exc_info.value.context["duplicate_count"] == 1

    def test_off_grid_timestamp(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({"date": pd.to_datetime(["2024-01-01", "2024-01-02 12:00"])})
        with pytest.raises(EContractViolation, match="1 timestamps") as exc_info:
            check_alignment(df, "date", sequence)
        assert exc_info.value.context["misaligned_count"] == 1


class TestAlignRows:
    """Tests for align_rows."""

    def test_inserts_missing_rows(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({
            "value": [1.0, 3.0],
            "date": pd.to_datetime(["2024-01-01", "2024-01-03"]),
        })
        aligned, origin = align_rows(df, "date", sequence)

        assert list(aligned.columns) == ["value", "date"]
        assert list(aligned["date"]) == list(sequence)
        assert aligned["value"].tolist()[0] == 1.0
        assert pd.isna(aligned["value"].iloc[1])
        assert origin.tolist() == [True, False, True, False]

    def test_input_rows_unchanged(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({
            "date": pd.to_datetime(["2024-01-02", "2024-01-04"]),
            "label": ["x", "y"],
        })
        aligned, origin = align_rows(df, "date", sequence)
        assert aligned.loc[origin.to_numpy(), "label"].tolist() == ["x", "y"]
        assert aligned.loc[~origin.to_numpy(), "label"].isna().all()

    def test_group_keys_set_on_inserted_rows(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({
            "store": [7, 7],
            "date": pd.to_datetime(["2024-01-01", "2024-01-04"]),
            "sales": [5, 6],
        })
        aligned, _ = align_rows(df, "date", sequence, group_cols=["store"], group_key=(7,))
        assert aligned["store"].tolist() == [7, 7, 7, 7]
        assert aligned["store"].dtype == df["store"].dtype

    def test_exact_match_keeps_row_count(self, sequence: pd.DatetimeIndex) -> None:
        df = pd.DataFrame({"date": sequence, "value": range(4)})
        aligned, origin = align_rows(df, "date", sequence)
        assert len(aligned) == 4
        assert origin.all()
        assert aligned["value"].tolist() == [0, 1, 2, 3]
