"""Row alignment onto a canonical timestamp sequence.

Alignment is purely structural: rows are placed on the sequence, inserted
rows get missing values, and a per-row origin flag records which rows came
from the input. Filling happens later in ``timekit.series.fill``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pandas as pd

from timekit.core.errors import EContractViolation

_ORIGIN_COL = "__timekit_row_exists__"


def check_alignment(frame: pd.DataFrame, time_col: str, sequence: pd.DatetimeIndex) -> None:
    """Reject rows that cannot be placed one-to-one on the sequence.

    Raises:
        EContractViolation: Missing, duplicate or off-sequence timestamps
    """
    ds = frame[time_col]

    if ds.isna().any():
        raise EContractViolation(
            f"Time column '{time_col}' contains missing values.",
            context={"missing_count": int(ds.isna().sum())},
            fix_hint=f"Drop them first: df = df.dropna(subset=['{time_col}'])",
        )

    duplicated = ds[ds.duplicated()]
    if len(duplicated) > 0:
        raise EContractViolation(
            f"Time column '{time_col}' has duplicate timestamps.",
            context={
                "duplicate_count": int(len(duplicated)),
                "examples": [str(ts) for ts in duplicated.unique()[:3]],
            },
            fix_hint="Aggregate or drop duplicates before padding, per group if grouped",
        )

    off_grid = ds[~ds.isin(sequence)]
    if len(off_grid) > 0:
        raise EContractViolation(
            f"{len(off_grid)} timestamps do not fall on the padding interval.",
            context={
                "misaligned_count": int(len(off_grid)),
                "examples": [str(ts) for ts in off_grid.iloc[:3]],
                "sequence_start": str(sequence[0]) if len(sequence) else None,
            },
            fix_hint="Choose a finer 'by', align 'start' with the data, or round timestamps first",
        )


def align_rows(
    frame: pd.DataFrame,
    time_col: str,
    sequence: pd.DatetimeIndex,
    group_cols: Sequence[str] = (),
    group_key: Sequence[Any] = (),
) -> tuple[pd.DataFrame, pd.Series]:
    """Left-join the canonical sequence with the rows on exact timestamp equality.

    Args:
        frame: Rows of one group
        time_col: Name of the timestamp column
        sequence: Canonical sequence for the group
        group_cols: Group key columns
        group_key: The group's key values, in ``group_cols`` order

    Returns:
        ``(aligned, origin)`` where aligned follows the sequence order and
        keeps the input column order, and origin is True for input rows
    """
    canonical = pd.DataFrame({time_col: sequence})
    rows = frame.assign(**{_ORIGIN_COL: True})

    aligned = canonical.merge(rows, on=time_col, how="left", sort=False)
    origin = aligned.pop(_ORIGIN_COL).notna().rename(None)

    for col, value in zip(group_cols, group_key):
        aligned[col] = pd.Series([value] * len(aligned), index=aligned.index).astype(
            frame[col].dtype
        )

    return aligned.reindex(columns=list(frame.columns)), origin


__all__ = ["check_alignment", "align_rows"]
