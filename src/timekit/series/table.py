"""Plain and grouped tables keyed by a time column.

A ``TimeTable`` wraps a DataFrame together with its time column, its group
key columns and per-column type tags. A plain table is a grouped table with
a single implicit group, so the padding pipeline handles both the same way.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import pandas as pd
from pandas.core.groupby import DataFrameGroupBy

from timekit.core.errors import EContractViolation
from timekit.series.columns import ColumnKind, classify_columns, select_time_column


@dataclass(frozen=True)
class TimeTable:
    """DataFrame plus time column, group keys and column type tags.

    Attributes:
        data: Underlying rows
        time_col: Name of the timestamp column
        group_cols: Group key columns (empty for a plain table)
        kinds: Column type tags computed at ingestion
        grouped_input: Whether the caller passed a DataFrameGroupBy
        sort: Whether groups iterate in sorted key order
    """

    data: pd.DataFrame
    time_col: str
    group_cols: tuple[str, ...] = ()
    kinds: dict[str, ColumnKind] = field(default_factory=dict)
    grouped_input: bool = False
    sort: bool = True

    @property
    def is_grouped(self) -> bool:
        return bool(self.group_cols)

    @property
    def numeric_cols(self) -> list[str]:
        return [col for col, kind in self.kinds.items() if kind == ColumnKind.NUMERIC]

    def groups(self) -> Iterator[tuple[tuple[Any, ...], pd.DataFrame]]:
        """Yield ``(key, rows)`` per group in stable group order."""
        if not self.group_cols:
            yield (), self.data
            return
        grouped = self.data.groupby(list(self.group_cols), sort=self.sort, dropna=False)
        for key, frame in grouped:
            yield (key if isinstance(key, tuple) else (key,)), frame

    def regroup(self, frame: pd.DataFrame) -> pd.DataFrame | DataFrameGroupBy:
        """Give a result the same grouping the input had."""
        if not self.grouped_input:
            return frame
        keys: str | list[str] = (
            self.group_cols[0] if len(self.group_cols) == 1 else list(self.group_cols)
        )
        return frame.groupby(keys, sort=self.sort, dropna=False)


def _as_column_list(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def as_time_table(
    data: pd.DataFrame | DataFrameGroupBy,
    time_column: str | None = None,
    group_by: str | list[str] | tuple[str, ...] | None = None,
) -> TimeTable:
    """Build a ``TimeTable`` from a DataFrame or a DataFrameGroupBy.

    Args:
        data: Rows to wrap; a DataFrameGroupBy must be grouped by column labels
        time_column: Explicit time column, or None to auto-detect
        group_by: Group key columns for a plain DataFrame

    Raises:
        EContractViolation: Unsupported input type or unknown group columns
        EAmbiguousColumn: Time column cannot be auto-detected
    """
    grouped_input = isinstance(data, DataFrameGroupBy)
    sort = True

    if grouped_input:
        if group_by is not None:
            raise EContractViolation(
                "group_by cannot be combined with an already grouped DataFrame.",
                fix_hint="Pass either df.groupby(keys) or df with group_by=keys",
            )
        keys = data.keys
        if not isinstance(keys, (str, list, tuple)) or not all(
            isinstance(k, str) for k in _as_column_list(keys)
        ):
            raise EContractViolation(
                "Grouped input must be grouped by column names.",
                context={"keys": repr(keys)},
                fix_hint="Use df.groupby('symbol') or df.groupby(['a', 'b'])",
            )
        group_cols = _as_column_list(keys)
        sort = bool(getattr(data, "sort", True))
        frame = data.obj
    elif isinstance(data, pd.DataFrame):
        group_cols = _as_column_list(group_by)
        frame = data
    else:
        raise EContractViolation(
            f"Sorry, no method for class {type(data).__name__}.",
            context={"type": type(data).__name__},
            fix_hint="Pass a pandas DataFrame or DataFrameGroupBy",
        )

    missing = [col for col in group_cols if col not in frame.columns]
    if missing:
        raise EContractViolation(
            f"Group columns not found: {missing}",
            context={"missing": missing, "columns": list(map(str, frame.columns))},
        )

    time_col = select_time_column(frame, time_column, exclude=group_cols)
    if time_col in group_cols:
        raise EContractViolation(
            f"Time column '{time_col}' cannot also be a group column.",
            context={"time_column": time_col, "group_by": group_cols},
        )

    return TimeTable(
        data=frame,
        time_col=time_col,
        group_cols=tuple(group_cols),
        kinds=classify_columns(frame),
        grouped_input=grouped_input,
        sort=sort,
    )


__all__ = ["TimeTable", "as_time_table"]
