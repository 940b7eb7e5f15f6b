"""Insert time series rows with regularly spaced timestamps.

Usage:
    >>> from timekit import pad_by_time
    >>> padded = pad_by_time(df, "date", by="quarter", pad_value=0)
    >>> padded = pad_by_time(df.groupby("symbol"), by="day", fill_direction="down")

Pipeline per group: resolve granularity, build the canonical sequence,
align rows onto it, write the pad value into numeric cells of inserted rows,
then apply the optional directional fill.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from datetime import date, datetime
from typing import Any

import pandas as pd
from pandas.core.groupby import DataFrameGroupBy

from timekit.core.config import DEFAULT_MAX_STEPS
from timekit.core.errors import EInvalidOption
from timekit.series.alignment import align_rows, check_alignment
from timekit.series.columns import ColumnKind, classify_columns
from timekit.series.fill import (
    apply_directional_fill,
    apply_pad_value,
    restore_dtypes,
    validate_fill_direction,
)
from timekit.series.table import as_time_table
from timekit.time.granularity import Granularity, resolve_granularity
from timekit.time.parse import parse_bound
from timekit.time.sequence import build_sequence

logger = logging.getLogger(__name__)


def pad_by_time(
    data: pd.DataFrame | DataFrameGroupBy,
    time_column: str | None = None,
    by: str | Granularity = "auto",
    pad_value: Any = None,
    fill_direction: str = "none",
    start: Any = None,
    end: Any = None,
    *,
    group_by: str | Sequence[str] | None = None,
    max_steps: int = DEFAULT_MAX_STEPS,
    n_jobs: int = 1,
) -> pd.DataFrame | DataFrameGroupBy:
    """Insert rows so the time column becomes a regular, gap-free sequence.

    Padding runs independently per group, each within its own date range
    (or the explicit ``start``/``end``). The interval itself is shared: with
    ``by="auto"`` it is inferred once over the whole time column, so a group
    that looks coarser on its own is still padded at the common interval.
    Inserted rows get ``pad_value`` in numeric columns and missing values
    elsewhere; ``fill_direction`` then propagates values into any missing cell.

    Args:
        data: DataFrame, or DataFrameGroupBy grouped by column names
        time_column: Date or date-time column; auto-detected when None
        by: ``"auto"``, a unit (year, quarter, month, week, day, hour, min,
            sec) or a count and unit such as ``"5 min"`` or ``"7 days"``
        pad_value: Value for numeric columns of inserted rows (default: missing)
        fill_direction: ``"none"``, ``"down"``, ``"up"``, ``"downup"`` or ``"updown"``
        start: Lower bound (default: group minimum); for month, quarter and
            year it covers its whole period, e.g. ``"2013"`` starts at 2013 Q1
        end: Upper bound (default: group maximum), inclusive like ``start``
        group_by: Group key columns when ``data`` is a plain DataFrame
        max_steps: Ceiling on the padded length of any one group
        n_jobs: Threads used to pad groups; output order does not depend on it

    Returns:
        Padded DataFrame in group order, or a DataFrameGroupBy with the
        input's keys when ``data`` was grouped

    Raises:
        EInvalidOption: Unknown fill_direction, non-numeric pad_value, bad limits
        EAmbiguousColumn: time_column omitted and not uniquely inferable
        EContractViolation: Invalid columns, duplicate or misaligned timestamps
        EGranularityParse: Unrecognized ``by`` phrase
        EGranularityInfer: ``by="auto"`` with fewer than 2 distinct timestamps
        EDateParse: Unparseable start/end
        ERangeInvalid: start after end
        ESizeLimit: Padded sequence above max_steps
    """
    direction = validate_fill_direction(fill_direction)
    if max_steps < 1 or n_jobs < 1:
        raise EInvalidOption(
            "max_steps and n_jobs must be positive",
            context={"max_steps": max_steps, "n_jobs": n_jobs},
        )

    table = as_time_table(data, time_column, group_by)
    time_col = table.time_col
    source = table.data

    if source.empty:
        return table.regroup(source.copy())

    holds_dates = _holds_plain_dates(source[time_col])
    working = source.copy()
    if not pd.api.types.is_datetime64_any_dtype(working[time_col]):
        working[time_col] = pd.to_datetime(working[time_col])
    table = replace(table, data=working)

    granularity = resolve_granularity(by, working[time_col])
    tz = working[time_col].dt.tz
    start_ts = parse_bound(start, granularity, tz)
    end_ts = parse_bound(end, granularity, tz)

    groups = list(table.groups())

    def pad_one(key: tuple[Any, ...], rows: pd.DataFrame) -> pd.DataFrame:
        return padder(
            rows,
            time_col,
            granularity,
            pad_value=pad_value,
            fill_direction=direction,
            start=start_ts,
            end=end_ts,
            group_cols=table.group_cols,
            group_key=key,
            kinds=table.kinds,
            max_steps=max_steps,
        )

    if n_jobs == 1 or len(groups) <= 1:
        results = [pad_one(key, rows) for key, rows in groups]
    else:
        slots: list[pd.DataFrame | None] = [None] * len(groups)
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            futures = {
                executor.submit(pad_one, key, rows): idx for idx, (key, rows) in enumerate(groups)
            }
            for future in as_completed(futures):
                slots[futures[future]] = future.result()
        results = [frame for frame in slots if frame is not None]

    result = pd.concat(results, ignore_index=True)
    dtypes = {col: dtype for col, dtype in source.dtypes.items() if col != time_col}
    result = restore_dtypes(result, dtypes)

    if holds_dates and not granularity.is_subdaily:
        result[time_col] = result[time_col].dt.date

    return table.regroup(result)


def padder(
    frame: pd.DataFrame,
    time_col: str,
    granularity: Granularity,
    pad_value: Any = None,
    fill_direction: str = "none",
    start: pd.Timestamp | None = None,
    end: pd.Timestamp | None = None,
    *,
    group_cols: Sequence[str] = (),
    group_key: Sequence[Any] = (),
    kinds: Mapping[str, ColumnKind] | None = None,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> pd.DataFrame:
    """Pad the rows of a single group.

    ``frame[time_col]`` must already be ``datetime64``. With explicit bounds,
    rows outside the resulting sequence are dropped; rows off the canonical
    sequence are rejected.
    """
    if kinds is None:
        kinds = classify_columns(frame)

    sequence = build_sequence(frame[time_col], granularity, start, end, max_steps=max_steps)

    rows = frame
    if start is not None or end is not None:
        ds = rows[time_col]
        if len(sequence) > 0:
            inside = ds.between(sequence[0], sequence[-1])
        else:
            inside = pd.Series(False, index=rows.index)
        if not inside.all():
            logger.warning(
                "Dropping %d rows outside [%s, %s] (group %s)",
                int((~inside).sum()),
                start,
                end,
                tuple(group_key),
            )
            rows = rows[inside]

    sequence = sequence.as_unit(rows[time_col].dt.unit)

    check_alignment(rows, time_col, sequence)
    aligned, origin = align_rows(rows, time_col, sequence, group_cols, group_key)

    aligned = apply_pad_value(aligned, origin, pad_value, kinds, exclude=group_cols)
    aligned = apply_directional_fill(aligned, fill_direction, exclude=(*group_cols, time_col))

    logger.debug(
        "Padded group %s from %d to %d rows", tuple(group_key), len(rows), len(aligned)
    )
    return aligned


def _holds_plain_dates(series: pd.Series) -> bool:
    """True for object columns of ``datetime.date`` values without a time part."""
    if not pd.api.types.is_object_dtype(series.dtype):
        return False
    non_null = series.dropna()
    return len(non_null) > 0 and all(
        isinstance(v, date) and not isinstance(v, datetime) for v in non_null
    )


__all__ = ["pad_by_time", "padder"]
