"""Column type tags and time-column resolution.

Every column is tagged once with a ``ColumnKind``; downstream steps read the
tag instead of probing dtypes again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal

import pandas as pd

from timekit.core.errors import EAmbiguousColumn, EContractViolation

logger = logging.getLogger(__name__)


class ColumnKind(str, Enum):
    """Semantic type of a column."""

    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    OTHER = "other"


def _all_instances(values: pd.Series, types: type | tuple[type, ...]) -> bool:
    non_null = values.dropna()
    return len(non_null) > 0 and all(isinstance(v, types) for v in non_null)


def classify_column(series: pd.Series) -> ColumnKind:
    """Tag a column as numeric, text, boolean, timestamp or other.

    Booleans are never numeric. Object columns holding only ``date`` /
    ``datetime`` values count as timestamps.
    """
    dtype = series.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return ColumnKind.BOOLEAN
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return ColumnKind.TIMESTAMP
    if pd.api.types.is_numeric_dtype(dtype):
        return ColumnKind.NUMERIC
    if isinstance(dtype, pd.CategoricalDtype):
        return ColumnKind.TEXT
    if pd.api.types.is_object_dtype(dtype):
        if _all_instances(series, date):
            return ColumnKind.TIMESTAMP
        if _all_instances(series, bool):
            return ColumnKind.BOOLEAN
        return ColumnKind.TEXT
    if pd.api.types.is_string_dtype(dtype):
        return ColumnKind.TEXT
    return ColumnKind.OTHER


def classify_columns(df: pd.DataFrame) -> dict[str, ColumnKind]:
    """Tag every column of a DataFrame."""
    return {col: classify_column(df[col]) for col in df.columns}


def get_timeseries_variables(df: pd.DataFrame) -> list[str]:
    """Return the timestamp-like columns of a DataFrame in column order."""
    return [col for col in df.columns if classify_column(df[col]) == ColumnKind.TIMESTAMP]


@dataclass(frozen=True)
class TimeColumnResolution:
    """Outcome of looking for the time column."""

    status: Literal["found", "ambiguous", "absent"]
    column: str | None = None
    candidates: list[str] = field(default_factory=list)


def resolve_time_column(
    df: pd.DataFrame,
    exclude: Iterable[str] = (),
) -> TimeColumnResolution:
    """Find the sole timestamp-like column, ignoring ``exclude`` (group keys)."""
    skip = set(exclude)
    candidates = [col for col in get_timeseries_variables(df) if col not in skip]
    if len(candidates) == 1:
        return TimeColumnResolution("found", candidates[0], candidates)
    if not candidates:
        return TimeColumnResolution("absent", None, candidates)
    return TimeColumnResolution("ambiguous", None, candidates)


def select_time_column(
    df: pd.DataFrame,
    requested: str | None = None,
    exclude: Iterable[str] = (),
) -> str:
    """Validate an explicit time column or auto-detect one.

    Raises:
        EContractViolation: Explicit column missing or not timestamp-like
        EAmbiguousColumn: No explicit column and zero or several candidates
    """
    if requested is not None:
        if requested not in df.columns:
            raise EContractViolation(
                f"Attempting to use time_column = {requested}. Column does not exist in data.",
                context={"time_column": requested, "columns": list(map(str, df.columns))},
                fix_hint="Please specify a date or date-time column.",
            )
        if classify_column(df[requested]) != ColumnKind.TIMESTAMP:
            raise EContractViolation(
                f"Column '{requested}' is not a date or date-time column.",
                context={"time_column": requested, "dtype": str(df[requested].dtype)},
                fix_hint=f"Convert it first: df['{requested}'] = pd.to_datetime(df['{requested}'])",
            )
        return requested

    resolution = resolve_time_column(df, exclude=exclude)
    if resolution.status != "found":
        raise EAmbiguousColumn(
            f"time_column is missing and {len(resolution.candidates)} date or date-time "
            "columns were found.",
            context={"status": resolution.status, "candidates": resolution.candidates},
        )

    logger.info("time_column is missing. Using: %s", resolution.column)
    return str(resolution.column)


__all__ = [
    "ColumnKind",
    "classify_column",
    "classify_columns",
    "get_timeseries_variables",
    "TimeColumnResolution",
    "resolve_time_column",
    "select_time_column",
]
