"""Time series signature: calendar features derived from a timestamp index."""

from __future__ import annotations

import calendar
from collections.abc import Callable, Iterable
from typing import Any

import numpy as np
import pandas as pd

from timekit.core.errors import EContractViolation
from timekit.series.columns import ColumnKind, classify_column, select_time_column

MONTH_LABELS = list(calendar.month_name)[1:]
WDAY_LABELS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _wday(d: pd.Series) -> pd.Series:
    # pandas counts Monday = 0; shift so Sunday = 1
    return (d.dt.dayofweek + 1) % 7 + 1


def _yweek(d: pd.Series) -> pd.Series:
    return (d.dt.dayofyear - 1) // 7 + 1


def _qday(d: pd.Series) -> pd.Series:
    local = d.dt.tz_localize(None) if d.dt.tz is not None else d
    quarter_start = pd.to_datetime(
        pd.DataFrame(
            {"year": local.dt.year, "month": (local.dt.quarter - 1) * 3 + 1, "day": 1}
        )
    )
    return (local.dt.normalize() - quarter_start).dt.days + 1


def _mweek(d: pd.Series) -> pd.Series:
    first_wday_xts = (d - pd.to_timedelta(d.dt.day - 1, unit="D")).dt.dayofweek.add(1) % 7
    return (d.dt.day + first_wday_xts - 1) // 7 + 1


SIGNATURE_FEATURES: dict[str, Callable[[pd.Series], Any]] = {
    "index_num": lambda d: (d - pd.Timestamp(0, tz=d.dt.tz)) // pd.Timedelta(seconds=1),
    "diff": lambda d: d.diff().dt.total_seconds(),
    "year": lambda d: d.dt.year,
    "year_iso": lambda d: d.dt.isocalendar().year.astype(np.int64),
    "half": lambda d: np.where(d.dt.month <= 6, 1, 2),
    "quarter": lambda d: d.dt.quarter,
    "month": lambda d: d.dt.month,
    "month_xts": lambda d: d.dt.month - 1,
    "month_lbl": lambda d: pd.Categorical(
        d.dt.month.map(lambda m: MONTH_LABELS[m - 1]), categories=MONTH_LABELS, ordered=True
    ),
    "day": lambda d: d.dt.day,
    "hour": lambda d: d.dt.hour,
    "minute": lambda d: d.dt.minute,
    "second": lambda d: d.dt.second,
    "hour12": lambda d: d.dt.hour % 12,
    "am_pm": lambda d: np.where(d.dt.hour < 12, 1, 2),
    "wday": _wday,
    "wday_xts": lambda d: _wday(d) - 1,
    "wday_lbl": lambda d: pd.Categorical(
        _wday(d).map(lambda w: WDAY_LABELS[w - 1]), categories=WDAY_LABELS, ordered=True
    ),
    "mday": lambda d: d.dt.day,
    "qday": _qday,
    "yday": lambda d: d.dt.dayofyear,
    "mweek": _mweek,
    "week": _yweek,
    "week_iso": lambda d: d.dt.isocalendar().week.astype(np.int64),
    "week2": lambda d: _yweek(d) % 2,
    "week3": lambda d: _yweek(d) % 3,
    "week4": lambda d: _yweek(d) % 4,
    "mday7": lambda d: (d.dt.day - 1) // 7 + 1,
}


def tk_get_timeseries_signature(index: Iterable[Any]) -> pd.DataFrame:
    """Decompose timestamps into calendar features.

    Args:
        index: Dates or date-times (Series, DatetimeIndex or list)

    Returns:
        DataFrame with an ``index`` column followed by one column per
        feature in ``SIGNATURE_FEATURES``

    Raises:
        EContractViolation: If the values are not dates or date-times
    """
    ds = pd.Series(index).reset_index(drop=True)
    if classify_column(ds) != ColumnKind.TIMESTAMP:
        raise EContractViolation(
            "Signature requires a date or date-time index.",
            context={"dtype": str(ds.dtype)},
        )
    if not pd.api.types.is_datetime64_any_dtype(ds):
        ds = pd.to_datetime(ds)

    features = pd.DataFrame({"index": ds})
    for name, func in SIGNATURE_FEATURES.items():
        features[name] = func(ds)
    return features


def augment_timeseries_signature(
    df: pd.DataFrame,
    time_column: str | None = None,
) -> pd.DataFrame:
    """Append the time series signature of the time column to ``df``.

    The time column is auto-detected when omitted, following the same rules
    as ``pad_by_time``.
    """
    time_col = select_time_column(df, time_column)
    signature = tk_get_timeseries_signature(df[time_col]).drop(columns="index")
    signature.index = df.index
    return pd.concat([df, signature], axis=1)


__all__ = [
    "SIGNATURE_FEATURES",
    "tk_get_timeseries_signature",
    "augment_timeseries_signature",
]
