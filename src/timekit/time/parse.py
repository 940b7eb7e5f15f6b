"""Lenient date and date-time parsing for padding bounds."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import tzinfo
from typing import TYPE_CHECKING, Any

import pandas as pd

from timekit.core.errors import EDateParse

if TYPE_CHECKING:
    from timekit.time.granularity import Granularity

_YEAR_ONLY = re.compile(r"^\d{4}$")
_YEAR_MONTH = re.compile(r"^\d{4}-\d{1,2}$")


def as_datetime_index(values: Iterable[Any]) -> pd.DatetimeIndex:
    """Coerce a column, index or sequence of timestamps to a DatetimeIndex."""
    if isinstance(values, pd.DatetimeIndex):
        return values
    return pd.DatetimeIndex(pd.to_datetime(pd.Index(values)))


def _to_timestamp(value: Any) -> pd.Timestamp:
    raw = value
    if isinstance(value, str):
        value = value.strip()
        # Truncated dates ("2013", "2013-06") start at the first day of the period
        if _YEAR_ONLY.match(value):
            value = f"{value}-01-01"
        elif _YEAR_MONTH.match(value):
            value = f"{value}-01"

    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise EDateParse(f"Cannot parse '{raw}' as a date", context={"value": repr(raw)}) from exc

    if pd.isna(ts):
        raise EDateParse(f"Cannot parse '{raw}' as a date", context={"value": repr(raw)})
    return ts


def _match_tz(ts: pd.Timestamp, tz: str | tzinfo | None) -> pd.Timestamp:
    if tz is None:
        return ts.tz_convert(None) if ts.tz is not None else ts
    return ts.tz_localize(tz) if ts.tz is None else ts.tz_convert(tz)


def parse_date2(value: Any, tz: str | tzinfo | None = None) -> pd.Timestamp:
    """Parse a date, truncating any time of day.

    ``"2013"`` becomes 2013-01-01 and ``"2013-06"`` becomes 2013-06-01.

    Raises:
        EDateParse: If the value is not a recognizable date
    """
    return _match_tz(_to_timestamp(value).normalize(), tz)


def parse_datetime2(value: Any, tz: str | tzinfo | None = None) -> pd.Timestamp:
    """Parse a date-time, keeping the time of day and localizing to ``tz``.

    Raises:
        EDateParse: If the value is not a recognizable date-time
    """
    return _match_tz(_to_timestamp(value), tz)


def parse_bound(
    value: Any,
    granularity: Granularity,
    tz: str | tzinfo | None = None,
) -> pd.Timestamp | None:
    """Parse a start/end bound with the precision implied by the granularity."""
    if value is None:
        return None
    if granularity.is_subdaily:
        return parse_datetime2(value, tz=tz)
    return parse_date2(value, tz=tz)


__all__ = ["as_datetime_index", "parse_date2", "parse_datetime2", "parse_bound"]
