"""Canonical timestamp sequences for padding."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import pandas as pd

from timekit.core.config import DEFAULT_MAX_STEPS
from timekit.core.errors import ERangeInvalid, ESizeLimit
from timekit.time.granularity import Granularity
from timekit.time.parse import as_datetime_index

logger = logging.getLogger(__name__)


def _wall(ts: pd.Timestamp) -> pd.Timestamp:
    return ts.tz_localize(None) if ts.tz is not None else ts


def _month_index(ts: pd.Timestamp) -> int:
    return ts.year * 12 + ts.month - 1


def count_steps(start: pd.Timestamp, end: pd.Timestamp, granularity: Granularity) -> int:
    """Number of points from start to end (upper bound for calendar units).

    Computed arithmetically so the ceiling can be checked before allocating.
    Day and week steps are counted on the wall clock.
    """
    if granularity.is_calendar:
        months = _month_index(end) - _month_index(start)
        return months // granularity.months + 1
    if not granularity.is_subdaily:
        start, end = _wall(start), _wall(end)
    return int((end - start) // granularity.delta) + 1


def _step_range(
    anchor: pd.Timestamp,
    lower: pd.Timestamp,
    upper: pd.Timestamp,
    granularity: Granularity,
) -> tuple[int, int]:
    """Steps ``(first, last)`` relative to ``anchor`` that cover ``[lower, upper]``.

    Calendar bounds cover the whole month, quarter or year they fall in.
    Fixed bounds are inclusive limits on the points themselves.
    """
    if granularity.is_calendar:
        base, step = granularity.period_months, granularity.months
        origin = _month_index(anchor)
        low = _month_index(lower) - _month_index(lower) % base
        high = _month_index(upper) - _month_index(upper) % base + base - 1
        return -((origin - low) // step), (high - origin) // step

    if granularity.is_subdaily:
        below, above = lower - anchor, upper - anchor
    else:
        below, above = _wall(lower) - _wall(anchor), _wall(upper) - _wall(anchor)
    return -((-below) // granularity.delta), above // granularity.delta


def _point(anchor: pd.Timestamp, steps: int, granularity: Granularity) -> pd.Timestamp:
    if granularity.is_subdaily:
        return anchor + steps * granularity.delta
    point = anchor + granularity.offset(steps)
    if granularity.is_calendar and anchor.is_month_end:
        point = point + pd.offsets.MonthEnd(0)
    return point


def build_sequence(
    timestamps: Iterable[Any],
    granularity: Granularity,
    start: pd.Timestamp | None = None,
    end: pd.Timestamp | None = None,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> pd.DatetimeIndex:
    """Build the regular sequence a group's rows are aligned onto.

    The sequence is anchored on the earliest timestamp, so its points keep the
    data's phase: day of month (or month end) for calendar units, time of day
    for fixed units. ``start`` and ``end`` default to the min and max of
    ``timestamps``. An explicit calendar bound covers the whole period it
    falls in, so ``start="2013-01-01"`` on quarter-end data begins at
    2013-03-31. Steps are never accumulated, so calendar points do not drift.

    Args:
        timestamps: The group's timestamps
        granularity: Step between points
        start: Optional explicit lower bound
        end: Optional explicit upper bound (inclusive)
        max_steps: Ceiling on the number of points

    Returns:
        Strictly increasing DatetimeIndex

    Raises:
        ERangeInvalid: If start > end
        ESizeLimit: If the sequence would exceed max_steps
    """
    idx = as_datetime_index(timestamps).dropna()
    if (start is None or end is None) and len(idx) == 0:
        raise ERangeInvalid("Cannot derive sequence bounds from an empty time column.")

    lower = idx.min() if start is None else pd.Timestamp(start)
    upper = idx.max() if end is None else pd.Timestamp(end)

    if lower > upper:
        raise ERangeInvalid(
            f"Start {lower} is after end {upper}",
            context={"start": str(lower), "end": str(upper)},
        )

    anchor = idx.min() if len(idx) > 0 else lower
    first, last = _step_range(anchor, lower, upper, granularity)
    if first > last:
        logger.debug("No %s step between %s and %s", granularity, lower, upper)
        return pd.DatetimeIndex([], tz=anchor.tz, name=None)

    head, tail = _point(anchor, first, granularity), _point(anchor, last, granularity)
    n_steps = count_steps(head, tail, granularity)
    if n_steps > max_steps:
        raise ESizeLimit(
            f"Padding from {head} to {tail} by '{granularity.label}' needs {n_steps} steps "
            f"(limit {max_steps})",
            context={"steps": n_steps, "max_steps": max_steps, "by": granularity.label},
        )
    logger.debug("Building %d steps from %s to %s by %s", n_steps, head, tail, granularity)

    if granularity.is_calendar or (anchor.tz is not None and not granularity.is_subdaily):
        # Wall-clock steps; a fixed 24h day would slip across DST changes
        sequence = pd.DatetimeIndex(
            [_point(anchor, k, granularity) for k in range(first, last + 1)]
        )
    else:
        sequence = pd.date_range(start=head, periods=n_steps, freq=granularity.delta)

    return pd.DatetimeIndex(sequence, name=None)


__all__ = ["count_steps", "build_sequence"]
