"""Granularity parsing and inference.

A granularity is a unit and a count (``quarter``, ``5 min``, ``7 days``).
``resolve_granularity`` turns the ``by`` argument of ``pad_by_time`` into a
concrete ``Granularity``, inferring it from the data when ``by="auto"``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from timekit.core.errors import EGranularityInfer, EGranularityParse
from timekit.time.parse import as_datetime_index

logger = logging.getLogger(__name__)

UNITS: tuple[str, ...] = ("year", "quarter", "month", "week", "day", "hour", "min", "sec")

_UNIT_ALIASES: dict[str, str] = {
    "year": "year",
    "quarter": "quarter",
    "month": "month",
    "week": "week",
    "day": "day",
    "hour": "hour",
    "min": "min",
    "minute": "min",
    "sec": "sec",
    "second": "sec",
}

_MONTHS_PER_UNIT = {"year": 12, "quarter": 3, "month": 1}

_TIMEDELTA_KWARG = {
    "week": "weeks",
    "day": "days",
    "hour": "hours",
    "min": "minutes",
    "sec": "seconds",
}

# Fixed-size units, largest first
_FIXED_UNITS: tuple[tuple[str, pd.Timedelta], ...] = (
    ("week", pd.Timedelta(weeks=1)),
    ("day", pd.Timedelta(days=1)),
    ("hour", pd.Timedelta(hours=1)),
    ("min", pd.Timedelta(minutes=1)),
    ("sec", pd.Timedelta(seconds=1)),
)

_PHRASE = re.compile(r"^\s*(?:(\d+)\s*)?([a-z]+)\s*$")


@dataclass(frozen=True)
class Granularity:
    """Step size between consecutive timestamps of a regular sequence."""

    unit: str
    count: int = 1

    def __post_init__(self) -> None:
        if self.unit not in UNITS:
            raise EGranularityParse(
                f"Unknown granularity unit '{self.unit}'",
                context={"unit": self.unit, "allowed": list(UNITS)},
            )
        if self.count < 1:
            raise EGranularityParse(
                f"Granularity count must be positive, got {self.count}",
                context={"count": self.count},
            )

    @property
    def is_calendar(self) -> bool:
        """True for month, quarter and year steps."""
        return self.unit in _MONTHS_PER_UNIT

    @property
    def is_subdaily(self) -> bool:
        return self.unit in ("hour", "min", "sec")

    @property
    def months(self) -> int:
        """Calendar step in months (calendar units only)."""
        if not self.is_calendar:
            raise ValueError(f"'{self.label}' is not a calendar granularity")
        return _MONTHS_PER_UNIT[self.unit] * self.count

    @property
    def period_months(self) -> int:
        """Length in months of the calendar period one unit covers (1, 3 or 12)."""
        if not self.is_calendar:
            raise ValueError(f"'{self.label}' is not a calendar granularity")
        return _MONTHS_PER_UNIT[self.unit]

    @property
    def delta(self) -> pd.Timedelta:
        """Fixed step (week and finer)."""
        if self.is_calendar:
            raise ValueError(f"'{self.label}' has no fixed duration")
        return pd.Timedelta(**{_TIMEDELTA_KWARG[self.unit]: self.count})

    def offset(self, steps: int) -> pd.DateOffset:
        """Wall-clock offset covering ``steps`` steps."""
        if self.is_calendar:
            return pd.DateOffset(months=steps * self.months)
        return pd.DateOffset(**{_TIMEDELTA_KWARG[self.unit]: steps * self.count})

    @property
    def label(self) -> str:
        return self.unit if self.count == 1 else f"{self.count} {self.unit}"

    def __str__(self) -> str:
        return self.label


def parse_granularity(text: str) -> Granularity:
    """Parse a phrase such as ``"day"``, ``"quarter"``, ``"5 min"`` or ``"7 days"``.

    Raises:
        EGranularityParse: If the phrase does not match the grammar
    """
    if not isinstance(text, str):
        raise EGranularityParse(
            f"Granularity must be a string, got {type(text).__name__}",
            context={"value": repr(text)},
        )

    match = _PHRASE.match(text.lower())
    if match is None:
        raise EGranularityParse(f"Cannot parse granularity '{text}'", context={"by": text})

    count_text, token = match.groups()
    unit = _UNIT_ALIASES.get(token)
    if unit is None and token.endswith("s"):
        unit = _UNIT_ALIASES.get(token[:-1])
    if unit is None:
        raise EGranularityParse(f"Cannot parse granularity '{text}'", context={"by": text})

    count = int(count_text) if count_text is not None else 1
    return Granularity(unit=unit, count=count)


def infer_granularity(timestamps: Iterable[Any]) -> Granularity:
    """Infer the dominant spacing of a timestamp column.

    Month-aligned data (midnight timestamps sharing a day of month, or all on
    month ends) is measured in calendar months and reported as year, quarter
    or month. Everything else uses the mode of the consecutive differences,
    expressed in the largest fixed unit that divides it.

    Raises:
        EGranularityInfer: Fewer than 2 distinct timestamps, or sub-second spacing
    """
    idx = as_datetime_index(timestamps).dropna().unique().sort_values()
    if len(idx) < 2:
        raise EGranularityInfer(
            "At least 2 distinct timestamps are needed to infer the granularity.",
            context={"distinct_timestamps": int(len(idx))},
        )

    if (idx == idx.normalize()).all() and (idx.day.nunique() == 1 or idx.is_month_end.all()):
        months = np.asarray(idx.year * 12 + idx.month, dtype=np.int64)
        gap = int(pd.Series(np.diff(months)).mode().iloc[0])
        if gap % 12 == 0:
            return Granularity("year", gap // 12)
        if gap % 3 == 0:
            return Granularity("quarter", gap // 3)
        return Granularity("month", gap)

    step = pd.Timedelta(idx.to_series().diff().dropna().mode().iloc[0])
    for unit, size in _FIXED_UNITS:
        if step % size == pd.Timedelta(0):
            return Granularity(unit, int(step // size))

    raise EGranularityInfer(
        "Timestamp spacing is finer than one second.",
        context={"mode_delta": str(step)},
    )


def resolve_granularity(
    requested: str | Granularity,
    timestamps: Iterable[Any] | None = None,
) -> Granularity:
    """Resolve ``"auto"`` or a phrase into a concrete ``Granularity``."""
    if isinstance(requested, Granularity):
        return requested

    if isinstance(requested, str) and requested.strip().lower() == "auto":
        if timestamps is None:
            raise EGranularityInfer("by='auto' requires timestamps to infer from.")
        granularity = infer_granularity(timestamps)
        logger.info("pad applied on the interval: %s", granularity.label)
        return granularity

    return parse_granularity(requested)


__all__ = [
    "UNITS",
    "Granularity",
    "parse_granularity",
    "infer_granularity",
    "resolve_granularity",
]
