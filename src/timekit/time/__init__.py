"""Time utilities: granularity handling, bound parsing and sequence generation."""

from .granularity import (
    UNITS,
    Granularity,
    infer_granularity,
    parse_granularity,
    resolve_granularity,
)
from .parse import as_datetime_index, parse_bound, parse_date2, parse_datetime2
from .sequence import build_sequence, count_steps

__all__ = [
    "UNITS",
    "Granularity",
    "parse_granularity",
    "infer_granularity",
    "resolve_granularity",
    "as_datetime_index",
    "parse_date2",
    "parse_datetime2",
    "parse_bound",
    "count_steps",
    "build_sequence",
]
