"""timekit - Time-aware helpers for pandas DataFrames.

Pads irregular timestamps onto a regular grid and derives calendar features.

Basic usage:
    >>> from timekit import pad_by_time
    >>> padded = pad_by_time(df, "date", by="quarter")

Grouped data (each group padded within its own date range):
    >>> padded = pad_by_time(df.groupby("symbol"), by="day", fill_direction="down")

Calendar features:
    >>> from timekit import augment_timeseries_signature
    >>> features = augment_timeseries_signature(df, "date")
"""

__version__ = "0.3.0"

from timekit.core.config import PadConfig
from timekit.core.errors import (
    EAmbiguousColumn,
    EContractViolation,
    EDateParse,
    EGranularityInfer,
    EGranularityParse,
    EInvalidOption,
    ERangeInvalid,
    ESizeLimit,
    TimekitError,
)
from timekit.discovery import describe
from timekit.features.signature import (
    augment_timeseries_signature,
    tk_get_timeseries_signature,
)
from timekit.padding import pad_by_time, padder
from timekit.series.columns import get_timeseries_variables
from timekit.time.granularity import Granularity, parse_granularity, resolve_granularity
from timekit.time.parse import parse_date2, parse_datetime2

__all__ = [
    "__version__",
    # Padding
    "pad_by_time",
    "padder",
    "PadConfig",
    # Features
    "tk_get_timeseries_signature",
    "augment_timeseries_signature",
    # Time helpers
    "get_timeseries_variables",
    "Granularity",
    "parse_granularity",
    "resolve_granularity",
    "parse_date2",
    "parse_datetime2",
    # Discovery
    "describe",
    # Errors
    "TimekitError",
    "EInvalidOption",
    "EAmbiguousColumn",
    "EGranularityParse",
    "EDateParse",
    "EGranularityInfer",
    "ERangeInvalid",
    "ESizeLimit",
    "EContractViolation",
]
