"""Series module for timekit.

Column tagging, plain/grouped tables, row alignment and fill policies.
"""

from .alignment import align_rows, check_alignment
from .columns import (
    ColumnKind,
    TimeColumnResolution,
    classify_column,
    classify_columns,
    get_timeseries_variables,
    resolve_time_column,
    select_time_column,
)
from .fill import (
    apply_directional_fill,
    apply_pad_value,
    is_missing_value,
    restore_dtypes,
    validate_fill_direction,
)
from .table import TimeTable, as_time_table

__all__ = [
    # Columns
    "ColumnKind",
    "classify_column",
    "classify_columns",
    "get_timeseries_variables",
    "TimeColumnResolution",
    "resolve_time_column",
    "select_time_column",
    # Tables
    "TimeTable",
    "as_time_table",
    # Alignment
    "check_alignment",
    "align_rows",
    # Fill
    "is_missing_value",
    "validate_fill_direction",
    "apply_pad_value",
    "apply_directional_fill",
    "restore_dtypes",
]
