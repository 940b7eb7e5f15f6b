"""Fill policies applied after alignment."""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd

from timekit.core.config import FILL_DIRECTIONS
from timekit.core.errors import EInvalidOption
from timekit.series.columns import ColumnKind

_PASSES: dict[str, tuple[str, ...]] = {
    "none": (),
    "down": ("ffill",),
    "up": ("bfill",),
    "downup": ("ffill", "bfill"),
    "updown": ("bfill", "ffill"),
}


def is_missing_value(value: Any) -> bool:
    """True for None, NaN, NaT and pd.NA."""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def validate_fill_direction(direction: Any) -> str:
    """Lower-case and check a fill direction.

    Raises:
        EInvalidOption: If the direction is not one of FILL_DIRECTIONS
    """
    normalized = direction.strip().lower() if isinstance(direction, str) else direction
    if normalized not in FILL_DIRECTIONS:
        raise EInvalidOption(
            f"'fill_direction' must be one of {list(FILL_DIRECTIONS)}, got {direction!r}",
            context={"fill_direction": repr(direction)},
        )
    return str(normalized)


def apply_pad_value(
    frame: pd.DataFrame,
    origin: pd.Series,
    pad_value: Any,
    kinds: Mapping[str, ColumnKind],
    exclude: Iterable[str] = (),
) -> pd.DataFrame:
    """Write ``pad_value`` into the numeric columns of inserted rows.

    Non-numeric columns of inserted rows stay missing; input rows are never
    touched.

    Raises:
        EInvalidOption: If pad_value is not a number and there are numeric columns
    """
    if is_missing_value(pad_value):
        return frame

    skip = set(exclude)
    targets = [
        col for col in frame.columns if kinds.get(col) == ColumnKind.NUMERIC and col not in skip
    ]
    if not targets:
        return frame

    if isinstance(pad_value, bool) or not isinstance(pad_value, numbers.Number):
        raise EInvalidOption(
            f"pad_value must be numeric, got {type(pad_value).__name__}",
            context={"pad_value": repr(pad_value), "numeric_columns": targets},
            fix_hint="Use a number such as 0, or leave pad_value unset to keep missing values",
        )

    synthetic = ~origin.to_numpy(dtype=bool)
    if synthetic.any():
        frame.loc[synthetic, targets] = pad_value
    return frame


def apply_directional_fill(
    frame: pd.DataFrame,
    direction: str,
    exclude: Iterable[str] = (),
) -> pd.DataFrame:
    """Propagate values into missing cells, column by column.

    ``down`` carries the last value forward, ``up`` the next value backward,
    ``downup``/``updown`` run both passes in that order. Cells without an
    anchor in the fill direction stay missing.
    """
    direction = validate_fill_direction(direction)
    passes = _PASSES[direction]
    if not passes:
        return frame

    skip = set(exclude)
    cols = [col for col in frame.columns if col not in skip]
    for method in passes:
        frame[cols] = getattr(frame[cols], method)()
    return frame


def restore_dtypes(frame: pd.DataFrame, dtypes: Mapping[str, Any]) -> pd.DataFrame:
    """Cast integer/boolean columns back once they hold no missing values.

    Inserting missing rows upcasts ``int64`` to ``float64`` and ``bool`` to
    ``object``; after padding or filling those columns may be complete again.
    """
    for col, dtype in dtypes.items():
        if col not in frame.columns or frame[col].dtype == dtype:
            continue
        values = frame[col]
        if values.isna().any():
            continue
        if pd.api.types.is_bool_dtype(dtype):
            if all(isinstance(v, (bool, np.bool_)) for v in values):
                frame[col] = values.astype(dtype)
        elif pd.api.types.is_integer_dtype(dtype):
            if pd.api.types.is_numeric_dtype(values.dtype) and (values % 1 == 0).all():
                frame[col] = values.astype(dtype)
    return frame


__all__ = [
    "is_missing_value",
    "validate_fill_direction",
    "apply_pad_value",
    "apply_directional_fill",
    "restore_dtypes",
]
