"""API discovery and introspection for timekit.

Provides ``describe()`` which returns a machine-readable schema of the
library's public surface: version, APIs, error codes with fix hints,
supported granularity units and the default padding configuration.

Usage:
    >>> from timekit import describe
    >>> info = describe()
    >>> info["granularity_units"][0]
    'year'
"""

from __future__ import annotations

from typing import Any


def describe() -> dict[str, Any]:
    """Return a machine-readable API schema for timekit.

    Returns a dictionary with:
      - ``version``: library version string
      - ``apis``: mapping of task names to public functions
      - ``error_codes``: mapping of error codes to class/description/fix_hint
      - ``granularity_units``: units accepted by ``by``
      - ``fill_directions``: accepted ``fill_direction`` tokens
      - ``pad_config_defaults``: default ``PadConfig`` as a dict
    """
    import timekit
    from timekit.core.config import FILL_DIRECTIONS, PadConfig
    from timekit.time.granularity import UNITS

    return {
        "version": timekit.__version__,
        "apis": _get_apis(),
        "error_codes": _get_error_codes(),
        "granularity_units": list(UNITS),
        "fill_directions": list(FILL_DIRECTIONS),
        "pad_config_defaults": PadConfig().model_dump(),
    }


def _get_apis() -> dict[str, dict[str, str]]:
    """Return the public API surface."""
    return {
        "pad": {
            "function": "pad_by_time",
            "description": "Insert rows with regularly spaced timestamps, per group",
        },
        "signature": {
            "function": "tk_get_timeseries_signature",
            "description": "Calendar features for a timestamp index",
        },
        "augment_signature": {
            "function": "augment_timeseries_signature",
            "description": "Append calendar features to a DataFrame",
        },
        "time_variables": {
            "function": "get_timeseries_variables",
            "description": "List date and date-time columns",
        },
        "parse_dates": {
            "function": "parse_date2 / parse_datetime2",
            "description": "Parse truncated dates such as '2013' or '2013-06'",
        },
    }


def _get_error_codes() -> dict[str, dict[str, str]]:
    """Return all error codes with descriptions and fix hints."""
    from timekit.core.errors import ERROR_REGISTRY

    result: dict[str, dict[str, str]] = {}
    for code, cls in ERROR_REGISTRY.items():
        result[code] = {
            "class": cls.__name__,
            "description": cls.__doc__ or "",
            "fix_hint": cls.fix_hint,
        }
    return result


__all__ = ["describe"]
