"""Feature engineering for timekit."""

from .signature import (
    SIGNATURE_FEATURES,
    augment_timeseries_signature,
    tk_get_timeseries_signature,
)

__all__ = [
    "SIGNATURE_FEATURES",
    "tk_get_timeseries_signature",
    "augment_timeseries_signature",
]
