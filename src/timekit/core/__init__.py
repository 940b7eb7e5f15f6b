"""Core errors and configuration for timekit."""

from .config import DEFAULT_MAX_STEPS, FILL_DIRECTIONS, PadConfig
from .errors import (
    ERROR_REGISTRY,
    EAmbiguousColumn,
    EContractViolation,
    EDateParse,
    EGranularityInfer,
    EGranularityParse,
    EInvalidOption,
    ERangeInvalid,
    ESizeLimit,
    TimekitError,
    get_error_class,
)

__all__ = [
    "PadConfig",
    "FILL_DIRECTIONS",
    "DEFAULT_MAX_STEPS",
    "TimekitError",
    "EInvalidOption",
    "EAmbiguousColumn",
    "EGranularityParse",
    "EDateParse",
    "EGranularityInfer",
    "ERangeInvalid",
    "ESizeLimit",
    "EContractViolation",
    "ERROR_REGISTRY",
    "get_error_class",
]
