"""Core error types with rich context.

Every failure raised by timekit is a ``TimekitError`` subclass carrying a
stable ``error_code``, a context dict for debugging and an actionable hint.
"""

from __future__ import annotations

from typing import Any

# ruff: noqa: N818


class TimekitError(Exception):
    """Base exception with rich context.

    Attributes:
        error_code: Unique error code string for programmatic handling
        message: Human-readable error message
        context: Additional context data for debugging
        fix_hint: Actionable hint for resolving the error
    """

    error_code: str = "E_UNKNOWN"
    fix_hint: str = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if fix_hint:
            self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f"(context: {self.context})")
        if self.fix_hint:
            parts.append(f"[hint: {self.fix_hint}]")
        return " ".join(parts)

    def to_agent_dict(self) -> dict[str, Any]:
        """Return a structured dict with error_code, message, fix_hint and context."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "fix_hint": self.fix_hint,
            "context": self.context,
        }


class EInvalidOption(TimekitError):
    """An option value is outside its allowed set."""

    error_code = "E_INVALID_OPTION"
    fix_hint = "fill_direction must be one of 'none', 'down', 'up', 'downup', 'updown'"


class EAmbiguousColumn(TimekitError):
    """Time column omitted and not uniquely inferable."""

    error_code = "E_AMBIGUOUS_COLUMN"
    fix_hint = "Pass time_column explicitly, e.g. pad_by_time(df, 'date')"


class EGranularityParse(TimekitError):
    """Granularity phrase does not match the supported grammar."""

    error_code = "E_GRANULARITY_PARSE"
    fix_hint = (
        "Use 'auto', a unit (year, quarter, month, week, day, hour, min, sec) "
        "or a count and unit such as '5 min' or '7 days'"
    )


class EDateParse(TimekitError):
    """Start or end bound could not be parsed as a date or date-time."""

    error_code = "E_DATE_PARSE"
    fix_hint = "Use ISO formats such as '2013', '2013-06', '2013-06-15' or '2013-06-15 12:00:00'"


class EGranularityInfer(TimekitError):
    """Granularity could not be inferred from the timestamps."""

    error_code = "E_GRANULARITY_INFER"
    fix_hint = "Specify by explicitly, e.g. by='day'"


class ERangeInvalid(TimekitError):
    """Resolved start lies after the resolved end."""

    error_code = "E_RANGE_INVALID"
    fix_hint = "Make sure start <= end"


class ESizeLimit(TimekitError):
    """Canonical sequence would exceed the step ceiling."""

    error_code = "E_SIZE_LIMIT"
    fix_hint = "Use a coarser granularity, narrower bounds or raise max_steps"


class EContractViolation(TimekitError):
    """Input data violates contract requirements."""

    error_code = "E_CONTRACT_VIOLATION"
    fix_hint = "Check that the time column exists, holds timestamps and has one row per timestamp"


# Aliases using the error-kind names of the padding contract
InvalidOptionError = EInvalidOption
AmbiguousColumnError = EAmbiguousColumn
ParseError = EGranularityParse
InferenceError = EGranularityInfer
RangeError = ERangeInvalid
SizeLimitError = ESizeLimit

# Error registry for lookup
ERROR_REGISTRY: dict[str, type[TimekitError]] = {
    cls.error_code: cls
    for cls in (
        EInvalidOption,
        EAmbiguousColumn,
        EGranularityParse,
        EDateParse,
        EGranularityInfer,
        ERangeInvalid,
        ESizeLimit,
        EContractViolation,
    )
}


def get_error_class(error_code: str) -> type[TimekitError]:
    """Get error class by code."""
    return ERROR_REGISTRY.get(error_code, TimekitError)


__all__ = [
    "TimekitError",
    "EInvalidOption",
    "EAmbiguousColumn",
    "EGranularityParse",
    "EDateParse",
    "EGranularityInfer",
    "ERangeInvalid",
    "ESizeLimit",
    "EContractViolation",
    "InvalidOptionError",
    "AmbiguousColumnError",
    "ParseError",
    "InferenceError",
    "RangeError",
    "SizeLimitError",
    "ERROR_REGISTRY",
    "get_error_class",
]
