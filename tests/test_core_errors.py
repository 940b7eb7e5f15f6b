"""Tests for core error types.

Tests the error hierarchy and rich context functionality.
"""

from __future__ import annotations

import pytest

from timekit.core.errors import (
    ERROR_REGISTRY,
    AmbiguousColumnError,
    EAmbiguousColumn,
    EContractViolation,
    EDateParse,
    EGranularityInfer,
    EGranularityParse,
    EInvalidOption,
    ERangeInvalid,
    ESizeLimit,
    InferenceError,
    InvalidOptionError,
    ParseError,
    RangeError,
    SizeLimitError,
    TimekitError,
    get_error_class,
)


class TestTimekitError:
    """Test base error class."""

    def test_basic_error(self):
        """Basic error creation."""
        err = TimekitError("Something went wrong")
        assert err.message == "Something went wrong"
        assert err.error_code == "E_UNKNOWN"
        assert err.context == {}

    def test_error_with_context(self):
        """Error with context."""
        context = {"time_column": "date", "rows": 3}
        err = TimekitError("Test error", context=context)
        assert err.context == context
        assert "time_column" in str(err)

    def test_error_with_fix_hint(self):
        """Error with fix hint."""
        err = TimekitError("Test error", fix_hint="Try by='day'")
        assert err.fix_hint == "Try by='day'"
        assert "Try by='day'" in str(err)

    def test_error_str_format(self):
        """Error string formatting."""
        err = TimekitError("Test message", context={"key": "value"}, fix_hint="Do this")
        err_str = str(err)
        assert "[E_UNKNOWN]" in err_str
        assert "Test message" in err_str
        assert "key" in err_str
        assert "Do this" in err_str

    def test_to_agent_dict(self):
        """Structured dict for programmatic handling."""
        err = ESizeLimit("too many steps", context={"steps": 11})
        payload = err.to_agent_dict()
        assert payload["error_code"] == "E_SIZE_LIMIT"
        assert payload["message"] == "too many steps"
        assert payload["context"] == {"steps": 11}
        assert payload["fix_hint"]


class TestErrorCodes:
    """Each error kind has its own code and default hint."""

    @pytest.mark.parametrize(
        "cls, code",
        [
            (EInvalidOption, "E_INVALID_OPTION"),
            (EAmbiguousColumn, "E_AMBIGUOUS_COLUMN"),
            (EGranularityParse, "E_GRANULARITY_PARSE"),
            (EDateParse, "E_DATE_PARSE"),
            (EGranularityInfer, "E_GRANULARITY_INFER"),
            (ERangeInvalid, "E_RANGE_INVALID"),
            (ESizeLimit, "E_SIZE_LIMIT"),
            (EContractViolation, "E_CONTRACT_VIOLATION"),
        ],
    )
    def test_error_code(self, cls, code):
        err = cls("message")
        assert err.error_code == code
        assert err.fix_hint
        assert isinstance(err, TimekitError)

    def test_invalid_option_hint_lists_directions(self):
        err = EInvalidOption("bad")
        assert "downup" in err.fix_hint

    def test_custom_fix_hint(self):
        """Can override fix hint."""
        err = EContractViolation("Missing column", fix_hint="Custom hint")
        assert err.fix_hint == "Custom hint"

    def test_catch_as_base(self):
        with pytest.raises(TimekitError):
            raise ERangeInvalid("start after end")


class TestAliases:
    """Error-kind names map onto the coded classes."""

    def test_aliases(self):
        assert InvalidOptionError is EInvalidOption
        assert AmbiguousColumnError is EAmbiguousColumn
        assert ParseError is EGranularityParse
        assert InferenceError is EGranularityInfer
        assert RangeError is ERangeInvalid
        assert SizeLimitError is ESizeLimit


class TestErrorRegistry:
    """Test error registry."""

    def test_registry_contains_all_codes(self):
        assert set(ERROR_REGISTRY) == {
            "E_INVALID_OPTION",
            "E_AMBIGUOUS_COLUMN",
            "E_GRANULARITY_PARSE",
            "E_DATE_PARSE",
            "E_GRANULARITY_INFER",
            "E_RANGE_INVALID",
            "E_SIZE_LIMIT",
            "E_CONTRACT_VIOLATION",
        }

    def test_get_error_class(self):
        assert get_error_class("E_SIZE_LIMIT") is ESizeLimit

    def test_get_unknown_error_class(self):
        assert get_error_class("E_NOPE") is TimekitError
