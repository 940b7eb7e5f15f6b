"""Tests for timekit.describe() API discovery function."""

from __future__ import annotations

import json

from timekit.discovery import describe


def test_describe_returns_dict() -> None:
    """describe() returns a dictionary."""
    result = describe()
    assert isinstance(result, dict)


def test_describe_has_expected_top_level_keys() -> None:
    """Result has version, apis, error_codes, units, directions and defaults."""
    result = describe()
    expected_keys = {
        "version",
        "apis",
        "error_codes",
        "granularity_units",
        "fill_directions",
        "pad_config_defaults",
    }
    assert expected_keys.issubset(result.keys())


def test_describe_version_matches_package() -> None:
    """version field matches timekit.__version__."""
    import timekit

    result = describe()
    assert result["version"] == timekit.__version__


def test_describe_error_codes_contains_registry() -> None:
    """error_codes contains all entries from ERROR_REGISTRY."""
    from timekit.core.errors import ERROR_REGISTRY

    result = describe()
    error_codes = result["error_codes"]

    for code in ERROR_REGISTRY:
        assert code in error_codes, f"Missing error code: {code}"
        assert "class" in error_codes[code]
        assert "description" in error_codes[code]
        assert "fix_hint" in error_codes[code]


def test_describe_error_codes_fix_hints() -> None:
    """Class-level fix hints are populated."""
    error_codes = describe()["error_codes"]

    assert "time_column" in error_codes["E_AMBIGUOUS_COLUMN"]["fix_hint"]
    assert "5 min" in error_codes["E_GRANULARITY_PARSE"]["fix_hint"]
    assert error_codes["E_SIZE_LIMIT"]["class"] == "ESizeLimit"


def test_describe_granularity_units() -> None:
    """Units are listed coarsest first."""
    units = describe()["granularity_units"]
    assert units[0] == "year"
    assert units[-1] == "sec"
    assert "quarter" in units


def test_describe_pad_defaults() -> None:
    """Default PadConfig is exposed."""
    defaults = describe()["pad_config_defaults"]
    assert defaults["by"] == "auto"
    assert defaults["fill_direction"] == "none"
    assert defaults["max_steps"] == 10_000_000


def test_describe_apis_contain_core_functions() -> None:
    """apis name the public padding and signature functions."""
    import timekit

    apis = describe()["apis"]
    assert apis["pad"]["function"] == "pad_by_time"
    assert hasattr(timekit, apis["signature"]["function"])
    assert hasattr(timekit, apis["augment_signature"]["function"])


def test_describe_is_json_serializable() -> None:
    """describe() output can be dumped as JSON."""
    json.dumps(describe(), default=str)
