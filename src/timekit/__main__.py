"""CLI entry point for timekit.

Enables ``python -m timekit <command>`` usage.

Subcommands:
    pad      : Pad a CSV time series onto a regular grid.
    signature: Append calendar features to a CSV time series.
    describe : Machine-readable API schema (JSON to stdout).
    doctor   : Environment check: core dependencies.
    version  : Print timekit version.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from timekit.core.config import FILL_DIRECTIONS, PadConfig
from timekit.core.errors import TimekitError

logger = logging.getLogger("timekit")


def _check_import(module_name: str) -> tuple[bool, str | None]:
    """Try importing a module and return (success, version_or_none)."""
    try:
        mod = importlib.import_module(module_name)
        version = getattr(mod, "__version__", getattr(mod, "VERSION", None))
        return True, str(version) if version is not None else "installed"
    except ImportError:
        return False, None


def _read_csv(
    path: str,
    time_column: str | None,
    exclude: Iterable[str] = (),
) -> pd.DataFrame:
    """Read a CSV and convert date-like text columns to datetime64.

    Only the time column is converted when it is named. Otherwise every text
    column whose values all parse as ISO dates is, except ``exclude`` (group
    keys such as "2024-01" cohort labels).
    """
    df = pd.read_csv(path)
    skip = set(exclude)
    candidates = [time_column] if time_column else [c for c in df.columns if c not in skip]
    for col in candidates:
        if col not in df.columns or pd.api.types.is_numeric_dtype(df[col]):
            continue
        if pd.api.types.is_datetime64_any_dtype(df[col]):
            continue
        try:
            df[col] = pd.to_datetime(df[col], format="ISO8601")
        except (TypeError, ValueError):
            continue
    return df


def _write_csv(df: pd.DataFrame, output: str | None) -> None:
    if output is None:
        df.to_csv(sys.stdout, index=False)
    else:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        logger.info("Saved: %s (rows=%d)", output, len(df))


def _pad_config_from_args(args: argparse.Namespace) -> PadConfig:
    """Merge a JSON config file with explicit command-line flags."""
    base: dict[str, Any] = {}
    if args.config:
        base = json.loads(Path(args.config).read_text())

    overrides = {
        "time_column": args.time_column,
        "by": args.by,
        "pad_value": args.pad_value,
        "fill_direction": args.fill_direction,
        "start": args.start,
        "end": args.end,
        "group_by": args.group_by,
        "max_steps": args.max_steps,
        "n_jobs": args.n_jobs,
    }
    base.update({k: v for k, v in overrides.items() if v is not None})
    return PadConfig.model_validate(base)


def _cmd_pad(args: argparse.Namespace) -> int:
    """Pad a CSV file."""
    from timekit.padding import pad_by_time

    config = _pad_config_from_args(args)
    df = _read_csv(args.input, config.time_column, exclude=config.group_by)
    result = pad_by_time(df, **config.to_kwargs())
    _write_csv(result, args.output)
    return 0


def _cmd_signature(args: argparse.Namespace) -> int:
    """Append the time series signature to a CSV file."""
    from timekit.features.signature import augment_timeseries_signature

    df = _read_csv(args.input, args.time_column)
    result = augment_timeseries_signature(df, args.time_column)
    _write_csv(result, args.output)
    return 0


def _cmd_doctor() -> int:
    """Run environment diagnostics."""
    import timekit

    print(f"timekit {timekit.__version__}")
    print(f"Python {sys.version}")
    print()

    core_deps = [
        ("pandas", "pandas"),
        ("numpy", "numpy"),
        ("pydantic", "pydantic"),
    ]

    print("Core dependencies:")
    all_core_ok = True
    for display_name, module_name in core_deps:
        ok, version = _check_import(module_name)
        status = f"  {version}" if ok else "  NOT INSTALLED"
        marker = "ok" if ok else "MISSING"
        print(f"  [{marker:>7s}] {display_name}{status}")
        if not ok:
            all_core_ok = False

    print()

    if all_core_ok:
        print("All systems go.")
    else:
        print("WARNING: Some core dependencies are missing. Install with:")
        print("  pip install timekit")

    return 0


def _cmd_describe() -> int:
    """Print machine-readable API schema as JSON."""
    from timekit.discovery import describe

    info = describe()
    json.dump(info, sys.stdout, indent=2, default=str)
    print()  # trailing newline
    return 0


def _cmd_version() -> int:
    """Print version string."""
    import timekit

    print(timekit.__version__)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timekit",
        description="timekit: Time-aware padding and calendar features for pandas",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    subparsers = parser.add_subparsers(dest="command")

    pad = subparsers.add_parser("pad", help="Pad a CSV time series onto a regular grid")
    pad.add_argument("--input", "-i", required=True, help="Input CSV file path")
    pad.add_argument("--output", "-o", default=None, help="Output CSV path (default: stdout)")
    pad.add_argument("--config", "-c", default=None, help="JSON file with PadConfig fields")
    pad.add_argument("--time-column", "-t", default=None, help="Date or date-time column")
    pad.add_argument("--by", "-b", default=None, help="'auto', 'day', 'quarter', '5 min', ...")
    pad.add_argument("--pad-value", type=float, default=None, help="Value for numeric columns")
    pad.add_argument(
        "--fill-direction", "-f", default=None, help=f"One of {', '.join(FILL_DIRECTIONS)}"
    )
    pad.add_argument("--start", default=None, help="First timestamp, e.g. 2013 or 2013-01-01")
    pad.add_argument("--end", default=None, help="Last timestamp, e.g. 2015-07-01")
    pad.add_argument("--group-by", "-g", nargs="+", default=None, help="Group key columns")
    pad.add_argument("--max-steps", type=int, default=None, help="Ceiling on steps per group")
    pad.add_argument("--n-jobs", type=int, default=None, help="Threads used to pad groups")

    signature = subparsers.add_parser("signature", help="Append calendar features to a CSV")
    signature.add_argument("--input", "-i", required=True, help="Input CSV file path")
    signature.add_argument("--output", "-o", default=None, help="Output CSV path (default: stdout)")
    signature.add_argument("--time-column", "-t", default=None, help="Date or date-time column")

    subparsers.add_parser("describe", help="Machine-readable API schema (JSON)")
    subparsers.add_parser("doctor", help="Environment check: core dependencies")
    subparsers.add_parser("version", help="Print version")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "pad":
            return _cmd_pad(args)
        elif args.command == "signature":
            return _cmd_signature(args)
        elif args.command == "describe":
            return _cmd_describe()
        elif args.command == "doctor":
            return _cmd_doctor()
        elif args.command == "version":
            return _cmd_version()
        else:
            parser.print_help()
            return 0
    except TimekitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
