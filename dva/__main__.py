"""CLI / headless entry point for the downsize-vs-rent analyzer.

Usage
-----
Run with the built-in defaults and print the year-by-year table as CSV:
    python -m dva

Run with a JSON scenario file:
    python -m dva --config scenario.json --output results.csv

Dump an example scenario file:
    python -m dva --example

Override individual inputs on the command line:
    python -m dva --config scenario.json --set years=20 --set mortgage_rate_pct=5.75

Pull out-of-range values into modeled ranges instead of failing:
    python -m dva --clamp --set years=0 --set mortgage_rate_pct=40

The JSON config holds an ``inputs`` object whose keys are ``Inputs`` field
names (snake_case or camelCase). See --example for all supported keys.
"""

from __future__ import annotations

import argparse
import json
import sys
import warnings
from pathlib import Path

from dva.core.engine import simulate
from dva.core.equity_monitor import detect_negative_equity, format_underwater_warning
from dva.core.inputs import Inputs, normalize_key
from dva.core.scenario_snapshots import projection_hash
from dva.core.validation import clamp_inputs, get_validation_warnings, validate_inputs
from dva.ui.defaults import PRESETS, apply_preset, default_state
from dva.ui.formatting import to_currency
from dva.ui.tables import yearly_frame
from dva.ui.verdict import verdict_text


def _build_example() -> dict:
    """Return a complete example scenario dict."""
    return {
        "_comment": (
            "Downsize-vs-rent scenario file. 'inputs' keys map to Inputs fields; "
            "percentages are whole numbers (6.5 means 6.5%)."
        ),
        "inputs": default_state(),
    }


def _coerce(raw: str) -> bool | int | float | str:
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    try:
        return int(raw)
    except ValueError:
        try:
            return float(raw)
        except ValueError:
            return raw


def _apply_overrides(d: dict, overrides: list[str] | None) -> dict:
    """Apply --set key=value overrides, with basic type coercion."""
    for kv in overrides or []:
        if "=" not in kv:
            print(f"Warning: ignoring malformed --set argument (expected key=value): {kv!r}", file=sys.stderr)
            continue
        key, _, raw = kv.partition("=")
        d[normalize_key(key.strip())] = _coerce(raw.strip())
    return d


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m dva",
        description="Downsize vs. Rent analyzer, headless/CLI mode.",
    )
    parser.add_argument(
        "--config", "-c",
        metavar="FILE",
        help="Path to a JSON scenario file. Use --example to generate a template.",
    )
    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        default="-",
        help="Output file path. Use '-' (default) to print to stdout.",
    )
    parser.add_argument(
        "--set", "-s",
        dest="overrides",
        metavar="key=value",
        action="append",
        help="Override an input. Repeat for multiple overrides.",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Apply a market-assumption preset before the config file and overrides.",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Print an example JSON scenario file and exit.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output summary as JSON instead of a CSV time-series.",
    )
    parser.add_argument(
        "--clamp",
        action="store_true",
        help="Pull out-of-range rates, amounts and terms into modeled ranges (with a warning) instead of failing.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat validation warnings as errors.",
    )

    args = parser.parse_args(argv)

    if args.example:
        print(json.dumps(_build_example(), indent=2))
        return 0

    state = default_state()
    if args.preset:
        apply_preset(state, args.preset)
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            return 1
        try:
            with config_path.open() as fh:
                user_scenario = json.load(fh)
        except json.JSONDecodeError as exc:
            print(f"Config error: {config_path} is not valid JSON ({exc})", file=sys.stderr)
            return 1
        if not isinstance(user_scenario, dict):
            print(f"Config error: {config_path} must hold a JSON object", file=sys.stderr)
            return 1
        file_inputs = user_scenario.get("inputs", {})
        if not isinstance(file_inputs, dict):
            print(f"Config error: 'inputs' in {config_path} must be a JSON object", file=sys.stderr)
            return 1
        state.update({normalize_key(str(k)): v for k, v in file_inputs.items()})
    _apply_overrides(state, args.overrides)

    try:
        inputs = Inputs.from_mapping(state)
        if args.clamp:
            with warnings.catch_warnings(record=True) as adjusted:
                warnings.simplefilter("always")
                inputs = clamp_inputs(inputs)
            for w in adjusted:
                print(f"Warning: {w.message}", file=sys.stderr)
        inputs = validate_inputs(inputs)
    except ValueError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 1

    warnings_list = get_validation_warnings(inputs)
    for msg in warnings_list:
        print(f"Warning: {msg}", file=sys.stderr)
    if args.strict and warnings_list:
        print("Error: validation warnings present and --strict is set.", file=sys.stderr)
        return 1

    print(
        f"Running projection: home={to_currency(inputs.current_home_value)}, "
        f"smaller home={to_currency(inputs.smaller_home_price)}, "
        f"rent={to_currency(inputs.monthly_rent)}/mo, years={inputs.years}, "
        f"discount={inputs.discount_rate_pct}%",
        file=sys.stderr,
    )

    projection = simulate(inputs)
    df = yearly_frame(projection)

    underwater = format_underwater_warning(detect_negative_equity(df))
    if underwater:
        print(f"Warning: {underwater}", file=sys.stderr)

    print(
        f"Complete. Net proceeds: {to_currency(projection.net_proceeds)}  |  "
        f"Monthly payment (B): ${projection.monthly_payment:,.2f}  |  "
        f"{verdict_text(projection)}",
        file=sys.stderr,
    )

    if args.json:
        summary = {
            "horizon_years": inputs.years,
            "net_proceeds": round(projection.net_proceeds, 2),
            "selling_costs": round(projection.selling_costs, 2),
            "capital_gains_tax": round(projection.capital_gains_tax, 2),
            "equity_before_tax": round(projection.equity_before_tax, 2),
            "down_payment": round(projection.down_payment, 2),
            "closing_costs": round(projection.closing_costs, 2),
            "mortgage_principal": round(projection.mortgage_principal, 2),
            "monthly_payment": round(projection.monthly_payment, 2),
            "results": [
                {"key": res.key, "npv": round(res.npv, 2), "terminal": round(res.terminal, 2)}
                for res in projection.results
            ],
            "recommended": projection.best.key,
            "projection_hash": projection_hash(projection),
        }
        output = json.dumps(summary, indent=2)
        if args.output == "-":
            print(output)
        else:
            Path(args.output).write_text(output + "\n")
        return 0

    # Default: CSV output
    csv_str = df.to_csv(index=False)
    if args.output == "-":
        print(csv_str, end="")
    else:
        out_path = Path(args.output)
        out_path.write_text(csv_str)
        print(f"Results written to {out_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
