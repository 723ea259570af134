"""CLI entry point for fundsim."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from .report import render_summary, write_json
from .schema import SchemaError, load_simulation, with_time_horizon
from .simulation import run_simulation
from .validate import MAX_TIME_HORIZON, MIN_TIME_HORIZON, validate_simulation


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Multi-fund portfolio projection with capital-gains tax")
    parser.add_argument("simulation", help="Path to simulation JSON file")
    parser.add_argument("--horizon", type=int, help=f"Override the time horizon ({MIN_TIME_HORIZON}-{MAX_TIME_HORIZON} years)")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("--yearly", action="store_true", help="Include the yearly breakdown in the summary")
    parser.add_argument("--json", dest="json_output", help="Write projection and tax results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        simulation = load_simulation(args.simulation)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load simulation: {exc}", file=sys.stderr)
        return 2

    if args.horizon is not None and not MIN_TIME_HORIZON <= args.horizon <= MAX_TIME_HORIZON:
        print(f"--horizon must be between {MIN_TIME_HORIZON} and {MAX_TIME_HORIZON}", file=sys.stderr)
        return 2

    if args.horizon is not None:
        simulation = with_time_horizon(simulation, args.horizon)

    validation = validate_simulation(simulation)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return 1

    if args.validate:
        print("Simulation is valid.")
        return 0

    result = run_simulation(simulation)

    if args.summary or args.yearly or not args.json_output:
        print(render_summary(result, yearly=args.yearly), end="")

    if args.json_output:
        write_json(args.json_output, result)
        print(f"Wrote results to {Path(args.json_output)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
