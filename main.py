# main.py
"""
Entry Point: XIRR goal seek

Purpose
-------
Compute the annualized internal rate of return of dated cash flows:
  1) Load flows from --config JSON, from --amounts/--dates, or use a sample.
  2) Validate the schedule (bad arrays exit with status 2).
  3) Run the Newton goal seek and print the rate, or NaN when no rate
     exists (exit status 1).

Usage
-----
    python main.py
    python main.py --config data/sample/flows.json --guess 0.05 --json
    python main.py --amounts=-1000,1100 --dates 2024-01-01,2025-01-01

Set XIRR_DEBUG=1 to trace each iteration to logs/xirr_debug.log.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from src.core.finance.errors import InputValidationError
from src.core.finance.xirr import XirrSolver
from src.inputs.inputs import InputsLoader, to_schedule
from src.schemas.models import DatedCashFlow, XirrInputs

EXIT_OK = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2


def build_sample_inputs() -> XirrInputs:
    """Demo schedule: 10,000 invested, repaid over four quarters."""
    return XirrInputs(
        flows=[
            DatedCashFlow(amount=-10_000.0, date="2024-01-01"),
            DatedCashFlow(amount=2_000.0, date="2024-03-31"),
            DatedCashFlow(amount=3_000.0, date="2024-06-29"),
            DatedCashFlow(amount=4_000.0, date="2024-09-27"),
            DatedCashFlow(amount=5_000.0, date="2024-12-26"),
        ]
    )


def _split(val: str) -> list[str]:
    return [v.strip() for v in val.split(",") if v.strip()]


def _parse_amounts(val: str) -> list[float]:
    try:
        return [float(v) for v in _split(val)]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid amount list: {val!r}") from e


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    p = argparse.ArgumentParser(description="XIRR goal seek")
    p.add_argument("--config", type=str, default=None, help="Path to JSON inputs (flows list or XirrInputs).")
    p.add_argument("--amounts", type=_parse_amounts, default=None, help="Comma-separated signed amounts.")
    p.add_argument("--dates", type=_split, default=None, help="Comma-separated ISO dates, one per amount.")
    p.add_argument("--guess", type=float, default=None, help="Starting rate guess (overrides config).")
    p.add_argument("--precision", type=float, default=None, help="Relative precision (overrides config).")
    p.add_argument("--json", action="store_true", help="Print the result as JSON.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log solver outcomes to stderr.")
    return p.parse_args(argv)


def _load(args: argparse.Namespace, loader: InputsLoader) -> XirrInputs:
    if args.config:
        cfg = loader.load(args.config)
    elif args.amounts is not None or args.dates is not None:
        amounts = args.amounts or []
        dates = args.dates or []
        if len(amounts) != len(dates):
            raise InputValidationError(f"Both arrays must be of same size ({len(amounts)} != {len(dates)}).")
        try:
            cfg = XirrInputs(flows=[DatedCashFlow(amount=a, date=d) for a, d in zip(amounts, dates, strict=True)])
        except ValueError as e:
            raise InputValidationError(str(e)) from e
    else:
        cfg = build_sample_inputs()
    return loader.with_overrides(cfg, guess=args.guess, precision=args.precision)


def main(argv: Sequence[str] | None = None) -> int:
    """Solve one schedule and print the result."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    loader = InputsLoader()
    try:
        cfg = _load(args, loader)
        schedule = to_schedule(cfg)
    except (InputValidationError, ValueError, FileNotFoundError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    report = XirrSolver(schedule, cfg.settings).report()
    if args.json:
        print(report.model_dump_json())
    else:
        print(report.summary())

    return EXIT_OK if report.converged else EXIT_NO_SOLUTION


if __name__ == "__main__":
    raise SystemExit(main())
