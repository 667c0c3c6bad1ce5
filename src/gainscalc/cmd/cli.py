"""
Compute short/long-term capital gains from a brokerage transaction CSV and
produce a Schedule D style summary (FIFO lots, fees prorated into basis and
proceeds, estimated tax from the ordinary-income bracket).

This module acts as the CLI orchestrator:
- Upload checks + parsing: gainscalc.model
- FIFO matching, aggregation: gainscalc.reporting
- Output writing: gainscalc.reporting.report_sink

Usage
-----
    gainscalc --tax-bracket 0.24 --output ./schedule_d.xlsx ./transactions.csv

    # Write the sample file showing the expected columns
    gainscalc --sample ./sample_transactions.csv

CSV schema (header aliases in parentheses):
    symbol (ticker), type, action (side), date (trade_date),
    quantity (shares, amount), price (unit_price), fees (commission), description
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from pathlib import Path

from gainscalc.logging import configure_logging
from gainscalc.model import (
    TransactionParseError,
    UploadError,
    load_transactions_file,
    write_sample_csv,
)
from gainscalc.reporting import (
    DEFAULT_TAX_BRACKET,
    CapitalGainsCalculator,
    ExcelReportSink,
    format_rate,
    render_summary_message,
    tax_strategy_notes,
)

# Monetary precision and rounding
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_UP


def process_file(args: argparse.Namespace) -> int:
    logger = logging.getLogger(__name__)

    logger.info("Reading %s", args.input)
    try:
        result = load_transactions_file(args.input, strict=args.strict)
    except TransactionParseError as e:
        e.report.log_with(logger)
        logger.error("Strict parsing failed: %s", e)
        return 2
    except UploadError as e:
        logger.error("%s", e)
        return 2
    result.report.log_with(logger)

    calculator = CapitalGainsCalculator(tax_bracket=args.tax_bracket)
    summary = calculator.calculate_capital_gains(result.transactions)

    if summary.unmatched_sells:
        logger.warning(
            "%d sell(s) exceeded prior buys; uncovered quantity was ignored",
            len(summary.unmatched_sells),
        )

    print(render_summary_message(summary, len(result.transactions)))
    print()
    tax = summary.tax_implications
    print(
        f"Short-term rate: {format_rate(tax.short_term_tax_rate)}  "
        f"Long-term rate: {format_rate(tax.long_term_tax_rate)}"
    )
    notes = tax_strategy_notes(summary)
    if notes:
        print()
        print("Tax Strategy Notes:")
        for note in notes:
            print(f"  - {note}")

    if args.output:
        out_path = ExcelReportSink(out_path=Path(args.output)).write(summary)
        logger.info("Wrote workbook to %s", out_path)
    return 0


def _tax_bracket(value: str) -> Decimal:
    try:
        bracket = Decimal(value.strip())
    except InvalidOperation:
        bracket = None
    if bracket is None or not bracket.is_finite() or not (0 <= bracket <= 1):
        raise argparse.ArgumentTypeError(
            f"tax bracket must be a fraction between 0 and 1, got {value!r}"
        )
    return bracket


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Capital gains (Schedule D) summary from a transaction CSV"
    )
    p.add_argument(
        "input",
        type=str,
        nargs="?",
        help="Transaction CSV path (max 5MB)",
    )
    p.add_argument(
        "--tax-bracket",
        type=_tax_bracket,
        default=DEFAULT_TAX_BRACKET,
        help="Ordinary-income tax bracket as a fraction (default: 0.24)",
    )
    p.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write a Schedule D workbook (e.g., schedule_d.xlsx)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail when any row is invalid instead of skipping it",
    )
    p.add_argument(
        "--sample",
        type=str,
        default=None,
        metavar="PATH",
        help="Write a sample transaction CSV to PATH and exit",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v (INFO), -vv (DEBUG)",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)

    # Configure logging based on verbosity
    verbosity_map = {
        0: logging.WARNING,  # Default: quiet
        1: logging.INFO,  # -v: informational
        2: logging.DEBUG,  # -vv and above: debug
    }
    level = verbosity_map.get(min(args.verbose, 2), logging.WARNING)
    configure_logging(level=level)

    if args.sample:
        path = write_sample_csv(args.sample)
        print(f"Wrote sample transactions to {path}")
        return 0
    if not args.input:
        parser.error("an input CSV is required unless --sample is given")

    return process_file(args)


if __name__ == "__main__":
    sys.exit(main())
