"""
CLI entry point for the rune price checker.

Usage:
    python -m pricecheck -in trades.txt -out prices.txt
    python -m pricecheck -in trades.txt -uniques data/uniques.txt -sets data/sets.txt --output-xlsx prices.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, load_config
from .catalog_loader import load_catalog
from .matcher import analyze_trades
from .report import export_xlsx, format_console, write_report

logger = logging.getLogger("pricecheck")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pricecheck",
        description="Rune price checker - Tally item prices from trade listings",
    )

    parser.add_argument(
        "-in",
        dest="trades",
        default="input.txt",
        metavar="FILE",
        help="Input file containing trade listings (default: input.txt)",
    )

    parser.add_argument(
        "-out",
        dest="output",
        default="output.txt",
        metavar="FILE",
        help="Output file for item price distributions (default: output.txt)",
    )

    parser.add_argument(
        "-uniques",
        dest="uniques",
        default="data/uniques.txt",
        metavar="FILE",
        help="File containing unique item names and aliases (default: data/uniques.txt)",
    )

    parser.add_argument(
        "-sets",
        dest="sets",
        default="data/sets.txt",
        metavar="FILE",
        help="File containing set item names (default: data/sets.txt)",
    )

    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="Rune/marker config file (default: module's price_config.json)",
    )

    parser.add_argument(
        "--output-xlsx",
        metavar="FILE",
        help="Also export distributions to an XLSX spreadsheet",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress console output (only write the report file)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Trace every trade line as it is processed",
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH

    try:
        config = load_config(config_path)

        index = load_catalog(args.uniques, args.sets, config.settings)

        trades_path = Path(args.trades)
        with open(trades_path, "r", encoding="utf-8", errors="replace") as f:
            summary = analyze_trades(f, index, config.rune_table, config.settings)

        output_path = Path(args.output)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            written = write_report(index, config.rune_table, f)
        logger.info(f"Wrote {written} items to {output_path}")

        if args.output_xlsx:
            export_xlsx(index, config.rune_table, args.output_xlsx)

        if not args.quiet:
            print(format_console(index, config.rune_table, summary))

    except OSError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Bad config JSON or values
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
