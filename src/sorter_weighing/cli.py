"""Command-line interface for Sorter Weighing.

Parses command-line arguments, initializes logging and settings, runs
one weight allowance calculation and reports it. Implements FR-050.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sorter_weighing import __version__
from sorter_weighing.calculator import WeightAllowanceCalculator
from sorter_weighing.config import DEFAULT_CONFIG_PATH, load_settings
from sorter_weighing.errors import ConfigError, ProcessingError
from sorter_weighing.logger import setup_logging, setup_verbose_logging
from sorter_weighing.report import print_calculation_report
from sorter_weighing.shipment_file import load_shipment

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for Sorter Weighing.

    Exactly one of ``--weight`` and ``--shipment`` is required.

    Args:
        argv: Argument list to parse. None uses sys.argv[1:].

    Returns:
        Namespace with ``config``, ``weight``, ``shipment``, ``json``,
        ``verbose`` and ``log_file`` attributes.
    """
    parser = argparse.ArgumentParser(
        prog="sorter-weighing",
        description="Calculate the acceptable gross weight range for a shipment",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        metavar="PATH",
        help="Weighing settings YAML file (default: config/weighing.yaml)",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--weight",
        type=int,
        metavar="GRAMS",
        help="Known total weight in grams; skips strategy selection",
    )
    source.add_argument(
        "--shipment",
        type=Path,
        metavar="FILE",
        help="Shipment description file (YAML or JSON)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON on stdout",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Echo every pipeline stage at DEBUG level",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also write a DEBUG-level log to this file",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for Sorter Weighing.

    Exits with 0 on success, 1 on a calculation or input error, and 2 on
    a configuration error.

    Args:
        argv: Argument list. None uses sys.argv[1:].

    Returns:
        None. Calls sys.exit() with 0, 1, or 2.
    """
    args = parse_args(argv)

    # Keep stdout clean for the JSON document.
    stream = sys.stderr if args.json else sys.stdout
    if args.verbose:
        setup_verbose_logging(args.log_file, stream)
    else:
        setup_logging(args.log_file, stream)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        logger.error("[%s] %s", e.code, e.message)
        sys.exit(2)

    calculator = WeightAllowanceCalculator(settings)

    try:
        if args.weight is not None:
            result = calculator.calculate_for_weight(args.weight)
        else:
            result = calculator.calculate_for_shipment(load_shipment(args.shipment))
    except ProcessingError as e:
        logger.error("[%s] %s", e.code, e.message)
        sys.exit(1)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print_calculation_report(result)

    sys.exit(0)
