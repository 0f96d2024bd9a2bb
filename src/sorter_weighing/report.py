"""Calculation summary reporting for Sorter Weighing.

Logs the outcome of one weight allowance calculation with its audit
trail. Implements FR-041.
"""

from __future__ import annotations

import logging

from sorter_weighing.models import DecimalRange, WeightAllowanceCalculationResult

logger = logging.getLogger(__name__)

_SEP_MAJOR = "==========================================================================="
_SEP_MINOR = "---------------------------------------------------------------------------"


def _format_range(weight_range: DecimalRange) -> str:
    return f"({weight_range[0]}, {weight_range[1]})"


def print_calculation_report(result: WeightAllowanceCalculationResult) -> None:
    """Log the calculation summary via logging.

    Display order:
        1. Header block with strategy, packaging type and final range.
        2. One line per correction, in pipeline order.

    Never raises; report output failures are non-fatal.

    Args:
        result: Calculation result to report.
    """
    try:
        logger.info(_SEP_MAJOR)
        logger.info("                   WEIGHT ALLOWANCE SUMMARY")
        logger.info(_SEP_MAJOR)
        logger.info("Strategy:           %s", result.strategy_kind.value)
        logger.info("Packaging type:     %s", result.packaging_type.value)
        logger.info(
            "Allowed range:      %d - %d g",
            result.range.min_grams,
            result.range.max_grams,
        )
        logger.info(_SEP_MINOR)
        logger.info("CORRECTIONS:")
        for idx, correction in enumerate(result.corrections, start=1):
            logger.info(
                "  %d. %s: %s -> %s",
                idx,
                correction.correction_type.value,
                _format_range(correction.original_range),
                _format_range(correction.corrected_range),
            )
        logger.info(_SEP_MAJOR)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to generate calculation report: %s", exc)
