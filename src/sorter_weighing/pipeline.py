"""Correction pipeline for Sorter Weighing.

Runs a strategy's products weight range through five ordered corrections
and assembles the calculation result with its audit trail.
Implements FR-010 through FR-015.

Error codes owned by this module: ERR_040, ERR_041.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from sorter_weighing.models import (
    CorrectionType,
    DecimalRange,
    WeighingSettings,
    WeightAllowanceCalculationResult,
    WeightAllowanceCorrection,
    WeightAllowanceStrategy,
    WeightRange,
)
from sorter_weighing.utils import (
    ceil_decimal,
    checked_add,
    checked_mul,
    checked_sub,
    floor_decimal,
    to_result_grams,
)

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")

StageResult = tuple[DecimalRange, WeightAllowanceCorrection | None]
Stage = Callable[[DecimalRange, WeightAllowanceStrategy, WeighingSettings], StageResult]


def _correction(
    correction_type: CorrectionType,
    original: DecimalRange,
    corrected: DecimalRange,
) -> WeightAllowanceCorrection:
    return WeightAllowanceCorrection(
        correction_type=correction_type,
        original_range=original,
        corrected_range=corrected,
    )


def apply_tolerance_coefficients(
    weight_range: DecimalRange,
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> StageResult:
    """Widen the products range by the tolerance coefficients (FR-010).

    The minimum is floored and the maximum ceiled, so the tolerance only
    ever widens the range. Always recorded.
    """
    products_min, products_max = weight_range
    corrected = (
        floor_decimal(
            checked_mul(
                products_min,
                settings.minimum_product_weight_tolerance_coefficient,
            )
        ),
        ceil_decimal(
            checked_mul(
                products_max,
                settings.maximum_product_weight_tolerance_coefficient,
            )
        ),
    )
    return corrected, _correction(
        CorrectionType.APPLIED_PRODUCT_WEIGHT_TOLERANCE_COEFFICIENTS,
        weight_range,
        corrected,
    )


def apply_maximum_allowed_products_weight(
    weight_range: DecimalRange,
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> StageResult:
    """Cap both bounds at the strategy's own maximum (FR-011).

    Clamps from above only. Recorded only when a bound changed.
    """
    cap = strategy.max_supported_weight_grams
    corrected = (min(weight_range[0], cap), min(weight_range[1], cap))
    if corrected == weight_range:
        return weight_range, None
    return corrected, _correction(
        CorrectionType.EXCEEDED_MAXIMUM_ALLOWED_PRODUCTS_WEIGHT,
        weight_range,
        corrected,
    )


def add_packaging(
    weight_range: DecimalRange,
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> StageResult:
    """Add the strategy's packaging range to both bounds (FR-012). Always recorded."""
    packaging_min, packaging_max = strategy.packaging_weight_range
    corrected = (
        checked_add(weight_range[0], packaging_min),
        checked_add(weight_range[1], packaging_max),
    )
    return corrected, _correction(
        CorrectionType.ADDED_PACKAGING_WEIGHT, weight_range, corrected
    )


def apply_supported_gross_weight(
    weight_range: DecimalRange,
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> StageResult:
    """Clamp both bounds into ``[0, global maximum]`` (FR-013).

    Uses the global ceiling from settings, not the strategy cap.
    Recorded only when a bound changed.
    """
    ceiling = settings.max_supported_weight_grams
    corrected = (
        min(max(weight_range[0], _ZERO), ceiling),
        min(max(weight_range[1], _ZERO), ceiling),
    )
    if corrected == weight_range:
        return weight_range, None
    return corrected, _correction(
        CorrectionType.EXCEEDED_SUPPORTED_GROSS_WEIGHT,
        weight_range,
        corrected,
    )


def apply_sensors_accuracy(
    weight_range: DecimalRange,
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> StageResult:
    """Widen the range by the scale's accuracy (FR-014). Always recorded.

    The minimum never drops below zero.
    """
    accuracy = settings.sensors_accuracy_grams
    corrected = (
        max(checked_sub(weight_range[0], accuracy), _ZERO),
        checked_add(weight_range[1], accuracy),
    )
    return corrected, _correction(
        CorrectionType.INCLUDED_SENSORS_ACCURACY, weight_range, corrected
    )


STAGES: tuple[Stage, ...] = (
    apply_tolerance_coefficients,
    apply_maximum_allowed_products_weight,
    add_packaging,
    apply_supported_gross_weight,
    apply_sensors_accuracy,
)
"""Pipeline stages in execution order."""


def run_pipeline(
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> tuple[DecimalRange, list[WeightAllowanceCorrection]]:
    """Fold the strategy's products range through every stage.

    Args:
        strategy: Strategy variant providing the initial range and caps.
        settings: Weighing settings with coefficients and global limits.

    Returns:
        Tuple of (final decimal range, audit trail in stage order).

    Raises:
        WeightOverflowError: ERR_040 if any step overflows.
    """
    weight_range = strategy.products_weight_range
    corrections: list[WeightAllowanceCorrection] = []

    for stage in STAGES:
        weight_range, correction = stage(weight_range, strategy, settings)
        if correction is not None:
            corrections.append(correction)
        logger.debug(
            "%s -> (%s, %s)", stage.__name__, weight_range[0], weight_range[1]
        )

    return weight_range, corrections


def assemble_result(
    weight_range: DecimalRange,
    strategy: WeightAllowanceStrategy,
    corrections: list[WeightAllowanceCorrection],
) -> WeightAllowanceCalculationResult:
    """Build the immutable result from the final range (FR-015).

    Args:
        weight_range: Final decimal range from run_pipeline.
        strategy: Strategy the range was derived from.
        corrections: Audit trail from run_pipeline.

    Returns:
        WeightAllowanceCalculationResult with whole-gram bounds.

    Raises:
        WeightOverflowError: ERR_041 if a bound is negative or too large.
    """
    return WeightAllowanceCalculationResult(
        range=WeightRange(
            min_grams=to_result_grams(weight_range[0], "min"),
            max_grams=to_result_grams(weight_range[1], "max"),
        ),
        packaging_type=strategy.packaging_type,
        strategy_kind=strategy.kind,
        corrections=tuple(corrections),
    )


def calculate(
    strategy: WeightAllowanceStrategy,
    settings: WeighingSettings,
) -> WeightAllowanceCalculationResult:
    """Run the full correction pipeline for one strategy.

    A call either returns a complete result or raises; nothing partial
    escapes.

    Args:
        strategy: Strategy variant to evaluate.
        settings: Weighing settings.

    Returns:
        The calculation result with its full audit trail.

    Raises:
        WeightOverflowError: ERR_040 or ERR_041 on overflow.
    """
    weight_range, corrections = run_pipeline(strategy, settings)
    result = assemble_result(weight_range, strategy, corrections)
    logger.info(
        "Weight allowance (%s): %d-%d g",
        strategy.kind.value,
        result.range.min_grams,
        result.range.max_grams,
    )
    return result
