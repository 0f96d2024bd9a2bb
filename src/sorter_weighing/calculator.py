"""Weight allowance calculator facade for Sorter Weighing.

Entry points for the two input shapes: a known total weight, or full
shipment weight information. Both end in the same correction pipeline.

Error codes owned by this module: ERR_030.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sorter_weighing import pipeline
from sorter_weighing.errors import ErrorCode, ProcessingError
from sorter_weighing.models import (
    ShipmentWeightInfo,
    WeighingSettings,
    WeightAllowanceCalculationResult,
    WeightAllowanceStrategy,
)
from sorter_weighing.strategies import StrategyFactory

logger = logging.getLogger(__name__)


class WeightAllowanceCalculator:
    """Derives the acceptable gross weight range for a shipment.

    Holds only read-only collaborators, so one instance can serve
    concurrent callers.

    Attributes:
        settings: Weighing settings loaded at startup.
        factory: Strategy factory used for selection and construction.
    """

    def __init__(
        self,
        settings: WeighingSettings,
        factory: StrategyFactory | None = None,
    ) -> None:
        self.settings = settings
        self.factory = factory if factory is not None else StrategyFactory(settings)

    def calculate(
        self, strategy: WeightAllowanceStrategy
    ) -> WeightAllowanceCalculationResult:
        """Run the correction pipeline over an already built strategy."""
        return pipeline.calculate(strategy, self.settings)

    def select_strategy(self, info: ShipmentWeightInfo) -> WeightAllowanceStrategy:
        """Choose and build the strategy variant matching ``info``."""
        return self.factory.for_shipment(info)

    def calculate_for_weight(
        self, weight_grams: int | Decimal
    ) -> WeightAllowanceCalculationResult:
        """Calculate the allowance for a known total weight.

        Skips strategy selection and uses a PRE_CALCULATED strategy.

        Args:
            weight_grams: Known weight in whole grams.

        Returns:
            The calculation result.

        Raises:
            ProcessingError: ERR_030 if the weight is negative, not whole,
                or not finite.
            WeightOverflowError: ERR_040 or ERR_041 on overflow.
        """
        weight = Decimal(weight_grams)
        if (
            not weight.is_finite()
            or weight < 0
            or weight != weight.to_integral_value()
        ):
            raise ProcessingError(
                code=ErrorCode.ERR_030,
                message=(
                    f"Known weight must be a non-negative whole number of "
                    f"grams, got {weight_grams}"
                ),
                field="weight_grams",
            )
        logger.debug("Calculating allowance for known weight %s g", weight)
        return self.calculate(self.factory.for_weight(weight))

    def calculate_for_shipment(
        self, info: ShipmentWeightInfo
    ) -> WeightAllowanceCalculationResult:
        """Calculate the allowance for a shipment.

        Args:
            info: Shipment weight information.

        Returns:
            The calculation result.

        Raises:
            WeightOverflowError: ERR_040 or ERR_041 on overflow.
        """
        logger.debug(
            "Calculating allowance for shipment: %d product(s), multi_colli=%s",
            len(info.products),
            info.is_multi_colli,
        )
        return self.calculate(self.select_strategy(info))
