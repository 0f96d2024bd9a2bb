"""Pydantic data models for Sorter Weighing.

Defines the enums and entities used across the calculation pipeline:
Product, ShipmentWeightInfo, WeightAllowanceStrategy, StrategyProfile,
WeightAllowanceCorrection, WeightRange, WeightAllowanceCalculationResult,
WeighingSettings.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sorter_weighing.utils import (
    DEFAULT_MAX_SUPPORTED_WEIGHT_GRAMS,
    DEFAULT_SENSORS_ACCURACY_GRAMS,
)

DecimalRange = tuple[Decimal, Decimal]
"""A ``(min, max)`` weight range in grams, unrounded."""


class StrategyKind(str, Enum):
    """Weight-determination strategy variants, one per shipment shape."""

    UNKNOWN = "UNKNOWN"
    MULTI_COLLI = "MULTI_COLLI"
    UNKNOWN_PRODUCT_WEIGHT = "UNKNOWN_PRODUCT_WEIGHT"
    PRE_CALCULATED = "PRE_CALCULATED"
    SINGLE = "SINGLE"


class PackagingType(str, Enum):
    """Packaging classification passed through to the sorter configuration."""

    NONE = "NONE"
    BOX = "BOX"
    ENVELOPE = "ENVELOPE"
    BAG = "BAG"
    UNKNOWN = "UNKNOWN"


class CorrectionType(str, Enum):
    """Audit record kinds, one per correction pipeline stage."""

    APPLIED_PRODUCT_WEIGHT_TOLERANCE_COEFFICIENTS = (
        "APPLIED_PRODUCT_WEIGHT_TOLERANCE_COEFFICIENTS"
    )
    EXCEEDED_MAXIMUM_ALLOWED_PRODUCTS_WEIGHT = "EXCEEDED_MAXIMUM_ALLOWED_PRODUCTS_WEIGHT"
    ADDED_PACKAGING_WEIGHT = "ADDED_PACKAGING_WEIGHT"
    EXCEEDED_SUPPORTED_GROSS_WEIGHT = "EXCEEDED_SUPPORTED_GROSS_WEIGHT"
    INCLUDED_SENSORS_ACCURACY = "INCLUDED_SENSORS_ACCURACY"


class Product(BaseModel):
    """One product line of a shipment.

    Attributes:
        weight_grams: Known product weight in grams, None when unknown.
    """

    model_config = ConfigDict(frozen=True)

    weight_grams: Decimal | None = Field(default=None, ge=0)


class ShipmentWeightInfo(BaseModel):
    """Weight-relevant shape of a shipment, input to strategy selection.

    Attributes:
        products: Ordered product lines.
        is_multi_colli: True when the shipment is split over several parcels.
        precalculated_weight_grams: Weight override computed upstream, if any.
    """

    model_config = ConfigDict(frozen=True)

    products: tuple[Product, ...] = ()
    is_multi_colli: bool = False
    precalculated_weight_grams: Decimal | None = Field(default=None, ge=0)

    @property
    def has_unknown_product_weight(self) -> bool:
        """True if any product is missing a known weight."""
        return any(p.weight_grams is None for p in self.products)


class StrategyProfile(BaseModel):
    """Per-strategy configuration consumed by the default strategy factory.

    Attributes:
        packaging_weight_range: ``(min, max)`` packaging weight in grams.
        max_supported_weight_grams: Products weight cap for this strategy.
            None means the global cap from WeighingSettings applies.
        packaging_type: Packaging classification reported in the result.
    """

    model_config = ConfigDict(frozen=True)

    packaging_weight_range: DecimalRange = (Decimal("0"), Decimal("0"))
    max_supported_weight_grams: Decimal | None = Field(default=None, ge=0)
    packaging_type: PackagingType = PackagingType.UNKNOWN


class WeightAllowanceStrategy(BaseModel):
    """Tagged strategy variant feeding the correction pipeline.

    Built fresh per calculation; never mutated afterwards.

    Attributes:
        kind: Which of the five variants this is.
        products_weight_range: ``(min, max)`` expected net products weight.
        packaging_weight_range: ``(min, max)`` expected packaging weight.
        max_supported_weight_grams: Cap applied to the products weight.
        packaging_type: Packaging classification reported in the result.
    """

    model_config = ConfigDict(frozen=True)

    kind: StrategyKind
    products_weight_range: DecimalRange
    packaging_weight_range: DecimalRange
    max_supported_weight_grams: Decimal
    packaging_type: PackagingType


class WeightAllowanceCorrection(BaseModel):
    """Audit record of one pipeline stage.

    Attributes:
        correction_type: Which stage produced the record.
        original_range: Range entering the stage.
        corrected_range: Range leaving the stage.
    """

    model_config = ConfigDict(frozen=True)

    correction_type: CorrectionType
    original_range: DecimalRange
    corrected_range: DecimalRange


class WeightRange(BaseModel):
    """Final acceptable gross weight range in whole grams."""

    model_config = ConfigDict(frozen=True)

    min_grams: int = Field(ge=0)
    max_grams: int = Field(ge=0)


class WeightAllowanceCalculationResult(BaseModel):
    """Immutable outcome of one weight allowance calculation.

    Attributes:
        range: Acceptable gross weight range for the scale reading.
        packaging_type: Packaging type taken from the strategy.
        strategy_kind: Strategy variant used, for traceability.
        corrections: Audit trail in pipeline order.
    """

    model_config = ConfigDict(frozen=True)

    range: WeightRange
    packaging_type: PackagingType
    strategy_kind: StrategyKind
    corrections: tuple[WeightAllowanceCorrection, ...]


class WeighingSettings(BaseModel):
    """Process-wide weighing configuration, loaded once at startup.

    Immutable after construction so calculators can be shared between
    threads.

    Attributes:
        minimum_product_weight_tolerance_coefficient: Factor below 1 that
            lowers the products minimum.
        maximum_product_weight_tolerance_coefficient: Factor above 1 that
            raises the products maximum.
        sensors_accuracy_grams: Symmetric scale slack added at the end.
        max_supported_weight_grams: Global gross weight ceiling.
        strategies: Per-kind profiles for the default strategy factory.
    """

    model_config = ConfigDict(frozen=True)

    minimum_product_weight_tolerance_coefficient: Decimal = Field(gt=0)
    maximum_product_weight_tolerance_coefficient: Decimal
    sensors_accuracy_grams: Decimal = Field(
        default=DEFAULT_SENSORS_ACCURACY_GRAMS, ge=0
    )
    max_supported_weight_grams: Decimal = Field(
        default=DEFAULT_MAX_SUPPORTED_WEIGHT_GRAMS, ge=0
    )
    strategies: dict[StrategyKind, StrategyProfile] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_coefficients(self) -> WeighingSettings:
        min_coeff = self.minimum_product_weight_tolerance_coefficient
        max_coeff = self.maximum_product_weight_tolerance_coefficient
        if not min_coeff < 1 < max_coeff:
            raise ValueError(
                "tolerance coefficients must satisfy minimum < 1 < maximum, "
                f"got minimum={min_coeff}, maximum={max_coeff}"
            )
        return self

    def profile_for(self, kind: StrategyKind) -> StrategyProfile:
        """Return the configured profile for ``kind``, or the empty default."""
        return self.strategies.get(kind, StrategyProfile())
