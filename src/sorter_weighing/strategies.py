"""Strategy selection and construction for Sorter Weighing.

Maps a shipment's shape to one of five strategy kinds and builds the
matching WeightAllowanceStrategy variant. Implements FR-020 through FR-025.

The per-kind builders below are the default, configuration-driven policy.
Callers with their own policy pass replacement builders to StrategyFactory.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Mapping

from sorter_weighing.models import (
    ShipmentWeightInfo,
    StrategyKind,
    StrategyProfile,
    WeighingSettings,
    WeightAllowanceStrategy,
)
from sorter_weighing.utils import checked_add

logger = logging.getLogger(__name__)

StrategyBuilder = Callable[
    [ShipmentWeightInfo, StrategyProfile, Decimal], WeightAllowanceStrategy
]
"""Builds one strategy variant from (shipment, profile, resolved cap)."""


def choose_strategy_kind(info: ShipmentWeightInfo) -> StrategyKind:
    """Pick the strategy kind for a shipment (FR-020).

    First match wins:
        1. No products -> UNKNOWN
        2. Unknown product weight on a multi-colli shipment -> UNKNOWN
        3. Multi-colli -> MULTI_COLLI
        4. Unknown product weight -> UNKNOWN_PRODUCT_WEIGHT
        5. Precalculated weight present -> PRE_CALCULATED
        6. Otherwise -> SINGLE

    Args:
        info: Shipment weight information.

    Returns:
        Exactly one StrategyKind; never raises.
    """
    if not info.products:
        return StrategyKind.UNKNOWN

    unknown_weight = info.has_unknown_product_weight

    if unknown_weight and info.is_multi_colli:
        return StrategyKind.UNKNOWN

    if info.is_multi_colli:
        return StrategyKind.MULTI_COLLI

    if unknown_weight:
        return StrategyKind.UNKNOWN_PRODUCT_WEIGHT

    if info.precalculated_weight_grams is not None:
        return StrategyKind.PRE_CALCULATED

    return StrategyKind.SINGLE


def _known_weights(info: ShipmentWeightInfo) -> list[Decimal]:
    return [p.weight_grams for p in info.products if p.weight_grams is not None]


def _sum_weights(weights: list[Decimal]) -> Decimal:
    total = Decimal("0")
    for weight in weights:
        total = checked_add(total, weight)
    return total


def _strategy(
    kind: StrategyKind,
    products_range: tuple[Decimal, Decimal],
    profile: StrategyProfile,
    cap: Decimal,
) -> WeightAllowanceStrategy:
    return WeightAllowanceStrategy(
        kind=kind,
        products_weight_range=products_range,
        packaging_weight_range=profile.packaging_weight_range,
        max_supported_weight_grams=cap,
        packaging_type=profile.packaging_type,
    )


def build_unknown(
    info: ShipmentWeightInfo, profile: StrategyProfile, cap: Decimal
) -> WeightAllowanceStrategy:
    """Nothing reliable is known: accept anything from zero up to the cap."""
    return _strategy(StrategyKind.UNKNOWN, (Decimal("0"), cap), profile, cap)


def build_multi_colli(
    info: ShipmentWeightInfo, profile: StrategyProfile, cap: Decimal
) -> WeightAllowanceStrategy:
    """One parcel of a split shipment weighs between its lightest product and the whole."""
    weights = _known_weights(info)
    return _strategy(
        StrategyKind.MULTI_COLLI,
        (min(weights, default=Decimal("0")), _sum_weights(weights)),
        profile,
        cap,
    )


def build_unknown_product_weight(
    info: ShipmentWeightInfo, profile: StrategyProfile, cap: Decimal
) -> WeightAllowanceStrategy:
    """Known weights give a floor; unknown products may weigh up to the cap."""
    return _strategy(
        StrategyKind.UNKNOWN_PRODUCT_WEIGHT,
        (_sum_weights(_known_weights(info)), cap),
        profile,
        cap,
    )


def build_pre_calculated(
    info: ShipmentWeightInfo, profile: StrategyProfile, cap: Decimal
) -> WeightAllowanceStrategy:
    """Wrap the precalculated weight as both products minimum and maximum."""
    weight = info.precalculated_weight_grams
    if weight is None:
        weight = _sum_weights(_known_weights(info))
    return _strategy(StrategyKind.PRE_CALCULATED, (weight, weight), profile, cap)


def build_single(
    info: ShipmentWeightInfo, profile: StrategyProfile, cap: Decimal
) -> WeightAllowanceStrategy:
    """Single parcel with every weight known: the exact products sum."""
    total = _sum_weights(_known_weights(info))
    return _strategy(StrategyKind.SINGLE, (total, total), profile, cap)


DEFAULT_BUILDERS: dict[StrategyKind, StrategyBuilder] = {
    StrategyKind.UNKNOWN: build_unknown,
    StrategyKind.MULTI_COLLI: build_multi_colli,
    StrategyKind.UNKNOWN_PRODUCT_WEIGHT: build_unknown_product_weight,
    StrategyKind.PRE_CALCULATED: build_pre_calculated,
    StrategyKind.SINGLE: build_single,
}


class StrategyFactory:
    """Builds strategy variants by dispatching on StrategyKind.

    Profiles (packaging range, cap, packaging type) come from
    WeighingSettings; the products range comes from the builder registered
    for the kind. Stateless after construction.

    Attributes:
        settings: Weighing settings providing profiles and the global cap.
        builders: Builder per kind; defaults to DEFAULT_BUILDERS.
    """

    def __init__(
        self,
        settings: WeighingSettings,
        builders: Mapping[StrategyKind, StrategyBuilder] | None = None,
    ) -> None:
        self.settings = settings
        self.builders: dict[StrategyKind, StrategyBuilder] = dict(DEFAULT_BUILDERS)
        if builders:
            self.builders.update(builders)

    def build(
        self, kind: StrategyKind, info: ShipmentWeightInfo
    ) -> WeightAllowanceStrategy:
        """Build the variant ``kind`` for ``info``."""
        profile = self.settings.profile_for(kind)
        cap = profile.max_supported_weight_grams
        if cap is None:
            cap = self.settings.max_supported_weight_grams
        strategy = self.builders[kind](info, profile, cap)
        logger.debug(
            "Built %s strategy: products=%s packaging=%s cap=%s",
            kind.value,
            strategy.products_weight_range,
            strategy.packaging_weight_range,
            strategy.max_supported_weight_grams,
        )
        return strategy

    def for_shipment(self, info: ShipmentWeightInfo) -> WeightAllowanceStrategy:
        """Select the kind for ``info`` and build it."""
        return self.build(choose_strategy_kind(info), info)

    def for_weight(self, weight_grams: Decimal) -> WeightAllowanceStrategy:
        """Build a PRE_CALCULATED variant directly, bypassing selection."""
        info = ShipmentWeightInfo(precalculated_weight_grams=weight_grams)
        return self.build(StrategyKind.PRE_CALCULATED, info)
