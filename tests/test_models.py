"""Tests for sorter_weighing.models.

Covers: enums, Product, ShipmentWeightInfo, WeighingSettings validation,
StrategyProfile defaults, and frozen behaviour of result models.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from sorter_weighing.models import (
    CorrectionType,
    PackagingType,
    Product,
    ShipmentWeightInfo,
    StrategyKind,
    StrategyProfile,
    WeighingSettings,
    WeightRange,
)


def test_enum_values_equal_names() -> None:
    for enum_cls in (StrategyKind, PackagingType, CorrectionType):
        for member in enum_cls:
            assert member == member.name
    assert len(StrategyKind) == 5
    assert len(CorrectionType) == 5


# ---------------------------------------------------------------------------
# Shipment input
# ---------------------------------------------------------------------------


class TestShipmentWeightInfo:
    def test_defaults(self) -> None:
        info = ShipmentWeightInfo()

        assert info.products == ()
        assert info.is_multi_colli is False
        assert info.precalculated_weight_grams is None

    def test_unknown_weight_flag(self) -> None:
        known = ShipmentWeightInfo(products=[Product(weight_grams=Decimal(5))])
        mixed = ShipmentWeightInfo(
            products=[Product(weight_grams=Decimal(5)), Product()]
        )

        assert known.has_unknown_product_weight is False
        assert mixed.has_unknown_product_weight is True

    def test_negative_product_weight_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Product(weight_grams=Decimal("-1"))

    def test_negative_precalculated_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ShipmentWeightInfo(precalculated_weight_grams=Decimal("-1"))

    def test_frozen(self) -> None:
        info = ShipmentWeightInfo()
        with pytest.raises(ValidationError):
            info.is_multi_colli = True  # type: ignore[misc]


# ---------------------------------------------------------------------------
# WeighingSettings
# ---------------------------------------------------------------------------


class TestWeighingSettings:
    def test_valid(self) -> None:
        settings = WeighingSettings(
            minimum_product_weight_tolerance_coefficient=Decimal("0.9"),
            maximum_product_weight_tolerance_coefficient=Decimal("1.1"),
        )

        assert settings.sensors_accuracy_grams == Decimal("10")
        assert settings.max_supported_weight_grams == Decimal("31500")

    @pytest.mark.parametrize(
        "minimum,maximum",
        [("1", "1.1"), ("0.9", "1"), ("1.2", "1.1"), ("0", "1.1")],
    )
    def test_coefficient_rule(self, minimum: str, maximum: str) -> None:
        with pytest.raises(ValidationError):
            WeighingSettings(
                minimum_product_weight_tolerance_coefficient=Decimal(minimum),
                maximum_product_weight_tolerance_coefficient=Decimal(maximum),
            )

    def test_frozen(self) -> None:
        settings = WeighingSettings(
            minimum_product_weight_tolerance_coefficient=Decimal("0.9"),
            maximum_product_weight_tolerance_coefficient=Decimal("1.1"),
        )
        with pytest.raises(ValidationError):
            settings.sensors_accuracy_grams = Decimal("0")  # type: ignore[misc]

    def test_profile_for_missing_kind(self) -> None:
        settings = WeighingSettings(
            minimum_product_weight_tolerance_coefficient=Decimal("0.9"),
            maximum_product_weight_tolerance_coefficient=Decimal("1.1"),
        )

        assert settings.profile_for(StrategyKind.SINGLE) == StrategyProfile()


def test_weight_range_rejects_negative() -> None:
    with pytest.raises(ValidationError):
        WeightRange(min_grams=-1, max_grams=10)
