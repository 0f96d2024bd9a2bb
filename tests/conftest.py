"""Shared test fixtures for the Sorter Weighing test suite.

Provides the session-scoped settings fixture loaded from the shipped
config file, plus factories for settings and strategies.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, Callable

import pytest

from sorter_weighing.config import load_settings
from sorter_weighing.models import (
    PackagingType,
    StrategyKind,
    WeighingSettings,
    WeightAllowanceStrategy,
)

CONFIG_PATH = Path(__file__).parent.parent / "config" / "weighing.yaml"


@pytest.fixture(scope="session")
def shipped_settings() -> WeighingSettings:
    """Load the project's config/weighing.yaml once per test session.

    Returns:
        WeighingSettings as used by the actual application.
    """
    return load_settings(CONFIG_PATH)


@pytest.fixture()
def make_settings() -> Callable[..., WeighingSettings]:
    """Factory fixture for WeighingSettings with the reference values.

    Defaults: coefficients 0.95 / 1.05, sensors accuracy 10 g, global
    maximum 31500 g, no strategy profiles.
    """

    def _make_settings(**overrides: Any) -> WeighingSettings:
        fields: dict[str, Any] = {
            "minimum_product_weight_tolerance_coefficient": Decimal("0.95"),
            "maximum_product_weight_tolerance_coefficient": Decimal("1.05"),
            "sensors_accuracy_grams": Decimal("10"),
            "max_supported_weight_grams": Decimal("31500"),
        }
        fields.update(overrides)
        return WeighingSettings(**fields)

    return _make_settings


@pytest.fixture()
def make_strategy() -> Callable[..., WeightAllowanceStrategy]:
    """Factory fixture for strategy variants built directly.

    Defaults to a SINGLE strategy with products (1000, 2000), packaging
    (50, 100), a 5000 g cap and BOX packaging.
    """

    def _make_strategy(
        products: tuple[int | str, int | str] = (1000, 2000),
        packaging: tuple[int | str, int | str] = (50, 100),
        cap: int | str = 5000,
        kind: StrategyKind = StrategyKind.SINGLE,
        packaging_type: PackagingType = PackagingType.BOX,
    ) -> WeightAllowanceStrategy:
        return WeightAllowanceStrategy(
            kind=kind,
            products_weight_range=(Decimal(products[0]), Decimal(products[1])),
            packaging_weight_range=(Decimal(packaging[0]), Decimal(packaging[1])),
            max_supported_weight_grams=Decimal(cap),
            packaging_type=packaging_type,
        )

    return _make_strategy
