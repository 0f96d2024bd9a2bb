"""Shipment input file reader for Sorter Weighing.

Parses a YAML (or JSON, which YAML accepts) shipment description into
ShipmentWeightInfo. Implements FR-030.

Error codes owned by this module: ERR_010, ERR_011.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sorter_weighing.errors import ErrorCode, ProcessingError
from sorter_weighing.models import ShipmentWeightInfo


def _to_decimal(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def parse_shipment(data: Any) -> ShipmentWeightInfo:
    """Build ShipmentWeightInfo from parsed document data.

    Expected shape::

        products:
          - weight_grams: 1000
          - weight_grams: null
        is_multi_colli: false
        precalculated_weight_grams: null

    Args:
        data: Parsed YAML/JSON document.

    Returns:
        Frozen ShipmentWeightInfo.

    Raises:
        ProcessingError: ERR_011 if the document does not match the shape.
    """
    if not isinstance(data, dict):
        raise ProcessingError(
            code=ErrorCode.ERR_011,
            message="Shipment document must be a mapping",
        )

    products = data.get("products") or []
    if not isinstance(products, list):
        raise ProcessingError(
            code=ErrorCode.ERR_011,
            message="'products' must be a list",
            field="products",
        )

    try:
        return ShipmentWeightInfo(
            products=[
                {"weight_grams": _to_decimal(p.get("weight_grams"))}
                if isinstance(p, dict)
                else p
                for p in products
            ],
            is_multi_colli=data.get("is_multi_colli", False),
            precalculated_weight_grams=_to_decimal(
                data.get("precalculated_weight_grams")
            ),
        )
    except ValidationError as exc:
        raise ProcessingError(
            code=ErrorCode.ERR_011,
            message=f"Invalid shipment document: {exc}",
        ) from exc


def load_shipment(path: Path) -> ShipmentWeightInfo:
    """Read and parse a shipment file.

    Args:
        path: Path to a .yaml, .yml or .json shipment file.

    Returns:
        Frozen ShipmentWeightInfo.

    Raises:
        ProcessingError: ERR_010 if the file is missing or unreadable,
            ERR_011 if its content is invalid.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ProcessingError(
            code=ErrorCode.ERR_010,
            message=f"Cannot read shipment file {path}: {exc}",
        ) from exc
    except UnicodeDecodeError as exc:
        raise ProcessingError(
            code=ErrorCode.ERR_011,
            message=f"Shipment file {path.name} is not valid UTF-8: {exc}",
        ) from exc
    except yaml.YAMLError as exc:
        raise ProcessingError(
            code=ErrorCode.ERR_011,
            message=f"Cannot parse shipment file {path.name}: {exc}",
        ) from exc

    return parse_shipment(data)
