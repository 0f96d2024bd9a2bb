"""Configuration loader for Sorter Weighing.

Loads and validates the weighing settings file (weighing.yaml).
Implements FR-001 through FR-004.

Error codes owned by this module: ERR_001, ERR_002, ERR_003, ERR_004.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sorter_weighing.errors import ConfigError, ErrorCode
from sorter_weighing.models import WeighingSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "weighing.yaml"

# Keys required under the "tolerance" section, mapped to settings fields.
_TOLERANCE_KEYS: dict[str, str] = {
    "minimum_product_weight_coefficient": "minimum_product_weight_tolerance_coefficient",
    "maximum_product_weight_coefficient": "maximum_product_weight_tolerance_coefficient",
}

# Optional top-level keys copied onto settings fields unchanged.
_OPTIONAL_KEYS: tuple[str, ...] = (
    "sensors_accuracy_grams",
    "max_supported_weight_grams",
)


def _decimalize(value: Any) -> Any:
    """Recursively turn YAML floats into Decimals via their text form.

    Going through ``str`` keeps 0.95 as Decimal("0.95") rather than the
    binary float expansion.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _decimalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decimalize(v) for v in value]
    return value


def load_yaml(yaml_path: Path) -> dict[str, Any]:
    """Read a YAML file and check it holds a mapping.

    Args:
        yaml_path: Path to weighing.yaml.

    Returns:
        Parsed YAML data as a dict.

    Raises:
        ConfigError: ERR_001 if the file is missing, ERR_002 if it cannot
            be parsed or is not a mapping.
    """
    if not yaml_path.exists():
        raise ConfigError(
            code=ErrorCode.ERR_001,
            message=f"Config file not found: {yaml_path}",
            path=str(yaml_path),
        )

    try:
        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except UnicodeDecodeError as exc:
        raise ConfigError(
            code=ErrorCode.ERR_002,
            message=f"{yaml_path.name} is not valid UTF-8: {exc}",
            path=str(yaml_path),
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(
            code=ErrorCode.ERR_002,
            message=f"Cannot parse {yaml_path.name}: {exc}",
            path=str(yaml_path),
        ) from exc

    if not isinstance(data, dict):
        raise ConfigError(
            code=ErrorCode.ERR_002,
            message=f"{yaml_path.name} must contain a mapping at the top level",
            path=str(yaml_path),
        )
    return data


def build_settings(data: dict[str, Any], path: str | None = None) -> WeighingSettings:
    """Validate parsed YAML data and build WeighingSettings.

    Args:
        data: Parsed contents of weighing.yaml.
        path: Config file path for error messages.

    Returns:
        Frozen WeighingSettings.

    Raises:
        ConfigError: ERR_004 on a missing required key, ERR_003 on invalid
            values (including coefficients outside minimum < 1 < maximum).
    """
    tolerance = data.get("tolerance")
    if not isinstance(tolerance, dict):
        raise ConfigError(
            code=ErrorCode.ERR_004,
            message="Missing required section 'tolerance'",
            path=path,
        )

    fields: dict[str, Any] = {}
    for yaml_key, field_name in _TOLERANCE_KEYS.items():
        if yaml_key not in tolerance:
            raise ConfigError(
                code=ErrorCode.ERR_004,
                message=f"Missing required key 'tolerance.{yaml_key}'",
                path=path,
            )
        fields[field_name] = tolerance[yaml_key]

    for key in _OPTIONAL_KEYS:
        if data.get(key) is not None:
            fields[key] = data[key]

    strategies = data.get("strategies") or {}
    if not isinstance(strategies, dict):
        raise ConfigError(
            code=ErrorCode.ERR_003,
            message="'strategies' must be a mapping of strategy kind to profile",
            path=path,
        )
    fields["strategies"] = {str(k).upper(): v for k, v in strategies.items()}

    try:
        return WeighingSettings(**_decimalize(fields))
    except ValidationError as exc:
        raise ConfigError(
            code=ErrorCode.ERR_003,
            message=f"Invalid weighing settings: {exc}",
            path=path,
        ) from exc


def load_settings(config_path: Path = DEFAULT_CONFIG_PATH) -> WeighingSettings:
    """Load weighing.yaml and return validated WeighingSettings.

    Fatal: callers must not proceed if this raises.

    Args:
        config_path: Path to the weighing settings YAML file.

    Returns:
        Frozen WeighingSettings.

    Raises:
        ConfigError: ERR_001 through ERR_004.
    """
    data = load_yaml(config_path)
    settings = build_settings(data, str(config_path))
    logger.debug(
        "Loaded weighing settings from %s: tolerance=(%s, %s), "
        "sensors_accuracy=%s g, max_supported=%s g",
        config_path,
        settings.minimum_product_weight_tolerance_coefficient,
        settings.maximum_product_weight_tolerance_coefficient,
        settings.sensors_accuracy_grams,
        settings.max_supported_weight_grams,
    )
    return settings
