"""Error types and error code enum for Sorter Weighing.

Defines ErrorCode (ERR_001-ERR_041), ProcessingError, WeightOverflowError,
and ConfigError exception classes.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for configuration and calculation failures.

    Each member's string value equals its name (e.g., ErrorCode.ERR_001 == "ERR_001").
    Codes are grouped by phase:
        ERR_001-004: Config errors (fatal startup)
        ERR_010-011: Shipment input file errors
        ERR_030: Invalid weight input
        ERR_040-041: Arithmetic overflow during calculation
    """

    # Config errors (fatal startup)
    ERR_001 = "ERR_001"
    ERR_002 = "ERR_002"
    ERR_003 = "ERR_003"
    ERR_004 = "ERR_004"

    # Shipment input file errors
    ERR_010 = "ERR_010"
    ERR_011 = "ERR_011"

    # Input errors
    ERR_030 = "ERR_030"

    # Overflow errors
    ERR_040 = "ERR_040"
    ERR_041 = "ERR_041"


class ProcessingError(Exception):
    """Exception raised while calculating a weight allowance.

    Raised by the calculator, the correction pipeline and the shipment
    file reader. Caught by the CLI, which exits with code 1.

    Attributes:
        code: The ERR_NNN error code string.
        message: Human-readable description with actionable context.
        field: Name of the value involved (e.g., "weight_grams"), if any.
    """

    def __init__(
        self,
        code: str,
        message: str,
        field: str | None = None,
    ) -> None:
        """Initialize a ProcessingError.

        Args:
            code: The ERR_NNN error code string.
            message: Human-readable description with actionable context.
            field: Name of the value involved.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.field = field


class WeightOverflowError(ProcessingError):
    """Arithmetic left the representable range during a calculation.

    Fatal for the call: no partial result is ever returned.
    """


class ConfigError(Exception):
    """Exception raised for fatal configuration errors during startup.

    Raised only by config.py. Caught by cli.py which exits with code 2.

    Attributes:
        code: The ERR_NNN error code string (ERR_001 through ERR_004).
        message: Human-readable description of the config problem.
        path: Path to the config file that caused the error.
    """

    def __init__(
        self,
        code: str,
        message: str,
        path: str | None = None,
    ) -> None:
        """Initialize a ConfigError.

        Args:
            code: The ERR_NNN error code string.
            message: Human-readable description of the config problem.
            path: Path to the config file that caused the error.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path
