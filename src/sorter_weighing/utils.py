"""Shared constants and checked Decimal arithmetic for Sorter Weighing.

Pure functions and constants imported by 2+ consumer modules.
No file I/O, no logging, no global state mutation.
"""

from __future__ import annotations

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)

from sorter_weighing.errors import ErrorCode, WeightOverflowError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_SENSORS_ACCURACY_GRAMS: Decimal = Decimal("10")
"""Symmetric scale slack applied at the last pipeline stage."""

DEFAULT_MAX_SUPPORTED_WEIGHT_GRAMS: Decimal = Decimal("31500")
"""Global gross weight ceiling, independent of any strategy cap."""

MAX_DECIMAL_MAGNITUDE: Decimal = Decimal(2**96 - 1)
"""Largest magnitude an intermediate pipeline value may take."""

MAX_RESULT_GRAMS: int = 2**32 - 1
"""Largest gram value a result bound may take (unsigned 32-bit)."""

# Products stay exact while the operands' significant digits sum to at most
# 60, e.g. a 29-digit bound times a coefficient of up to 31 digits. Longer
# coefficients are rounded half-even to 60 digits before floor or ceiling.
_CHECKED_CONTEXT = Context(
    prec=60,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


def check_magnitude(value: Decimal, operation: str) -> Decimal:
    """Return ``value`` unchanged if it lies within the representable range.

    Args:
        value: Result of an arithmetic step.
        operation: Short description of the step, used in the error message.

    Returns:
        The same value.

    Raises:
        WeightOverflowError: ERR_040 if ``abs(value)`` exceeds
            MAX_DECIMAL_MAGNITUDE or the value is not finite.
    """
    if not value.is_finite() or value.copy_abs() > MAX_DECIMAL_MAGNITUDE:
        raise WeightOverflowError(
            code=ErrorCode.ERR_040,
            message=f"Arithmetic overflow in {operation}: {value}",
        )
    return value


def checked_add(a: Decimal, b: Decimal) -> Decimal:
    """Add two Decimals, raising ERR_040 on overflow."""
    check_magnitude(a, "addition operand")
    check_magnitude(b, "addition operand")
    with localcontext(_CHECKED_CONTEXT):
        return check_magnitude(a + b, f"{a} + {b}")


def checked_sub(a: Decimal, b: Decimal) -> Decimal:
    """Subtract ``b`` from ``a``, raising ERR_040 on overflow."""
    check_magnitude(a, "subtraction operand")
    check_magnitude(b, "subtraction operand")
    with localcontext(_CHECKED_CONTEXT):
        return check_magnitude(a - b, f"{a} - {b}")


def checked_mul(a: Decimal, b: Decimal) -> Decimal:
    """Multiply two Decimals, raising ERR_040 on overflow."""
    check_magnitude(a, "multiplication operand")
    check_magnitude(b, "multiplication operand")
    with localcontext(_CHECKED_CONTEXT):
        return check_magnitude(a * b, f"{a} * {b}")


def floor_decimal(value: Decimal) -> Decimal:
    """Round toward negative infinity to a whole number."""
    with localcontext(_CHECKED_CONTEXT):
        return value.to_integral_value(rounding=ROUND_FLOOR)


def ceil_decimal(value: Decimal) -> Decimal:
    """Round toward positive infinity to a whole number."""
    with localcontext(_CHECKED_CONTEXT):
        return value.to_integral_value(rounding=ROUND_CEILING)


def to_result_grams(value: Decimal, bound: str) -> int:
    """Truncate a pipeline bound to whole grams for the result.

    Args:
        value: Final pipeline bound.
        bound: "min" or "max", used in the error message.

    Returns:
        Non-negative integer grams.

    Raises:
        WeightOverflowError: ERR_041 if the truncated value is negative or
            above MAX_RESULT_GRAMS.
    """
    with localcontext(_CHECKED_CONTEXT):
        grams = int(value.to_integral_value(rounding=ROUND_DOWN))
    if grams < 0 or grams > MAX_RESULT_GRAMS:
        raise WeightOverflowError(
            code=ErrorCode.ERR_041,
            message=(
                f"Result {bound} bound {value} does not fit in "
                f"0..{MAX_RESULT_GRAMS} grams"
            ),
            field=bound,
        )
    return grams
