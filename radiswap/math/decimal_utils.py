"""Shared high-precision Decimal utilities for amount calculations.

Amounts on the ledger are fixed-point decimals with 18 fractional digits.
Intermediate products of two such amounts need far more digits than the
default Decimal context offers, so all pool arithmetic runs in a 78-digit
context and is quantized back to the ledger's divisibility on exit.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from radiswap.constants import DIVISIBILITY_MAXIMUM

# 78 digits of precision: enough for the product of two 10^38 amounts
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78, rounding=ROUND_DOWN)


def to_decimal(value: Decimal | int | str) -> Decimal:
    """Convert an amount to Decimal.

    Floats are rejected: their binary representation would silently leak
    rounding error into ledger amounts.

    Raises:
        TypeError: If value is a float or another unsupported type
        ValueError: If a string is not a finite decimal number
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Amounts must be Decimal, int or str, got {type(value).__name__}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as err:
            raise ValueError(f"Not a decimal amount: '{value}'") from err
    else:
        raise TypeError(f"Amounts must be Decimal, int or str, got {type(value).__name__}")
    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value}")
    return result


def quantize_amount(value: Decimal, places: int = DIVISIBILITY_MAXIMUM) -> Decimal:
    """Truncate value to `places` fractional digits (rounding toward zero)."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)


def fits_divisibility(value: Decimal, divisibility: int) -> bool:
    """True if value has no more than `divisibility` fractional digits."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return quantize_amount(value, divisibility) == value


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "to_decimal",
    "quantize_amount",
    "fits_divisibility",
]
