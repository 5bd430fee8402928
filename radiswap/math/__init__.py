"""Decimal arithmetic helpers for ledger amounts."""

from radiswap.math.decimal_utils import (
    DECIMAL_HIGH_PREC_CONTEXT,
    fits_divisibility,
    quantize_amount,
    to_decimal,
)
from radiswap.math.safe_decimal import D, DivisionByZero, SafeDecimal, Underflow

__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "to_decimal",
    "quantize_amount",
    "fits_divisibility",
    "SafeDecimal",
    "D",
    "DivisionByZero",
    "Underflow",
]
