"""Safe Decimal wrapper for arithmetic on ledger amounts.

This module provides SafeDecimal, a lightweight wrapper that makes amount
arithmetic safe by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Every operation runs in the 78-digit high-precision context

Usage pattern:
    from radiswap.math.safe_decimal import SafeDecimal, D

    def share_of(reserve: Decimal, units: Decimal, supply: Decimal) -> Decimal:
        # Wrap at entry
        r, u, s = D(reserve), D(units), D(supply)

        # Natural arithmetic - automatically safe
        result = r * u / s  # Raises if s == 0

        # Unwrap at exit, truncated to ledger precision
        return result.to_amount()
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from radiswap.constants import DIVISIBILITY_MAXIMUM
from radiswap.errors import PoolArithmeticError
from radiswap.math.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT, quantize_amount


class DivisionByZero(PoolArithmeticError):
    """Division by zero."""

    pass


class Underflow(PoolArithmeticError):
    """Subtraction would produce negative result."""

    pass


class SafeDecimal:
    """Decimal with safe arithmetic operations.

    Wraps a Decimal and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results:
    - Division by zero raises DivisionByZero
    - Negative results from subtraction raise Underflow

    SafeDecimal is designed for calculations on reserves, deposits and
    pool-unit supplies, which must remain non-negative.

    Attributes:
        value: The underlying Decimal value (read-only)
    """

    __slots__ = ("_value",)
    _value: Decimal

    def __init__(self, value: Decimal | int | SafeDecimal) -> None:
        """Create a SafeDecimal from a Decimal, an int or another SafeDecimal.

        Raises:
            TypeError: If value is a float or another unsupported type
        """
        if isinstance(value, SafeDecimal):
            self._value = value._value
        elif isinstance(value, Decimal):
            self._value = value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = Decimal(value)
        else:
            raise TypeError(f"SafeDecimal requires Decimal or int, got {type(value).__name__}")

    @property
    def value(self) -> Decimal:
        """The underlying Decimal value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeDecimal('{self._value}')"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeDecimal | Decimal | int) -> SafeDecimal:
        other_val = _extract_value(other)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return SafeDecimal(self._value + other_val)

    def __radd__(self, other: Decimal | int) -> SafeDecimal:
        return self.__add__(other)

    def __sub__(self, other: SafeDecimal | Decimal | int) -> SafeDecimal:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeDecimal(result)

    def __rsub__(self, other: Decimal | int) -> SafeDecimal:
        """Subtract self from other (other - self).

        Raises:
            Underflow: If result would be negative
        """
        return SafeDecimal(_extract_value(other)) - self

    def __mul__(self, other: SafeDecimal | Decimal | int) -> SafeDecimal:
        other_val = _extract_value(other)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return SafeDecimal(self._value * other_val)

    def __rmul__(self, other: Decimal | int) -> SafeDecimal:
        return self.__mul__(other)

    def __truediv__(self, other: SafeDecimal | Decimal | int) -> SafeDecimal:
        """Divide self by other.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} / 0")
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return SafeDecimal(self._value / other_val)

    def __rtruediv__(self, other: Decimal | int) -> SafeDecimal:
        return SafeDecimal(_extract_value(other)) / self

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeDecimal):
            return self._value == other._value
        if isinstance(other, (Decimal, int)):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeDecimal | Decimal | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeDecimal | Decimal | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeDecimal | Decimal | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeDecimal | Decimal | int) -> bool:
        return self._value >= _extract_value(other)

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    # --- Named operations ---

    def to_amount(self, places: int = DIVISIBILITY_MAXIMUM) -> Decimal:
        """Unwrap, truncated toward zero to `places` fractional digits."""
        return quantize_amount(self._value, places)


def _extract_value(x: SafeDecimal | Decimal | int) -> Decimal:
    """Extract Decimal value from SafeDecimal, Decimal or int."""
    if isinstance(x, SafeDecimal):
        return x._value
    if isinstance(x, Decimal):
        return x
    return Decimal(x)


# Convenience alias for concise code
D = SafeDecimal
