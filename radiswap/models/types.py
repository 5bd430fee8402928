"""Shared type definitions for Radiswap models.

Amounts travel as decimal strings so no precision is lost in JSON.
"""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from radiswap.constants import DIVISIBILITY_MAXIMUM
from radiswap.math.decimal_utils import fits_divisibility


def validate_amount(value: Any) -> Decimal:
    """Validate that a value is a non-negative decimal amount.

    Args:
        value: Value to validate (string, int or Decimal)

    Returns:
        The amount as Decimal

    Raises:
        ValueError: If value is a float, not a finite decimal, negative, or
            has more than 18 fractional digits
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"Amount must be a decimal string, got {type(value).__name__}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(value)
        except InvalidOperation as err:
            raise ValueError(f"Amount must be a decimal string: '{value}'") from err
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if not fits_divisibility(amount, DIVISIBILITY_MAXIMUM):
        raise ValueError(f"Amount has more than {DIVISIBILITY_MAXIMUM} decimals: {value}")
    return amount


def validate_fee(value: Any) -> Decimal:
    """Validate a fee rate in [0, 1]."""
    fee = validate_amount(value)
    if fee > 1:
        raise ValueError(f"Fee must be between 0 and 1: {value}")
    return fee


# Non-negative amount as decimal string (validated)
Amount = Annotated[
    Decimal,
    BeforeValidator(validate_amount),
    PlainSerializer(lambda d: str(d), return_type=str),
    Field(description="Non-negative amount as decimal string"),
]

# Fee rate in [0, 1] as decimal string (validated)
FeeRate = Annotated[
    Decimal,
    BeforeValidator(validate_fee),
    PlainSerializer(lambda d: str(d), return_type=str),
    Field(description="Fee rate in [0, 1] as decimal string"),
]

# Ledger address (resource_, component_ or account_ followed by 40 hex chars)
ResourceAddress = Annotated[str, Field(pattern=r"^resource_[a-f0-9]{40}$")]
ComponentAddress = Annotated[str, Field(pattern=r"^component_[a-f0-9]{40}$")]
AccountId = Annotated[str, Field(pattern=r"^account_[a-f0-9]{40}$")]
