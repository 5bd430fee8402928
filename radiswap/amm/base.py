"""Base classes for pool pricing math."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SwapQuote:
    """Result of pricing a swap against a pair of reserves."""

    amount_in: Decimal
    amount_out: Decimal
    resource_in: str
    resource_out: str
    # Portion of amount_in retained by the pool as fee
    fee_amount: Decimal


@dataclass(frozen=True)
class LiquidityQuote:
    """Result of pricing a liquidity deposit against a pair of reserves."""

    accepted_a: Decimal
    accepted_b: Decimal
    leftover_a: Decimal
    leftover_b: Decimal
    pool_units: Decimal


class AMM(ABC):
    """Abstract base class for two-asset pricing curves.

    Implementations are stateless: every method takes the reserves it
    prices against, so callers control which snapshot is used.

    Implementations may extend the base method signatures with additional
    optional parameters. For example, ConstantProduct adds a `places`
    parameter to get_amount_out() to truncate the output to the
    divisibility of the output resource.
    """

    @abstractmethod
    def get_amount_out(
        self,
        amount_in: Decimal,
        reserve_in: Decimal,
        reserve_out: Decimal,
        fee: Decimal,
    ) -> Decimal:
        """Calculate output amount for a given input.

        Args:
            amount_in: Input amount
            reserve_in: Reserve of input resource in pool
            reserve_out: Reserve of output resource in pool
            fee: Fee rate in [0, 1] charged on the input

        Returns:
            Output amount
        """
        ...

    @abstractmethod
    def get_amount_in(
        self,
        amount_out: Decimal,
        reserve_in: Decimal,
        reserve_out: Decimal,
        fee: Decimal,
    ) -> Decimal | None:
        """Calculate required input for a desired output.

        Args:
            amount_out: Desired output amount
            reserve_in: Reserve of input resource in pool
            reserve_out: Reserve of output resource in pool
            fee: Fee rate in [0, 1] charged on the input

        Returns:
            Required input amount, or None if the output is unreachable
        """
        ...
