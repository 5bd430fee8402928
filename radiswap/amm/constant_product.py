"""Constant product pricing and liquidity accounting.

Swaps use the constant product formula x * y = k with the fee taken from
the input: only (1 - fee) of the input is priced, but the whole input is
added to the reserve, so the fee compounds into the pool for unit holders.

Liquidity deposits are accepted in the current reserve ratio, and pool
units are minted in proportion to the accepted contribution.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_UP, Decimal

import structlog

from radiswap.amm.base import AMM, LiquidityQuote
from radiswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from radiswap.errors import InvalidInput
from radiswap.math.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT, quantize_amount
from radiswap.math.safe_decimal import D

logger = structlog.get_logger()

ONE = Decimal(1)


class ConstantProduct(AMM):
    """Constant product math for a two-asset pool.

    Swap formula:
        amount_out = reserve_out * (1 - fee) * amount_in
                     / (reserve_in + amount_in * (1 - fee))

    Every amount returned is truncated to the configured divisibility,
    so the pool never pays out more than the exact formula.
    """

    def __init__(self, config: PoolConfig = DEFAULT_POOL_CONFIG) -> None:
        self.config = config

    def _amount(self, value: D, places: int | None = None) -> Decimal:
        """Truncate to the configured divisibility, or to `places` if coarser."""
        limit = self.config.amount_divisibility
        return value.to_amount(limit if places is None else min(limit, places))

    def get_amount_out(
        self,
        amount_in: Decimal,
        reserve_in: Decimal,
        reserve_out: Decimal,
        fee: Decimal,
        places: int | None = None,
    ) -> Decimal:
        """Calculate output amount using the constant product formula.

        Formula: out = res_out * (1 - fee) * in / (res_in + in * (1 - fee))

        Args:
            amount_in: Input amount
            reserve_in: Reserve of input resource in pool
            reserve_out: Reserve of output resource in pool
            fee: Fee rate in [0, 1]
            places: Divisibility of the output resource

        Returns:
            Output amount; zero for a zero input or a pool that cannot pay
        """
        if amount_in <= 0 or reserve_out <= 0:
            return Decimal(0)

        amount_in_with_fee = D(amount_in) * (ONE - fee)
        numerator = D(reserve_out) * amount_in_with_fee
        denominator = D(reserve_in) + amount_in_with_fee

        # Only reachable with an empty input reserve and fee == 1
        if not denominator:
            return Decimal(0)

        return self._amount(numerator / denominator, places)

    def get_amount_in(
        self,
        amount_out: Decimal,
        reserve_in: Decimal,
        reserve_out: Decimal,
        fee: Decimal,
    ) -> Decimal | None:
        """Calculate required input for a desired output.

        Formula: in = res_in * out / ((res_out - out) * (1 - fee)), rounded up
        so that swapping the returned input yields at least `amount_out`.

        Args:
            amount_out: Desired output amount
            reserve_in: Reserve of input resource in pool
            reserve_out: Reserve of output resource in pool
            fee: Fee rate in [0, 1]

        Returns:
            Required input amount, or None if amount_out >= reserve_out or
            fee == 1 (no input can buy it)
        """
        if amount_out <= 0:
            return Decimal(0)
        if amount_out >= reserve_out or fee >= ONE:
            return None

        numerator = D(reserve_in) * amount_out
        denominator = (D(reserve_out) - amount_out) * (ONE - fee)
        exact = (numerator / denominator).value
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return exact.quantize(
                Decimal(1).scaleb(-self.config.amount_divisibility), rounding=ROUND_UP
            )

    def fee_amount(self, amount_in: Decimal, fee: Decimal) -> Decimal:
        """Portion of the input retained by the pool as fee."""
        return self._amount(D(amount_in) * fee)

    def accepted_liquidity(
        self,
        deposit_a: Decimal,
        deposit_b: Decimal,
        reserve_a: Decimal,
        reserve_b: Decimal,
        places_a: int | None = None,
        places_b: int | None = None,
    ) -> tuple[Decimal, Decimal]:
        """Largest deposit that preserves the current reserve ratio.

        With reserves (m, n) and deposits (dm, dn):
        - either reserve empty, or dm/dn == m/n: accept (dm, dn)
        - dm/dn > m/n: accept (dn * m / n, dn)
        - dm/dn < m/n: accept (dm, dm * n / m)

        Ratios are compared by cross-multiplication (m * dn vs dm * n), so a
        zero deposit on either side never divides by zero. The scaled side is
        truncated to its resource divisibility (`places_a` / `places_b`).

        Returns:
            Tuple of (accepted_a, accepted_b)
        """
        m, n = D(reserve_a), D(reserve_b)
        dm, dn = D(deposit_a), D(deposit_b)

        if not m or not n:
            return deposit_a, deposit_b

        lhs = m * dn
        rhs = dm * n
        if lhs == rhs:
            return deposit_a, deposit_b
        if lhs < rhs:
            return self._amount(dn * m / n, places_a), deposit_b
        return deposit_a, self._amount(dm * n / m, places_b)

    def pool_units_to_mint(
        self,
        accepted_a: Decimal,
        accepted_b: Decimal,
        reserve_a: Decimal,
        reserve_b: Decimal,
        total_supply: Decimal,
    ) -> Decimal:
        """Pool units owed for an accepted deposit.

        - No units outstanding: re-anchor at `initial_pool_units`; both
          accepted amounts must be positive so the pool is never seeded
          with an empty side.
        - Otherwise: accepted_a * total_supply / reserve_a, falling back to
          the B side when the A reserve is empty.

        Raises:
            InvalidInput: If re-anchoring with an empty side, or if units
                are outstanding against a pool with both reserves empty
        """
        if total_supply == 0:
            if accepted_a <= 0 or accepted_b <= 0:
                raise InvalidInput(
                    "First deposit into an empty pool must supply both resources"
                )
            return self.config.initial_pool_units

        if reserve_a > 0:
            return self._amount(D(accepted_a) * total_supply / reserve_a)
        if reserve_b > 0:
            logger.warning(
                "pool_units_minted_against_b_side",
                reserve_a=str(reserve_a),
                reserve_b=str(reserve_b),
            )
            return self._amount(D(accepted_b) * total_supply / reserve_b)

        raise InvalidInput("Pool units are outstanding but both reserves are empty")

    def quote_liquidity(
        self,
        deposit_a: Decimal,
        deposit_b: Decimal,
        reserve_a: Decimal,
        reserve_b: Decimal,
        total_supply: Decimal,
        places_a: int | None = None,
        places_b: int | None = None,
    ) -> LiquidityQuote:
        """Price a liquidity deposit without touching any state."""
        accepted_a, accepted_b = self.accepted_liquidity(
            deposit_a, deposit_b, reserve_a, reserve_b, places_a, places_b
        )
        pool_units = self.pool_units_to_mint(
            accepted_a, accepted_b, reserve_a, reserve_b, total_supply
        )
        return LiquidityQuote(
            accepted_a=accepted_a,
            accepted_b=accepted_b,
            leftover_a=(D(deposit_a) - accepted_a).value,
            leftover_b=(D(deposit_b) - accepted_b).value,
            pool_units=pool_units,
        )

    def redemption_amounts(
        self,
        pool_units: Decimal,
        total_supply: Decimal,
        reserve_a: Decimal,
        reserve_b: Decimal,
        places_a: int | None = None,
        places_b: int | None = None,
    ) -> tuple[Decimal, Decimal]:
        """Reserves owed for redeeming `pool_units`.

        share = pool_units / total_supply, applied to both reserves. Must be
        called with the supply as it was before the units are burned.

        Raises:
            DivisionByZero: If total_supply is zero
        """
        share = D(pool_units) / total_supply
        return (
            self._amount(share * reserve_a, places_a),
            self._amount(share * reserve_b, places_b),
        )


def spot_price(reserve_base: Decimal, reserve_quote: Decimal) -> Decimal | None:
    """Marginal price of the base resource in quote units, before fees."""
    if reserve_base <= 0:
        return None
    return quantize_amount((D(reserve_quote) / reserve_base).value)


# Singleton instance for convenience
constant_product = ConstantProduct()
