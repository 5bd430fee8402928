"""Radiswap: a two-asset constant product liquidity pool.

The pool owns two reserve vaults, an immutable fee rate, and a private
vault holding the badge that authorizes minting and burning its pool
units. All pricing is delegated to ConstantProduct; this module validates
inputs, reads one consistent snapshot of reserves and supply, and only
then moves buckets.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from radiswap.amm.base import LiquidityQuote, SwapQuote
from radiswap.amm.constant_product import ConstantProduct, spot_price
from radiswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from radiswap.constants import (
    DIVISIBILITY_MAXIMUM,
    DIVISIBILITY_NONE,
    MAX_FEE,
    MIN_FEE,
    MINTER_BADGE_NAME,
    POOL_UNIT_NAME,
    POOL_UNIT_SYMBOL,
)
from radiswap.errors import InvalidInput, UnsupportedAsset, WrongToken
from radiswap.ledger.resources import Bucket
from radiswap.ledger.runtime import Ledger
from radiswap.ledger.vault import Vault
from radiswap.math.decimal_utils import to_decimal
from radiswap.models.pool import PoolState

logger = structlog.get_logger()


class Radiswap:
    """Two-asset constant product pool with fungible pool units.

    Create with `Radiswap.instantiate`, which returns the pool and the
    initial pool units; register it on the ledger with `Ledger.globalize`.
    """

    def __init__(
        self,
        ledger: Ledger,
        vault_a: Vault,
        vault_b: Vault,
        fee: Decimal,
        pool_units_resource_address: str,
        pool_units_minter_badge: Vault,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        self._ledger = ledger
        self._vault_a = vault_a
        self._vault_b = vault_b
        self._fee = fee
        self._pool_units_resource_address = pool_units_resource_address
        self._pool_units_minter_badge = pool_units_minter_badge
        self._config = config
        self._amm = ConstantProduct(config)

    @classmethod
    def instantiate(
        cls,
        ledger: Ledger,
        bucket_a: Bucket,
        bucket_b: Bucket,
        fee: Decimal | int | str,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> tuple[Radiswap, Bucket]:
        """Create a pool seeded with two buckets.

        Args:
            ledger: Ledger issuing the badge and pool-unit resources
            bucket_a: Seed deposit of the first resource
            bucket_b: Seed deposit of the second resource
            fee: Fee rate in [0, 1] charged on every swap input
            config: Pool accounting configuration

        Returns:
            Tuple of (pool, bucket holding the initial pool units)

        Raises:
            InvalidInput: If either bucket is empty, both hold the same
                resource, or fee is outside [0, 1]
            UnknownResource: If a bucket holds a resource this ledger did not issue
        """
        if bucket_a.is_empty() or bucket_b.is_empty():
            raise InvalidInput("You must pass an initial supply of tokens to the pool")
        if bucket_a.resource_address == bucket_b.resource_address:
            raise InvalidInput("A pool needs two different resources")
        try:
            fee_rate = to_decimal(fee)
        except (TypeError, ValueError) as err:
            raise InvalidInput(f"Fee must be a decimal number: {err}") from err
        if not MIN_FEE <= fee_rate <= MAX_FEE:
            raise InvalidInput("Fee must be between 0 and 1")
        # Seed resources must be known before anything is issued
        ledger.resource_manager(bucket_a.resource_address)
        ledger.resource_manager(bucket_b.resource_address)

        minter_badge = ledger.new_fungible(
            1,
            divisibility=DIVISIBILITY_NONE,
            metadata={"name": MINTER_BADGE_NAME},
        )
        pool_units = ledger.new_fungible(
            config.initial_pool_units,
            divisibility=DIVISIBILITY_MAXIMUM,
            metadata={"name": POOL_UNIT_NAME, "symbol": POOL_UNIT_SYMBOL},
            mint_badge=minter_badge.resource_address,
            burn_badge=minter_badge.resource_address,
        )

        pool = cls(
            ledger=ledger,
            vault_a=ledger.vault_with_bucket(bucket_a),
            vault_b=ledger.vault_with_bucket(bucket_b),
            fee=fee_rate,
            pool_units_resource_address=pool_units.resource_address,
            pool_units_minter_badge=ledger.vault_with_bucket(minter_badge),
            config=config,
        )
        logger.info(
            "pool_instantiated",
            resource_a=pool.resource_a,
            resource_b=pool.resource_b,
            reserve_a=str(pool._vault_a.amount),
            reserve_b=str(pool._vault_b.amount),
            fee=str(fee_rate),
            pool_units=pool_units.resource_address,
        )
        return pool, pool_units

    # --- Views ---

    @property
    def fee(self) -> Decimal:
        return self._fee

    @property
    def resource_a(self) -> str:
        return self._vault_a.resource_address

    @property
    def resource_b(self) -> str:
        return self._vault_b.resource_address

    @property
    def pool_units_resource_address(self) -> str:
        return self._pool_units_resource_address

    @property
    def reserves(self) -> tuple[Decimal, Decimal]:
        """Current (reserve_a, reserve_b)."""
        return self._vault_a.amount, self._vault_b.amount

    @property
    def pool_unit_supply(self) -> Decimal:
        """Total outstanding pool units."""
        return self._ledger.resource_manager(self._pool_units_resource_address).total_supply

    def _vaults_for(self, resource_address: str) -> tuple[Vault, Vault]:
        """Get vaults ordered as (vault_in, vault_out)."""
        if resource_address == self._vault_a.resource_address:
            return self._vault_a, self._vault_b
        elif resource_address == self._vault_b.resource_address:
            return self._vault_b, self._vault_a
        else:
            raise UnsupportedAsset(f"Resource {resource_address} not in pool")

    def _require_reserves(self, vault_in: Vault, vault_out: Vault) -> None:
        if vault_in.is_empty() or vault_out.is_empty():
            raise InvalidInput("Pool has an empty reserve and cannot price swaps")

    def spot_price(self, resource_address: str) -> Decimal | None:
        """Price of `resource_address` in units of the other resource, before fees."""
        vault_base, vault_quote = self._vaults_for(resource_address)
        return spot_price(vault_base.amount, vault_quote.amount)

    def quote_swap(self, resource_address: str, amount_in: Decimal | int | str) -> SwapQuote:
        """Price a swap without executing it.

        Raises:
            UnsupportedAsset: If the resource is not in the pool
            InvalidInput: If the amount is negative
        """
        vault_in, vault_out = self._vaults_for(resource_address)
        amount = _quote_amount(amount_in)
        amount_out = self._amm.get_amount_out(
            amount, vault_in.amount, vault_out.amount, self._fee, vault_out.divisibility
        )
        quote = SwapQuote(
            amount_in=amount,
            amount_out=amount_out,
            resource_in=vault_in.resource_address,
            resource_out=vault_out.resource_address,
            fee_amount=self._amm.fee_amount(amount, self._fee),
        )
        logger.debug("swap_quoted", amount_in=str(amount), amount_out=str(amount_out))
        return quote

    def quote_swap_exact_output(
        self, resource_out: str, amount_out: Decimal | int | str
    ) -> Decimal | None:
        """Input of the other resource needed to receive `amount_out`, or None if unreachable."""
        vault_out, vault_in = self._vaults_for(resource_out)
        return self._amm.get_amount_in(
            _quote_amount(amount_out), vault_in.amount, vault_out.amount, self._fee
        )

    def quote_add_liquidity(
        self, amount_a: Decimal | int | str, amount_b: Decimal | int | str
    ) -> LiquidityQuote:
        """Price a deposit of (amount_a of resource A, amount_b of resource B)."""
        reserve_a, reserve_b = self.reserves
        return self._amm.quote_liquidity(
            _quote_amount(amount_a),
            _quote_amount(amount_b),
            reserve_a,
            reserve_b,
            self.pool_unit_supply,
            self._vault_a.divisibility,
            self._vault_b.divisibility,
        )

    def state(self) -> PoolState:
        """Snapshot of the pool for reporting."""
        reserve_a, reserve_b = self.reserves
        return PoolState(
            resource_a=self.resource_a,
            resource_b=self.resource_b,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            fee=self._fee,
            pool_units_resource_address=self._pool_units_resource_address,
            pool_unit_supply=self.pool_unit_supply,
        )

    # --- Operations ---

    def swap(self, input_tokens: Bucket) -> Bucket:
        """Swap a bucket of one pool resource for the other.

        The whole input is deposited, while only the fee-discounted amount
        is priced, so the fee stays in the pool as extra reserve.

        Args:
            input_tokens: Bucket of either pool resource

        Returns:
            Bucket of the other resource

        Raises:
            UnsupportedAsset: If the bucket's resource is not in the pool
            InvalidInput: If the bucket is empty and zero swaps are rejected
                or either reserve is empty
        """
        vault_in, vault_out = self._vaults_for(input_tokens.resource_address)
        if input_tokens.is_empty() and self._config.reject_zero_swaps:
            raise InvalidInput("Swap input must be non-zero")
        self._require_reserves(vault_in, vault_out)

        # Priced from pre-swap reserves, before any vault moves
        amount_in = input_tokens.amount
        reserve_in, reserve_out = vault_in.amount, vault_out.amount
        amount_out = self._amm.get_amount_out(
            amount_in, reserve_in, reserve_out, self._fee, vault_out.divisibility
        )

        vault_in.put(input_tokens)
        output = vault_out.take(amount_out)

        logger.info(
            "swap_executed",
            resource_in=vault_in.resource_address,
            resource_out=vault_out.resource_address,
            amount_in=str(amount_in),
            amount_out=str(amount_out),
            reserve_in=str(vault_in.amount),
            reserve_out=str(vault_out.amount),
        )
        return output

    def add_liquidity(self, bucket_a: Bucket, bucket_b: Bucket) -> tuple[Bucket, Bucket, Bucket]:
        """Deposit both resources in the current reserve ratio.

        Buckets may be passed in either order. The largest deposit that
        keeps the reserve ratio is accepted; the rest is handed back.

        Returns:
            Tuple of (leftover A, leftover B, minted pool units)

        Raises:
            UnsupportedAsset: If the buckets are not the pool's two resources
            InvalidInput: If the pool holds no units and a side is empty
        """
        if bucket_a.resource_address == self._vault_a.resource_address:
            deposit_a, deposit_b = bucket_a, bucket_b
        elif bucket_a.resource_address == self._vault_b.resource_address:
            deposit_a, deposit_b = bucket_b, bucket_a
        else:
            raise UnsupportedAsset(
                "Invalid input token, one of the tokens does not belong to the pool"
            )
        if deposit_b.resource_address != self._vault_b.resource_address:
            raise UnsupportedAsset(
                "Invalid input token, one of the tokens does not belong to the pool"
            )

        reserve_a, reserve_b = self.reserves
        supply = self.pool_unit_supply
        quote = self._amm.quote_liquidity(
            deposit_a.amount,
            deposit_b.amount,
            reserve_a,
            reserve_b,
            supply,
            self._vault_a.divisibility,
            self._vault_b.divisibility,
        )

        self._vault_a.put(deposit_a.take(quote.accepted_a))
        self._vault_b.put(deposit_b.take(quote.accepted_b))

        manager = self._ledger.resource_manager(self._pool_units_resource_address)
        with self._pool_units_minter_badge.authorize() as proof:
            pool_units = manager.mint(quote.pool_units, proof)

        logger.info(
            "liquidity_added",
            accepted_a=str(quote.accepted_a),
            accepted_b=str(quote.accepted_b),
            leftover_a=str(deposit_a.amount),
            leftover_b=str(deposit_b.amount),
            pool_units=str(quote.pool_units),
            total_supply=str(manager.total_supply),
        )
        return deposit_a, deposit_b, pool_units

    def remove_liquidity(self, pool_units: Bucket) -> tuple[Bucket, Bucket]:
        """Redeem pool units for a proportional share of both reserves.

        Returns:
            Tuple of (bucket of A, bucket of B)

        Raises:
            WrongToken: If the bucket is not this pool's units
            InvalidInput: If the bucket is empty and zero redemptions are rejected
        """
        if pool_units.resource_address != self._pool_units_resource_address:
            raise WrongToken("Wrong token type passed in")
        if pool_units.is_empty() and self._config.reject_zero_redemptions:
            raise InvalidInput("Redeemed pool units must be non-zero")

        # Share uses the supply before the burn
        units = pool_units.amount
        reserve_a, reserve_b = self.reserves
        supply = self.pool_unit_supply
        amount_a, amount_b = self._amm.redemption_amounts(
            units,
            supply,
            reserve_a,
            reserve_b,
            self._vault_a.divisibility,
            self._vault_b.divisibility,
        )

        manager = self._ledger.resource_manager(self._pool_units_resource_address)
        with self._pool_units_minter_badge.authorize() as proof:
            manager.burn(pool_units, proof)

        output_a = self._vault_a.take(amount_a)
        output_b = self._vault_b.take(amount_b)

        logger.info(
            "liquidity_removed",
            pool_units=str(units),
            amount_a=str(amount_a),
            amount_b=str(amount_b),
            total_supply=str(manager.total_supply),
        )
        return output_a, output_b

    def __repr__(self) -> str:
        reserve_a, reserve_b = self.reserves
        return f"Radiswap(reserve_a={reserve_a}, reserve_b={reserve_b}, fee={self._fee})"


def instantiate_radiswap(
    ledger: Ledger,
    bucket_a: Bucket,
    bucket_b: Bucket,
    fee: Decimal | int | str,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
) -> tuple[str, Bucket]:
    """Instantiate a pool and register it on the ledger.

    Returns:
        Tuple of (component address, bucket holding the initial pool units)
    """
    pool, pool_units = Radiswap.instantiate(ledger, bucket_a, bucket_b, fee, config)
    return ledger.globalize(pool), pool_units


def _quote_amount(value: Decimal | int | str) -> Decimal:
    amount = to_decimal(value)
    if amount < 0:
        raise InvalidInput(f"Quoted amount cannot be negative: {amount}")
    return amount
