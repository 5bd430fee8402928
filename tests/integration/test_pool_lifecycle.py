"""End-to-end pool lifecycle on the in-memory ledger."""

from decimal import Decimal

import pytest

from radiswap.errors import InsufficientBalance, UnsupportedAsset
from radiswap.pool import Radiswap, instantiate_radiswap
from tests.helpers import make_funded_ledger


class TestLifecycle:
    """Tests for several liquidity providers and traders sharing one pool."""

    def test_fees_accrue_to_liquidity_providers(self):
        funded = make_funded_ledger()
        ledger = funded.ledger
        address, units = instantiate_radiswap(
            ledger,
            funded.take(funded.resource_a, 1000),
            funded.take(funded.resource_b, 1000),
            "0.003",
        )
        pool: Radiswap = ledger.component(address)
        ledger.deposit(funded.account, units)

        # Round-trip trades leave the fee behind in both reserves
        for _ in range(5):
            with ledger.transaction():
                out_b = pool.swap(funded.take(funded.resource_a, 100))
                out_a = pool.swap(out_b)
                ledger.deposit(funded.account, out_a)

        reserve_a, reserve_b = pool.reserves
        assert reserve_a > 1000
        assert reserve_b == Decimal(1000)

        with ledger.transaction():
            all_units = funded.take(pool.pool_units_resource_address, 100)
            output_a, output_b = pool.remove_liquidity(all_units)
        assert output_a.amount == reserve_a
        assert output_b.amount == reserve_b
        assert pool.pool_unit_supply == 0

    def test_second_provider_shares_pro_rata(self):
        funded = make_funded_ledger()
        ledger = funded.ledger
        pool, first_units = Radiswap.instantiate(
            ledger,
            funded.take(funded.resource_a, 1000),
            funded.take(funded.resource_b, 4000),
            "0.003",
        )
        _, _, second_units = pool.add_liquidity(
            funded.take(funded.resource_a, 500), funded.take(funded.resource_b, 2000)
        )
        assert second_units.amount == Decimal(50)
        assert pool.pool_unit_supply == Decimal(150)

        pool.swap(funded.take(funded.resource_b, 600))

        first_a, first_b = pool.remove_liquidity(first_units)
        second_a, second_b = pool.remove_liquidity(second_units)
        # The first provider holds twice as many units
        assert abs(first_a.amount - 2 * second_a.amount) <= Decimal("1e-17")
        assert abs(first_b.amount - 2 * second_b.amount) <= Decimal("1e-17")
        assert pool.reserves == (Decimal(0), Decimal(0))

    def test_failed_transaction_leaves_pool_untouched(self):
        funded = make_funded_ledger(supply=2000)
        ledger = funded.ledger
        pool, _ = Radiswap.instantiate(
            ledger,
            funded.take(funded.resource_a, 1000),
            funded.take(funded.resource_b, 1000),
            "0.003",
        )
        before = pool.state()

        with pytest.raises(InsufficientBalance):
            with ledger.transaction():
                ledger.deposit(funded.account, pool.swap(funded.take(funded.resource_a, 500)))
                # Account holds only 500 of A now
                funded.take(funded.resource_a, 501)

        assert pool.state() == before
        assert funded.balance(funded.resource_a) == Decimal(1000)

    def test_rejected_deposit_restores_buckets_via_transaction(self):
        funded = make_funded_ledger()
        ledger = funded.ledger
        pool, _ = Radiswap.instantiate(
            ledger,
            funded.take(funded.resource_a, 1000),
            funded.take(funded.resource_b, 1000),
            "0.003",
        )
        stranger = ledger.new_fungible(100)
        stranger_address = stranger.resource_address
        ledger.deposit(funded.account, stranger)
        before = ledger.balances(funded.account)

        with pytest.raises(UnsupportedAsset):
            with ledger.transaction():
                pool.add_liquidity(
                    funded.take(funded.resource_a, 10), funded.take(stranger_address, 10)
                )

        assert ledger.balances(funded.account) == before
