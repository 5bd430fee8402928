"""Tests for vaults."""

from decimal import Decimal

import pytest

from radiswap.errors import InsufficientBalance, ResourceMismatch, Unauthorized
from radiswap.ledger.resources import Bucket
from radiswap.ledger.vault import Vault

RESOURCE = "resource_" + "0" * 39 + "1"
OTHER = "resource_" + "0" * 39 + "2"


class TestVault:
    """Tests for deposit, withdrawal and badge proofs."""

    def test_put_and_take(self):
        vault = Vault(RESOURCE, 18)
        vault.put(Bucket(RESOURCE, Decimal(10), 18))
        bucket = vault.take(4)
        assert bucket.amount == Decimal(4)
        assert vault.amount == Decimal(6)

    def test_take_more_than_balance_raises(self):
        """Balances never go negative."""
        vault = Vault(RESOURCE, 18)
        vault.put(Bucket(RESOURCE, Decimal(1), 18))
        with pytest.raises(InsufficientBalance):
            vault.take(2)
        assert vault.amount == Decimal(1)

    def test_put_other_resource_raises(self):
        vault = Vault(RESOURCE, 18)
        with pytest.raises(ResourceMismatch):
            vault.put(Bucket(OTHER, Decimal(1), 18))

    def test_take_all(self):
        vault = Vault(RESOURCE, 18)
        vault.put(Bucket(RESOURCE, Decimal("2.5"), 18))
        assert vault.take_all().amount == Decimal("2.5")
        assert vault.is_empty()

    def test_authorize_yields_proof(self):
        vault = Vault(RESOURCE, 0)
        vault.put(Bucket(RESOURCE, Decimal(1), 0))
        with vault.authorize() as proof:
            assert proof.resource_address == RESOURCE
            assert proof.amount == Decimal(1)
        # Proof does not move the badge
        assert vault.amount == Decimal(1)

    def test_authorize_empty_vault_is_unauthorized(self):
        vault = Vault(RESOURCE, 0)
        with pytest.raises(Unauthorized):
            with vault.authorize():
                pass
