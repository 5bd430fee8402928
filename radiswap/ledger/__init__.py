"""In-memory ledger runtime: resources, vaults, accounts and transactions."""

from radiswap.ledger.resources import Bucket, Proof, ResourceManager, validate_amount
from radiswap.ledger.runtime import Ledger
from radiswap.ledger.vault import Vault

__all__ = [
    "Bucket",
    "Proof",
    "ResourceManager",
    "Vault",
    "Ledger",
    "validate_amount",
]
