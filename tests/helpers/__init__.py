"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Seed amounts and fee rates
- factories: Ledger and pool factory functions
"""

from tests.helpers.constants import (
    ACCOUNT_SUPPLY,
    FEE,
    INITIAL_POOL_UNITS,
    SEED_A,
    SEED_B,
)
from tests.helpers.factories import FundedLedger, make_funded_ledger, make_pool

__all__ = [
    # Constants
    "SEED_A",
    "SEED_B",
    "FEE",
    "ACCOUNT_SUPPLY",
    "INITIAL_POOL_UNITS",
    # Factories
    "FundedLedger",
    "make_funded_ledger",
    "make_pool",
]
