"""Pytest configuration and fixtures."""

import pytest

from radiswap.ledger import Bucket
from radiswap.pool import Radiswap
from tests.helpers import FundedLedger, make_funded_ledger, make_pool


@pytest.fixture
def funded() -> FundedLedger:
    """A fresh ledger with one account holding two test resources."""
    return make_funded_ledger()


@pytest.fixture
def pool_and_units(funded: FundedLedger) -> tuple[Radiswap, Bucket]:
    """A 1000/1000 pool with a 0.3% fee and its 100 initial pool units."""
    return make_pool(funded)


@pytest.fixture
def pool(pool_and_units: tuple[Radiswap, Bucket]) -> Radiswap:
    """A 1000/1000 pool with a 0.3% fee."""
    return pool_and_units[0]


@pytest.fixture
def initial_units(pool_and_units: tuple[Radiswap, Bucket]) -> Bucket:
    """The 100 pool units issued when the pool was instantiated."""
    return pool_and_units[1]
