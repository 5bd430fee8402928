"""Protocol constants for Radiswap pools.

Centralizes fixed-point parameters and well-known resource metadata.
"""

from decimal import Decimal

# Fractional digits of ledger amounts (fixed-point with 18 decimals)
DIVISIBILITY_MAXIMUM = 18

# Indivisible resources (badges)
DIVISIBILITY_NONE = 0

# Pool units issued at instantiation, and when re-anchoring an empty pool
INITIAL_POOL_UNITS = Decimal("100")

# Fee bounds (inclusive)
MIN_FEE = Decimal("0")
MAX_FEE = Decimal("1")

# Resource metadata
MINTER_BADGE_NAME = "LP token mint Auth"
POOL_UNIT_NAME = "Pool unit"
POOL_UNIT_SYMBOL = "UNIT"
