"""Configuration for Radiswap pools and the HTTP service."""

import os
from dataclasses import dataclass
from decimal import Decimal

from radiswap.constants import DIVISIBILITY_MAXIMUM, INITIAL_POOL_UNITS


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for pool accounting.

    Attributes:
        initial_pool_units: Units issued at instantiation and when an empty
            pool is re-anchored (default: 100)
        amount_divisibility: Fractional digits kept on every amount leaving
            the math layer (default: 18)
        reject_zero_swaps: If True, a swap with an empty input bucket raises
            InvalidInput. If False, it returns an empty output bucket.
        reject_zero_redemptions: If True, redeeming an empty pool-unit bucket
            raises InvalidInput. If False, it returns two empty buckets.
    """

    initial_pool_units: Decimal = INITIAL_POOL_UNITS
    amount_divisibility: int = DIVISIBILITY_MAXIMUM

    # Behavior flags
    reject_zero_swaps: bool = True
    reject_zero_redemptions: bool = True


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()


@dataclass(frozen=True)
class ServiceSettings:
    """Settings for the HTTP service, read from the environment."""

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        """Build settings from RADISWAP_HOST, RADISWAP_PORT and RADISWAP_DEBUG."""
        return cls(
            host=os.environ.get("RADISWAP_HOST", "0.0.0.0"),
            port=int(os.environ.get("RADISWAP_PORT", "8000")),
            debug=os.environ.get("RADISWAP_DEBUG", "false").lower() in ("true", "1", "yes"),
        )
