"""Radiswap - two-asset constant product liquidity pools."""

from radiswap.ledger import Bucket, Ledger
from radiswap.pool import Radiswap, instantiate_radiswap

__version__ = "0.1.0"
__all__ = ["Radiswap", "instantiate_radiswap", "Ledger", "Bucket", "__version__"]
