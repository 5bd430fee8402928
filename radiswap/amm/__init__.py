"""Pool pricing math."""

from radiswap.amm.base import AMM, LiquidityQuote, SwapQuote
from radiswap.amm.constant_product import ConstantProduct, constant_product, spot_price

__all__ = [
    # Base classes
    "AMM",
    "SwapQuote",
    "LiquidityQuote",
    # Constant product
    "ConstantProduct",
    "constant_product",
    "spot_price",
]
