"""Constant-product AMM math."""

from dex_sdk.amm.constant_product import (
    ConstantProductAMM,
    SlippageMode,
    constant_product,
    price_impact,
    quote,
    with_slippage,
)

__all__ = [
    "ConstantProductAMM",
    "SlippageMode",
    "constant_product",
    "price_impact",
    "quote",
    "with_slippage",
]
