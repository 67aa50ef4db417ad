"""Client SDK for a constant-product AMM exchange."""

from dex_sdk.errors import (
    DexSdkError,
    InvalidArgumentError,
    InvalidResourceError,
    ResourceFetchError,
    ResourceNotFoundError,
)
from dex_sdk.pools import CoinPair, LiquidityPoolResource
from dex_sdk.routing import Trade, TradeType
from dex_sdk.sdk import SDK

__version__ = "0.1.0"
__all__ = [
    "SDK",
    "CoinPair",
    "DexSdkError",
    "InvalidArgumentError",
    "InvalidResourceError",
    "LiquidityPoolResource",
    "ResourceFetchError",
    "ResourceNotFoundError",
    "Trade",
    "TradeType",
    "__version__",
]
