"""Pool graph package.

Provides the pool edge / snapshot types and the PoolGraph used by routing.
"""

from .graph import PoolGraph, aggregate_reserves
from .types import CoinPair, CoinType, LiquidityPoolResource

__all__ = [
    "CoinPair",
    "CoinType",
    "LiquidityPoolResource",
    "PoolGraph",
    "aggregate_reserves",
]
