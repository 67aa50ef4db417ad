"""Type definitions for routing module."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TypeAlias

from dex_sdk.pools.types import CoinPair, CoinType, LiquidityPoolResource

# Ordered chain of pool edges from a source coin to a destination coin
Route: TypeAlias = tuple[CoinPair, ...]


class TradeType(str, Enum):
    """Which side of a trade is fixed."""

    EXACT_IN = "exact_in"
    EXACT_OUT = "exact_out"


@dataclass(frozen=True)
class Trade:
    """Result of simulating a route with a concrete amount.

    Attributes:
        coin_pair_list: Pool snapshots used, in route order
        amount_list: Amounts along the route, ``hops + 1`` long. The first
            entry is the input amount, the last the output amount.
        coin_type_list: Coin types visited, ``hops + 1`` long
        price_impact: Relative deviation from the no-impact outcome
    """

    coin_pair_list: tuple[LiquidityPoolResource, ...]
    amount_list: tuple[Decimal, ...]
    coin_type_list: tuple[CoinType, ...]
    price_impact: Decimal

    @property
    def amount_in(self) -> Decimal:
        return self.amount_list[0]

    @property
    def amount_out(self) -> Decimal:
        return self.amount_list[-1]

    @property
    def hops(self) -> int:
        return len(self.coin_pair_list)

    @property
    def route(self) -> Route:
        """The trade's route with reserve data stripped."""
        return tuple(pool.as_pair() for pool in self.coin_pair_list)


def routes_equal(a: Sequence[CoinPair], b: Sequence[CoinPair]) -> bool:
    """Two routes are equal when they have the same edges in the same order."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def get_coin_type_list(coin_in: CoinType, pairs: Sequence[CoinPair]) -> tuple[CoinType, ...]:
    """List the coin types visited when walking ``pairs`` from ``coin_in``."""
    coin_types = [coin_in]
    current = coin_in
    for pair in pairs:
        current = pair.other_coin(current)
        coin_types.append(current)
    return tuple(coin_types)


__all__ = ["Route", "Trade", "TradeType", "get_coin_type_list", "routes_equal"]
