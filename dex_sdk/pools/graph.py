"""Pool graph used for route discovery.

The graph is an undirected multigraph: nodes are coin types, edges are pools.
Edges are kept in an indexed list so that searches can mark consumed edges
in a set of indices instead of copying the edge list at every level.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Generic, TypeVar

from dex_sdk.pools.types import CoinPair, CoinType, LiquidityPoolResource

PairT = TypeVar("PairT", bound=CoinPair)


class PoolGraph(Generic[PairT]):
    """Graph of coin types connected by pools.

    Provides an adjacency index from each coin type to the positions of the
    edges touching it, in the order the edges were supplied. Edge order is
    preserved so that enumeration is deterministic for a given input list.
    """

    def __init__(self, edges: Iterable[PairT] = ()) -> None:
        self._edges: list[PairT] = []
        self._adjacency: dict[CoinType, list[int]] = {}
        for edge in edges:
            self.add_edge(edge)

    def add_edge(self, edge: PairT) -> int:
        """Append an edge and return its index."""
        index = len(self._edges)
        self._edges.append(edge)
        self._adjacency.setdefault(edge.coin_x, []).append(index)
        self._adjacency.setdefault(edge.coin_y, []).append(index)
        return index

    @property
    def edges(self) -> Sequence[PairT]:
        return self._edges

    def edge(self, index: int) -> PairT:
        return self._edges[index]

    def incident(self, coin_type: CoinType) -> list[int]:
        """Indices of every edge touching ``coin_type``."""
        return self._adjacency.get(coin_type, [])

    def neighbors(self, coin_type: CoinType) -> set[CoinType]:
        """Coin types directly tradable with ``coin_type``."""
        return {self._edges[i].other_coin(coin_type) for i in self.incident(coin_type)}

    def has_coin(self, coin_type: CoinType) -> bool:
        return coin_type in self._adjacency

    @property
    def coin_count(self) -> int:
        """Number of unique coin types in the graph."""
        return len(self._adjacency)

    def __len__(self) -> int:
        return len(self._edges)


def aggregate_reserves(pools: Iterable[LiquidityPoolResource]) -> dict[CoinType, Decimal]:
    """Sum the reserves held for each coin type across all pools.

    Args:
        pools: Pool snapshots

    Returns:
        Fresh mapping of coin type to its total reserve
    """
    totals: dict[CoinType, Decimal] = {}
    for pool in pools:
        totals[pool.coin_x] = totals.get(pool.coin_x, Decimal(0)) + pool.coin_x_reserve
        totals[pool.coin_y] = totals.get(pool.coin_y, Decimal(0)) + pool.coin_y_reserve
    return totals


__all__ = ["PoolGraph", "aggregate_reserves"]
