"""Route enumeration over the pool graph.

Routes are found by depth-first search from the source coin. Each edge is used
at most once per route; a route may come back to a coin it already visited as
long as it does so through a different pool. A branch ends as soon as it
reaches the destination.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from dex_sdk.constants import DEFAULT_MAX_HOPS_V2, DEFAULT_MAX_SEARCH_VISITS
from dex_sdk.errors import InvalidArgumentError
from dex_sdk.pools.graph import PoolGraph
from dex_sdk.pools.types import CoinPair, CoinType
from dex_sdk.routing.types import Route

logger = structlog.get_logger()


class SearchBudget:
    """Counts edge visits of one search and stops it past a limit.

    Dense graphs with a large hop limit blow up exponentially; the budget
    turns that into a truncated, logged result instead of a hang.
    """

    __slots__ = ("limit", "visits", "exhausted")

    def __init__(self, limit: int = DEFAULT_MAX_SEARCH_VISITS) -> None:
        self.limit = limit
        self.visits = 0
        self.exhausted = False

    def spend(self) -> bool:
        """Record one visit. Returns False once the limit is reached."""
        if self.visits >= self.limit:
            if not self.exhausted:
                self.exhausted = True
                logger.warning("search_budget_exhausted", visits=self.visits, limit=self.limit)
            return False
        self.visits += 1
        return True


def validate_search_args(coin_in: CoinType, coin_out: CoinType, max_hops: int) -> bool:
    """Check search arguments.

    Returns:
        False when the search trivially has no result (same coin on both ends)

    Raises:
        InvalidArgumentError: If ``max_hops`` is below one
    """
    if max_hops < 1:
        raise InvalidArgumentError(f"Invalid max hops ({max_hops}) value")
    return coin_in != coin_out


def as_graph(pairs: Iterable[CoinPair] | PoolGraph) -> PoolGraph:
    if isinstance(pairs, PoolGraph):
        return pairs
    return PoolGraph(pairs)


def find_all_routes(
    pairs: Iterable[CoinPair] | PoolGraph,
    coin_in: CoinType,
    coin_out: CoinType,
    max_hops: int = DEFAULT_MAX_HOPS_V2,
    max_visits: int = DEFAULT_MAX_SEARCH_VISITS,
) -> list[Route]:
    """Find every route from ``coin_in`` to ``coin_out`` of at most ``max_hops`` pools.

    Only the structure of the graph is used; reserves are ignored.

    Args:
        pairs: Pool edges, or an already built PoolGraph
        coin_in: Source coin type
        coin_out: Destination coin type
        max_hops: Maximum number of pools in a route
        max_visits: Edge visit budget for the search

    Returns:
        Routes in discovery order. Empty list if none exists.
    """
    if not validate_search_args(coin_in, coin_out, max_hops):
        return []

    graph = as_graph(pairs)
    budget = SearchBudget(max_visits)
    routes: list[Route] = []
    used: set[int] = set()
    current_route: list[CoinPair] = []

    def search(current: CoinType, hops_left: int) -> None:
        for index in graph.incident(current):
            if index in used:
                continue
            if not budget.spend():
                return
            pair = graph.edge(index)
            next_coin = pair.other_coin(current)
            if next_coin == coin_out:
                routes.append((*current_route, pair.as_pair()))
            elif hops_left > 1 and len(graph) - len(used) > 1:
                used.add(index)
                current_route.append(pair.as_pair())
                search(next_coin, hops_left - 1)
                current_route.pop()
                used.discard(index)

    search(coin_in, max_hops)
    logger.debug(
        "routes_enumerated",
        coin_in=coin_in,
        coin_out=coin_out,
        max_hops=max_hops,
        count=len(routes),
        visits=budget.visits,
    )
    return routes


__all__ = ["SearchBudget", "as_graph", "find_all_routes", "validate_search_args"]
