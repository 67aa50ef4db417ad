"""Interleaved simulate-and-search over pools with known reserves.

Used when every pool's reserves are already at hand: the depth-first search
prices each hop as it goes, so routes that run out of liquidity are cut at
the failing hop and complete routes go straight into the best-trade list
without the full route set ever being materialized.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

import structlog

from dex_sdk.amm.constant_product import constant_product
from dex_sdk.constants import (
    DEFAULT_MAX_HOPS_V1,
    DEFAULT_MAX_RESULTS_V1,
    DEFAULT_MAX_SEARCH_VISITS,
    DEFAULT_SWAP_FEE,
)
from dex_sdk.math.decimal_utils import d
from dex_sdk.pools.graph import PoolGraph
from dex_sdk.pools.types import CoinType, LiquidityPoolResource
from dex_sdk.routing.pathfinding import SearchBudget, as_graph, validate_search_args
from dex_sdk.routing.ranking import insert_trade
from dex_sdk.routing.simulation import build_trade
from dex_sdk.routing.types import Trade

logger = structlog.get_logger()


def search_best_trades_exact_in(
    pools: Iterable[LiquidityPoolResource] | PoolGraph[LiquidityPoolResource],
    coin_in: CoinType,
    coin_out: CoinType,
    amount_in: Decimal | int | str,
    fee: Decimal | int = DEFAULT_SWAP_FEE,
    max_hops: int = DEFAULT_MAX_HOPS_V1,
    max_results: int = DEFAULT_MAX_RESULTS_V1,
    max_visits: int = DEFAULT_MAX_SEARCH_VISITS,
) -> list[Trade]:
    """Find the best trades selling exactly ``amount_in`` of ``coin_in``.

    Args:
        pools: Pools with reserves
        coin_in: Coin being sold
        coin_out: Coin being bought
        amount_in: Exact amount sold
        fee: Swap fee in units out of 10,000
        max_hops: Maximum pools per route
        max_results: Size bound of the returned list
        max_visits: Edge visit budget for the search

    Returns:
        Best trades first. Empty list if no route can serve the amount.
    """
    if not validate_search_args(coin_in, coin_out, max_hops):
        return []

    graph: PoolGraph[LiquidityPoolResource] = as_graph(pools)
    budget = SearchBudget(max_visits)
    best_trades: list[Trade] = []
    used: set[int] = set()
    path_pools: list[LiquidityPoolResource] = []
    path_amounts: list[Decimal] = [d(amount_in)]

    def search(current: CoinType, amount: Decimal, hops_left: int) -> None:
        for index in graph.incident(current):
            if index in used:
                continue
            if not budget.spend():
                return
            pool = graph.edge(index)
            if not pool.is_tradable:
                continue
            amount_out = constant_product.swap_exact_in(pool, current, amount, fee)
            if amount_out is None:
                continue
            next_coin = pool.other_coin(current)
            if next_coin == coin_out:
                trade = build_trade(coin_in, [*path_pools, pool], [*path_amounts, amount_out], fee)
                insert_trade(best_trades, trade, max_results)
            elif hops_left > 1 and len(graph) - len(used) > 1:
                used.add(index)
                path_pools.append(pool)
                path_amounts.append(amount_out)
                search(next_coin, amount_out, hops_left - 1)
                path_amounts.pop()
                path_pools.pop()
                used.discard(index)

    search(coin_in, d(amount_in), max_hops)
    logger.debug(
        "search_exact_in_done",
        coin_in=coin_in,
        coin_out=coin_out,
        trades=len(best_trades),
        visits=budget.visits,
    )
    return best_trades


def search_best_trades_exact_out(
    pools: Iterable[LiquidityPoolResource] | PoolGraph[LiquidityPoolResource],
    coin_in: CoinType,
    coin_out: CoinType,
    amount_out: Decimal | int | str,
    fee: Decimal | int = DEFAULT_SWAP_FEE,
    max_hops: int = DEFAULT_MAX_HOPS_V1,
    max_results: int = DEFAULT_MAX_RESULTS_V1,
    max_visits: int = DEFAULT_MAX_SEARCH_VISITS,
) -> list[Trade]:
    """Find the best trades buying exactly ``amount_out`` of ``coin_out``.

    The search starts at ``coin_out`` and walks backward toward ``coin_in``,
    computing at each hop the input needed to produce the amount after it.

    Returns:
        Best trades first. Empty list if no route can serve the amount.
    """
    if not validate_search_args(coin_in, coin_out, max_hops):
        return []

    graph: PoolGraph[LiquidityPoolResource] = as_graph(pools)
    budget = SearchBudget(max_visits)
    best_trades: list[Trade] = []
    used: set[int] = set()
    # Both lists are kept in walk order (destination first) and reversed on completion
    path_pools: list[LiquidityPoolResource] = []
    path_amounts: list[Decimal] = [d(amount_out)]

    def search(current: CoinType, amount: Decimal, hops_left: int) -> None:
        for index in graph.incident(current):
            if index in used:
                continue
            if not budget.spend():
                return
            pool = graph.edge(index)
            if not pool.is_tradable:
                continue
            amount_in = constant_product.swap_exact_out(pool, current, amount, fee)
            if amount_in is None:
                continue
            prev_coin = pool.other_coin(current)
            if prev_coin == coin_in:
                trade_pools = [*path_pools, pool][::-1]
                trade_amounts = [*path_amounts, amount_in][::-1]
                trade = build_trade(coin_in, trade_pools, trade_amounts, fee)
                insert_trade(best_trades, trade, max_results)
            elif hops_left > 1 and len(graph) - len(used) > 1:
                used.add(index)
                path_pools.append(pool)
                path_amounts.append(amount_in)
                search(prev_coin, amount_in, hops_left - 1)
                path_amounts.pop()
                path_pools.pop()
                used.discard(index)

    search(coin_out, d(amount_out), max_hops)
    logger.debug(
        "search_exact_out_done",
        coin_in=coin_in,
        coin_out=coin_out,
        trades=len(best_trades),
        visits=budget.visits,
    )
    return best_trades


__all__ = ["search_best_trades_exact_in", "search_best_trades_exact_out"]
