"""Simulation of known routes against fetched pool reserves.

Each route is simulated hop by hop with the constant product math. A route
with any unusable hop is dropped as a whole; a partially simulated route never
reaches the best-trade list.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal

import structlog

from dex_sdk.amm.constant_product import constant_product, price_impact
from dex_sdk.constants import DEFAULT_ROUTE, DEFAULT_SWAP_FEE
from dex_sdk.errors import InvalidArgumentError
from dex_sdk.math.decimal_utils import d
from dex_sdk.pools.types import CoinPair, CoinType, LiquidityPoolResource
from dex_sdk.routing.ranking import insert_trade
from dex_sdk.routing.types import Route, Trade, get_coin_type_list

logger = structlog.get_logger()

PoolReserves = Mapping[CoinPair, LiquidityPoolResource]


def build_trade(
    coin_in: CoinType,
    pools: Sequence[LiquidityPoolResource],
    amounts: Sequence[Decimal],
    fee: Decimal | int,
) -> Trade:
    """Assemble a Trade from a fully simulated route."""
    return Trade(
        coin_pair_list=tuple(pools),
        amount_list=tuple(amounts),
        coin_type_list=get_coin_type_list(coin_in, pools),
        price_impact=price_impact(coin_in, pools, amounts, fee),
    )


def _lookup(reserves: PoolReserves, pair: CoinPair) -> LiquidityPoolResource:
    pool = reserves.get(pair)
    if pool is None:
        raise InvalidArgumentError(f"No reserves supplied for pair {pair.coin_x}, {pair.coin_y}")
    return pool


def simulate_exact_in(
    route: Route,
    reserves: PoolReserves,
    coin_in: CoinType,
    amount_in: Decimal,
    fee: Decimal | int = DEFAULT_SWAP_FEE,
) -> Trade | None:
    """Walk ``route`` forward selling ``amount_in`` of ``coin_in``.

    Returns:
        The resulting Trade, or None if any hop cannot be served
    """
    current_coin = coin_in
    current_amount = d(amount_in)
    pools: list[LiquidityPoolResource] = []
    amounts: list[Decimal] = [current_amount]

    for i, pair in enumerate(route):
        pool = _lookup(reserves, pair)
        amount_out = constant_product.swap_exact_in(pool, current_coin, current_amount, fee)
        if amount_out is None or not pool.is_tradable:
            logger.debug("route_dropped", hop=i, coin=current_coin, amount=str(current_amount))
            return None
        current_coin = pool.other_coin(current_coin)
        current_amount = amount_out
        pools.append(pool)
        amounts.append(amount_out)

    return build_trade(coin_in, pools, amounts, fee)


def simulate_exact_out(
    route: Route,
    reserves: PoolReserves,
    coin_in: CoinType,
    coin_out: CoinType,
    amount_out: Decimal,
    fee: Decimal | int = DEFAULT_SWAP_FEE,
) -> Trade | None:
    """Walk ``route`` backward buying ``amount_out`` of ``coin_out``.

    Returns:
        The resulting Trade, or None if any hop cannot be served
    """
    current_coin = coin_out
    current_amount = d(amount_out)
    pools: list[LiquidityPoolResource] = []
    amounts: list[Decimal] = [current_amount]

    for i in range(len(route) - 1, -1, -1):
        pool = _lookup(reserves, route[i])
        amount_in = constant_product.swap_exact_out(pool, current_coin, current_amount, fee)
        if amount_in is None or not pool.is_tradable:
            logger.debug("route_dropped", hop=i, coin=current_coin, amount=str(current_amount))
            return None
        current_coin = pool.other_coin(current_coin)
        current_amount = amount_in
        pools.append(pool)
        amounts.append(amount_in)

    if current_coin != coin_in:
        raise InvalidArgumentError(f"Route does not start at {coin_in}")

    pools.reverse()
    amounts.reverse()
    return build_trade(coin_in, pools, amounts, fee)


def best_trade_exact_in(
    routes: Iterable[Route],
    reserves: PoolReserves,
    coin_in: CoinType,
    amount_in: Decimal | int | str,
    fee: Decimal | int = DEFAULT_SWAP_FEE,
    max_results: int = DEFAULT_ROUTE,
) -> list[Trade]:
    """Simulate every route selling a fixed input and rank the results.

    Args:
        routes: Candidate routes starting at ``coin_in``
        reserves: Pool snapshots for every edge of ``routes``
        coin_in: Coin being sold
        amount_in: Exact amount sold
        fee: Swap fee in units out of 10,000
        max_results: Size bound of the returned list

    Returns:
        Best trades first, at most ``max_results`` of them
    """
    best_trades: list[Trade] = []
    for route in routes:
        trade = simulate_exact_in(route, reserves, coin_in, d(amount_in), fee)
        if trade is not None:
            insert_trade(best_trades, trade, max_results)
    return best_trades


def best_trade_exact_out(
    routes: Iterable[Route],
    reserves: PoolReserves,
    coin_in: CoinType,
    coin_out: CoinType,
    amount_out: Decimal | int | str,
    fee: Decimal | int = DEFAULT_SWAP_FEE,
    max_results: int = DEFAULT_ROUTE,
) -> list[Trade]:
    """Simulate every route buying a fixed output and rank the results.

    Args:
        routes: Candidate routes from ``coin_in`` to ``coin_out``
        reserves: Pool snapshots for every edge of ``routes``
        coin_in: Coin being sold
        coin_out: Coin being bought
        amount_out: Exact amount bought
        fee: Swap fee in units out of 10,000
        max_results: Size bound of the returned list

    Returns:
        Best trades first, at most ``max_results`` of them
    """
    best_trades: list[Trade] = []
    for route in routes:
        trade = simulate_exact_out(route, reserves, coin_in, coin_out, d(amount_out), fee)
        if trade is not None:
            insert_trade(best_trades, trade, max_results)
    return best_trades


__all__ = [
    "PoolReserves",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "build_trade",
    "simulate_exact_in",
    "simulate_exact_out",
]
