"""Route-finding facades over the exchange's pools.

RouteModule prices every pool of the exchange in one interleaved search,
which needs all reserves up front. RouteV2Module only reads the pair list,
enumerates routes over it and fetches reserves for a sampled subset, trading
completeness of one round for far fewer reads.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from dex_sdk.config import DEFAULT_ROUTER_CONFIG, NetworkOptions, RouterConfig
from dex_sdk.errors import ResourceNotFoundError
from dex_sdk.math.decimal_utils import d
from dex_sdk.models.resources import pool_from_resource
from dex_sdk.pools.types import CoinPair, CoinType, LiquidityPoolResource
from dex_sdk.resources.client import ResourceFetcher
from dex_sdk.resources.compose import compose_lp
from dex_sdk.routing.pathfinding import find_all_routes
from dex_sdk.routing.sampling import get_candidate_routes
from dex_sdk.routing.search import search_best_trades_exact_in, search_best_trades_exact_out
from dex_sdk.routing.simulation import best_trade_exact_in, best_trade_exact_out
from dex_sdk.routing.types import Route, Trade

if TYPE_CHECKING:
    from dex_sdk.swap import SwapModule

logger = structlog.get_logger()


class RouteModule:
    """Best trades over every pool, searched with known reserves.

    Args:
        swap: Source of the pool list and the swap fee
        config: Search limits
    """

    def __init__(self, swap: SwapModule, config: RouterConfig = DEFAULT_ROUTER_CONFIG) -> None:
        self.swap = swap
        self.config = config

    async def _pools_and_fee(self) -> tuple[list[LiquidityPoolResource], Decimal]:
        pools, fee = await asyncio.gather(
            self.swap.get_all_lp_coin_resources_with_admin(),
            self.swap.get_swap_fee(),
        )
        return pools, fee

    async def get_route_swap_exact_coin_for_coin(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        amount: Decimal | int | str,
    ) -> list[Trade]:
        """Best trades selling exactly ``amount`` of ``coin_from``."""
        pools, fee = await self._pools_and_fee()
        trades = search_best_trades_exact_in(
            pools,
            coin_from,
            coin_to,
            amount,
            fee=fee,
            max_hops=self.config.max_hops_v1,
            max_results=self.config.max_results_v1,
            max_visits=self.config.max_search_visits,
        )
        logger.info(
            "route_found", version=1, coin_from=coin_from, coin_to=coin_to, trades=len(trades)
        )
        return trades

    async def get_route_swap_coin_for_exact_coin(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        amount: Decimal | int | str,
    ) -> list[Trade]:
        """Best trades buying exactly ``amount`` of ``coin_to``."""
        pools, fee = await self._pools_and_fee()
        trades = search_best_trades_exact_out(
            pools,
            coin_from,
            coin_to,
            amount,
            fee=fee,
            max_hops=self.config.max_hops_v1,
            max_results=self.config.max_results_v1,
            max_visits=self.config.max_search_visits,
        )
        logger.info(
            "route_found", version=1, coin_from=coin_from, coin_to=coin_to, trades=len(trades)
        )
        return trades


class RouteV2Module:
    """Best trades over a sampled subset of enumerated routes.

    The fee is fixed at ``config.default_fee``. Pass the best and second best
    trades of one round into the next to keep their routes in the sample.

    Args:
        fetcher: Source of pool reserves
        options: Deployment the pools live in
        swap: Source of the pair list
        config: Route and sample limits
        rng: Random source for sampling
    """

    def __init__(
        self,
        fetcher: ResourceFetcher,
        options: NetworkOptions,
        swap: SwapModule,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
        rng: random.Random | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.options = options
        self.swap = swap
        self.config = config
        self.rng = rng

    async def get_all_routes(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        max_hops: int | None = None,
    ) -> list[Route]:
        """Every route between two coins over the registered pairs."""
        pairs = await self.swap.get_all_pairs()
        return find_all_routes(
            pairs,
            coin_from,
            coin_to,
            max_hops=self.config.max_hops_v2 if max_hops is None else max_hops,
            max_visits=self.config.max_search_visits,
        )

    def get_candidate_routes(
        self,
        all_routes: Sequence[Route],
        best_trade: Trade | None = None,
        second_best_trade: Trade | None = None,
        max_routes: int | None = None,
    ) -> list[Route]:
        return get_candidate_routes(
            all_routes,
            best_trade,
            second_best_trade,
            max_routes=self.config.max_routes if max_routes is None else max_routes,
            rng=self.rng,
        )

    async def get_all_candidate_route_resources(
        self, routes: Iterable[Route]
    ) -> dict[CoinPair, LiquidityPoolResource]:
        """Fetch the reserves of every distinct pool on ``routes`` at once.

        Raises:
            ResourceNotFoundError: If any pool is missing
        """
        pairs: list[CoinPair] = []
        seen: set[CoinPair] = set()
        for route in routes:
            for pair in route:
                if pair not in seen:
                    seen.add(pair)
                    pairs.append(pair)

        address = self.options.resource_account_address
        resource_types = [
            compose_lp(self.options.scripts, pair.coin_x, pair.coin_y) for pair in pairs
        ]
        resources = await asyncio.gather(
            *(self.fetcher.fetch_account_resource(address, rt) for rt in resource_types)
        )

        reserves: dict[CoinPair, LiquidityPoolResource] = {}
        for pair, resource_type, resource in zip(pairs, resource_types, resources):
            if resource is None:
                raise ResourceNotFoundError(resource_type, address)
            reserves[pair] = pool_from_resource(pair.coin_x, pair.coin_y, resource["data"])
        logger.debug("candidate_resources_fetched", pools=len(reserves))
        return reserves

    def best_trade_exact_in(
        self,
        routes: Iterable[Route],
        reserves: dict[CoinPair, LiquidityPoolResource],
        coin_in: CoinType,
        amount_in: Decimal | int | str,
    ) -> list[Trade]:
        return best_trade_exact_in(
            routes,
            reserves,
            coin_in,
            amount_in,
            fee=self.config.default_fee,
            max_results=self.config.max_routes,
        )

    def best_trade_exact_out(
        self,
        routes: Iterable[Route],
        reserves: dict[CoinPair, LiquidityPoolResource],
        coin_in: CoinType,
        coin_out: CoinType,
        amount_out: Decimal | int | str,
    ) -> list[Trade]:
        return best_trade_exact_out(
            routes,
            reserves,
            coin_in,
            coin_out,
            amount_out,
            fee=self.config.default_fee,
            max_results=self.config.max_routes,
        )

    async def _candidates(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        best_trade: Trade | None,
        second_best_trade: Trade | None,
    ) -> tuple[list[Route], dict[CoinPair, LiquidityPoolResource]]:
        all_routes = await self.get_all_routes(coin_from, coin_to)
        candidates = self.get_candidate_routes(all_routes, best_trade, second_best_trade)
        reserves = await self.get_all_candidate_route_resources(candidates)
        logger.debug(
            "candidate_routes_selected",
            coin_from=coin_from,
            coin_to=coin_to,
            routes=len(all_routes),
            candidates=len(candidates),
        )
        return candidates, reserves

    async def get_route_swap_exact_coin_for_coin(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        amount: Decimal | int | str,
        best_trade: Trade | None = None,
        second_best_trade: Trade | None = None,
    ) -> list[Trade]:
        """Best trades selling exactly ``amount`` of ``coin_from``."""
        candidates, reserves = await self._candidates(
            coin_from, coin_to, best_trade, second_best_trade
        )
        trades = self.best_trade_exact_in(candidates, reserves, coin_from, d(amount))
        logger.info(
            "route_found", version=2, coin_from=coin_from, coin_to=coin_to, trades=len(trades)
        )
        return trades

    async def get_route_swap_coin_for_exact_coin(
        self,
        coin_from: CoinType,
        coin_to: CoinType,
        amount: Decimal | int | str,
        best_trade: Trade | None = None,
        second_best_trade: Trade | None = None,
    ) -> list[Trade]:
        """Best trades buying exactly ``amount`` of ``coin_to``."""
        candidates, reserves = await self._candidates(
            coin_from, coin_to, best_trade, second_best_trade
        )
        trades = self.best_trade_exact_out(candidates, reserves, coin_from, coin_to, d(amount))
        logger.info(
            "route_found", version=2, coin_from=coin_from, coin_to=coin_to, trades=len(trades)
        )
        return trades


__all__ = ["RouteModule", "RouteV2Module"]
