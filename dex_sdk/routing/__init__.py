"""Multi-hop trade routing.

This package finds, prices and ranks routes through the exchange's pools
and turns a chosen trade into a swap payload.

Module structure:
- router.py: RouteModule and RouteV2Module facades
- types.py: Route, Trade and TradeType
- pathfinding.py: route enumeration over the pair graph
- search.py: interleaved simulate-and-search over pools with reserves
- simulation.py: pricing of given routes
- ranking.py: trade ordering and bounded best-trade lists
- sampling.py: candidate route sampling
- payload.py: swap payloads for routed trades
"""

from dex_sdk.routing.pathfinding import find_all_routes
from dex_sdk.routing.payload import (
    build_swap_exact_in_payload,
    build_swap_exact_out_payload,
    build_swap_payload,
)
from dex_sdk.routing.ranking import sorted_insert, trade_comparator
from dex_sdk.routing.router import RouteModule, RouteV2Module
from dex_sdk.routing.sampling import get_candidate_routes
from dex_sdk.routing.search import search_best_trades_exact_in, search_best_trades_exact_out
from dex_sdk.routing.simulation import best_trade_exact_in, best_trade_exact_out
from dex_sdk.routing.types import Route, Trade, TradeType

__all__ = [
    "Route",
    "RouteModule",
    "RouteV2Module",
    "Trade",
    "TradeType",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "build_swap_exact_in_payload",
    "build_swap_exact_out_payload",
    "build_swap_payload",
    "find_all_routes",
    "get_candidate_routes",
    "search_best_trades_exact_in",
    "search_best_trades_exact_out",
    "sorted_insert",
    "trade_comparator",
]
