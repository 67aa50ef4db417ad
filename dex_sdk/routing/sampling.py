"""Candidate route sampling.

Fetching reserves for every enumerated route is too expensive on large
graphs, so only a bounded subset is priced per round. Direct routes and the
routes of the previous round's winners are always kept; the remaining slots
are filled at random. Calling again with the winners of one round refines
the quote without fetching the whole graph.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from dex_sdk.constants import DEFAULT_ROUTE
from dex_sdk.routing.types import Route, Trade, routes_equal

logger = structlog.get_logger()


def get_candidate_routes(
    all_routes: Sequence[Route],
    best_trade: Trade | None = None,
    second_best_trade: Trade | None = None,
    max_routes: int = DEFAULT_ROUTE,
    rng: random.Random | None = None,
) -> list[Route]:
    """Select at most ``max_routes`` routes to price.

    Args:
        all_routes: Every enumerated route
        best_trade: Winner of a previous round, its route is kept
        second_best_trade: Runner-up of a previous round, its route is kept
        max_routes: Size bound of the result
        rng: Random source for the fill-up step (module ``random`` if None)

    Returns:
        Candidate routes, mandatory ones first, without duplicates
    """
    if len(all_routes) <= max_routes:
        return list(all_routes)

    kept_routes = [trade.route for trade in (best_trade, second_best_trade) if trade is not None]

    indices: list[int] = []
    for i, route in enumerate(all_routes):
        if len(route) == 1 or any(routes_equal(route, kept) for kept in kept_routes):
            indices.append(i)

    sampler = rng if rng is not None else random
    indices.extend(sampler.sample(range(len(all_routes)), max_routes))

    candidates: list[Route] = []
    seen: set[Route] = set()
    for i in indices:
        route = all_routes[i]
        if route in seen:
            continue
        seen.add(route)
        candidates.append(route)

    logger.debug(
        "candidate_routes_sampled",
        total=len(all_routes),
        mandatory=len(indices) - max_routes,
        selected=min(len(candidates), max_routes),
    )
    return candidates[:max_routes]


__all__ = ["get_candidate_routes"]
