"""Tests for candidate route sampling."""

import random

from dex_sdk.pools import CoinPair
from dex_sdk.routing.sampling import get_candidate_routes
from tests.helpers import COIN_A, COIN_B, make_pool, make_trade

PIVOTS = [f"0x{i}::coin::P{i}" for i in range(1, 8)]

DIRECT = (CoinPair(COIN_A, COIN_B),)
TWO_HOP = [(CoinPair(COIN_A, pivot), CoinPair(pivot, COIN_B)) for pivot in PIVOTS]
ALL_ROUTES = [*TWO_HOP[:3], DIRECT, *TWO_HOP[3:]]


def trade_for(route):
    """Trade over ``route`` starting at COIN_A with dummy amounts."""
    pools = [make_pool(pair.coin_x, pair.coin_y, 1_000, 1_000) for pair in route]
    return make_trade(COIN_A, pools, [100] * (len(route) + 1))


class TestGetCandidateRoutes:
    """Tests for get_candidate_routes."""

    def test_small_set_returned_unchanged(self):
        routes = ALL_ROUTES[:4]
        assert get_candidate_routes(routes, max_routes=5) == routes

    def test_bounded_and_unique(self):
        candidates = get_candidate_routes(ALL_ROUTES, max_routes=5, rng=random.Random(1))
        assert len(candidates) == 5
        assert len(set(candidates)) == 5
        assert all(route in ALL_ROUTES for route in candidates)

    def test_single_hop_routes_always_kept_first(self):
        for seed in range(20):
            candidates = get_candidate_routes(ALL_ROUTES, max_routes=3, rng=random.Random(seed))
            assert candidates[0] == DIRECT

    def test_previous_best_routes_kept(self):
        best = trade_for(TWO_HOP[5])
        second = trade_for(TWO_HOP[6])
        for seed in range(20):
            candidates = get_candidate_routes(
                ALL_ROUTES, best, second, max_routes=4, rng=random.Random(seed)
            )
            assert candidates[:3] == [DIRECT, TWO_HOP[5], TWO_HOP[6]]
            assert len(candidates) == 4

    def test_deterministic_with_seed(self):
        first = get_candidate_routes(ALL_ROUTES, max_routes=5, rng=random.Random(42))
        second = get_candidate_routes(ALL_ROUTES, max_routes=5, rng=random.Random(42))
        assert first == second

    def test_mandatory_routes_truncated(self):
        directs = [(CoinPair(COIN_A, COIN_B),)] * 2 + [(CoinPair(COIN_B, COIN_A),)] * 4
        candidates = get_candidate_routes(directs, max_routes=5, rng=random.Random(0))
        # All six are the same route
        assert len(candidates) == 1
