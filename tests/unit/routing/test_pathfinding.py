"""Tests for route enumeration."""

import pytest

from dex_sdk.errors import InvalidArgumentError
from dex_sdk.pools import CoinPair, PoolGraph
from dex_sdk.routing.pathfinding import SearchBudget, find_all_routes
from tests.helpers import COIN_A, COIN_B, COIN_C, COIN_D, COIN_E, make_pool

CHAIN = [CoinPair(COIN_A, COIN_B), CoinPair(COIN_B, COIN_C), CoinPair(COIN_C, COIN_D)]


class TestFindAllRoutes:
    """Tests for find_all_routes."""

    def test_direct_route(self):
        routes = find_all_routes([CoinPair(COIN_A, COIN_B)], COIN_A, COIN_B)
        assert routes == [(CoinPair(COIN_A, COIN_B),)]

    def test_direct_route_reverse_storage_order(self):
        routes = find_all_routes([CoinPair(COIN_B, COIN_A)], COIN_A, COIN_B)
        assert len(routes) == 1
        assert routes[0][0].coin_x == COIN_B

    def test_three_hop_chain_needs_three_hops(self):
        """A-B-C-D is unreachable with two hops and has one route with three."""
        assert find_all_routes(CHAIN, COIN_A, COIN_D, max_hops=2) == []
        routes = find_all_routes(CHAIN, COIN_A, COIN_D, max_hops=3)
        assert routes == [tuple(CHAIN)]

    def test_multiple_routes(self):
        pairs = [CoinPair(COIN_A, COIN_B), CoinPair(COIN_B, COIN_C), CoinPair(COIN_A, COIN_C)]
        routes = find_all_routes(pairs, COIN_A, COIN_C)
        assert routes == [
            (CoinPair(COIN_A, COIN_B), CoinPair(COIN_B, COIN_C)),
            (CoinPair(COIN_A, COIN_C),),
        ]

    def test_routes_end_at_destination_and_chain(self):
        pairs = [
            CoinPair(COIN_A, COIN_B),
            CoinPair(COIN_B, COIN_C),
            CoinPair(COIN_A, COIN_C),
            CoinPair(COIN_C, COIN_D),
            CoinPair(COIN_B, COIN_D),
        ]
        for route in find_all_routes(pairs, COIN_A, COIN_D, max_hops=3):
            current = COIN_A
            for pair in route:
                current = pair.other_coin(current)
            assert current == COIN_D
            assert len(route) <= 3

    def test_no_path(self):
        pairs = [CoinPair(COIN_A, COIN_B), CoinPair(COIN_C, COIN_D)]
        assert find_all_routes(pairs, COIN_A, COIN_D, max_hops=3) == []

    def test_unknown_coin(self):
        assert find_all_routes(CHAIN, COIN_E, COIN_A) == []

    def test_same_coin(self):
        assert find_all_routes(CHAIN, COIN_A, COIN_A) == []

    def test_empty_graph(self):
        assert find_all_routes([], COIN_A, COIN_B) == []

    def test_invalid_max_hops(self):
        with pytest.raises(InvalidArgumentError):
            find_all_routes(CHAIN, COIN_A, COIN_B, max_hops=0)

    def test_idempotent(self):
        pairs = [*CHAIN, CoinPair(COIN_A, COIN_C), CoinPair(COIN_B, COIN_D)]
        first = find_all_routes(pairs, COIN_A, COIN_D, max_hops=3)
        second = find_all_routes(pairs, COIN_A, COIN_D, max_hops=3)
        assert first == second

    def test_edge_used_once_per_route(self):
        """A lone edge is never walked back and forth."""
        assert find_all_routes([CoinPair(COIN_A, COIN_B)], COIN_A, COIN_C, max_hops=3) == []

    def test_coin_revisited_through_parallel_pool(self):
        pairs = [CoinPair(COIN_A, COIN_B), CoinPair(COIN_B, COIN_A), CoinPair(COIN_B, COIN_C)]
        routes = find_all_routes(pairs, COIN_A, COIN_C, max_hops=3)
        assert len(routes) == 2
        for route in routes:
            assert route == (CoinPair(COIN_A, COIN_B), CoinPair(COIN_B, COIN_C))

    def test_accepts_prebuilt_graph(self):
        graph = PoolGraph(CHAIN)
        assert find_all_routes(graph, COIN_A, COIN_C) == [tuple(CHAIN[:2])]

    def test_routes_hold_plain_pairs(self):
        routes = find_all_routes([make_pool(COIN_A, COIN_B)], COIN_A, COIN_B)
        assert type(routes[0][0]) is CoinPair


class TestSearchBudget:
    """Tests for the visit budget."""

    def test_spend_until_limit(self):
        budget = SearchBudget(limit=2)
        assert budget.spend()
        assert budget.spend()
        assert not budget.spend()
        assert budget.exhausted
        assert budget.visits == 2

    def test_budget_truncates_enumeration(self):
        pairs = [CoinPair(COIN_A, COIN_C), CoinPair(COIN_A, COIN_B), CoinPair(COIN_B, COIN_C)]
        assert len(find_all_routes(pairs, COIN_A, COIN_C)) == 2
        assert find_all_routes(pairs, COIN_A, COIN_C, max_visits=1) == [
            (CoinPair(COIN_A, COIN_C),)
        ]
