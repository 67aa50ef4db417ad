"""Tests for network presets and router configuration."""

from dataclasses import FrozenInstanceError

import pytest

from dex_sdk.config import DEFAULT_ROUTER_CONFIG, NetworkOptions, NetworkType, RouterConfig


class TestNetworkOptions:
    @pytest.mark.parametrize("network", ["mainnet", "devnet"])
    def test_pool_v1_module(self, network):
        options = NetworkOptions.for_network(network)
        assert options.scripts == f"{options.deployer_address}::AnimeSwapPoolV1"

    def test_testnet_module(self):
        options = NetworkOptions.for_network(NetworkType.TESTNET)
        assert options.scripts == f"{options.deployer_address}::AnimeSwapPoolV1f1"

    def test_framework_paths(self):
        options = NetworkOptions.for_network(NetworkType.MAINNET)
        assert options.native_coin == "0x1::aptos_coin::AptosCoin"
        assert options.coin_info == "0x1::coin::CoinInfo"
        assert options.coin_store == "0x1::coin::CoinStore"
        assert options.resource_account_address != options.deployer_address

    def test_unknown_network(self):
        with pytest.raises(ValueError):
            NetworkOptions.for_network("localnet")


class TestRouterConfig:
    def test_defaults(self):
        config = RouterConfig()
        assert (config.max_hops_v1, config.max_results_v1) == (3, 3)
        assert (config.max_hops_v2, config.max_routes) == (2, 5)
        assert config.max_search_visits == 100_000
        assert config.default_fee == 30
        assert config == DEFAULT_ROUTER_CONFIG

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_ROUTER_CONFIG.max_routes = 10
