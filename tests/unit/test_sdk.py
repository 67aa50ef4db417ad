"""Tests for the SDK facade wiring."""

import pytest

from dex_sdk import SDK
from dex_sdk.config import NODE_URLS, NetworkType, RouterConfig
from dex_sdk.resources.client import AptosResourceClient
from dex_sdk.routing.payload import build_swap_exact_in_payload
from tests.helpers import APT, NOW, USDC, USER, make_pool, seed_exchange


class TestWiring:
    def test_modules_share_fetcher(self, sdk, fetcher):
        assert sdk.resources is fetcher
        assert sdk.swap.fetcher is fetcher
        assert sdk.route.swap is sdk.swap
        assert sdk.route_v2.swap is sdk.swap
        assert sdk.route_v2.fetcher is fetcher

    def test_network_options_follow_network(self, fetcher):
        sdk = SDK(network="testnet", fetcher=fetcher)
        assert sdk.network is NetworkType.TESTNET
        assert sdk.network_options.scripts.endswith("::AnimeSwapPoolV1f1")
        assert sdk.swap.options is sdk.network_options

    def test_config_passed_to_routers(self, fetcher):
        config = RouterConfig(max_routes=2, default_fee=25)
        sdk = SDK(network="mainnet", fetcher=fetcher, config=config)
        assert sdk.route.config is config
        assert sdk.route_v2.config is config

    def test_invalid_network(self, fetcher):
        with pytest.raises(ValueError):
            SDK(network="localnet", fetcher=fetcher)


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_creates_client_for_network(self):
        async with SDK(network=NetworkType.DEVNET) as sdk:
            assert isinstance(sdk.resources, AptosResourceClient)
            assert sdk.resources.base_url == NODE_URLS[NetworkType.DEVNET] + "/v1"

    @pytest.mark.asyncio
    async def test_explicit_node_url(self):
        sdk = SDK(node_url="http://localhost:8080/v1", network="testnet")
        try:
            assert sdk.resources.base_url == "http://localhost:8080/v1"
        finally:
            await sdk.aclose()

    @pytest.mark.asyncio
    async def test_close_leaves_injected_fetcher_alone(self, sdk):
        await sdk.aclose()
        assert sdk._client is None


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_route_then_payload(self, sdk, fetcher, network_options):
        seed_exchange(fetcher, network_options, [make_pool(APT, USDC)])

        trades = await sdk.route_v2.get_route_swap_exact_coin_for_coin(APT, USDC, 10_000)
        payload = build_swap_exact_in_payload(
            trades[0], USER, 0.05, 20, sdk.network_options, now=NOW
        )

        assert payload.function.endswith("::swap_exact_coins_for_coins_entry")
        assert payload.arguments[1:3] == ["10000", "18755"]
        assert payload.model_dump(by_alias=True)["typeArguments"] == [APT, USDC]
