"""SDK facade wiring the resource client and every module together."""

from __future__ import annotations

import random
from types import TracebackType

from dex_sdk.config import (
    DEFAULT_ROUTER_CONFIG,
    NETWORK,
    NODE_URL,
    NODE_URLS,
    NetworkOptions,
    NetworkType,
    RouterConfig,
)
from dex_sdk.resources.client import AptosResourceClient, ResourceFetcher
from dex_sdk.routing.router import RouteModule, RouteV2Module
from dex_sdk.swap import SwapModule


class SDK:
    """Entry point of the library.

    Usage:
        async with SDK(network="testnet") as sdk:
            trades = await sdk.route_v2.get_route_swap_exact_coin_for_coin(a, b, 1_000_000)

    Args:
        node_url: Fullnode URL (defaults to ``DEX_SDK_NODE_URL``, or to the
            public fullnode when ``network`` is given)
        network: Deployment to use (defaults to ``DEX_SDK_NETWORK``)
        fetcher: Resource source replacing the HTTP client, e.g. in tests
        config: Route search limits
        rng: Random source for route sampling
    """

    def __init__(
        self,
        node_url: str | None = None,
        network: NetworkType | str | None = None,
        fetcher: ResourceFetcher | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
        rng: random.Random | None = None,
    ) -> None:
        self.network = NetworkType(network) if network is not None else NETWORK
        self.network_options = NetworkOptions.for_network(self.network)
        self._client: AptosResourceClient | None = None
        if fetcher is None:
            if node_url is None:
                node_url = NODE_URL if network is None else NODE_URLS[self.network]
            self._client = AptosResourceClient(node_url)
            fetcher = self._client
        self.resources: ResourceFetcher = fetcher
        self.swap = SwapModule(self.resources, self.network_options)
        self.route = RouteModule(self.swap, config)
        self.route_v2 = RouteV2Module(
            self.resources, self.network_options, self.swap, config, rng=rng
        )

    async def __aenter__(self) -> SDK:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this SDK created it."""
        if self._client is not None:
            await self._client.aclose()


__all__ = ["SDK"]
