"""Network and routing configuration for the SDK."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from dex_sdk.constants import (
    APTOS_COIN,
    COIN_INFO,
    COIN_STORE,
    DEFAULT_MAX_HOPS_V1,
    DEFAULT_MAX_HOPS_V2,
    DEFAULT_MAX_RESULTS_V1,
    DEFAULT_MAX_SEARCH_VISITS,
    DEFAULT_ROUTE,
    DEFAULT_SWAP_FEE,
)


class NetworkType(str, Enum):
    """Which deployment of the exchange to talk to."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


_DEPLOYER = "0x16fe2df00ea7dde4a63409201f7f4e536bde7bb7335526a35d05111e68aa322c"
_RESOURCE_ACCOUNT = "0x796900ebe1a1a54ff9e932f19c548f5c1af5c6e7d34965857ac2f7b1d1ab2cbf"

NODE_URLS = {
    NetworkType.MAINNET: "https://fullnode.mainnet.aptoslabs.com",
    NetworkType.TESTNET: "https://fullnode.testnet.aptoslabs.com",
    NetworkType.DEVNET: "https://fullnode.devnet.aptoslabs.com",
}


@dataclass(frozen=True)
class NetworkOptions:
    """Addresses and module paths of one exchange deployment.

    Attributes:
        native_coin: Coin type of the chain's gas coin
        scripts: ``<address>::<module>`` holding the swap entry functions
        coin_info: Framework CoinInfo struct path
        coin_store: Framework CoinStore struct path
        deployer_address: Account that published the swap module
        resource_account_address: Account holding the liquidity pools
    """

    native_coin: str
    scripts: str
    coin_info: str
    coin_store: str
    deployer_address: str
    resource_account_address: str

    @classmethod
    def for_network(cls, network: NetworkType | str) -> NetworkOptions:
        """Return the preset for a network name."""
        network = NetworkType(network)
        module = "AnimeSwapPoolV1f1" if network is NetworkType.TESTNET else "AnimeSwapPoolV1"
        return cls(
            native_coin=APTOS_COIN,
            scripts=f"{_DEPLOYER}::{module}",
            coin_info=COIN_INFO,
            coin_store=COIN_STORE,
            deployer_address=_DEPLOYER,
            resource_account_address=_RESOURCE_ACCOUNT,
        )


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for route search.

    Attributes:
        max_hops_v1: Hop limit for the interleaved search (default: 3)
        max_results_v1: Size of the v1 best-trade list (default: 3)
        max_hops_v2: Hop limit for route enumeration (default: 2)
        max_routes: Candidate routes kept by sampling, also the v2
            best-trade list size (default: 5)
        max_search_visits: Edge visits allowed per DFS before exploration
            stops (default: 100,000)
        default_fee: Swap fee used when none is fetched (default: 30)
    """

    max_hops_v1: int = DEFAULT_MAX_HOPS_V1
    max_results_v1: int = DEFAULT_MAX_RESULTS_V1
    max_hops_v2: int = DEFAULT_MAX_HOPS_V2
    max_routes: int = DEFAULT_ROUTE
    max_search_visits: int = DEFAULT_MAX_SEARCH_VISITS
    default_fee: int = DEFAULT_SWAP_FEE


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()

# Configuration from environment variables with sensible defaults
NETWORK = NetworkType(os.environ.get("DEX_SDK_NETWORK", NetworkType.MAINNET.value))
NODE_URL = os.environ.get("DEX_SDK_NODE_URL", NODE_URLS[NETWORK])
HTTP_TIMEOUT = float(os.environ.get("DEX_SDK_HTTP_TIMEOUT", "30"))

