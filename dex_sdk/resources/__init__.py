"""Access to on-chain resources.

- client.py: ResourceFetcher protocol and the httpx-backed ledger client
- compose.py: composition of the swap module's resource type strings
"""

from dex_sdk.resources.client import AptosResourceClient, ResourceFetcher
from dex_sdk.resources.compose import (
    compose_coin_store,
    compose_lp,
    compose_lp_coin,
    compose_lp_coin_type,
    compose_pair_info,
    compose_swap_pool_data,
    compose_type,
    extract_address_from_type,
    is_sorted_symbols,
    split_type_args,
)

__all__ = [
    "AptosResourceClient",
    "ResourceFetcher",
    "compose_coin_store",
    "compose_lp",
    "compose_lp_coin",
    "compose_lp_coin_type",
    "compose_pair_info",
    "compose_swap_pool_data",
    "compose_type",
    "extract_address_from_type",
    "is_sorted_symbols",
    "split_type_args",
]
