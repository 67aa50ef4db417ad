"""Pydantic models for on-chain resources and transaction payloads."""

from dex_sdk.models.payload import EntryFunctionPayload
from dex_sdk.models.resources import (
    AdminData,
    CoinInfoResource,
    CoinStoreResource,
    PairInfo,
    PairMeta,
    SwapPoolResource,
    TypeInfo,
    parse_resource,
    pool_from_resource,
)

__all__ = [
    "AdminData",
    "CoinInfoResource",
    "CoinStoreResource",
    "EntryFunctionPayload",
    "PairInfo",
    "PairMeta",
    "SwapPoolResource",
    "TypeInfo",
    "parse_resource",
    "pool_from_resource",
]
