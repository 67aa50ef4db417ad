"""Pytest configuration and fixtures."""

import random
from typing import Any

import pytest

from dex_sdk.config import NetworkOptions, NetworkType
from dex_sdk.sdk import SDK

# =============================================================================
# Mock classes for dependency injection
# =============================================================================


class FakeResourceFetcher:
    """In-memory ResourceFetcher for testing.

    Usage:
        fetcher = FakeResourceFetcher()
        fetcher.add(address, {"type": "0x1::coin::CoinInfo<...>", "data": {...}})

        # Unknown resources come back as None, like a 404
        await fetcher.fetch_account_resource(address, "0x1::missing::Type")
    """

    def __init__(self) -> None:
        self.resources: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[tuple[str, str | None]] = []  # Track calls for assertions

    def add(self, address: str, resource: dict[str, Any]) -> None:
        self.resources.setdefault(address, {})[resource["type"]] = resource

    def remove(self, address: str, resource_type: str) -> None:
        del self.resources[address][resource_type]

    async def fetch_account_resource(
        self,
        address: str,
        resource_type: str,
        ledger_version: int | None = None,
    ) -> dict[str, Any] | None:
        self.calls.append((address, resource_type))
        return self.resources.get(address, {}).get(resource_type)

    async def fetch_account_resources(
        self,
        address: str,
        ledger_version: int | None = None,
    ) -> list[dict[str, Any]] | None:
        self.calls.append((address, None))
        if address not in self.resources:
            return None
        return list(self.resources[address].values())


@pytest.fixture
def network_options() -> NetworkOptions:
    """Mainnet deployment addresses."""
    return NetworkOptions.for_network(NetworkType.MAINNET)


@pytest.fixture
def fetcher() -> FakeResourceFetcher:
    return FakeResourceFetcher()


@pytest.fixture
def sdk(fetcher: FakeResourceFetcher) -> SDK:
    """SDK reading from the fake fetcher, with seeded sampling."""
    return SDK(network=NetworkType.MAINNET, fetcher=fetcher, rng=random.Random(7))
