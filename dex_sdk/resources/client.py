"""Ledger resource fetching.

A missing resource (HTTP 404) is an expected outcome and comes back as None.
Every other failure is raised as ResourceFetchError; no retries happen here.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Protocol
from urllib.parse import quote

import httpx
import structlog

from dex_sdk.config import HTTP_TIMEOUT, NODE_URL
from dex_sdk.errors import ResourceFetchError

logger = structlog.get_logger()

# Page size for the paginated resources listing
RESOURCES_PAGE_LIMIT = 9999


class ResourceFetcher(Protocol):
    """Anything that can read account resources from the ledger.

    Resources are returned as the API's JSON objects: ``{"type": ..., "data": ...}``.
    """

    async def fetch_account_resource(
        self,
        address: str,
        resource_type: str,
        ledger_version: int | None = None,
    ) -> dict[str, Any] | None: ...

    async def fetch_account_resources(
        self,
        address: str,
        ledger_version: int | None = None,
    ) -> list[dict[str, Any]] | None: ...


class AptosResourceClient:
    """ResourceFetcher backed by the ledger REST API.

    Usage:
        async with AptosResourceClient("https://fullnode.mainnet.aptoslabs.com") as client:
            pool = await client.fetch_account_resource(address, resource_type)
    """

    def __init__(
        self,
        node_url: str = NODE_URL,
        timeout: float = HTTP_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            node_url: Fullnode base URL, with or without the ``/v1`` suffix
            timeout: Request timeout in seconds (ignored when ``client`` is given)
            client: Pre-built httpx client, e.g. with a mock transport in tests
        """
        base = node_url.rstrip("/")
        if not base.endswith("/v1"):
            base = f"{base}/v1"
        self.base_url = base
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> AptosResourceClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, url: str, params: dict[str, Any]) -> httpx.Response | None:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as err:
            logger.error("resource_request_failed", url=url, error=str(err))
            raise ResourceFetchError(f"Request to {url} failed: {err}") from err

        if response.status_code == 404:
            logger.debug("resource_not_found", url=url)
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as err:
            logger.error("resource_request_failed", url=url, status=response.status_code)
            raise ResourceFetchError(
                f"Request to {url} failed with status {response.status_code}"
            ) from err
        return response

    async def fetch_account_resource(
        self,
        address: str,
        resource_type: str,
        ledger_version: int | None = None,
    ) -> dict[str, Any] | None:
        """Fetch one resource of an account.

        Returns:
            The resource JSON, or None if the account has no such resource
        """
        url = f"{self.base_url}/accounts/{address}/resource/{quote(resource_type, safe=':')}"
        params = {} if ledger_version is None else {"ledger_version": ledger_version}
        response = await self._get(url, params)
        if response is None:
            return None
        return response.json()

    async def fetch_account_resources(
        self,
        address: str,
        ledger_version: int | None = None,
    ) -> list[dict[str, Any]] | None:
        """Fetch every resource of an account, following pagination cursors.

        Returns:
            All resources, or None if the account does not exist
        """
        url = f"{self.base_url}/accounts/{address}/resources"
        params: dict[str, Any] = {"limit": RESOURCES_PAGE_LIMIT}
        if ledger_version is not None:
            params["ledger_version"] = ledger_version

        resources: list[dict[str, Any]] = []
        while True:
            response = await self._get(url, params)
            if response is None:
                return None
            resources.extend(response.json())
            cursor = response.headers.get("x-aptos-cursor")
            if not cursor:
                break
            params["start"] = cursor

        logger.debug("account_resources_fetched", address=address, count=len(resources))
        return resources


__all__ = ["AptosResourceClient", "RESOURCES_PAGE_LIMIT", "ResourceFetcher"]
