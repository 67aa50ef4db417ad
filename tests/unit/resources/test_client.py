"""Tests for the ledger REST client."""

import httpx
import pytest

from dex_sdk.errors import ResourceFetchError
from dex_sdk.resources.client import RESOURCES_PAGE_LIMIT, AptosResourceClient
from tests.helpers import APT

NODE = "https://fullnode.example.com"
ADDRESS = "0x1"
COIN_INFO = f"0x1::coin::CoinInfo<{APT}>"


def make_client(handler) -> tuple[AptosResourceClient, list[httpx.Request]]:
    """Client whose requests are answered by ``handler`` and recorded."""
    requests: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return AptosResourceClient(NODE, client=http), requests


class TestBaseUrl:
    def test_appends_version(self):
        assert AptosResourceClient(NODE, client=httpx.AsyncClient()).base_url == f"{NODE}/v1"

    def test_keeps_existing_version(self):
        client = AptosResourceClient(f"{NODE}/v1/", client=httpx.AsyncClient())
        assert client.base_url == f"{NODE}/v1"


class TestFetchAccountResource:
    """Tests for single resource reads."""

    @pytest.mark.asyncio
    async def test_returns_json(self):
        body = {"type": COIN_INFO, "data": {"decimals": 8}}
        client, requests = make_client(lambda request: httpx.Response(200, json=body))

        assert await client.fetch_account_resource(ADDRESS, COIN_INFO) == body
        assert requests[0].url.path == f"/v1/accounts/{ADDRESS}/resource/{COIN_INFO}"
        assert "ledger_version" not in requests[0].url.params

    @pytest.mark.asyncio
    async def test_ledger_version(self):
        client, requests = make_client(lambda request: httpx.Response(200, json={}))
        await client.fetch_account_resource(ADDRESS, COIN_INFO, ledger_version=42)
        assert requests[0].url.params["ledger_version"] == "42"

    @pytest.mark.asyncio
    async def test_not_found_is_none(self):
        client, _ = make_client(lambda request: httpx.Response(404, json={"error_code": "x"}))
        assert await client.fetch_account_resource(ADDRESS, COIN_INFO) is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        client, _ = make_client(lambda request: httpx.Response(500))
        with pytest.raises(ResourceFetchError):
            await client.fetch_account_resource(ADDRESS, COIN_INFO)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = make_client(fail)
        with pytest.raises(ResourceFetchError) as exc_info:
            await client.fetch_account_resource(ADDRESS, COIN_INFO)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestFetchAccountResources:
    """Tests for the paginated listing."""

    @pytest.mark.asyncio
    async def test_follows_cursor(self):
        pages = {
            None: httpx.Response(200, json=[{"type": "a"}], headers={"x-aptos-cursor": "next"}),
            "next": httpx.Response(200, json=[{"type": "b"}]),
        }
        client, requests = make_client(lambda request: pages[request.url.params.get("start")])

        resources = await client.fetch_account_resources(ADDRESS)

        assert resources == [{"type": "a"}, {"type": "b"}]
        assert len(requests) == 2
        assert requests[0].url.path == f"/v1/accounts/{ADDRESS}/resources"
        assert requests[0].url.params["limit"] == str(RESOURCES_PAGE_LIMIT)
        assert requests[1].url.params["start"] == "next"

    @pytest.mark.asyncio
    async def test_missing_account_is_none(self):
        client, _ = make_client(lambda request: httpx.Response(404))
        assert await client.fetch_account_resources(ADDRESS) is None


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_borrowed_client_left_open(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with AptosResourceClient(NODE, client=http):
            pass
        assert not http.is_closed
        await http.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        client = AptosResourceClient(NODE)
        await client.aclose()
        assert client._client.is_closed
