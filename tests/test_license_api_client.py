"""Tests for the real HTTP license client, driven through httpx.MockTransport."""

import json
from decimal import Decimal

import httpx
import pytest

from storefront.errors import NetworkFailure, ServerError
from storefront.integrations.clients.real_http.license_api import LicenseApiClient
from storefront.integrations.contracts.licenses import OrderItem, OrderRequest
from storefront.integrations.response_wrappers import IntegrationResponseError

BASE = "http://backend.test"


def _client(handler) -> LicenseApiClient:
    return LicenseApiClient(base_url=BASE + "/", transport=httpx.MockTransport(handler))


def _order() -> OrderRequest:
    return OrderRequest(
        contact_name="Ada",
        contact_email="ada@example.com",
        items=[OrderItem(sku="LIC-1", name="A", quantity=2, unit_price=Decimal("10"), subtotal=Decimal("20"))],
    )


@pytest.mark.asyncio
async def test_search_sends_query_and_vendor():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json=[{"sku": "LIC-1", "name": "A", "price": 10.5, "duration_months": 12}])

    licenses = await _client(handler).search_licenses("anti", "Saad")

    assert seen["url"].path == "/api/licenses"
    assert seen["url"].params["q"] == "anti"
    assert seen["url"].params["vendor"] == "Saad"
    assert licenses[0].sku == "LIC-1"
    assert licenses[0].price == Decimal("10.5")
    assert licenses[0].display_tier == "Standard"
    assert licenses[0].features == []


@pytest.mark.asyncio
async def test_search_without_query_omits_q():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[])

    assert await _client(handler).search_licenses(None, "Saad") == []
    assert seen["params"] == {"vendor": "Saad"}


@pytest.mark.asyncio
async def test_search_non_success_is_search_failed():
    client = _client(lambda request: httpx.Response(503, json={"detail": "down"}))
    with pytest.raises(ServerError) as exc:
        await client.search_licenses("x", "Saad")
    assert str(exc.value) == "Search failed"
    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_connection_error_becomes_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(NetworkFailure) as exc:
        await _client(handler).search_licenses("x", "Saad")
    assert "Connection refused" in str(exc.value)


@pytest.mark.asyncio
async def test_timeout_becomes_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(NetworkFailure) as exc:
        await _client(handler).seed_catalog()
    assert str(exc.value) == "Request timed out"


@pytest.mark.asyncio
async def test_search_with_non_list_body_is_rejected():
    client = _client(lambda request: httpx.Response(200, json={"items": []}))
    with pytest.raises(IntegrationResponseError):
        await client.search_licenses(None, "Saad")


@pytest.mark.asyncio
async def test_seed_posts_and_reads_count():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(200, json={"inserted": 4})

    result = await _client(handler).seed_catalog()
    assert seen == {"method": "POST", "path": "/api/licenses/seed"}
    assert result.summary == "Seeded 4 items"


@pytest.mark.asyncio
async def test_place_order_posts_json_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"order_id": "O1", "total": 25.0})

    result = await _client(handler).place_order(_order())

    assert seen["path"] == "/api/orders"
    assert seen["body"]["contact_email"] == "ada@example.com"
    assert seen["body"]["items"][0]["subtotal"] == 20.0
    assert "company" not in seen["body"]
    assert result.order_id == "O1"
    assert result.total == Decimal("25.0")


@pytest.mark.asyncio
async def test_place_order_error_uses_detail():
    client = _client(lambda request: httpx.Response(409, json={"detail": "out of stock"}))
    with pytest.raises(ServerError) as exc:
        await client.place_order(_order())
    assert str(exc.value) == "out of stock"
    assert exc.value.detail == "out of stock"


@pytest.mark.asyncio
async def test_place_order_error_without_detail_is_generic():
    client = _client(lambda request: httpx.Response(500, json={}))
    with pytest.raises(ServerError) as exc:
        await client.place_order(_order())
    assert str(exc.value) == "Order failed"
